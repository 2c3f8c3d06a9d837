#!/usr/bin/env python3
"""
Models package for the Hold'em advisor data models.

Provides Pydantic models for the decision snapshot, the betting log, tracked
opponent statistics, weighted ranges and the recommendations the advisor
hands back to its caller.
"""

from .card import Card
from .action import Action
from .player_stats import PlayerStats, PositionalVPIP
from .player import Player
from .game_state import GameState
from .decision import Decision, ActionEV
from .opponent_range import OpponentRange, WeightedHand
from .adjustments import ExploitAdjustment, RangeAdjustment
from .preflop_context import PreflopContext

__all__ = [
    'Card',
    'Action',
    'PlayerStats',
    'PositionalVPIP',
    'Player',
    'GameState',
    'Decision',
    'ActionEV',
    'OpponentRange',
    'WeightedHand',
    'ExploitAdjustment',
    'RangeAdjustment',
    'PreflopContext'
]
