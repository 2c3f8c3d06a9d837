#!/usr/bin/env python3
"""
Advisor module for preflop charts, equity simulation and EV decisions.

Public API:
    - EquityCalculator: Monte Carlo equity using Treys
    - PreflopEngine: Chart-based preflop decisions
    - PostflopSolver: EV-based postflop decision making
    - RangeTracker: Per-hand opponent range arena
    - DecisionEngine: Central coordinator for all decision-making
"""

from src.advisor.equity_calculator import EquityCalculator
from src.advisor.preflop_engine import PreflopEngine, PreflopSpot, classify_spot
from src.advisor.postflop_solver import PostflopSolver, estimate_fold_equity, is_bluff_profitable
from src.advisor.range_tracker import RangeTracker
from src.advisor.decision_engine import DecisionEngine

__all__ = [
    'EquityCalculator',
    'PreflopEngine',
    'PreflopSpot',
    'classify_spot',
    'PostflopSolver',
    'estimate_fold_equity',
    'is_bluff_profitable',
    'RangeTracker',
    'DecisionEngine'
]
