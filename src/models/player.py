#!/usr/bin/env python3
"""
Player model for representing players at the poker table.

Represents one seat in the decision snapshot: identity, relative position,
stack in big blinds, hole cards (hero only), and the opponent's tracked stats
as supplied by the external stat store.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from src.models.card import Card
from src.models.player_stats import PlayerStats


# Preflop seat labels, ordered by postflop acting order (first to act first)
POSITIONS = ['SB', 'BB', 'UTG', 'UTG+1', 'MP', 'LJ', 'HJ', 'CO', 'BTN']
POSITION_ALIASES = {'BU': 'BTN', 'BUTTON': 'BTN', 'D': 'BTN'}


def normalize_position(position: Optional[str]) -> Optional[str]:
    """Map position aliases (e.g. 'BU') onto canonical labels."""
    if position is None:
        return None
    label = position.strip().upper()
    return POSITION_ALIASES.get(label, label)


def postflop_order(position: Optional[str]) -> int:
    """Index in postflop acting order, -1 when unknown."""
    label = normalize_position(position)
    if label not in POSITIONS:
        return -1
    return POSITIONS.index(label)


class Player(BaseModel):
    """Represents a player at the poker table."""
    player_id: str = Field(..., min_length=1, description="Player identity used in the action log")
    position: Optional[str] = Field(None, description="Relative position (SB/BB/UTG/.../CO/BTN)")
    stack: float = Field(..., ge=0, description="Remaining stack in big blinds")
    hole_cards: List[Card] = Field(default_factory=list, description="Player's hole cards")
    is_hero: bool = Field(False, description="Is the hero player")
    is_active: bool = Field(True, description="Still in hand (not folded)")
    stats: Optional[PlayerStats] = Field(None, description="Tracked opponent statistics")

    @field_validator('hole_cards', mode='before')
    @classmethod
    def validate_hole_cards(cls, v):
        if len(v) > 2:
            raise ValueError('Cannot have more than 2 hole cards')
        return [Card.parse(card) if isinstance(card, str) else card for card in v]

    @field_validator('position')
    @classmethod
    def validate_position(cls, v):
        v = normalize_position(v)
        if v is not None and v not in POSITIONS:
            raise ValueError(f'Invalid position: {v}. Must be one of {POSITIONS}')
        return v

    class Config:
        validate_assignment = True
        extra = "forbid"
