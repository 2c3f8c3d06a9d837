#!/usr/bin/env python3
"""
Action model for the betting log.

One entry of the ordered betting-action log for the current hand. The log is
the only input used to derive the preflop context and to drive opponent range
narrowing. Amounts are expressed in big blinds.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional


ACTION_TYPES = ['fold', 'check', 'call', 'bet', 'raise', 'all-in', 'post']
AGGRESSIVE_ACTIONS = ('bet', 'raise', 'all-in')
PHASES = ['preflop', 'flop', 'turn', 'river']

# Log verbs as some platforms report them ("raises", "calls", ...)
_ACTION_ALIASES = {
    'folds': 'fold',
    'checks': 'check',
    'calls': 'call',
    'bets': 'bet',
    'raises': 'raise',
    'posts': 'post',
    'allin': 'all-in',
    'all_in': 'all-in',
    'all in': 'all-in',
}


class Action(BaseModel):
    """Single action in a hand."""
    player_id: str = Field(..., min_length=1, description="Acting player identity")
    action_type: str = Field(..., description="Action type (fold/check/call/bet/raise/all-in/post)")
    amount: float = Field(0.0, ge=0, description="Chips committed by the action, in big blinds")
    phase: str = Field('preflop', description="Street when the action occurred")

    @field_validator('action_type', mode='before')
    @classmethod
    def validate_action_type(cls, v):
        if isinstance(v, str):
            v = _ACTION_ALIASES.get(v.strip().lower(), v.strip().lower())
        if v not in ACTION_TYPES:
            raise ValueError(f'Invalid action type: {v}. Must be one of {ACTION_TYPES}')
        return v

    @field_validator('phase', mode='before')
    @classmethod
    def validate_phase(cls, v):
        if isinstance(v, str):
            v = v.strip().lower()
        if v not in PHASES:
            raise ValueError(f'Invalid phase: {v}. Must be one of {PHASES}')
        return v

    @property
    def is_aggressive(self) -> bool:
        """Bet, raise or all-in."""
        return self.action_type in AGGRESSIVE_ACTIONS

    def describe(self, position: Optional[str] = None) -> str:
        """Short human-readable form, e.g. 'CO raise 2.5 BB'."""
        actor = position or self.player_id
        if self.action_type in ('fold', 'check'):
            return f"{actor} {self.action_type}"
        return f"{actor} {self.action_type} {self.amount:.1f} BB"

    class Config:
        validate_assignment = True
        extra = "forbid"
