#!/usr/bin/env python3
"""
PlayerStats model for tracked opponent tendencies.

Read-only snapshot of the aggregates the external stat store keeps for one
opponent. The advisor never writes these counts; it only derives percentages
(VPIP, PFR, 3-bet) and the aggression factor from them.
"""

from pydantic import BaseModel, Field, model_validator
from typing import Dict, Optional


AGGRESSION_SENTINEL = 99.0


class PositionalVPIP(BaseModel):
    """Hands and voluntary entries recorded from a single position."""
    hands: int = Field(0, ge=0, description="Hands observed from this position")
    vpip: int = Field(0, ge=0, description="Hands voluntarily entered from this position")

    @model_validator(mode='after')
    def validate_vpip_within_hands(self):
        if self.vpip > self.hands:
            raise ValueError('Positional VPIP count cannot exceed hands observed')
        return self

    class Config:
        validate_assignment = True
        extra = "forbid"


class PlayerStats(BaseModel):
    """Aggregated statistics for one opponent."""
    player_name: Optional[str] = Field(None, description="Opponent identity in the stat store")
    total_hands: int = Field(0, ge=0, description="Total hands observed")
    walks: int = Field(0, ge=0, description="Hands where everyone folded to the big blind")
    vpip_hands: int = Field(0, ge=0, description="Hands with money voluntarily put in preflop")
    pfr_hands: int = Field(0, ge=0, description="Hands raised preflop")
    three_bet_hands: int = Field(0, ge=0, description="Preflop re-raises made")
    three_bet_opportunities: int = Field(0, ge=0, description="Spots facing a single open raise")
    total_bets_raises: int = Field(0, ge=0, description="Bets and raises made")
    total_calls: int = Field(0, ge=0, description="Calls made")
    positional_vpip: Dict[str, PositionalVPIP] = Field(
        default_factory=dict, description="VPIP counts keyed by position"
    )

    @model_validator(mode='after')
    def validate_walks(self):
        if self.walks > self.total_hands:
            raise ValueError('Walks cannot exceed total hands')
        return self

    def _played_hands(self) -> int:
        return self.total_hands - self.walks

    def vpip(self) -> float:
        """VPIP percentage over non-walk hands."""
        played = self._played_hands()
        if played == 0:
            return 0.0
        return self.vpip_hands / played * 100

    def pfr(self) -> float:
        """PFR percentage over non-walk hands."""
        played = self._played_hands()
        if played == 0:
            return 0.0
        return self.pfr_hands / played * 100

    def three_bet(self) -> float:
        """3-bet percentage over 3-bet opportunities."""
        if self.three_bet_opportunities == 0:
            return 0.0
        return self.three_bet_hands / self.three_bet_opportunities * 100

    def aggression_factor(self) -> float:
        """(bets + raises) / calls, saturating when the player never calls."""
        if self.total_calls == 0:
            return AGGRESSION_SENTINEL if self.total_bets_raises > 0 else 0.0
        return self.total_bets_raises / self.total_calls

    def get_positional_vpip(self, position: str) -> Optional[PositionalVPIP]:
        """Get the positional VPIP sample for a position, if recorded."""
        return self.positional_vpip.get(position)

    class Config:
        validate_assignment = True
        extra = "forbid"
