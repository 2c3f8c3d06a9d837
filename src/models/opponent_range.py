#!/usr/bin/env python3
"""
OpponentRange model for weighted hand-class beliefs.

A range holds one WeightedHand per canonical hand class. Weights are relative
likelihoods in [0, 1]; they only become probabilities after normalization.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Dict, List, Optional


class WeightedHand(BaseModel):
    """Hand class with its relative likelihood."""
    hand: str = Field(..., min_length=2, max_length=3, description="Canonical hand class (AA, AKs, AKo)")
    weight: float = Field(..., ge=0.0, le=1.0, description="Relative likelihood")

    class Config:
        validate_assignment = True
        extra = "forbid"


class OpponentRange(BaseModel):
    """Weighted range over the canonical hand classes for one opponent."""
    player_id: Optional[str] = Field(None, description="Opponent the range belongs to")
    hands: List[WeightedHand] = Field(..., description="One entry per hand class")

    @field_validator('hands')
    @classmethod
    def validate_unique_hands(cls, v):
        names = [wh.hand for wh in v]
        if len(names) != len(set(names)):
            raise ValueError('Range cannot list a hand class twice')
        return v

    def total_weight(self) -> float:
        """Sum of all weights."""
        return sum(wh.weight for wh in self.hands)

    def max_weight(self) -> float:
        """Largest single weight (0 for an empty range)."""
        return max((wh.weight for wh in self.hands), default=0.0)

    def weight_of(self, hand: str) -> float:
        """Weight of a hand class, 0 when absent."""
        for wh in self.hands:
            if wh.hand == hand:
                return wh.weight
        return 0.0

    def with_weights(self, weights: Dict[str, float]) -> "OpponentRange":
        """New range with the same ordering and replaced weights."""
        return OpponentRange(
            player_id=self.player_id,
            hands=[WeightedHand(hand=wh.hand, weight=weights[wh.hand]) for wh in self.hands]
        )

    class Config:
        validate_assignment = True
        extra = "forbid"
