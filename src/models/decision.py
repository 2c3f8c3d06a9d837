#!/usr/bin/env python3
"""
Decision model for advisor recommendations.

Represents the recommendation handed to the decision consumer, together with
the scored alternatives the postflop search considered. A decision without an
action (confidence 0) tells the caller to defer to its fallback reasoner.
"""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List


VALID_ACTIONS = ['fold', 'check', 'call', 'bet', 'raise', 'all-in']


class ActionEV(BaseModel):
    """Candidate action scored by expected value in big blinds."""
    action: str = Field(..., description="Action type (fold/check/call/bet/raise/all-in)")
    sizing: float = Field(0.0, ge=0, description="Bet/raise size in big blinds")
    ev: float = Field(..., description="Expected value in big blinds")
    reasoning: str = Field("", description="How the EV was obtained")

    @field_validator('action')
    @classmethod
    def validate_action(cls, v):
        if v not in VALID_ACTIONS:
            raise ValueError(f'Invalid action: {v}. Must be one of {VALID_ACTIONS}')
        return v

    class Config:
        validate_assignment = True
        extra = "forbid"


class Decision(BaseModel):
    """Advisor recommendation."""
    action: Optional[str] = Field(..., description="Recommended action, None to defer")
    sizing: float = Field(0.0, ge=0, description="Bet/raise/call size in big blinds")
    confidence: float = Field(..., ge=0.0, le=1.0, description="Confidence in recommendation")
    reasoning: str = Field(..., description="Explanation of decision")
    equity: Optional[float] = Field(None, ge=0.0, le=100.0, description="Hero's equity percentage")
    ev: Optional[float] = Field(None, description="Expected value of the action in big blinds")
    alternative_actions: List[ActionEV] = Field(default_factory=list, description="Other scored actions")

    @field_validator('action')
    @classmethod
    def validate_action(cls, v):
        if v is not None and v not in VALID_ACTIONS:
            raise ValueError(f'Invalid action: {v}. Must be one of {VALID_ACTIONS}')
        return v

    @property
    def is_deferral(self) -> bool:
        """True when the engine could not classify the spot."""
        return self.action is None or self.confidence == 0.0

    class Config:
        validate_assignment = True
        extra = "forbid"
