#!/usr/bin/env python3
"""
Adjustment models derived from opponent statistics.

Both models are recomputed for every decision and never persisted. Negative
deltas widen a range (lower percentile cutoff), positive deltas tighten it.
"""

from pydantic import BaseModel, Field


class ExploitAdjustment(BaseModel):
    """Hero threshold deltas against a specific opponent."""
    rfi_adjust: int = Field(0, description="Open-raise threshold delta")
    three_bet_adjust: int = Field(0, description="3-bet threshold delta")
    call_adjust: int = Field(0, description="Flat-call threshold delta")
    bluff_more: bool = Field(False, description="Opponent over-folds")
    value_wider: bool = Field(False, description="Opponent calls too wide")

    class Config:
        validate_assignment = True
        extra = "forbid"


class RangeAdjustment(BaseModel):
    """Opponent range cutoff deltas for the range model."""
    open_widen: int = Field(0, description="Opening cutoff delta")
    three_bet_widen: int = Field(0, description="3-bet cutoff delta")
    call_widen: int = Field(0, description="Flat-call cutoff delta")

    class Config:
        validate_assignment = True
        extra = "forbid"
