#!/usr/bin/env python3
"""
Per-hand range arena.

Holds the current weighted range of every tracked opponent for a single
hand. One tracker is created when a hand starts and dropped when it ends;
nothing survives between hands.
"""

import logging
from typing import Dict, Optional
from src.advisor import range_model
from src.advisor.range_model import NarrowingContext
from src.models.opponent_range import OpponentRange
from src.models.player_stats import PlayerStats

logger = logging.getLogger(__name__)


class RangeTracker:
    """Opponent ranges for the hand in progress."""

    def __init__(self, hand_id: Optional[str] = None):
        """
        Initialize an empty arena.

        Args:
            hand_id: Hand the ranges belong to
        """
        self.hand_id = hand_id
        self._ranges: Dict[str, OpponentRange] = {}

    def init_range(self, player_id: str, position: Optional[str],
                   stats: Optional[PlayerStats] = None) -> OpponentRange:
        """Start tracking an opponent from the opening range of a position."""
        opponent_range = range_model.starting_range(position, stats, player_id=player_id)
        self._ranges[player_id] = opponent_range
        logger.debug(f"Tracking {player_id} from {position} opening range")
        return opponent_range

    def init_full_range(self, player_id: str) -> OpponentRange:
        """Start tracking an opponent with no position information."""
        opponent_range = range_model.full_range(player_id=player_id)
        self._ranges[player_id] = opponent_range
        return opponent_range

    def get_range(self, player_id: str) -> Optional[OpponentRange]:
        """Current range for an opponent, None if untracked."""
        return self._ranges.get(player_id)

    def apply_action(self, player_id: str, action_type: str, context: NarrowingContext) -> OpponentRange:
        """
        Narrow an opponent's range for an observed action.

        Untracked opponents start from the full range.

        Args:
            player_id: Acting opponent
            action_type: Observed action
            context: Narrowing circumstances

        Returns:
            The updated range
        """
        current = self._ranges.get(player_id)
        if current is None:
            current = range_model.full_range(player_id=player_id)

        updated = range_model.narrow(current, action_type, context)
        self._ranges[player_id] = updated
        return updated

    def describe_range(self, player_id: str) -> str:
        """Human-readable range for an opponent."""
        opponent_range = self._ranges.get(player_id)
        if opponent_range is None:
            return "Unknown range (no tracking data)"
        return range_model.describe(opponent_range)

    def tracked_players(self):
        """Ids of tracked opponents."""
        return list(self._ranges)

    def reset(self) -> None:
        """Drop every tracked range."""
        self._ranges.clear()
        logger.debug(f"Range tracker reset (hand {self.hand_id})")
