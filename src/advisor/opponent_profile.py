#!/usr/bin/env python3
"""
Opponent profiling from tracked statistics.

Buckets an opponent into an archetype from VPIP, PFR and aggression factor
and turns that archetype into the adjustments the rest of the advisor
consumes: hero threshold deltas (ExploitAdjustment), opponent range widths
(RangeAdjustment) and a baseline fold frequency for fold-equity estimates.

Below MIN_HANDS observed hands every opponent is UNKNOWN and all adjustments
are neutral.
"""

import logging
from enum import Enum
from typing import Optional
from src.models.adjustments import ExploitAdjustment, RangeAdjustment
from src.models.player_stats import PlayerStats

logger = logging.getLogger(__name__)

MIN_HANDS = 8
MIN_POSITIONAL_HANDS = 5
MIN_THREE_BET_OPPORTUNITIES = 5
POSITIONAL_DEVIATION = 10


class PlayerArchetype(str, Enum):
    """Opponent style buckets."""
    UNKNOWN = "unknown"
    NIT = "nit"
    CALLING_STATION = "calling_station"
    LAG = "lag"
    TAG = "tag"
    LOOSE_PASSIVE = "loose_passive"
    LOOSE = "loose"
    REGULAR = "regular"


FOLD_FREQUENCY = {
    PlayerArchetype.NIT: 0.65,
    PlayerArchetype.CALLING_STATION: 0.25,
    PlayerArchetype.TAG: 0.50,
    PlayerArchetype.LAG: 0.40,
    PlayerArchetype.LOOSE_PASSIVE: 0.30,
}
DEFAULT_FOLD_FREQUENCY = 0.45

RANGE_ADJUSTMENTS = {
    PlayerArchetype.NIT: (8, 3, 5),
    PlayerArchetype.CALLING_STATION: (-5, 5, -20),
    PlayerArchetype.LAG: (-15, -10, -8),
    PlayerArchetype.LOOSE_PASSIVE: (-10, 3, -15),
    PlayerArchetype.LOOSE: (-10, 3, -15),
}


def classify_player(stats: Optional[PlayerStats]) -> PlayerArchetype:
    """
    Classify an opponent from tracked statistics.

    Args:
        stats: Opponent statistics, None when untracked

    Returns:
        First matching archetype, UNKNOWN with too small a sample
    """
    if stats is None or stats.total_hands < MIN_HANDS:
        return PlayerArchetype.UNKNOWN

    vpip = stats.vpip()
    pfr = stats.pfr()

    if vpip < 18:
        return PlayerArchetype.NIT
    if vpip > 35 and pfr < 12:
        return PlayerArchetype.CALLING_STATION
    if vpip > 30 and pfr > 22:
        return PlayerArchetype.LAG
    if 18 <= vpip <= 25 and 15 <= pfr <= 22:
        return PlayerArchetype.TAG
    if vpip > 30 and stats.aggression_factor() < 1.5:
        return PlayerArchetype.LOOSE_PASSIVE
    if vpip > 30:
        return PlayerArchetype.LOOSE
    return PlayerArchetype.REGULAR


def get_exploit_adjustment(stats: Optional[PlayerStats]) -> ExploitAdjustment:
    """
    Hero threshold deltas against an opponent's overall tendencies.

    Args:
        stats: Opponent statistics

    Returns:
        ExploitAdjustment (neutral for UNKNOWN)
    """
    archetype = classify_player(stats)
    adjustment = ExploitAdjustment()

    if archetype == PlayerArchetype.UNKNOWN:
        return adjustment

    if archetype == PlayerArchetype.NIT:
        # Steal wider, never 3-bet light against a premium-only range
        adjustment.rfi_adjust = -8
        adjustment.three_bet_adjust = 5
        adjustment.bluff_more = True
    elif archetype == PlayerArchetype.CALLING_STATION:
        adjustment.value_wider = True
        adjustment.call_adjust = -5
        adjustment.three_bet_adjust = -5
    elif archetype == PlayerArchetype.LAG:
        adjustment.three_bet_adjust = -8
        adjustment.call_adjust = -5
    elif archetype == PlayerArchetype.LOOSE_PASSIVE:
        adjustment.value_wider = True

    # Frequent 3-bettors punish light 3-bets with 4-bets
    if stats.three_bet() > 10 and stats.three_bet_opportunities >= MIN_THREE_BET_OPPORTUNITIES:
        adjustment.three_bet_adjust = 5

    if stats.aggression_factor() > 3:
        adjustment.call_adjust = -8

    logger.debug(f"Exploit adjustment vs {archetype.value}: {adjustment}")
    return adjustment


def get_positional_exploit_adjustment(stats: Optional[PlayerStats],
                                      position: Optional[str]) -> ExploitAdjustment:
    """
    Hero threshold deltas using the opponent's VPIP from one position.

    Falls back to get_exploit_adjustment when the positional sample is
    missing or smaller than MIN_POSITIONAL_HANDS.

    Args:
        stats: Opponent statistics
        position: Position the opponent acted from

    Returns:
        ExploitAdjustment
    """
    if stats is None or stats.total_hands < MIN_HANDS:
        return ExploitAdjustment()

    sample = stats.get_positional_vpip(position) if position else None
    if sample is None or sample.hands < MIN_POSITIONAL_HANDS:
        return get_exploit_adjustment(stats)

    deviation = sample.vpip / sample.hands * 100 - stats.vpip()
    adjustment = ExploitAdjustment()

    if deviation > POSITIONAL_DEVIATION:
        adjustment.three_bet_adjust = -5
        adjustment.call_adjust = -3
        adjustment.value_wider = True
    elif deviation < -POSITIONAL_DEVIATION:
        adjustment.rfi_adjust = -5
        adjustment.three_bet_adjust = 5
        adjustment.bluff_more = True

    logger.debug(f"Positional exploit from {position} (deviation {deviation:+.1f}): {adjustment}")
    return adjustment


def get_range_adjustment(stats: Optional[PlayerStats]) -> RangeAdjustment:
    """Range cutoff deltas for an opponent; negative widens."""
    open_widen, three_bet_widen, call_widen = RANGE_ADJUSTMENTS.get(classify_player(stats), (0, 0, 0))
    return RangeAdjustment(open_widen=open_widen, three_bet_widen=three_bet_widen, call_widen=call_widen)


def base_fold_frequency(stats: Optional[PlayerStats]) -> float:
    """Baseline frequency with which the opponent folds to a bet."""
    return FOLD_FREQUENCY.get(classify_player(stats), DEFAULT_FOLD_FREQUENCY)
