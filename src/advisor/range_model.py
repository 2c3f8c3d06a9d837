#!/usr/bin/env python3
"""
Opponent range model.

Builds weighted ranges over the 169 hand classes and narrows them as the
opponent acts. Every operation is pure: it takes an OpponentRange and
returns a new one, so a caller can keep the previous belief around.

Weights are multiplied by per-bucket factors keyed on preflop strength and
clamped to [0, 1]. Range widths shift with the opponent's archetype through
RangeAdjustment (negative deltas widen).
"""

import logging
from typing import List, Optional
from pydantic import BaseModel, Field
from src.advisor.hand_strength import ALL_HANDS, expand_combos, strength_of
from src.advisor.opponent_profile import get_range_adjustment
from src.models.action import AGGRESSIVE_ACTIONS
from src.models.opponent_range import OpponentRange, WeightedHand
from src.models.player import normalize_position
from src.models.player_stats import PlayerStats

logger = logging.getLogger(__name__)

OPEN_CUTOFFS = {
    'UTG': 82, 'UTG+1': 80, 'MP': 78, 'LJ': 75, 'HJ': 73,
    'CO': 68, 'BTN': 52, 'SB': 55, 'BB': 40,
}
DEFAULT_OPEN_CUTOFF = 70

THREE_BET_CUTOFFS = {
    'UTG': 96, 'UTG+1': 95, 'MP': 94, 'LJ': 93, 'HJ': 92,
    'CO': 90, 'BTN': 88, 'SB': 85, 'BB': 85,
}
DEFAULT_THREE_BET_CUTOFF = 90

FLAT_CALL_CUTOFFS = {'IP': 65, 'OOP': 72, 'BB': 55}

THREE_BET_BLUFFS = frozenset(['A5s', 'A4s', 'A3s', 'A2s', '76s', '65s', '54s', 'K5s', 'K4s', 'J9s', 'T9s'])

ACTIVE_SHARE = 0.1


class NarrowingContext(BaseModel):
    """Circumstances of an observed action."""
    street: str = Field('preflop', description="Street the action happened on")
    position: Optional[str] = Field(None, description="Actor's position")
    prior_raises: int = Field(0, ge=0, description="Raises already made on the street")
    bet_fraction: float = Field(0.5, ge=0, description="Bet size as a fraction of the pot")
    in_position: bool = Field(True, description="Actor acts after hero postflop")
    stats: Optional[PlayerStats] = Field(None, description="Actor's tracked statistics")

    class Config:
        validate_assignment = True
        extra = "forbid"


def _scaled(opponent_range: OpponentRange, factor_of) -> OpponentRange:
    weights = {}
    for wh in opponent_range.hands:
        weights[wh.hand] = min(wh.weight * factor_of(strength_of(wh.hand), wh.hand), 1.0)
    return opponent_range.with_weights(weights)


def starting_range(position: Optional[str], stats: Optional[PlayerStats] = None,
                   player_id: Optional[str] = None) -> OpponentRange:
    """
    Binary opening range for a position.

    Args:
        position: Opponent position
        stats: Opponent statistics (shift the cutoff by archetype)
        player_id: Owner of the range

    Returns:
        Range with weight 1.0 at or above the cutoff and 0.0 below
    """
    label = normalize_position(position)
    cutoff = OPEN_CUTOFFS.get(label, DEFAULT_OPEN_CUTOFF) + get_range_adjustment(stats).open_widen
    if label not in OPEN_CUTOFFS:
        logger.warning(f"No opening cutoff for position {position}, using {DEFAULT_OPEN_CUTOFF}")

    return OpponentRange(
        player_id=player_id,
        hands=[WeightedHand(hand=hand, weight=1.0 if strength_of(hand) >= cutoff else 0.0)
               for hand in ALL_HANDS]
    )


def full_range(player_id: Optional[str] = None) -> OpponentRange:
    """Every hand class at weight 1.0."""
    return OpponentRange(player_id=player_id, hands=[WeightedHand(hand=hand, weight=1.0) for hand in ALL_HANDS])


def narrow_open_raise(opponent_range: OpponentRange, position: Optional[str],
                      stats: Optional[PlayerStats] = None) -> OpponentRange:
    """Almost remove hands below the position's opening cutoff."""
    cutoff = OPEN_CUTOFFS.get(normalize_position(position), DEFAULT_OPEN_CUTOFF)
    cutoff += get_range_adjustment(stats).open_widen
    return _scaled(opponent_range, lambda strength, hand: 0.05 if strength < cutoff else 1.0)


def narrow_three_bet(opponent_range: OpponentRange, position: Optional[str],
                     stats: Optional[PlayerStats] = None) -> OpponentRange:
    """Keep value re-raises, part of the bluff set, and almost nothing else."""
    cutoff = THREE_BET_CUTOFFS.get(normalize_position(position), DEFAULT_THREE_BET_CUTOFF)
    cutoff += get_range_adjustment(stats).three_bet_widen

    def factor(strength, hand):
        if strength >= cutoff:
            return 1.0
        if hand in THREE_BET_BLUFFS:
            return 0.35
        return 0.02

    return _scaled(opponent_range, factor)


def narrow_preflop_call(opponent_range: OpponentRange, position: Optional[str], in_position: bool,
                        stats: Optional[PlayerStats] = None) -> OpponentRange:
    """Remove most hands that would have re-raised or folded."""
    label = normalize_position(position)
    adjustment = get_range_adjustment(stats)
    three_bet_cutoff = THREE_BET_CUTOFFS.get(label, DEFAULT_THREE_BET_CUTOFF) + adjustment.three_bet_widen

    if label == 'BB':
        call_key = 'BB'
    else:
        call_key = 'IP' if in_position else 'OOP'
    call_cutoff = FLAT_CALL_CUTOFFS[call_key] + adjustment.call_widen

    def factor(strength, hand):
        if strength >= three_bet_cutoff:
            return 0.15
        if strength < call_cutoff:
            return 0.05
        return 1.0

    return _scaled(opponent_range, factor)


def narrow_postflop_bet(opponent_range: OpponentRange, bet_fraction: float) -> OpponentRange:
    """Shift weight towards a polarised range; larger bets polarise more."""
    polarization = min(bet_fraction / 0.75, 1.5)

    def factor(strength, hand):
        if strength >= 85:
            return 0.9 + 0.1 * polarization
        if strength >= 70:
            return 1.0 - 0.2 * polarization
        if strength >= 55:
            return 0.6 - 0.15 * polarization
        return 0.2 + 0.1 * polarization

    return _scaled(opponent_range, factor)


def narrow_postflop_check(opponent_range: OpponentRange) -> OpponentRange:
    """Strong hands check less often."""
    def factor(strength, hand):
        if strength >= 90:
            return 0.25
        if strength >= 75:
            return 0.5
        return 0.9

    return _scaled(opponent_range, factor)


def narrow_postflop_call(opponent_range: OpponentRange) -> OpponentRange:
    """Calls are capped: monsters raise, air folds."""
    def factor(strength, hand):
        if strength >= 95:
            return 0.3
        if strength >= 70:
            return 0.85
        if strength >= 50:
            return 1.0
        if strength >= 35:
            return 0.6
        return 0.1

    return _scaled(opponent_range, factor)


def narrow(opponent_range: OpponentRange, action_type: str, context: NarrowingContext) -> OpponentRange:
    """
    Narrow a range for one observed action.

    Args:
        opponent_range: Current belief
        action_type: Observed action (fold/check/call/bet/raise/all-in/post)
        context: Street, position, raise count, bet size and stats

    Returns:
        New range; folds, posts and preflop checks leave it unchanged
    """
    if context.street == 'preflop':
        if action_type in AGGRESSIVE_ACTIONS:
            if context.prior_raises == 0:
                result = narrow_open_raise(opponent_range, context.position, context.stats)
            else:
                result = narrow_three_bet(opponent_range, context.position, context.stats)
        elif action_type == 'call':
            result = narrow_preflop_call(opponent_range, context.position, context.in_position, context.stats)
        else:
            return opponent_range
    else:
        if action_type in AGGRESSIVE_ACTIONS:
            result = narrow_postflop_bet(opponent_range, context.bet_fraction)
        elif action_type == 'check':
            result = narrow_postflop_check(opponent_range)
        elif action_type == 'call':
            result = narrow_postflop_call(opponent_range)
        else:
            return opponent_range

    logger.debug(f"Narrowed range on {context.street} {action_type}: "
                 f"{len(active_hands(opponent_range))} -> {len(active_hands(result))} active classes")
    return result


def normalize(opponent_range: OpponentRange) -> OpponentRange:
    """Scale weights to sum to 1; a zero-weight range is returned unchanged."""
    total = opponent_range.total_weight()
    if total == 0:
        return opponent_range
    return opponent_range.with_weights({wh.hand: min(wh.weight / total, 1.0) for wh in opponent_range.hands})


def active_hands(opponent_range: OpponentRange, min_share: float = ACTIVE_SHARE) -> List[WeightedHand]:
    """
    Hand classes carrying a meaningful share of the range.

    Args:
        opponent_range: Range to inspect
        min_share: Minimum weight relative to the heaviest class

    Returns:
        Classes with weight >= min_share * max weight (none for a zero range)
    """
    top = opponent_range.max_weight()
    if top <= 0:
        return []
    return [wh for wh in opponent_range.hands if wh.weight >= min_share * top]


def describe(opponent_range: OpponentRange) -> str:
    """Human-readable summary of a range."""
    active = active_hands(opponent_range)
    if not active:
        return "Unknown range"

    total_classes = len(ALL_HANDS)
    if len(active) >= total_classes * 0.9:
        return "Very wide range (nearly any two cards)"

    top_hands = [wh.hand for wh in sorted(active, key=lambda wh: wh.weight, reverse=True)]
    percent = f"{len(active) / total_classes * 100:.0f}"

    if len(active) <= 20:
        return f"Very tight range (~{percent}% of hands): {', '.join(top_hands[:15])}"
    if len(active) <= 50:
        return f"Tight range (~{percent}% of hands). Top holdings: {', '.join(top_hands[:10])}"
    if len(active) <= 100:
        return f"Medium range (~{percent}% of hands). Likely holdings: {', '.join(top_hands[:8])}..."
    return f"Wide range (~{percent}% of hands). Could hold many hands."


def range_combo_count(opponent_range: OpponentRange) -> float:
    """Weighted number of concrete two-card combos in a range."""
    return sum(wh.weight * len(expand_combos(wh.hand)) for wh in opponent_range.hands)
