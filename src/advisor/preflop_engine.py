#!/usr/bin/env python3
"""
Preflop engine for chart-based preflop decisions.

Classifies the preflop spot from a PreflopContext, then applies the
threshold chart for that spot against the hand's strength percentile.
Thresholds move with exploit adjustments for the opponent and tighten by
five points for every player beyond two already in the pot.

Mixed strategies (3-bet and 4-bet bluffs) draw from the injected
random.Random so a seeded run always takes the same branch.
"""

import logging
import random
from enum import Enum
from typing import Optional, Sequence, Union
from src.advisor.hand_strength import hand_class, is_suited, strength_of
from src.advisor.opponent_profile import get_positional_exploit_adjustment
from src.advisor.range_model import THREE_BET_BLUFFS
from src.models.adjustments import ExploitAdjustment
from src.models.card import Card
from src.models.decision import Decision
from src.models.player import normalize_position
from src.models.player_stats import PlayerStats
from src.models.preflop_context import PreflopContext
from src.config.settings import Settings

logger = logging.getLogger(__name__)

RFI_THRESHOLDS = {
    'UTG': 82, 'UTG+1': 80, 'MP': 78, 'LJ': 75, 'HJ': 73,
    'CO': 68, 'BTN': 52, 'SB': 55,
}
DEFAULT_RFI_THRESHOLD = 75

THREE_BET_VALUE_THRESHOLDS = {'UTG': 96, 'MP': 94, 'CO': 92, 'BTN': 88, 'SB': 85}
DEFAULT_THREE_BET_VALUE_THRESHOLD = 92

CALL_VS_OPEN_THRESHOLDS = {'IP': 65, 'OOP': 72}

BB_DEFENSE_THRESHOLDS = {
    'UTG': 70, 'UTG+1': 68, 'MP': 65, 'LJ': 62, 'HJ': 60,
    'CO': 55, 'BTN': 48, 'SB': 45,
}
DEFAULT_BB_DEFENSE_THRESHOLD = 60
BB_CHECK_RAISE_THRESHOLD = 88

FOUR_BET_THRESHOLD = 96
FACING_THREE_BET_CALL = {'IP': 85, 'OOP': 90}
FOUR_BET_BLUFFS = frozenset(['A5s', 'A4s'])

FIVE_BET_SHOVE_THRESHOLD = 99
FOUR_BET_CALL_THRESHOLD = 96

# Push/fold charts by effective stack bucket (10, 15, 20 BB)
NASH_SHOVE_THRESHOLDS = {
    10: {'UTG': 78, 'UTG+1': 76, 'MP': 74, 'LJ': 72, 'HJ': 70, 'CO': 62, 'BTN': 50, 'SB': 48, 'BB': 55},
    15: {'UTG': 82, 'UTG+1': 80, 'MP': 78, 'LJ': 76, 'HJ': 74, 'CO': 68, 'BTN': 58, 'SB': 55, 'BB': 62},
    20: {'UTG': 85, 'UTG+1': 83, 'MP': 82, 'LJ': 80, 'HJ': 78, 'CO': 72, 'BTN': 65, 'SB': 62, 'BB': 68},
}
DEFAULT_SHOVE_THRESHOLD = 65

NASH_CALL_VS_SHOVE = {
    10: {'UTG': 88, 'UTG+1': 87, 'MP': 86, 'LJ': 85, 'HJ': 84, 'CO': 80, 'BTN': 75, 'SB': 72, 'BB': 68},
    15: {'UTG': 90, 'UTG+1': 89, 'MP': 88, 'LJ': 87, 'HJ': 86, 'CO': 83, 'BTN': 78, 'SB': 75, 'BB': 72},
    20: {'UTG': 92, 'UTG+1': 91, 'MP': 90, 'LJ': 89, 'HJ': 88, 'CO': 85, 'BTN': 82, 'SB': 80, 'BB': 76},
}
DEFAULT_CALL_VS_SHOVE = 75

OPEN_SIZE = 2.5
SB_OPEN_SIZE = 3.0
MIN_THREE_BET_SIZE = 7.0


class PreflopSpot(str, Enum):
    """Preflop situations with a dedicated chart."""
    SHORT_STACK = "short_stack"
    RFI = "rfi"
    FACING_OPEN = "facing_open"
    FACING_3BET = "facing_3bet"
    FACING_4BET = "facing_4bet"
    UNHANDLED = "unhandled"


def multiway_adjustment(players_in_pot: int) -> int:
    """Threshold increase for each player beyond heads-up."""
    if players_in_pot <= 2:
        return 0
    return (players_in_pot - 2) * 5


def stack_bucket(stack_bb: float) -> int:
    """Push/fold chart bucket for an effective stack."""
    if stack_bb <= 12:
        return 10
    if stack_bb <= 17:
        return 15
    return 20


def classify_spot(context: PreflopContext, stack_bb: float, short_stack_bb: float = 25) -> PreflopSpot:
    """
    Pick the chart that applies to a preflop context.

    Args:
        context: Preflop context facing hero
        stack_bb: Effective stack in big blinds
        short_stack_bb: Stacks below this play push/fold

    Returns:
        PreflopSpot; short stacks take priority over the betting situation
    """
    if stack_bb < short_stack_bb:
        return PreflopSpot.SHORT_STACK
    if context.is_rfi or context.facing_limp:
        return PreflopSpot.RFI
    if context.facing_open:
        return PreflopSpot.FACING_OPEN
    if context.facing_3bet:
        return PreflopSpot.FACING_3BET
    if context.facing_4bet:
        return PreflopSpot.FACING_4BET
    return PreflopSpot.UNHANDLED


class PreflopEngine:
    """Chart-driven preflop decisions."""

    def __init__(self):
        """Initialize preflop engine with configuration."""
        self.settings = Settings()

        self.settings.create("advisor.preflop.three_bet_bluff_frequency", default=0.4)
        self.settings.create("advisor.preflop.bb_bluff_frequency", default=0.35)
        self.settings.create("advisor.preflop.four_bet_bluff_frequency", default=0.3)
        self.settings.create("advisor.preflop.short_stack_bb", default=25)

        self.three_bet_bluff_frequency = self.settings.get("advisor.preflop.three_bet_bluff_frequency")
        self.bb_bluff_frequency = self.settings.get("advisor.preflop.bb_bluff_frequency")
        self.four_bet_bluff_frequency = self.settings.get("advisor.preflop.four_bet_bluff_frequency")
        self.short_stack_bb = self.settings.get("advisor.preflop.short_stack_bb")

        self._handlers = {
            PreflopSpot.SHORT_STACK: self._short_stack_action,
            PreflopSpot.RFI: self._rfi_action,
            PreflopSpot.FACING_OPEN: self._facing_open_action,
            PreflopSpot.FACING_3BET: self._facing_3bet_action,
            PreflopSpot.FACING_4BET: self._facing_4bet_action,
        }

        logger.info("Initialized preflop engine")

    def get_action(self, hero_cards: Sequence[Union[str, Card]], position: str, stack_bb: float,
                   context: PreflopContext, opponent_stats: Optional[PlayerStats] = None,
                   rng: Optional[random.Random] = None) -> Decision:
        """
        Get the preflop recommendation for hero.

        Args:
            hero_cards: Hero's two hole cards
            position: Hero's position
            stack_bb: Effective stack in big blinds
            context: Preflop context facing hero
            opponent_stats: Stats of the opponent hero is playing against
            rng: Random source for mixed strategies

        Returns:
            Decision; action None with confidence 0 when the spot is not charted

        Raises:
            ValueError: With fewer than two hole cards or a negative stack
        """
        if len(hero_cards) < 2:
            raise ValueError(f"Hero needs two hole cards, got {len(hero_cards)}")
        if stack_bb < 0:
            raise ValueError(f"Stack cannot be negative: {stack_bb}")

        hand = hand_class(hero_cards[0], hero_cards[1])
        strength = strength_of(hand)
        position = normalize_position(position) or ""
        rng = rng if rng is not None else random.Random()

        spot = classify_spot(context, stack_bb, self.short_stack_bb)
        handler = self._handlers.get(spot)

        if handler is None:
            logger.info(f"Unhandled preflop context for {hand} from {position}, deferring")
            return Decision(
                action=None,
                confidence=0.0,
                reasoning="Unknown preflop context, deferring to fallback"
            )

        exploit = get_positional_exploit_adjustment(opponent_stats, context.aggressor_position or None)
        decision = handler(hand, strength, position, stack_bb, context, exploit, rng)

        logger.info(f"Preflop {spot.value}: {hand} ({strength}) from {position} -> "
                    f"{decision.action} {decision.sizing:.1f} BB (confidence: {decision.confidence:.2f})")
        return decision

    def _three_bet_size(self, context: PreflopContext, multiplier: float, stack_bb: float) -> float:
        sizing = context.last_raise_size * multiplier
        if context.players_in_pot > 2:
            sizing += (context.players_in_pot - 2) * 1.5
        return min(max(sizing, MIN_THREE_BET_SIZE), stack_bb)

    def _short_stack_action(self, hand: str, strength: int, position: str, stack_bb: float,
                            context: PreflopContext, exploit: ExploitAdjustment,
                            rng: random.Random) -> Decision:
        """Push/fold play below the short-stack threshold."""
        bucket = stack_bucket(stack_bb)
        multiway = multiway_adjustment(context.players_in_pot)

        if context.is_rfi or context.facing_limp:
            threshold = NASH_SHOVE_THRESHOLDS[bucket].get(position, DEFAULT_SHOVE_THRESHOLD) + multiway

            if bucket == 20 and strength >= threshold + 10:
                return Decision(
                    action="raise", sizing=min(OPEN_SIZE, stack_bb), confidence=0.9,
                    reasoning=f"Short stack open-raise ({bucket} BB): {hand} ({strength}%) from {position}, "
                              f"strong enough to raise/fold"
                )
            if strength >= threshold:
                return Decision(
                    action="all-in", sizing=stack_bb, confidence=0.95,
                    reasoning=f"Push: {hand} ({strength}%) from {position} with {stack_bb:.0f} BB "
                              f"(threshold: {threshold}%)"
                )
            return Decision(
                action="fold", confidence=0.9,
                reasoning=f"Push/fold: {hand} ({strength}%) below {position} shove threshold ({threshold}%)"
            )

        if context.facing_open or context.facing_3bet or context.facing_4bet:
            threshold = NASH_CALL_VS_SHOVE[bucket].get(position, DEFAULT_CALL_VS_SHOVE)
            if context.is_in_position:
                threshold -= 3
            threshold += multiway

            if strength >= threshold:
                return Decision(
                    action="all-in", sizing=stack_bb, confidence=0.9,
                    reasoning=f"Reshove: {hand} ({strength}%) vs {context.aggressor_position or 'unknown'} "
                              f"raise (threshold: {threshold}%)"
                )
            return Decision(
                action="fold", confidence=0.85,
                reasoning=f"Push/fold: {hand} ({strength}%) below reshove threshold ({threshold}%)"
            )

        return Decision(action="fold", confidence=0.7, reasoning="Short stack default fold")

    def _rfi_action(self, hand: str, strength: int, position: str, stack_bb: float,
                    context: PreflopContext, exploit: ExploitAdjustment,
                    rng: random.Random) -> Decision:
        """First in, or raising over limpers."""
        threshold = RFI_THRESHOLDS.get(position, DEFAULT_RFI_THRESHOLD) + exploit.rfi_adjust
        threshold += multiway_adjustment(context.players_in_pot)

        if context.facing_limp and context.players_in_pot <= 3:
            threshold -= 5

        if strength >= threshold:
            sizing = OPEN_SIZE
            if context.facing_limp:
                sizing = 3.5 + (context.players_in_pot - 2) * 1.0
            if position == 'SB':
                sizing = SB_OPEN_SIZE
            return Decision(
                action="raise", sizing=min(sizing, stack_bb), confidence=0.9,
                reasoning=f"Open: {hand} ({strength}%) from {position}, threshold {threshold}%"
            )

        if position == 'SB' and strength >= 45 and is_suited(hand):
            return Decision(
                action="call", sizing=0.5, confidence=0.6,
                reasoning=f"SB complete with suited hand: {hand}"
            )

        return Decision(
            action="fold", confidence=0.85,
            reasoning=f"Fold: {hand} ({strength}%) too weak for {position} open (threshold {threshold}%)"
        )

    def _facing_open_action(self, hand: str, strength: int, position: str, stack_bb: float,
                            context: PreflopContext, exploit: ExploitAdjustment,
                            rng: random.Random) -> Decision:
        """One raise in front of hero."""
        opener = context.open_raiser_position or "unknown"
        multiway = multiway_adjustment(context.players_in_pot)
        multiplier = 3.0 if context.is_in_position else 3.5

        value_threshold = THREE_BET_VALUE_THRESHOLDS.get(context.open_raiser_position,
                                                         DEFAULT_THREE_BET_VALUE_THRESHOLD)
        value_threshold += exploit.three_bet_adjust + multiway

        if strength >= value_threshold:
            return Decision(
                action="raise", sizing=self._three_bet_size(context, multiplier, stack_bb), confidence=0.9,
                reasoning=f"3-bet for value: {hand} ({strength}%) vs {opener} open"
            )

        if (hand in THREE_BET_BLUFFS and not exploit.value_wider and context.players_in_pot <= 3
                and rng.random() < self.three_bet_bluff_frequency):
            return Decision(
                action="raise", sizing=self._three_bet_size(context, multiplier, stack_bb), confidence=0.75,
                reasoning=f"3-bet bluff: {hand} vs {opener} open"
            )

        if position == 'BB':
            return self._bb_defense_action(hand, strength, stack_bb, context, exploit, rng)

        side = 'IP' if context.is_in_position else 'OOP'
        call_threshold = CALL_VS_OPEN_THRESHOLDS[side] + exploit.call_adjust + multiway

        if strength >= call_threshold:
            return Decision(
                action="call", sizing=min(context.last_raise_size, stack_bb), confidence=0.85,
                reasoning=f"Flat call: {hand} ({strength}%) vs {opener} open, {side}"
            )

        return Decision(
            action="fold", confidence=0.85,
            reasoning=f"Fold vs open: {hand} ({strength}%) too weak vs {opener}"
        )

    def _bb_defense_action(self, hand: str, strength: int, stack_bb: float, context: PreflopContext,
                           exploit: ExploitAdjustment, rng: random.Random) -> Decision:
        """Big blind facing a single open."""
        opener = context.open_raiser_position or "unknown"

        if strength >= BB_CHECK_RAISE_THRESHOLD + exploit.three_bet_adjust:
            return Decision(
                action="raise", sizing=self._three_bet_size(context, 3.5, stack_bb), confidence=0.85,
                reasoning=f"BB 3-bet for value: {hand} ({strength}%) vs {opener} open"
            )

        if (hand in THREE_BET_BLUFFS and context.players_in_pot <= 3
                and rng.random() < self.bb_bluff_frequency):
            return Decision(
                action="raise", sizing=self._three_bet_size(context, 3.5, stack_bb), confidence=0.7,
                reasoning=f"BB 3-bet bluff: {hand} vs {opener} open"
            )

        defense_threshold = BB_DEFENSE_THRESHOLDS.get(context.open_raiser_position, DEFAULT_BB_DEFENSE_THRESHOLD)
        defense_threshold += exploit.call_adjust

        if strength >= defense_threshold:
            return Decision(
                action="call", sizing=max(context.last_raise_size - 1, 0.0), confidence=0.8,
                reasoning=f"BB defend: {hand} ({strength}%) vs {opener} open (threshold: {defense_threshold}%)"
            )

        return Decision(
            action="fold", confidence=0.8,
            reasoning=f"BB fold: {hand} ({strength}%) too weak to defend vs {opener}"
        )

    def _facing_3bet_action(self, hand: str, strength: int, position: str, stack_bb: float,
                            context: PreflopContext, exploit: ExploitAdjustment,
                            rng: random.Random) -> Decision:
        """Hero raised and was re-raised."""
        four_bet_size = min(context.last_raise_size * 2.5, stack_bb)

        if strength >= FOUR_BET_THRESHOLD:
            return Decision(
                action="raise", sizing=four_bet_size, confidence=0.95,
                reasoning=f"4-bet: {hand} ({strength}%) premium hand"
            )

        if hand in FOUR_BET_BLUFFS and rng.random() < self.four_bet_bluff_frequency:
            return Decision(
                action="raise", sizing=four_bet_size, confidence=0.65,
                reasoning=f"4-bet bluff: {hand} blocks AA/AK"
            )

        side = 'IP' if context.is_in_position else 'OOP'
        if strength >= FACING_THREE_BET_CALL[side]:
            return Decision(
                action="call", sizing=min(context.last_raise_size, stack_bb), confidence=0.85,
                reasoning=f"Call 3-bet: {hand} ({strength}%) {side}"
            )

        return Decision(
            action="fold", confidence=0.9,
            reasoning=f"Fold to 3-bet: {hand} ({strength}%) not strong enough"
        )

    def _facing_4bet_action(self, hand: str, strength: int, position: str, stack_bb: float,
                            context: PreflopContext, exploit: ExploitAdjustment,
                            rng: random.Random) -> Decision:
        """Hero re-raised and was raised again."""
        if strength >= FIVE_BET_SHOVE_THRESHOLD:
            return Decision(
                action="all-in", sizing=stack_bb, confidence=0.98,
                reasoning=f"5-bet shove: {hand}"
            )

        if strength >= FOUR_BET_CALL_THRESHOLD:
            return Decision(
                action="call", sizing=min(context.last_raise_size, stack_bb), confidence=0.8,
                reasoning=f"Call 4-bet: {hand} strong but not a shove"
            )

        return Decision(
            action="fold", confidence=0.92,
            reasoning=f"Fold to 4-bet: {hand} ({strength}%) ranges are narrow here"
        )
