#!/usr/bin/env python3
"""
Postflop Solver for EV-based postflop decisions.

Scores every legal action by expected value in big blinds and recommends
the best one. Bets and raises are tried at a fixed ladder of pot fractions;
fold equity comes from the opponent's archetype, the bet size and the
street. Single-street model: no future betting is simulated.

Confidence reflects how clearly the best action beats the runner-up.
"""

import logging
from typing import List, Optional
from src.advisor.opponent_profile import base_fold_frequency
from src.models.decision import ActionEV, Decision
from src.models.player_stats import PlayerStats
from src.config.settings import Settings

logger = logging.getLogger(__name__)

BET_SIZE_FRACTIONS = [0.33, 0.5, 0.75, 1.0, 1.5]
STREET_FOLD_MULTIPLIERS = {'turn': 1.05, 'river': 1.1}
MIN_FOLD_EQUITY = 0.05
MAX_FOLD_EQUITY = 0.85
SINGLE_OPTION_GAP = 5.0


def estimate_fold_equity(stats: Optional[PlayerStats], bet_fraction: float, street: str) -> float:
    """
    Estimate how often the opponent folds to a bet.

    Args:
        stats: Opponent statistics
        bet_fraction: Bet size as a fraction of the pot
        street: flop, turn or river

    Returns:
        Fold probability clamped to [0.05, 0.85]
    """
    sizing_multiplier = 0.8 + bet_fraction * 0.4
    street_multiplier = STREET_FOLD_MULTIPLIERS.get(street, 1.0)
    fold_equity = base_fold_frequency(stats) * sizing_multiplier * street_multiplier
    return min(max(fold_equity, MIN_FOLD_EQUITY), MAX_FOLD_EQUITY)


def is_bluff_profitable(bet: float, pot: float, fold_frequency: float) -> bool:
    """A bluff profits when the opponent folds more often than bet / (pot + bet)."""
    if pot + bet <= 0:
        return False
    return bet / (pot + bet) < fold_frequency


class PostflopSolver:
    """Postflop solver for EV-based decision making."""

    def __init__(self):
        """Initialize postflop solver with configuration."""
        self.settings = Settings()

        self.settings.create("advisor.postflop.bet_fractions", default=BET_SIZE_FRACTIONS)
        self.bet_fractions = list(self.settings.get("advisor.postflop.bet_fractions"))

        logger.info("Initialized postflop solver")

    def get_recommendation(self, equity: float, pot: float, stack: float, street: str,
                           facing_bet: bool, to_call: float = 0.0,
                           opponent_stats: Optional[PlayerStats] = None,
                           can_check: bool = True, can_bet: bool = True) -> Decision:
        """
        Get postflop recommendation from the EV of every candidate action.

        Args:
            equity: Hero's equity percentage (0-100)
            pot: Current pot in big blinds
            stack: Hero's remaining stack in big blinds
            street: flop, turn or river
            facing_bet: Hero faces a bet or raise
            to_call: Amount to call in big blinds
            opponent_stats: Stats of the opponent driving fold equity
            can_check: Checking is legal
            can_bet: Betting or raising is legal

        Returns:
            Decision with the best action, its EV and scored alternatives

        Raises:
            ValueError: If pot, stack or to_call is negative
        """
        if pot < 0 or stack < 0 or to_call < 0:
            logger.error(f"Invalid postflop inputs: pot={pot}, stack={stack}, to_call={to_call}")
            raise ValueError("Pot, stack and amount to call must be non-negative")

        eq = min(max(equity, 0.0), 100.0) / 100
        candidates: List[ActionEV] = []

        if facing_bet:
            candidates.append(ActionEV(action="fold", ev=0.0, reasoning="Fold: EV = 0 BB (baseline)"))

        if can_check and not facing_bet:
            check_ev = self._calculate_check_ev(pot, eq)
            candidates.append(ActionEV(
                action="check", ev=check_ev,
                reasoning=f"Check: EV = {check_ev:.2f} BB (equity {equity:.1f}% x pot {pot:.1f} BB)"
            ))

        if facing_bet and to_call > 0:
            call_ev = self._calculate_call_ev(pot, to_call, eq)
            candidates.append(ActionEV(
                action="call", sizing=to_call, ev=call_ev,
                reasoning=f"Call {to_call:.1f} BB: EV = {call_ev:.2f} BB "
                          f"(pot odds {to_call / (pot + to_call) * 100:.1f}%, equity {equity:.1f}%)"
            ))

        if can_bet:
            candidates.extend(self._sized_candidates(eq, equity, pot, stack, street, facing_bet,
                                                     to_call, opponent_stats))

        if not candidates:
            logger.warning("No legal postflop actions, defaulting to check")
            return Decision(action="check", confidence=0.0,
                            reasoning="No valid actions available, defaulting to check",
                            equity=equity, ev=0.0)

        ranked = sorted(candidates, key=lambda c: c.ev, reverse=True)
        best = ranked[0]
        runner_up = ranked[1] if len(ranked) > 1 else None

        gap = best.ev - runner_up.ev if runner_up else SINGLE_OPTION_GAP
        confidence = min(max(gap / 3, 0.1), 0.95)

        for candidate in ranked:
            logger.debug(f"{street} candidate: {candidate.reasoning}")

        reasoning = f"EV analysis ({street}): best {best.reasoning}"
        if runner_up:
            reasoning += f"; 2nd {runner_up.reasoning}; EV gap {gap:.2f} BB"

        logger.info(f"Postflop recommendation: {best.action} {best.sizing:.1f} BB "
                    f"(EV {best.ev:.2f}, confidence: {confidence:.2f})")

        return Decision(
            action=best.action,
            sizing=best.sizing,
            confidence=confidence,
            reasoning=reasoning,
            equity=min(max(equity, 0.0), 100.0),
            ev=best.ev,
            alternative_actions=ranked[1:]
        )

    def _sized_candidates(self, eq: float, equity: float, pot: float, stack: float, street: str,
                          facing_bet: bool, to_call: float,
                          opponent_stats: Optional[PlayerStats]) -> List[ActionEV]:
        """Bets or raises at each pot fraction, plus the all-in."""
        candidates: List[ActionEV] = []
        all_in_listed = stack > 0 and stack <= 2 * pot
        seen = set()

        for fraction in self.bet_fractions:
            bet = pot * fraction
            size = to_call + bet if facing_bet else bet
            if bet <= 0 or size > stack or (all_in_listed and size >= stack):
                continue
            rounded = round(size, 6)
            if rounded in seen:
                continue
            seen.add(rounded)

            fold_equity = estimate_fold_equity(opponent_stats, fraction, street)
            ev = self._calculate_bet_ev(pot, size, eq, fold_equity)

            if facing_bet:
                reasoning = (f"Raise to {size:.1f} BB: EV = {ev:.2f} BB "
                             f"(fold eq {fold_equity * 100:.0f}%, equity {equity:.1f}%)")
                candidates.append(ActionEV(action="raise", sizing=size, ev=ev, reasoning=reasoning))
            else:
                reasoning = (f"Bet {size:.1f} BB ({fraction * 100:.0f}% pot): EV = {ev:.2f} BB "
                             f"(fold eq {fold_equity * 100:.0f}%, equity {equity:.1f}%)")
                candidates.append(ActionEV(action="bet", sizing=size, ev=ev, reasoning=reasoning))

        if all_in_listed:
            fold_equity = estimate_fold_equity(opponent_stats, stack / max(pot, 0.1), street)
            ev = self._calculate_bet_ev(pot, stack, eq, fold_equity)
            candidates.append(ActionEV(
                action="all-in", sizing=stack, ev=ev,
                reasoning=f"All-in {stack:.1f} BB: EV = {ev:.2f} BB (fold eq {fold_equity * 100:.0f}%)"
            ))

        return candidates

    def _calculate_check_ev(self, pot: float, eq: float) -> float:
        """Hero realises equity in the current pot."""
        return eq * pot

    def _calculate_call_ev(self, pot: float, to_call: float, eq: float) -> float:
        """
        Calculate EV of calling.

        EV = equity * (pot + call) - (1 - equity) * call
        """
        return eq * (pot + to_call) - (1 - eq) * to_call

    def _calculate_bet_ev(self, pot: float, size: float, eq: float, fold_equity: float) -> float:
        """
        Calculate EV of betting or raising to `size`.

        EV = fe * pot + (1 - fe) * [equity * (pot + 2 * size) - (1 - equity) * size]
        """
        called = eq * (pot + 2 * size) - (1 - eq) * size
        return fold_equity * pot + (1 - fold_equity) * called
