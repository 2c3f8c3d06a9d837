#!/usr/bin/env python3
"""
Equity calculator using Treys library for poker hand evaluation.

Monte Carlo estimate of hero's share of the pot against either N opponents
holding uniformly random cards, or one opponent drawn from a weighted range.
Randomness comes from an injected random.Random so runs are reproducible;
trials are processed in batches and an optional time budget stops the run
after the current batch.

Equity is returned as a percentage (0-100).
"""

import logging
import random
import time
from typing import List, Optional, Sequence, Tuple, Union
import numpy as np
from treys import Evaluator, Card as TreysCard
from src.advisor import range_model
from src.advisor.hand_strength import expand_combos
from src.models.card import Card, RANKS, SUIT_NAMES
from src.models.opponent_range import OpponentRange
from src.config.settings import Settings

logger = logging.getLogger(__name__)

CardLike = Union[str, Card]

NEUTRAL_EQUITY = 50.0
MIN_CLASS_SHARE = 1e-3
WORST_RANK = 7462


class EquityCalculator:
    """Equity calculator using Treys for hand evaluation and Monte Carlo simulation."""

    def __init__(self):
        """Initialize equity calculator with Treys evaluator."""
        self.evaluator = Evaluator()
        self.settings = Settings()

        self.settings.create("advisor.equity.trials", default=2000)
        self.settings.create("advisor.equity.batch_size", default=250)

        self.default_trials = self.settings.get("advisor.equity.trials")
        self.batch_size = self.settings.get("advisor.equity.batch_size")

        logger.info("Initialized equity calculator with Treys")

    def _card_to_treys(self, card: CardLike) -> int:
        """Convert a card identifier or Card to a Treys card integer."""
        return TreysCard.new(str(Card.parse(card)))

    def _cards_to_treys(self, cards: Sequence[CardLike]) -> List[int]:
        """Convert several cards to Treys card integers."""
        return [self._card_to_treys(card) for card in cards]

    def _residual_deck(self, known: set) -> List[int]:
        """Treys integers for every card not already known."""
        deck = [TreysCard.new(rank + suit) for rank in RANKS for suit in SUIT_NAMES]
        return [card for card in deck if card not in known]

    def calculate_equity(self, hero_cards: Sequence[CardLike], board_cards: Sequence[CardLike] = (),
                         opponents: int = 1, opponent_range: Optional[OpponentRange] = None,
                         trials: Optional[int] = None, rng: Optional[random.Random] = None,
                         time_budget: Optional[float] = None) -> float:
        """
        Estimate hero's equity by Monte Carlo simulation.

        Args:
            hero_cards: Hero's two hole cards
            board_cards: Known community cards (0, 3, 4 or 5)
            opponents: Opponents holding random cards (ignored with a range)
            opponent_range: Weighted range of a single opponent
            trials: Number of simulated deals, defaults to advisor.equity.trials
            rng: Random source, a fresh unseeded generator when None
            time_budget: Seconds after which the run stops at the end of a batch

        Returns:
            Equity percentage (0-100); 50.0 when no deal can be completed

        Raises:
            ValueError: On malformed card input, a partial flop, opponents < 1 or trials < 1
        """
        if len(hero_cards) != 2:
            logger.error(f"Invalid hero cards count: {len(hero_cards)}")
            raise ValueError(f"Hero needs exactly two hole cards, got {len(hero_cards)}")
        if len(board_cards) not in (0, 3, 4, 5):
            raise ValueError(f"Board must have 0, 3, 4 or 5 cards, got {len(board_cards)}")
        if opponents < 1:
            raise ValueError(f"Need at least one opponent, got {opponents}")

        trials = self.default_trials if trials is None else trials
        if trials < 1:
            raise ValueError(f"Trials must be positive, got {trials}")

        hero = self._cards_to_treys(hero_cards)
        board = self._cards_to_treys(board_cards)
        known = set(hero + board)
        if len(known) != len(hero) + len(board):
            raise ValueError("Duplicate cards between hero cards and board")

        rng = rng if rng is not None else random.Random()
        deck = self._residual_deck(known)

        sampler = None
        if opponent_range is not None:
            sampler = self._build_range_sampler(opponent_range, known)
            if sampler is None:
                logger.warning("No opponent combos available, returning neutral equity")
                return NEUTRAL_EQUITY
        elif len(deck) < 5 - len(board) + 2 * opponents:
            logger.warning(f"Deck too short for {opponents} opponents, returning neutral equity")
            return NEUTRAL_EQUITY

        wins = ties = completed = 0
        started = time.monotonic()

        while completed < trials:
            size = min(self.batch_size, trials - completed)
            if sampler is not None:
                batch_wins, batch_ties = self._run_weighted_batch(size, hero, board, deck, sampler, rng)
            else:
                batch_wins, batch_ties = self._run_uniform_batch(size, hero, board, deck, opponents, rng)
            wins += batch_wins
            ties += batch_ties
            completed += size

            if time_budget is not None and time.monotonic() - started >= time_budget:
                logger.debug(f"Time budget reached after {completed}/{trials} trials")
                break

        equity = (wins + 0.5 * ties) / completed * 100
        logger.debug(f"Equity {equity:.1f}% over {completed} trials "
                     f"({'range' if opponent_range is not None else f'{opponents} random'} opponents)")
        return equity

    def _showdown(self, hero: List[int], opponent_hands: List[List[int]], board: List[int]) -> int:
        """1 if hero wins, 0 on a tie, -1 if any opponent is better (lower Treys rank wins)."""
        hero_rank = self.evaluator.evaluate(hero, board)
        best_opponent = min(self.evaluator.evaluate(hand, board) for hand in opponent_hands)

        if best_opponent < hero_rank:
            return -1
        if best_opponent == hero_rank:
            return 0
        return 1

    def _run_uniform_batch(self, size: int, hero: List[int], board: List[int], deck: List[int],
                           opponents: int, rng: random.Random) -> Tuple[int, int]:
        """Simulate deals against opponents holding random cards."""
        missing = 5 - len(board)
        wins = ties = 0

        for _ in range(size):
            drawn = rng.sample(deck, missing + 2 * opponents)
            full_board = board + drawn[:missing]
            holdings = drawn[missing:]
            opponent_hands = [holdings[i:i + 2] for i in range(0, len(holdings), 2)]

            result = self._showdown(hero, opponent_hands, full_board)
            if result > 0:
                wins += 1
            elif result == 0:
                ties += 1

        return wins, ties

    def _build_range_sampler(self, opponent_range: OpponentRange,
                             known: set) -> Optional[Tuple[List[List[int]], np.ndarray]]:
        """
        Expand a weighted range into concrete combos with a cumulative weight table.

        Classes below MIN_CLASS_SHARE of the heaviest class are skipped. A range
        with zero total weight is treated as the full range.

        Returns:
            (combos, cumulative weights) or None when no combo survives
        """
        if opponent_range.total_weight() <= 0:
            logger.warning("Opponent range has zero weight, using the full range")
            opponent_range = range_model.full_range(opponent_range.player_id)

        floor = opponent_range.max_weight() * MIN_CLASS_SHARE
        combos: List[List[int]] = []
        weights: List[float] = []

        for wh in opponent_range.hands:
            if wh.weight < floor or wh.weight <= 0:
                continue
            for first, second in expand_combos(wh.hand):
                pair = [TreysCard.new(first), TreysCard.new(second)]
                if pair[0] in known or pair[1] in known:
                    continue
                combos.append(pair)
                weights.append(wh.weight)

        if not combos:
            return None

        return combos, np.cumsum(np.asarray(weights, dtype=float))

    def _run_weighted_batch(self, size: int, hero: List[int], board: List[int], deck: List[int],
                            sampler: Tuple[List[List[int]], np.ndarray],
                            rng: random.Random) -> Tuple[int, int]:
        """Simulate deals against one opponent drawn from a weighted range."""
        combos, cumulative = sampler
        total = float(cumulative[-1])
        missing = 5 - len(board)
        wins = ties = 0

        for _ in range(size):
            index = int(np.searchsorted(cumulative, rng.random() * total, side='right'))
            opponent = combos[min(index, len(combos) - 1)]

            remaining = [card for card in deck if card not in opponent]
            full_board = board + rng.sample(remaining, missing)

            result = self._showdown(hero, [opponent], full_board)
            if result > 0:
                wins += 1
            elif result == 0:
                ties += 1

        return wins, ties

    def calculate_pot_odds(self, pot_size: float, bet_to_call: float) -> float:
        """
        Calculate pot odds.

        Args:
            pot_size: Current pot size
            bet_to_call: Amount needed to call

        Returns:
            Pot odds as decimal (e.g., 0.25 for 25%)
        """
        if bet_to_call <= 0:
            return 0.0

        return bet_to_call / (pot_size + bet_to_call)

    def get_hand_rank(self, hole_cards: Sequence[CardLike], board_cards: Sequence[CardLike]) -> Tuple[int, str]:
        """
        Get the made-hand rank and class name.

        Args:
            hole_cards: Two hole cards
            board_cards: Three to five community cards

        Returns:
            Tuple of (Treys rank, hand class) where a lower rank is stronger
        """
        if len(hole_cards) != 2 or len(board_cards) < 3:
            return WORST_RANK, "Incomplete Hand"

        rank = self.evaluator.evaluate(self._cards_to_treys(hole_cards), self._cards_to_treys(board_cards))
        return rank, self.evaluator.class_to_string(self.evaluator.get_rank_class(rank))

    def get_hand_category(self, equity: float) -> str:
        """Coarse label for an equity percentage."""
        if equity >= 85:
            return "VERY STRONG"
        if equity >= 70:
            return "STRONG"
        if equity >= 55:
            return "GOOD"
        if equity >= 40:
            return "MARGINAL"
        if equity >= 25:
            return "WEAK"
        return "VERY WEAK"
