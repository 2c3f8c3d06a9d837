#!/usr/bin/env python3
"""
Decision Engine for hero's recommendations.

Central coordinator that owns the per-hand range tracker, narrows opponent
ranges as actions are observed, and routes each decision to the preflop
charts or to the postflop EV solver fed by a Monte Carlo equity estimate.
Decisions below the configured confidence are flagged for escalation to
the caller's fallback reasoner.
"""

import logging
import random
from typing import List, Optional
from src.advisor.equity_calculator import EquityCalculator
from src.advisor.postflop_solver import PostflopSolver
from src.advisor.preflop_engine import PreflopEngine
from src.advisor.range_model import NarrowingContext
from src.advisor.range_tracker import RangeTracker
from src.models.action import Action
from src.models.decision import Decision
from src.models.game_state import GameState
from src.models.player import Player, postflop_order
from src.models.player_stats import PlayerStats
from src.models.preflop_context import PreflopContext
from src.config.settings import Settings

logger = logging.getLogger(__name__)

DEFAULT_BET_FRACTION = 0.5


class DecisionEngine:
    """Central decision engine for hero's recommendations."""

    def __init__(self, equity_calculator: Optional[EquityCalculator] = None,
                 preflop_engine: Optional[PreflopEngine] = None,
                 postflop_solver: Optional[PostflopSolver] = None):
        """Initialize decision engine with all advisor components."""
        self.settings = Settings()

        self.equity_calculator = equity_calculator or EquityCalculator()
        self.preflop_engine = preflop_engine or PreflopEngine()
        self.postflop_solver = postflop_solver or PostflopSolver()

        self.settings.create("advisor.decision.min_confidence", default=0.5)
        self.settings.create("advisor.decision.equity_trials", default=2000)

        self.min_confidence = self.settings.get("advisor.decision.min_confidence")
        self.equity_trials = self.settings.get("advisor.decision.equity_trials")

        self.range_tracker: Optional[RangeTracker] = None

        logger.info("Initialized decision engine with all components")

    def start_hand(self, hand_id: Optional[str] = None) -> RangeTracker:
        """Begin a hand with an empty range tracker."""
        self.range_tracker = RangeTracker(hand_id)
        logger.debug(f"Started hand {hand_id}")
        return self.range_tracker

    def end_hand(self) -> None:
        """Discard every per-hand range."""
        if self.range_tracker is not None:
            self.range_tracker.reset()
        self.range_tracker = None

    def observe_action(self, action: Action, game_state: GameState) -> None:
        """
        Narrow the acting opponent's range for an observed action.

        Hero's own actions, blind posts, folds and actions by unknown players
        are ignored.

        Args:
            action: Observed action
            game_state: Snapshot the action belongs to
        """
        if action.action_type in ('post', 'fold'):
            return

        actor = game_state.get_player(action.player_id)
        if actor is None or actor.is_hero:
            return

        if self.range_tracker is None:
            self.start_hand(game_state.hand_id)

        prior = self._street_before(action, game_state)
        raiser = self._last_raiser(actor, prior, game_state)
        reference = raiser if raiser is not None else game_state.get_hero()
        in_position = True
        if reference is not None:
            in_position = postflop_order(actor.position) > postflop_order(reference.position)

        if game_state.pot > 0 and action.amount > 0:
            bet_fraction = action.amount / game_state.pot
        else:
            bet_fraction = DEFAULT_BET_FRACTION

        context = NarrowingContext(
            street=action.phase,
            position=actor.position,
            prior_raises=sum(1 for a in prior if a.is_aggressive),
            bet_fraction=bet_fraction,
            in_position=in_position,
            stats=actor.stats
        )
        logger.debug(f"Observed {action.describe(actor.position)}")
        self.range_tracker.apply_action(actor.player_id, action.action_type, context)

    def _street_before(self, action: Action, game_state: GameState) -> List[Action]:
        """Logged actions on the street before this one."""
        street = game_state.street_actions(action.phase)
        if action in street:
            street = street[:street.index(action)]
        return street

    def _last_raiser(self, actor: Player, prior: List[Action], game_state: GameState) -> Optional[Player]:
        """Most recent other player to bet or raise; position is judged against them."""
        for earlier in reversed(prior):
            if earlier.is_aggressive and earlier.player_id != actor.player_id:
                return game_state.get_player(earlier.player_id)
        return None

    def get_recommendation(self, game_state: GameState, rng: Optional[random.Random] = None) -> Decision:
        """
        Get the recommendation for hero's current decision.

        Args:
            game_state: Snapshot at hero's decision point
            rng: Random source shared by equity sampling and mixed strategies

        Returns:
            Decision (action None when the spot is not covered)

        Raises:
            ValueError: If there is no hero or hero has fewer than two hole cards
        """
        hero = game_state.get_hero()
        if hero is None:
            logger.error("No hero found in game state")
            raise ValueError("Game state has no hero")

        if len(hero.hole_cards) < 2:
            logger.error(f"Hero has {len(hero.hole_cards)} hole cards, need 2")
            raise ValueError(f"Hero needs two hole cards, got {len(hero.hole_cards)}")

        if game_state.phase == 'preflop':
            return self._preflop_decision(game_state, hero, rng)
        return self._postflop_decision(game_state, hero, rng)

    def _preflop_decision(self, game_state: GameState, hero: Player,
                          rng: Optional[random.Random]) -> Decision:
        """Chart-based decision from the preflop betting log."""
        context = PreflopContext.from_actions(
            game_state.street_actions('preflop'),
            hero.player_id,
            hero.position or "",
            game_state.position_map()
        )
        stack = game_state.effective_stack()
        stats = self._opponent_stats(game_state, 'preflop')

        logger.info(f"Preflop decision from {hero.position}, {stack:.1f} BB effective, "
                    f"{context.num_raises} raises, {context.players_in_pot} in pot")

        return self.preflop_engine.get_action(
            hero.hole_cards, hero.position or "", stack, context, stats, rng
        )

    def _postflop_decision(self, game_state: GameState, hero: Player,
                           rng: Optional[random.Random]) -> Decision:
        """EV decision from simulated equity."""
        opponents = game_state.active_opponents()
        opponent_range = None

        if len(opponents) == 1 and self.range_tracker is not None:
            opponent_range = self.range_tracker.get_range(opponents[0].player_id)

        equity = self.equity_calculator.calculate_equity(
            hero.hole_cards,
            game_state.community_cards,
            opponents=max(len(opponents), 1),
            opponent_range=opponent_range,
            trials=self.equity_trials,
            rng=rng
        )

        logger.info(f"Postflop decision on {game_state.phase}: equity {equity:.1f}% "
                    f"vs {'tracked range' if opponent_range is not None else f'{len(opponents)} random'}")

        return self.postflop_solver.get_recommendation(
            equity=equity,
            pot=game_state.pot,
            stack=game_state.effective_stack(),
            street=game_state.phase,
            facing_bet=game_state.to_call > 0,
            to_call=game_state.to_call,
            opponent_stats=self._opponent_stats(game_state, game_state.phase)
        )

    def _opponent_stats(self, game_state: GameState, phase: str) -> Optional[PlayerStats]:
        """Stats of the last opponent to bet or raise on a street, else of the only opponent."""
        aggressors: List[Player] = []
        for action in game_state.street_actions(phase):
            player = game_state.get_player(action.player_id)
            if action.is_aggressive and player is not None and not player.is_hero:
                aggressors.append(player)

        if aggressors:
            return aggressors[-1].stats

        opponents = game_state.active_opponents()
        if len(opponents) == 1:
            return opponents[0].stats
        return None

    def should_escalate(self, decision: Decision) -> bool:
        """True when the decision should go to the fallback reasoner."""
        return decision.action is None or decision.confidence < self.min_confidence
