#!/usr/bin/env python3
"""
Shared fixtures for advisor tests.

Provides tracked-opponent statistics for each archetype, a patched Settings
store for the advisor components, and builders for decision snapshots.
"""

import pytest
from unittest.mock import patch
from src.models.action import Action
from src.models.game_state import GameState
from src.models.player import Player
from src.models.player_stats import PlayerStats


ADVISOR_SETTINGS = {
    "advisor.equity.trials": 2000,
    "advisor.equity.batch_size": 250,
    "advisor.preflop.three_bet_bluff_frequency": 0.4,
    "advisor.preflop.bb_bluff_frequency": 0.35,
    "advisor.preflop.four_bet_bluff_frequency": 0.3,
    "advisor.preflop.short_stack_bb": 25,
    "advisor.postflop.bet_fractions": [0.33, 0.5, 0.75, 1.0, 1.5],
    "advisor.decision.min_confidence": 0.5,
    "advisor.decision.equity_trials": 2000,
}

SETTINGS_TARGETS = [
    'src.advisor.equity_calculator.Settings',
    'src.advisor.preflop_engine.Settings',
    'src.advisor.postflop_solver.Settings',
    'src.advisor.decision_engine.Settings',
]


@pytest.fixture
def advisor_settings():
    """
    Patch Settings in every advisor component.

    Yields the values dict; change entries before constructing a component
    to override a setting for one test.
    """
    values = dict(ADVISOR_SETTINGS)
    patchers = [patch(target) for target in SETTINGS_TARGETS]
    for patcher in patchers:
        mock_settings = patcher.start()
        mock_settings.return_value.create.return_value = None
        mock_settings.return_value.get.side_effect = lambda key, fallback=None: values.get(key, fallback)

    yield values

    for patcher in patchers:
        patcher.stop()


@pytest.fixture
def nit_stats():
    return PlayerStats(player_name="nit", total_hands=100, vpip_hands=12, pfr_hands=10,
                       total_bets_raises=10, total_calls=10)


@pytest.fixture
def station_stats():
    return PlayerStats(player_name="station", total_hands=100, vpip_hands=50, pfr_hands=5,
                       total_bets_raises=5, total_calls=50)


@pytest.fixture
def lag_stats():
    return PlayerStats(player_name="lag", total_hands=100, vpip_hands=40, pfr_hands=30,
                       total_bets_raises=60, total_calls=20)


@pytest.fixture
def tag_stats():
    return PlayerStats(player_name="tag", total_hands=100, vpip_hands=22, pfr_hands=18,
                       total_bets_raises=20, total_calls=15)


@pytest.fixture
def loose_passive_stats():
    return PlayerStats(player_name="loose_passive", total_hands=100, vpip_hands=40, pfr_hands=15,
                       total_bets_raises=10, total_calls=20)


@pytest.fixture
def loose_stats():
    return PlayerStats(player_name="loose", total_hands=100, vpip_hands=40, pfr_hands=15,
                       total_bets_raises=40, total_calls=20)


@pytest.fixture
def regular_stats():
    return PlayerStats(player_name="regular", total_hands=100, vpip_hands=28, pfr_hands=20,
                       total_bets_raises=30, total_calls=20)


@pytest.fixture
def make_game_state():
    """Factory for snapshots with hero and any number of opponents."""
    def _make(hero_cards=("As", "Kd"), hero_position="BTN", hero_stack=100.0,
              opponents=(("v1", "BB", 100.0),), phase="preflop", board=(), pot=1.5,
              actions=(), to_call=0.0, stats=None, hand_id="hand-1"):
        stats = stats or {}
        players = [Player(player_id="hero", position=hero_position, stack=hero_stack,
                          hole_cards=list(hero_cards), is_hero=True)]
        for player_id, position, stack in opponents:
            players.append(Player(player_id=player_id, position=position, stack=stack,
                                  stats=stats.get(player_id)))
        return GameState(players=players, community_cards=list(board), pot=pot, phase=phase,
                         actions=list(actions), to_call=to_call, hand_id=hand_id)

    return _make


def act(player_id, action_type, amount=0.0, phase="preflop"):
    return Action(player_id=player_id, action_type=action_type, amount=amount, phase=phase)


@pytest.fixture
def action():
    """Shorthand Action builder."""
    return act
