#!/usr/bin/env python3
"""
Unit tests for the models module in src/models/.

Tests the Pydantic models including validation, constraints,
cross-field validation, derived statistics and edge cases.
"""

import unittest
from pydantic import ValidationError

from src.models.card import Card
from src.models.action import Action
from src.models.player import Player, normalize_position, postflop_order
from src.models.player_stats import PlayerStats, PositionalVPIP, AGGRESSION_SENTINEL
from src.models.game_state import GameState
from src.models.decision import Decision, ActionEV
from src.models.opponent_range import OpponentRange, WeightedHand
from src.models.adjustments import ExploitAdjustment


class TestCard(unittest.TestCase):
    """Test Card model validation and functionality."""

    def test_valid_card_creation(self):
        """Test creating valid cards."""
        valid_ranks = ['A', 'K', 'Q', 'J', 'T', '9', '8', '7', '6', '5', '4', '3', '2']
        valid_suits = ['hearts', 'diamonds', 'clubs', 'spades']

        for rank in valid_ranks:
            for suit in valid_suits:
                card = Card(rank=rank, suit=suit)
                self.assertEqual(card.rank, rank)
                self.assertEqual(card.suit, suit)

    def test_invalid_rank_validation(self):
        """Test validation of invalid ranks."""
        for rank in ['1', '0', 'B', 'X', 'ace', '']:
            with self.assertRaises(ValidationError) as context:
                Card(rank=rank, suit='hearts')
            self.assertIn('Invalid rank', str(context.exception))

    def test_invalid_suit_validation(self):
        """Test validation of invalid suits."""
        for suit in ['heart', 'red', 'x', '']:
            with self.assertRaises(ValidationError) as context:
                Card(rank='A', suit=suit)
            self.assertIn('Invalid suit', str(context.exception))

    def test_ten_is_normalized(self):
        """Test that '10' is accepted as a ten."""
        self.assertEqual(Card(rank='10', suit='hearts').rank, 'T')

    def test_parse_short_identifiers(self):
        """Test parsing 'As', 'td' and '10h'."""
        self.assertEqual(Card.parse('As'), Card(rank='A', suit='spades'))
        self.assertEqual(Card.parse('td'), Card(rank='T', suit='diamonds'))
        self.assertEqual(Card.parse('10h'), Card(rank='T', suit='hearts'))

    def test_parse_rejects_garbage(self):
        """Test parsing invalid identifiers."""
        with self.assertRaises(ValueError):
            Card.parse('A')
        with self.assertRaises(ValidationError):
            Card.parse('Zx')

    def test_string_representation(self):
        """Test string representation of cards."""
        test_cases = [
            ('A', 'hearts', 'Ah'),
            ('K', 'diamonds', 'Kd'),
            ('Q', 'clubs', 'Qc'),
            ('T', 'spades', 'Ts'),
        ]

        for rank, suit, expected in test_cases:
            self.assertEqual(str(Card(rank=rank, suit=suit)), expected)

    def test_card_equality_and_hash(self):
        """Test equal cards compare and hash equal."""
        self.assertEqual(Card.parse('Ah'), Card(rank='A', suit='hearts'))
        self.assertEqual(len({Card.parse('Ah'), Card.parse('Ah'), Card.parse('Kh')}), 2)

    def test_rank_index(self):
        """Test rank ordering."""
        self.assertEqual(Card.parse('2c').rank_index, 0)
        self.assertEqual(Card.parse('Ac').rank_index, 12)


class TestAction(unittest.TestCase):
    """Test Action model validation."""

    def test_valid_action(self):
        action = Action(player_id='v1', action_type='raise', amount=2.5)
        self.assertEqual(action.phase, 'preflop')
        self.assertTrue(action.is_aggressive)

    def test_log_verbs_are_normalized(self):
        self.assertEqual(Action(player_id='v1', action_type='raises').action_type, 'raise')
        self.assertEqual(Action(player_id='v1', action_type='Calls').action_type, 'call')
        self.assertEqual(Action(player_id='v1', action_type='allin').action_type, 'all-in')

    def test_invalid_action_type(self):
        with self.assertRaises(ValidationError):
            Action(player_id='v1', action_type='shove')

    def test_negative_amount(self):
        with self.assertRaises(ValidationError):
            Action(player_id='v1', action_type='bet', amount=-1)

    def test_invalid_phase(self):
        with self.assertRaises(ValidationError):
            Action(player_id='v1', action_type='bet', phase='showdown')

    def test_describe(self):
        self.assertEqual(Action(player_id='v1', action_type='raise', amount=2.5).describe('CO'), 'CO raise 2.5 BB')
        self.assertEqual(Action(player_id='v1', action_type='fold').describe(), 'v1 fold')


class TestPlayerStats(unittest.TestCase):
    """Test derived statistics."""

    def test_empty_stats(self):
        stats = PlayerStats()
        self.assertEqual(stats.vpip(), 0.0)
        self.assertEqual(stats.pfr(), 0.0)
        self.assertEqual(stats.three_bet(), 0.0)
        self.assertEqual(stats.aggression_factor(), 0.0)

    def test_percentages_exclude_walks(self):
        stats = PlayerStats(total_hands=110, walks=10, vpip_hands=25, pfr_hands=20)
        self.assertAlmostEqual(stats.vpip(), 25.0)
        self.assertAlmostEqual(stats.pfr(), 20.0)

    def test_only_walks(self):
        stats = PlayerStats(total_hands=5, walks=5)
        self.assertEqual(stats.vpip(), 0.0)

    def test_three_bet(self):
        stats = PlayerStats(three_bet_hands=2, three_bet_opportunities=20)
        self.assertAlmostEqual(stats.three_bet(), 10.0)

    def test_aggression_factor(self):
        self.assertAlmostEqual(PlayerStats(total_bets_raises=30, total_calls=10).aggression_factor(), 3.0)
        self.assertEqual(PlayerStats(total_bets_raises=4).aggression_factor(), AGGRESSION_SENTINEL)

    def test_walks_cannot_exceed_hands(self):
        with self.assertRaises(ValidationError):
            PlayerStats(total_hands=3, walks=4)

    def test_positional_vpip(self):
        stats = PlayerStats(positional_vpip={'BTN': PositionalVPIP(hands=10, vpip=6)})
        self.assertEqual(stats.get_positional_vpip('BTN').vpip, 6)
        self.assertIsNone(stats.get_positional_vpip('UTG'))

    def test_positional_vpip_validation(self):
        with self.assertRaises(ValidationError):
            PositionalVPIP(hands=3, vpip=4)


class TestPlayer(unittest.TestCase):
    """Test Player model validation."""

    def test_valid_player_creation(self):
        player = Player(player_id='hero', position='BTN', stack=100, hole_cards=['As', 'Kd'], is_hero=True)
        self.assertEqual(player.hole_cards[0], Card.parse('As'))
        self.assertTrue(player.is_active)

    def test_position_alias(self):
        self.assertEqual(Player(player_id='p', position='BU', stack=10).position, 'BTN')

    def test_invalid_position(self):
        with self.assertRaises(ValidationError):
            Player(player_id='p', position='XX', stack=10)

    def test_stack_validation(self):
        with self.assertRaises(ValidationError):
            Player(player_id='p', stack=-1)

    def test_hole_cards_validation(self):
        with self.assertRaises(ValidationError):
            Player(player_id='p', stack=10, hole_cards=['As', 'Kd', 'Qh'])

    def test_position_helpers(self):
        self.assertEqual(normalize_position('bu'), 'BTN')
        self.assertIsNone(normalize_position(None))
        self.assertLess(postflop_order('SB'), postflop_order('BTN'))
        self.assertEqual(postflop_order('nowhere'), -1)


class TestDecision(unittest.TestCase):
    """Test Decision and ActionEV models."""

    def test_valid_action_ev(self):
        candidate = ActionEV(action='bet', sizing=5.0, ev=3.2)
        self.assertEqual(candidate.reasoning, '')

    def test_action_ev_validation(self):
        with self.assertRaises(ValidationError):
            ActionEV(action='jam', ev=0.0)
        with self.assertRaises(ValidationError):
            ActionEV(action='bet', sizing=-1, ev=0.0)

    def test_valid_decision_creation(self):
        decision = Decision(action='raise', sizing=2.5, confidence=0.9, reasoning='open')
        self.assertFalse(decision.is_deferral)
        self.assertEqual(decision.alternative_actions, [])

    def test_deferral(self):
        decision = Decision(action=None, confidence=0.0, reasoning='unknown spot')
        self.assertTrue(decision.is_deferral)

    def test_decision_validation(self):
        with self.assertRaises(ValidationError):
            Decision(action='raise', confidence=1.5, reasoning='x')
        with self.assertRaises(ValidationError):
            Decision(action='limp', confidence=0.5, reasoning='x')
        with self.assertRaises(ValidationError):
            Decision(action='call', confidence=0.5, reasoning='x', equity=120.0)


class TestOpponentRange(unittest.TestCase):
    """Test OpponentRange helpers."""

    def setUp(self):
        self.range = OpponentRange(player_id='v1', hands=[
            WeightedHand(hand='AA', weight=1.0),
            WeightedHand(hand='KK', weight=0.5),
        ])

    def test_weights(self):
        self.assertEqual(self.range.total_weight(), 1.5)
        self.assertEqual(self.range.max_weight(), 1.0)
        self.assertEqual(self.range.weight_of('KK'), 0.5)
        self.assertEqual(self.range.weight_of('QQ'), 0.0)

    def test_with_weights_returns_new_range(self):
        updated = self.range.with_weights({'AA': 0.2, 'KK': 0.1})
        self.assertEqual(updated.weight_of('AA'), 0.2)
        self.assertEqual(self.range.weight_of('AA'), 1.0)
        self.assertEqual(updated.player_id, 'v1')

    def test_duplicate_classes_rejected(self):
        with self.assertRaises(ValidationError):
            OpponentRange(hands=[WeightedHand(hand='AA', weight=1.0), WeightedHand(hand='AA', weight=0.5)])

    def test_weight_bounds(self):
        with self.assertRaises(ValidationError):
            WeightedHand(hand='AA', weight=1.5)

    def test_empty_range(self):
        self.assertEqual(OpponentRange(hands=[]).max_weight(), 0.0)


class TestExploitAdjustment(unittest.TestCase):

    def test_defaults_are_neutral(self):
        adjustment = ExploitAdjustment()
        self.assertEqual(adjustment.rfi_adjust, 0)
        self.assertFalse(adjustment.bluff_more)

    def test_extra_fields_forbidden(self):
        with self.assertRaises(ValidationError):
            ExploitAdjustment(fold_more=True)


class TestGameState(unittest.TestCase):
    """Test GameState model validation and helpers."""

    def setUp(self):
        self.hero = Player(player_id='hero', position='BTN', stack=100, hole_cards=['As', 'Kd'], is_hero=True)
        self.villain = Player(player_id='v1', position='BB', stack=60)
        self.folded = Player(player_id='v2', position='SB', stack=200, is_active=False)

    def _state(self, **kwargs):
        values = dict(players=[self.hero, self.villain, self.folded], pot=1.5, phase='preflop')
        values.update(kwargs)
        return GameState(**values)

    def test_valid_game_state_creation(self):
        state = self._state()
        self.assertEqual(state.get_hero().player_id, 'hero')
        self.assertEqual(state.get_player('v1').position, 'BB')
        self.assertIsNone(state.get_player('nobody'))

    def test_phase_validation(self):
        with self.assertRaises(ValidationError):
            self._state(phase='showdown')

    def test_community_cards_by_phase_validation(self):
        with self.assertRaises(ValidationError):
            self._state(community_cards=['2c', '3d', '4h'])
        with self.assertRaises(ValidationError):
            self._state(phase='flop', community_cards=['2c', '3d'])
        with self.assertRaises(ValidationError):
            self._state(phase='turn', community_cards=['2c', '3d', '4h'])

        state = self._state(phase='river', community_cards=['2c', '3d', '4h', '5s', '6c'])
        self.assertEqual(str(state.community_cards[-1]), '6c')

    def test_unique_ids(self):
        with self.assertRaises(ValidationError):
            self._state(players=[self.hero, Player(player_id='hero', stack=5)])

    def test_single_hero(self):
        other_hero = Player(player_id='h2', stack=5, is_hero=True)
        with self.assertRaises(ValidationError):
            self._state(players=[self.hero, other_hero])

    def test_player_count(self):
        with self.assertRaises(ValidationError):
            self._state(players=[self.hero])

    def test_actions_by_unknown_player(self):
        with self.assertRaises(ValidationError):
            self._state(actions=[Action(player_id='ghost', action_type='raise', amount=2.5)])

    def test_negative_pot(self):
        with self.assertRaises(ValidationError):
            self._state(pot=-1)

    def test_active_opponents_and_effective_stack(self):
        state = self._state()
        self.assertEqual([p.player_id for p in state.active_opponents()], ['v1'])
        self.assertEqual(state.effective_stack(), 60)

    def test_effective_stack_capped_by_hero(self):
        deep = Player(player_id='v1', position='BB', stack=500)
        state = self._state(players=[self.hero, deep])
        self.assertEqual(state.effective_stack(), 100)

    def test_street_actions(self):
        actions = [
            Action(player_id='v1', action_type='raise', amount=2.5),
            Action(player_id='v1', action_type='bet', amount=3, phase='flop'),
        ]
        state = self._state(phase='flop', community_cards=['2c', '3d', '4h'], actions=actions)
        self.assertEqual(len(state.street_actions()), 1)
        self.assertEqual(state.street_actions('preflop')[0].action_type, 'raise')

    def test_position_map(self):
        self.assertEqual(self._state().position_map(), {'hero': 'BTN', 'v1': 'BB', 'v2': 'SB'})


if __name__ == '__main__':
    unittest.main()
