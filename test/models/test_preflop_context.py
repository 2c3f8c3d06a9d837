#!/usr/bin/env python3
"""
Unit tests for PreflopContext derivation from the betting log.
"""

import unittest
from pydantic import ValidationError

from src.models.action import Action
from src.models.preflop_context import PreflopContext


POSITIONS = {
    'sb': 'SB', 'bb': 'BB', 'utg': 'UTG', 'mp': 'MP',
    'hj': 'HJ', 'co': 'CO', 'btn': 'BTN', 'hero': 'BTN',
}


def raise_(player_id, amount):
    return Action(player_id=player_id, action_type='raise', amount=amount)


def call(player_id, amount):
    return Action(player_id=player_id, action_type='call', amount=amount)


def fold(player_id):
    return Action(player_id=player_id, action_type='fold')


class TestPreflopContext(unittest.TestCase):
    """Test the classification of preflop situations."""

    def context(self, actions, hero_position='BTN', positions=None):
        position_map = dict(POSITIONS if positions is None else positions)
        position_map['hero'] = hero_position
        return PreflopContext.from_actions(actions, 'hero', hero_position, position_map)

    def test_unopened_pot(self):
        context = self.context([fold('utg'), fold('mp'), fold('co')])

        self.assertTrue(context.is_rfi)
        self.assertFalse(context.facing_open)
        self.assertEqual(context.num_raises, 0)
        self.assertEqual(context.pot_size, 1.5)
        self.assertEqual(context.players_in_pot, 2)

    def test_blind_posts_are_ignored(self):
        actions = [
            Action(player_id='sb', action_type='post', amount=0.5),
            Action(player_id='bb', action_type='post', amount=1.0),
        ]
        context = self.context(actions)

        self.assertTrue(context.is_rfi)
        self.assertEqual(context.pot_size, 1.5)

    def test_facing_single_open(self):
        context = self.context([raise_('utg', 2.5), fold('mp')])

        self.assertTrue(context.facing_open)
        self.assertFalse(context.is_rfi)
        self.assertEqual(context.num_raises, 1)
        self.assertEqual(context.open_raiser_position, 'UTG')
        self.assertEqual(context.aggressor_position, 'UTG')
        self.assertEqual(context.last_raise_size, 2.5)
        self.assertEqual(context.pot_size, 4.0)
        self.assertTrue(context.is_in_position)

    def test_open_with_caller(self):
        context = self.context([raise_('utg', 2.5), call('mp', 2.5)])

        self.assertTrue(context.facing_open)
        self.assertEqual(context.players_in_pot, 3)
        self.assertEqual(context.pot_size, 6.5)

    def test_limped_pot(self):
        context = self.context([call('utg', 1.0), call('co', 1.0)])

        self.assertTrue(context.facing_limp)
        self.assertFalse(context.is_rfi)
        self.assertEqual(context.num_raises, 0)
        self.assertEqual(context.players_in_pot, 4)

    def test_facing_three_bet(self):
        actions = [raise_('hero', 2.5), raise_('btn', 8.0)]
        context = self.context(actions, hero_position='CO', positions={'btn': 'BTN'})

        self.assertTrue(context.facing_3bet)
        self.assertFalse(context.facing_open)
        self.assertEqual(context.num_raises, 2)
        self.assertEqual(context.open_raiser_position, 'CO')
        self.assertEqual(context.aggressor_position, 'BTN')
        self.assertEqual(context.last_raise_size, 8.0)
        self.assertFalse(context.is_in_position)

    def test_facing_four_bet(self):
        actions = [raise_('hero', 2.5), raise_('bb', 10.0), raise_('hero', 22.0),
                   Action(player_id='bb', action_type='all-in', amount=100.0)]
        context = self.context(actions)

        self.assertTrue(context.facing_4bet)
        self.assertFalse(context.facing_3bet)
        self.assertEqual(context.num_raises, 4)
        self.assertEqual(context.last_raise_size, 100.0)
        self.assertTrue(context.is_in_position)

    def test_hero_raised_last_is_not_facing_anything(self):
        context = self.context([raise_('utg', 2.5), raise_('hero', 8.0)])

        self.assertFalse(context.facing_open)
        self.assertFalse(context.facing_3bet)
        self.assertFalse(context.facing_4bet)

    def test_cold_three_bet_is_unclassified(self):
        context = self.context([raise_('utg', 2.5), raise_('co', 8.0)])

        self.assertEqual(context.num_raises, 2)
        self.assertFalse(context.is_rfi)
        self.assertFalse(context.facing_open)
        self.assertFalse(context.facing_3bet)
        self.assertEqual(context.open_raiser_position, 'UTG')
        self.assertEqual(context.aggressor_position, 'CO')

    def test_short_all_in_counts_as_call(self):
        actions = [raise_('utg', 2.5), Action(player_id='sb', action_type='all-in', amount=2.0)]
        context = self.context(actions)

        self.assertTrue(context.facing_open)
        self.assertEqual(context.num_raises, 1)
        self.assertEqual(context.players_in_pot, 3)

    def test_postflop_actions_are_ignored(self):
        actions = [raise_('utg', 2.5), Action(player_id='utg', action_type='bet', amount=3.0, phase='flop')]
        context = self.context(actions)

        self.assertEqual(context.num_raises, 1)
        self.assertEqual(context.pot_size, 4.0)

    def test_unknown_aggressor_position(self):
        context = self.context([raise_('stranger', 2.5)])

        self.assertTrue(context.facing_open)
        self.assertEqual(context.aggressor_position, '')
        self.assertTrue(context.is_in_position)

    def test_context_is_immutable(self):
        context = self.context([])
        with self.assertRaises(ValidationError):
            context.is_rfi = False


if __name__ == '__main__':
    unittest.main()
