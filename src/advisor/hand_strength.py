#!/usr/bin/env python3
"""
Preflop hand-strength table for the 169 canonical starting hands.

Scores are integer percentiles (0-100) taken from solver-derived 6-max
charts. Every preflop threshold in the advisor is expressed against this
scale, so the values are calibration data: change them only together with
the thresholds in preflop_engine and range_model.

Hand classes use high-rank-first notation: "AA", "AKs", "AKo".
"""

import logging
from typing import Dict, List, Tuple, Union
from src.models.card import Card, RANKS, SUIT_NAMES

logger = logging.getLogger(__name__)

DEFAULT_STRENGTH = 30

HAND_STRENGTH: Dict[str, int] = {
    # Pocket pairs
    'AA': 100, 'KK': 99, 'QQ': 98, 'JJ': 96, 'TT': 93, '99': 88, '88': 83,
    '77': 78, '66': 72, '55': 66, '44': 60, '33': 54, '22': 48,

    # Suited
    'AKs': 97, 'AQs': 94, 'AJs': 91, 'ATs': 87, 'A9s': 79, 'A8s': 75, 'A7s': 73,
    'A6s': 70, 'A5s': 74, 'A4s': 71, 'A3s': 68, 'A2s': 65,
    'KQs': 92, 'KJs': 89, 'KTs': 85, 'K9s': 77, 'K8s': 69, 'K7s': 64, 'K6s': 62,
    'K5s': 58, 'K4s': 55, 'K3s': 52, 'K2s': 49,
    'QJs': 90, 'QTs': 86, 'Q9s': 76, 'Q8s': 67, 'Q7s': 59, 'Q6s': 57, 'Q5s': 53,
    'Q4s': 50, 'Q3s': 47, 'Q2s': 44,
    'JTs': 88, 'J9s': 80, 'J8s': 71, 'J7s': 61, 'J6s': 56, 'J5s': 51, 'J4s': 46,
    'J3s': 42, 'J2s': 38,
    'T9s': 82, 'T8s': 74, 'T7s': 63, 'T6s': 55, 'T5s': 47, 'T4s': 43, 'T3s': 39,
    'T2s': 35,
    '98s': 81, '97s': 72, '96s': 60, '95s': 52, '94s': 44, '93s': 40, '92s': 36,
    '87s': 78, '86s': 68, '85s': 57, '84s': 48, '83s': 41, '82s': 37,
    '76s': 75, '75s': 64, '74s': 53, '73s': 45, '72s': 38,
    '65s': 73, '64s': 61, '63s': 50, '62s': 43,
    '54s': 70, '53s': 58, '52s': 49,
    '43s': 56, '42s': 46,
    '32s': 51,

    # Offsuit
    'AKo': 95, 'AQo': 90, 'AJo': 86, 'ATo': 82, 'A9o': 73, 'A8o': 69, 'A7o': 66,
    'A6o': 63, 'A5o': 67, 'A4o': 62, 'A3o': 59, 'A2o': 56,
    'KQo': 87, 'KJo': 83, 'KTo': 79, 'K9o': 70, 'K8o': 61, 'K7o': 55, 'K6o': 52,
    'K5o': 48, 'K4o': 44, 'K3o': 40, 'K2o': 37,
    'QJo': 84, 'QTo': 80, 'Q9o': 68, 'Q8o': 58, 'Q7o': 50, 'Q6o': 46, 'Q5o': 42,
    'Q4o': 38, 'Q3o': 34, 'Q2o': 30,
    'JTo': 81, 'J9o': 71, 'J8o': 60, 'J7o': 51, 'J6o': 45, 'J5o': 41, 'J4o': 36,
    'J3o': 32, 'J2o': 28,
    'T9o': 76, 'T8o': 65, 'T7o': 54, 'T6o': 47, 'T5o': 39, 'T4o': 35, 'T3o': 31,
    'T2o': 27,
    '98o': 74, '97o': 63, '96o': 53, '95o': 43, '94o': 36, '93o': 33, '92o': 29,
    '87o': 70, '86o': 59, '85o': 49, '84o': 40, '83o': 34, '82o': 31,
    '76o': 67, '75o': 57, '74o': 46, '73o': 38, '72o': 32,
    '65o': 64, '64o': 52, '63o': 44, '62o': 37,
    '54o': 61, '53o': 50, '52o': 42,
    '43o': 48, '42o': 41,
    '32o': 45,
}


def _build_all_hands() -> List[str]:
    high_first = list(reversed(RANKS))
    pairs = [r + r for r in high_first]
    suited = []
    offsuit = []
    for i, high in enumerate(high_first):
        for low in high_first[i + 1:]:
            suited.append(f"{high}{low}s")
            offsuit.append(f"{high}{low}o")
    return pairs + suited + offsuit


# Pairs, then suited, then offsuit; each from the top down
ALL_HANDS: List[str] = _build_all_hands()


def strength_of(hand: str) -> int:
    """
    Get the preflop strength percentile of a hand class.

    Args:
        hand: Canonical hand class (e.g. 'AKs')

    Returns:
        Strength 0-100, DEFAULT_STRENGTH for anything unknown
    """
    return HAND_STRENGTH.get(hand, DEFAULT_STRENGTH)


def hand_class(card1: Union[str, Card], card2: Union[str, Card]) -> str:
    """
    Convert two hole cards into canonical hand-class notation.

    Args:
        card1: First card ("As", "10h" or a Card)
        card2: Second card

    Returns:
        Hand class with the higher rank first ('AA', 'AKs', 'T9o')
    """
    first = Card.parse(card1)
    second = Card.parse(card2)

    if first.rank_index < second.rank_index:
        first, second = second, first

    if first.rank == second.rank:
        return first.rank + second.rank

    suffix = 's' if first.suit == second.suit else 'o'
    return f"{first.rank}{second.rank}{suffix}"


def is_pair(hand: str) -> bool:
    """Pocket pair class."""
    return len(hand) == 2 and hand[0] == hand[1]


def is_suited(hand: str) -> bool:
    """Suited class."""
    return len(hand) == 3 and hand[2] == 's'


def expand_combos(hand: str) -> List[Tuple[str, str]]:
    """
    Expand a hand class into its concrete two-card combos.

    Args:
        hand: Canonical hand class

    Returns:
        List of card-string pairs: 6 for pairs, 4 suited, 12 offsuit.
        Unparseable classes give an empty list.
    """
    suits = list(SUIT_NAMES)

    if is_pair(hand) and hand[0] in RANKS:
        rank = hand[0]
        return [(rank + suits[i], rank + suits[j])
                for i in range(4) for j in range(i + 1, 4)]

    if len(hand) != 3 or hand[0] not in RANKS or hand[1] not in RANKS or hand[2] not in 'so':
        logger.warning(f"Cannot expand hand class: {hand}")
        return []

    high, low = hand[0], hand[1]
    if is_suited(hand):
        return [(high + s, low + s) for s in suits]
    return [(high + s1, low + s2) for s1 in suits for s2 in suits if s1 != s2]
