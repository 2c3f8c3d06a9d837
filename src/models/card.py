#!/usr/bin/env python3
"""
Card model for representing playing cards with validation.

Represents a single playing card with rank and suit validation. Cards arrive
from the betting log and the board as short identifiers ("As", "Td", "10h");
`Card.parse` turns those into validated models and `str(card)` gives the
canonical two-character form the hand evaluator expects.
"""

from typing import Union
from pydantic import BaseModel, Field, field_validator


RANKS = ['2', '3', '4', '5', '6', '7', '8', '9', 'T', 'J', 'Q', 'K', 'A']
SUIT_NAMES = {'c': 'clubs', 'd': 'diamonds', 'h': 'hearts', 's': 'spades'}
SUIT_LETTERS = {name: letter for letter, name in SUIT_NAMES.items()}


class Card(BaseModel):
    """Represents a playing card with rank and suit."""
    rank: str = Field(..., description="Card rank (A, K, Q, J, T, 9-2)")
    suit: str = Field(..., description="Card suit (hearts, diamonds, clubs, spades)")

    @field_validator('rank')
    @classmethod
    def validate_rank(cls, v):
        if v == '10':
            v = 'T'
        if v not in RANKS:
            raise ValueError(f'Invalid rank: {v}. Must be one of {RANKS}')
        return v

    @field_validator('suit')
    @classmethod
    def validate_suit(cls, v):
        v = SUIT_NAMES.get(v, v)
        if v not in SUIT_LETTERS:
            raise ValueError(f'Invalid suit: {v}. Must be one of {list(SUIT_LETTERS)}')
        return v

    @classmethod
    def parse(cls, card: Union[str, "Card"]) -> "Card":
        """
        Build a Card from a short identifier.

        Args:
            card: Identifier such as "As", "Td" or "10h", or an existing Card

        Returns:
            Validated Card
        """
        if isinstance(card, Card):
            return card

        text = card.strip()
        if len(text) < 2:
            raise ValueError(f'Invalid card identifier: {card!r}')

        return cls(rank=text[:-1].upper(), suit=text[-1].lower())

    @property
    def rank_index(self) -> int:
        """Rank position in 2..A order (deuce = 0, ace = 12)."""
        return RANKS.index(self.rank)

    def __str__(self) -> str:
        """String representation (e.g., 'Ah' for Ace of hearts)."""
        return f"{self.rank}{SUIT_LETTERS[self.suit]}"

    def __hash__(self) -> int:
        return hash((self.rank, self.suit))

    class Config:
        validate_assignment = True
        extra = "forbid"
