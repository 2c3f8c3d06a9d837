#!/usr/bin/env python3
"""
GameState model for complete decision snapshot.

Complete snapshot of the hand at hero's decision point with validation.
Includes cross-field validation for community cards vs phase, unique player
ids, a single hero, and that every logged action belongs to a seated player.
"""

from pydantic import BaseModel, Field, field_validator, model_validator
from typing import List, Optional
from src.models.action import Action
from src.models.card import Card
from src.models.player import Player


class GameState(BaseModel):
    """Complete poker game state snapshot (amounts in big blinds)."""
    players: List[Player] = Field(..., min_length=2, max_length=9, description="Players at table")
    community_cards: List[Card] = Field(default_factory=list, description="Community cards")
    pot: float = Field(..., ge=0, description="Total pot size in big blinds")
    phase: str = Field(..., description="Game phase (preflop/flop/turn/river)")
    actions: List[Action] = Field(default_factory=list, description="Ordered betting log for this hand")
    to_call: float = Field(0.0, ge=0, description="Amount hero must call, in big blinds")
    hand_id: Optional[str] = Field(None, description="Unique hand identifier")

    @field_validator('phase')
    @classmethod
    def validate_phase(cls, v):
        valid_phases = ['preflop', 'flop', 'turn', 'river']
        if v not in valid_phases:
            raise ValueError(f'Invalid phase: {v}. Must be one of {valid_phases}')
        return v

    @field_validator('community_cards', mode='before')
    @classmethod
    def validate_community_cards(cls, v):
        if len(v) > 5:
            raise ValueError('Cannot have more than 5 community cards')
        return [Card.parse(card) if isinstance(card, str) else card for card in v]

    @model_validator(mode='after')
    def validate_community_cards_by_phase(self):
        phase = self.phase
        card_count = len(self.community_cards)

        if phase == 'preflop' and card_count > 0:
            raise ValueError('Preflop cannot have community cards')
        elif phase == 'flop' and card_count != 3:
            raise ValueError('Flop must have exactly 3 community cards')
        elif phase == 'turn' and card_count != 4:
            raise ValueError('Turn must have exactly 4 community cards')
        elif phase == 'river' and card_count != 5:
            raise ValueError('River must have exactly 5 community cards')

        return self

    @field_validator('players')
    @classmethod
    def validate_unique_ids(cls, v):
        player_ids = [p.player_id for p in v]
        if len(player_ids) != len(set(player_ids)):
            raise ValueError('Players must have unique ids')
        return v

    @field_validator('players')
    @classmethod
    def validate_single_hero(cls, v):
        hero_count = sum(1 for p in v if p.is_hero)
        if hero_count > 1:
            raise ValueError('Cannot have more than one hero player')
        return v

    @model_validator(mode='after')
    def validate_action_actors(self):
        seated = {p.player_id for p in self.players}
        for action in self.actions:
            if action.player_id not in seated:
                raise ValueError(f'Action by unknown player: {action.player_id}')
        return self

    def get_hero(self) -> Optional[Player]:
        """Get the hero player."""
        for player in self.players:
            if player.is_hero:
                return player
        return None

    def get_player(self, player_id: str) -> Optional[Player]:
        """Get player by id."""
        for player in self.players:
            if player.player_id == player_id:
                return player
        return None

    def active_opponents(self) -> List[Player]:
        """Opponents still in the hand."""
        return [p for p in self.players if p.is_active and not p.is_hero]

    def position_map(self) -> dict:
        """Player id -> position for every seated player with a known position."""
        return {p.player_id: p.position for p in self.players if p.position}

    def street_actions(self, phase: Optional[str] = None) -> List[Action]:
        """Logged actions for one street (defaults to the current phase)."""
        street = phase or self.phase
        return [a for a in self.actions if a.phase == street]

    def effective_stack(self) -> float:
        """Hero stack capped by the deepest active opponent."""
        hero = self.get_hero()
        if not hero:
            return 0.0
        opponent_stacks = [p.stack for p in self.active_opponents()]
        if not opponent_stacks:
            return hero.stack
        return min(hero.stack, max(opponent_stacks))

    class Config:
        validate_assignment = True
        extra = "forbid"
