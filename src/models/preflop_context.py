#!/usr/bin/env python3
"""
PreflopContext model for the preflop betting round.

Immutable snapshot derived from the betting log each time hero has to act.
Never mutated in place: build a new one from the log with `from_actions`.
"""

import logging
from pydantic import BaseModel, Field
from typing import Dict, Iterable
from src.models.action import Action
from src.models.player import normalize_position, postflop_order

logger = logging.getLogger(__name__)

BLINDS_IN_POT = 1.5


class PreflopContext(BaseModel):
    """Snapshot of the preflop action facing hero."""
    is_rfi: bool = Field(False, description="No raise or limp before hero")
    facing_open: bool = Field(False, description="One raise in front, hero has not raised")
    facing_3bet: bool = Field(False, description="Hero raised and was re-raised once")
    facing_4bet: bool = Field(False, description="Hero re-raised and was raised again")
    facing_limp: bool = Field(False, description="Limpers and no raise")
    num_raises: int = Field(0, ge=0, description="Raises so far, hero's included")
    open_raiser_position: str = Field("", description="Position of the first raiser")
    aggressor_position: str = Field("", description="Position of the last opponent raiser")
    last_raise_size: float = Field(0.0, ge=0, description="Size of the last raise in big blinds")
    pot_size: float = Field(BLINDS_IN_POT, ge=0, description="Pot in big blinds")
    is_in_position: bool = Field(False, description="Hero acts after the aggressor postflop")
    players_in_pot: int = Field(2, ge=1, description="Players already committed to the pot")

    @classmethod
    def from_actions(cls, actions: Iterable[Action], hero_id: str, hero_position: str,
                     position_map: Dict[str, str]) -> "PreflopContext":
        """
        Derive the preflop context from the ordered betting log.

        Args:
            actions: Betting log (non-preflop entries are ignored)
            hero_id: Hero's player id
            hero_position: Hero's position label
            position_map: Player id -> position label

        Returns:
            Fresh PreflopContext
        """
        num_raises = 0
        open_raiser_position = ""
        aggressor_position = ""
        last_raise_size = 0.0
        pot_size = BLINDS_IN_POT
        players_in_pot = 2
        limped = False
        hero_raised = False
        hero_raised_last = False

        for action in actions:
            if action.phase != 'preflop' or action.action_type in ('post', 'fold', 'check'):
                continue

            # An all-in that does not exceed the current raise only calls it
            aggressive = action.is_aggressive and not (
                action.action_type == 'all-in' and action.amount <= last_raise_size
            )
            position = normalize_position(position_map.get(action.player_id, "")) or ""

            if action.player_id == hero_id:
                pot_size += action.amount
                if aggressive:
                    num_raises += 1
                    if num_raises == 1:
                        open_raiser_position = normalize_position(hero_position) or ""
                    hero_raised = True
                    hero_raised_last = True
                    last_raise_size = action.amount
                continue

            if aggressive:
                num_raises += 1
                if num_raises == 1:
                    open_raiser_position = position
                aggressor_position = position
                last_raise_size = action.amount
                pot_size += action.amount
                hero_raised_last = False
            else:
                pot_size += action.amount
                players_in_pot += 1
                if num_raises == 0:
                    limped = True

        facing_limp = limped and num_raises == 0
        reraised = hero_raised and not hero_raised_last

        context = cls(
            is_rfi=num_raises == 0 and not facing_limp,
            facing_open=num_raises == 1 and not hero_raised,
            facing_3bet=num_raises == 2 and reraised,
            facing_4bet=num_raises >= 3 and reraised,
            facing_limp=facing_limp,
            num_raises=num_raises,
            open_raiser_position=open_raiser_position,
            aggressor_position=aggressor_position,
            last_raise_size=last_raise_size,
            pot_size=pot_size,
            is_in_position=postflop_order(hero_position) > postflop_order(aggressor_position),
            players_in_pot=players_in_pot,
        )
        logger.debug(f"Preflop context for {hero_position}: {context}")
        return context

    class Config:
        frozen = True
        extra = "forbid"
