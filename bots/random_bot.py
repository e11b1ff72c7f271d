"""Random baseline bot (low difficulty)."""

from __future__ import annotations

from typing import List

from engine.actions import VisibleState
from engine.cards import Card

from .base import BotStrategy


class RandomBot(BotStrategy):
    name = "Random"

    def choose_hidden_trump(self, hand: List[Card]) -> Card:
        return self._rng.choice(hand)

    def wants_reveal(self, hand: List[Card], state: VisibleState) -> bool:
        return self._rng.random() < 0.5

    def choose_trump_play(self, hand: List[Card], state: VisibleState, legal: List[Card], *, obligated: bool) -> Card:
        return self._rng.choice(legal)

    def choose_lead(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        return self._rng.choice(legal)

    def choose_follow(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        return self._rng.choice(legal)

    def choose_void(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        return self._rng.choice(legal)
