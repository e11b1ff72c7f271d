"""Deck creation utilities for Mendikot."""

from __future__ import annotations

from itertools import count
from random import Random
from typing import Iterator, List, Optional

from .cards import RANK_ORDER, Card, Suit

DECK_SIZE = 52
DEAL_BATCHES = (5, 4, 4)


def build_deck(id_source: Optional[Iterator[int]] = None) -> List[Card]:
    """Return the ordered 52-card deck with fresh instance ids."""
    ids = id_source if id_source is not None else count()
    return [Card(suit, rank, next(ids)) for suit in Suit for rank in RANK_ORDER]


class Deck:
    """Shuffled 52-card pile dealt from the top."""

    def __init__(self, rng: Optional[Random] = None) -> None:
        self._rng = rng if rng is not None else Random()
        self._ids = count()
        self._cards: List[Card] = []
        self.reset()

    def reset(self) -> None:
        self._cards = build_deck(self._ids)
        self.shuffle()

    def shuffle(self) -> None:
        self._rng.shuffle(self._cards)

    def deal_batch(self, n: int) -> List[Card]:
        """Remove and return up to ``n`` cards; fewer if the deck runs out."""
        dealt = self._cards[:n]
        del self._cards[:n]
        return dealt

    def remaining(self) -> int:
        return len(self._cards)

    def cards(self) -> List[Card]:
        return list(self._cards)
