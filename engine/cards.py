"""Card-related data structures and helpers for Mendikot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Mapping, Optional, Tuple


class Suit(Enum):
    HEARTS = "hearts"
    DIAMONDS = "diamonds"
    CLUBS = "clubs"
    SPADES = "spades"

    def __str__(self) -> str:
        return self.value

    @property
    def symbol(self) -> str:
        return SUIT_SYMBOLS[self]


class Rank(Enum):
    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        return self.name.lower()

    @property
    def is_ten(self) -> bool:
        return self is Rank.TEN

    @property
    def symbol(self) -> str:
        return RANK_SYMBOLS.get(self, str(self.value))


SUIT_SYMBOLS: dict[Suit, str] = {
    Suit.HEARTS: "♥",
    Suit.DIAMONDS: "♦",
    Suit.CLUBS: "♣",
    Suit.SPADES: "♠",
}

RANK_SYMBOLS: dict[Rank, str] = {
    Rank.ACE: "A",
    Rank.KING: "K",
    Rank.QUEEN: "Q",
    Rank.JACK: "J",
    Rank.TEN: "10",
}

# Rank order from lowest to highest for trick resolution.
RANK_ORDER: list[Rank] = sorted(Rank, key=lambda rank: rank.value)

SUIT_ORDER: list[Suit] = list(Suit)


@dataclass(frozen=True)
class Card:
    """Immutable playing card.

    ``instance_id`` is issued by the deck that created the card and is unique
    for that deck's lifetime, across resets.
    """

    suit: Suit
    rank: Rank
    instance_id: int = -1

    def __str__(self) -> str:
        return f"{self.rank.symbol}{self.suit.symbol}"

    @property
    def face(self) -> Tuple[Suit, Rank]:
        """Suit and rank without the instance identity."""
        return self.suit, self.rank


def hand_sort_key(card: Card) -> Tuple[int, int]:
    """Sort by suit, then descending rank."""
    return SUIT_ORDER.index(card.suit), -card.rank.value


def cards_of_suit(cards: Iterable[Card], suit: Optional[Suit]) -> list[Card]:
    if suit is None:
        return []
    return [card for card in cards if card.suit is suit]


def has_suit(cards: Iterable[Card], suit: Optional[Suit]) -> bool:
    return suit is not None and any(card.suit is suit for card in cards)


def count_tens(cards: Iterable[Card]) -> int:
    return sum(1 for card in cards if card.rank.is_ten)


def serialize_card(card: Card) -> dict:
    return {"rank": card.rank.name.lower(), "suit": card.suit.value, "id": card.instance_id}


def deserialize_card(payload: Mapping) -> Card:
    rank_name = str(payload["rank"]).upper()
    suit_name = str(payload["suit"]).upper()
    return Card(Suit[suit_name], Rank[rank_name], int(payload.get("id", -1)))


def card_label(card: Card) -> str:
    return f"{card.rank.name.title()} of {card.suit.name.title()}"
