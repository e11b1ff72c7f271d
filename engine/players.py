"""Seats and partnerships."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional, Sequence

from .cards import Card, Suit, has_suit, hand_sort_key

NUM_SEATS = 4


@dataclass(eq=False)
class Player:
    seat: int
    name: str
    hand: List[Card] = field(default_factory=list)

    def add_cards(self, cards: Iterable[Card]) -> None:
        self.hand.extend(cards)

    def remove_card(self, card: Card) -> bool:
        """Remove the exact card instance; return False if it is not held."""
        for index, held in enumerate(self.hand):
            if held == card:
                del self.hand[index]
                return True
        return False

    def holds(self, card: Card) -> bool:
        return card in self.hand

    def has_suit(self, suit: Optional[Suit]) -> bool:
        return has_suit(self.hand, suit)

    def clear_hand(self) -> None:
        self.hand.clear()

    def sort_hand(self) -> None:
        self.hand.sort(key=hand_sort_key)

    def __str__(self) -> str:
        return self.name


@dataclass(eq=False)
class Team:
    team_id: str
    name: str
    players: Sequence[Player]
    tricks_won: int = 0
    tens_captured: int = 0
    deals_won: int = 0

    def __post_init__(self) -> None:
        if len(self.players) != 2:
            raise ValueError("A team has exactly two players.")
        self.players = tuple(self.players)

    @property
    def seats(self) -> tuple[int, int]:
        return self.players[0].seat, self.players[1].seat

    def has_seat(self, seat: int) -> bool:
        return seat in self.seats

    def reset_deal_stats(self) -> None:
        self.tricks_won = 0
        self.tens_captured = 0


def next_seat(seat: int) -> int:
    return (seat + 1) % NUM_SEATS


def partner_seat(seat: int) -> int:
    return (seat + 2) % NUM_SEATS


def build_table(names: Sequence[str]) -> tuple[List[Player], List[Team]]:
    """Create four players; seats 0 and 2 partner against seats 1 and 3."""
    if len(names) != NUM_SEATS:
        raise ValueError("Mendikot is played by exactly four players.")
    players = [Player(seat=seat, name=name) for seat, name in enumerate(names)]
    teams = [
        Team("A", f"Team A ({players[0].name} & {players[2].name})", [players[0], players[2]]),
        Team("B", f"Team B ({players[1].name} & {players[3].name})", [players[1], players[3]]),
    ]
    return players, teams
