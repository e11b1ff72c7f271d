"""Trick representation and resolution."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Optional, Sequence, Tuple

from .cards import Card, Suit
from .players import NUM_SEATS, next_seat
from .errors import InvariantBroken


class TrickError(InvariantBroken):
    """Raised when trick play breaks ordering constraints."""


def counts_as_trump(index: int, card: Card, trump: Optional[Suit], reveal_index: Optional[int]) -> bool:
    """Cards played before a mid-trick reveal never count as trump."""
    if trump is None or card.suit is not trump:
        return False
    return reveal_index is None or index >= reveal_index


def winning_index(
    plays: Sequence[Tuple[int, Card]],
    trump: Optional[Suit],
    reveal_index: Optional[int] = None,
) -> int:
    """Return the position in ``plays`` of the card currently winning."""
    if not plays:
        raise TrickError("Cannot determine winner on empty trick.")
    led = plays[0][1].suit
    best = 0
    best_trump = counts_as_trump(0, plays[0][1], trump, reveal_index)
    for index in range(1, len(plays)):
        card = plays[index][1]
        best_card = plays[best][1]
        is_trump = counts_as_trump(index, card, trump, reveal_index)
        if best_trump:
            if is_trump and card.rank.value > best_card.rank.value:
                best = index
        elif is_trump:
            best, best_trump = index, True
        elif card.suit is led and card.rank.value > best_card.rank.value:
            best = index
    return best


@dataclass
class Trick:
    leader: int
    plays: List[Tuple[int, Card]] = field(default_factory=list)
    # Number of cards already on the table when trump was revealed during this trick.
    reveal_index: Optional[int] = None

    def is_empty(self) -> bool:
        return not self.plays

    def is_full(self) -> bool:
        return len(self.plays) == NUM_SEATS

    def next_to_play(self) -> int:
        if not self.plays:
            return self.leader
        return next_seat(self.plays[-1][0])

    def add_play(self, seat: int, card: Card) -> None:
        if self.is_full():
            raise TrickError("Trick already complete.")
        if seat != self.next_to_play():
            raise TrickError(f"Seat {seat} is out of turn in this trick.")
        self.plays.append((seat, card))

    def mark_reveal(self) -> None:
        if self.reveal_index is None:
            self.reveal_index = len(self.plays)

    def led_suit(self) -> Optional[Suit]:
        return self.plays[0][1].suit if self.plays else None

    def cards(self) -> List[Card]:
        return [card for _, card in self.plays]

    def winning_play(self, trump: Optional[Suit]) -> Tuple[int, Card]:
        return self.plays[winning_index(self.plays, trump, self.reveal_index)]
