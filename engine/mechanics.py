"""Legal move generation for Mendikot."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .cards import Card, Suit, cards_of_suit


def legal_moves(
    hand: Iterable[Card],
    lead_suit: Optional[Suit],
    trump: Optional[Suit],
    must_play_trump: bool = False,
) -> List[Card]:
    """Return the subset of ``hand`` that may be played, in hand order.

    A player holding the lead suit must follow it. A player who cannot follow may
    play anything, unless obligatory trump is in force and they hold a trump.
    """
    cards = list(hand)
    if lead_suit is not None:
        in_led = cards_of_suit(cards, lead_suit)
        if in_led:
            return in_led
    if must_play_trump and trump is not None:
        trumps = cards_of_suit(cards, trump)
        if trumps:
            return trumps
    return cards


def is_legal(
    card: Card,
    hand: Iterable[Card],
    lead_suit: Optional[Suit],
    trump: Optional[Suit],
    must_play_trump: bool = False,
) -> bool:
    return card in legal_moves(hand, lead_suit, trump, must_play_trump)
