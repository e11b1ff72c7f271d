"""Card-tracking helpers shared by the heuristic bots.

Everything here works from a ``VisibleState`` plus the bot's own hand, never
from engine internals.
"""

from __future__ import annotations

from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from engine.actions import VisibleState
from engine.cards import RANK_ORDER, Card, Rank, Suit
from engine.trick import counts_as_trump, winning_index


def suit_groups(hand: Iterable[Card]) -> Dict[Suit, List[Card]]:
    groups: Dict[Suit, List[Card]] = defaultdict(list)
    for card in hand:
        groups[card.suit].append(card)
    return dict(groups)


def suit_count(hand: Iterable[Card], suit: Suit) -> int:
    return sum(1 for card in hand if card.suit is suit)


def lowest(cards: Sequence[Card]) -> Card:
    return min(cards, key=lambda card: card.rank.value)


def highest(cards: Sequence[Card]) -> Card:
    return max(cards, key=lambda card: card.rank.value)


def current_winner(state: VisibleState) -> Optional[Tuple[int, Card, bool]]:
    """Return (seat, card, counts_as_trump) for the card winning the open trick."""
    plays = state.current_trick
    if not plays:
        return None
    index = winning_index(plays, state.revealed_trump, state.reveal_index)
    seat, card = plays[index]
    return seat, card, counts_as_trump(index, card, state.revealed_trump, state.reveal_index)


def is_accounted(suit: Suit, rank: Rank, state: VisibleState, hand: Iterable[Card] = ()) -> bool:
    """True when the card is already played or sits in ``hand``."""
    if state.is_played(suit, rank):
        return True
    return any(card.suit is suit and card.rank is rank for card in hand)


def is_highest_remaining(card: Card, state: VisibleState, hand: Iterable[Card] = ()) -> bool:
    """No higher card of the suit can still appear from another seat."""
    held = list(hand)
    return all(
        is_accounted(card.suit, rank, state, held)
        for rank in RANK_ORDER
        if rank.value > card.rank.value
    )


def unplayed_tens(state: VisibleState) -> int:
    return sum(1 for suit in Suit if not state.is_played(suit, Rank.TEN))


def unplayed_in_suit(suit: Suit, state: VisibleState) -> int:
    return sum(1 for rank in RANK_ORDER if not state.is_played(suit, rank))


def opponent_can_overtrump(state: VisibleState, trump_card: Card, hand: Iterable[Card] = ()) -> bool:
    """Some higher trump is still out, so the card is not safe."""
    trump = state.revealed_trump
    if trump is None:
        return False
    held = list(hand)
    return any(
        not is_accounted(trump, rank, state, held)
        for rank in RANK_ORDER
        if rank.value > trump_card.rank.value
    )


def opponent_ten_in_trick(state: VisibleState) -> bool:
    return any(card.rank.is_ten and not state.on_my_team(seat) for seat, card in state.current_trick)


def can_win_with_trump(trumps: Sequence[Card], state: VisibleState) -> bool:
    if not trumps:
        return False
    winner = current_winner(state)
    if winner is None:
        return True
    _, card, is_trump = winner
    if is_trump:
        return any(trump.rank.value > card.rank.value for trump in trumps)
    return True
