"""Card-counting bot (high difficulty)."""

from __future__ import annotations

from typing import List, Optional

from engine.actions import VisibleState
from engine.cards import Card, Rank

from .heuristic_bot import HeuristicBot
from .inference import (
    highest,
    is_highest_remaining,
    opponent_ten_in_trick,
    suit_groups,
    unplayed_in_suit,
    unplayed_tens,
)


class LookaheadBot(HeuristicBot):
    """Tracks every played card and counts its own hand as known."""

    name = "Lookahead"

    ten_lead_depth = 3
    guard_ten_below = 2

    def wants_reveal(self, hand: List[Card], state: VisibleState) -> bool:
        tens_left = unplayed_tens(state)
        behind_in_tens = state.opponent_tens > state.team_tens
        strong_suit = any(
            len(cards) >= 4 and any(card.rank.value >= Rank.KING.value for card in cards)
            for cards in suit_groups(hand).values()
        )
        if (behind_in_tens and tens_left > 0) or strong_suit:
            return True
        return tens_left <= 1 and self._rng.random() < 0.7

    def defers_to_partner_trump(self, hand: List[Card], state: VisibleState, partner_card: Card) -> bool:
        return False

    def pick_winning_trump(self, winning: List[Card], state: VisibleState, best_trump: Optional[Card]) -> Card:
        ordered = sorted(winning, key=lambda card: card.rank.value)
        conserve = (
            len(ordered) > 1
            and state.remaining_tricks > 3
            and (best_trump is None or best_trump.rank.value < Rank.JACK.value)
            and not opponent_ten_in_trick(state)
        )
        # Spend a small trump rather than the very lowest, keeping it for a later void.
        if conserve and ordered[0].rank.value < Rank.NINE.value:
            return ordered[1]
        return ordered[0]

    def choose_trump_lead(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Optional[Card]:
        trump = state.revealed_trump
        if trump is None:
            return None
        trumps = [card for card in legal if card.suit is trump]
        if not trumps:
            return None
        outstanding = max(unplayed_in_suit(trump, state), 1)
        if len(trumps) >= 4 or (len(trumps) >= 3 and len(trumps) / outstanding > 0.4):
            return highest(trumps)
        return None

    def lets_partner_win(self, hand: List[Card], state: VisibleState, partner_card: Card) -> bool:
        return is_highest_remaining(partner_card, state, hand)

    def should_trump_in(self, state: VisibleState, partner_winning: bool, winner) -> bool:
        if opponent_ten_in_trick(state):
            return True
        if not partner_winning:
            return True
        return winner is not None and winner[1].rank.is_ten

    def is_top_card(self, card: Card, state: VisibleState, hand: List[Card]) -> bool:
        return is_highest_remaining(card, state, hand)
