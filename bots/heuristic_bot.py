"""Heuristic bot (medium difficulty)."""

from __future__ import annotations

from typing import List, Optional

from engine.actions import VisibleState
from engine.cards import Card, Rank, Suit

from .base import BotStrategy
from .inference import (
    can_win_with_trump,
    current_winner,
    highest,
    is_highest_remaining,
    lowest,
    opponent_can_overtrump,
    suit_count,
    suit_groups,
)

HONOUR_BONUS = {Rank.ACE: 50, Rank.KING: 40, Rank.QUEEN: 30, Rank.TEN: 60}


def suit_strength(cards: List[Card]) -> int:
    """Score a suit as a trump candidate."""
    score = len(cards) * 100
    score += sum(card.rank.value * 2 for card in cards)
    ranks = {card.rank for card in cards}
    score += sum(bonus for rank, bonus in HONOUR_BONUS.items() if rank in ranks)
    # A bare Ten with nothing above it is easy to lose.
    if Rank.TEN in ranks and len(cards) < 3 and all(card.rank.value <= Rank.TEN.value for card in cards):
        score -= 25
    return score


class HeuristicBot(BotStrategy):
    name = "Heuristic"

    # Suit length needed before leading a Ten that is highest remaining.
    ten_lead_depth = 4
    # Suits this short keep their Ten back when choosing a lead.
    guard_ten_below = 1

    # Trump selection ---------------------------------------------------

    def choose_hidden_trump(self, hand: List[Card]) -> Card:
        groups = suit_groups(hand)
        best_suit = max(groups, key=lambda suit: suit_strength(groups[suit]))
        cards = groups[best_suit]
        ten = next((card for card in cards if card.rank is Rank.TEN), None)
        if ten is not None and (len(cards) >= 4 or any(card.rank.value > Rank.TEN.value for card in cards)):
            return ten
        return highest(cards)

    def wants_reveal(self, hand: List[Card], state: VisibleState) -> bool:
        return any(
            len(cards) >= 3 and any(card.rank.value >= Rank.JACK.value for card in cards)
            for cards in suit_groups(hand).values()
        )

    # Card play ---------------------------------------------------------

    def choose_trump_play(self, hand: List[Card], state: VisibleState, legal: List[Card], *, obligated: bool) -> Card:
        trump = state.revealed_trump
        trumps = [card for card in legal if card.suit is trump]
        if not trumps:
            return self.choose_discard(hand, state, legal)

        winner = current_winner(state)
        best_trump: Optional[Card] = None
        if winner is not None:
            seat, card, is_trump = winner
            if is_trump:
                best_trump = card
            if (
                is_trump
                and state.on_my_team(seat)
                and not obligated
                and self.defers_to_partner_trump(hand, state, card)
            ):
                return lowest(trumps)

        if best_trump is not None:
            winning = [card for card in trumps if card.rank.value > best_trump.rank.value]
        else:
            winning = trumps
        if winning:
            return self.pick_winning_trump(winning, state, best_trump)
        return lowest(trumps)

    def defers_to_partner_trump(self, hand: List[Card], state: VisibleState, partner_card: Card) -> bool:
        return not opponent_can_overtrump(state, partner_card)

    def pick_winning_trump(self, winning: List[Card], state: VisibleState, best_trump: Optional[Card]) -> Card:
        return lowest(winning)

    def choose_lead(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        trump = state.revealed_trump
        for card in sorted(legal, key=lambda c: c.rank.value, reverse=True):
            if card.rank.is_ten and self.is_top_card(card, state, hand):
                if card.suit is trump or suit_count(hand, card.suit) >= self.ten_lead_depth:
                    return card

        high_leads = [
            card
            for card in legal
            if card.rank in (Rank.ACE, Rank.KING)
            and card.suit is not trump
            and self.is_top_card(card, state, hand)
        ]
        if high_leads:
            high_leads.sort(key=lambda c: (-c.rank.value, suit_count(hand, c.suit)))
            return high_leads[0]

        trump_lead = self.choose_trump_lead(hand, state, legal)
        if trump_lead is not None:
            return trump_lead

        candidates = []
        for suit, cards in suit_groups(legal).items():
            if suit is trump:
                continue
            keep = [
                card
                for card in cards
                if not (
                    card.rank.is_ten
                    and len(cards) <= self.guard_ten_below
                    and not self.is_top_card(card, state, hand)
                )
            ]
            if keep:
                candidates.append((len(cards), highest(keep)))
        if candidates:
            return max(candidates, key=lambda item: item[0])[1]
        return highest(legal)

    def choose_trump_lead(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Optional[Card]:
        return None

    def choose_follow(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        winner = current_winner(state)
        if winner is None:
            return lowest(legal)
        seat, card, is_trump = winner
        if is_trump and card.suit is not state.lead_suit:
            # Trumped already; following cannot win.
            return lowest(legal)

        winning = [c for c in legal if c.rank.value > card.rank.value]
        if not winning:
            return lowest(legal)
        if state.on_my_team(seat) and not card.rank.is_ten and self.lets_partner_win(hand, state, card):
            return lowest(legal)
        ten = next((c for c in winning if c.rank.is_ten), None)
        if ten is not None:
            return ten
        return lowest(winning)

    def lets_partner_win(self, hand: List[Card], state: VisibleState, partner_card: Card) -> bool:
        return True

    def choose_void(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        trump = state.revealed_trump
        trumps = [card for card in legal if trump is not None and card.suit is trump]
        if trumps:
            winner = current_winner(state)
            partner_winning = winner is not None and state.on_my_team(winner[0])
            if self.should_trump_in(state, partner_winning, winner) and can_win_with_trump(trumps, state):
                return self.choose_trump_play(hand, state, legal, obligated=False)
        return self.choose_discard(hand, state, legal)

    def should_trump_in(self, state: VisibleState, partner_winning: bool, winner) -> bool:
        return not partner_winning

    def choose_discard(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        options = list(legal)
        non_tens = [card for card in options if not card.rank.is_ten]
        if non_tens:
            options = non_tens
        known_trump: Optional[Suit] = state.known_trump
        if known_trump is not None:
            non_trumps = [card for card in options if card.suit is not known_trump]
            if non_trumps:
                options = non_trumps
        return min(options, key=lambda card: (suit_count(hand, card.suit), card.rank.value))

    # Helpers -----------------------------------------------------------

    def is_top_card(self, card: Card, state: VisibleState, hand: List[Card]) -> bool:
        return is_highest_remaining(card, state)
