"""Common bot strategy interfaces."""

from __future__ import annotations

import random
from typing import List, Optional, Sequence

from engine.actions import Action, PlayCard, RequestTrumpReveal, SelectHiddenTrump, VisibleState
from engine.cards import Card, has_suit
from engine.errors import InvariantBroken

from .inference import lowest


class PolicyContractViolation(InvariantBroken):
    """A bot was asked to act without cards, or proposed a card it may not play."""


class BotStrategy:
    """Base class for bot policies.

    Subclasses override the ``choose_*`` hooks; ``decide_next_action`` fixes the
    order in which they are consulted.
    """

    name: str = "BaseBot"

    def __init__(self, seed: Optional[int] = None, rng: Optional[random.Random] = None) -> None:
        self._rng = rng if rng is not None else random.Random(seed)

    # Public contract ---------------------------------------------------

    def select_hidden_trump(self, hand: Sequence[Card]) -> Card:
        """Return the card from ``hand`` whose suit becomes the hidden trump."""
        cards = self._require_hand(hand)
        choice = self.choose_hidden_trump(cards)
        if choice not in cards:
            raise PolicyContractViolation(f"{self.name} chose {choice} which is not in hand.")
        return choice

    def decide_next_action(self, hand: Sequence[Card], state: VisibleState) -> Action:
        cards = self._require_hand(hand)
        if state.selecting_trump:
            return SelectHiddenTrump(self.select_hidden_trump(cards))
        if self._may_request_reveal(cards, state) and self.wants_reveal(cards, state):
            return RequestTrumpReveal()

        legal = state.legal_cards(cards)
        if not legal:
            raise PolicyContractViolation(f"{self.name} has no legal card to play.")
        if self._must_trump(cards, state):
            choice = self.choose_trump_play(cards, state, legal, obligated=True)
        elif state.is_leading:
            choice = self.choose_lead(cards, state, legal)
        elif has_suit(cards, state.lead_suit):
            choice = self.choose_follow(cards, state, legal)
        else:
            choice = self.choose_void(cards, state, legal)
        if choice not in legal:
            raise PolicyContractViolation(f"{self.name} proposed illegal card {choice}.")
        return PlayCard(choice)

    # Hooks -------------------------------------------------------------

    def choose_hidden_trump(self, hand: List[Card]) -> Card:
        return hand[0]

    def wants_reveal(self, hand: List[Card], state: VisibleState) -> bool:
        return False

    def choose_trump_play(self, hand: List[Card], state: VisibleState, legal: List[Card], *, obligated: bool) -> Card:
        return lowest(legal)

    def choose_lead(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        return legal[0]

    def choose_follow(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        return lowest(legal)

    def choose_void(self, hand: List[Card], state: VisibleState, legal: List[Card]) -> Card:
        return lowest(legal)

    # Helpers -----------------------------------------------------------

    def _require_hand(self, hand: Sequence[Card]) -> List[Card]:
        cards = list(hand)
        if not cards:
            raise PolicyContractViolation(f"{self.name} was asked to act with an empty hand.")
        return cards

    @staticmethod
    def _may_request_reveal(hand: List[Card], state: VisibleState) -> bool:
        return (
            state.optional_reveal
            and state.can_request_reveal
            and state.revealed_trump is None
            and state.hidden_trump_set
            and state.lead_suit is not None
            and not has_suit(hand, state.lead_suit)
        )

    @staticmethod
    def _must_trump(hand: List[Card], state: VisibleState) -> bool:
        if not state.must_play_trump or state.revealed_trump is None:
            return False
        if has_suit(hand, state.lead_suit):
            return False
        return has_suit(hand, state.revealed_trump)
