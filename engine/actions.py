"""Actions a seat can submit and the read-only view a bot decides from."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import FrozenSet, Optional, Tuple, Union

from .cards import Card, Rank, Suit
from .mechanics import legal_moves


class ActionType(Enum):
    PLAY_CARD = auto()
    REQUEST_TRUMP_REVEAL = auto()
    SELECT_HIDDEN_TRUMP = auto()


@dataclass(frozen=True)
class PlayCard:
    card: Card
    action_type: ActionType = ActionType.PLAY_CARD


@dataclass(frozen=True)
class RequestTrumpReveal:
    action_type: ActionType = ActionType.REQUEST_TRUMP_REVEAL


@dataclass(frozen=True)
class SelectHiddenTrump:
    """Choose a hidden trump; ``card`` is filled in by the bot's trump selection."""

    card: Optional[Card] = None
    action_type: ActionType = ActionType.SELECT_HIDDEN_TRUMP


Action = Union[PlayCard, RequestTrumpReveal, SelectHiddenTrump]


@dataclass(frozen=True)
class VisibleState:
    """Everything one seat may legitimately know when it is asked to act."""

    seat: int
    partner: int
    lead_suit: Optional[Suit]
    revealed_trump: Optional[Suit]
    hidden_trump_set: bool
    optional_reveal: bool
    can_request_reveal: bool
    must_play_trump: bool
    current_trick: Tuple[Tuple[int, Card], ...]
    reveal_index: Optional[int]
    played_faces: FrozenSet[Tuple[Suit, Rank]]
    remaining_tricks: int
    team_tens: int
    opponent_tens: int
    selecting_trump: bool = False
    # Only the seat that hid the trump sees this.
    own_hidden_trump: Optional[Card] = None

    def legal_cards(self, hand) -> list[Card]:
        return legal_moves(hand, self.lead_suit, self.revealed_trump, self.must_play_trump)

    def on_my_team(self, seat: Optional[int]) -> bool:
        return seat is not None and seat in (self.seat, self.partner)

    def is_played(self, suit: Suit, rank: Rank) -> bool:
        return (suit, rank) in self.played_faces

    @property
    def known_trump(self) -> Optional[Suit]:
        if self.revealed_trump is not None:
            return self.revealed_trump
        return self.own_hidden_trump.suit if self.own_hidden_trump is not None else None

    @property
    def is_leading(self) -> bool:
        return not self.current_trick
