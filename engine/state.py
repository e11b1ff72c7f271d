"""Deal state for Mendikot."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, auto
from typing import List, Optional, Tuple

from .cards import Card, Suit
from .players import next_seat
from .scoring import DealResult
from .trick import Trick


class DealPhase(Enum):
    NOT_STARTED = auto()
    DEALING = auto()
    AWAITING_TRUMP_SELECTION = auto()
    TRUMP_SELECTION_DONE = auto()
    PLAYER_TURN = auto()
    AWAITING_TRUMP_REVEAL_CHOICE = auto()
    TRUMP_REVEALED = auto()
    TRICK_COMPLETED = auto()
    DEAL_COMPLETED = auto()
    GAME_OVER = auto()


# Phases in which the acting seat may play a card.
PLAY_PHASES = frozenset(
    {
        DealPhase.TRUMP_SELECTION_DONE,
        DealPhase.PLAYER_TURN,
        DealPhase.AWAITING_TRUMP_REVEAL_CHOICE,
        DealPhase.TRUMP_REVEALED,
    }
)


@dataclass(frozen=True)
class CompletedTrick:
    leader: int
    plays: Tuple[Tuple[int, Card], ...]
    winner: int
    winning_card: Card
    reveal_index: Optional[int]
    tens: int


@dataclass
class DealState:
    dealer: int
    phase: DealPhase = DealPhase.NOT_STARTED
    selector: int = field(init=False)
    current_seat: Optional[int] = None
    hidden_trump: Optional[Card] = None
    revealed_trump: Optional[Suit] = None
    trick: Trick = field(init=False)
    tricks_completed: int = 0
    played_cards: List[Card] = field(default_factory=list)
    completed_tricks: List[CompletedTrick] = field(default_factory=list)
    can_request_reveal: bool = False
    must_play_trump: bool = False
    result: Optional[DealResult] = None
    error: Optional[str] = None
    message: str = ""

    def __post_init__(self) -> None:
        self.selector = next_seat(self.dealer)
        self.trick = Trick(leader=self.selector)

    @property
    def lead_suit(self) -> Optional[Suit]:
        return self.trick.led_suit()

    @property
    def hidden_trump_set(self) -> bool:
        return self.hidden_trump is not None

    @property
    def last_trick(self) -> Optional[CompletedTrick]:
        return self.completed_tricks[-1] if self.completed_tricks else None
