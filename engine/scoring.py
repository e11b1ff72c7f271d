"""Deal scoring and dealer rotation for Mendikot."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional, Sequence

from .errors import InvariantBroken
from .players import NUM_SEATS, next_seat, partner_seat

TOTAL_TENS = 4
TRICKS_PER_DEAL = 13
MAJORITY_TRICKS = 7

TEAM_IDS = ("A", "B")


class ScoringError(InvariantBroken):
    """Raised when the counters handed to scoring are impossible."""


class WinReason(Enum):
    MENDIKOT = "mendikot"
    THREE_TENS = "three_tens"
    TRICKS_ON_SPLIT_TENS = "tricks_on_split_tens"
    MORE_TENS = "more_tens"
    TRICKS_ON_TIED_TENS = "tricks_on_tied_tens"
    DRAW = "draw"


@dataclass(frozen=True)
class DealResult:
    winner: Optional[str]
    reason: WinReason
    tens: tuple[int, int]
    tricks: tuple[int, int]
    whitewash: bool
    message: str

    @property
    def is_draw(self) -> bool:
        return self.winner is None


def _decide(tens: Sequence[int], tricks: Sequence[int]) -> tuple[Optional[int], WinReason]:
    a_tens, b_tens = tens
    for team in (0, 1):
        if tens[team] == 4:
            return team, WinReason.MENDIKOT
    for team in (0, 1):
        if tens[team] == 3:
            return team, WinReason.THREE_TENS
    if a_tens == 2 and b_tens == 2:
        for team in (0, 1):
            if tricks[team] >= MAJORITY_TRICKS:
                return team, WinReason.TRICKS_ON_SPLIT_TENS
        return None, WinReason.DRAW
    if a_tens != b_tens:
        return (0 if a_tens > b_tens else 1), WinReason.MORE_TENS
    # Unreachable with 13 tricks: one side always holds at least seven.
    for team in (0, 1):
        if tricks[team] >= MAJORITY_TRICKS:
            return team, WinReason.TRICKS_ON_TIED_TENS
    return None, WinReason.DRAW


def _describe(winner: Optional[int], reason: WinReason, tens: Sequence[int], tricks: Sequence[int]) -> str:
    if winner is None:
        return f"Tens tied {tens[0]}-{tens[1]} and no team has {MAJORITY_TRICKS}+ tricks. The deal is a draw."
    team = f"Team {TEAM_IDS[winner]}"
    loser = 1 - winner
    if reason is WinReason.MENDIKOT:
        return f"{team} wins by Mendikot (all 4 Tens)!"
    if reason is WinReason.THREE_TENS:
        return f"{team} wins with 3 Tens!"
    if reason is WinReason.TRICKS_ON_SPLIT_TENS:
        return f"{team} wins (2 Tens each, {tricks[winner]} tricks)!"
    if reason is WinReason.MORE_TENS:
        return f"{team} wins with more Tens ({tens[winner]} vs {tens[loser]})!"
    return f"{team} wins with {tricks[winner]} tricks (Tens were equal)!"


def score_deal(*, tens: Sequence[int], tricks: Sequence[int], strict: bool = True) -> DealResult:
    """Decide a deal from both teams' captured Tens and tricks (team A first).

    With ``strict`` the totals must be a completed deal: 4 Tens and 13 tricks.
    """
    if len(tens) != 2 or len(tricks) != 2:
        raise ScoringError("Exactly two teams are supported.")
    if min(tens) < 0 or min(tricks) < 0:
        raise ScoringError("Counters cannot be negative.")
    if sum(tens) > TOTAL_TENS or sum(tricks) > TRICKS_PER_DEAL:
        raise ScoringError(f"Impossible totals: tens={tuple(tens)} tricks={tuple(tricks)}.")
    if strict and (sum(tens) != TOTAL_TENS or sum(tricks) != TRICKS_PER_DEAL):
        raise ScoringError(f"Deal is not complete: tens={tuple(tens)} tricks={tuple(tricks)}.")

    winner, reason = _decide(tens, tricks)
    whitewash = winner is not None and tricks[winner] == TRICKS_PER_DEAL and tricks[1 - winner] == 0
    return DealResult(
        winner=TEAM_IDS[winner] if winner is not None else None,
        reason=reason,
        tens=(tens[0], tens[1]),
        tricks=(tricks[0], tricks[1]),
        whitewash=whitewash,
        message=_describe(winner, reason, tens, tricks),
    )


def team_of_seat(seat: int) -> str:
    return TEAM_IDS[seat % 2]


def next_dealer(dealer: int, result: DealResult) -> int:
    """Return the seat that deals next.

    The dealer's team winning passes the deal clockwise. A loss or draw keeps the
    dealer, except a whitewash against the dealer's team hands it to the partner.
    """
    if not 0 <= dealer < NUM_SEATS:
        raise ScoringError(f"Unknown dealer seat {dealer}.")
    if result.winner is None:
        return dealer
    if result.winner == team_of_seat(dealer):
        return next_seat(dealer)
    if result.whitewash:
        return partner_seat(dealer)
    return dealer
