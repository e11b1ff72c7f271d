"""Validation schema for Mendikot match configuration."""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import BaseModel, Field, field_validator

from .players import NUM_SEATS


class RevealVariant(str, Enum):
    AUTO_REVEAL = "auto_reveal"
    OPTIONAL_REVEAL = "optional_reveal"


class Difficulty(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


DEFAULT_NAMES = ["Player 1", "Player 2", "Player 3", "Player 4"]


class MatchConfig(BaseModel):
    variant: RevealVariant = Field(
        RevealVariant.AUTO_REVEAL,
        description="Variant A reveals trump as soon as someone cannot follow; variant B lets them ask.",
    )
    difficulty: Difficulty = Field(Difficulty.MEDIUM, description="Opponent tier used for bot seats.")
    player_names: list[str] = Field(default_factory=lambda: list(DEFAULT_NAMES))
    human_seats: list[int] = Field(default_factory=list, description="Seats driven by a person.")
    starting_dealer: int = Field(0, ge=0, lt=NUM_SEATS)
    seed: Optional[int] = Field(None, description="Seed for the shuffle; None draws from the OS.")
    max_decision_attempts: int = Field(3, ge=1, description="Fresh bot decisions requested before a deal is abandoned.")
    hold_completed_tricks: bool = Field(
        False,
        description="Leave a finished trick on the table until the driver calls conclude_trick().",
    )

    @field_validator("player_names")
    @classmethod
    def ensure_four_names(cls, value: list[str]) -> list[str]:
        if len(value) != NUM_SEATS:
            raise ValueError(f"Exactly {NUM_SEATS} player names are required.")
        if any(not name.strip() for name in value):
            raise ValueError("Player names must not be blank.")
        return value

    @field_validator("human_seats")
    @classmethod
    def validate_seats(cls, value: list[int]) -> list[int]:
        for seat in value:
            if not 0 <= seat < NUM_SEATS:
                raise ValueError(f"Unknown seat: {seat!r}")
        if len(set(value)) != len(value):
            raise ValueError("Human seats must be unique.")
        return sorted(value)

    def is_human(self, seat: int) -> bool:
        return seat in self.human_seats
