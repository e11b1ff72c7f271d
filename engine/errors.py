"""Error taxonomy shared by the engine and the bots."""

from __future__ import annotations


class IllegalAction(RuntimeError):
    """Wrong player, wrong phase, or a card the player does not hold."""


class RuleViolation(IllegalAction):
    """The card breaks Follow-Suit or obligatory trump."""


class InvariantBroken(RuntimeError):
    """Internal impossibility; fatal to the current deal but not to the match."""
