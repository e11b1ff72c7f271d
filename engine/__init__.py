"""Core engine package for Mendikot."""

__all__ = [
    "actions",
    "cards",
    "deck",
    "errors",
    "players",
    "state",
    "trick",
    "mechanics",
    "scoring",
    "game",
    "rules_schema",
    "service",
]
