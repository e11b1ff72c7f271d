"""Bot strategies for Mendikot."""

from typing import Dict, Optional

from engine.rules_schema import Difficulty

from .base import BotStrategy, PolicyContractViolation
from .heuristic_bot import HeuristicBot
from .lookahead_bot import LookaheadBot
from .random_bot import RandomBot

BOT_REGISTRY: Dict[Difficulty, type[BotStrategy]] = {
    Difficulty.LOW: RandomBot,
    Difficulty.MEDIUM: HeuristicBot,
    Difficulty.HIGH: LookaheadBot,
}


def bot_for(difficulty: Difficulty, seed: Optional[int] = None) -> BotStrategy:
    return BOT_REGISTRY[Difficulty(difficulty)](seed=seed)


__all__ = [
    "BOT_REGISTRY",
    "BotStrategy",
    "HeuristicBot",
    "LookaheadBot",
    "PolicyContractViolation",
    "RandomBot",
    "bot_for",
]
