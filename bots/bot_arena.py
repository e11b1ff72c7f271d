"""Simple bot arena for Mendikot."""

from __future__ import annotations

import argparse
import logging
from typing import Dict, Iterable, Mapping, Optional

from engine.errors import IllegalAction, InvariantBroken
from engine.game import ActionResult, MatchEngine
from engine.rules_schema import Difficulty, MatchConfig, RevealVariant
from engine.state import DealPhase

from .base import BotStrategy
from . import bot_for

logger = logging.getLogger(__name__)

BOT_PHASES = frozenset(
    {
        DealPhase.AWAITING_TRUMP_SELECTION,
        DealPhase.TRUMP_SELECTION_DONE,
        DealPhase.PLAYER_TURN,
        DealPhase.AWAITING_TRUMP_REVEAL_CHOICE,
        DealPhase.TRUMP_REVEALED,
    }
)


def seat_bots(config: MatchConfig, seed: Optional[int] = None) -> Dict[int, BotStrategy]:
    """One bot per seat not driven by a person."""
    return {
        seat: bot_for(config.difficulty, None if seed is None else seed + seat)
        for seat in range(len(config.player_names))
        if not config.is_human(seat)
    }


def play_bot_turn(engine: MatchEngine, bot: BotStrategy) -> ActionResult:
    """Ask ``bot`` for the acting seat's move and commit it.

    A rejected decision is logged as a defect and a fresh one requested, up to
    ``max_decision_attempts``. After that the deal is abandoned.
    """
    seat = engine.current_seat
    if seat is None or engine.phase not in BOT_PHASES:
        raise IllegalAction(f"No bot move expected in phase {engine.phase.name}.")

    attempts = engine.config.max_decision_attempts
    last_error = "no attempt made"
    for attempt in range(1, attempts + 1):
        # Decisions are made against a snapshot; the engine re-validates on commit.
        try:
            action = bot.decide_next_action(engine.hand(seat), engine.visible_state(seat))
        except InvariantBroken as exc:
            return engine.fail_deal(f"{bot.name} at seat {seat}: {exc}")
        try:
            return engine.apply_action(seat, action)
        except IllegalAction as exc:
            last_error = str(exc)
            logger.warning("%s at seat %d proposed %r (attempt %d/%d): %s", bot.name, seat, action, attempt, attempts, exc)
    return engine.fail_deal(f"{bot.name} at seat {seat} produced no legal move: {last_error}")


def play_deal(engine: MatchEngine, bots: Mapping[int, BotStrategy]) -> ActionResult:
    """Play one deal to completion with bots in every seat."""
    result = engine.start_new_deal()
    while engine.phase is not DealPhase.DEAL_COMPLETED:
        if engine.phase is DealPhase.TRICK_COMPLETED:
            result = engine.conclude_trick()
            continue
        seat = engine.current_seat
        if seat not in bots:
            raise IllegalAction(f"Seat {seat} has no bot; play_deal needs bots in every seat.")
        result = play_bot_turn(engine, bots[seat])
    return result


def run_match(
    config: MatchConfig,
    *,
    n_deals: int = 10,
    bots: Optional[Mapping[int, BotStrategy]] = None,
) -> dict:
    engine = MatchEngine(config)
    seats = dict(bots) if bots is not None else seat_bots(config, config.seed)
    history = []
    for _ in range(n_deals):
        dealer = engine.dealer
        result = play_deal(engine, seats)
        deal = result.deal_result
        history.append(
            {
                "dealer": dealer,
                "winner": deal.winner if deal else None,
                "reason": deal.reason.value if deal else "error",
                "tens": deal.tens if deal else None,
                "tricks": deal.tricks if deal else None,
                "error": result.error,
            }
        )
    engine.end_match()
    return {"deals_won": {team.team_id: team.deals_won for team in engine.teams}, "history": history}


def main(argv: Iterable[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Run a bot-only Mendikot match.")
    parser.add_argument("--difficulty", default=Difficulty.MEDIUM.value, choices=[d.value for d in Difficulty])
    parser.add_argument("--variant", default=RevealVariant.AUTO_REVEAL.value, choices=[v.value for v in RevealVariant])
    parser.add_argument("--n", type=int, default=10, help="Number of deals to play.")
    parser.add_argument("--seed", type=int, default=42)
    parser.add_argument("--log-level", default="WARNING")
    args = parser.parse_args(argv)

    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = MatchConfig(difficulty=args.difficulty, variant=args.variant, seed=args.seed)
    results = run_match(config, n_deals=args.n)

    print(f"Deals won after {args.n} deals: {results['deals_won']}")
    draws = sum(1 for entry in results["history"] if entry["winner"] is None and entry["error"] is None)
    mendikots = sum(1 for entry in results["history"] if entry["reason"] == "mendikot")
    print(f"Draws: {draws}, Mendikot wins: {mendikots}")


if __name__ == "__main__":
    main()
