#!/usr/bin/env python3
"""Interactive CLI to play Mendikot against three bots."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Tuple

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.append(str(ROOT))

from bots.bot_arena import play_bot_turn, seat_bots
from engine.actions import Action, PlayCard, RequestTrumpReveal, SelectHiddenTrump
from engine.cards import card_label
from engine.errors import IllegalAction
from engine.game import MatchEngine
from engine.rules_schema import Difficulty, MatchConfig, RevealVariant
from engine.state import DealPhase

HUMAN_SEAT = 0


def parse_args() -> argparse.Namespace:
    parser = argparse.ArgumentParser(description="Play Mendikot against bots.")
    parser.add_argument("--difficulty", default=Difficulty.MEDIUM.value, choices=[d.value for d in Difficulty])
    parser.add_argument("--variant", default=RevealVariant.AUTO_REVEAL.value, choices=[v.value for v in RevealVariant])
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--log-level", default="WARNING")
    return parser.parse_args()


def print_state(engine: MatchEngine) -> None:
    state = engine.state
    print("\n============================")
    print(state.message)
    trump = state.revealed_trump or ("hidden" if state.hidden_trump_set else "not chosen")
    print(f"Trump: {trump} | Tricks played: {state.tricks_completed}")
    for team in engine.teams:
        print(f"  {team.name}: {team.tricks_won} tricks, {team.tens_captured} tens, {team.deals_won} deals")
    if state.trick.plays:
        print("Current trick:")
        for seat, card in state.trick.plays:
            print(f"  {engine.players[seat].name} -> {card_label(card)}")


def list_actions(engine: MatchEngine) -> List[Tuple[str, Action]]:
    state = engine.state
    if state.phase is DealPhase.AWAITING_TRUMP_SELECTION:
        return [(f"Hide {card_label(card)} as trump", SelectHiddenTrump(card)) for card in engine.hand(HUMAN_SEAT)]
    options: List[Tuple[str, Action]] = [
        (f"Play {card_label(card)}", PlayCard(card)) for card in engine.legal_cards(HUMAN_SEAT)
    ]
    if state.phase is DealPhase.AWAITING_TRUMP_REVEAL_CHOICE and state.can_request_reveal:
        options.append(("Ask to reveal trump", RequestTrumpReveal()))
    return options


def choose_action(options: List[Tuple[str, Action]]) -> Action:
    for index, (label, _) in enumerate(options):
        print(f"[{index}] {label}")
    while True:
        choice = input("Select action (q to quit): ").strip()
        if choice.lower() == "q":
            raise KeyboardInterrupt
        if not choice.isdigit():
            print("Please enter a number.")
            continue
        index = int(choice)
        if 0 <= index < len(options):
            return options[index][1]
        print("Invalid choice. Try again.")


def play_deal(engine: MatchEngine, bots) -> None:
    engine.start_new_deal()
    while engine.phase is not DealPhase.DEAL_COMPLETED:
        if engine.phase is DealPhase.TRICK_COMPLETED:
            engine.conclude_trick()
            continue
        seat = engine.current_seat
        if seat != HUMAN_SEAT:
            result = play_bot_turn(engine, bots[seat])
            print(result.message)
            continue
        print_state(engine)
        action = choose_action(list_actions(engine))
        try:
            engine.apply_action(HUMAN_SEAT, action)
        except IllegalAction as exc:
            print(f"Not allowed: {exc}")
    print(f"\n{engine.message}")


def main() -> None:
    args = parse_args()
    logging.basicConfig(level=args.log_level.upper(), format="%(levelname)s %(name)s: %(message)s")
    config = MatchConfig(
        difficulty=args.difficulty,
        variant=args.variant,
        seed=args.seed,
        human_seats=[HUMAN_SEAT],
        player_names=["You", "West bot", "Partner bot", "East bot"],
    )
    engine = MatchEngine(config)
    bots = seat_bots(config, args.seed)
    try:
        while True:
            play_deal(engine, bots)
            if input("Play another deal? [Y/n] ").strip().lower() == "n":
                break
    except KeyboardInterrupt:
        print("\nExiting early.")
    print(engine.end_match().message)


if __name__ == "__main__":
    main()
