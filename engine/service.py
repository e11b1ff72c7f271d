"""Convenience service layer for UI and agents."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .cards import Card, card_label, deserialize_card, serialize_card
from .game import ActionResult, MatchEngine
from .rules_schema import MatchConfig


@dataclass
class TrickPlayView:
    player: int
    card: dict
    label: str


@dataclass
class TrickView:
    leader: int
    plays: list[TrickPlayView]
    reveal_index: Optional[int]


@dataclass
class TeamView:
    team_id: str
    name: str
    seats: tuple[int, int]
    tricks_won: int
    tens_captured: int
    deals_won: int


@dataclass
class DealView:
    phase: str
    current_player: Optional[int]
    dealer: int
    trump_selector: int
    hidden_trump_set: bool
    hidden_trump: Optional[dict]
    trump: Optional[str]
    lead_suit: Optional[str]
    can_request_reveal: bool
    must_play_trump: bool
    hand: list[dict]
    hand_labels: list[str]
    legal_moves: list[dict]
    legal_move_labels: list[str]
    remaining_cards: list[int]
    trick: Optional[TrickView]
    tricks_completed: int
    teams: list[TeamView]
    message: str
    error: Optional[str]


@dataclass
class ActionView:
    trick_completed: bool
    deal_completed: bool
    trump_revealed: bool
    trick_winner: Optional[int]
    deal_winner: Optional[str]
    deal: DealView


class DealService:
    """Facade around MatchEngine for UI consumers."""

    def __init__(self, engine: Optional[MatchEngine] = None, config: Optional[MatchConfig] = None) -> None:
        self.engine = engine or MatchEngine(config)

    # Session lifecycle -------------------------------------------------

    def start_new_deal(self, perspective: int = 0) -> DealView:
        self.engine.start_new_deal()
        return self.get_deal_view(perspective)

    def end_match(self, perspective: int = 0) -> DealView:
        self.engine.end_match()
        return self.get_deal_view(perspective)

    # Actions -----------------------------------------------------------

    def select_hidden_trump(self, player: int, card_payload: dict) -> ActionView:
        card = self._resolve_card(player, card_payload)
        return self._action_view(self.engine.select_hidden_trump(player, card), player)

    def play_card(self, player: int, card_payload: dict) -> ActionView:
        card = self._resolve_card(player, card_payload)
        return self._action_view(self.engine.play_card(player, card), player)

    def request_trump_reveal(self, player: int) -> ActionView:
        return self._action_view(self.engine.request_trump_reveal(player), player)

    def conclude_trick(self, perspective: int = 0) -> ActionView:
        return self._action_view(self.engine.conclude_trick(), perspective)

    # Views -------------------------------------------------------------

    def get_deal_view(self, perspective: int = 0) -> DealView:
        engine = self.engine
        state = engine.state
        hand = engine.hand(perspective)
        legal = engine.legal_cards(perspective)

        trick_view: Optional[TrickView] = None
        if not state.trick.is_empty():
            trick_view = TrickView(
                leader=state.trick.leader,
                plays=[
                    TrickPlayView(player=p, card=serialize_card(c), label=card_label(c))
                    for p, c in state.trick.plays
                ],
                reveal_index=state.trick.reveal_index,
            )

        # Only the selector sees which card was hidden.
        hidden = None
        if state.hidden_trump is not None and perspective == state.selector:
            hidden = serialize_card(state.hidden_trump)

        return DealView(
            phase=state.phase.name.lower(),
            current_player=state.current_seat,
            dealer=state.dealer,
            trump_selector=state.selector,
            hidden_trump_set=state.hidden_trump_set,
            hidden_trump=hidden,
            trump=str(state.revealed_trump) if state.revealed_trump else None,
            lead_suit=str(state.lead_suit) if state.lead_suit else None,
            can_request_reveal=state.can_request_reveal and state.current_seat == perspective,
            must_play_trump=state.must_play_trump and state.current_seat == perspective,
            hand=[serialize_card(card) for card in hand],
            hand_labels=[card_label(card) for card in hand],
            legal_moves=[serialize_card(card) for card in legal],
            legal_move_labels=[card_label(card) for card in legal],
            remaining_cards=[len(player.hand) for player in engine.players],
            trick=trick_view,
            tricks_completed=state.tricks_completed,
            teams=[
                TeamView(
                    team_id=team.team_id,
                    name=team.name,
                    seats=team.seats,
                    tricks_won=team.tricks_won,
                    tens_captured=team.tens_captured,
                    deals_won=team.deals_won,
                )
                for team in engine.teams
            ],
            message=state.message,
            error=state.error,
        )

    # Helpers -----------------------------------------------------------

    def _action_view(self, result: ActionResult, perspective: int) -> ActionView:
        return ActionView(
            trick_completed=result.trick_completed,
            deal_completed=result.deal_completed,
            trump_revealed=result.trump_revealed,
            trick_winner=result.trick_winner,
            deal_winner=result.deal_result.winner if result.deal_result else None,
            deal=self.get_deal_view(perspective),
        )

    def _resolve_card(self, player: int, payload: dict) -> Card:
        """Map a serialized card back onto the exact instance held by ``player``."""
        wanted = deserialize_card(payload)
        hand = self.engine.hand(player) if 0 <= player < len(self.engine.players) else []
        for card in hand:
            if card == wanted:
                return card
        # Payloads without an id fall back to suit and rank.
        if wanted.instance_id < 0:
            for card in hand:
                if card.face == wanted.face:
                    return card
        return wanted
