"""Deal state machine and match orchestration for Mendikot."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from random import Random
from typing import Iterable, List, Optional

from .actions import Action, ActionType, VisibleState
from .cards import Card, count_tens
from .deck import DEAL_BATCHES, Deck
from .errors import IllegalAction, InvariantBroken, RuleViolation
from .mechanics import legal_moves
from .players import NUM_SEATS, Player, Team, build_table, next_seat, partner_seat
from .rules_schema import MatchConfig, RevealVariant
from .scoring import TRICKS_PER_DEAL, DealResult, next_dealer, score_deal
from .state import PLAY_PHASES, CompletedTrick, DealPhase, DealState
from .trick import Trick

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ActionResult:
    """What changed after one engine call."""

    phase: DealPhase
    current_seat: Optional[int]
    message: str
    trump_revealed: bool = False
    trick_completed: bool = False
    trick_winner: Optional[int] = None
    deal_completed: bool = False
    deal_result: Optional[DealResult] = None
    error: Optional[str] = None


class MatchEngine:
    """Run consecutive deals for four fixed seats.

    Every mutating call validates the acting seat and phase at the moment it is
    applied and either raises ``IllegalAction`` without touching state or returns
    an ``ActionResult``.
    """

    def __init__(self, config: Optional[MatchConfig] = None, rng: Optional[Random] = None) -> None:
        self.config = config or MatchConfig()
        self.rng = rng if rng is not None else Random(self.config.seed)
        self.deck = Deck(self.rng)
        self.players, self.teams = build_table(self.config.player_names)
        self.dealer = self.config.starting_dealer
        self.state = DealState(dealer=self.dealer)
        self.state.message = "Press start to deal."
        self.deal_history: List[DealResult] = []

    # Queries -----------------------------------------------------------

    @property
    def variant(self) -> RevealVariant:
        return self.config.variant

    @property
    def phase(self) -> DealPhase:
        return self.state.phase

    @property
    def current_seat(self) -> Optional[int]:
        return self.state.current_seat

    @property
    def message(self) -> str:
        return self.state.message

    def hand(self, seat: int) -> List[Card]:
        return list(self.players[seat].hand)

    def team_for(self, seat: int) -> Team:
        for team in self.teams:
            if team.has_seat(seat):
                return team
        raise InvariantBroken(f"Seat {seat} belongs to no team.")

    def opponents_of(self, seat: int) -> Team:
        own = self.team_for(seat)
        return next(team for team in self.teams if team is not own)

    def legal_cards(self, seat: int) -> List[Card]:
        if self.state.phase not in PLAY_PHASES or self.state.current_seat != seat:
            return []
        return legal_moves(
            self.players[seat].hand,
            self.state.lead_suit,
            self.state.revealed_trump,
            self.state.must_play_trump,
        )

    def visible_state(self, seat: int) -> VisibleState:
        state = self.state
        acting = state.current_seat == seat
        played = [card.face for card in state.played_cards]
        played.extend(card.face for card in state.trick.cards())
        return VisibleState(
            seat=seat,
            partner=partner_seat(seat),
            lead_suit=state.lead_suit,
            revealed_trump=state.revealed_trump,
            hidden_trump_set=state.hidden_trump_set,
            optional_reveal=self.variant is RevealVariant.OPTIONAL_REVEAL,
            can_request_reveal=state.can_request_reveal and acting,
            must_play_trump=state.must_play_trump and acting,
            current_trick=tuple(state.trick.plays),
            reveal_index=state.trick.reveal_index,
            played_faces=frozenset(played),
            remaining_tricks=TRICKS_PER_DEAL - state.tricks_completed,
            team_tens=self.team_for(seat).tens_captured,
            opponent_tens=self.opponents_of(seat).tens_captured,
            selecting_trump=state.phase is DealPhase.AWAITING_TRUMP_SELECTION and seat == state.selector,
            own_hidden_trump=state.hidden_trump if seat == state.selector else None,
        )

    # Deal lifecycle ----------------------------------------------------

    def start_new_deal(self) -> ActionResult:
        if self.state.phase is DealPhase.GAME_OVER:
            raise IllegalAction("The match is over.")
        if self.state.phase not in (DealPhase.NOT_STARTED, DealPhase.DEAL_COMPLETED):
            logger.info("Abandoning deal in phase %s to start a new one.", self.state.phase.name)

        self.deck.reset()
        for player in self.players:
            player.clear_hand()
        for team in self.teams:
            team.reset_deal_stats()

        state = DealState(dealer=self.dealer, phase=DealPhase.DEALING)
        self.state = state
        dealer = self.players[self.dealer]
        logger.debug("%s is dealing.", dealer.name)

        order = [(self.dealer + offset) % NUM_SEATS for offset in range(1, NUM_SEATS + 1)]
        for batch in DEAL_BATCHES:
            for seat in order:
                self.players[seat].add_cards(self.deck.deal_batch(batch))
        for player in self.players:
            player.sort_hand()

        state.phase = DealPhase.AWAITING_TRUMP_SELECTION
        state.current_seat = state.selector
        state.message = f"{self.players[state.selector].name}, please select your hidden trump card."
        return self._result()

    def select_hidden_trump(self, seat: int, card: Card) -> ActionResult:
        self._require_turn(seat, (DealPhase.AWAITING_TRUMP_SELECTION,), "select the hidden trump")
        state = self.state
        if seat != state.selector:
            raise IllegalAction(f"Only {self.players[state.selector].name} may select the hidden trump.")
        player = self.players[seat]
        if not player.holds(card):
            raise IllegalAction(f"{player.name} does not hold {card}.")

        state.hidden_trump = card
        state.phase = DealPhase.TRUMP_SELECTION_DONE
        state.current_seat = state.selector
        state.message = f"Hidden trump selected. {player.name} to lead."
        logger.debug("%s hid %s as trump.", player.name, card)
        return self._result()

    def request_trump_reveal(self, seat: int) -> ActionResult:
        self._require_turn(seat, (DealPhase.AWAITING_TRUMP_REVEAL_CHOICE,), "ask for trump")
        state = self.state
        if self.variant is not RevealVariant.OPTIONAL_REVEAL:
            raise IllegalAction("Trump is revealed automatically in this variant.")
        if not state.can_request_reveal or state.hidden_trump is None or state.revealed_trump is not None:
            raise IllegalAction("Trump cannot be requested now.")

        player = self.players[seat]
        with self._deal_guard() as guard:
            self._reveal()
            state.can_request_reveal = False
            state.phase = DealPhase.TRUMP_REVEALED
            state.message = (
                f"Trump is {state.revealed_trump}! {player.name}, you must play a trump if you have one."
            )
            guard.result = self._result(trump_revealed=True)
        return guard.result

    def play_card(self, seat: int, card: Card) -> ActionResult:
        self._require_turn(seat, PLAY_PHASES, "play")
        state = self.state
        player = self.players[seat]
        if not player.holds(card):
            raise IllegalAction(f"{player.name} does not hold {card}.")

        lead = state.lead_suit
        legal = legal_moves(player.hand, lead, state.revealed_trump, state.must_play_trump)
        if card not in legal:
            if lead is not None and player.has_suit(lead):
                raise RuleViolation(f"{player.name} must follow suit ({lead}).")
            raise RuleViolation(f"{player.name} must play a trump ({state.revealed_trump}).")

        with self._deal_guard() as guard:
            revealed_now = False
            breaking_suit = lead is not None and card.suit is not lead
            if breaking_suit and state.revealed_trump is None and state.hidden_trump is not None:
                if self.variant is RevealVariant.AUTO_REVEAL:
                    self._reveal()
                    revealed_now = True
                else:
                    state.can_request_reveal = False

            state.trick.add_play(seat, card)
            if not player.remove_card(card):
                raise InvariantBroken(f"{card} vanished from {player.name}'s hand.")
            logger.debug("%s played %s (%d on table).", player.name, card, len(state.trick.plays))

            if revealed_now:
                narration = f"{player.name} could not follow. Trump is {state.revealed_trump}! {player.name} plays {card}."
            else:
                narration = f"{player.name} plays {card}."

            if state.trick.is_full():
                guard.result = self._complete_trick(narration, trump_revealed=revealed_now)
            else:
                self._advance_turn(narration)
                guard.result = self._result(trump_revealed=revealed_now)
        return guard.result

    def conclude_trick(self) -> ActionResult:
        """Clear a finished trick and hand the lead to its winner."""
        state = self.state
        if state.phase is not DealPhase.TRICK_COMPLETED:
            raise IllegalAction(f"No finished trick to clear in phase {state.phase.name}.")
        last = state.last_trick
        with self._deal_guard() as guard:
            if last is None:
                raise InvariantBroken("Trick completed without a record.")
            state.played_cards.extend(state.trick.cards())
            state.trick = Trick(leader=last.winner)
            state.must_play_trump = False
            state.can_request_reveal = False

            if state.tricks_completed >= TRICKS_PER_DEAL:
                guard.result = self._end_deal()
            else:
                state.phase = DealPhase.PLAYER_TURN
                state.current_seat = last.winner
                state.message = f"{self.players[last.winner].name} leads."
                guard.result = self._result(trick_completed=True, trick_winner=last.winner)
        return guard.result

    def apply_action(self, seat: int, action: Action) -> ActionResult:
        """Commit a decision after re-validating seat and phase."""
        kind = getattr(action, "action_type", None)
        if kind is ActionType.PLAY_CARD:
            return self.play_card(seat, action.card)
        if kind is ActionType.REQUEST_TRUMP_REVEAL:
            return self.request_trump_reveal(seat)
        if kind is ActionType.SELECT_HIDDEN_TRUMP:
            if action.card is None:
                raise IllegalAction("No card named for the hidden trump.")
            return self.select_hidden_trump(seat, action.card)
        raise IllegalAction(f"Unknown action {action!r}.")

    def fail_deal(self, reason: str) -> ActionResult:
        """Abandon the current deal without scoring it."""
        state = self.state
        if state.phase is DealPhase.GAME_OVER:
            raise IllegalAction("The match is over.")
        logger.error("Deal abandoned: %s", reason)
        state.phase = DealPhase.DEAL_COMPLETED
        state.current_seat = None
        state.error = reason
        state.message = f"Error: {reason} Please restart the deal."
        return self._result(deal_completed=True, error=reason)

    def end_match(self) -> ActionResult:
        self.state.phase = DealPhase.GAME_OVER
        self.state.current_seat = None
        scores = ", ".join(f"{team.name}: {team.deals_won}" for team in self.teams)
        self.state.message = f"Match over. Deals won -> {scores}."
        return self._result()

    # Internals ---------------------------------------------------------

    def _require_turn(self, seat: int, phases: Iterable[DealPhase], verb: str) -> None:
        state = self.state
        if not 0 <= seat < NUM_SEATS:
            raise IllegalAction(f"Unknown seat {seat}.")
        if state.phase not in phases:
            raise IllegalAction(f"Cannot {verb} in phase {state.phase.name}.")
        if seat != state.current_seat:
            raise IllegalAction(f"Not {self.players[seat].name}'s turn.")

    def _reveal(self) -> None:
        state = self.state
        if state.revealed_trump is not None or state.hidden_trump is None:
            raise InvariantBroken("Trump can only be revealed once, after it was hidden.")
        state.revealed_trump = state.hidden_trump.suit
        state.trick.mark_reveal()
        state.must_play_trump = True
        logger.info("Trump revealed: %s (trick %d, card %d).", state.revealed_trump, state.tricks_completed + 1, state.trick.reveal_index)

    def _advance_turn(self, narration: str) -> None:
        state = self.state
        upcoming = next_seat(state.current_seat)
        state.current_seat = upcoming
        state.can_request_reveal = False
        lead = state.lead_suit
        nxt: Player = self.players[upcoming]
        if (
            self.variant is RevealVariant.OPTIONAL_REVEAL
            and state.revealed_trump is None
            and state.hidden_trump is not None
            and not nxt.has_suit(lead)
        ):
            state.can_request_reveal = True
            state.phase = DealPhase.AWAITING_TRUMP_REVEAL_CHOICE
            state.message = f"{narration} {nxt.name} cannot follow {lead} and may ask to reveal trump."
        elif state.must_play_trump:
            state.phase = DealPhase.TRUMP_REVEALED
            state.message = f"{narration} {nxt.name}'s turn; play trump if unable to follow."
        else:
            state.phase = DealPhase.PLAYER_TURN
            state.message = f"{narration} {nxt.name}'s turn."

    def _complete_trick(self, narration: str, *, trump_revealed: bool) -> ActionResult:
        state = self.state
        state.phase = DealPhase.TRICK_COMPLETED
        winner, winning_card = state.trick.winning_play(state.revealed_trump)
        team = self.team_for(winner)
        tens = count_tens(state.trick.cards())
        team.tricks_won += 1
        team.tens_captured += tens
        state.tricks_completed += 1
        state.completed_tricks.append(
            CompletedTrick(
                leader=state.trick.leader,
                plays=tuple(state.trick.plays),
                winner=winner,
                winning_card=winning_card,
                reveal_index=state.trick.reveal_index,
                tens=tens,
            )
        )
        state.current_seat = winner
        state.can_request_reveal = False
        state.message = f"{narration} {self.players[winner].name} wins the trick with {winning_card}."
        logger.info(
            "Trick %d to %s (%s): tricks=%d tens=%d",
            state.tricks_completed,
            self.players[winner].name,
            team.team_id,
            team.tricks_won,
            team.tens_captured,
        )
        if self.config.hold_completed_tricks:
            return self._result(trump_revealed=trump_revealed, trick_completed=True, trick_winner=winner)
        won = state.message
        concluded = self.conclude_trick()
        if self.state.phase is DealPhase.PLAYER_TURN:
            self.state.message = f"{won} {self.players[winner].name} leads."
        return replace(concluded, message=self.state.message, trump_revealed=trump_revealed)

    def _end_deal(self) -> ActionResult:
        state = self.state
        team_a, team_b = self.teams
        result = score_deal(
            tens=(team_a.tens_captured, team_b.tens_captured),
            tricks=(team_a.tricks_won, team_b.tricks_won),
        )
        previous = self.dealer
        dealer_team = self.team_for(previous)
        lines = [
            "--- Deal Ended ---",
            f"{team_a.name}: {team_a.tens_captured} Tens, {team_a.tricks_won} Tricks",
            f"{team_b.name}: {team_b.tens_captured} Tens, {team_b.tricks_won} Tricks",
            result.message,
        ]
        if result.winner is not None:
            winner_team = next(team for team in self.teams if team.team_id == result.winner)
            winner_team.deals_won += 1

        self.dealer = next_dealer(previous, result)
        if result.winner is None:
            lines.append(f"{self.players[self.dealer].name} (dealer) deals again.")
        elif result.winner == dealer_team.team_id:
            lines.append(f"Dealer's team ({dealer_team.name}) won the deal.")
            lines.append(f"{self.players[self.dealer].name} will deal next.")
        elif result.whitewash:
            lines.append(f"Dealer's team ({dealer_team.name}) lost by whitewash.")
            lines.append(f"{self.players[self.dealer].name} (dealer's partner) will deal next.")
        else:
            lines.append(f"Dealer's team ({dealer_team.name}) lost the deal.")
            lines.append(f"{self.players[self.dealer].name} (dealer) deals again.")

        state.result = result
        state.phase = DealPhase.DEAL_COMPLETED
        state.current_seat = None
        state.message = "\n".join(lines)
        self.deal_history.append(result)
        logger.info("Deal %d finished: %s Next dealer: seat %d.", len(self.deal_history), result.message, self.dealer)
        return self._result(trick_completed=True, trick_winner=state.last_trick.winner, deal_completed=True, deal_result=result)

    def _deal_guard(self) -> "_DealGuard":
        return _DealGuard(self)

    def _result(self, **changes) -> ActionResult:
        return ActionResult(
            phase=self.state.phase,
            current_seat=self.state.current_seat,
            message=self.state.message,
            **changes,
        )


class _DealGuard:
    """Turn an ``InvariantBroken`` raised mid-update into an abandoned deal."""

    def __init__(self, engine: MatchEngine) -> None:
        self.engine = engine
        self.result: Optional[ActionResult] = None

    def __enter__(self) -> "_DealGuard":
        return self

    def __exit__(self, exc_type, exc, tb) -> bool:
        if exc is not None and isinstance(exc, InvariantBroken):
            self.result = self.engine.fail_deal(str(exc))
            return True
        return False
