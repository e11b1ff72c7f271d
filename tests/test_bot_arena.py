from bots.base import BotStrategy
from bots.bot_arena import play_bot_turn, run_match, seat_bots
from engine.actions import PlayCard
from engine.cards import Card, Rank, Suit
from engine.game import MatchEngine
from engine.rules_schema import MatchConfig, RevealVariant
from engine.state import DealPhase


def test_run_match_executes():
    config = MatchConfig(seed=7, difficulty="high", variant=RevealVariant.OPTIONAL_REVEAL)
    results = run_match(config, n_deals=2)
    assert set(results["deals_won"]) == {"A", "B"}
    assert len(results["history"]) == 2
    assert all(entry["error"] is None for entry in results["history"])
    assert sum(results["deals_won"].values()) <= 2


def test_seat_bots_skips_human_seats():
    bots = seat_bots(MatchConfig(human_seats=[0]), seed=1)
    assert sorted(bots) == [1, 2, 3]


class GhostCardBot(BotStrategy):
    """Always proposes a card nobody holds."""

    name = "Ghost"

    def __init__(self):
        super().__init__(seed=0)
        self.calls = 0

    def decide_next_action(self, hand, state):
        self.calls += 1
        return PlayCard(Card(Suit.CLUBS, Rank.ACE, 9999))


def test_rejected_bot_decisions_abandon_the_deal_after_retries():
    engine = MatchEngine(MatchConfig(seed=3, max_decision_attempts=2))
    engine.start_new_deal()
    bot = GhostCardBot()

    result = play_bot_turn(engine, bot)

    assert bot.calls == 2
    assert result.deal_completed
    assert result.error is not None
    assert engine.phase is DealPhase.DEAL_COMPLETED
    assert engine.state.result is None
