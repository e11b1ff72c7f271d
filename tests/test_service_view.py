import pytest

from engine.cards import serialize_card
from engine.errors import IllegalAction
from engine.rules_schema import MatchConfig
from engine.service import DealService


def test_deal_service_initial_view():
    service = DealService(config=MatchConfig(seed=7, starting_dealer=3))

    view = service.start_new_deal(perspective=0)
    assert view.phase == "awaiting_trump_selection"
    assert view.dealer == 3
    assert view.trump_selector == 0
    assert view.current_player == 0
    assert len(view.hand) == 13
    assert view.remaining_cards == [13, 13, 13, 13]
    assert view.trick is None
    assert view.trump is None
    assert not view.hidden_trump_set
    assert [team.seats for team in view.teams] == [(0, 2), (1, 3)]


def test_hidden_trump_visible_only_to_selector():
    service = DealService(config=MatchConfig(seed=7))
    view = service.start_new_deal(perspective=1)
    chosen = view.hand[0]

    result = service.select_hidden_trump(1, chosen)
    assert result.deal.hidden_trump == chosen
    assert result.deal.hidden_trump_set

    other = service.get_deal_view(perspective=2)
    assert other.hidden_trump_set
    assert other.hidden_trump is None
    assert other.trump is None


def test_play_by_payload_updates_trick_view():
    service = DealService(config=MatchConfig(seed=9))
    view = service.start_new_deal(perspective=1)
    service.select_hidden_trump(1, view.hand[-1])
    lead = service.get_deal_view(1).legal_moves[0]

    result = service.play_card(1, lead)
    trick = result.deal.trick
    assert trick.leader == 1
    assert trick.plays[0].card == lead
    assert result.deal.lead_suit == lead["suit"]
    assert result.deal.current_player == 2
    assert result.deal.remaining_cards[1] == 12


def test_payload_without_id_matches_by_face():
    service = DealService(config=MatchConfig(seed=9))
    service.start_new_deal(perspective=1)
    card = service.engine.hand(1)[0]
    payload = {"rank": card.rank.name.lower(), "suit": card.suit.value}

    result = service.select_hidden_trump(1, payload)
    assert result.deal.hidden_trump == serialize_card(card)


def test_foreign_card_payload_is_rejected():
    service = DealService(config=MatchConfig(seed=9))
    service.start_new_deal(perspective=1)
    foreign = serialize_card(service.engine.hand(2)[0])
    with pytest.raises(IllegalAction):
        service.select_hidden_trump(1, foreign)
