import pytest

from engine.scoring import ScoringError, WinReason, next_dealer, score_deal


def test_mendikot_wins_regardless_of_tricks():
    result = score_deal(tens=(4, 0), tricks=(1, 12))
    assert result.winner == "A"
    assert result.reason is WinReason.MENDIKOT


def test_three_tens_wins():
    result = score_deal(tens=(1, 3), tricks=(10, 3))
    assert result.winner == "B"
    assert result.reason is WinReason.THREE_TENS


def test_split_tens_decided_by_seven_tricks():
    result = score_deal(tens=(2, 2), tricks=(8, 5))
    assert result.winner == "A"
    assert result.reason is WinReason.TRICKS_ON_SPLIT_TENS
    assert score_deal(tens=(2, 2), tricks=(6, 7)).winner == "B"


def test_unequal_tens_below_three_go_to_more_tens():
    # Only reachable before every Ten is captured, so check it on partial totals.
    result = score_deal(tens=(1, 0), tricks=(2, 11), strict=False)
    assert result.winner == "A"
    assert result.reason is WinReason.MORE_TENS


@pytest.mark.parametrize("a_tricks", range(14))
def test_thirteen_tricks_always_give_someone_seven(a_tricks):
    # With tied Tens the draw branch needs both sides under seven, which 13 tricks never allow.
    result = score_deal(tens=(2, 2), tricks=(a_tricks, 13 - a_tricks))
    assert result.winner is not None


def test_tied_tens_draw_branch_is_only_reachable_on_partial_totals():
    result = score_deal(tens=(1, 1), tricks=(6, 6), strict=False)
    assert result.is_draw
    assert result.reason is WinReason.DRAW
    assert score_deal(tens=(0, 0), tricks=(7, 5), strict=False).reason is WinReason.TRICKS_ON_TIED_TENS


def test_scoring_is_deterministic():
    first = score_deal(tens=(2, 2), tricks=(9, 4))
    second = score_deal(tens=(2, 2), tricks=(9, 4))
    assert first == second


def test_impossible_totals_rejected():
    with pytest.raises(ScoringError):
        score_deal(tens=(3, 2), tricks=(7, 6))
    with pytest.raises(ScoringError):
        score_deal(tens=(2, 2), tricks=(7, 5))


def test_dealer_team_win_passes_deal_clockwise():
    result = score_deal(tens=(3, 1), tricks=(7, 6))
    assert next_dealer(0, result) == 1
    assert next_dealer(2, result) == 3


def test_dealer_team_loss_keeps_dealer():
    result = score_deal(tens=(3, 1), tricks=(7, 6))
    assert next_dealer(1, result) == 1


def test_whitewash_against_dealer_team_passes_to_partner():
    result = score_deal(tens=(0, 4), tricks=(0, 13))
    assert result.whitewash
    assert next_dealer(0, result) == 2
    assert next_dealer(2, result) == 0


def test_whitewash_by_dealer_team_still_rotates():
    result = score_deal(tens=(4, 0), tricks=(13, 0))
    assert result.whitewash
    assert next_dealer(0, result) == 1
