import pytest

from engine.cards import Card, Rank, Suit
from engine.trick import Trick, TrickError, winning_index


def c(suit, rank, ident):
    return Card(suit, rank, ident)


def test_highest_lead_suit_wins_without_trump():
    plays = [
        (1, c(Suit.HEARTS, Rank.NINE, 0)),
        (2, c(Suit.SPADES, Rank.ACE, 1)),
        (3, c(Suit.HEARTS, Rank.KING, 2)),
        (0, c(Suit.HEARTS, Rank.TWO, 3)),
    ]
    assert winning_index(plays, trump=None) == 2


def test_any_trump_beats_lead_suit():
    plays = [
        (1, c(Suit.HEARTS, Rank.ACE, 0)),
        (2, c(Suit.SPADES, Rank.TWO, 1)),
        (3, c(Suit.SPADES, Rank.FIVE, 2)),
        (0, c(Suit.HEARTS, Rank.KING, 3)),
    ]
    assert winning_index(plays, trump=Suit.SPADES) == 2


def test_cards_before_reveal_index_are_not_trump():
    plays = [
        (1, c(Suit.HEARTS, Rank.FIVE, 0)),
        (2, c(Suit.SPADES, Rank.ACE, 1)),
        (3, c(Suit.SPADES, Rank.TWO, 2)),
        (0, c(Suit.HEARTS, Rank.KING, 3)),
    ]
    # Trump revealed when the third card was played; the Ace of Spades was only a discard.
    assert winning_index(plays, trump=Suit.SPADES, reveal_index=2) == 2
    assert winning_index(plays, trump=Suit.SPADES, reveal_index=None) == 1


def test_pre_reveal_trump_suit_lead_is_ordinary_lead():
    plays = [
        (1, c(Suit.SPADES, Rank.KING, 0)),
        (2, c(Suit.CLUBS, Rank.TWO, 1)),
        (3, c(Suit.SPADES, Rank.THREE, 2)),
        (0, c(Suit.DIAMONDS, Rank.ACE, 3)),
    ]
    assert winning_index(plays, trump=Suit.SPADES, reveal_index=1) == 2


def test_trick_enforces_turn_order_and_size():
    trick = Trick(leader=1)
    with pytest.raises(TrickError):
        trick.add_play(2, c(Suit.HEARTS, Rank.TWO, 0))
    for offset, seat in enumerate((1, 2, 3, 0)):
        trick.add_play(seat, c(Suit.HEARTS, Rank(offset + 2), offset))
    assert trick.is_full()
    with pytest.raises(TrickError):
        trick.add_play(1, c(Suit.CLUBS, Rank.TWO, 9))


def test_empty_trick_has_no_winner():
    with pytest.raises(TrickError):
        Trick(leader=0).winning_play(Suit.SPADES)
