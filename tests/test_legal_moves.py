from engine.cards import Card, Rank, Suit
from engine.mechanics import is_legal, legal_moves


def test_must_follow_lead_suit_when_able():
    hand = [
        Card(Suit.HEARTS, Rank.TWO, 0),
        Card(Suit.SPADES, Rank.ACE, 1),
        Card(Suit.HEARTS, Rank.KING, 2),
    ]
    moves = legal_moves(hand, Suit.HEARTS, Suit.SPADES, must_play_trump=True)
    assert moves == [hand[0], hand[2]]


def test_any_card_when_void_and_no_obligation():
    hand = [Card(Suit.CLUBS, Rank.TWO, 0), Card(Suit.SPADES, Rank.ACE, 1)]
    assert legal_moves(hand, Suit.HEARTS, Suit.SPADES) == hand
    assert legal_moves(hand, Suit.HEARTS, None, must_play_trump=True) == hand


def test_obligatory_trump_when_void_and_holding_trump():
    hand = [
        Card(Suit.CLUBS, Rank.TWO, 0),
        Card(Suit.SPADES, Rank.THREE, 1),
        Card(Suit.SPADES, Rank.ACE, 2),
    ]
    assert legal_moves(hand, Suit.HEARTS, Suit.SPADES, must_play_trump=True) == [hand[1], hand[2]]
    assert not is_legal(hand[0], hand, Suit.HEARTS, Suit.SPADES, must_play_trump=True)


def test_obligation_lapses_without_trump_in_hand():
    hand = [Card(Suit.CLUBS, Rank.TWO, 0), Card(Suit.DIAMONDS, Rank.ACE, 1)]
    assert legal_moves(hand, Suit.HEARTS, Suit.SPADES, must_play_trump=True) == hand


def test_leader_may_play_anything():
    hand = [Card(Suit.CLUBS, Rank.TWO, 0), Card(Suit.DIAMONDS, Rank.ACE, 1)]
    assert legal_moves(hand, None, Suit.SPADES) == hand
