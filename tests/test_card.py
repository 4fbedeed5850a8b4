import pytest
from dataclasses import FrozenInstanceError

from treasurechest.common.card import Card, Suit, Rank


def test_card_initialization():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert card.suit == Suit.HEARTS
    assert card.rank == Rank.EIGHT


def test_card_id():
    assert Card(Suit.HEARTS, Rank.SEVEN).id == "7-hearts"
    assert Card(Suit.SPADES, Rank.TEN).id == "10-spades"
    assert Card(Suit.CLUBS, Rank.KING).id == "K-clubs"


def test_card_from_id():
    assert Card.from_id("7-hearts") == Card(Suit.HEARTS, Rank.SEVEN)
    assert Card.from_id("10-spades") == Card(Suit.SPADES, Rank.TEN)
    assert Card.from_id("A-diamonds") == Card(Suit.DIAMONDS, Rank.ACE)


def test_card_from_invalid_id():
    with pytest.raises(ValueError):
        Card.from_id("7-stars")
    with pytest.raises(ValueError):
        Card.from_id("1-hearts")


def test_card_repr():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    assert repr(card) == "Card(Suit.HEARTS, Rank.EIGHT)"


def test_card_str():
    assert str(Card(Suit.HEARTS, Rank.EIGHT)) == "8 of ♥"
    assert str(Card(Suit.SPADES, Rank.QUEEN)) == "Q of ♠"


def test_invalid_suit():
    with pytest.raises(TypeError):
        Card("Z", Rank.EIGHT)


def test_invalid_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, "invalid")


def test_non_enum_rank():
    with pytest.raises(TypeError):
        Card(Suit.HEARTS, 8)


def test_card_is_immutable():
    card = Card(Suit.HEARTS, Rank.EIGHT)
    with pytest.raises(FrozenInstanceError):
        card.rank = Rank.NINE


def test_rank_order():
    ranks = list(Rank)
    assert len(ranks) == 13
    assert ranks[0] == Rank.TWO
    assert ranks[-1] == Rank.ACE
    assert Rank.TEN.order < Rank.JACK.order < Rank.ACE.order


def test_rank_from_str():
    assert Rank.from_str("7") == Rank.SEVEN
    assert Rank.from_str("10") == Rank.TEN
    assert Rank.from_str("q") == Rank.QUEEN
    with pytest.raises(ValueError):
        Rank.from_str("11")


def test_card_equality():
    card1 = Card(Suit.HEARTS, Rank.EIGHT)
    card2 = Card(Suit.HEARTS, Rank.EIGHT)
    card3 = Card(Suit.CLUBS, Rank.EIGHT)
    card4 = Card(Suit.HEARTS, Rank.NINE)

    assert card1 == card2
    assert card1 != card3
    assert card1 != card4


def test_card_hash():
    card1 = Card(Suit.HEARTS, Rank.EIGHT)
    card2 = Card(Suit.HEARTS, Rank.EIGHT)
    card3 = Card(Suit.CLUBS, Rank.NINE)

    card_set = {card1, card2, card3}

    assert len(card_set) == 2
    assert card1 in card_set
    assert card3 in card_set
