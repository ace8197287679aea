"""Card 数据模型测试"""

import pytest
from balatro.engine.card import (
    Card, Rank, Suit, create_deck, sort_cards, point_value_sum,
)
from balatro.engine.errors import InvalidArgumentError, BalatroError


class TestCard:

    def test_point_values(self):
        assert Card(Rank.ACE, Suit.SPADES).point_value == 11
        assert Card(Rank.KING, Suit.SPADES).point_value == 10
        assert Card(Rank.JACK, Suit.HEARTS).point_value == 10
        assert Card(Rank.TEN, Suit.HEARTS).point_value == 10
        assert Card(Rank.TWO, Suit.CLUBS).point_value == 2

    def test_face_cards(self):
        assert Card(Rank.QUEEN, Suit.CLUBS).is_face
        assert not Card(Rank.ACE, Suit.CLUBS).is_face
        assert not Card(Rank.TEN, Suit.CLUBS).is_face

    def test_color(self):
        assert Card(Rank.TWO, Suit.HEARTS).color == "Red"
        assert Card(Rank.TWO, Suit.DIAMONDS).color == "Red"
        assert Card(Rank.TWO, Suit.SPADES).color == "Black"

    def test_string_coercion(self):
        card = Card("K", "Spades")
        assert card.rank == Rank.KING
        assert card.suit == Suit.SPADES

    def test_invalid_rank(self):
        with pytest.raises(InvalidArgumentError):
            Card("X", Suit.SPADES)
        with pytest.raises(InvalidArgumentError):
            Card(1, Suit.SPADES)

    def test_invalid_suit(self):
        with pytest.raises(InvalidArgumentError):
            Card(Rank.TWO, "Stars")

    def test_negative_point_value(self):
        with pytest.raises(InvalidArgumentError):
            Card(Rank.TWO, Suit.SPADES, point_value=-1)

    def test_error_hierarchy(self):
        with pytest.raises(BalatroError):
            Card(Rank.TWO, "Stars")
        with pytest.raises(ValueError):
            Card(Rank.TWO, "Stars")

    def test_immutable(self):
        card = Card(Rank.TWO, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.THREE

    def test_equality_and_hash(self):
        assert Card(Rank.TWO, Suit.SPADES) == Card("2", "♠")
        assert len({Card(Rank.TWO, Suit.SPADES), Card(Rank.TWO, Suit.SPADES)}) == 1


class TestParse:

    @pytest.mark.parametrize("text, rank, suit", [
        ("♠A", Rank.ACE, Suit.SPADES),
        ("A♠", Rank.ACE, Suit.SPADES),
        ("10♥", Rank.TEN, Suit.HEARTS),
        ("♦10", Rank.TEN, Suit.DIAMONDS),
        ("K of Spades", Rank.KING, Suit.SPADES),
        ("q♣", Rank.QUEEN, Suit.CLUBS),
    ])
    def test_parse(self, text, rank, suit):
        card = Card.parse(text)
        assert card.rank == rank
        assert card.suit == suit

    def test_parse_garbage(self):
        with pytest.raises(InvalidArgumentError):
            Card.parse("?")
        with pytest.raises(InvalidArgumentError):
            Card.parse("Z♠")

    def test_display_round_trip(self):
        card = Card(Rank.TEN, Suit.HEARTS)
        assert card.display == "♥10"
        assert Card.parse(card.display) == card


class TestCreateDeck:

    def test_52_unique_cards(self):
        deck = create_deck()
        assert len(deck) == 52
        assert len({(c.suit, c.rank) for c in deck}) == 52

    def test_13_per_suit(self):
        deck = create_deck()
        for suit in Suit:
            assert sum(1 for c in deck if c.suit == suit) == 13

    def test_four_aces_twelve_faces(self):
        deck = create_deck()
        assert sum(1 for c in deck if c.rank == Rank.ACE) == 4
        assert sum(1 for c in deck if c.is_face) == 12

    def test_generation_order(self):
        deck = create_deck()
        assert deck[0] == Card(Rank.ACE, Suit.HEARTS)
        assert deck[12] == Card(Rank.KING, Suit.HEARTS)
        assert deck[-1] == Card(Rank.KING, Suit.SPADES)

    def test_total_point_value(self):
        # 每个花色: 11 + (2..10) + 3×10 = 95
        assert point_value_sum(create_deck()) == 95 * 4

    def test_sort_cards(self):
        cards = [Card.parse("K♠"), Card.parse("2♥"), Card.parse("A♣")]
        assert [c.rank for c in sort_cards(cards)] == [Rank.TWO, Rank.KING, Rank.ACE]
