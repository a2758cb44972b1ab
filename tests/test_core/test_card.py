"""
Tests for Card and seeded Deck.
"""

import copy

import pytest
from holdemarena.core.card import (
    Card, Deck, Rank, Suit, SeededRNG, canonical_cards, create_deck, parse_cards,
)
from holdemarena.core.exceptions import DeckExhaustedError


class TestCard:
    """Tests for Card class."""

    def test_card_creation(self):
        card = Card(Rank.ACE, Suit.SPADES)
        assert card.rank == Rank.ACE
        assert card.suit == Suit.SPADES

    def test_card_from_plain_values(self):
        assert Card(14, "♠") == Card(Rank.ACE, Suit.SPADES)

    def test_card_from_string(self):
        """Test creating cards from string notation."""
        assert Card.from_string("As") == Card(Rank.ACE, Suit.SPADES)
        assert Card.from_string("K♥") == Card(Rank.KING, Suit.HEARTS)
        assert Card.from_string("Td") == Card(Rank.TEN, Suit.DIAMONDS)
        assert Card.from_string("10c") == Card(Rank.TEN, Suit.CLUBS)

    def test_invalid_card_string(self):
        with pytest.raises(ValueError):
            Card.from_string("X")
        with pytest.raises(ValueError):
            Card.from_string("1s")
        with pytest.raises(ValueError):
            Card.from_string("Ax")

    def test_card_is_immutable(self):
        card = Card(Rank.ACE, Suit.SPADES)
        with pytest.raises(AttributeError):
            card.rank = Rank.KING

    def test_card_equality_and_hash(self):
        card1 = Card(Rank.ACE, Suit.SPADES)
        card2 = Card(Rank.ACE, Suit.SPADES)
        card3 = Card(Rank.KING, Suit.SPADES)

        assert card1 == card2
        assert card1 != card3
        assert len({card1, card2, card3}) == 2

    def test_card_dict_round_trip(self):
        card = Card(Rank.TEN, Suit.HEARTS)
        assert card.to_dict() == {"rank": 10, "suit": "♥"}
        assert Card.from_dict(card.to_dict()) == card

    def test_card_str(self):
        assert str(Card(Rank.ACE, Suit.SPADES)) == "A♠"
        assert str(Card(Rank.TEN, Suit.HEARTS)) == "T♥"

    def test_deepcopy_returns_same_card(self):
        card = Card(Rank.TWO, Suit.CLUBS)
        assert copy.deepcopy(card) is card

    def test_parse_cards(self):
        assert parse_cards("As Kh Td") == [
            Card(Rank.ACE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.TEN, Suit.DIAMONDS),
        ]
        assert parse_cards("AsKh") == [Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.HEARTS)]
        assert parse_cards("") == []


class TestSeededRNG:
    """Tests for the linear congruential generator."""

    def test_first_values(self):
        rng = SeededRNG(1)
        assert rng.next() == 58598 / 233280
        # (58598 * 9301 + 49297) % 233280
        assert rng.next() == ((58598 * 9301 + 49297) % 233280) / 233280

    def test_values_in_unit_interval(self):
        rng = SeededRNG(987654321)
        for _ in range(1000):
            value = rng.next()
            assert 0 <= value < 1


class TestDeck:
    """Tests for the seeded deck."""

    def test_canonical_order(self):
        cards = canonical_cards()
        assert len(cards) == 52
        assert cards[0] == Card(Rank.TWO, Suit.HEARTS)
        assert cards[13] == Card(Rank.TWO, Suit.DIAMONDS)
        assert cards[51] == Card(Rank.ACE, Suit.SPADES)

    def test_deck_is_permutation(self):
        deck = create_deck(1234)
        assert len(deck) == 52
        assert set(deck) == set(canonical_cards())

    def test_same_seed_same_order(self):
        assert create_deck(42) == create_deck(42)
        assert Deck.from_seed(7).cards == Deck.from_seed(7).cards

    def test_different_seeds_differ(self):
        assert create_deck(1) != create_deck(2)

    def test_first_swap(self):
        """Seed 1 swaps the last position with index 13 (two of diamonds) first."""
        assert create_deck(1)[51] == Card(Rank.TWO, Suit.DIAMONDS)

    def test_large_seed(self):
        deck = create_deck(1_700_000_000_000)
        assert set(deck) == set(canonical_cards())

    def test_deal_from_front(self, seeded_deck):
        expected = seeded_deck.cards[:3]
        dealt = seeded_deck.deal(3)

        assert dealt == expected
        assert seeded_deck.remaining == 49
        assert seeded_deck.dealt_cards == expected

    def test_deal_one(self, seeded_deck):
        first = seeded_deck.cards[0]
        assert seeded_deck.deal_one() == first
        assert len(seeded_deck) == 51

    def test_deal_all_cards_unique(self, seeded_deck):
        dealt = seeded_deck.deal(52)
        assert len(set(dealt)) == 52
        assert seeded_deck.remaining == 0

    def test_deck_exhausted(self, seeded_deck):
        seeded_deck.deal(50)
        with pytest.raises(DeckExhaustedError):
            seeded_deck.deal(3)
        # Nothing was dealt by the failed call
        assert seeded_deck.remaining == 2

    def test_copy_is_independent(self, seeded_deck):
        clone = seeded_deck.copy()
        clone.deal(5)
        assert seeded_deck.remaining == 52
        assert clone.remaining == 47
