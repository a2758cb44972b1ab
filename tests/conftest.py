"""
Pytest configuration and shared fixtures for HoldemArena tests.
"""

import pytest
from holdemarena.core.card import Card, Deck, Rank, Suit, parse_cards
from holdemarena.core.engine import start_hand
from holdemarena.core.player import Player, create_players
from holdemarena.core.rules import DEFAULT_CONFIG, PendingStep, Stage
from holdemarena.core.state import GameState


@pytest.fixture
def config():
    """The default table configuration."""
    return DEFAULT_CONFIG


@pytest.fixture
def seeded_deck():
    """A deck built from a fixed seed."""
    return Deck.from_seed(1234)


@pytest.fixture
def fresh_hand():
    """
    First hand on a fresh table with seed 42.

    Dealer is seat 1, small blind seat 2, big blind seat 3, seat 0 acts first.
    """
    return start_hand(None, seed=42)


@pytest.fixture
def stacked_players():
    """Factory for four seats with the given stacks."""
    def make(*chips):
        players = create_players(DEFAULT_CONFIG.initial_chips)
        for player, amount in zip(players, chips):
            player.chips = amount
        return players
    return make


@pytest.fixture
def river_table():
    """
    Factory for a hand that finished betting on the river.

    Each seat is given as (hole cards string or None for folded, total bet).
    Returns (GameState, players, Deck) with a pending showdown.
    """
    def make(board, seats, chips=1000):
        players = []
        for i, (hole, total) in enumerate(seats):
            players.append(Player(
                id=i,
                chips=chips,
                total_hand_bet=total,
                cards=parse_cards(hole) if hole else [],
                has_folded=hole is None,
                is_dealer=(i == 0),
            ))
        state = GameState(
            stage=Stage.RIVER,
            pot=sum(total for _, total in seats),
            community_cards=parse_cards(board),
            dealer_index=0,
            round_number=1,
            pending=PendingStep.NEXT_STAGE,
        )
        return state, players, Deck([])
    return make


@pytest.fixture
def royal_flush():
    """Hole cards and board making a royal flush in spades."""
    return (
        [Card(Rank.ACE, Suit.SPADES), Card(Rank.KING, Suit.SPADES)],
        [
            Card(Rank.QUEEN, Suit.SPADES),
            Card(Rank.JACK, Suit.SPADES),
            Card(Rank.TEN, Suit.SPADES),
            Card(Rank.TWO, Suit.DIAMONDS),
            Card(Rank.THREE, Suit.CLUBS),
        ],
    )


@pytest.fixture
def wheel_straight():
    """Hole cards and board making a wheel (A-2-3-4-5)."""
    return (
        [Card(Rank.ACE, Suit.SPADES), Card(Rank.TWO, Suit.HEARTS)],
        [
            Card(Rank.THREE, Suit.DIAMONDS),
            Card(Rank.FOUR, Suit.CLUBS),
            Card(Rank.FIVE, Suit.SPADES),
            Card(Rank.KING, Suit.HEARTS),
            Card(Rank.NINE, Suit.CLUBS),
        ],
    )
