"""
Tests for edge cases and boundary conditions.

These tests cover:
- Table configuration bounds
- Seat arithmetic around the table
- Player chip commitment limits
- State serialization
- Many consecutive bot hands keeping chips and pot balanced
"""

import random

import pytest
from holdemarena.agents import RandomBotAgent
from holdemarena.core.engine import start_hand
from holdemarena.core.player import Player
from holdemarena.core.rules import (
    TableConfig, get_blind_positions, get_first_to_act_preflop, min_raise_to, next_seat,
)
from holdemarena.core.state import GameState
from holdemarena.core.table import HoldemTable


class TestTableConfig:
    """Tests for configuration validation."""

    def test_defaults(self, config):
        assert config.initial_chips == 10000
        assert config.small_blind == 50
        assert config.big_blind == 100
        assert config.seats == 4
        assert config.max_bet == 3000
        assert config.recovery_code == "camel"

    @pytest.mark.parametrize("kwargs", [
        {"seats": 6},
        {"small_blind": 0},
        {"small_blind": 200, "big_blind": 100},
        {"max_bet": 50},
        {"initial_chips": 0},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            TableConfig(**kwargs)


class TestSeatArithmetic:
    """Tests for seat helpers."""

    def test_next_seat_wraps(self):
        assert next_seat(3) == 0
        assert next_seat(1) == 2

    def test_blind_positions_wrap(self):
        assert get_blind_positions(0) == (1, 2)
        assert get_blind_positions(2) == (3, 0)
        assert get_blind_positions(3) == (0, 1)

    def test_first_to_act_preflop(self):
        assert get_first_to_act_preflop(1) == 0
        assert get_first_to_act_preflop(3) == 2

    def test_min_raise_to(self):
        assert min_raise_to(100, 100) == 200
        assert min_raise_to(500, 400) == 900


class TestPlayerCommit:
    """Tests for moving chips into the pot."""

    def test_commit_caps_at_stack(self):
        player = Player(id=0, chips=80)
        assert player.commit(100) == 80
        assert player.chips == 0
        assert player.bet == 80
        assert player.total_hand_bet == 80
        assert player.is_all_in

    def test_commit_non_positive(self):
        player = Player(id=0, chips=80)
        assert player.commit(0) == 0
        assert player.commit(-10) == 0
        assert player.chips == 80

    def test_new_round_keeps_hand_total(self):
        player = Player(id=0, chips=500)
        player.commit(200)
        player.has_acted = True
        player.reset_for_new_round()
        assert player.bet == 0
        assert player.total_hand_bet == 200
        assert not player.has_acted


class TestSerialization:
    """Tests for snapshot round trips."""

    def test_state_round_trip(self, fresh_hand):
        state, players, _ = fresh_hand
        restored = GameState.from_dict(state.to_dict())
        assert restored == state

    def test_player_round_trip(self, fresh_hand):
        _, players, _ = fresh_hand
        for player in players:
            assert Player.from_dict(player.to_private_dict()) == player

    def test_public_dict_hides_cards(self, fresh_hand):
        _, players, _ = fresh_hand
        assert "cards" not in players[0].to_public_dict()
        assert len(players[0].to_private_dict()["cards"]) == 2

    def test_state_dict_sorts_winners(self):
        state = GameState(winners=[3, 1])
        assert state.to_dict()["winners"] == [1, 3]


class TestConsecutiveHands:
    """Bots play many hands; chips are conserved up to split remainders."""

    def test_chips_and_pot_stay_balanced(self):
        rng = random.Random(2024)
        seeds = iter(range(1000, 2000))
        table = HoldemTable(
            agents=[RandomBotAgent(i, rng=random.Random(rng.getrandbits(32))) for i in range(4)],
            seed_factory=lambda: next(seeds),
        )

        for _ in range(60):
            table.start_hand()
            before = sum(p.chips for p in table.players) + table.state.pot
            while table.is_hand_running():
                table.play_turn()
                assert table.state.pot == sum(p.total_hand_bet for p in table.players)
                if table.is_hand_running():
                    assert sum(p.chips for p in table.players) + table.state.pot == before

            winners = len(table.state.winners)
            after = sum(p.chips for p in table.players)
            assert after == before - table.state.pot % winners

    def test_starting_hands_from_fresh_state(self):
        state, players, _ = start_hand(GameState(), None, seed=5)
        assert state.dealer_index == 1
        assert len(players) == 4
