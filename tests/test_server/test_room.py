"""
Tests for the in-memory room service.
"""

import pytest
from holdemarena.core.exceptions import InvalidActionError, SettlementError
from holdemarena.core.rules import TableConfig
from holdemarena.server.room import RoomService


@pytest.fixture
def room():
    """Room dealing every hand from seed 42 (button on seat 1, seat 0 opens)."""
    return RoomService(seed_factory=lambda: 42)


class TestJoin:
    """Tests for taking seats."""

    def test_fills_seats_in_order(self, room):
        assert room.join("alice")[0] == 0
        assert room.join("bob")[0] == 1

        _, state = room.join("carol")
        assert [p.name for p in state.players] == ["alice", "bob", "carol", None]

    def test_blank_name(self, room):
        with pytest.raises(InvalidActionError, match="name required"):
            room.join("   ")

    def test_table_full(self, room):
        for name in ["a", "b", "c", "d"]:
            room.join(name)
        with pytest.raises(InvalidActionError, match="table full"):
            room.join("e")

    def test_rejoin_full_table(self, room):
        for name in ["a", "b", "c", "d"]:
            room.join(name)
        assert room.join("c")[0] == 2

    def test_join_between_hands_resets_stake(self, room):
        room.table.players[0].chips = 12
        _, state = room.join("alice")
        assert state.players[0].chips == 10000
        assert room.table.players[0].is_human

    def test_join_mid_hand_keeps_stake(self, room):
        room.start()
        room.join("alice")
        assert room.table.players[0].chips == 10000
        assert room.table.players[3].total_hand_bet == 100


class TestStartAndMove:
    """Tests for dealing and acting."""

    def test_start(self, room):
        state = room.start()
        assert state.hand_id == 1
        assert state.deck_seed == 42
        assert state.stage == "PREFLOP"
        assert state.pot == 150
        assert state.dealer_index == 1
        assert state.current_turn_index == 0

    def test_move_advances_turn(self, room):
        room.start()
        state = room.move(0, "raise", 300)
        assert state.highest_bet == 300
        assert state.pot == 450
        assert state.current_turn_index == 1

    def test_room_drives_streets_to_showdown(self, room):
        room.start()
        for seat in [0, 1, 2]:
            room.move(seat, "call")
        state = room.move(3, "check")
        assert state.stage == "FLOP"
        assert state.current_turn_index == 2

        # The first check closes each street after the flop
        state = room.move(2, "check")
        assert state.stage == "TURN"
        state = room.move(2, "check")
        assert state.stage == "RIVER"
        state = room.move(2, "check")

        assert state.stage == "SHOWDOWN"
        assert state.winners
        assert state.current_turn_index == -1

    def test_fold_out(self, room):
        room.start()
        for seat in [0, 1, 2]:
            state = room.move(seat, "fold")
        assert state.stage == "SHOWDOWN"
        assert state.winners == [3]
        assert state.players[3].chips == 10050

    def test_invalid_player_index(self, room):
        room.start()
        with pytest.raises(InvalidActionError, match="invalid playerIndex"):
            room.move(4, "call")

    def test_move_out_of_turn_is_rejected(self, room):
        room.start()
        before = room.snapshot()
        with pytest.raises(InvalidActionError):
            room.move(2, "call")
        assert room.snapshot() == before

    def test_short_stacked_room(self):
        room = RoomService(TableConfig(initial_chips=500), seed_factory=lambda: 42)
        room.start()
        room.move(0, "allin")
        room.move(1, "call")
        room.move(2, "call")
        state = room.move(3, "call")
        assert state.stage == "SHOWDOWN"
        assert state.pot == 2000


class TestSettle:
    """Tests for explicit settlement."""

    def test_settle_splits(self, room):
        room.start()
        state = room.settle([0, 0, 3])
        assert state.winners == [0, 3]
        assert state.players[0].chips == 10075
        assert state.players[3].chips == 9900 + 75

    def test_settle_without_hand(self, room):
        with pytest.raises(SettlementError):
            room.settle([0])

    def test_settle_empty(self, room):
        room.start()
        with pytest.raises(SettlementError):
            room.settle([])

    def test_settle_twice(self, room):
        room.start()
        room.settle([1])
        with pytest.raises(SettlementError):
            room.settle([1])

    def test_reset(self, room):
        room.join("alice")
        room.start()
        room.reset()
        state = room.snapshot()
        assert state.stage == "IDLE"
        assert state.players[0].name is None
