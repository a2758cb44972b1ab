"""
Tests for re-buy hooks and chip recovery.
"""

import pytest
from holdemarena.core.exceptions import InvalidActionError
from holdemarena.core.policies import LOAN_TEXT, house_loan, no_rebuy, recover_chips


class TestRebuy:
    """Tests for the hooks run at hand start."""

    def test_house_loan_tops_up_busted_seats(self, config, stacked_players):
        players = stacked_players(0, 500, 0, 10000)
        house_loan(players, config)

        assert [p.chips for p in players] == [10000, 500, 10000, 10000]
        assert players[0].action_text == LOAN_TEXT
        assert players[1].action_text is None

    def test_no_rebuy_leaves_seats(self, config, stacked_players):
        players = stacked_players(0, 500, 0, 10000)
        no_rebuy(players, config)
        assert [p.chips for p in players] == [0, 500, 0, 10000]


class TestRecoverChips:
    """Tests for the recovery code."""

    def test_restores_stake(self, config, stacked_players):
        players = stacked_players(0, 10000, 10000, 10000)
        updated = recover_chips(players, 0, "Camel", config)

        assert updated[0].chips == 10000
        assert players[0].chips == 0

    def test_wrong_code(self, config, stacked_players):
        with pytest.raises(InvalidActionError):
            recover_chips(stacked_players(0, 0, 0, 0), 0, "llama", config)

    @pytest.mark.parametrize("seat", [-1, 4])
    def test_unknown_seat(self, config, stacked_players, seat):
        with pytest.raises(InvalidActionError):
            recover_chips(stacked_players(), seat, "camel", config)
