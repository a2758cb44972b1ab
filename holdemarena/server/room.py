"""
Room service: one server-authoritative table behind the HTTP API.

The room accepts four operations (join, start, move, settle) and returns the
room state after each. Unlike a plain relay, every move goes through the
engine: rejected moves raise, and once betting closes the room deals the
next street, runs the board out and settles the showdown itself.
"""

from __future__ import annotations
from typing import Callable, List, Optional, Tuple
import logging

from holdemarena.core.engine import current_time_seed
from holdemarena.core.exceptions import InvalidActionError
from holdemarena.core.policies import RebuyHook, house_loan
from holdemarena.core.rules import Stage, TableConfig, DEFAULT_CONFIG
from holdemarena.core.table import HoldemTable
from holdemarena.server.schemas import RoomPlayer, RoomState


logger = logging.getLogger(__name__)


class RoomService:
    """
    In-memory room holding a single table.

    Usage:
        room = RoomService()
        seat, state = room.join("alice")
        room.start()
        room.move(state.current_turn_index, "call")
    """

    def __init__(
        self,
        config: TableConfig = DEFAULT_CONFIG,
        seed_factory: Optional[Callable[[], int]] = None,
        rebuy: RebuyHook = house_loan,
    ):
        self.config = config
        self.seed_factory = seed_factory or current_time_seed
        self.rebuy = rebuy
        self.reset()

    def reset(self) -> None:
        """Empty every seat and forget the running hand."""
        self.table = HoldemTable(
            self.config,
            seed_factory=self.seed_factory,
            rebuy=self.rebuy,
            names=[None] * self.config.seats,
        )

    def snapshot(self) -> RoomState:
        """Current room state in wire form."""
        state = self.table.state
        return RoomState(
            hand_id=state.round_number,
            deck_seed=state.deck_seed,
            stage=state.stage.value,
            pot=state.pot,
            highest_bet=state.highest_bet,
            dealer_index=state.dealer_index,
            current_turn_index=state.current_turn_index,
            winners=sorted(state.winners),
            players=[
                RoomPlayer(
                    index=p.id,
                    name=p.name,
                    chips=p.chips,
                    bet=p.bet,
                    total_hand_bet=p.total_hand_bet,
                    has_folded=p.has_folded,
                )
                for p in self.table.players
            ],
        )

    def join(self, name: str) -> Tuple[int, RoomState]:
        """
        Seat a player by name.

        Fills the first empty seat in index order; on a full table a name
        already seated gets its own seat back.

        Returns:
            Tuple of (seat index, room state)

        Raises:
            InvalidActionError: Blank name or no seat available
        """
        name = (name or "").strip()
        if not name:
            raise InvalidActionError("name required")

        players = self.table.players
        target = next((p for p in players if p.name is None), None)
        if target is None:
            target = next((p for p in players if p.name == name), None)
        if target is None:
            raise InvalidActionError("table full")

        target.name = name
        target.is_human = True
        if not self.table.is_hand_running():
            target.chips = self.config.initial_chips
            target.bet = 0
            target.total_hand_bet = 0
            target.has_folded = False

        logger.info(f"'{name}' joined seat {target.id}")
        return target.id, self.snapshot()

    def start(self) -> RoomState:
        """Deal a new hand with a fresh seed."""
        self.table.start_hand(self.seed_factory())
        logger.info(
            f"Room started hand #{self.table.state.round_number} "
            f"(seed {self.table.state.deck_seed})"
        )
        return self.snapshot()

    def move(self, player_index: int, move: str, amount: Optional[int] = None) -> RoomState:
        """
        Apply a seat's move and drive the hand forward.

        Raises:
            InvalidActionError: The move is rejected; the room is unchanged
        """
        if not 0 <= player_index < self.config.seats:
            raise InvalidActionError("invalid playerIndex")

        self.table.act(player_index, move, amount)
        state = self.table.state
        if state.stage == Stage.SHOWDOWN:
            logger.info(f"Room hand #{state.round_number} over, winners {state.winners}")
        return self.snapshot()

    def settle(self, winners: List[int]) -> RoomState:
        """
        Award the pot to the given seats.

        Raises:
            SettlementError: Empty, invalid or folded winners, no hand, or a
                hand that was already settled
        """
        self.table.declare_winners(winners)
        logger.info(f"Room hand #{self.table.state.round_number} settled to {self.table.state.winners}")
        return self.snapshot()
