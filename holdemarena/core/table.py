"""
Table driver for the Hold'em engine.

HoldemTable keeps the current GameState, the seats and the deck, feeds actions
to the pure engine functions and drives every pending transition (next
street, runout, showdown) to completion.

Usage:
    table = HoldemTable(agents=[RandomBotAgent(i) for i in range(4)])
    table.start_hand()

    while table.is_hand_running():
        table.play_turn()

    winners = table.get_winners()
"""

from __future__ import annotations
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Union
import logging

from holdemarena.core.card import Deck
from holdemarena.core.engine import (
    apply_action, current_time_seed, declare_winners, get_legal_actions, iter_transition,
    start_hand,
)
from holdemarena.core.exceptions import HoldemError, InvalidActionError
from holdemarena.core.player import Player, create_players
from holdemarena.core.policies import RebuyHook, house_loan, recover_chips
from holdemarena.core.rules import (
    ActionType, PendingStep, Stage, TableConfig, DEFAULT_CONFIG,
    get_blind_positions,
)
from holdemarena.core.state import GameState


logger = logging.getLogger(__name__)

DEFAULT_MAX_ACTIONS = 500


class HoldemTable:
    """
    Four-seat table running hands through the engine.

    Attributes:
        config: Table configuration
        agents: Seat index -> agent deciding for that seat
        state: Current GameState
        players: Current seats
        deck: Deck of the running hand (None before the first hand)
        hand_history: Log entries for the current hand
    """

    def __init__(
        self,
        config: TableConfig = DEFAULT_CONFIG,
        agents: Optional[Union[Sequence[Any], Mapping[int, Any]]] = None,
        seed_factory: Optional[Callable[[], int]] = None,
        rebuy: RebuyHook = house_loan,
        names: Optional[List[str]] = None,
    ):
        """
        Initialize the table.

        Args:
            config: Table configuration
            agents: Agents by seat (a list in seat order or a dict)
            seed_factory: Produces the deck seed of each hand
            rebuy: Re-buy hook run at every hand start
            names: Seat names
        """
        self.config = config
        if agents is None:
            self.agents: Dict[int, Any] = {}
        elif isinstance(agents, Mapping):
            self.agents = dict(agents)
        else:
            self.agents = {seat: agent for seat, agent in enumerate(agents)}

        self.seed_factory = seed_factory or current_time_seed
        self.rebuy = rebuy

        self.state = GameState(min_raise=config.big_blind)
        self.players: List[Player] = create_players(config.initial_chips, names)
        self.deck: Optional[Deck] = None
        self.hand_history: List[Dict[str, Any]] = []

    @property
    def current_player(self) -> Optional[Player]:
        """The player whose turn it is to act."""
        if not self.is_hand_running() or self.state.current_turn_index < 0:
            return None
        return self.players[self.state.current_turn_index]

    def is_hand_running(self) -> bool:
        return self.state.is_hand_running

    def start_hand(self, seed: Optional[int] = None) -> GameState:
        """
        Deal a new hand.

        Args:
            seed: Deck seed (defaults to the seed factory)

        Returns:
            The new GameState
        """
        if seed is None:
            seed = self.seed_factory()

        self.state, self.players, self.deck = start_hand(
            self.state, self.players, seed, self.config, self.rebuy
        )
        self.hand_history = []

        sb_seat, bb_seat = get_blind_positions(self.state.dealer_index, self.config.seats)
        self._log("START", seed=seed, dealer=self.state.dealer_index,
                  small_blind=sb_seat, big_blind=bb_seat)

        for agent in self.agents.values():
            agent.on_hand_start(self.state.round_number)

        self._drive()
        return self.state

    def act(
        self,
        player_id: int,
        action: Union[ActionType, str],
        amount: Optional[int] = None,
    ) -> GameState:
        """
        Apply an action, then run any transition it makes pending.

        Raises:
            InvalidActionError: The action is rejected; the table is unchanged
        """
        self.state, self.players = apply_action(
            self.state, self.players, player_id, action, amount, self.config
        )
        player = self.players[player_id]
        self._log("ACTION", player=player_id, type=player.last_action.value,
                  bet=player.bet, text=player.action_text)

        self._drive()
        return self.state

    def _drive(self) -> None:
        """Run pending transitions until a seat must act or the hand ends."""
        while self.state.pending != PendingStep.NONE:
            for step in iter_transition(self.state, self.players, self.deck, self.config):
                self.state, self.players, self.deck = step.state, step.players, step.deck
                if step.event == "deal":
                    self._log("DEAL", cards=[c.to_dict() for c in step.cards])

        if self.state.stage == Stage.SHOWDOWN and self.state.is_settled:
            self._on_hand_end()

    def _on_hand_end(self) -> None:
        winners = self.get_winners()
        self._log("HAND_OVER", winners=winners, pot=self.state.pot)
        result = {
            "winners": winners,
            "pot": self.state.pot,
            "showdown": self.state.winning_hand is not None,
        }
        for agent in self.agents.values():
            agent.on_hand_end(result)

    def play_turn(self) -> GameState:
        """Ask the agent holding the current seat for a decision and apply it."""
        seat = self.state.current_turn_index
        if not self.is_hand_running() or seat < 0:
            raise InvalidActionError("No seat is waiting to act")

        agent = self.agents.get(seat)
        if agent is None:
            raise InvalidActionError(f"No agent seated at {seat}")

        game_state = self.get_state(seat)
        agent.observe(game_state)
        decision = agent.act(game_state, self.get_legal_actions(seat))
        logger.debug(f"Seat {seat} ({agent.name}) decided {decision}")
        return self.act(seat, decision["action"], decision.get("amount"))

    def play_hand(self, max_actions: int = DEFAULT_MAX_ACTIONS) -> List[Dict[str, Any]]:
        """
        Play a full hand with the seated agents.

        Returns:
            Winner information (see get_winners)

        Raises:
            HoldemError: The hand did not finish within max_actions
        """
        if not self.is_hand_running():
            self.start_hand()

        actions = 0
        while self.is_hand_running():
            if actions >= max_actions:
                raise HoldemError(f"Hand did not finish within {max_actions} actions")
            self.play_turn()
            actions += 1

        return self.get_winners()

    def declare_winners(self, winner_ids: Sequence[int]) -> GameState:
        """
        Award the pot to the given seats and close the hand.

        Raises:
            SettlementError: No winners, an unknown or folded seat, no hand,
                or a hand that was already settled
        """
        self.state, self.players = declare_winners(self.state, self.players, winner_ids)
        self._on_hand_end()
        return self.state

    def get_legal_actions(self, player_id: Optional[int] = None) -> List[Dict[str, Any]]:
        if player_id is None:
            player_id = self.state.current_turn_index
        return get_legal_actions(self.state, self.players, player_id, self.config)

    def recover_chips(self, player_id: int, code: str) -> Player:
        """Restore a seat's stake with the recovery code (between hands only)."""
        if self.is_hand_running():
            raise InvalidActionError("Chips can only be recovered between hands")
        self.players = recover_chips(self.players, player_id, code, self.config)
        return self.players[player_id]

    def get_winners(self) -> List[Dict[str, Any]]:
        """Get winner information after the hand is complete."""
        if not self.state.is_settled:
            return []

        share = self.state.pot // len(self.state.winners)
        return [
            {
                "player_id": pid,
                "amount": share,
                "description": self.state.winning_hand or "All other players folded",
            }
            for pid in self.state.winners
        ]

    def get_state(self, for_player_id: Optional[int] = None) -> Dict[str, Any]:
        """
        Get the current table state.

        Args:
            for_player_id: If specified, include private info for this seat

        Returns:
            Dictionary with public_info and private_info
        """
        public_info = self.state.to_dict()
        public_info.update({
            "players": [p.to_public_dict() for p in self.players],
            "small_blind": self.config.small_blind,
            "big_blind": self.config.big_blind,
            "max_bet": self.config.max_bet,
        })
        if self.state.stage == Stage.SHOWDOWN and self.state.winning_hand is not None:
            # Cards of players who went to showdown are shown
            for seat in public_info["players"]:
                player = self.players[seat["id"]]
                if player.in_hand:
                    seat["cards"] = [c.to_dict() for c in player.cards]

        private_info: Dict[str, Any] = {}
        if for_player_id is not None and 0 <= for_player_id < len(self.players):
            player = self.players[for_player_id]
            legal = self.get_legal_actions(for_player_id)
            private_info = {
                "player_id": for_player_id,
                "hand": [c.to_dict() for c in player.cards],
                "chips": player.chips,
                "bet": player.bet,
                "chips_to_call": max(0, self.state.highest_bet - player.bet),
                "available_moves": [a["type"] for a in legal],
                "legal_actions": legal,
            }

        return {
            "public_info": public_info,
            "private_info": private_info,
        }

    def _log(self, action: str, **details: Any) -> None:
        """Log an entry to the hand history."""
        self.hand_history.append({
            "action": action,
            "stage": self.state.stage.value,
            **details,
        })
