"""
Base Agent Interface for HoldemArena.

This module defines the abstract base class for all seat agents. A table
asks the agent holding the current seat for a decision and applies it.

Usage:
    class MyAgent(BaseAgent):
        def observe(self, game_state):
            # Process game state
            pass

        def act(self, game_state, legal_actions):
            # Return action dict
            return {"action": "call", "amount": None}
"""

from abc import ABC, abstractmethod
from typing import Dict, List, Any, Optional


class BaseAgent(ABC):
    """
    Abstract base class for seat agents.

    Attributes:
        player_id: Seat index this agent plays
        name: Human-readable name
    """

    def __init__(self, player_id: int, name: Optional[str] = None):
        """
        Initialize the agent.

        Args:
            player_id: Seat index this agent plays
            name: Optional human-readable name
        """
        self.player_id = player_id
        self.name = name or f"Agent-{player_id}"

    @abstractmethod
    def observe(self, game_state: Dict[str, Any]) -> None:
        """
        Observe the current table state.

        Args:
            game_state: Dictionary containing:
                - public_info: Stage, pot, board, bets and public seat info
                - private_info: This seat's hand, chips, bet and legal moves
        """
        pass

    @abstractmethod
    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Choose an action given the current table state.

        Args:
            game_state: Current table state dictionary
            legal_actions: List of legal action dicts, each containing:
                - type: fold, check, call, raise or allin
                - amount: Required amount (call) or stack target (allin)
                - min/max: Valid total bet range (raise)

        Returns:
            Action dictionary with:
                - action: Action type string
                - amount: Total street bet for raise/allin (optional)
        """
        pass

    def reset(self) -> None:
        """Reset the agent's internal state."""
        pass

    def on_hand_start(self, hand_number: int) -> None:
        """Called when a new hand starts."""
        pass

    def on_hand_end(self, result: Dict[str, Any]) -> None:
        """
        Called when a hand ends.

        Args:
            result: Dictionary containing:
                - winners: List of winner info
                - pot: Total pot amount
                - showdown: Whether the hand was shown down
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}({self.player_id}, {self.name})"
