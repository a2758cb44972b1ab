"""
Bot Agent Implementations.

RandomBotAgent is the table's house bot. It decides from a single random
draw per turn, using the pot-agnostic thresholds the table has always used.
CallAgent and ScriptedAgent are simple baselines for tests and simulations.
"""

import random
from typing import Dict, List, Any, Iterable, Optional

from holdemarena.agents.base import BaseAgent
from holdemarena.core.rules import BIG_BLIND, MAX_BET


# Thresholds on the turn's random draw r in [0, 1)
RAISE_WHEN_UNBET = 0.8   # nothing to call: raise when r > 0.8, else check
CALL_THRESHOLD = 0.3     # facing a bet: call when r > 0.3
FOLD_THRESHOLD = 0.1     # facing a bet: fold when r > 0.1, else raise
SHOVE_THRESHOLD = 0.5    # unaffordable raise: all-in when r > 0.5, else call


class RandomBotAgent(BaseAgent):
    """
    House bot driven by one random draw per decision.

    - Nothing to call: raise to highest bet + big blind when r > 0.8, else check.
    - Facing a bet: call when r > 0.3, fold when r > 0.1, else raise to
      highest bet + max(big blind, call cost).
    - A raise the bot cannot afford becomes all-in when r > 0.5, else a call.
    - Raise targets are capped at the table's maximum bet.
    """

    def __init__(
        self,
        player_id: int,
        name: Optional[str] = None,
        rng: Optional[random.Random] = None,
    ):
        """
        Initialize the bot.

        Args:
            player_id: Seat index
            name: Optional name
            rng: Random source (a fresh random.Random by default)
        """
        super().__init__(player_id, name or f"Bot-{player_id}")
        self.rng = rng or random.Random()

    def observe(self, game_state: Dict[str, Any]) -> None:
        """The bot does not track state between turns."""
        pass

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        public = game_state.get("public_info", {})
        private = game_state.get("private_info", {})

        highest_bet = public.get("highest_bet", 0)
        big_blind = public.get("big_blind", BIG_BLIND)
        max_bet = public.get("max_bet", MAX_BET)
        chips = private.get("chips", 0)
        call_cost = highest_bet - private.get("bet", 0)

        r = self.rng.random()

        if call_cost <= 0:
            if r > RAISE_WHEN_UNBET:
                action, amount = "raise", highest_bet + big_blind
            else:
                return {"action": "check", "amount": None}
        elif r > CALL_THRESHOLD:
            return {"action": "call", "amount": None}
        elif r > FOLD_THRESHOLD:
            return {"action": "fold", "amount": None}
        else:
            action, amount = "raise", highest_bet + max(big_blind, call_cost)

        if chips < amount or chips < highest_bet + big_blind:
            # Same draw decides between shoving and calling
            action = "allin" if r > SHOVE_THRESHOLD else "call"

        amount = min(amount, max_bet)
        if action == "allin":
            return {"action": "allin", "amount": None}
        if action == "call":
            return {"action": "call", "amount": None}
        return {"action": action, "amount": amount}


class CallAgent(BaseAgent):
    """
    An agent that always calls (or checks).

    Useful for testing and as a simple baseline.
    """

    def __init__(self, player_id: int, name: Optional[str] = None):
        super().__init__(player_id, name or f"Caller-{player_id}")

    def observe(self, game_state: Dict[str, Any]) -> None:
        pass

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """Always check or call."""
        action_types = [a["type"] for a in legal_actions]

        if "check" in action_types:
            return {"action": "check", "amount": None}
        if "call" in action_types:
            return {"action": "call", "amount": None}
        return {"action": "fold", "amount": None}


class ScriptedAgent(BaseAgent):
    """
    Replays a fixed list of decisions.

    Each entry is an action name or an (action, amount) pair. Once the script
    runs out the agent checks or calls.
    """

    def __init__(self, player_id: int, script: Iterable[Any], name: Optional[str] = None):
        super().__init__(player_id, name or f"Scripted-{player_id}")
        self.script = list(script)
        self._position = 0

    def observe(self, game_state: Dict[str, Any]) -> None:
        pass

    def reset(self) -> None:
        self._position = 0

    def act(
        self,
        game_state: Dict[str, Any],
        legal_actions: List[Dict[str, Any]]
    ) -> Dict[str, Any]:
        if self._position >= len(self.script):
            action_types = [a["type"] for a in legal_actions]
            return {"action": "check" if "check" in action_types else "call", "amount": None}

        entry = self.script[self._position]
        self._position += 1
        if isinstance(entry, str):
            return {"action": entry, "amount": None}
        action, amount = entry
        return {"action": action, "amount": amount}
