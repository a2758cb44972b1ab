"""
Serializable table state.

GameState holds everything about the hand that is not per-seat. Together
with the list of Players it is the complete input and output of every engine
transition, so a table can be snapshotted to JSON and restored.
"""

from __future__ import annotations
from typing import Any, Dict, List, Optional
from dataclasses import dataclass, field

from holdemarena.core.card import Card
from holdemarena.core.rules import BIG_BLIND, PendingStep, Stage


@dataclass
class GameState:
    """
    Table state shared by all seats.

    Attributes:
        stage: Current stage of the hand
        pot: Chips committed this hand (sum of every seat's total_hand_bet)
        community_cards: Board cards (0, 3, 4 or 5)
        current_turn_index: Seat to act, -1 when nobody may act
        dealer_index: Seat holding the button
        highest_bet: Street bet required to call
        min_raise: Size of the last full raise (big blind at street start)
        winners: Seats that won the last settled pot
        winning_hand: Description of the winning hand, if shown down
        round_number: Hands started so far
        deck_seed: Seed the current deck was built from
        pending: Automatic transition owed after betting closed
    """
    stage: Stage = Stage.IDLE
    pot: int = 0
    community_cards: List[Card] = field(default_factory=list)
    current_turn_index: int = -1
    dealer_index: int = 0
    highest_bet: int = 0
    min_raise: int = BIG_BLIND
    winners: List[int] = field(default_factory=list)
    winning_hand: Optional[str] = None
    round_number: int = 0
    deck_seed: int = 0
    pending: PendingStep = PendingStep.NONE

    @property
    def is_hand_running(self) -> bool:
        """A hand is dealt and not yet settled."""
        return self.stage not in (Stage.IDLE, Stage.SHOWDOWN)

    @property
    def is_settled(self) -> bool:
        return bool(self.winners)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "stage": self.stage.value,
            "pot": self.pot,
            "community_cards": [c.to_dict() for c in self.community_cards],
            "current_turn_index": self.current_turn_index,
            "dealer_index": self.dealer_index,
            "highest_bet": self.highest_bet,
            "min_raise": self.min_raise,
            "winners": sorted(self.winners),
            "winning_hand": self.winning_hand,
            "round_number": self.round_number,
            "deck_seed": self.deck_seed,
            "pending": self.pending.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> GameState:
        return cls(
            stage=Stage(data.get("stage", Stage.IDLE.value)),
            pot=data.get("pot", 0),
            community_cards=[Card.from_dict(c) for c in data.get("community_cards", [])],
            current_turn_index=data.get("current_turn_index", -1),
            dealer_index=data.get("dealer_index", 0),
            highest_bet=data.get("highest_bet", 0),
            min_raise=data.get("min_raise", BIG_BLIND),
            winners=sorted(set(data.get("winners", []))),
            winning_hand=data.get("winning_hand"),
            round_number=data.get("round_number", 0),
            deck_seed=data.get("deck_seed", 0),
            pending=PendingStep(data.get("pending", PendingStep.NONE.value)),
        )
