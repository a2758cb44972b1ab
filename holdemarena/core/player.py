"""
Player class for the Hold'em table.

Manages per-seat state:
- Chips behind (stack)
- Hole cards
- Bet in the current street and total committed this hand
- Folded / dealer flags
"""

from __future__ import annotations
from typing import List, Optional, Dict, Any
from dataclasses import dataclass, field

from holdemarena.core.card import Card
from holdemarena.core.rules import ActionType, SEAT_COUNT


DEFAULT_NAMES = ["Bot User", "Bot Alpha", "Bot Beta", "Bot Gamma"]


@dataclass
class Player:
    """
    A seat at the table.

    Attributes:
        id: Fixed seat index (0-3)
        chips: Chips behind, not yet committed
        bet: Amount committed in the current street
        total_hand_bet: Amount committed in the whole hand
        cards: Hole cards (empty or 2 cards)
        has_folded: Out of the current hand
        is_dealer: Holds the button
    """
    id: int
    chips: int
    bet: int = 0
    total_hand_bet: int = 0
    cards: List[Card] = field(default_factory=list)
    has_folded: bool = False
    is_dealer: bool = False

    name: Optional[str] = None
    is_human: bool = False
    # Set once the seat has acted since the last raise in this street
    has_acted: bool = False
    last_action: Optional[ActionType] = None
    action_text: Optional[str] = None

    def reset_for_new_hand(self) -> None:
        """Reset hand state; chips carry over."""
        self.cards = []
        self.bet = 0
        self.total_hand_bet = 0
        self.has_folded = False
        self.is_dealer = False
        self.has_acted = False
        self.last_action = None
        self.action_text = None

    def reset_for_new_round(self) -> None:
        """Reset street state (flop, turn, river)."""
        self.bet = 0
        self.has_acted = False

    def commit(self, amount: int) -> int:
        """
        Move chips from the stack into the pot.

        Args:
            amount: Amount requested

        Returns:
            Actual amount committed (capped at the stack)
        """
        if amount <= 0:
            return 0

        actual = min(amount, self.chips)
        self.chips -= actual
        self.bet += actual
        self.total_hand_bet += actual
        return actual

    @property
    def in_hand(self) -> bool:
        """Still contesting the pot."""
        return not self.has_folded

    @property
    def can_act(self) -> bool:
        """Eligible to take a turn: in the hand with chips behind."""
        return not self.has_folded and self.chips > 0

    @property
    def is_all_in(self) -> bool:
        return not self.has_folded and self.chips == 0 and self.total_hand_bet > 0

    def to_dict(self, hide_cards: bool = True) -> Dict[str, Any]:
        """
        Convert to dictionary for JSON serialization.

        Args:
            hide_cards: If True, don't include hole cards
        """
        result = {
            "id": self.id,
            "name": self.name,
            "is_human": self.is_human,
            "chips": self.chips,
            "bet": self.bet,
            "total_hand_bet": self.total_hand_bet,
            "has_folded": self.has_folded,
            "is_dealer": self.is_dealer,
            "has_acted": self.has_acted,
            "last_action": self.last_action.value if self.last_action else None,
            "action_text": self.action_text,
        }

        if not hide_cards:
            result["cards"] = [card.to_dict() for card in self.cards]

        return result

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> Player:
        last_action = data.get("last_action")
        return cls(
            id=data["id"],
            chips=data["chips"],
            bet=data.get("bet", 0),
            total_hand_bet=data.get("total_hand_bet", 0),
            cards=[Card.from_dict(c) for c in data.get("cards", [])],
            has_folded=data.get("has_folded", False),
            is_dealer=data.get("is_dealer", False),
            name=data.get("name"),
            is_human=data.get("is_human", False),
            has_acted=data.get("has_acted", False),
            last_action=ActionType(last_action) if last_action else None,
            action_text=data.get("action_text"),
        )

    def to_public_dict(self) -> Dict[str, Any]:
        """Get public information (visible to all players)."""
        return self.to_dict(hide_cards=True)

    def to_private_dict(self) -> Dict[str, Any]:
        """Get private information (only for this player)."""
        return self.to_dict(hide_cards=False)

    def __repr__(self) -> str:
        return (
            f"Player({self.id}, chips={self.chips}, bet={self.bet}, "
            f"folded={self.has_folded})"
        )

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.cards) if self.cards else "??"
        return f"Player {self.id} [{cards_str}] ${self.chips}"


def create_players(initial_chips: int, names: Optional[List[str]] = None) -> List[Player]:
    """Create the four seats with a fresh stake each."""
    names = names or DEFAULT_NAMES
    return [
        Player(
            id=i,
            chips=initial_chips,
            name=names[i] if i < len(names) else None,
            is_dealer=(i == 0),
        )
        for i in range(SEAT_COUNT)
    ]
