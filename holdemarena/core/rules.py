"""
Texas Hold'em Table Rules and Constants.

This module defines the fixed rules of the four-seat table:

1. The button moves one seat clockwise every hand.
2. Small blind is left of the button, big blind left of the small blind.
   Blinds are capped at the poster's stack, so a blind can be an all-in.
3. Pre-flop the seat left of the big blind acts first; post-flop the first
   eligible seat left of the button acts first.
4. No single bet may exceed the table maximum (``max_bet``).
"""

from enum import Enum
from dataclasses import dataclass
from typing import Dict, Tuple


class Stage(Enum):
    """Stages of a hand."""
    IDLE = "IDLE"          # No hand dealt yet
    PREFLOP = "PREFLOP"    # Hole cards dealt, before flop
    FLOP = "FLOP"          # After 3 community cards
    TURN = "TURN"          # After 4th community card
    RIVER = "RIVER"        # After 5th community card
    SHOWDOWN = "SHOWDOWN"  # Pot awarded, waiting for next hand


class ActionType(Enum):
    """Possible player actions."""
    CHECK = "check"
    CALL = "call"
    RAISE = "raise"
    FOLD = "fold"
    ALL_IN = "allin"


class PendingStep(Enum):
    """Automatic transition owed to the driver after betting closes."""
    NONE = "none"
    NEXT_STAGE = "next_stage"
    RUNOUT = "runout"


# Default table settings
INITIAL_CHIPS = 10000
SMALL_BLIND = 50
BIG_BLIND = 100
SEAT_COUNT = 4
MAX_BET = 3000
RECOVERY_CODE = "camel"

# Cards per stage
HOLE_CARDS = 2
FLOP_CARDS = 3
TURN_CARDS = 1
RIVER_CARDS = 1
TOTAL_COMMUNITY_CARDS = 5

# Hand evaluation
HAND_SIZE = 5
SCORE_EPSILON = 0.01

CARDS_FOR_STAGE: Dict[Stage, int] = {
    Stage.FLOP: FLOP_CARDS,
    Stage.TURN: TURN_CARDS,
    Stage.RIVER: RIVER_CARDS,
}

NEXT_STAGE: Dict[Stage, Stage] = {
    Stage.PREFLOP: Stage.FLOP,
    Stage.FLOP: Stage.TURN,
    Stage.TURN: Stage.RIVER,
    Stage.RIVER: Stage.SHOWDOWN,
}


@dataclass(frozen=True)
class TableConfig:
    """
    Adjustable table values.

    The seat count is part of the table's identity and must stay 4; the
    other values only change amounts, never behavior.
    """
    initial_chips: int = INITIAL_CHIPS
    small_blind: int = SMALL_BLIND
    big_blind: int = BIG_BLIND
    seats: int = SEAT_COUNT
    max_bet: int = MAX_BET
    recovery_code: str = RECOVERY_CODE

    def __post_init__(self) -> None:
        if self.seats != SEAT_COUNT:
            raise ValueError(f"Table has exactly {SEAT_COUNT} seats, got {self.seats}")
        if self.small_blind <= 0 or self.big_blind <= 0:
            raise ValueError("Blinds must be positive")
        if self.small_blind > self.big_blind:
            raise ValueError("Small blind cannot exceed big blind")
        if self.max_bet < self.big_blind:
            raise ValueError("Table maximum must be at least the big blind")
        if self.initial_chips <= 0:
            raise ValueError("Initial stake must be positive")


DEFAULT_CONFIG = TableConfig()


def next_seat(seat: int, seats: int = SEAT_COUNT) -> int:
    """Seat immediately clockwise of ``seat``."""
    return (seat + 1) % seats


def get_blind_positions(dealer_index: int, seats: int = SEAT_COUNT) -> Tuple[int, int]:
    """
    Calculate small blind and big blind seats.

    Args:
        dealer_index: Seat holding the button

    Returns:
        Tuple of (small_blind_seat, big_blind_seat)
    """
    return (dealer_index + 1) % seats, (dealer_index + 2) % seats


def get_first_to_act_preflop(dealer_index: int, seats: int = SEAT_COUNT) -> int:
    """Seat left of the big blind (under the gun)."""
    _, bb_seat = get_blind_positions(dealer_index, seats)
    return (bb_seat + 1) % seats


def min_raise_to(highest_bet: int, min_raise: int) -> int:
    """Smallest total bet that counts as a full raise."""
    return highest_bet + min_raise
