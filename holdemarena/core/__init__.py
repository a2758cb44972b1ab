"""
HoldemArena Core - Pure Python Texas Hold'em Table Logic

This module contains the rules engine without any network dependencies.
"""

from holdemarena.core.card import Card, Deck, create_deck
from holdemarena.core.player import Player
from holdemarena.core.state import GameState
from holdemarena.core.hand import HandRank, HandResult, evaluate_hand
from holdemarena.core.rules import ActionType, PendingStep, Stage, TableConfig, DEFAULT_CONFIG
from holdemarena.core.exceptions import (
    HoldemError, InvalidActionError, DeckExhaustedError, SettlementError,
)
from holdemarena.core.engine import (
    start_hand,
    apply_action,
    advance_stage_or_runout,
    iter_transition,
    get_legal_actions,
    settle,
    declare_winners,
)
from holdemarena.core.table import HoldemTable

__all__ = [
    "Card",
    "Deck",
    "create_deck",
    "Player",
    "GameState",
    "HandRank",
    "HandResult",
    "evaluate_hand",
    "ActionType",
    "PendingStep",
    "Stage",
    "TableConfig",
    "DEFAULT_CONFIG",
    "HoldemError",
    "InvalidActionError",
    "DeckExhaustedError",
    "SettlementError",
    "start_hand",
    "apply_action",
    "advance_stage_or_runout",
    "iter_transition",
    "get_legal_actions",
    "settle",
    "declare_winners",
    "HoldemTable",
]
