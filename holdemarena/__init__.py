"""
HoldemArena - Four-Seat Texas Hold'em Rules Engine

A standalone Texas Hold'em table with:
- Pure Python rules engine (seeded deck, evaluator, betting state machine)
- FastAPI + WebSocket room service
- Pluggable bot agents

Usage:
    from holdemarena.core import HoldemTable, start_hand, apply_action
    from holdemarena.agents import BaseAgent, RandomBotAgent
"""

__version__ = "0.1.0"

from holdemarena.core.card import Card, Deck, create_deck
from holdemarena.core.player import Player
from holdemarena.core.table import HoldemTable
from holdemarena.core.hand import HandRank, evaluate_hand

__all__ = [
    "Card",
    "Deck",
    "create_deck",
    "Player",
    "HoldemTable",
    "HandRank",
    "evaluate_hand",
    "__version__",
]
