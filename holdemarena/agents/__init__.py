"""
HoldemArena Agents - Seat Decision Policies

This module provides the base agent interface and the bot implementations
that play the seats not held by a person.
"""

from holdemarena.agents.base import BaseAgent
from holdemarena.agents.random_agent import CallAgent, RandomBotAgent, ScriptedAgent

__all__ = ["BaseAgent", "RandomBotAgent", "CallAgent", "ScriptedAgent"]
