"""
Error taxonomy for the table engine.

Rejected input never mutates state: every engine transition works on copies,
so raising one of these leaves the caller's GameState and players untouched.
"""


class HoldemError(Exception):
    """Base class for table engine errors."""
    pass


class InvalidActionError(HoldemError, ValueError):
    """Action or operation attempted out of turn, out of stage, or with bad input."""
    pass


class DeckExhaustedError(HoldemError, RuntimeError):
    """More cards requested than remain. Indicates a state machine bug."""
    pass


class SettlementError(HoldemError, ValueError):
    """Pot settlement requested with no (or ineligible) winners."""
    pass
