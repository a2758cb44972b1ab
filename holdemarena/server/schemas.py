"""
Pydantic schemas for API request/response validation.

The room service speaks camelCase on the wire (``playerIndex``,
``totalHandBet``); models use snake_case fields with camelCase aliases.
"""

from typing import Annotated, Any, Dict, List, Literal, Optional, Union
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CamelModel(BaseModel):
    """Base model serialized with camelCase keys."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============= Request Schemas =============

class JoinBody(CamelModel):
    """Take a seat by name."""
    op: Literal["join"]
    name: str = ""


class StartBody(CamelModel):
    """Deal a new hand."""
    op: Literal["start"]


class MoveBody(CamelModel):
    """Act for a seat."""
    op: Literal["move"]
    player_index: int
    move: str = Field(..., description="Action: check, call, raise, fold, allin")
    amount: Optional[int] = Field(default=None, description="Total street bet for raise/allin")


class SettleBody(CamelModel):
    """Award the pot to the given seats."""
    op: Literal["settle"]
    winners: List[int]


RoomRequest = Annotated[
    Union[JoinBody, StartBody, MoveBody, SettleBody],
    Field(discriminator="op"),
]


class OddsRequest(BaseModel):
    """Odds calculator input; cards as strings like "Ah" or "10s"."""
    hero: List[str]
    board: List[str] = []
    iterations: int = Field(default=1000, ge=1, le=100000)


# ============= Response Schemas =============

class RoomPlayer(CamelModel):
    """Public seat information."""
    index: int
    name: Optional[str] = None
    chips: int
    bet: int
    total_hand_bet: int
    has_folded: bool


class RoomState(CamelModel):
    """Complete room state as sent to clients."""
    hand_id: int
    deck_seed: int
    stage: str
    pot: int
    highest_bet: int
    dealer_index: int
    current_turn_index: int
    winners: List[int]
    players: List[RoomPlayer]


class RoomResponse(CamelModel):
    room: RoomState


class JoinResponse(CamelModel):
    player_index: int
    room: RoomState


class OddsResponse(BaseModel):
    """Equity estimate and outs analysis."""
    equity: Dict[str, Any]
    outs: Dict[str, Any]


class ErrorSchema(BaseModel):
    """Error response."""
    error: str
