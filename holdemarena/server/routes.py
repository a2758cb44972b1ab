"""
HTTP API Routes for HoldemArena.

The room endpoint carries the four room operations as one discriminated
body; the odds endpoint exposes the advisory calculator. Room updates are
pushed to WebSocket clients after every successful operation.
"""

from typing import Any, Dict

from fastapi import APIRouter, Request
from fastapi.responses import JSONResponse

from holdemarena.core.card import Card
from holdemarena.core.odds import calculate_equity, calculate_outs
from holdemarena.server.room import RoomService
from holdemarena.server.schemas import (
    JoinBody, JoinResponse, MoveBody, OddsRequest, OddsResponse,
    RoomRequest, RoomResponse, RoomState, SettleBody,
)
from holdemarena.server.websocket import room_message

router = APIRouter(prefix="/api")


def get_room(request: Request) -> RoomService:
    """Get the room served by this app."""
    return request.app.state.room


async def _publish(request: Request, room: RoomState) -> None:
    await request.app.state.connections.broadcast(room_message(room.model_dump(by_alias=True)))


@router.get("/room", response_model=RoomResponse)
async def get_room_state(request: Request) -> RoomResponse:
    """Get the current room state."""
    return RoomResponse(room=get_room(request).snapshot())


@router.post("/room", response_model=None)
async def room_operation(body: RoomRequest, request: Request) -> Dict[str, Any]:
    """
    Run a room operation.

    Bodies are discriminated by ``op``: join, start, move or settle.
    Rejected operations answer 400 with ``{"error": message}``.
    """
    room = get_room(request)

    if isinstance(body, JoinBody):
        seat, state = room.join(body.name)
        await _publish(request, state)
        return JoinResponse(player_index=seat, room=state).model_dump(by_alias=True)

    if isinstance(body, MoveBody):
        state = room.move(body.player_index, body.move, body.amount)
    elif isinstance(body, SettleBody):
        state = room.settle(body.winners)
    else:
        state = room.start()

    await _publish(request, state)
    return RoomResponse(room=state).model_dump(by_alias=True)


@router.post("/odds", response_model=OddsResponse)
async def odds(req: OddsRequest) -> Any:
    """
    Estimate hero equity and outs.

    Advisory only: Monte Carlo against one random hand plus the rule of 4
    and 2 on the flop and turn.
    """
    try:
        hero = [Card.from_string(c) for c in req.hero]
        board = [Card.from_string(c) for c in req.board]
        equity = calculate_equity(hero, board, iterations=req.iterations)
        outs = calculate_outs(hero, board)
    except ValueError as e:
        return JSONResponse(status_code=400, content={"error": str(e)})

    return {"equity": equity.to_dict(), "outs": outs.to_dict()}
