"""
FastAPI Application Entry Point for HoldemArena.

This module creates and configures the FastAPI application with:
- HTTP routes for the room service and the odds calculator
- WebSocket endpoint for room updates
- Error handlers mapping rejected operations to 400 responses
- CORS middleware for development
"""

from contextlib import asynccontextmanager
from typing import Optional
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from holdemarena import __version__
from holdemarena.core.exceptions import HoldemError
from holdemarena.server.room import RoomService
from holdemarena.server.routes import router
from holdemarena.server.websocket import ConnectionManager, websocket_endpoint

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("HoldemArena server starting up...")
    yield
    logger.info("HoldemArena server shutting down...")


def create_app(room: Optional[RoomService] = None) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        room: Room service to serve (a fresh one by default)

    Returns:
        Configured FastAPI application instance
    """
    app = FastAPI(
        title="HoldemArena",
        description="Four-seat Texas Hold'em room service with WebSocket updates",
        version=__version__,
        lifespan=lifespan,
    )

    app.state.room = room or RoomService()
    app.state.connections = ConnectionManager()

    # CORS middleware for development
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],  # Configure appropriately for production
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(HoldemError)
    async def holdem_error_handler(request: Request, exc: HoldemError):
        logger.info(f"Rejected {request.method} {request.url.path}: {exc}")
        return JSONResponse(status_code=400, content={"error": str(exc)})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        logger.info(f"Invalid body for {request.url.path}: {exc.errors()}")
        return JSONResponse(status_code=400, content={"error": "invalid body"})

    # Include HTTP routes
    app.include_router(router)

    # WebSocket endpoint
    app.websocket("/ws")(websocket_endpoint)

    return app


# Create the application instance
app = create_app()


def main():
    """Run the server (for use as entry point)."""
    import uvicorn
    uvicorn.run(
        "holdemarena.server.app:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )


if __name__ == "__main__":
    main()
