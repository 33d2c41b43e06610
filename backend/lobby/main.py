import logging
from typing import Optional

import socketio
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from lobby.api import debug_router, rooms_router, system_router
from lobby.config import CORS_ORIGINS, SOCKETIO_PATH, is_development
from lobby.services.membership_service import MembershipService
from lobby.services.room_registry import RoomRegistry
from lobby.websocket.gateway import RealtimeGateway
from lobby.websocket.handler import WebSocketHandler

logger = logging.getLogger(__name__)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    content = exc.detail if isinstance(exc.detail, dict) else {"error": exc.detail}
    return JSONResponse(status_code=exc.status_code, content=content, headers=getattr(exc, "headers", None))


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    loc = errors[0].get("loc", ()) if errors else ()
    if len(loc) > 1:
        details = f"Field '{loc[-1]}' is required (string, min 2 chars)."
    else:
        details = "Request body is required."
    return JSONResponse(status_code=400, content={"error": "Bad Request", "details": details})


async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}", exc_info=exc)
    return JSONResponse(status_code=500, content={"error": str(exc) or "Internal Server Error"})


def create_app(registry: Optional[RoomRegistry] = None, debug_routes: Optional[bool] = None) -> FastAPI:
    """Build the HTTP app and its real-time handler around one room registry.

    The registry lives as long as the returned app; pass a fresh one per test.
    """
    registry = registry if registry is not None else RoomRegistry()
    membership = MembershipService(registry)
    gateway = RealtimeGateway(membership)

    app = FastAPI(title="Room Lobby")
    app.state.registry = registry
    app.state.membership = membership
    app.state.gateway = gateway
    app.state.ws_handler = WebSocketHandler(gateway)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=CORS_ORIGINS,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)

    app.include_router(system_router)
    app.include_router(rooms_router)
    if debug_routes is None:
        debug_routes = is_development()
    if debug_routes:
        app.include_router(debug_router)

    logger.info("FastAPI application initialized")
    return app


def create_asgi_app(app: Optional[FastAPI] = None) -> socketio.ASGIApp:
    """Wrap the FastAPI app so Socket.IO traffic is served on the same port."""
    app = app or create_app()
    return socketio.ASGIApp(app.state.ws_handler.sio, other_asgi_app=app, socketio_path=SOCKETIO_PATH)
