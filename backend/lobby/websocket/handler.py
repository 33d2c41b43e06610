import logging
from typing import Optional

import socketio

from lobby.config import CORS_ORIGINS
from lobby.websocket.actions import Action, Emit, Subscribe, Unsubscribe
from lobby.websocket.gateway import (
    DISCONNECT_EVENT,
    JOIN_EVENT,
    LEAVE_EVENT,
    GatewayOutcome,
    RealtimeGateway,
)

logger = logging.getLogger(__name__)


def create_socket_server() -> socketio.AsyncServer:
    cors = "*" if CORS_ORIGINS == ["*"] else CORS_ORIGINS
    return socketio.AsyncServer(
        async_mode='asgi',
        cors_allowed_origins=cors,
        logger=False,
        engineio_logger=False
    )


class WebSocketHandler:
    """Binds Socket.IO events to the gateway and replays its actions on the server."""

    def __init__(self, gateway: RealtimeGateway, sio: Optional[socketio.AsyncServer] = None):
        self.gateway = gateway
        self.sio = sio or create_socket_server()
        self.sio.on('connect', self.connect)
        self.sio.on('disconnect', self.disconnect)
        self.sio.on(JOIN_EVENT, self.join)
        self.sio.on(LEAVE_EVENT, self.leave)

    async def connect(self, sid, environ, auth=None):
        logger.info(f"Socket.IO client connected: {sid}")

    async def disconnect(self, sid, reason=None):
        logger.info(f"Socket.IO client disconnected: {sid}")
        await self.apply(self.gateway.dispatch(sid, DISCONNECT_EVENT))

    async def join(self, sid, data=None):
        logger.debug(f"room:join from {sid}: {data}")
        await self.apply(self.gateway.dispatch(sid, JOIN_EVENT, data))

    async def leave(self, sid, data=None):
        await self.apply(self.gateway.dispatch(sid, LEAVE_EVENT, data))

    async def apply(self, outcome: GatewayOutcome) -> None:
        for action in self.gateway.drain_evictions() + outcome.actions:
            try:
                await self._perform(action)
            except Exception:
                # membership already changed; a failed delivery must not undo it
                logger.exception(f"Failed to deliver {action!r}")

    async def _perform(self, action: Action) -> None:
        if isinstance(action, Subscribe):
            await self.sio.enter_room(action.connection_id, action.room_id)
        elif isinstance(action, Unsubscribe):
            await self.sio.leave_room(action.connection_id, action.room_id)
        elif isinstance(action, Emit):
            await self.sio.emit(action.event, action.data, to=action.to)

    @property
    def connection_count(self) -> int:
        return len(self.gateway.bindings)
