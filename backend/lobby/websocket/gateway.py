import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from lobby.errors import MembershipError
from lobby.models.binding import Binding
from lobby.schemas.room import PlayerResponse
from lobby.services.membership_service import MembershipService
from lobby.services.session_binding import SessionBinding
from lobby.websocket.actions import Action, Emit, Subscribe, Unsubscribe
from lobby.websocket.broadcast import BroadcastHub

logger = logging.getLogger(__name__)

JOIN_EVENT = "room:join"
LEAVE_EVENT = "room:leave"
DISCONNECT_EVENT = "disconnect"

JOINED_EVENT = "room:joined"
LEFT_EVENT = "room:left"
ERROR_EVENT = "error"


class ConnectionState(str, Enum):
    IDLE = "idle"
    IN_ROOM = "in_room"
    CLOSED = "closed"


@dataclass
class GatewayOutcome:
    state: ConnectionState
    actions: List[Action] = field(default_factory=list)
    error: Optional[MembershipError] = None

    @property
    def emits(self) -> List[Emit]:
        return [a for a in self.actions if isinstance(a, Emit)]


def _error_emit(connection_id: str, error: MembershipError, details: Optional[str] = None) -> Emit:
    data = {"error": error.value}
    if details:
        data["details"] = details
    return Emit(event=ERROR_EVENT, data=data, to=connection_id)


class RealtimeGateway:
    """Per-connection membership state machine.

    ``dispatch`` runs synchronously: every mutation and every snapshot for
    one inbound event is computed before it returns, and the caller only
    replays the resulting actions against the transport.
    """

    def __init__(self, membership: MembershipService, bindings: Optional[SessionBinding] = None,
                 hub: Optional[BroadcastHub] = None):
        self.membership = membership
        self.bindings = bindings if bindings is not None else SessionBinding()
        self.hub = hub if hub is not None else BroadcastHub(membership)
        self._evictions: List[Unsubscribe] = []
        membership.add_room_deleted_listener(self._on_room_deleted)

    def state_of(self, connection_id: str) -> ConnectionState:
        if connection_id in self.bindings:
            return ConnectionState.IN_ROOM
        return ConnectionState.IDLE

    def dispatch(self, connection_id: str, event: str, payload: Any = None) -> GatewayOutcome:
        # HTTP routes mutate the registry from the threadpool; hold its lock for the whole event
        with self.membership.registry.lock:
            return self._dispatch(connection_id, event, payload)

    def drain_evictions(self) -> List[Unsubscribe]:
        """Group exits owed to connections whose room was deleted over HTTP."""
        with self.membership.registry.lock:
            evictions, self._evictions = self._evictions, []
        return evictions

    def _on_room_deleted(self, room_id: str) -> None:
        for binding in self.bindings.drop_room(room_id):
            self._evictions.append(Unsubscribe(connection_id=binding.connection_id, room_id=room_id))

    def _dispatch(self, connection_id: str, event: str, payload: Any) -> GatewayOutcome:
        if event == JOIN_EVENT:
            return self.join(connection_id, payload)
        if event == LEAVE_EVENT:
            return self.leave(connection_id)
        if event == DISCONNECT_EVENT:
            return self.disconnect(connection_id)
        logger.debug(f"Ignoring unknown event '{event}' from {connection_id}")
        return GatewayOutcome(state=self.state_of(connection_id))

    def join(self, connection_id: str, payload: Any) -> GatewayOutcome:
        data = payload if isinstance(payload, dict) else {}
        room_id = data.get("roomId")
        player_name = data.get("playerName")
        prior = self.state_of(connection_id)

        if not room_id or not isinstance(room_id, str):
            return GatewayOutcome(
                state=prior,
                actions=[_error_emit(connection_id, MembershipError.VALIDATION, "roomId required")],
                error=MembershipError.VALIDATION,
            )

        result = self.membership.admit(room_id, player_name)
        if result.error is MembershipError.VALIDATION:
            return GatewayOutcome(
                state=prior,
                actions=[_error_emit(connection_id, result.error, "playerName required (min 2 chars)")],
                error=result.error,
            )
        if not result.ok:
            logger.info(f"Join failed for {connection_id}: {result.error.value}")
            return GatewayOutcome(
                state=prior,
                actions=[_error_emit(connection_id, result.error)],
                error=result.error,
            )

        actions: List[Action] = []
        previous = self.bindings.unbind(connection_id)
        if previous is not None:
            # switching rooms releases the old membership like a silent leave
            switching = previous.room_id != room_id
            actions.extend(self._release(previous, unsubscribe=switching, publish=switching))

        self.bindings.bind(connection_id, room_id, result.player.id)
        actions.append(Subscribe(connection_id=connection_id, room_id=room_id))
        actions.append(Emit(
            event=JOINED_EVENT,
            data={
                "roomId": room_id,
                "player": PlayerResponse.model_validate(result.player).model_dump(by_alias=True),
            },
            to=connection_id,
        ))
        broadcast = self.hub.publish(room_id)
        if broadcast is not None:
            actions.append(broadcast)

        logger.info(f"Connection {connection_id} joined room {room_id} as {result.player.name}")
        return GatewayOutcome(state=ConnectionState.IN_ROOM, actions=actions)

    def leave(self, connection_id: str) -> GatewayOutcome:
        binding = self.bindings.unbind(connection_id)
        if binding is None:
            logger.debug(f"Leave from unbound connection {connection_id}")
            return GatewayOutcome(state=ConnectionState.IDLE, error=MembershipError.NOT_BOUND)

        actions = self._release(binding, unsubscribe=True)
        actions.append(Emit(event=LEFT_EVENT, data={"roomId": binding.room_id}, to=connection_id))
        logger.info(f"Connection {connection_id} left room {binding.room_id}")
        return GatewayOutcome(state=ConnectionState.IDLE, actions=actions)

    def disconnect(self, connection_id: str) -> GatewayOutcome:
        binding = self.bindings.unbind(connection_id)
        if binding is None:
            return GatewayOutcome(state=ConnectionState.CLOSED, error=MembershipError.NOT_BOUND)

        # the transport drops the connection from every group on its own
        actions = self._release(binding, unsubscribe=False)
        logger.info(f"Connection {connection_id} dropped out of room {binding.room_id}")
        return GatewayOutcome(state=ConnectionState.CLOSED, actions=actions)

    def _release(self, binding: Binding, unsubscribe: bool, publish: bool = True) -> List[Action]:
        actions: List[Action] = []
        self.membership.remove(binding.room_id, binding.participant_id)
        if unsubscribe:
            actions.append(Unsubscribe(connection_id=binding.connection_id, room_id=binding.room_id))
        if not publish:
            return actions
        broadcast = self.hub.publish(binding.room_id)
        if broadcast is not None:
            actions.append(broadcast)
        return actions
