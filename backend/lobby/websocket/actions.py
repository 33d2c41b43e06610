"""Transport instructions produced by the gateway and carried out by the Socket.IO handler."""

from dataclasses import dataclass
from typing import Any, Dict, Union


@dataclass(frozen=True)
class Subscribe:
    connection_id: str
    room_id: str


@dataclass(frozen=True)
class Unsubscribe:
    connection_id: str
    room_id: str


@dataclass(frozen=True)
class Emit:
    event: str
    data: Dict[str, Any]
    # a connection id for private events, a room id for broadcasts
    to: str
    broadcast: bool = False


Action = Union[Subscribe, Unsubscribe, Emit]
