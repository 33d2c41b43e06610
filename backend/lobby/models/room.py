import uuid
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import List


def utc_timestamp() -> str:
    return datetime.now(timezone.utc).isoformat().replace("+00:00", "Z")


def new_id() -> str:
    return str(uuid.uuid4())


@dataclass
class Participant:
    name: str
    id: str = field(default_factory=new_id)
    joined_at: str = field(default_factory=utc_timestamp)


@dataclass
class Room:
    name: str
    id: str = field(default_factory=new_id)
    created_at: str = field(default_factory=utc_timestamp)
    # join order, also display order
    players: List[Participant] = field(default_factory=list)


@dataclass(frozen=True)
class RoomSummary:
    id: str
    name: str
    players_count: int
    created_at: str
