import logging
import threading
from typing import Dict, List, Optional, Tuple

from lobby.errors import ValidationError
from lobby.models.room import Participant, Room, RoomSummary

logger = logging.getLogger(__name__)


class RoomRegistry:
    """Authoritative in-memory table of rooms and their members.

    One instance lives for the lifetime of the process (or of a test). It is
    handed to ``MembershipService`` by reference; nothing else writes to it.
    HTTP routes run in a threadpool while Socket.IO handlers run on the event
    loop, so every read and write goes through ``lock``.
    """

    def __init__(self):
        self._rooms: Dict[str, Room] = {}
        self.lock = threading.RLock()

    def create(self, name: str) -> Room:
        clean_name = name.strip() if isinstance(name, str) else ""
        if not clean_name:
            raise ValidationError("room name must not be empty")

        room = Room(name=clean_name)
        with self.lock:
            self._rooms[room.id] = room
        logger.debug(f"Registered room {room.id} ({room.name})")
        return room

    def get(self, room_id: str) -> Optional[Room]:
        with self.lock:
            return self._rooms.get(room_id)

    def delete(self, room_id: str) -> bool:
        with self.lock:
            return self._rooms.pop(room_id, None) is not None

    def list(self) -> List[RoomSummary]:
        with self.lock:
            return [
                RoomSummary(
                    id=room.id,
                    name=room.name,
                    players_count=len(room.players),
                    created_at=room.created_at,
                )
                for room in self._rooms.values()
            ]

    def members(self, room_id: str) -> Optional[Tuple[Participant, ...]]:
        with self.lock:
            room = self._rooms.get(room_id)
            if room is None:
                return None
            return tuple(room.players)

    def append_member(self, room_id: str, participant: Participant) -> bool:
        with self.lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            room.players.append(participant)
            return True

    def remove_member(self, room_id: str, participant_id: str) -> bool:
        with self.lock:
            room = self._rooms.get(room_id)
            if room is None:
                return False
            before = len(room.players)
            room.players = [p for p in room.players if p.id != participant_id]
            return len(room.players) != before

    def __len__(self) -> int:
        with self.lock:
            return len(self._rooms)

    def __contains__(self, room_id: object) -> bool:
        with self.lock:
            return room_id in self._rooms
