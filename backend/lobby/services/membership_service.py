import logging
from dataclasses import dataclass, field
from typing import Callable, List, Optional

from lobby.config import MIN_PLAYER_NAME_LENGTH
from lobby.errors import MembershipError
from lobby.models.room import Participant, Room, RoomSummary
from lobby.services.room_registry import RoomRegistry

logger = logging.getLogger(__name__)


@dataclass
class AdmitResult:
    room: Optional[Room] = None
    player: Optional[Participant] = None
    error: Optional[MembershipError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


@dataclass
class PlayersResult:
    room: Optional[Room] = None
    players: List[Participant] = field(default_factory=list)
    error: Optional[MembershipError] = None

    @property
    def ok(self) -> bool:
        return self.error is None


class MembershipService:
    def __init__(self, registry: RoomRegistry):
        self.registry = registry
        self._room_deleted_listeners: List[Callable[[str], None]] = []

    def add_room_deleted_listener(self, callback: Callable[[str], None]) -> None:
        self._room_deleted_listeners.append(callback)

    def create_room(self, name: str) -> Room:
        room = self.registry.create(name)
        logger.info(f"Created room: {room.id} ({room.name})")
        return room

    def get_room(self, room_id: str) -> Optional[Room]:
        return self.registry.get(room_id)

    def admit(self, room_id: str, raw_name) -> AdmitResult:
        """Add a participant named ``raw_name`` to the room.

        Failures come back on ``AdmitResult.error``; nothing is raised. The
        name check is a linear scan since rooms are lobby-sized.
        """
        if not isinstance(raw_name, str) or len(raw_name.strip()) < MIN_PLAYER_NAME_LENGTH:
            return AdmitResult(error=MembershipError.VALIDATION)

        clean_name = raw_name.strip()
        with self.registry.lock:
            room = self.registry.get(room_id)
            if room is None:
                logger.info(f"Admit rejected: room {room_id} not found")
                return AdmitResult(error=MembershipError.ROOM_NOT_FOUND)

            lowered = clean_name.lower()
            if any(p.name.lower() == lowered for p in room.players):
                logger.info(f"Admit rejected: name '{clean_name}' taken in room {room_id}")
                return AdmitResult(room=room, error=MembershipError.NAME_TAKEN)

            player = Participant(name=clean_name)
            self.registry.append_member(room_id, player)

        logger.info(f"Player {player.id} ({player.name}) joined room {room_id}")
        return AdmitResult(room=room, player=player)

    def remove(self, room_id: str, participant_id: str) -> bool:
        """Remove a participant; unknown rooms or ids are a silent ``False``."""
        removed = self.registry.remove_member(room_id, participant_id)
        if removed:
            logger.info(f"Player {participant_id} left room {room_id}")
        else:
            logger.debug(f"Remove was a no-op for player {participant_id} in room {room_id}")
        return removed

    def list_players(self, room_id: str) -> PlayersResult:
        with self.registry.lock:
            room = self.registry.get(room_id)
            if room is None:
                return PlayersResult(error=MembershipError.ROOM_NOT_FOUND)
            return PlayersResult(room=room, players=list(self.registry.members(room_id)))

    def list_rooms(self) -> List[RoomSummary]:
        return self.registry.list()

    def delete_room(self, room_id: str) -> bool:
        # listeners run under the lock so no join can bind into the room in between
        with self.registry.lock:
            if not self.registry.delete(room_id):
                return False
            for callback in self._room_deleted_listeners:
                callback(room_id)
        logger.info(f"Deleted room: {room_id}")
        return True
