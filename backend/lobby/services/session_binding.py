import logging
import threading
from typing import Dict, List, Optional

from lobby.models.binding import Binding

logger = logging.getLogger(__name__)


class SessionBinding:
    """Connection id -> (room id, participant id).

    Holds at most one binding per connection and at most one connection per
    participant id. It only indexes membership; it never owns rooms or
    participants.
    """

    def __init__(self):
        self._by_connection: Dict[str, Binding] = {}
        self._by_participant: Dict[str, str] = {}
        self._lock = threading.RLock()

    def bind(self, connection_id: str, room_id: str, participant_id: str) -> Binding:
        binding = Binding(connection_id=connection_id, room_id=room_id, participant_id=participant_id)
        with self._lock:
            self._discard(connection_id)
            holder = self._by_participant.get(participant_id)
            if holder is not None and holder != connection_id:
                logger.warning(f"Participant {participant_id} was bound to {holder}, rebinding to {connection_id}")
                self._discard(holder)
            self._by_connection[connection_id] = binding
            self._by_participant[participant_id] = connection_id
        logger.debug(f"Bound connection {connection_id} to player {participant_id} in room {room_id}")
        return binding

    def unbind(self, connection_id: str) -> Optional[Binding]:
        with self._lock:
            binding = self._discard(connection_id)
        if binding is not None:
            logger.debug(f"Unbound connection {connection_id} from room {binding.room_id}")
        return binding

    def get(self, connection_id: str) -> Optional[Binding]:
        with self._lock:
            return self._by_connection.get(connection_id)

    def connections_in(self, room_id: str) -> List[str]:
        with self._lock:
            return [b.connection_id for b in self._by_connection.values() if b.room_id == room_id]

    def drop_room(self, room_id: str) -> List[Binding]:
        with self._lock:
            dropped = [self._discard(cid) for cid in self.connections_in(room_id)]
        if dropped:
            logger.info(f"Dropped {len(dropped)} bindings into deleted room {room_id}")
        return dropped

    def _discard(self, connection_id: str) -> Optional[Binding]:
        binding = self._by_connection.pop(connection_id, None)
        if binding is not None and self._by_participant.get(binding.participant_id) == connection_id:
            del self._by_participant[binding.participant_id]
        return binding

    def __len__(self) -> int:
        with self._lock:
            return len(self._by_connection)

    def __contains__(self, connection_id: object) -> bool:
        with self._lock:
            return connection_id in self._by_connection
