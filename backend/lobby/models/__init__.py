from lobby.models.room import Participant, Room, RoomSummary
from lobby.models.binding import Binding

__all__ = ["Participant", "Room", "RoomSummary", "Binding"]
