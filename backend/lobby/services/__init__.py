from lobby.services.room_registry import RoomRegistry
from lobby.services.membership_service import AdmitResult, MembershipService, PlayersResult
from lobby.services.session_binding import SessionBinding

__all__ = ["RoomRegistry", "MembershipService", "AdmitResult", "PlayersResult", "SessionBinding"]
