import logging
from typing import Any, Dict, Optional

from lobby.schemas.room import PlayerSummary
from lobby.services.membership_service import MembershipService
from lobby.websocket.actions import Emit

logger = logging.getLogger(__name__)

PLAYERS_EVENT = "room:players"


class BroadcastHub:
    """Decides when a room snapshot goes out and what it contains.

    Which connections receive it is the transport's business: the snapshot is
    addressed to the Socket.IO room named after the room id.
    """

    def __init__(self, membership: MembershipService):
        self.membership = membership

    def snapshot(self, room_id: str) -> Optional[Dict[str, Any]]:
        result = self.membership.list_players(room_id)
        if not result.ok:
            return None
        return {
            "roomId": room_id,
            "players": [
                PlayerSummary.model_validate(p).model_dump(by_alias=True) for p in result.players
            ],
        }

    def publish(self, room_id: str) -> Optional[Emit]:
        payload = self.snapshot(room_id)
        if payload is None:
            logger.debug(f"Skipping broadcast for missing room {room_id}")
            return None
        logger.debug(f"Broadcasting {len(payload['players'])} players to room {room_id}")
        return Emit(event=PLAYERS_EVENT, data=payload, to=room_id, broadcast=True)
