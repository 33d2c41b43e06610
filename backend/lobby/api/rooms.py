from fastapi import APIRouter, Depends, HTTPException, Response

from lobby.dependencies import get_membership
from lobby.errors import MembershipError
from lobby.services.membership_service import MembershipService
from lobby.schemas.room import (
    JoinResponse,
    PlayerJoin,
    PlayersResponse,
    RoomCreate,
    RoomListResponse,
    RoomResponse,
)

router = APIRouter(prefix="/rooms", tags=["rooms"])

ROOM_NOT_FOUND = "Room not found"


@router.get("", response_model=RoomListResponse)
def list_rooms(membership: MembershipService = Depends(get_membership)):
    return RoomListResponse.model_validate({"rooms": membership.list_rooms()})


@router.post("", response_model=RoomResponse, status_code=201)
def create_room(room_data: RoomCreate, membership: MembershipService = Depends(get_membership)):
    room = membership.create_room(room_data.name)
    return RoomResponse.model_validate(room)


@router.get("/{room_id}", response_model=RoomResponse)
def get_room(room_id: str, membership: MembershipService = Depends(get_membership)):
    room = membership.get_room(room_id)
    if not room:
        raise HTTPException(status_code=404, detail=ROOM_NOT_FOUND)
    return RoomResponse.model_validate(room)


@router.post("/{room_id}/join", response_model=JoinResponse, status_code=201)
def join_room(room_id: str, join_data: PlayerJoin, membership: MembershipService = Depends(get_membership)):
    result = membership.admit(room_id, join_data.player_name)
    if result.error is MembershipError.ROOM_NOT_FOUND:
        raise HTTPException(status_code=404, detail=ROOM_NOT_FOUND)
    if result.error is MembershipError.NAME_TAKEN:
        raise HTTPException(
            status_code=409,
            detail={"error": "Conflict", "details": "Player name already taken in this room."},
        )
    if result.error is MembershipError.VALIDATION:
        raise HTTPException(
            status_code=400,
            detail={"error": "Bad Request", "details": "Field 'playerName' is required (string, min 2 chars)."},
        )
    return JoinResponse.model_validate({"room_id": result.room.id, "player": result.player})


@router.get("/{room_id}/players", response_model=PlayersResponse)
def list_players(room_id: str, membership: MembershipService = Depends(get_membership)):
    result = membership.list_players(room_id)
    if not result.ok:
        raise HTTPException(status_code=404, detail=ROOM_NOT_FOUND)
    return PlayersResponse.model_validate({"room_id": result.room.id, "players": result.players})


@router.delete("/{room_id}", status_code=204)
def delete_room(room_id: str, membership: MembershipService = Depends(get_membership)):
    if not membership.delete_room(room_id):
        raise HTTPException(status_code=404, detail=ROOM_NOT_FOUND)
    return Response(status_code=204)
