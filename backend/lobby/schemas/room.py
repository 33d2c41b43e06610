from pydantic import BaseModel, field_validator
from pydantic.alias_generators import to_camel
from typing import List

from lobby.config import MIN_PLAYER_NAME_LENGTH, MIN_ROOM_NAME_LENGTH


class CamelModel(BaseModel):
    class Config:
        from_attributes = True
        populate_by_name = True
        alias_generator = to_camel


class RoomCreate(CamelModel):
    name: str

    @field_validator("name")
    @classmethod
    def name_min_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_ROOM_NAME_LENGTH:
            raise ValueError(f"must be at least {MIN_ROOM_NAME_LENGTH} characters")
        return value


class PlayerJoin(CamelModel):
    player_name: str

    @field_validator("player_name")
    @classmethod
    def player_name_min_length(cls, value: str) -> str:
        value = value.strip()
        if len(value) < MIN_PLAYER_NAME_LENGTH:
            raise ValueError(f"must be at least {MIN_PLAYER_NAME_LENGTH} characters")
        return value


class PlayerSummary(CamelModel):
    id: str
    name: str


class PlayerResponse(PlayerSummary):
    joined_at: str


class RoomResponse(CamelModel):
    id: str
    name: str
    players: List[PlayerResponse]
    created_at: str


class RoomSummaryResponse(CamelModel):
    id: str
    name: str
    players_count: int
    created_at: str


class RoomListResponse(CamelModel):
    rooms: List[RoomSummaryResponse]


class JoinResponse(CamelModel):
    room_id: str
    player: PlayerResponse


class PlayersResponse(CamelModel):
    room_id: str
    players: List[PlayerResponse]


class HealthResponse(CamelModel):
    status: str
    uptime_seconds: int
    timestamp: str
