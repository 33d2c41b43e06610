from dataclasses import dataclass


@dataclass(frozen=True)
class Binding:
    connection_id: str
    room_id: str
    participant_id: str
