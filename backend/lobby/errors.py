from enum import Enum


class MembershipError(str, Enum):
    """Recoverable membership failures, returned as outcomes rather than raised.

    The value is the reason string clients see in an ``error`` event.
    """

    VALIDATION = "Bad Request"
    ROOM_NOT_FOUND = "Room not found"
    NAME_TAKEN = "Name taken"
    NOT_BOUND = "Not bound"


class ValidationError(ValueError):
    """Raised by the registry when asked to store an invalid room."""
