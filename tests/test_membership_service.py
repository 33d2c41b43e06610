import random

import pytest

from lobby.errors import MembershipError, ValidationError
from lobby.services.membership_service import MembershipService


def test_admit_trims_and_appends_in_join_order(membership: MembershipService):
    room = membership.create_room("Table A")

    alice = membership.admit(room.id, "  Alice ")
    bob = membership.admit(room.id, "Bob")

    assert alice.ok and bob.ok
    assert alice.player.name == "Alice"
    assert alice.room is room
    assert [p.name for p in room.players] == ["Alice", "Bob"]
    assert alice.player.id != bob.player.id


@pytest.mark.parametrize("raw_name", ["", " ", "a", " b ", None, 42])
def test_admit_rejects_short_or_non_string_names(membership: MembershipService, raw_name):
    room = membership.create_room("Table A")

    result = membership.admit(room.id, raw_name)

    assert result.error is MembershipError.VALIDATION
    assert room.players == []


def test_admit_validates_name_before_room_lookup(membership: MembershipService):
    assert membership.admit("missing", "x").error is MembershipError.VALIDATION
    assert membership.admit("missing", "Xavier").error is MembershipError.ROOM_NOT_FOUND


def test_admit_into_missing_room_does_not_create_it(membership: MembershipService):
    result = membership.admit("missing", "Alice")

    assert result.error is MembershipError.ROOM_NOT_FOUND
    assert membership.list_rooms() == []


def test_names_are_unique_case_insensitively(membership: MembershipService):
    room = membership.create_room("Table A")
    membership.admit(room.id, "Alice")

    result = membership.admit(room.id, "alice")

    assert result.error is MembershipError.NAME_TAKEN
    assert [p.name for p in room.players] == ["Alice"]


def test_same_name_is_allowed_in_another_room(membership: MembershipService):
    first = membership.create_room("Table A")
    second = membership.create_room("Table B")

    assert membership.admit(first.id, "Alice").ok
    assert membership.admit(second.id, "ALICE").ok


def test_name_is_free_again_after_removal(membership: MembershipService):
    room = membership.create_room("Table A")
    alice = membership.admit(room.id, "Alice").player
    membership.remove(room.id, alice.id)

    assert membership.admit(room.id, "alice").ok


def test_remove_is_idempotent(membership: MembershipService):
    room = membership.create_room("Table A")
    alice = membership.admit(room.id, "Alice").player
    bob = membership.admit(room.id, "Bob").player

    assert membership.remove(room.id, alice.id) is True
    after_first = [p.id for p in room.players]
    assert membership.remove(room.id, alice.id) is False
    assert [p.id for p in room.players] == after_first == [bob.id]


def test_remove_is_silent_for_unknown_room_or_player(membership: MembershipService):
    room = membership.create_room("Table A")

    assert membership.remove("missing", "nobody") is False
    assert membership.remove(room.id, "nobody") is False


def test_list_players(membership: MembershipService):
    room = membership.create_room("Table A")
    membership.admit(room.id, "Alice")

    result = membership.list_players(room.id)
    assert result.ok
    assert result.room is room
    assert [p.name for p in result.players] == ["Alice"]

    missing = membership.list_players("missing")
    assert missing.error is MembershipError.ROOM_NOT_FOUND
    assert missing.players == []


def test_create_room_propagates_validation_error(membership: MembershipService):
    with pytest.raises(ValidationError):
        membership.create_room("   ")


def test_delete_room_notifies_listeners_only_when_deleted(membership: MembershipService):
    deleted = []
    membership.add_room_deleted_listener(deleted.append)
    room = membership.create_room("Table A")

    assert membership.delete_room(room.id) is True
    assert membership.delete_room(room.id) is False
    assert deleted == [room.id]


def test_random_admit_remove_sequences_keep_names_unique(membership: MembershipService):
    rng = random.Random(1234)
    rooms = [membership.create_room(f"Room {i}") for i in range(3)]
    names = ["Alice", "alice", "ALICE", "Bob", "bob", "Carol", "Dave", "dave "]

    for _ in range(500):
        room = rng.choice(rooms)
        if room.players and rng.random() < 0.4:
            membership.remove(room.id, rng.choice(room.players).id)
        else:
            membership.admit(room.id, rng.choice(names))

        for r in rooms:
            lowered = [p.name.lower() for p in r.players]
            assert len(lowered) == len(set(lowered))

    all_ids = [p.id for r in rooms for p in r.players]
    assert len(all_ids) == len(set(all_ids))


def test_list_players_returns_a_copy(membership: MembershipService):
    room = membership.create_room("Table A")
    membership.admit(room.id, "Alice")

    players = membership.list_players(room.id).players
    players.clear()

    assert [p.name for p in room.players] == ["Alice"]
