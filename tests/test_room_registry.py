import pytest

from lobby.errors import ValidationError
from lobby.models.room import Participant
from lobby.services.room_registry import RoomRegistry


def test_create_trims_name_and_assigns_unique_ids(registry: RoomRegistry):
    first = registry.create("  Table A  ")
    second = registry.create("Table A")

    assert first.name == "Table A"
    assert first.id != second.id
    assert first.players == []
    assert first.created_at.endswith("Z")
    assert len(registry) == 2


@pytest.mark.parametrize("name", ["", "   ", None, 12, ["Table"]])
def test_create_rejects_blank_names(registry: RoomRegistry, name):
    with pytest.raises(ValidationError):
        registry.create(name)
    assert len(registry) == 0


def test_get_returns_none_for_unknown_room(registry: RoomRegistry):
    assert registry.get("missing") is None


def test_delete_is_a_boolean_signal(registry: RoomRegistry):
    room = registry.create("Lobby")

    assert registry.delete(room.id) is True
    assert registry.delete(room.id) is False
    assert registry.delete("never-existed") is False
    assert room.id not in registry


def test_list_returns_summaries_not_live_members(registry: RoomRegistry):
    room = registry.create("Lobby")
    registry.append_member(room.id, Participant(name="Alice"))

    summaries = registry.list()

    assert len(summaries) == 1
    summary = summaries[0]
    assert (summary.id, summary.name, summary.players_count) == (room.id, "Lobby", 1)
    assert summary.created_at == room.created_at
    assert not hasattr(summary, "players")


def test_members_is_a_read_only_copy(registry: RoomRegistry):
    room = registry.create("Lobby")
    registry.append_member(room.id, Participant(name="Alice"))

    members = registry.members(room.id)
    assert isinstance(members, tuple)
    assert [p.name for p in members] == ["Alice"]
    assert registry.members("missing") is None


def test_remove_member_reports_whether_anything_changed(registry: RoomRegistry):
    room = registry.create("Lobby")
    alice = Participant(name="Alice")
    registry.append_member(room.id, alice)

    assert registry.remove_member(room.id, alice.id) is True
    assert registry.remove_member(room.id, alice.id) is False
    assert registry.remove_member("missing", alice.id) is False
    assert registry.append_member("missing", alice) is False


def test_empty_room_is_not_deleted(registry: RoomRegistry):
    room = registry.create("Lobby")
    alice = Participant(name="Alice")
    registry.append_member(room.id, alice)
    registry.remove_member(room.id, alice.id)

    assert registry.get(room.id) is room
