"""
Tests for Room State Management

Tests for the room store including:
- Lazy room creation and emptiness-triggered deletion
- Member registration (last writer wins)
- Bounded message history
- Directory snapshot
"""

import pytest

from rendezvous import HISTORY_LIMIT, Room, RoomStateManager


@pytest.fixture
def room_manager():
    return RoomStateManager()


# ----------------------------------------------------------------------------
# Room lifecycle
# ----------------------------------------------------------------------------


def test_get_or_create_room_creates_on_first_reference(room_manager):
    """Test that an unseen room ID creates an empty room."""
    room = room_manager.get_or_create_room("r1")

    assert isinstance(room, Room)
    assert room.room_id == "r1"
    assert room.members == {}
    assert len(room.history) == 0
    assert room.created_at
    assert room_manager.get_or_create_room("r1") is room


def test_get_room_returns_none_for_unknown_room(room_manager):
    """Test that get_room never creates a room."""
    assert room_manager.get_room("missing") is None
    assert room_manager.get_room_count() == 0


def test_remove_last_member_deletes_room(room_manager):
    """Test that a room is deleted as soon as it empties."""
    room_manager.add_member("r1", "alice", "c1")

    assert room_manager.remove_member("r1", "alice") is True
    assert room_manager.get_room("r1") is None
    assert room_manager.list_rooms() == []


def test_remove_member_keeps_non_empty_room(room_manager):
    """Test that removing one of two members leaves the room in place."""
    room_manager.add_member("r1", "alice", "c1")
    room_manager.add_member("r1", "bob", "c2")

    room_manager.remove_member("r1", "alice")

    room = room_manager.get_room("r1")
    assert room is not None
    assert room.members == {"bob": "c2"}


def test_remove_member_unknown_is_noop(room_manager):
    """Test removing from a missing room or a non-member returns False."""
    assert room_manager.remove_member("nope", "alice") is False

    room_manager.add_member("r1", "alice", "c1")
    assert room_manager.remove_member("r1", "bob") is False
    assert room_manager.get_room("r1").members == {"alice": "c1"}


def test_remove_member_ignores_stale_connection(room_manager):
    """Test that a rebound user is not removed by its old connection."""
    room_manager.add_member("r1", "alice", "c1")
    room_manager.add_member("r1", "alice", "c2")

    assert room_manager.remove_member("r1", "alice", "c1") is False
    assert room_manager.get_room("r1").members == {"alice": "c2"}

    assert room_manager.remove_member("r1", "alice", "c2") is True
    assert room_manager.get_room("r1") is None


# ----------------------------------------------------------------------------
# Membership
# ----------------------------------------------------------------------------


def test_add_member_same_user_rebinds_connection(room_manager):
    """Test that joining twice keeps one entry, pointing at the newest connection."""
    room_manager.add_member("r1", "alice", "c1")
    room = room_manager.add_member("r1", "alice", "c2")

    assert len(room.members) == 1
    assert room.members["alice"] == "c2"


def test_room_member_helpers():
    """Test other_members and member_connections."""
    room = Room(room_id="r1", members={"alice": "c1", "bob": "c2", "carol": "c3"})

    assert room.other_members("bob") == ["alice", "carol"]
    assert room.member_connections() == ["c1", "c2", "c3"]
    assert room.member_connections(exclude="c2") == ["c1", "c3"]


# ----------------------------------------------------------------------------
# History
# ----------------------------------------------------------------------------


def test_add_message_to_missing_room_returns_none(room_manager):
    """Test that messages for an unknown room are not stored."""
    assert room_manager.add_message("ghost", "alice", "hi", 1) is None
    assert room_manager.get_room("ghost") is None


def test_add_message_stores_message(room_manager):
    """Test message fields and wire form."""
    room_manager.add_member("r1", "alice", "c1")

    message = room_manager.add_message("r1", "alice", "hello", 1700000000000)

    assert message.id
    assert message.user_id == "alice"
    assert message.body == "hello"
    assert message.timestamp == 1700000000000
    assert message.room_id == "r1"
    assert list(room_manager.get_room("r1").history) == [message]
    assert message.to_dict() == {
        "id": message.id,
        "userId": "alice",
        "message": "hello",
        "timestamp": 1700000000000,
        "roomId": "r1",
    }


def test_message_ids_are_unique(room_manager):
    """Test that every stored message gets its own ID."""
    room_manager.add_member("r1", "alice", "c1")

    ids = {room_manager.add_message("r1", "alice", "x", None).id for _ in range(20)}

    assert len(ids) == 20


def test_history_evicts_oldest_first(room_manager):
    """Test that 101 messages leave exactly the last 100 in order."""
    room_manager.add_member("r1", "alice", "c1")

    for i in range(HISTORY_LIMIT + 1):
        room_manager.add_message("r1", "alice", f"msg-{i}", i)

    history = list(room_manager.get_room("r1").history)
    assert HISTORY_LIMIT == 100
    assert len(history) == 100
    assert history[0].body == "msg-1"
    assert history[-1].body == "msg-100"
    assert [m.timestamp for m in history] == list(range(1, 101))


def test_history_never_exceeds_limit(room_manager):
    """Test the history bound after many more messages than the limit."""
    room_manager.add_member("r1", "alice", "c1")

    for i in range(350):
        room_manager.add_message("r1", "alice", str(i), i)
        assert len(room_manager.get_room("r1").history) <= HISTORY_LIMIT

    assert room_manager.get_room("r1").history[0].body == "250"


def test_history_does_not_outlive_room(room_manager):
    """Test that a recreated room starts with empty history."""
    room_manager.add_member("r1", "alice", "c1")
    room_manager.add_message("r1", "alice", "old", 1)
    room_manager.remove_member("r1", "alice")

    room = room_manager.add_member("r1", "bob", "c2")

    assert len(room.history) == 0


# ----------------------------------------------------------------------------
# Directory snapshot
# ----------------------------------------------------------------------------


def test_list_rooms_reports_member_counts(room_manager):
    """Test list_rooms returns id and member count for each room."""
    room_manager.add_member("r1", "alice", "c1")
    room_manager.add_member("r1", "bob", "c2")
    room_manager.add_member("r2", "carol", "c3")

    rooms = sorted(room_manager.list_rooms(), key=lambda r: r["id"])

    assert rooms == [{"id": "r1", "users": 2}, {"id": "r2", "users": 1}]
    assert room_manager.get_room_count() == 2


def test_list_rooms_is_a_snapshot(room_manager):
    """Test that a listing does not change after later mutations."""
    room_manager.add_member("r1", "alice", "c1")
    snapshot = room_manager.list_rooms()

    room_manager.add_member("r1", "bob", "c2")

    assert snapshot == [{"id": "r1", "users": 1}]
