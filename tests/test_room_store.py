import threading
from datetime import datetime, timezone

import pytest

from chatboard.models.results import ErrorKind, Failure, Ok
from chatboard.services.room_store import RoomStore, format_timestamp


# ----------------------------------------------------------------------------
# create_room()
# ----------------------------------------------------------------------------

def test_create_room_then_list_includes_empty_room(store):
    result = store.create_room("general")

    assert isinstance(result, Ok)
    assert result.value.room_name == "general"
    assert result.value.messages == []

    rooms = store.list_rooms()
    assert [room.room_name for room in rooms] == ["general"]
    assert rooms[0].messages == []


def test_create_duplicate_room_fails_and_leaves_rooms_unchanged(store):
    store.create_room("general")
    store.post_message("general", "alice", "hi")
    before = store.list_rooms()

    result = store.create_room("general")

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.ROOM_ALREADY_EXISTS
    assert result.message == "Room already exists"
    assert store.list_rooms() == before


@pytest.mark.parametrize("room_name", ["", None, 42])
def test_create_room_requires_a_name(store, room_name):
    result = store.create_room(room_name)

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.INVALID_ARGUMENT
    assert result.message == "Room name is required"
    assert store.list_rooms() == []


def test_list_rooms_keeps_creation_order(store):
    for name in ["zeta", "alpha", "mid"]:
        store.create_room(name)

    assert [room.room_name for room in store.list_rooms()] == ["zeta", "alpha", "mid"]


def test_list_rooms_is_idempotent(store):
    store.create_room("general")
    store.post_message("general", "alice", "hi")

    assert store.list_rooms() == store.list_rooms()


def test_returned_rooms_are_snapshots(store):
    store.create_room("general")
    rooms = store.list_rooms()
    rooms[0].messages.append("garbage")

    assert store.list_rooms()[0].messages == []


# ----------------------------------------------------------------------------
# post_message() / get_messages()
# ----------------------------------------------------------------------------

@pytest.mark.parametrize(
    "username,message",
    [("alice", "hi"), ("", ""), (None, None)],
)
def test_post_to_missing_room_is_room_not_found(store, username, message):
    result = store.post_message("nowhere", username, message)

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.ROOM_NOT_FOUND
    assert result.message == "Room not found"


@pytest.mark.parametrize(
    "username,message",
    [("", "hi"), ("alice", ""), (None, "hi"), ("alice", None), (5, "hi")],
)
def test_post_requires_username_and_message(store, username, message):
    store.create_room("general")

    result = store.post_message("general", username, message)

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.INVALID_ARGUMENT
    assert result.message == "Username and message are required"
    assert store.get_messages("general").value == []


def test_messages_come_back_in_posting_order(store):
    store.create_room("general")
    bodies = ["one", "two", "three", "four"]
    for body in bodies:
        assert store.post_message("general", "alice", body).ok

    messages = store.get_messages("general").value
    assert [m.message for m in messages] == bodies
    assert [m.timestamp for m in messages] == sorted(m.timestamp for m in messages)


def test_post_message_stamps_with_store_clock(store):
    store.create_room("general")

    result = store.post_message("general", "alice", "hi")

    assert isinstance(result, Ok)
    assert result.value.username == "alice"
    assert result.value.message == "hi"
    assert result.value.timestamp == "2025-01-01T12:00:00.000Z"


def test_messages_stay_in_their_room(store):
    store.create_room("a")
    store.create_room("b")
    store.post_message("a", "alice", "for a")

    assert len(store.get_messages("a").value) == 1
    assert store.get_messages("b").value == []


def test_get_messages_for_missing_room(store):
    result = store.get_messages("unknown")

    assert isinstance(result, Failure)
    assert result.kind is ErrorKind.ROOM_NOT_FOUND


def test_stats_counts_rooms_and_messages(store):
    store.create_room("a")
    store.create_room("b")
    store.post_message("a", "alice", "1")
    store.post_message("b", "bob", "2")
    store.post_message("b", "bob", "3")

    assert store.stats() == {"rooms": 2, "messages": 3}


def test_whitespace_only_names_and_bodies_are_accepted(store):
    assert store.create_room("   ").ok

    result = store.post_message("   ", " ", "  ")

    assert isinstance(result, Ok)
    assert result.value.username == " "
    assert [room.room_name for room in store.list_rooms()] == ["   "]


# ----------------------------------------------------------------------------
# Timestamps
# ----------------------------------------------------------------------------

def test_format_timestamp_uses_utc_and_z_suffix():
    moment = datetime(2024, 2, 29, 23, 59, 58, 123456, tzinfo=timezone.utc)

    assert format_timestamp(moment) == "2024-02-29T23:59:58.123Z"


def test_default_clock_produces_iso_timestamps():
    store = RoomStore()
    store.create_room("general")

    stamp = store.post_message("general", "alice", "hi").value.timestamp

    assert stamp.endswith("Z")
    assert datetime.fromisoformat(stamp.replace("Z", "+00:00")).tzinfo is not None


# ----------------------------------------------------------------------------
# Threads
# ----------------------------------------------------------------------------

def test_concurrent_create_room_inserts_once(store):
    barrier = threading.Barrier(8)
    results = []

    def create():
        barrier.wait()
        results.append(store.create_room("general"))

    threads = [threading.Thread(target=create) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert sum(1 for result in results if result.ok) == 1
    assert len(store.list_rooms()) == 1


def test_concurrent_posts_are_all_kept(store):
    store.create_room("general")

    def post(author):
        for i in range(50):
            store.post_message("general", author, str(i))

    threads = [threading.Thread(target=post, args=(f"user{n}",)) for n in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    messages = store.get_messages("general").value
    assert len(messages) == 200
    for n in range(4):
        own = [m.message for m in messages if m.username == f"user{n}"]
        assert own == [str(i) for i in range(50)]
