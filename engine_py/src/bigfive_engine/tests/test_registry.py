"""
Tests for the room registry lifecycle.
"""

import re
import threading

import pytest

from bigfive_engine.errors import GameError, ROOM_FULL, ROOM_ID_EXHAUSTED, ROOM_NOT_FOUND
from bigfive_engine.registry import RoomRegistry
from bigfive_engine.rules import create_rules


def test_create_room_code_format():
    registry = RoomRegistry()
    room = registry.create_room()

    assert re.fullmatch(r"[A-Z0-9]{6}", room.room_id)
    assert registry.find(room.room_id) is room
    assert room.room_id in registry
    assert len(registry) == 1


def test_find_is_case_insensitive():
    registry = RoomRegistry()
    room = registry.create_room()
    assert registry.find(room.room_id.lower()) is room
    assert registry.find("NOPE00") is None
    assert registry.find("") is None


def test_collision_retries_with_new_code():
    codes = iter(["AAAAAA", "AAAAAA", "AAAAAA", "BBBBBB"])
    registry = RoomRegistry(code_factory=lambda: next(codes))

    first = registry.create_room()
    second = registry.create_room()

    assert first.room_id == "AAAAAA"
    assert second.room_id == "BBBBBB"
    assert len(registry) == 2


def test_collision_retries_are_bounded():
    registry = RoomRegistry(rules=create_rules(room_code_attempts=3), code_factory=lambda: "SAME00")
    registry.create_room()

    with pytest.raises(GameError) as exc_info:
        registry.create_room()
    assert exc_info.value.code == ROOM_ID_EXHAUSTED
    assert len(registry) == 1


def test_generated_codes_are_unique():
    registry = RoomRegistry()
    rooms = [registry.create_room() for _ in range(200)]
    assert len({room.room_id for room in rooms}) == 200


def test_open_room_seats_creator():
    registry = RoomRegistry()
    room, result = registry.open_room("conn-1", "Alice")

    assert result.success
    assert result.player_id == 0
    assert room.players[0].name == "Alice"
    assert room.game_state is None


def test_join_room_errors():
    registry = RoomRegistry()
    result = registry.join_room("ZZZZZZ", "conn-1", "Alice")
    assert not result.success
    assert result.error_code == ROOM_NOT_FOUND

    room, _ = registry.open_room("conn-1", "Alice")
    assert registry.join_room(room.room_id, "conn-2", "Bob").success
    result = registry.join_room(room.room_id, "conn-3", "Carol")
    assert result.error_code == ROOM_FULL


def test_join_fills_room_and_starts_game():
    registry = RoomRegistry(seed=5)
    room, _ = registry.open_room("conn-1", "Alice")

    result = registry.join_room(room.room_id, "conn-2", "Bob")

    assert result.success
    assert result.player_id == 1
    assert result.game_started
    assert room.game_state is not None


def test_disconnect_lifecycle():
    registry = RoomRegistry()
    room, _ = registry.open_room("conn-1", "Alice")
    registry.join_room(room.room_id, "conn-2", "Bob")

    outcomes = registry.handle_disconnect("conn-1")
    assert len(outcomes) == 1
    room_id, result = outcomes[0]
    assert room_id == room.room_id
    assert result.recipients == ["conn-2"]
    assert room.room_id in registry

    outcomes = registry.handle_disconnect("conn-2")
    assert outcomes[0][1].room_empty
    assert room.room_id not in registry
    assert len(registry) == 0


def test_waiting_room_deleted_when_creator_leaves():
    registry = RoomRegistry()
    room, _ = registry.open_room("conn-1", "Alice")

    outcomes = registry.handle_disconnect("conn-1")

    assert outcomes[0][1].recipients == []
    assert registry.find(room.room_id) is None


def test_disconnect_covers_every_room_of_a_connection():
    registry = RoomRegistry()
    first, _ = registry.open_room("conn-1", "Alice")
    second, _ = registry.open_room("conn-1", "Alice")
    other, _ = registry.open_room("conn-2", "Bob")

    outcomes = registry.handle_disconnect("conn-1")

    assert {room_id for room_id, _ in outcomes} == {first.room_id, second.room_id}
    assert list(registry.rooms_for_connection("conn-2")) == [other]
    assert len(registry) == 1


def test_disconnect_unknown_connection():
    registry = RoomRegistry()
    registry.open_room("conn-1", "Alice")
    assert registry.handle_disconnect("conn-9") == []
    assert len(registry) == 1


def test_delete_and_teardown():
    registry = RoomRegistry()
    room = registry.create_room()
    assert registry.delete(room.room_id)
    assert not registry.delete(room.room_id)

    for _ in range(3):
        registry.create_room()
    registry.teardown()
    assert len(registry) == 0


def test_concurrent_plays_in_one_room_are_serialized():
    registry = RoomRegistry(seed=8)
    room, _ = registry.open_room("conn-1", "Alice")
    registry.join_room(room.room_id, "conn-2", "Bob")
    card_id = room.game_state.players[0].personal_stack[0].id

    results = []

    def play():
        results.append(room.play_card(0, card_id, 0))

    threads = [threading.Thread(target=play) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    # The same card can only be played once
    assert sum(r.success for r in results) == 1
    assert len(room.game_state.play_areas[0].cards) == 1
    assert room.game_state.current_player == 1
