"""
Process-wide registry of live rooms.
"""

import logging
import random
import threading
from typing import Callable, Dict, List, Optional, Tuple

from .constants import ROOM_CODE_ALPHABET
from .engine import ActionResult, Room
from .errors import ROOM_ID_EXHAUSTED, ROOM_NOT_FOUND, raise_error
from .models import ConnectionRef
from .rules import RuleConfig, default_rules

logger = logging.getLogger(__name__)


class RoomRegistry:
    """
    Maps room codes to rooms for the life of the process.

    The map has its own lock; each room serializes its own moves, so
    different rooms never wait on each other.
    """

    def __init__(
        self,
        rules: RuleConfig = default_rules,
        code_factory: Optional[Callable[[], str]] = None,
        seed: Optional[int] = None
    ):
        self.rules = rules
        self.seed = seed  # passed to every room, for deterministic deals in tests
        self._code_factory = code_factory or self.generate_room_id
        self._rooms: Dict[str, Room] = {}
        self._lock = threading.Lock()

    def __len__(self) -> int:
        with self._lock:
            return len(self._rooms)

    def __contains__(self, room_id: str) -> bool:
        return self.find(room_id) is not None

    def generate_room_id(self) -> str:
        return ''.join(random.choices(ROOM_CODE_ALPHABET, k=self.rules.room_code_length))

    def create_room(self) -> Room:
        """Create an empty room under a fresh code, retrying on collisions."""
        with self._lock:
            for attempt in range(self.rules.room_code_attempts):
                room_id = self._code_factory()
                if room_id not in self._rooms:
                    room = Room(room_id, self.rules, self.seed)
                    self._rooms[room_id] = room
                    logger.debug(f"Room code {room_id} allocated")
                    return room
                logger.warning(f"Room code collision on {room_id} (attempt {attempt + 1})")
        raise_error(ROOM_ID_EXHAUSTED, "Could not allocate a room code")

    def find(self, room_id: Optional[str]) -> Optional[Room]:
        if not room_id:
            return None
        with self._lock:
            return self._rooms.get(room_id.strip().upper())

    def delete(self, room_id: str) -> bool:
        with self._lock:
            room = self._rooms.pop(room_id.strip().upper(), None)
        if room is not None:
            logger.info(f"Room {room_id} deleted")
        return room is not None

    def rooms_for_connection(self, connection_ref: ConnectionRef) -> List[Room]:
        with self._lock:
            rooms = list(self._rooms.values())
        return [room for room in rooms if room.get_player_by_connection(connection_ref) is not None]

    def open_room(self, connection_ref: ConnectionRef, player_name: str) -> Tuple[Room, ActionResult]:
        """Create a room and seat its creator as player 0."""
        room = self.create_room()
        result = room.join(connection_ref, player_name)
        logger.info(f"Room {room.room_id} created by {player_name}")
        return room, result

    def join_room(self, room_id: str, connection_ref: ConnectionRef, player_name: str) -> ActionResult:
        room = self.find(room_id)
        if room is None:
            return ActionResult.fail(ROOM_NOT_FOUND, f"Room {room_id} not found")
        return room.join(connection_ref, player_name)

    def handle_disconnect(self, connection_ref: ConnectionRef) -> List[Tuple[str, ActionResult]]:
        """
        Remove the connection from every room it sits in.

        Rooms left without players are deleted.

        Returns:
            (room_id, result) per affected room
        """
        outcomes = []
        for room in self.rooms_for_connection(connection_ref):
            result = room.disconnect(connection_ref)
            if not result.success:
                continue
            if result.room_empty:
                self._delete_if_empty(room)
            outcomes.append((room.room_id, result))
        return outcomes

    def _delete_if_empty(self, room: Room) -> None:
        with self._lock:
            with room.lock:
                if room.is_empty() and self._rooms.get(room.room_id) is room:
                    del self._rooms[room.room_id]
                    logger.info(f"Room {room.room_id} deleted")

    def teardown(self) -> None:
        """Drop every room, e.g. at shutdown."""
        with self._lock:
            count = len(self._rooms)
            self._rooms.clear()
        logger.info(f"Registry torn down, {count} rooms dropped")
