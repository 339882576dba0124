"""
WebSocket event models and validation.
"""

import time
from enum import Enum
from typing import Any, Dict, Optional, Union

import orjson
from pydantic import BaseModel, ConfigDict, Field, field_validator

from .. import errors


class EventType(str, Enum):
    """Inbound event types."""
    CREATE_ROOM = "createRoom"
    JOIN_ROOM = "joinRoom"
    PLAY_CARD = "playCard"


class OutboundEventType(str, Enum):
    """Outbound event types."""
    ROOM_CREATED = "roomCreated"
    ROOM_JOINED = "roomJoined"
    GAME_STARTED = "gameStarted"
    GAME_STATE_UPDATED = "gameStateUpdated"
    PLAYER_DISCONNECTED = "playerDisconnected"
    ERROR = "error"


class ErrorCode(str, Enum):
    """Error codes for client events."""
    INVALID_EVENT = errors.INVALID_EVENT
    ROOM_NOT_FOUND = errors.ROOM_NOT_FOUND
    ROOM_FULL = errors.ROOM_FULL
    ROOM_ID_EXHAUSTED = errors.ROOM_ID_EXHAUSTED
    GAME_NOT_ACTIVE = errors.GAME_NOT_ACTIVE
    UNKNOWN_PLAYER = errors.UNKNOWN_PLAYER
    OWNERSHIP_MISMATCH = errors.OWNERSHIP_MISMATCH
    NOT_YOUR_TURN = errors.NOT_YOUR_TURN
    INVALID_TARGET_AREA = errors.INVALID_TARGET_AREA
    AREA_BLOCKED = errors.AREA_BLOCKED
    INTERNAL = errors.INTERNAL_ERROR


# What the player is told; the code tells rejections apart
ERROR_MESSAGES = {
    ErrorCode.ROOM_NOT_FOUND: "room not found",
    ErrorCode.ROOM_FULL: "room full",
    ErrorCode.INVALID_EVENT: "invalid event",
    ErrorCode.INTERNAL: "internal server error",
    ErrorCode.ROOM_ID_EXHAUSTED: "internal server error",
}
INVALID_ACTION_MESSAGE = "invalid action"
ERROR_MESSAGES.update({ErrorCode(code): INVALID_ACTION_MESSAGE for code in errors.MOVE_ERRORS})
DISCONNECT_MESSAGE = "Opponent disconnected"


# Inbound event models
class BaseEvent(BaseModel):
    """Base event model."""
    model_config = ConfigDict(populate_by_name=True)

    type: EventType


class CreateRoomEvent(BaseEvent):
    """Create room event."""
    type: EventType = EventType.CREATE_ROOM
    player_name: str = Field(..., alias="playerName", min_length=1, max_length=30)

    @field_validator("player_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("playerName must not be blank")
        return v


class JoinRoomEvent(BaseEvent):
    """Join room event."""
    type: EventType = EventType.JOIN_ROOM
    room_id: str = Field(..., alias="roomId", min_length=1, max_length=12)
    player_name: str = Field(..., alias="playerName", min_length=1, max_length=30)

    @field_validator("player_name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("playerName must not be blank")
        return v

    @field_validator("room_id")
    @classmethod
    def normalize_room_id(cls, v: str) -> str:
        return v.strip().upper()


class PlayCardEvent(BaseEvent):
    """Play card event."""
    type: EventType = EventType.PLAY_CARD
    room_id: str = Field(..., alias="roomId", min_length=1, max_length=12)
    player_id: Optional[int] = Field(default=None, alias="playerId", ge=0, le=1)
    card_id: str = Field(..., alias="cardId", min_length=1, max_length=64)
    target_area_id: int = Field(..., alias="targetAreaId")

    @field_validator("room_id")
    @classmethod
    def normalize_room_id(cls, v: str) -> str:
        return v.strip().upper()


# Union type for all inbound events
InboundEvent = Union[CreateRoomEvent, JoinRoomEvent, PlayCardEvent]


# Outbound event models
class OutboundEvent(BaseModel):
    """Base outbound event; serialized with camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    timestamp: float

    def to_wire(self) -> str:
        return orjson.dumps(self.model_dump(mode="json", by_alias=True)).decode()


class RoomCreatedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.ROOM_CREATED
    room_id: str = Field(..., alias="roomId")
    player_id: int = Field(..., alias="playerId")


class RoomJoinedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.ROOM_JOINED
    room_id: str = Field(..., alias="roomId")
    player_id: int = Field(..., alias="playerId")


class GameStartedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.GAME_STARTED
    game_state: Dict[str, Any] = Field(..., alias="gameState")
    your_player_id: int = Field(..., alias="yourPlayerId")


class GameStateUpdatedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.GAME_STATE_UPDATED
    game_state: Dict[str, Any] = Field(..., alias="gameState")


class PlayerDisconnectedEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.PLAYER_DISCONNECTED
    message: str


class ErrorEvent(OutboundEvent):
    type: OutboundEventType = OutboundEventType.ERROR
    code: ErrorCode
    message: str


def parse_inbound_event(data: Dict[str, Any]) -> InboundEvent:
    """
    Parse raw event data into appropriate event model.

    Args:
        data: Raw event data from WebSocket

    Returns:
        Parsed event model

    Raises:
        ValueError: If event type is invalid or data is malformed
    """
    if not isinstance(data, dict):
        raise ValueError("Event must be a JSON object")

    event_type = data.get("type")

    if not event_type:
        raise ValueError("Missing event type")

    try:
        event_type = EventType(event_type)
    except ValueError:
        raise ValueError(f"Invalid event type: {event_type}")

    event_map = {
        EventType.CREATE_ROOM: CreateRoomEvent,
        EventType.JOIN_ROOM: JoinRoomEvent,
        EventType.PLAY_CARD: PlayCardEvent,
    }

    event_class = event_map[event_type]
    try:
        return event_class(**data)
    except Exception as e:
        raise ValueError(f"Invalid event data: {str(e)}")


def error_message_for(code: ErrorCode) -> str:
    return ERROR_MESSAGES[ErrorCode(code)]


def create_error_event(code: ErrorCode, message: Optional[str] = None) -> ErrorEvent:
    """Create an error event; the message defaults to the player-facing text for code."""
    return ErrorEvent(code=code, message=message or error_message_for(code), timestamp=time.time())


def create_room_created_event(room_id: str, player_id: int) -> RoomCreatedEvent:
    return RoomCreatedEvent(room_id=room_id, player_id=player_id, timestamp=time.time())


def create_room_joined_event(room_id: str, player_id: int) -> RoomJoinedEvent:
    return RoomJoinedEvent(room_id=room_id, player_id=player_id, timestamp=time.time())


def create_game_started_event(view: Dict[str, Any], player_id: int) -> GameStartedEvent:
    return GameStartedEvent(game_state=view, your_player_id=player_id, timestamp=time.time())


def create_state_updated_event(view: Dict[str, Any]) -> GameStateUpdatedEvent:
    return GameStateUpdatedEvent(game_state=view, timestamp=time.time())


def create_disconnect_event(message: str = DISCONNECT_MESSAGE) -> PlayerDisconnectedEvent:
    return PlayerDisconnectedEvent(message=message, timestamp=time.time())
