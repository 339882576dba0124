"""
FastAPI WebSocket gateway for the Big Five game.
"""

import logging
import os
import uuid
from contextlib import asynccontextmanager
from typing import Dict, Optional

import orjson
from fastapi import FastAPI, WebSocket, WebSocketDisconnect
from fastapi.middleware.cors import CORSMiddleware

from ..errors import GameError
from ..registry import RoomRegistry
from .events import (
    CreateRoomEvent, ErrorCode, JoinRoomEvent, OutboundEvent, PlayCardEvent,
    create_disconnect_event, create_error_event, create_game_started_event,
    create_room_created_event, create_room_joined_event, create_state_updated_event,
    parse_inbound_event
)

# Configure logging
logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)


class ConnectionManager:
    """Manages WebSocket connections under opaque connection ids."""

    def __init__(self):
        self.active_connections: Dict[str, WebSocket] = {}

    def connect(self, websocket: WebSocket) -> str:
        connection_id = uuid.uuid4().hex
        self.active_connections[connection_id] = websocket
        logger.info(f"Connection {connection_id} opened")
        return connection_id

    def disconnect(self, connection_id: str):
        if connection_id in self.active_connections:
            del self.active_connections[connection_id]
            logger.info(f"Connection {connection_id} closed")

    async def send(self, connection_id: str, event: OutboundEvent):
        """Send an event to one connection; dead connections are dropped."""
        websocket = self.active_connections.get(connection_id)
        if websocket is None:
            return
        try:
            await websocket.send_text(event.to_wire())
        except Exception as e:
            logger.error(f"Error sending to {connection_id}: {e}")
            self.disconnect(connection_id)


class SessionGateway:
    """Turns socket events into registry and room calls and delivers the results."""

    def __init__(self, registry: RoomRegistry, manager: Optional[ConnectionManager] = None):
        self.registry = registry
        self.manager = manager or ConnectionManager()

    async def handle_event(self, connection_id: str, event) -> None:
        """Handle an inbound event."""
        if isinstance(event, CreateRoomEvent):
            await self.handle_create_room(connection_id, event)
        elif isinstance(event, JoinRoomEvent):
            await self.handle_join_room(connection_id, event)
        elif isinstance(event, PlayCardEvent):
            await self.handle_play_card(connection_id, event)
        else:
            raise ValueError(f"Unhandled event type: {type(event)}")

    async def handle_create_room(self, connection_id: str, event: CreateRoomEvent) -> None:
        try:
            room, result = self.registry.open_room(connection_id, event.player_name)
        except GameError as e:
            logger.error(f"Could not create room: {e}")
            await self.manager.send(connection_id, create_error_event(ErrorCode(e.code)))
            return

        await self.manager.send(connection_id, create_room_created_event(room.room_id, result.player_id))

    async def handle_join_room(self, connection_id: str, event: JoinRoomEvent) -> None:
        result = self.registry.join_room(event.room_id, connection_id, event.player_name)

        if not result.success:
            logger.info(f"Join of room {event.room_id} refused: {result.error_message}")
            await self.manager.send(connection_id, create_error_event(ErrorCode(result.error_code)))
            return

        await self.manager.send(connection_id, create_room_joined_event(event.room_id, result.player_id))

        # Each player gets a view redacted for them
        for delivery in result.deliveries:
            await self.manager.send(
                delivery.connection_ref,
                create_game_started_event(delivery.view, delivery.player_id)
            )

    async def handle_play_card(self, connection_id: str, event: PlayCardEvent) -> None:
        room = self.registry.find(event.room_id)
        if room is None:
            await self.manager.send(connection_id, create_error_event(ErrorCode.ROOM_NOT_FOUND))
            return

        # The acting seat comes from the connection, never from the payload
        player = room.get_player_by_connection(connection_id)
        if player is None or (event.player_id is not None and event.player_id != player.id):
            logger.warning(f"Connection {connection_id} tried to act for player {event.player_id} in room {room.room_id}")
            await self.manager.send(connection_id, create_error_event(ErrorCode.UNKNOWN_PLAYER))
            return

        result = room.play_card(player.id, event.card_id, event.target_area_id)

        if not result.success:
            await self.manager.send(connection_id, create_error_event(ErrorCode(result.error_code)))
            return

        for delivery in result.deliveries:
            await self.manager.send(delivery.connection_ref, create_state_updated_event(delivery.view))

    async def handle_disconnect(self, connection_id: str) -> None:
        for room_id, result in self.registry.handle_disconnect(connection_id):
            for recipient in result.recipients:
                await self.manager.send(recipient, create_disconnect_event())

    async def serve(self, websocket: WebSocket) -> None:
        """Receive loop for one WebSocket."""
        await websocket.accept()
        connection_id = self.manager.connect(websocket)

        try:
            while True:
                raw_data = await websocket.receive_text()

                try:
                    data = orjson.loads(raw_data)
                    event = parse_inbound_event(data)
                    await self.handle_event(connection_id, event)
                except ValueError as e:
                    # Invalid event
                    logger.info(f"Invalid event from {connection_id}: {e}")
                    await self.manager.send(connection_id, create_error_event(ErrorCode.INVALID_EVENT))
                except Exception as e:
                    logger.exception(f"Error handling event from {connection_id}: {e}")
                    await self.manager.send(connection_id, create_error_event(ErrorCode.INTERNAL))

        except WebSocketDisconnect:
            logger.info(f"WebSocket {connection_id} disconnected")
        finally:
            self.manager.disconnect(connection_id)
            await self.handle_disconnect(connection_id)


def create_app(registry: Optional[RoomRegistry] = None) -> FastAPI:
    """Build the FastAPI app around a registry (a fresh one by default)."""
    registry = registry if registry is not None else RoomRegistry()
    gateway = SessionGateway(registry)

    @asynccontextmanager
    async def lifespan(_app: FastAPI):
        yield
        registry.teardown()

    app = FastAPI(title="Big Five Game Engine", version="1.0.0", lifespan=lifespan)
    app.state.registry = registry
    app.state.gateway = gateway

    allowed_origins = os.environ.get("ALLOWED_ORIGINS", "*").split(",")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        """Health check endpoint."""
        return {
            "status": "healthy",
            "rooms": len(registry),
            "connections": len(gateway.manager.active_connections),
        }

    @app.websocket("/ws")
    async def websocket_endpoint(websocket: WebSocket):
        """Main WebSocket endpoint."""
        await gateway.serve(websocket)

    return app


app = create_app()
