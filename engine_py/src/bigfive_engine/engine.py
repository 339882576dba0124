"""Room state machine: roster, deal, card play and disconnects"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional

from .constants import ANIMALS, PHASE_PLAY, STATUS_ACTIVE, STATUS_FINISHED, STATUS_WAITING
from .errors import ROOM_FULL
from .models import ConnectionRef, GameState, PlayArea, Player
from .rules import RuleConfig, default_rules
from .serialization import project_view
from .shuffle import build_deck, deal_personal_stacks
from .validate import is_area_blocked, is_big_five, validate_play

logger = logging.getLogger(__name__)


@dataclass
class Delivery:
    """A view addressed to one connection."""
    connection_ref: ConnectionRef
    player_id: int
    view: Dict[str, Any]


@dataclass
class ActionResult:
    success: bool
    error_code: Optional[str] = None
    error_message: Optional[str] = None
    player_id: Optional[int] = None
    game_started: bool = False
    combo_scored: bool = False
    deliveries: List[Delivery] = field(default_factory=list)
    recipients: List[ConnectionRef] = field(default_factory=list)  # for plain notices
    room_empty: bool = False

    @classmethod
    def fail(cls, error_code: str, error_message: str) -> 'ActionResult':
        return cls(success=False, error_code=error_code, error_message=error_message)


class Room:
    """
    One two-player game session.

    All state changes and the views computed from them happen under the
    room's own lock, so a move and the views describing it are never
    interleaved with another move in the same room.
    """

    def __init__(self, room_id: str, rules: RuleConfig = default_rules, seed: Optional[int] = None):
        self.room_id = room_id
        self.rules = rules
        self.seed = seed
        self.players: List[Player] = []  # roster, in join order
        self.game_state: Optional[GameState] = None
        self.lock = threading.RLock()

    @property
    def status(self) -> str:
        if self.game_state is None:
            return STATUS_WAITING
        if self.game_state.winner is not None:
            return STATUS_FINISHED
        return STATUS_ACTIVE

    def is_full(self) -> bool:
        return self.rules.validate_player_count(len(self.players))

    def is_empty(self) -> bool:
        return not self.players

    def get_player_by_connection(self, connection_ref: ConnectionRef) -> Optional[Player]:
        for player in self.players:
            if player.connection_ref == connection_ref:
                return player
        return None

    def add_player(self, connection_ref: ConnectionRef, name: str) -> bool:
        """Seat a new player; the seat number is the roster length at join time."""
        with self.lock:
            # Seats vacated mid-game are not reopened
            if len(self.players) >= self.rules.max_players or self.game_state is not None:
                return False
            player = Player(id=len(self.players), name=name, connection_ref=connection_ref)
            self.players.append(player)
            return True

    def remove_player(self, connection_ref: ConnectionRef) -> Optional[Player]:
        """Drop the player on this connection; remaining ids are kept."""
        with self.lock:
            player = self.get_player_by_connection(connection_ref)
            if player is not None:
                self.players = [p for p in self.players if p is not player]
            return player

    def join(self, connection_ref: ConnectionRef, name: str) -> ActionResult:
        """Add a player and start the game once the room fills up."""
        with self.lock:
            if not self.add_player(connection_ref, name):
                return ActionResult.fail(ROOM_FULL, f"Room {self.room_id} is full")

            player = self.players[-1]
            result = ActionResult(success=True, player_id=player.id)
            logger.info(f"{name} joined room {self.room_id} as player {player.id}")

            if self.is_full():
                self.initialize_game()
                result.game_started = True
                result.deliveries = self.project_views()
            return result

    def initialize_game(self) -> GameState:
        """Build, shuffle and deal the deck; reset scores and turn."""
        with self.lock:
            deck = build_deck(self.seed)
            stacks = deal_personal_stacks(deck, len(self.players), self.rules.personal_stack_size)

            for player, stack in zip(self.players, stacks):
                player.hand = []
                player.personal_stack = stack
                player.discard_pile = []
                player.score = 0
                player.position = 0

            self.game_state = GameState(
                deck=deck,
                players=list(self.players),
                play_areas=[
                    PlayArea(id=i, max_specials=self.rules.max_specials)
                    for i in range(self.rules.play_area_count)
                ],
                current_player=0,
                turn_phase=PHASE_PLAY,
                winner=None,
            )
            logger.info(f"Game started in room {self.room_id} ({len(deck)} cards left in deck)")
            return self.game_state

    def project_views(self) -> List[Delivery]:
        """One freshly built view per roster member."""
        with self.lock:
            if self.game_state is None:
                return []
            return [
                Delivery(player.connection_ref, player.id, project_view(self.game_state, player.id))
                for player in self.players
            ]

    def view_for(self, player_id: int) -> Optional[Dict[str, Any]]:
        with self.lock:
            if self.game_state is None:
                return None
            return project_view(self.game_state, player_id)

    def play_card(self, player_id: int, card_id: str, target_area_id: int) -> ActionResult:
        """
        Validate and apply a card play.

        On success the card moves to the target area, a completed Big Five
        scores and clears the area, the turn passes to the other player and
        the win condition is checked. A rejected move changes nothing.
        """
        with self.lock:
            state = self.game_state
            validation = validate_play(state, player_id, card_id, target_area_id, self.rules)
            if not validation.valid:
                logger.warning(
                    f"Rejected move in room {self.room_id} by player {player_id}: "
                    f"[{validation.error_code}] {validation.error_message}"
                )
                return ActionResult.fail(validation.error_code, validation.error_message)

            player = validation.player
            area = validation.area

            card = player.personal_stack.pop(validation.card_index)
            area.cards.append(card)

            result = ActionResult(success=True, player_id=player_id)

            if is_big_five(area, len(ANIMALS), self.rules.combo_size):
                player.score += self.rules.combo_points
                player.position += self.rules.combo_points
                # Cleared cards leave play but stay counted
                state.discard_stack.extend(area.cards)
                area.cards = []
                result.combo_scored = True
                logger.info(f"Player {player_id} completed the Big Five in room {self.room_id} area {area.id}")
            elif is_area_blocked(area, self.rules.combo_size):
                logger.info(f"Area {area.id} in room {self.room_id} is blocked without a Big Five")

            state.current_player = 1 - state.current_player

            # A later winning move takes the win over; winner never goes back to None
            if not player.personal_stack or player.position >= self.rules.win_position:
                state.winner = player_id
                logger.info(f"Player {player_id} won in room {self.room_id}")

            result.deliveries = self.project_views()
            return result

    def disconnect(self, connection_ref: ConnectionRef) -> ActionResult:
        """
        Handle a dropped connection.

        The game is neither paused nor forfeited; remaining players only get
        a notice.
        """
        with self.lock:
            player = self.remove_player(connection_ref)
            if player is None:
                return ActionResult(success=False)
            logger.info(f"Player {player.id} ({player.name}) left room {self.room_id}")
            return ActionResult(
                success=True,
                player_id=player.id,
                recipients=[p.connection_ref for p in self.players],
                room_empty=self.is_empty(),
            )
