"""
Move validation for card plays.
"""

from typing import Optional, Set

from .errors import (
    AREA_BLOCKED, GAME_NOT_ACTIVE, INVALID_TARGET_AREA, NOT_YOUR_TURN,
    OWNERSHIP_MISMATCH, UNKNOWN_PLAYER
)
from .models import GameState, PlayArea, Player
from .rules import RuleConfig, default_rules


class ValidationResult:
    """Result of move validation."""

    def __init__(
        self,
        valid: bool,
        error_code: Optional[str] = None,
        error_message: Optional[str] = None,
        player: Optional[Player] = None,
        area: Optional[PlayArea] = None,
        card_index: int = -1
    ):
        self.valid = valid
        self.error_code = error_code
        self.error_message = error_message
        self.player = player
        self.area = area
        self.card_index = card_index

    @classmethod
    def success(cls, player: Player, area: PlayArea, card_index: int) -> 'ValidationResult':
        """Create a successful validation result."""
        return cls(valid=True, player=player, area=area, card_index=card_index)

    @classmethod
    def error(cls, error_code: str, error_message: str) -> 'ValidationResult':
        """Create an error validation result."""
        return cls(valid=False, error_code=error_code, error_message=error_message)


def find_card_index(player: Player, card_id: str) -> int:
    """Index of card_id in the player's personal stack, or -1."""
    for index, card in enumerate(player.personal_stack):
        if card.id == card_id:
            return index
    return -1


def animals_in_area(area: PlayArea) -> Set[str]:
    """Distinct animals covered by the cards in a play area."""
    animals = set()
    for card in area.cards:
        animals.update(card.covered_animals)
    return animals


def is_big_five(area: PlayArea, animal_count: int = 5, combo_size: int = 5) -> bool:
    """True when the area holds exactly combo_size cards covering every animal."""
    return len(area.cards) == combo_size and len(animals_in_area(area)) == animal_count


def is_area_blocked(area: PlayArea, combo_size: int = 5) -> bool:
    """A full area that did not score stays full for the rest of the game."""
    return len(area.cards) >= combo_size


def validate_play(
    state: Optional[GameState],
    player_id: int,
    card_id: str,
    target_area_id: int,
    rules: RuleConfig = default_rules
) -> ValidationResult:
    """
    Validate a card play without touching the state.

    Checks run in a fixed order and the first failure wins:
    active game, known player, card ownership, turn, target area, open area.
    """
    if state is None:
        return ValidationResult.error(GAME_NOT_ACTIVE, "Game has not started")

    player = state.get_player(player_id)
    if player is None:
        return ValidationResult.error(UNKNOWN_PLAYER, f"No player {player_id} in this game")

    card_index = find_card_index(player, card_id)
    if card_index == -1:
        return ValidationResult.error(OWNERSHIP_MISMATCH, f"Card {card_id} is not in your stack")

    if state.current_player != player_id:
        return ValidationResult.error(NOT_YOUR_TURN, "Not your turn")

    area = state.get_play_area(target_area_id)
    if area is None:
        return ValidationResult.error(INVALID_TARGET_AREA, f"No play area {target_area_id}")

    # A full area that did not score never accepts another card
    if is_area_blocked(area, rules.combo_size):
        return ValidationResult.error(AREA_BLOCKED, f"Play area {target_area_id} is full")

    return ValidationResult.success(player, area, card_index)
