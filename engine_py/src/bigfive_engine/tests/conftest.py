"""
Shared fixtures for the Big Five engine tests.
"""

import pytest

from bigfive_engine.engine import Room
from bigfive_engine.models import Card, GameState


def take(state: GameState, card_id: str) -> Card:
    """Remove a card from wherever it sits in the state and return it."""
    containers = [state.deck, state.discard_stack]
    for player in state.players:
        containers.extend([player.hand, player.personal_stack, player.discard_pile])
    for area in state.play_areas:
        containers.append(area.cards)

    for cards in containers:
        for index, card in enumerate(cards):
            if card.id == card_id:
                return cards.pop(index)
    raise KeyError(card_id)


def stage_area(state: GameState, area_id: int, card_ids):
    """Move the given cards into a play area."""
    area = state.get_play_area(area_id)
    for card_id in card_ids:
        area.cards.append(take(state, card_id))
    return area


def give(state: GameState, player_id: int, card_id: str) -> Card:
    """Put a card on top of a player's personal stack."""
    card = take(state, card_id)
    state.get_player(player_id).personal_stack.insert(0, card)
    return card


@pytest.fixture
def room():
    """A room with both players seated and the game dealt."""
    room = Room("TEST01", seed=42)
    room.join("conn-alice", "Alice")
    room.join("conn-bob", "Bob")
    return room


@pytest.fixture
def state(room):
    return room.game_state
