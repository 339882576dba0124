"""
State serialization and per-player view projection.
"""

from typing import Any, Dict, List, Optional

from .constants import (
    HIDDEN_CARD_ID, HIDDEN_CARD_TYPE, KIND_BIG_FIVE, KIND_COMBINATION, KIND_SPECIAL
)
from .models import Card, GameState, PlayArea, Player


def serialize_card(card: Card) -> Dict[str, Any]:
    """Serialize a single card."""
    data: Dict[str, Any] = {"id": card.id, "type": card.kind}
    if card.kind == KIND_BIG_FIVE:
        data["animal"] = card.animal
    elif card.kind == KIND_COMBINATION:
        data["animals"] = list(card.animals)
    elif card.kind == KIND_SPECIAL:
        data["special"] = card.special
    if card.color:
        data["color"] = card.color
    return data


def hidden_card() -> Dict[str, Any]:
    """Card back shown in place of a card the viewer may not see."""
    return {"hidden": True, "type": HIDDEN_CARD_TYPE, "id": HIDDEN_CARD_ID}


def serialize_cards(cards: List[Card], hidden: bool = False) -> List[Dict[str, Any]]:
    if hidden:
        return [hidden_card() for _ in cards]
    return [serialize_card(card) for card in cards]


def serialize_player(player: Player, reveal: bool) -> Dict[str, Any]:
    """
    Serialize a player.

    Args:
        player: Player to serialize
        reveal: Whether the viewer may see this player's private cards
    """
    return {
        "id": player.id,
        "name": player.name,
        "hand": serialize_cards(player.hand, hidden=not reveal),
        "personalStack": serialize_cards(player.personal_stack, hidden=not reveal),
        "discardPile": serialize_cards(player.discard_pile),
        "score": player.score,
        "position": player.position,
    }


def serialize_play_area(area: PlayArea) -> Dict[str, Any]:
    return {
        "id": area.id,
        "cards": serialize_cards(area.cards),
        "maxSpecials": area.max_specials,
    }


def project_view(state: GameState, viewer_id: Optional[int] = None) -> Dict[str, Any]:
    """
    Build the view of the game a single player is allowed to see.

    Every other player's personal stack is replaced by card backs of the
    same length. The result is built from scratch, so nothing in it
    aliases the authoritative state.

    Args:
        state: Authoritative game state
        viewer_id: Player id of the recipient; None hides every stack

    Returns:
        Plain dict safe for JSON transmission
    """
    return {
        "deck": serialize_cards(state.deck),
        "players": [
            serialize_player(player, reveal=(player.id == viewer_id))
            for player in state.players
        ],
        "playAreas": [serialize_play_area(area) for area in state.play_areas],
        "discardStack": serialize_cards(state.discard_stack),
        "currentPlayer": state.current_player,
        "turnPhase": state.turn_phase,
        "winner": state.winner,
    }
