"""Game models and data structures"""

from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple

from .constants import PHASE_PLAY

# Opaque handle owned by the gateway; only equality is used here
ConnectionRef = Any


@dataclass(frozen=True)
class Card:
    id: str
    kind: str  # bigfive|combination|special
    animal: Optional[str] = None
    animals: Tuple[str, ...] = ()
    special: Optional[str] = None
    color: Optional[str] = None

    @property
    def covered_animals(self) -> Tuple[str, ...]:
        """Animals this card counts as when completing a combo."""
        if self.animal:
            return (self.animal,)
        return self.animals


@dataclass
class Player:
    id: int  # seat, 0 or 1, assigned by join order
    name: str
    connection_ref: ConnectionRef = field(default=None, compare=False, repr=False)
    hand: List[Card] = field(default_factory=list)  # reserved, unused by the rules
    personal_stack: List[Card] = field(default_factory=list)
    discard_pile: List[Card] = field(default_factory=list)
    score: int = 0
    position: int = 0


@dataclass
class PlayArea:
    id: int
    cards: List[Card] = field(default_factory=list)
    max_specials: int = 2  # not enforced


@dataclass
class GameState:
    deck: List[Card] = field(default_factory=list)
    players: List[Player] = field(default_factory=list)  # indexed by player id
    play_areas: List[PlayArea] = field(default_factory=list)
    discard_stack: List[Card] = field(default_factory=list)
    current_player: int = 0
    turn_phase: str = PHASE_PLAY
    winner: Optional[int] = None

    def get_player(self, player_id: int) -> Optional[Player]:
        for player in self.players:
            if player.id == player_id:
                return player
        return None

    def get_play_area(self, area_id: int) -> Optional[PlayArea]:
        for area in self.play_areas:
            if area.id == area_id:
                return area
        return None

    def all_cards(self) -> List[Card]:
        """Every card the state holds, wherever it currently sits."""
        cards = list(self.deck) + list(self.discard_stack)
        for player in self.players:
            cards.extend(player.hand)
            cards.extend(player.personal_stack)
            cards.extend(player.discard_pile)
        for area in self.play_areas:
            cards.extend(area.cards)
        return cards
