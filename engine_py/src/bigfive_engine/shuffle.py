"""
Deck construction, shuffling and dealing utilities.
"""

import random
from collections import Counter
from typing import List, Optional

from .constants import (
    ANIMALS, BIG_FIVE_COPIES, CARD_COLORS, COMBINATIONS, DECK_SIZE,
    KIND_BIG_FIVE, KIND_COMBINATION, KIND_SPECIAL, SPECIAL_COPIES, SPECIALS
)
from .models import Card, GameState


def create_deck() -> List[Card]:
    """Create the full 54-card deck in catalog order."""
    deck = []

    # 35 Big Five cards (7 per animal)
    for animal in ANIMALS:
        for i in range(BIG_FIVE_COPIES):
            deck.append(Card(
                id=f"bf-{animal}-{i}",
                kind=KIND_BIG_FIVE,
                animal=animal,
                color=CARD_COLORS[KIND_BIG_FIVE],
            ))

    # 5 fixed combination cards
    for i, pair in enumerate(COMBINATIONS):
        deck.append(Card(id=f"combo-{i}", kind=KIND_COMBINATION, animals=pair))

    # 14 special cards (2 per kind)
    for special in SPECIALS:
        for i in range(SPECIAL_COPIES):
            deck.append(Card(
                id=f"sp-{special}-{i}",
                kind=KIND_SPECIAL,
                special=special,
                color=CARD_COLORS[KIND_SPECIAL],
            ))

    return deck


def shuffle_deck(deck: List[Card], seed: Optional[int] = None) -> List[Card]:
    """
    Shuffle a deck, deterministically if seed is provided.

    Backward Fisher-Yates pass: each position i swaps with a uniformly
    chosen j in [0, i].

    Args:
        deck: Cards to shuffle
        seed: Optional seed for deterministic shuffling

    Returns:
        Shuffled copy of the deck
    """
    deck_copy = list(deck)
    rng = random.Random(seed) if seed is not None else random

    for i in range(len(deck_copy) - 1, 0, -1):
        j = rng.randint(0, i)
        deck_copy[i], deck_copy[j] = deck_copy[j], deck_copy[i]

    return deck_copy


def build_deck(seed: Optional[int] = None) -> List[Card]:
    """Create and shuffle a fresh deck."""
    return shuffle_deck(create_deck(), seed)


def deal_personal_stacks(deck: List[Card], player_count: int, stack_size: int) -> List[List[Card]]:
    """
    Deal one personal stack per player off the top of the deck.

    The deck is consumed in place: player 0 takes the first stack_size
    cards, player 1 the next stack_size, and so on.

    Returns:
        List of stacks, indexed by player id
    """
    if player_count * stack_size > len(deck):
        raise ValueError(f"Cannot deal {player_count}x{stack_size} cards from {len(deck)}")

    stacks = []
    for _ in range(player_count):
        stacks.append(deck[:stack_size])
        del deck[:stack_size]
    return stacks


def count_cards(state: GameState) -> int:
    return len(state.all_cards())


def validate_deck_integrity(state: GameState) -> bool:
    """Validate that all 54 cards are accounted for and no duplicates exist."""
    expected = {card.id for card in create_deck()}
    counts = Counter(card.id for card in state.all_cards())

    return (
        count_cards(state) == DECK_SIZE and  # Nothing created or lost
        all(n == 1 for n in counts.values()) and  # No duplicates
        set(counts) == expected  # Correct cards
    )
