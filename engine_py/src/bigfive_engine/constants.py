"""Game constants and card catalog"""

from typing import Dict, List, Tuple

# Big Five animals, in catalog order
BUFFEL = 'BUFFEL'
OLIFANT = 'OLIFANT'
LUIPAARD = 'LUIPAARD'
LEEUW = 'LEEUW'
NEUSHOORN = 'NEUSHOORN'

ANIMALS: List[str] = [BUFFEL, OLIFANT, LUIPAARD, LEEUW, NEUSHOORN]
BIG_FIVE_COPIES = 7

# Only these five pairs exist as combination cards
COMBINATIONS: List[Tuple[str, str]] = [
    (LUIPAARD, BUFFEL),
    (BUFFEL, NEUSHOORN),
    (LEEUW, LUIPAARD),
    (LEEUW, OLIFANT),
    (OLIFANT, NEUSHOORN),
]

SPECIALS: List[str] = [
    'GIRAFFE',
    'BIG_FIVE_SPOTTER',
    'IJSBEER',
    'ZEBRA',
    'AASGIER',
    'KAMELEON',
    'KROKODIL',
]
SPECIAL_COPIES = 2

# Card kinds as they appear on the wire
KIND_BIG_FIVE = 'bigfive'
KIND_COMBINATION = 'combination'
KIND_SPECIAL = 'special'

CARD_COLORS: Dict[str, str] = {
    KIND_BIG_FIVE: 'yellow',
    KIND_SPECIAL: 'blue',
}

DECK_SIZE = (
    len(ANIMALS) * BIG_FIVE_COPIES
    + len(COMBINATIONS)
    + len(SPECIALS) * SPECIAL_COPIES
)  # 54

# Opponent cards are sent as card backs
HIDDEN_CARD_ID = 'card-back'
HIDDEN_CARD_TYPE = 'back'

# Room lifecycle
STATUS_WAITING = 'waiting'
STATUS_ACTIVE = 'active'
STATUS_FINISHED = 'finished'

PHASE_PLAY = 'play'

ROOM_CODE_ALPHABET = 'ABCDEFGHIJKLMNOPQRSTUVWXYZ0123456789'
