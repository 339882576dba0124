# engine_py/src/bigfive_engine/errors.py

class GameError(Exception):
    """Base exception for game-related errors."""
    def __init__(self, code: str, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")

# Specific error codes
ROOM_NOT_FOUND = "ROOM_NOT_FOUND"
ROOM_FULL = "ROOM_FULL"
ROOM_ID_EXHAUSTED = "ROOM_ID_EXHAUSTED"
GAME_NOT_ACTIVE = "GAME_NOT_ACTIVE"
UNKNOWN_PLAYER = "UNKNOWN_PLAYER"
OWNERSHIP_MISMATCH = "OWNERSHIP_MISMATCH"
NOT_YOUR_TURN = "NOT_YOUR_TURN"
INVALID_TARGET_AREA = "INVALID_TARGET_AREA"
AREA_BLOCKED = "AREA_BLOCKED"
INVALID_EVENT = "INVALID_EVENT"
INTERNAL_ERROR = "INTERNAL_ERROR"

# Codes that reject a move; clients see them as one "invalid action"
MOVE_ERRORS = frozenset({
    GAME_NOT_ACTIVE,
    UNKNOWN_PLAYER,
    OWNERSHIP_MISMATCH,
    NOT_YOUR_TURN,
    INVALID_TARGET_AREA,
    AREA_BLOCKED,
})

# Helper function to raise common errors
def raise_error(code: str, message: str):
    """Raise a GameError with the given code."""
    raise GameError(code, message)
