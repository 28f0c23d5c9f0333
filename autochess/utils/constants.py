"""
Game constants and enumerations for the auto-chess simulator.
"""

from enum import Enum, IntEnum, auto


class CommandType(IntEnum):
    """Enumeration of all placement-phase commands plus battle start."""
    PASS = 0
    REFRESH_SHOP = 1
    PURCHASE = 2
    SWAP = 3
    MERGE_RESERVE = 4
    DEPLOY_RESERVE = 5
    START_BATTLE = 6


class CommandStatus(Enum):
    """Result of a command. Anything but SUCCESS left the state untouched."""
    SUCCESS = "success"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_SLOT_INDEX = "invalid_slot_index"
    INVALID_POSITION = "invalid_position"
    OPERATION_DURING_BATTLE = "operation_during_battle"
    GAME_OVER = "game_over"
    NOTHING_TO_MERGE = "nothing_to_merge"
    RESERVE_EMPTY = "reserve_empty"
    BOARD_FULL = "board_full"

    @property
    def ok(self) -> bool:
        return self is CommandStatus.SUCCESS


class BattleOutcome(Enum):
    """Terminal result of one battle, from the player's point of view."""
    WIN = "win"
    LOSS = "loss"
    DRAW = "draw"


class GamePhase(IntEnum):
    """Round controller states."""
    PLACEMENT = auto()
    BATTLE = auto()
    DEFEAT = auto()


class CombatState(IntEnum):
    """Combat resolver states."""
    IDLE = auto()
    FIGHTING = auto()
    RESOLVED = auto()
