"""
Auto-chess game core.

A headless, data-driven simulation of an auto-chess loop: shop economy,
three-copy unit merging, generated enemy rosters and turn-based combat.
Presentation layers drive it through RoundController and read state back
through snapshots and the event queue.
"""

from .config import (
    GameConfig,
    GameConstants,
    RoundDifficulty,
    configure_logging,
    get_default_config,
    get_fast_config,
    get_headless_config,
)
from .errors import AutoChessError, CommandRejectedError

__version__ = "0.1.0"
__all__ = [
    "GameConfig",
    "GameConstants",
    "RoundDifficulty",
    "configure_logging",
    "get_default_config",
    "get_fast_config",
    "get_headless_config",
    "AutoChessError",
    "CommandRejectedError",
]
