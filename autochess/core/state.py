"""
Root game state aggregate.

Holds everything that survives between commands:
- Economy (gold, life total, win streak)
- Units (player board, reserve, enemy board, shop)
- Round bookkeeping (round number, phase, battle flag)
"""
from typing import Dict, List, Optional

from autochess.config import GameConfig
from autochess.core.board import Board
from autochess.core.shop import ShopSlot
from autochess.utils.constants import BattleOutcome, GamePhase


class GameState:
    """
    Single owned state of one game.

    Components receive it by reference; only the round controller's
    commands decide when it is mutated.
    """

    def __init__(self, config: GameConfig):
        self.config = config

        # Economy
        self.round_number = 1
        self.gold = config.initial_gold
        self.health = config.initial_health
        self.win_streak = 0

        # Units
        self.board = Board()
        self.enemy_board = Board()
        self.reserve: Dict[str, int] = {}
        self.shop: List[ShopSlot] = []

        # Round state
        self.in_battle = False
        self.phase = GamePhase.PLACEMENT
        self.last_outcome: Optional[BattleOutcome] = None

    @property
    def is_defeated(self) -> bool:
        return self.phase == GamePhase.DEFEAT

    def reserve_count(self, unit_id: str) -> int:
        return self.reserve.get(unit_id, 0)

    def add_to_reserve(self, unit_id: str, count: int = 1):
        self.reserve[unit_id] = self.reserve.get(unit_id, 0) + count

    def take_from_reserve(self, unit_id: str, count: int = 1) -> bool:
        """Remove copies from the reserve; False (and no change) if too few."""
        available = self.reserve.get(unit_id, 0)
        if available < count:
            return False
        if available == count:
            del self.reserve[unit_id]
        else:
            self.reserve[unit_id] = available - count
        return True

    def get_state_dict(self) -> Dict:
        """Get game state as a plain dictionary."""
        return {
            "round": self.round_number,
            "gold": self.gold,
            "health": self.health,
            "win_streak": self.win_streak,
            "in_battle": self.in_battle,
            "phase": self.phase.name,
            "last_outcome": self.last_outcome.value if self.last_outcome else None,
            "board": [unit.to_dict() if unit else None for unit in self.board.cells],
            "enemy_board": [unit.to_dict() if unit else None for unit in self.enemy_board.cells],
            "reserve": dict(self.reserve),
            "shop": [slot.to_dict() for slot in self.shop],
        }
