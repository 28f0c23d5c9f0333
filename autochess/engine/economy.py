"""
Economy Engine.

Handles:
- Shop generation and paid/free refreshes
- Affordability checks
- End-of-battle gold (base reward, interest, win streak bonus)
"""
import logging
import math
from dataclasses import dataclass
from typing import Dict, List, Optional

from autochess.config import GameConfig, GameConstants
from autochess.core.shop import ShopGenerator, ShopSlot
from autochess.core.state import GameState
from autochess.utils.constants import BattleOutcome, CommandStatus

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RoundReward:
    """Gold breakdown paid after a battle."""
    base: int
    interest: int
    streak_bonus: int

    @property
    def total(self) -> int:
        return self.base + self.interest + self.streak_bonus

    def to_dict(self) -> Dict[str, int]:
        return {
            "base": self.base,
            "interest": self.interest,
            "streak_bonus": self.streak_bonus,
            "total": self.total,
        }


class EconomyEngine:
    """
    Gold in and gold out.

    Every deduction is preceded by an affordability check, so gold never
    goes negative.
    """

    def __init__(self, config: GameConfig, shop_generator: ShopGenerator):
        """
        Args:
            config: Game configuration
            shop_generator: Source of shop offers
        """
        self.config = config
        self.shop_generator = shop_generator

    # ===== Shop =====

    def generate_shop(self, size: Optional[int] = None) -> List[ShopSlot]:
        """Sample a new shop of `size` slots (default: config.shop_size)."""
        return self.shop_generator.generate(self.config.shop_size if size is None else size)

    @staticmethod
    def can_afford(slot: ShopSlot, gold: int) -> bool:
        return gold >= slot.cost

    def refresh_shop(self, state: GameState, free: bool = False) -> CommandStatus:
        """
        Replace the shop, charging the refresh cost unless free.

        Returns:
            SUCCESS, or INSUFFICIENT_FUNDS with the old shop kept
        """
        cost = self.config.shop_refresh_cost
        if not free and state.gold < cost:
            logger.info("Not enough gold to refresh the shop (%d < %d)", state.gold, cost)
            return CommandStatus.INSUFFICIENT_FUNDS

        state.shop = self.generate_shop()
        if not free:
            state.gold -= cost
        return CommandStatus.SUCCESS

    # ===== Rewards =====

    def compute_interest(self, gold: int) -> int:
        """floor(gold * rate), capped at max_interest."""
        return min(math.floor(gold * self.config.interest_rate), self.config.max_interest)

    def compute_round_reward(
        self,
        outcome: BattleOutcome,
        round_number: int,
        current_gold: int,
        win_streak: int,
    ) -> RoundReward:
        """
        Gold earned after a battle.

        Args:
            outcome: Battle result
            round_number: Round just played (clamped to the difficulty table)
            current_gold: Gold held before the reward, used for interest
            win_streak: Streak including this battle's win, if any

        Returns:
            RoundReward breakdown
        """
        difficulty = self.config.difficulty_for(round_number)
        is_win = outcome == BattleOutcome.WIN

        base = difficulty.win_reward if is_win else difficulty.lose_reward
        interest = self.compute_interest(current_gold)
        streak_bonus = 0
        if is_win:
            streak_bonus = min(win_streak, GameConstants.MAX_STREAK_STEPS) * self.config.win_bonus

        return RoundReward(base=base, interest=interest, streak_bonus=streak_bonus)
