"""
Auto-Chess Simulator Configuration
Defines all configurable parameters of a game
"""
import logging
from dataclasses import dataclass, field
from typing import Optional, Dict
from pathlib import Path


@dataclass(frozen=True)
class RoundDifficulty:
    """One row of the per-round difficulty table."""

    enemy_count: int
    """Number of enemy units placed on the enemy board"""

    enemy_level: float
    """Multiplier applied to enemy base stats"""

    star_distribution: Dict[int, float]
    """Star level -> probability of an enemy rolling that star"""

    win_reward: int
    """Base gold for winning this round"""

    lose_reward: int
    """Base gold for losing (or drawing) this round"""


def _default_round_difficulty() -> Dict[int, RoundDifficulty]:
    return {
        1: RoundDifficulty(2, 1.0, {1: 1.0, 2: 0.0, 3: 0.0}, win_reward=3, lose_reward=1),
        2: RoundDifficulty(3, 1.0, {1: 0.9, 2: 0.1, 3: 0.0}, win_reward=3, lose_reward=1),
        3: RoundDifficulty(3, 1.2, {1: 0.8, 2: 0.2, 3: 0.0}, win_reward=4, lose_reward=1),
        4: RoundDifficulty(4, 1.2, {1: 0.7, 2: 0.3, 3: 0.0}, win_reward=4, lose_reward=2),
        5: RoundDifficulty(4, 1.5, {1: 0.6, 2: 0.3, 3: 0.1}, win_reward=5, lose_reward=2),
        6: RoundDifficulty(5, 1.5, {1: 0.5, 2: 0.4, 3: 0.1}, win_reward=5, lose_reward=2),
        7: RoundDifficulty(5, 1.8, {1: 0.4, 2: 0.4, 3: 0.2}, win_reward=6, lose_reward=2),
        8: RoundDifficulty(6, 1.8, {1: 0.3, 2: 0.5, 3: 0.2}, win_reward=6, lose_reward=3),
        9: RoundDifficulty(6, 2.0, {1: 0.2, 2: 0.5, 3: 0.3}, win_reward=7, lose_reward=3),
        10: RoundDifficulty(7, 2.2, {1: 0.1, 2: 0.4, 3: 0.5}, win_reward=8, lose_reward=3),
    }


@dataclass
class GameConfig:
    """
    Main configuration for an auto-chess game.

    Everything the core needs beyond the unit catalog lives here, so
    tests and headless runs can swap tables without touching the engine.
    """

    # ===== Data Settings =====
    data_dir: Optional[Path] = None
    """Path to the unit catalog directory. If None, uses the bundled catalog"""

    # ===== Game Mechanics Settings =====
    initial_gold: int = 10
    """Gold at game start"""

    initial_health: int = 100
    """Player life total at game start"""

    defeat_health_loss: int = 100
    """Life lost on a defeat"""

    shop_refresh_cost: int = 2
    """Gold cost to reroll the shop"""

    shop_size: int = 5
    """Number of units shown in the shop"""

    # ===== Economy =====
    interest_rate: float = 0.1
    """Interest per gold held (1 gold per 10)"""

    max_interest: int = 5
    """Maximum gold from interest"""

    win_bonus: int = 1
    """Gold per win-streak step (streak capped at GameConstants.MAX_STREAK_STEPS)"""

    round_difficulty: Dict[int, RoundDifficulty] = field(default_factory=_default_round_difficulty)
    """Round -> difficulty row. Rounds past the last row reuse the last row"""

    # ===== Enemy Buffs =====
    enemy_health_multiplier: float = 1.0
    """Flat multiplier on enemy health"""

    enemy_attack_multiplier: float = 1.0
    """Flat multiplier on enemy attack"""

    enemy_round_scaling: float = 0.1
    """Extra enemy scaling per round after the first"""

    enemy_max_scaling: float = 3.0
    """Cap of the per-round enemy scaling"""

    # ===== Combat Settings =====
    max_battle_turns: int = 50
    """Turn cap of one battle; reaching it is a draw"""

    battle_layout: str = "stacked"
    """
    Board orientation used by targeting:
    - 'stacked': boards above each other, rows are the front lines
    - 'side_by_side': boards next to each other, columns are the front lines
    """

    enable_team_heal: bool = True
    """Support units heal their team after every allied attack"""

    # ===== Pacing =====
    attack_delay: float = 1.0
    """Seconds awaited after each battle turn"""

    hit_delay: float = 0.3
    """Seconds awaited before and after each attack resolves"""

    # ===== Debug Settings =====
    debug_mode: bool = False
    """Enable debug logging"""

    seed: Optional[int] = None
    """Random seed for reproducibility"""

    log_level: str = "INFO"
    """Logging level: DEBUG, INFO, WARNING, ERROR"""

    def difficulty_for(self, round_number: int) -> RoundDifficulty:
        """Difficulty row for a round, clamped to the highest configured round."""
        max_round = max(self.round_difficulty)
        return self.round_difficulty[min(max(round_number, 1), max_round)]


# ===== Preset Configurations =====

def get_default_config() -> GameConfig:
    """
    Standard rules with presentation pacing.
    """
    return GameConfig()


def get_headless_config(seed: Optional[int] = None) -> GameConfig:
    """
    Configuration for scripted runs and tests.
    No pacing delays, seeded RNG.
    """
    return GameConfig(
        attack_delay=0.0,
        hit_delay=0.0,
        seed=seed,
    )


def get_fast_config(seed: Optional[int] = None) -> GameConfig:
    """
    Configuration for quick experiments.
    More starting gold, a softer defeat penalty and shorter battles.
    """
    return GameConfig(
        initial_gold=30,
        defeat_health_loss=20,
        max_battle_turns=20,
        attack_delay=0.0,
        hit_delay=0.0,
        debug_mode=True,
        seed=seed,
    )


def configure_logging(config: GameConfig) -> None:
    """Apply the configured log level to the package loggers."""
    level = logging.DEBUG if config.debug_mode else getattr(logging, config.log_level.upper(), logging.INFO)
    logging.basicConfig(format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    logging.getLogger("autochess").setLevel(level)


# ===== Game Constants =====

class GameConstants:
    """
    Hard-coded game constants that don't change.
    """

    BOARD_ROWS = 4
    BOARD_COLS = 4
    BOARD_SIZE = BOARD_ROWS * BOARD_COLS

    MIN_STAR = 1
    MAX_STAR = 3

    # Copies of one (unit, star) that merge into the next star
    MERGE_COUNT = 3

    # Win streak steps that pay the win bonus
    MAX_STREAK_STEPS = 3

    BATTLE_LAYOUTS = ("stacked", "side_by_side")


if __name__ == "__main__":
    # Example usage
    config = get_default_config()
    print(f"Initial gold: {config.initial_gold}")
    print(f"Initial health: {config.initial_health}")
    print(f"Battle layout: {config.battle_layout}")
    print(f"Configured rounds: {len(config.round_difficulty)}")
