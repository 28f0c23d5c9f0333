"""
Enemy roster generation.

Builds the opposing board for a round from the difficulty table: how many
enemies, their star odds and how much their stats are scaled.
"""
import logging
import math
import random
from typing import Dict, List, Optional

from autochess.config import GameConfig
from autochess.core.board import Board
from autochess.core.unit import create_unit
from unit_data import UnitDataLoader

logger = logging.getLogger(__name__)


class EnemyGenerator:
    """
    Rebuilds the enemy board once per round. Boards are never merged.
    """

    def __init__(self, config: GameConfig, data_loader: UnitDataLoader, rng: Optional[random.Random] = None):
        """
        Args:
            config: Game configuration (difficulty table, enemy buffs)
            data_loader: Unit catalog
            rng: Random source shared with the rest of the game
        """
        self.config = config
        self.data_loader = data_loader
        self.rng = rng or random.Random()

    def round_scaling(self, round_number: int) -> float:
        """min(1 + (round - 1) * rate, cap)"""
        return min(1 + (round_number - 1) * self.config.enemy_round_scaling, self.config.enemy_max_scaling)

    def pick_positions(self, count: int, board_size: int) -> List[int]:
        """
        Distinct cells chosen uniformly without replacement.

        Fisher-Yates shuffle of every cell, keeping the first `count`.
        """
        positions = list(range(board_size))
        for i in range(len(positions) - 1, 0, -1):
            j = self.rng.randint(0, i)
            positions[i], positions[j] = positions[j], positions[i]
        return positions[:min(count, board_size)]

    def roll_star(self, distribution: Dict[int, float]) -> int:
        """
        Sample a star level from per-star probabilities.

        Walks stars in ascending order; the first cumulative probability at
        or above the draw wins. Falls back to 1 when rounding leaves the
        draw above the final cumulative value.
        """
        draw = self.rng.random()
        cumulative = 0.0
        for star in sorted(distribution):
            cumulative += distribution[star]
            if draw <= cumulative:
                return star
        return 1

    def generate(self, round_number: int, board: Optional[Board] = None) -> Board:
        """
        Populate an enemy board for a round.

        Args:
            round_number: Round being played (clamped to the difficulty table)
            board: Board to clear and refill. If None, a new one is created.

        Returns:
            The filled board
        """
        board = board if board is not None else Board()
        board.clear()

        difficulty = self.config.difficulty_for(round_number)
        scaling = self.round_scaling(round_number)
        unit_ids = self.data_loader.get_unit_ids()

        for position in self.pick_positions(difficulty.enemy_count, board.size):
            star = self.roll_star(difficulty.star_distribution)
            unit_id = self.rng.choice(unit_ids)
            unit = create_unit(self.data_loader.stats_for(unit_id, star))

            unit.attack = math.floor(
                unit.attack * difficulty.enemy_level * self.config.enemy_attack_multiplier * scaling
            )
            unit.health = math.floor(
                unit.health * difficulty.enemy_level * self.config.enemy_health_multiplier * scaling
            )
            unit.max_health = unit.health

            board.place(unit, position)

        logger.debug("Round %d enemies: %s", round_number, board.get_all_units())
        return board
