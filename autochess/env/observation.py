"""
Observation encoder for headless play.

Translates the raw GameState (boards, shop, reserve, economy) into
structured numpy arrays.

Output shapes:
  global   [12]      scalar game state, normalized [0, 1]
  board    [16, 10]  player board, one row per cell (fixed mapping)
  enemy    [16, 10]  enemy board, same layout
  shop     [5, 4]    per-slot shop features
  reserve  [U]       reserve copies per catalog unit
  flat     all of the above concatenated
"""
from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Optional

import numpy as np

from autochess.config import GameConfig, GameConstants
from autochess.core.board import Board
from autochess.core.state import GameState
from autochess.core.unit import Unit
from unit_data import ROLE_TAGS, UnitDataLoader, get_unit_power_score


@dataclass
class ObservationConfig:
    unit_to_idx: Dict[str, int]   # unit_id -> int (1..N, 0=empty)
    role_to_idx: Dict[str, int]   # role tag -> int (1..N, 0=empty)
    num_units: int


def build_lookup_tables(data_loader: UnitDataLoader) -> ObservationConfig:
    """
    Build deterministic lookup tables from the catalog.

    Units are indexed in sorted id order; roles in ROLE_TAGS order.
    """
    unit_ids = sorted(data_loader.get_unit_ids())
    return ObservationConfig(
        unit_to_idx={unit_id: i + 1 for i, unit_id in enumerate(unit_ids)},
        role_to_idx={role: i + 1 for i, role in enumerate(ROLE_TAGS)},
        num_units=len(unit_ids),
    )


class StateObservation:
    """
    Encodes the game state into numpy arrays.

    One instance is typically created per game and reused across steps.
    """

    GLOBAL_DIM = 12
    UNIT_DIM = 10
    SHOP_DIM = 4

    def __init__(self, obs_config: ObservationConfig, game_config: GameConfig) -> None:
        self.obs_config = obs_config
        self.game_config = game_config

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def encode(self, state: GameState) -> Dict[str, np.ndarray]:
        """
        Encode the full observation.

        Returns:
            Dict with keys 'global', 'board', 'enemy', 'shop', 'reserve'.
        """
        return {
            "global":  self._encode_global(state),
            "board":   self._encode_board(state.board),
            "enemy":   self._encode_board(state.enemy_board),
            "shop":    self._encode_shop(state),
            "reserve": self._encode_reserve(state),
        }

    def to_flat(self, state: GameState) -> np.ndarray:
        """Return the flattened observation vector."""
        obs = self.encode(state)
        return np.concatenate([
            obs["global"],
            obs["board"].flatten(),
            obs["enemy"].flatten(),
            obs["shop"].flatten(),
            obs["reserve"],
        ]).astype(np.float32)

    def flat_size(self) -> int:
        return (
            self.GLOBAL_DIM
            + 2 * GameConstants.BOARD_SIZE * self.UNIT_DIM
            + self.game_config.shop_size * self.SHOP_DIM
            + self.obs_config.num_units
        )

    # ------------------------------------------------------------------
    # Private encoders
    # ------------------------------------------------------------------

    def _encode_global(self, state: GameState) -> np.ndarray:
        """Encode scalar state into [12] float32 array (all values [0, 1])."""
        vec = np.zeros(self.GLOBAL_DIM, dtype=np.float32)
        cfg = self.game_config

        max_round = max(cfg.round_difficulty)
        interest = min(int(state.gold * cfg.interest_rate), cfg.max_interest)

        vec[0] = min(state.round_number, max_round) / max_round
        vec[1] = min(state.gold, 100) / 100.0
        vec[2] = state.health / cfg.initial_health if cfg.initial_health > 0 else 0.0
        vec[3] = min(state.win_streak, GameConstants.MAX_STREAK_STEPS) / GameConstants.MAX_STREAK_STEPS
        vec[4] = interest / cfg.max_interest if cfg.max_interest > 0 else 0.0
        vec[5] = state.board.count_units() / GameConstants.BOARD_SIZE
        vec[6] = state.enemy_board.count_units() / GameConstants.BOARD_SIZE
        vec[7] = min(sum(state.reserve.values()), GameConstants.BOARD_SIZE) / GameConstants.BOARD_SIZE
        vec[8] = 1.0 if state.in_battle else 0.0
        vec[9] = len(state.shop) / cfg.shop_size if cfg.shop_size > 0 else 0.0
        vec[10] = 1.0 if state.is_defeated else 0.0
        # dim 11: reserved zero
        return vec

    def _encode_board(self, board: Board) -> np.ndarray:
        """
        Encode a board into [16, 10] float32 array.

        Row i describes cell i; empty cells are all-zero rows.
        """
        arr = np.zeros((board.size, self.UNIT_DIM), dtype=np.float32)
        for position, unit in board.occupied():
            row, col = board.to_coords(position)
            arr[position] = self._encode_unit(unit, row, col)
        return arr

    def _encode_unit(self, unit: Unit, row: int, col: int) -> np.ndarray:
        """Encode a single unit into [10] float32 vector."""
        vec = np.zeros(self.UNIT_DIM, dtype=np.float32)

        hp_ratio = unit.health / unit.max_health if unit.max_health > 0 else 0.0
        power = get_unit_power_score(unit)

        vec[0] = float(self.obs_config.unit_to_idx.get(unit.unit_id, 0))
        vec[1] = float(unit.star)
        vec[2] = float(row)
        vec[3] = float(col)
        vec[4] = hp_ratio
        vec[5] = float(unit.max_health)   # raw
        vec[6] = float(unit.attack)       # raw
        vec[7] = float(self.obs_config.role_to_idx.get(unit.role, 0))
        vec[8] = float(unit.heal_power)
        vec[9] = power
        return vec

    def _encode_shop(self, state: GameState) -> np.ndarray:
        """Encode shop slots into [shop_size, 4] float32 array."""
        arr = np.zeros((self.game_config.shop_size, self.SHOP_DIM), dtype=np.float32)

        for i, slot in enumerate(state.shop[:self.game_config.shop_size]):
            copies_owned = len(state.board.find_units(slot.unit_id)) + state.reserve_count(slot.unit_id)
            arr[i, 0] = float(self.obs_config.unit_to_idx.get(slot.unit_id, 0))
            arr[i, 1] = float(slot.cost)
            arr[i, 2] = 1.0 if state.gold >= slot.cost else 0.0
            arr[i, 3] = float(copies_owned)

        return arr

    def _encode_reserve(self, state: GameState) -> np.ndarray:
        """Reserve copies per unit, indexed by unit_to_idx - 1."""
        vec = np.zeros(self.obs_config.num_units, dtype=np.float32)
        for unit_id, count in state.reserve.items():
            idx = self.obs_config.unit_to_idx.get(unit_id)
            if idx is not None:
                vec[idx - 1] = float(count)
        return vec


def create_observation_encoder(
    data_loader: UnitDataLoader, game_config: Optional[GameConfig] = None
) -> StateObservation:
    """Convenience factory: build lookup tables then construct StateObservation."""
    obs_config = build_lookup_tables(data_loader)
    return StateObservation(obs_config, game_config or GameConfig())
