"""
Board management.

Handles the 4x4 grid where units are placed for combat.
"""
from typing import Iterator, List, Optional, Tuple

import numpy as np

from autochess.config import GameConstants
from autochess.core.unit import Unit


class Board:
    """
    Represents a square grid board (4 rows x 4 columns).

    Cells are stored in a fixed-size list indexed by cell number, with None
    as the empty sentinel, so a cell can never hold two units. Cell index
    = row * cols + col:
    - row: 0-3
    - col: 0-3
    """

    def __init__(self, rows: int = GameConstants.BOARD_ROWS, cols: int = GameConstants.BOARD_COLS):
        """
        Initialize empty board.

        Args:
            rows: Number of rows (default: 4)
            cols: Number of columns (default: 4)
        """
        self.rows = rows
        self.cols = cols
        self.cells: List[Optional[Unit]] = [None] * (rows * cols)

    @property
    def size(self) -> int:
        return len(self.cells)

    def is_valid_position(self, position: int) -> bool:
        """Check if a cell index is within board bounds."""
        return isinstance(position, int) and 0 <= position < self.size

    def is_empty(self, position: int) -> bool:
        """Check if a cell is empty."""
        if not self.is_valid_position(position):
            return False
        return self.cells[position] is None

    def get(self, position: int) -> Optional[Unit]:
        """Get unit at a cell, or None if empty or out of range."""
        if not self.is_valid_position(position):
            return None
        return self.cells[position]

    def to_coords(self, position: int) -> Tuple[int, int]:
        """Cell index -> (row, col)."""
        return divmod(position, self.cols)

    def to_position(self, row: int, col: int) -> int:
        """(row, col) -> cell index."""
        return row * self.cols + col

    def place(self, unit: Unit, position: int) -> bool:
        """
        Place a unit at an empty cell.

        Returns:
            True if successful, False if position invalid or occupied
        """
        if not self.is_empty(position):
            return False

        self.cells[position] = unit
        unit.position = position
        return True

    def remove(self, position: int) -> Optional[Unit]:
        """
        Remove unit from a cell.

        Returns:
            Removed unit or None if the cell was empty
        """
        unit = self.get(position)
        if unit is not None:
            self.cells[position] = None
            unit.position = None
        return unit

    def swap(self, pos_a: int, pos_b: int) -> bool:
        """
        Swap the contents of two cells (either may be empty).

        Returns:
            True if successful, False if a position is invalid
        """
        if not self.is_valid_position(pos_a) or not self.is_valid_position(pos_b):
            return False

        unit_a = self.cells[pos_a]
        unit_b = self.cells[pos_b]

        self.cells[pos_a] = unit_b
        self.cells[pos_b] = unit_a

        if unit_a is not None:
            unit_a.position = pos_b
        if unit_b is not None:
            unit_b.position = pos_a

        return True

    def first_empty(self, exclude: Optional[int] = None) -> Optional[int]:
        """First empty cell in index order, or None if the board is full."""
        for position, unit in enumerate(self.cells):
            if unit is None and position != exclude:
                return position
        return None

    def occupied(self) -> Iterator[Tuple[int, Unit]]:
        """(position, unit) pairs in index order."""
        for position, unit in enumerate(self.cells):
            if unit is not None:
                yield position, unit

    def get_all_units(self) -> List[Unit]:
        """Get list of all units on board, in index order."""
        return [unit for unit in self.cells if unit is not None]

    def get_alive_units(self) -> List[Unit]:
        return [unit for unit in self.cells if unit is not None and unit.is_alive]

    def find_units(self, unit_id: str, star: Optional[int] = None) -> List[Unit]:
        """Units of one archetype (optionally one star level), in index order."""
        return [
            unit for unit in self.cells
            if unit is not None and unit.unit_id == unit_id and (star is None or unit.star == star)
        ]

    def count_units(self) -> int:
        """Count total units on board."""
        return sum(1 for unit in self.cells if unit is not None)

    def has_alive_units(self) -> bool:
        return any(unit is not None and unit.is_alive for unit in self.cells)

    def get_empty_positions(self) -> List[int]:
        """Get list of all empty cells."""
        return [position for position, unit in enumerate(self.cells) if unit is None]

    def is_full(self) -> bool:
        """Check if board has no empty cells."""
        return self.first_empty() is None

    def clear(self):
        """Remove all units from board."""
        for position, unit in enumerate(self.cells):
            if unit is not None:
                unit.position = None
            self.cells[position] = None

    def reset_for_combat(self):
        """Revive every unit on the board."""
        for unit in self.get_all_units():
            unit.reset_for_combat()

    def to_array(self) -> np.ndarray:
        """
        Star levels as a (rows, cols) int array, 0 for empty cells.
        """
        array = np.zeros((self.rows, self.cols), dtype=np.int8)
        for position, unit in self.occupied():
            row, col = self.to_coords(position)
            array[row, col] = unit.star
        return array

    def __repr__(self):
        return f"Board({self.count_units()}/{self.size} positions filled)"
