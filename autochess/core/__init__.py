"""
Core game components.

This package contains the building blocks of a game:
- Unit: A placed unit with star level and combat stats
- Board: 4x4 grid of cells
- Shop: Shop slots and random offerings
- State: Mutable game state owned by the round controller
- Roster: Purchases, merges, reserve and swaps
"""

__all__ = []
