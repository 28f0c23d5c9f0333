"""
Game logic engine.

This package contains the game logic and mechanics:
- GameRound: Round orchestration and phase management
- Combat: Async turn-based battle resolution
- Economy: Shop pricing, interest and round rewards
- Enemy: Per-round enemy roster generation
- Events: Ordered event queue for presentation layers
"""

__all__ = []
