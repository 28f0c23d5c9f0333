"""
Headless play interface.

This package contains the numpy-facing components:
- Action: Command space definition and masking
- Observation: State encoding into arrays
- Runner: Random-policy auto-play CLI
"""

__all__ = []
