"""Shared enums and constants."""

__all__ = []
