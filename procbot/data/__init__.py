"""Level file decoding."""

from .level import GameLevel, EMPTY_LEVEL

__all__ = ['GameLevel', 'EMPTY_LEVEL']
