"""
Board
=====

Tile grid plus bot position and facing. The grid is a 2D numpy array of
TileType codes indexed ``[y, x]``; every public method takes and returns
``(x, y)`` positions.

Boards are value-copied (``copy()``) whenever a subsystem needs to mutate a
working version without touching the caller's board.
"""

import logging
from typing import Iterable, List, Optional, Sequence

import numpy as np

from procbot.core.definitions import (
    BOT_TO_CHAR,
    Direction,
    Position,
    TILE_TO_CHAR,
    TileType,
)

logger = logging.getLogger(__name__)


class Board:
    """
    Rectangular tile board.

    Handles:
    - Safe tile queries (out of bounds reads as WALL)
    - Tile mutation (coins turning NORMAL)
    - Bot position / direction
    - Lookup helpers (position_of, positions_of, count)
    """

    def __init__(self, fields, direction_of_bot: Direction = Direction.EAST):
        """
        Args:
            fields: 2D array-like of tile codes, rows first (``fields[y][x]``)
            direction_of_bot: Facing of the bot at the start position
        """
        self.fields = np.array(fields, dtype=np.int64)
        if self.fields.ndim != 2:
            if self.fields.size == 0:
                self.fields = self.fields.reshape(0, 0)
            else:
                raise ValueError(f"Board needs a 2D grid, got shape {self.fields.shape}")
        self.height, self.width = self.fields.shape

        self.position_of_bot: Optional[Position] = self.start_position()
        self.direction_of_bot: Direction = Direction(direction_of_bot)

    @classmethod
    def from_rows(cls, direction_of_bot: Direction, *rows: Sequence[TileType]) -> 'Board':
        """Build a board from rows of tiles, e.g. ``Board.from_rows(EAST, [START, DOOR])``."""
        if not rows:
            raise ValueError("At least one row is required")
        return cls([[int(t) for t in row] for row in rows], direction_of_bot)

    def copy(self) -> 'Board':
        """Deep copy (grid, bot position and direction)."""
        clone = Board.__new__(Board)
        clone.fields = self.fields.copy()
        clone.height = self.height
        clone.width = self.width
        clone.position_of_bot = self.position_of_bot
        clone.direction_of_bot = self.direction_of_bot
        return clone

    # ==========================================
    # TILE ACCESS
    # ==========================================

    def in_bounds(self, position: Position) -> bool:
        x, y = position
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, position: Position) -> TileType:
        """Tile at `position`; WALL if out of bounds."""
        if not self.in_bounds(position):
            return TileType.WALL
        x, y = position
        return TileType(int(self.fields[y, x]))

    def set(self, position: Position, tile: TileType) -> bool:
        """Set tile at `position`. Returns False if out of bounds."""
        if not self.in_bounds(position):
            return False
        x, y = position
        self.fields[y, x] = int(tile)
        return True

    def position_of(self, tile: TileType) -> Optional[Position]:
        """First position (row-major) holding `tile`."""
        positions = self.positions_of(tile)
        return positions[0] if positions else None

    def positions_of(self, tile: TileType) -> List[Position]:
        """All positions holding `tile`, row-major order."""
        ys, xs = np.where(self.fields == int(tile))
        return [(int(x), int(y)) for y, x in zip(ys.tolist(), xs.tolist())]

    def count(self, tile: TileType) -> int:
        return int(np.sum(self.fields == int(tile)))

    def contains(self, tile: object) -> bool:
        if not isinstance(tile, TileType):
            return False
        return bool(np.any(self.fields == int(tile)))

    def has_coins(self) -> bool:
        return self.contains(TileType.COIN)

    def start_position(self) -> Optional[Position]:
        return self.position_of(TileType.START)

    def exit_position(self) -> Optional[Position]:
        return self.position_of(TileType.DOOR)

    def to_array(self) -> np.ndarray:
        return self.fields.copy()

    def to_list(self) -> List[List[int]]:
        return self.fields.tolist()

    def iter_positions(self) -> Iterable[Position]:
        """Every position, row-major."""
        for y in range(self.height):
            for x in range(self.width):
                yield (x, y)

    # ==========================================
    # BOT
    # ==========================================

    def set_bot(self, position: Position, direction: Optional[Direction] = None):
        self.position_of_bot = position
        if direction is not None:
            self.direction_of_bot = direction

    def set_direction_of_bot(self, direction: Direction):
        self.direction_of_bot = direction

    # ==========================================
    # DISPLAY
    # ==========================================

    def render(self, show_bot: bool = True) -> str:
        """ASCII map of the board (bot drawn as ^ > v <)."""
        lines = []
        for y in range(self.height):
            row = []
            for x in range(self.width):
                if show_bot and self.position_of_bot == (x, y):
                    row.append(BOT_TO_CHAR[self.direction_of_bot])
                else:
                    row.append(TILE_TO_CHAR[TileType(int(self.fields[y, x]))])
            lines.append(''.join(row))
        return '\n'.join(lines)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Board):
            return NotImplemented
        return np.array_equal(self.fields, other.fields)

    def __repr__(self) -> str:
        return (f"Board({self.width}x{self.height}, bot={self.position_of_bot}, "
                f"facing={self.direction_of_bot.name})")


__all__ = ['Board']
