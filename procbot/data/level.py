"""
Level Loader
============

Decodes level files into boards.

Level format (JSON):
    {
        "name": "Optional display name",
        "field": [[4, 3, 2], ...],   # rows of TileType codes, field[y][x]
        "botRotation": 1            # Direction code of the bot at START
    }

Decoding errors are ValidationError subclasses, so callers can catch
ValueError if they don't care about the detail.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from procbot.board.board import Board
from procbot.core.definitions import Direction, Position, TileType
from procbot.core.exceptions import (
    MissingFieldError,
    MissingKeyError,
    OutOfRangeError,
    UnexpectedTypeError,
)

logger = logging.getLogger(__name__)

FIELD_KEY = 'field'
ROTATION_KEY = 'botRotation'
NAME_KEY = 'name'
REQUIRED_KEYS = (FIELD_KEY, ROTATION_KEY)


def _type_name(value: Any) -> str:
    return type(value).__name__


def _check_int(field: str, value: Any) -> int:
    # bool is an int subclass, but true/false is never a valid code
    if isinstance(value, bool) or not isinstance(value, int):
        raise UnexpectedTypeError(field, 'int', _type_name(value))
    return value


def _decode_field(raw: Any) -> List[List[int]]:
    if not isinstance(raw, list) or not raw:
        raise UnexpectedTypeError(FIELD_KEY, 'list[list[int]]', _type_name(raw))

    rows = []
    width = None
    for y, row in enumerate(raw):
        if not isinstance(row, list):
            raise UnexpectedTypeError(f"{FIELD_KEY}[{y}]", 'list[int]', _type_name(row))
        if width is None:
            width = len(row)
        elif len(row) != width:
            raise UnexpectedTypeError(f"{FIELD_KEY}[{y}]", f'row of length {width}', f'row of length {len(row)}')

        codes = []
        for x, value in enumerate(row):
            code = _check_int(f"{FIELD_KEY}[{y}][{x}]", value)
            try:
                TileType.from_ordinal(code)
            except ValueError:
                raise OutOfRangeError(f"{FIELD_KEY}[{y}][{x}]", code) from None
            codes.append(code)
        rows.append(codes)
    return rows


class GameLevel:
    """
    A decoded level: the board as designed plus the start direction.

    `board()` hands out fresh copies, so a level can be played any number
    of times.
    """

    def __init__(self, board: Board, direction: Optional[Direction] = None, name: Optional[str] = None):
        self._board = board.copy()
        self.direction = Direction(direction if direction is not None else board.direction_of_bot)
        self._board.set_direction_of_bot(self.direction)
        self.name = name

    def board(self) -> Board:
        """Fresh board copy with the bot facing the start direction."""
        board = self._board.copy()
        board.set_bot(board.start_position(), self.direction)
        return board

    @property
    def start_position(self) -> Optional[Position]:
        return self._board.start_position()

    def get_name(self, default: Optional[str] = None) -> Optional[str]:
        return self.name if self.name is not None else default

    # ==========================================
    # DECODING
    # ==========================================

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'GameLevel':
        """
        Build a level from a decoded JSON mapping.

        Raises:
            MissingKeyError: "field" or "botRotation" absent
            UnexpectedTypeError: wrong JSON types or ragged rows
            OutOfRangeError: unknown tile or direction code
            MissingFieldError: the board has no START tile
        """
        if not isinstance(data, dict):
            raise UnexpectedTypeError('level', 'object', _type_name(data))
        for key in REQUIRED_KEYS:
            if data.get(key) is None:
                raise MissingKeyError(key)

        rows = _decode_field(data[FIELD_KEY])

        rotation = _check_int(ROTATION_KEY, data[ROTATION_KEY])
        try:
            direction = Direction.from_ordinal(rotation)
        except ValueError:
            raise OutOfRangeError(ROTATION_KEY, rotation) from None

        name = data.get(NAME_KEY)
        if name is not None and not isinstance(name, str):
            raise UnexpectedTypeError(NAME_KEY, 'str', _type_name(name))

        board = Board(rows, direction)
        if board.start_position() is None:
            raise MissingFieldError(TileType.START)

        level = cls(board, direction, name)
        logger.debug(f"Decoded {level}")
        return level

    @classmethod
    def from_json(cls, text: str) -> 'GameLevel':
        """Decode a level from JSON text (json.JSONDecodeError on bad syntax)."""
        return cls.from_dict(json.loads(text))

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> 'GameLevel':
        path = Path(path)
        logger.info(f"Loading level from {path}")
        return cls.from_json(path.read_text(encoding='utf-8'))

    # ==========================================
    # ENCODING
    # ==========================================

    def to_dict(self) -> Dict[str, Any]:
        data: Dict[str, Any] = {}
        if self.name is not None:
            data[NAME_KEY] = self.name
        data[FIELD_KEY] = self._board.to_list()
        data[ROTATION_KEY] = int(self.direction)
        return data

    def to_json(self) -> str:
        return json.dumps(self.to_dict(), indent=2)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, GameLevel):
            return NotImplemented
        return (self._board == other._board
                and self.direction is other.direction
                and self.name == other.name)

    def __repr__(self) -> str:
        return (f"GameLevel(name={self.name}, start={self.start_position}, "
                f"direction={self.direction.name})")


EMPTY_LEVEL = GameLevel.from_dict({
    NAME_KEY: 'Empty Level',
    FIELD_KEY: [[int(TileType.START)] + [int(TileType.WALL)] * 7]
               + [[int(TileType.WALL)] * 8 for _ in range(7)],
    ROTATION_KEY: int(Direction.EAST),
})


__all__ = ['GameLevel', 'EMPTY_LEVEL']
