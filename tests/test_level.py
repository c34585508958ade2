import json

import pytest

from procbot.core.definitions import Direction, TileType
from procbot.core.exceptions import (
    MissingFieldError,
    MissingKeyError,
    OutOfRangeError,
    UnexpectedTypeError,
    ValidationError,
)
from procbot.data.level import EMPTY_LEVEL, GameLevel

LEVEL_JSON = """
{
  "name": "Level 1",
  "field": [
    [5, 5, 5, 5],
    [4, 3, 3, 2],
    [5, 5, 5, 5]
  ],
  "botRotation": 1
}
"""


def test_decode_level():
    level = GameLevel.from_json(LEVEL_JSON)
    assert level.name == "Level 1"
    assert level.direction is Direction.EAST
    assert level.start_position == (0, 1)

    board = level.board()
    assert (board.width, board.height) == (4, 3)
    assert board.get((3, 1)) is TileType.DOOR
    assert board.position_of_bot == (0, 1)
    assert board.direction_of_bot is Direction.EAST


def test_board_is_a_fresh_copy():
    level = GameLevel.from_json(LEVEL_JSON)
    board = level.board()
    board.set((1, 1), TileType.WALL)
    board.set_bot((2, 1), Direction.WEST)

    again = level.board()
    assert again.get((1, 1)) is TileType.NORMAL
    assert again.position_of_bot == (0, 1)
    assert again.direction_of_bot is Direction.EAST


def test_name_is_optional():
    level = GameLevel.from_dict({"field": [[4, 2]], "botRotation": 0})
    assert level.name is None
    assert level.get_name("Untitled") == "Untitled"


@pytest.mark.parametrize("data,key", [
    ({"botRotation": 1}, "field"),
    ({"field": [[4, 2]]}, "botRotation"),
    ({"field": None, "botRotation": 1}, "field"),
])
def test_missing_key(data, key):
    with pytest.raises(MissingKeyError) as exc:
        GameLevel.from_dict(data)
    assert exc.value.key == key
    assert str(exc.value).startswith("[VALIDATION]")


@pytest.mark.parametrize("data", [
    {"field": [[4, "2"]], "botRotation": 1},
    {"field": [[4, True]], "botRotation": 1},
    {"field": [[4, 2.0]], "botRotation": 1},
    {"field": [4, 2], "botRotation": 1},
    {"field": "42", "botRotation": 1},
    {"field": [[4, 2]], "botRotation": "EAST"},
    {"field": [[4, 2]], "botRotation": 1, "name": 7},
    {"field": [[4, 2], [3]], "botRotation": 1},
])
def test_unexpected_type(data):
    with pytest.raises(UnexpectedTypeError):
        GameLevel.from_dict(data)


@pytest.mark.parametrize("data", [
    {"field": [[4, 6]], "botRotation": 1},
    {"field": [[4, -1]], "botRotation": 1},
    {"field": [[4, 2]], "botRotation": 4},
])
def test_out_of_range(data):
    with pytest.raises(OutOfRangeError):
        GameLevel.from_dict(data)


def test_missing_start():
    with pytest.raises(MissingFieldError) as exc:
        GameLevel.from_dict({"field": [[3, 2]], "botRotation": 1})
    assert exc.value.tile is TileType.START


def test_validation_errors_are_value_errors():
    with pytest.raises(ValueError):
        GameLevel.from_dict({"field": [[3, 2]], "botRotation": 1})
    assert issubclass(ValidationError, ValueError)


def test_round_trip_json():
    level = GameLevel.from_json(LEVEL_JSON)
    assert GameLevel.from_json(level.to_json()) == level
    assert json.loads(level.to_json())["botRotation"] == 1


def test_from_file(tmp_path):
    path = tmp_path / "level.json"
    path.write_text(LEVEL_JSON, encoding="utf-8")
    assert GameLevel.from_file(path).name == "Level 1"


def test_empty_level():
    board = EMPTY_LEVEL.board()
    assert (board.width, board.height) == (8, 8)
    assert board.position_of_bot == (0, 0)
    assert board.count(TileType.WALL) == 63
    assert EMPTY_LEVEL.direction is Direction.EAST
