import numpy as np
import pytest

from procbot.board.board import Board
from procbot.core.definitions import Direction, TileType

A, C, D, N, S, W = (TileType.ABYSS, TileType.COIN, TileType.DOOR,
                    TileType.NORMAL, TileType.START, TileType.WALL)


def make_board():
    # 4x3:  S . o #
    #       ~ . . o
    #       # # . D
    return Board.from_rows(
        Direction.SOUTH,
        [S, N, C, W],
        [A, N, N, C],
        [W, W, N, D],
    )


def test_dimensions_and_bot():
    board = make_board()
    assert (board.width, board.height) == (4, 3)
    assert board.position_of_bot == (0, 0)
    assert board.direction_of_bot is Direction.SOUTH


def test_get_indexes_x_then_y():
    board = make_board()
    assert board.get((3, 2)) is TileType.DOOR
    assert board.get((0, 1)) is TileType.ABYSS
    assert board.get((2, 0)) is TileType.COIN


@pytest.mark.parametrize("position", [(-1, 0), (0, -1), (4, 0), (0, 3), (10, 10)])
def test_out_of_bounds_reads_as_wall(position):
    assert make_board().get(position) is TileType.WALL


def test_set_and_out_of_bounds_set():
    board = make_board()
    assert board.set((2, 0), TileType.NORMAL)
    assert board.get((2, 0)) is TileType.NORMAL
    assert not board.set((9, 9), TileType.NORMAL)


def test_lookups_are_row_major():
    board = make_board()
    assert board.positions_of(TileType.COIN) == [(2, 0), (3, 1)]
    assert board.position_of(TileType.COIN) == (2, 0)
    assert board.count(TileType.WALL) == 3
    assert board.start_position() == (0, 0)
    assert board.exit_position() == (3, 2)
    assert board.position_of(TileType.ABYSS) == (0, 1)


def test_has_coins_and_contains():
    board = make_board()
    assert board.has_coins()
    for coin in board.positions_of(TileType.COIN):
        board.set(coin, TileType.NORMAL)
    assert not board.has_coins()
    assert board.contains(TileType.DOOR)
    assert not board.contains("door")


def test_copy_is_deep():
    board = make_board()
    clone = board.copy()
    clone.set((1, 0), TileType.WALL)
    clone.set_bot((1, 1), Direction.EAST)

    assert board.get((1, 0)) is TileType.NORMAL
    assert board.position_of_bot == (0, 0)
    assert board.direction_of_bot is Direction.SOUTH
    assert clone != board


def test_equality_compares_tiles():
    assert make_board() == make_board()
    assert make_board() == Board(make_board().to_array(), Direction.NORTH)


def test_board_without_start_has_no_bot():
    board = Board(np.full((2, 2), int(TileType.NORMAL)))
    assert board.position_of_bot is None


def test_rejects_non_2d_grid():
    with pytest.raises(ValueError):
        Board([1, 2, 3])


def test_render():
    board = make_board()
    assert board.render() == "v.o#\n~..o\n##.D"
    assert board.render(show_bot=False).startswith("S.o#")
