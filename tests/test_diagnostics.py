import numpy as np

from procbot.board.board import Board
from procbot.board.diagnostics import (
    Problem,
    ProblemType,
    analyze,
    find_problems,
    flood,
    has_problems,
)
from procbot.core.definitions import Direction, TileType
from procbot.simulation.solver import SolverOptions

A, C, D, N, S, W = (TileType.ABYSS, TileType.COIN, TileType.DOOR,
                    TileType.NORMAL, TileType.START, TileType.WALL)


def row(*tiles):
    return Board.from_rows(Direction.EAST, list(tiles))


def test_missing_door_and_start():
    board = Board(np.full((3, 3), int(TileType.NORMAL)))
    assert analyze(board) == [
        Problem(ProblemType.DOESNT_EXIST, TileType.DOOR),
        Problem(ProblemType.DOESNT_EXIST, TileType.START),
    ]


def test_too_many_doors_and_starts():
    problems = analyze(row(S, N, D, D, S))
    assert problems == [
        Problem(ProblemType.TOO_MANY, TileType.DOOR),
        Problem(ProblemType.TOO_MANY, TileType.START),
    ]


def test_too_many_doors_with_single_start_still_checks_reachability():
    problems = analyze(row(S, D, W, D, C))
    assert problems == [
        Problem(ProblemType.TOO_MANY, TileType.DOOR),
        Problem(ProblemType.NOT_REACHABLE, TileType.DOOR, (3, 0)),
        Problem(ProblemType.NOT_REACHABLE, TileType.COIN, (4, 0)),
    ]


def test_unreachable_door():
    assert analyze(row(S, N, W, D)) == [
        Problem(ProblemType.NOT_REACHABLE, TileType.DOOR, (3, 0)),
    ]


def test_unreachable_coins_in_row_major_order():
    board = Board.from_rows(
        Direction.EAST,
        [S, N, D, W, C],
        [W, W, W, W, W],
        [C, W, N, N, C],
    )
    assert analyze(board) == [
        Problem(ProblemType.NOT_REACHABLE, TileType.COIN, (4, 0)),
        Problem(ProblemType.NOT_REACHABLE, TileType.COIN, (0, 2)),
        Problem(ProblemType.NOT_REACHABLE, TileType.COIN, (4, 2)),
    ]


def test_jump_makes_tiles_reachable():
    assert analyze(row(S, A, N, D)) == []
    assert analyze(row(S, A, A, D)) == [
        Problem(ProblemType.NOT_REACHABLE, TileType.DOOR, (3, 0)),
    ]


def test_flood_marks_visited_tiles_on_a_clone():
    board = row(S, N, W, C)
    flooded = flood(board, (0, 0))
    assert flooded.positions_of(TileType.COIN) == [(3, 0)]
    assert flooded.count(TileType.START) == 0
    assert board.count(TileType.START) == 1


def test_coin_behind_door_is_not_reachable():
    # the flood fill walks through the door, the bot can't
    board = row(S, D, C)
    assert find_problems(board) == []
    assert analyze(board) == [
        Problem(ProblemType.NOT_REACHABLE, TileType.COIN, (2, 0)),
    ]


def test_solution_too_big():
    corridor = row(S, *([N] * 13), D)
    assert analyze(corridor) == []
    assert analyze(corridor, SolverOptions.for_level('flat')) == [
        Problem(ProblemType.SOLUTION_TOO_BIG, TileType.START),
    ]


def test_analyze_is_idempotent_and_pure():
    board = Board.from_rows(
        Direction.EAST,
        [S, N, C],
        [W, W, N],
        [D, N, N],
    )
    before = board.copy()
    first = analyze(board)
    second = analyze(board)
    assert first == second == []
    assert board == before
    assert board.position_of_bot == (0, 0)


def test_has_problems():
    assert not has_problems(row(S, N, D))
    assert has_problems(row(S, W, D))


def test_problem_str():
    problem = Problem(ProblemType.NOT_REACHABLE, TileType.COIN, (1, 2))
    assert str(problem) == "NOT_REACHABLE: COIN at (1, 2)"
