"""
BOARD DIAGNOSTICS
=================
Pre-solve checks for board validity.

Catches structural errors before the path planner runs:
- Missing / duplicated DOOR and START tiles
- DOOR or COIN tiles not reachable from START (flood fill)
- Reference solutions that do not fit the procedure capacities

``analyze`` never raises for board conditions: it returns a list of
problems, and an empty list is the only "OK to solve" signal.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import numpy as np

from procbot.board.board import Board
from procbot.core.definitions import (
    NEIGHBOUR_ORDER,
    Position,
    TileType,
    is_jumpable,
    is_walkable,
    offset,
)
from procbot.core.exceptions import UnreachableTargetError

logger = logging.getLogger(__name__)

# Marker written into the flood-fill clone for visited tiles
VISITED = -1


class ProblemType(Enum):
    """Problems with a board."""
    NOT_REACHABLE = 'not_reachable'        # Tile can't be reached from START
    DOESNT_EXIST = 'doesnt_exist'          # Required tile is missing
    TOO_MANY = 'too_many'                  # More than one tile of a unique type
    SOLUTION_TOO_BIG = 'solution_too_big'  # Reference solution exceeds capacities


@dataclass(frozen=True)
class Problem:
    """One problem found on a board. `position` is None if not position specific."""
    kind: ProblemType
    tile: TileType
    position: Optional[Position] = None

    def __str__(self) -> str:
        where = f" at {self.position}" if self.position is not None else ""
        return f"{self.kind.name}: {self.tile.name}{where}"


# ==========================================
# FLOOD FILL
# ==========================================

def _grid_get(grid: np.ndarray, position: Position) -> Optional[int]:
    """Tile code at position; WALL if out of bounds, None if already visited."""
    x, y = position
    height, width = grid.shape
    if not (0 <= x < width and 0 <= y < height):
        return int(TileType.WALL)
    value = int(grid[y, x])
    return None if value == VISITED else value


def flood(board: Board, start: Position) -> Board:
    """
    Mark every tile reachable from `start` by walking or jumping.

    Works on a clone; visited tiles are cleared in the returned board's grid
    (set to VISITED), so whatever remains was never reached.
    """
    clone = board.copy()
    grid = clone.fields
    stack = [start]

    while stack:
        position = stack.pop()
        if not is_walkable(_grid_get(grid, position)):
            continue
        x, y = position
        grid[y, x] = VISITED

        for direction in NEIGHBOUR_ORDER:
            neighbour = offset(position, direction)
            neighbour_tile = _grid_get(grid, neighbour)
            if is_walkable(neighbour_tile):
                stack.append(neighbour)
            elif is_jumpable(neighbour_tile):
                stack.append(offset(position, direction, 2))

    return clone


# ==========================================
# ANALYSIS
# ==========================================

def find_problems(board: Board) -> List[Problem]:
    """Structural checks only: DOOR/START counts and flood-fill reachability."""
    problems: List[Problem] = []

    # exactly one DOOR
    count_of_exit = board.count(TileType.DOOR)
    if count_of_exit == 0:
        problems.append(Problem(ProblemType.DOESNT_EXIST, TileType.DOOR))
    elif count_of_exit > 1:
        problems.append(Problem(ProblemType.TOO_MANY, TileType.DOOR))

    # exactly one START
    count_of_start = board.count(TileType.START)
    if count_of_start == 0:
        problems.append(Problem(ProblemType.DOESNT_EXIST, TileType.START))
    elif count_of_start > 1:
        problems.append(Problem(ProblemType.TOO_MANY, TileType.START))

    if count_of_start == 1:
        flooded = flood(board, board.start_position())

        exit_position = flooded.position_of(TileType.DOOR)
        if exit_position is not None:
            problems.append(Problem(ProblemType.NOT_REACHABLE, TileType.DOOR, exit_position))

        for coin_position in flooded.positions_of(TileType.COIN):
            problems.append(Problem(ProblemType.NOT_REACHABLE, TileType.COIN, coin_position))

    return problems


def has_problems(board: Board) -> bool:
    return len(find_problems(board)) > 0


def analyze(board: Board, options=None) -> List[Problem]:
    """
    Analyze a board and list all of its problems.

    Args:
        board: Board to analyze (never mutated)
        options: SolverOptions whose capacities bound the reference solution
                 (standard 12/8/8 if None)

    Returns:
        List of problems, empty iff the board is solvable within capacities
    """
    # Deferred: the solver itself relies on find_problems()
    from procbot.simulation.solver import SolverOptions, solve

    options = options or SolverOptions()
    problems = find_problems(board)

    if problems:
        logger.debug(f"Structural problems: {[str(p) for p in problems]}")
        return problems

    try:
        solution = solve(board.copy(), options)
    except UnreachableTargetError as e:
        # the flood fill accepts routes the planner can't take (e.g. through the door)
        logger.info(f"Planner could not route to {e.target}")
        tile = board.get(e.target) if e.target is not None else TileType.DOOR
        problems.append(Problem(ProblemType.NOT_REACHABLE, tile, e.target))
        return problems

    for procedure, capacity in zip(solution, options.capacities):
        if len(procedure) > capacity:
            logger.info(f"Solution too big: procedure {procedure.id} has "
                        f"{len(procedure)} instructions (capacity {capacity})")
            problems.append(Problem(ProblemType.SOLUTION_TOO_BIG, TileType.START))
            break

    return problems


__all__ = ['ProblemType', 'Problem', 'flood', 'find_problems', 'has_problems', 'analyze']
