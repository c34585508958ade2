"""
Level Solver
============

Planner + optimizer in one call: board in, three procedures out.

    from procbot.simulation.solver import solve
    root, p1, p2 = solve(board)
"""

import logging
from dataclasses import dataclass
from typing import List, Tuple

from procbot.board.board import Board
from procbot.core.definitions import (
    CHILD_CAPACITY,
    PROCEDURE_CAPACITIES,
    PROCEDURE_COUNT,
    ROOT_CAPACITY,
)
from procbot.core.procedure import Procedure
from procbot.simulation.optimizer import optimize
from procbot.simulation.path_planner import PathPlanner

logger = logging.getLogger(__name__)


@dataclass
class SolverOptions:
    """Procedure capacities, root first."""
    capacities: Tuple[int, ...] = PROCEDURE_CAPACITIES

    def __post_init__(self):
        self.capacities = tuple(int(c) for c in self.capacities)
        if not self.capacities:
            raise ValueError("At least one procedure capacity is required")
        if len(self.capacities) > PROCEDURE_COUNT:
            raise ValueError(f"At most {PROCEDURE_COUNT} procedures are supported")
        if any(c < 0 for c in self.capacities):
            raise ValueError(f"Capacities must not be negative: {self.capacities}")

    @classmethod
    def for_level(cls, kind: str = 'standard') -> 'SolverOptions':
        """
        Presets:
            standard: root 12, P1 8, P2 8
            flat:     root only, no child procedures
        """
        if kind == 'standard':
            return cls((ROOT_CAPACITY, CHILD_CAPACITY, CHILD_CAPACITY))
        if kind == 'flat':
            return cls((ROOT_CAPACITY,))
        raise ValueError(f"Unknown level kind: {kind}")


def solve(board: Board, options: SolverOptions = None) -> List[Procedure]:
    """
    Reference solution of a board.

    Args:
        board: Board to solve (not mutated)
        options: Capacities to optimize for (standard if None)

    Returns:
        [root, p1, p2] with ids 0, 1, 2; unused procedures are empty

    Raises:
        IllegalBoardStateError: board has structural problems
        UnreachableTargetError: a coin or the door can't be routed to
    """
    options = options or SolverOptions()
    raw = PathPlanner(board).solve()
    procedures = optimize(raw, options.capacities)

    while len(procedures) < PROCEDURE_COUNT:
        procedures.append(Procedure(procedure_id=len(procedures)))

    logger.info(f"Solved board: {len(raw)} raw instructions -> "
                f"{[len(p) for p in procedures]}")
    return procedures


__all__ = ['SolverOptions', 'solve']
