"""
PROCBOT Core Module
===================
Shared model of the engine.

This module contains:
- definitions: TileType, Direction, Instruction, ActionType, capacities
- exceptions: Error hierarchy
- procedure: Procedure queue and recursion legality checks
- actions: Action records and the Actions log
"""

from .definitions import (
    Position,
    TileType,
    Direction,
    Instruction,
    ActionType,
    PROCEDURE_CAPACITIES,
    ROOT_CAPACITY,
    CHILD_CAPACITY,
)
from .exceptions import (
    ProcbotError,
    ValidationError,
    IllegalStateError,
    IllegalBoardStateError,
    IllegalRecursionError,
    InvalidProcedureError,
    InvalidInstructionError,
    SolverError,
    UnreachableTargetError,
    PlannerInvariantError,
)
from .procedure import Procedure, contains_illegal_recursion, verify
from .actions import Action, Actions

__all__ = [
    # Definitions
    'Position',
    'TileType',
    'Direction',
    'Instruction',
    'ActionType',
    'PROCEDURE_CAPACITIES',
    'ROOT_CAPACITY',
    'CHILD_CAPACITY',
    # Errors
    'ProcbotError',
    'ValidationError',
    'IllegalStateError',
    'IllegalBoardStateError',
    'IllegalRecursionError',
    'InvalidProcedureError',
    'InvalidInstructionError',
    'SolverError',
    'UnreachableTargetError',
    'PlannerInvariantError',
    # Procedures / actions
    'Procedure',
    'contains_illegal_recursion',
    'verify',
    'Action',
    'Actions',
]
