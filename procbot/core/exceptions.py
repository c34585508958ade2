"""
PROCBOT ERRORS
==============
Typed failures raised by the engine.

Taxonomy:
- ValidationError: malformed level data, raised while decoding a level
- IllegalStateError: programmer errors (solving a board with problems,
  executing procedures with illegal recursion or a wrong EXIT count)
- InvalidInstructionError: an instruction used where it is not allowed
- SolverError: the planner could not route or broke one of its invariants

Gameplay failures (walls, abysses, failed exits) are NOT exceptions; they are
terminal actions in the action log.
"""

from typing import Any, Optional


class ProcbotError(Exception):
    """Base class of every error raised by procbot."""


# ==========================================
# LEVEL VALIDATION
# ==========================================

class ValidationError(ProcbotError, ValueError):
    """Level data could not be decoded."""

    def __init__(self, message: str):
        super().__init__(f"[VALIDATION] {message}")


class MissingKeyError(ValidationError):
    """A required key is absent from the level mapping."""

    def __init__(self, key: str):
        super().__init__(f"Level data was missing required key: {key}")
        self.key = key


class MissingFieldError(ValidationError):
    """The board lacks a required tile (e.g. START)."""

    def __init__(self, tile: Any):
        super().__init__(f"Board was missing required field: {getattr(tile, 'name', tile)}")
        self.tile = tile


class UnexpectedTypeError(ValidationError):
    def __init__(self, field: str, expected_type: str, actual_type: str):
        super().__init__(
            f'Expected "{expected_type}" for field "{field}", got: "{actual_type}"'
        )
        self.field = field
        self.expected_type = expected_type
        self.actual_type = actual_type


class OutOfRangeError(ValidationError):
    def __init__(self, field: str, value: Any):
        super().__init__(f"Mismatched Format: {field} => {value}")
        self.field = field
        self.value = value


# ==========================================
# ILLEGAL STATE
# ==========================================

class IllegalStateError(ProcbotError, RuntimeError):
    """An operation was called in a state where it is not allowed."""


class IllegalBoardStateError(IllegalStateError):
    """solve() was called on a board that still has problems."""

    def __init__(self, message: str = "Board is not solvable", problems: Optional[list] = None):
        super().__init__(message)
        self.problems = problems or []


class ProcedureError(IllegalStateError):
    """Procedures were rejected before execution."""


class IllegalRecursionError(ProcedureError):
    """A child procedure calls itself, or the two children call each other."""


class InvalidProcedureError(ProcedureError):
    """Procedures fail verification (exactly one EXIT is required)."""


# ==========================================
# INSTRUCTIONS / SOLVER
# ==========================================

class InvalidInstructionError(ProcbotError, ValueError):
    """Instruction not allowed in this context (e.g. a call marker)."""


class SolverError(ProcbotError, RuntimeError):
    """Base class for path planner failures."""


class UnreachableTargetError(SolverError):
    def __init__(self, target: Any, message: Optional[str] = None):
        super().__init__(message or f"Target {target} is not reachable")
        self.target = target


class PlannerInvariantError(SolverError):
    """The node path cannot be lowered into valid instructions. Fatal."""


__all__ = [
    'ProcbotError',
    'ValidationError',
    'MissingKeyError',
    'MissingFieldError',
    'UnexpectedTypeError',
    'OutOfRangeError',
    'IllegalStateError',
    'IllegalBoardStateError',
    'ProcedureError',
    'IllegalRecursionError',
    'InvalidProcedureError',
    'InvalidInstructionError',
    'SolverError',
    'UnreachableTargetError',
    'PlannerInvariantError',
]
