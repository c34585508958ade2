"""
PROCBOT Board Module
====================
Board model and pre-solve diagnostics.
"""

from .board import Board
from .diagnostics import (
    ProblemType,
    Problem,
    analyze,
    find_problems,
    has_problems,
)

__all__ = [
    'Board',
    'ProblemType',
    'Problem',
    'analyze',
    'find_problems',
    'has_problems',
]
