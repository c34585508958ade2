"""
Procedure Optimizer
===================

Folds a raw instruction list into a root procedure plus up to two child
procedures, replacing repeated (or simply long) subsequences with calls.

Algorithm, per child slot i:
1. Enumerate every distinct contiguous subsequence (length >= 2, never
   containing the final instruction) with its non-overlapping, left to
   right occurrence indices
2. Score each one as length * occurrences - occurrences, i.e. the number
   of instructions saved by the call
3. Take the best candidate fitting capacity[i]
4. Replace its occurrences (back to front) with the call marker of slot i

What is left becomes the root. Running the optimized procedures produces
the same moves as running the raw list.
"""

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence, Tuple

from procbot.core.definitions import (
    Instruction,
    PROCEDURE_CAPACITIES,
    PROCEDURE_COUNT,
    ROOT_PROCEDURE_ID,
)
from procbot.core.exceptions import InvalidInstructionError
from procbot.core.procedure import Procedure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Candidate:
    """A subsequence that could become a child procedure."""
    sequence: Tuple[Instruction, ...]
    occurrences: Tuple[int, ...]

    @property
    def score(self) -> int:
        """Instructions saved when every occurrence becomes one call."""
        count = len(self.occurrences)
        return len(self.sequence) * count - count

    @property
    def rank(self) -> Tuple[int, int, int]:
        return (self.score, len(self.sequence), -self.occurrences[0])


# ==========================================
# CANDIDATE SEARCH
# ==========================================

def find_occurrences(instructions: Sequence[Instruction], sequence: Sequence[Instruction]) -> List[int]:
    """
    Non-overlapping start indices of `sequence`, scanning left to right.

    A match must end before the last instruction.
    """
    occurrences = []
    size = len(sequence)
    sequence = list(sequence)
    i = 0
    while i + size < len(instructions):
        if instructions[i:i + size] == sequence:
            occurrences.append(i)
            i += size
        else:
            i += 1
    return occurrences


def search_repeating_sequences(instructions: Sequence[Instruction]) -> Dict[Tuple[Instruction, ...], List[int]]:
    """All distinct subsequences of length >= 2 with their occurrences."""
    instructions = list(instructions)
    sequences: Dict[Tuple[Instruction, ...], List[int]] = {}
    n = len(instructions)

    for start in range(n):
        for end in range(start + 2, n):
            sequence = tuple(instructions[start:end])
            if sequence in sequences:
                continue
            occurrences = find_occurrences(instructions, sequence)
            if occurrences:
                sequences[sequence] = occurrences

    return sequences


def best_candidate(instructions: Sequence[Instruction], capacity: int) -> Optional[Candidate]:
    """Highest ranked candidate no longer than `capacity`, None if there is none."""
    candidates = [
        Candidate(sequence, tuple(occurrences))
        for sequence, occurrences in search_repeating_sequences(instructions).items()
    ]
    candidates.sort(key=lambda c: c.rank, reverse=True)

    for candidate in candidates:
        if len(candidate.sequence) <= capacity:
            return candidate
        logger.debug(f"Candidate of length {len(candidate.sequence)} too big for capacity {capacity}")
    return None


# ==========================================
# OPTIMIZE
# ==========================================

def optimize(raw: Sequence[Instruction],
             capacities: Sequence[int] = PROCEDURE_CAPACITIES) -> List[Procedure]:
    """
    Split a raw instruction list into procedures.

    Args:
        raw: Instructions without call markers
        capacities: Max instructions per procedure, root first (12, 8, 8)

    Returns:
        Procedures, root first. Ids follow their position in the list.

    Raises:
        InvalidInstructionError: `raw` contains EXECUTE_P1/EXECUTE_P2
        ValueError: no capacities, or more procedures than call markers
    """
    if any(instruction.is_recursion_call for instruction in raw):
        raise InvalidInstructionError("Recursion calls not allowed.")
    if not capacities:
        raise ValueError("At least one procedure capacity is required")
    if len(capacities) > PROCEDURE_COUNT:
        raise ValueError(f"At most {PROCEDURE_COUNT} procedures are supported, got {len(capacities)}")

    if len(raw) <= len(capacities):
        return _split(raw, capacities)
    return _enhanced_optimize(raw, capacities)


def _split(raw: Sequence[Instruction], capacities: Sequence[int]) -> List[Procedure]:
    """Fill procedures in order, each up to its capacity."""
    procedures = []
    remaining = list(raw)
    for index, capacity in enumerate(capacities):
        if not remaining:
            break
        procedures.append(Procedure(remaining[:capacity], index))
        remaining = remaining[capacity:]
    return procedures


def _enhanced_optimize(raw: Sequence[Instruction], capacities: Sequence[int]) -> List[Procedure]:
    instructions = list(raw)
    children: List[Procedure] = []
    logger.debug(f"Optimizing {len(instructions)} instructions: {[i.name for i in instructions]}")

    for slot in range(1, len(capacities)):
        candidate = best_candidate(instructions, capacities[slot])
        if candidate is None:
            logger.debug(f"No candidate for procedure {slot}")
            children.append(Procedure(procedure_id=slot))
            continue

        size = len(candidate.sequence)
        for occurrence in reversed(candidate.occurrences):
            instructions[occurrence:occurrence + size] = [Instruction.recursive(slot)]

        children.append(Procedure(candidate.sequence, slot))
        logger.debug(f"Procedure {slot}: {[i.name for i in candidate.sequence]} "
                     f"x{len(candidate.occurrences)} (saves {candidate.score})")

    root = Procedure(instructions, ROOT_PROCEDURE_ID)
    if len(root) > capacities[0]:
        logger.warning(f"Root procedure too big: {len(root)} > {capacities[0]}")

    return [root] + children


__all__ = [
    'Candidate',
    'find_occurrences',
    'search_repeating_sequences',
    'best_candidate',
    'optimize',
]
