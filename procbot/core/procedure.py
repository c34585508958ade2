"""
Procedures
==========

A procedure is an ordered queue of instructions with an identity
(0 = root, 1/2 = child, -1 = unassigned). Execution drains a procedure from
the front, so callers that want to reuse one should pass a copy.
"""

from typing import Iterable, Iterator, List, Optional

from procbot.core.definitions import (
    Instruction,
    UNASSIGNED_PROCEDURE_ID,
)


class Procedure:
    """
    Instruction queue with an id.

    Example:
        >>> p = Procedure([Instruction.FORWARD, Instruction.EXIT], procedure_id=0)
        >>> p.poll()
        <Instruction.FORWARD: 0>
        >>> len(p)
        1
    """

    def __init__(self, instructions: Optional[Iterable[Instruction]] = None,
                 procedure_id: int = UNASSIGNED_PROCEDURE_ID):
        self.instructions: List[Instruction] = list(instructions or [])
        self.id = procedure_id

    # Queue operations

    def append(self, instruction: Instruction):
        self.instructions.append(instruction)

    def extend(self, instructions: Iterable[Instruction]):
        self.instructions.extend(instructions)

    def poll(self) -> Optional[Instruction]:
        """Remove and return the first instruction, None if empty."""
        if not self.instructions:
            return None
        return self.instructions.pop(0)

    def remove(self) -> Instruction:
        """Remove and return the first instruction, IndexError if empty."""
        if not self.instructions:
            raise IndexError("procedure is empty")
        return self.instructions.pop(0)

    def peek(self) -> Optional[Instruction]:
        return self.instructions[0] if self.instructions else None

    def clear(self):
        self.instructions.clear()

    # Queries

    def count(self, target: Instruction) -> int:
        return sum(1 for instruction in self.instructions if instruction is target)

    def is_empty(self) -> bool:
        return not self.instructions

    def copy(self) -> 'Procedure':
        return Procedure(self.instructions, self.id)

    def with_id(self, procedure_id: int) -> 'Procedure':
        """Copy of this procedure carrying another id."""
        return Procedure(self.instructions, procedure_id)

    def __len__(self) -> int:
        return len(self.instructions)

    def __iter__(self) -> Iterator[Instruction]:
        return iter(self.instructions)

    def __contains__(self, instruction: object) -> bool:
        return any(instruction is i for i in self.instructions)

    def __getitem__(self, index: int) -> Instruction:
        return self.instructions[index]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Procedure):
            return NotImplemented
        return self.instructions == other.instructions

    def __repr__(self) -> str:
        names = ', '.join(i.name for i in self.instructions)
        return f"Procedure(id={self.id}, [{names}])"


# ==========================================
# LEGALITY CHECKS
# ==========================================

def contains_illegal_recursion(p1: Procedure, p2: Procedure) -> bool:
    """
    True if a child procedure calls itself or the two children call each other.

    P2 calling P1 (or P1 calling P2) alone is legal.
    """
    calls_itself = Instruction.EXECUTE_P1 in p1 or Instruction.EXECUTE_P2 in p2
    calls_each_other = Instruction.EXECUTE_P2 in p1 and Instruction.EXECUTE_P1 in p2
    return calls_itself or calls_each_other


def verify(root: Procedure, p1: Procedure, p2: Procedure) -> bool:
    """Procedures are executable: legal recursion and exactly one EXIT overall."""
    if contains_illegal_recursion(p1, p2):
        return False
    exit_count = sum(p.count(Instruction.EXIT) for p in (root, p1, p2))
    return exit_count == 1


__all__ = ['Procedure', 'contains_illegal_recursion', 'verify']
