"""
Bot Execution Engine
====================

Runs procedures on a board and records every outcome as an Action.

Two entry points:
- execute_instruction(): one plain instruction (no call markers)
- execute(): a root procedure plus the two child procedures it may call

Gameplay failures (walls, abysses, failed exits) are recorded as terminal
actions and stop the run; they are never raised. Only malformed input
(None procedures, illegal recursion, wrong EXIT count) raises, and it does
so before the first action is produced.
"""

import logging
from dataclasses import dataclass
from typing import Optional

from procbot.board.board import Board
from procbot.core.actions import Action, Actions
from procbot.core.definitions import (
    ActionType,
    CALL_MARKERS,
    Direction,
    Instruction,
    JUMP_DISTANCE,
    Position,
    ROOT_PROCEDURE_ID,
    TileType,
    offset,
)
from procbot.core.exceptions import (
    IllegalRecursionError,
    InvalidInstructionError,
    InvalidProcedureError,
)
from procbot.core.procedure import Procedure, contains_illegal_recursion, verify

logger = logging.getLogger(__name__)


@dataclass
class _Frame:
    """One procedure being executed, innermost frame last on the stack."""
    procedure: Procedure
    owner: int
    callee: Optional[Procedure] = None
    index: int = 0
    stop_marker: Optional[Action] = None


class Bot:
    """
    Bot living on a board.

    The bot mutates the board it is given (coins turn NORMAL, position and
    direction change); pass a copy to keep the original.
    """

    def __init__(self, board: Board):
        self.board = board

    @property
    def position(self) -> Position:
        return self.board.position_of_bot

    @property
    def direction(self) -> Direction:
        return self.board.direction_of_bot

    def _action(self, action_type: ActionType, destination: Optional[Position] = None) -> Action:
        return Action(action_type, self.position, self.direction, destination)

    # ==========================================
    # SINGLE INSTRUCTIONS
    # ==========================================

    def place_bot(self, destination: Position) -> Actions:
        """Move the bot to `destination`, collecting a coin found there."""
        actions = Actions()
        if self.board.get(destination) is TileType.COIN:
            actions.add(self._action(ActionType.COLLECT_COIN, destination))
            self.board.set(destination, TileType.NORMAL)
        self.board.set_bot(destination)
        return actions

    def move_forward(self) -> Actions:
        destination = offset(self.position, self.direction)
        tile = self.board.get(destination)
        actions = Actions([self._action(ActionType.MOVE, destination)])

        if tile.walkable:
            actions.extend(self.place_bot(destination))
        elif tile is TileType.ABYSS:
            actions.add(Action(ActionType.FALL_INTO_ABYSS, destination, self.direction))
        else:
            actions.add(Action(ActionType.RUN_INTO_WALL, destination, self.direction))
        return actions

    def turn_left(self) -> Actions:
        self.board.set_direction_of_bot(self.direction.rotate(-1))
        return Actions([self._action(ActionType.TURN_LEFT)])

    def turn_right(self) -> Actions:
        self.board.set_direction_of_bot(self.direction.rotate(1))
        return Actions([self._action(ActionType.TURN_RIGHT)])

    def jump(self) -> Actions:
        over = offset(self.position, self.direction)
        destination = offset(self.position, self.direction, JUMP_DISTANCE)

        if self.board.get(destination).walkable and self.board.get(over).jumpable:
            actions = Actions([self._action(ActionType.JUMP, destination)])
            actions.extend(self.place_bot(destination))
            return actions

        logger.debug(f"Jump blocked: {over}={self.board.get(over).name}, "
                     f"{destination}={self.board.get(destination).name}")
        return Actions([self._action(ActionType.RUN_INTO_WALL)])

    def exit(self) -> Actions:
        """EXIT_SUCCESSFUL iff facing the door with every coin collected."""
        facing_door = self.board.get(offset(self.position, self.direction)) is TileType.DOOR
        if facing_door and not self.board.has_coins():
            return Actions([self._action(ActionType.EXIT_SUCCESSFUL)])
        return Actions([self._action(ActionType.EXIT_FAILED)])

    def execute_instruction(self, instruction: Instruction) -> Actions:
        """
        Execute one instruction.

        Raises:
            InvalidInstructionError: EXECUTE_P1/EXECUTE_P2 (use execute())
        """
        if instruction is Instruction.FORWARD:
            return self.move_forward()
        if instruction is Instruction.TURN_LEFT:
            return self.turn_left()
        if instruction is Instruction.TURN_RIGHT:
            return self.turn_right()
        if instruction is Instruction.JUMP:
            return self.jump()
        if instruction is Instruction.EXIT:
            return self.exit()
        if instruction in (Instruction.EXECUTE_P1, Instruction.EXECUTE_P2):
            raise InvalidInstructionError("Recursive procedures are not allowed in this method")
        raise InvalidInstructionError(f"Unexpected instruction: {instruction!r}")

    # ==========================================
    # PROCEDURES
    # ==========================================

    def execute(self, root: Procedure, p1: Procedure, p2: Procedure) -> Actions:
        """
        Execute the root procedure, following calls into P1 and P2.

        Root actions are tagged (0, root index); actions of a called
        procedure carry that procedure's id and the index inside it. Every
        call is bracketed by START/STOP markers tagged with the caller.
        A call made inside a child always runs the other child.

        The root procedure is drained; the children are left untouched.

        Raises:
            ValueError: a procedure is None
            IllegalRecursionError: a child calls itself, or P1 and P2 call each other
            InvalidProcedureError: not exactly one EXIT over all procedures
        """
        for name, procedure in (('root', root), ('p1', p1), ('p2', p2)):
            if procedure is None:
                raise ValueError(f"Null is not allowed as an argument for {name}")
        if contains_illegal_recursion(p1, p2):
            raise IllegalRecursionError("p1/p2 contain illegal recursion")
        if not verify(root, p1, p2):
            raise InvalidProcedureError("procedures are incorrect")

        p1 = p1.with_id(1)
        p2 = p2.with_id(2)
        by_id = {p1.id: p1, p2.id: p2}
        callees = {Instruction.EXECUTE_P1: (p1, p2), Instruction.EXECUTE_P2: (p2, p1)}

        actions = Actions()
        stack = [_Frame(root, ROOT_PROCEDURE_ID)]

        while stack and not actions.failed():
            frame = stack[-1]
            instruction = frame.procedure.poll()

            if instruction is None:
                stack.pop()
                if frame.stop_marker is not None:
                    actions.add(frame.stop_marker)
                continue

            index = frame.index
            frame.index += 1

            if instruction.is_recursion_call:
                if frame.owner == ROOT_PROCEDURE_ID:
                    callee, other = callees[instruction]
                else:
                    # inside a child every call reaches the other child
                    callee, other = frame.callee, by_id[frame.owner]
                start, stop = CALL_MARKERS[callee.id]
                actions.add(Action(start).tagged(frame.owner, index))
                stack.append(_Frame(
                    procedure=callee.copy(),
                    owner=callee.id,
                    callee=other,
                    stop_marker=Action(stop).tagged(frame.owner, index),
                ))
                continue

            for action in self.execute_instruction(instruction):
                actions.add(action.tagged(frame.owner, index))

        # a failure leaves frames open; close their calls innermost first
        while stack:
            frame = stack.pop()
            if frame.stop_marker is not None:
                actions.add(frame.stop_marker)

        if actions.failed():
            logger.debug(f"Execution failed at {actions.get_failed().type.name}")
        return actions


__all__ = ['Bot']
