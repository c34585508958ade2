"""
Path Planner
============

Computes a reference solution for a board as a flat instruction list.

Strategy (greedy nearest neighbour):
1. Search from the bot position
2. While coins remain: walk to the nearest coin, turn it NORMAL on a
   working copy, search again from there
3. Walk to the door
4. Lower the node path into turns, moves, jumps and a final EXIT

The result is not guaranteed to be the shortest possible solution; the
coin order is chosen greedily.
"""

import logging
import math
from typing import List

from procbot.board.board import Board
from procbot.board.diagnostics import find_problems
from procbot.core.definitions import (
    Direction,
    Instruction,
    JUMP_DISTANCE,
    Position,
    TileType,
    offset,
)
from procbot.core.exceptions import (
    IllegalBoardStateError,
    PlannerInvariantError,
    UnreachableTargetError,
)
from procbot.simulation.graph import SearchResult, build_graph, dijkstra

logger = logging.getLogger(__name__)


class PathPlanner:
    """
    Greedy coin-collecting planner.

    Example:
        >>> planner = PathPlanner(board)
        >>> instructions = planner.solve()
    """

    def __init__(self, board: Board):
        """
        Args:
            board: Board to solve. Never mutated; the planner works on a copy.
        """
        self.board = board

    def solve(self) -> List[Instruction]:
        """
        Plan the full route and lower it into instructions.

        Raises:
            IllegalBoardStateError: board has structural problems
            UnreachableTargetError: a coin or the door can't be routed to
            PlannerInvariantError: node path contains an impossible step
        """
        problems = find_problems(self.board)
        if problems:
            raise IllegalBoardStateError(
                f"Board is not solvable: {', '.join(str(p) for p in problems)}",
                problems,
            )

        working = self.board.copy()
        node_path = self.plan_route(working)
        instructions = self.lower(node_path, working, self.board.direction_of_bot)

        logger.info(f"Planned {len(node_path)} nodes -> {len(instructions)} instructions")
        return instructions

    # ==========================================
    # ROUTING
    # ==========================================

    def plan_route(self, working: Board) -> List[Position]:
        """
        Node path from the bot over every coin to the door (door included).

        Collected coins are turned NORMAL on `working`.
        """
        origin = working.position_of_bot
        search = dijkstra(build_graph(working), origin)
        node_path: List[Position] = []

        while working.has_coins():
            coin = self._nearest_coin(working, search)
            logger.debug(f"Next coin {coin} at distance {search.distance(coin)}")

            node_path.extend(search.path_to(coin))
            working.set(coin, TileType.NORMAL)

            origin = coin
            search = dijkstra(build_graph(working), origin)

        door = working.exit_position()
        node_path.extend(search.path_to(door))
        node_path.append(door)
        return node_path

    @staticmethod
    def _nearest_coin(working: Board, search: SearchResult) -> Position:
        """Closest coin; ties go to the first coin in row-major order."""
        best = None
        best_distance = math.inf
        for coin in working.positions_of(TileType.COIN):
            distance = search.distance(coin)
            if distance < best_distance:
                best, best_distance = coin, distance

        if best is None:
            unreachable = working.position_of(TileType.COIN)
            raise UnreachableTargetError(unreachable, f"Coin {unreachable} is not reachable")
        return best

    # ==========================================
    # LOWERING
    # ==========================================

    @staticmethod
    def lower(node_path: List[Position], working: Board, facing: Direction) -> List[Instruction]:
        """
        Translate consecutive node pairs into instructions.

        Args:
            node_path: Route starting at the bot position and ending at the door
            working: Board the route was planned on (coins already collected)
            facing: Initial direction of the bot

        Returns:
            Instructions ending with EXIT
        """
        instructions: List[Instruction] = []
        if not node_path:
            return instructions

        current = node_path[0]
        for node in node_path[1:]:
            if node != offset(current, facing):
                target = Direction.from_to(current, node)
                instructions.extend(Direction.rotate_from_to(facing, target))
                facing = target

            if working.get(node) is TileType.DOOR:
                instructions.append(Instruction.EXIT)
                break

            distance = abs(node[0] - current[0]) + abs(node[1] - current[1])
            if distance == 1:
                instructions.append(Instruction.FORWARD)
            elif distance == JUMP_DISTANCE:
                over = offset(current, facing)
                if not working.get(over).jumpable:
                    raise PlannerInvariantError(
                        f"Jump from {current} to {node} crosses {working.get(over).name}"
                    )
                instructions.append(Instruction.JUMP)
            else:
                raise PlannerInvariantError(
                    f"Nodes {current} and {node} are {distance} tiles apart"
                )

            current = node

        return instructions


__all__ = ['PathPlanner']
