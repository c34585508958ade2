"""
Board Graph & Shortest-Path Search
==================================

Converts a Board snapshot into a directed NetworkX graph and runs
single-source Dijkstra over it.

Graph layout:
- One node per tile, keyed by (x, y), in row-major order
- Node attribute ``tile``: TileType of the tile
- Edge attributes ``weight`` (always 1) and ``kind`` ('step' or 'jump')

The DOOR is a sink: it has no outgoing edges and no jump lands on it,
so every route to the door ends there.

Search state lives in a SearchResult, never on the graph, so one graph
can serve any number of searches.

Usage:
    graph = build_graph(board)
    result = dijkstra(graph, board.start_position())
    result.distance(board.exit_position())
    result.path_to(board.exit_position())
"""

import heapq
import itertools
import logging
import math
from dataclasses import dataclass, field
from typing import Dict, List

import networkx as nx

from procbot.board.board import Board
from procbot.core.definitions import (
    JUMP_DISTANCE,
    NEIGHBOUR_ORDER,
    Position,
    TileType,
    offset,
)
from procbot.core.exceptions import UnreachableTargetError

logger = logging.getLogger(__name__)

STEP = 'step'
JUMP = 'jump'


# ==========================================
# GRAPH BUILDER
# ==========================================

def build_graph(board: Board) -> nx.DiGraph:
    """
    Build the movement graph of a board.

    Edges are added in NEIGHBOUR_ORDER (EAST, WEST, SOUTH, NORTH); the
    step edge of a direction comes before its jump edge. Out-of-bounds
    tiles produce no edge.

    Args:
        board: Board snapshot (not mutated)

    Returns:
        nx.DiGraph with (x, y) nodes
    """
    G = nx.DiGraph()

    for position in board.iter_positions():
        G.add_node(position, tile=board.get(position))

    for position in board.iter_positions():
        tile = board.get(position)
        if not tile.walkable or tile is TileType.DOOR:
            continue

        for direction in NEIGHBOUR_ORDER:
            neighbour = offset(position, direction)
            if not board.in_bounds(neighbour):
                continue
            neighbour_tile = board.get(neighbour)

            if neighbour_tile.walkable:
                G.add_edge(position, neighbour, weight=1, kind=STEP)
            elif neighbour_tile.jumpable:
                landing = offset(position, direction, JUMP_DISTANCE)
                if not board.in_bounds(landing):
                    continue
                landing_tile = board.get(landing)
                if landing_tile.walkable and landing_tile is not TileType.DOOR:
                    G.add_edge(position, landing, weight=1, kind=JUMP)

    logger.debug(f"Built graph: {G.number_of_nodes()} nodes, {G.number_of_edges()} edges")
    return G


# ==========================================
# SHORTEST-PATH SEARCH
# ==========================================

@dataclass
class SearchResult:
    """Distances and predecessors of one single-source search."""
    source: Position
    distances: Dict[Position, int] = field(default_factory=dict)
    predecessors: Dict[Position, Position] = field(default_factory=dict)

    def reachable(self, node: Position) -> bool:
        return node in self.distances

    def distance(self, node: Position) -> float:
        """Hop count from the source, math.inf if unreachable."""
        return self.distances.get(node, math.inf)

    def path_to(self, node: Position) -> List[Position]:
        """
        Nodes from the source up to (not including) `node`.

        Raises:
            UnreachableTargetError: `node` was not reached
        """
        if not self.reachable(node):
            raise UnreachableTargetError(node)

        path = []
        current = node
        while current != self.source:
            current = self.predecessors[current]
            path.append(current)
        path.reverse()
        return path


def dijkstra(G: nx.DiGraph, source: Position) -> SearchResult:
    """
    Single-source Dijkstra with a binary heap.

    Ties between equal distances go to the node discovered first;
    neighbours are discovered in edge insertion order.

    Raises:
        UnreachableTargetError: `source` is not a node of the graph
    """
    if source not in G:
        raise UnreachableTargetError(source, f"Source {source} is not on the board")

    result = SearchResult(source=source)
    result.distances[source] = 0

    counter = itertools.count()
    open_set = [(0, next(counter), source)]
    settled = set()

    while open_set:
        dist, _, node = heapq.heappop(open_set)
        if node in settled:
            continue
        settled.add(node)

        for neighbour, data in G[node].items():
            if neighbour in settled:
                continue
            new_dist = dist + data.get('weight', 1)
            if new_dist < result.distances.get(neighbour, math.inf):
                result.distances[neighbour] = new_dist
                result.predecessors[neighbour] = node
                heapq.heappush(open_set, (new_dist, next(counter), neighbour))

    logger.debug(f"Dijkstra from {source}: settled {len(settled)} nodes")
    return result


def path_between(G: nx.DiGraph, start: Position, target: Position) -> List[Position]:
    """Shortest path from `start` to `target`, both included."""
    return dijkstra(G, start).path_to(target) + [target]


__all__ = [
    'STEP',
    'JUMP',
    'build_graph',
    'SearchResult',
    'dijkstra',
    'path_between',
]
