"""
PROCBOT Simulation Module
=========================
Solving and execution components.

This module contains:
- graph: Board graph (NetworkX) and Dijkstra search
- path_planner: Greedy coin-collecting route + instruction lowering
- optimizer: Folds raw instructions into root/P1/P2 procedures
- solver: Planner + optimizer facade, SolverOptions
- bot: Procedure interpreter producing the action log
"""

from .graph import SearchResult, build_graph, dijkstra, path_between
from .path_planner import PathPlanner
from .optimizer import optimize
from .solver import SolverOptions, solve
from .bot import Bot

__all__ = [
    'SearchResult',
    'build_graph',
    'dijkstra',
    'path_between',
    'PathPlanner',
    'optimize',
    'SolverOptions',
    'solve',
    'Bot',
]
