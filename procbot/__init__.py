"""
PROCBOT Source Package
======================

Level-solving and execution engine for a procedure-programming grid puzzle:
a bot walks a tile board following user-authored instruction sequences
("procedures") to reach the door after collecting every coin.

Submodules:
- core: Definitions (tiles, directions, instructions), procedures, actions, errors
- board: Board model and board diagnostics (analyze)
- data: Level decoding (GameLevel)
- simulation: Graph search, path planner, procedure optimizer, bot interpreter
- game_logic: Single entry point between the engine and a presentation layer

Pipeline:
    Board -> Graph -> Dijkstra -> PathPlanner -> raw instructions
          -> optimize() -> procedures -> Bot.execute() -> Actions
"""

__version__ = "1.0.0"
__author__ = "PROCBOT Project"

__all__ = ['core', 'board', 'data', 'simulation', 'game_logic']
