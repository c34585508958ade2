"""
PROCBOT - Main Entry Point
==========================
Load a level, check it, solve it and replay the solution.

Usage:
    # Analyze, solve and run a level
    python main.py levels/level1.json

    # Only list board problems
    python main.py levels/level1.json --analyze

    # Print the reference procedures
    python main.py levels/level1.json --solve

    # Root procedure only, with debug logging
    python main.py levels/level1.json --preset flat --verbose

Set PROCBOT_VERBOSE=1 to get debug logging without the flag.
"""

import argparse
import logging
import os
import sys
from typing import Optional

from procbot.core.actions import Actions
from procbot.core.exceptions import ProcbotError
from procbot.data.level import GameLevel
from procbot.game_logic import GameLogic
from procbot.simulation.solver import SolverOptions

logger = logging.getLogger(__name__)

VERBOSE_ENV = 'PROCBOT_VERBOSE'


def _env_verbose() -> bool:
    return os.environ.get(VERBOSE_ENV, '').strip().lower() in ('1', 'true', 'yes', 'on')


class ConsoleListener:
    """Prints what a GUI would show."""

    def __init__(self):
        self.won: Optional[bool] = None

    def on_logic_initialized(self, level):
        print(f"Level: {level.get_name('<unnamed>')}")

    def on_game_win(self):
        self.won = True
        print("  ✓ Level complete")

    def on_game_lose(self, reason=None):
        self.won = False
        print(f"  ✗ Level failed ({reason or 'door not opened'})")

    def play(self, actions: Actions):
        for action in actions:
            where = action.end_position if action.end_position is not None else ''
            print(f"  [{action.procedure:>2}:{action.instruction:>2}] {action.type.name:<18} {where}")

    def panic(self, exception):
        self.won = False
        print(f"  ✗ Execution error: {exception}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        description='PROCBOT - analyze, solve and replay procedure puzzle levels'
    )
    parser.add_argument('level', type=str, help='Path to a level JSON file')
    parser.add_argument(
        '--analyze', '-a', action='store_true',
        help='List board problems'
    )
    parser.add_argument(
        '--solve', '-s', action='store_true',
        help='Print the reference procedures'
    )
    parser.add_argument(
        '--run', '-r', action='store_true',
        help='Execute the reference procedures and print the action log'
    )
    parser.add_argument(
        '--preset', choices=['standard', 'flat'], default='standard',
        help='Procedure capacities (default: standard = 12/8/8)'
    )
    parser.add_argument(
        '--verbose', '-v', action='store_true',
        help=f'Debug logging (also enabled by {VERBOSE_ENV}=1)'
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if (args.verbose or _env_verbose()) else logging.WARNING,
        format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
    )

    # No step selected: do everything
    if not (args.analyze or args.solve or args.run):
        args.analyze = args.solve = args.run = True

    try:
        level = GameLevel.from_file(args.level)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load level {args.level}: {e}")
        print(f"Could not load level: {e}")
        return 2

    listener = ConsoleListener()
    logic = GameLogic(listener, level, SolverOptions.for_level(args.preset))
    print(logic.board().render())

    if args.analyze:
        print(f"\n[ANALYZE]")
        problems = logic.analyze()
        for problem in problems:
            print(f"  ✗ {problem}")
        if problems:
            return 1
        print("  ✓ No problems")

    if not (args.solve or args.run):
        return 0

    try:
        procedures = logic.solve()
    except ProcbotError as e:
        logger.error(f"Solving failed: {e}")
        print(f"  ✗ Not solvable: {e}")
        return 1

    if args.solve:
        print(f"\n[SOLVE]")
        for procedure in procedures:
            names = ', '.join(i.name for i in procedure)
            print(f"  P{procedure.id} ({len(procedure)}): {names}")

    if args.run:
        print(f"\n[RUN]")
        root, p1, p2 = procedures
        logic.execute(root, p1, p2)
        return 0 if listener.won else 1

    return 0


if __name__ == "__main__":
    sys.exit(main())
