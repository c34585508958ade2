"""
Game Logic
==========

Facade between a presentation layer and the engine.

The presentation layer implements GameListener; GameLogic runs the bot and
hands over the finished action log through `play`. Every exception raised
while executing ends up in `panic`, never in the caller.
"""

import logging
from typing import List, Optional, Protocol

from procbot.board.board import Board
from procbot.board.diagnostics import Problem, analyze
from procbot.core.actions import Action, Actions
from procbot.core.definitions import ActionType
from procbot.core.procedure import Procedure
from procbot.data.level import GameLevel
from procbot.simulation.bot import Bot
from procbot.simulation.solver import SolverOptions, solve

logger = logging.getLogger(__name__)


class GameListener(Protocol):
    """Callbacks a presentation layer provides."""

    def on_logic_initialized(self, level: GameLevel) -> None: ...

    def on_game_win(self) -> None: ...

    def on_game_lose(self, reason: Optional[str] = None) -> None: ...

    def play(self, actions: Actions) -> None: ...

    def panic(self, exception: Exception) -> None: ...


class GameLogic:
    """
    Plays one level.

    Each execute() runs on a fresh copy of the level board, so runs never
    affect each other.
    """

    def __init__(self, listener: GameListener, level: GameLevel, options: Optional[SolverOptions] = None):
        self.listener = listener
        self._level = level
        self.options = options or SolverOptions()
        listener.on_logic_initialized(level)

    def board(self) -> Board:
        return self._level.board()

    def level(self) -> GameLevel:
        return self._level

    def analyze(self) -> List[Problem]:
        return analyze(self.board(), self.options)

    def solve(self) -> List[Procedure]:
        return solve(self.board(), self.options)

    def execute(self, root: Procedure, p1: Procedure, p2: Procedure) -> Optional[Actions]:
        """
        Run the procedures and send the action log to the listener.

        The log starts with a START action at the bot's initial position.
        Win/lose is reported after `play`.

        Returns:
            The action log, None if execution raised (see `panic`)
        """
        board = self.board()
        actions = Actions([Action(ActionType.START, board.position_of_bot, board.direction_of_bot)])

        try:
            actions.extend(Bot(board).execute(root, p1, p2))
            logger.debug(f"Bot executed procedures (0[{len(root)}], 1[{len(p1)}], 2[{len(p2)}])")

            if actions.successful():
                logger.debug("Level complete.")
            else:
                logger.warning("Level incomplete.")

            self.listener.play(actions)
        except Exception as e:
            logger.exception(f"Execution failed: {e}")
            self.listener.panic(e)
            return None

        if actions.successful():
            self.listener.on_game_win()
        else:
            failed = actions.get_failed()
            self.listener.on_game_lose(failed.type.name if failed is not None else None)
        return actions


__all__ = ['GameListener', 'GameLogic']
