import logging

import pytest

from procbot.board.board import Board
from procbot.core.definitions import Direction, Instruction, TileType
from procbot.core.exceptions import InvalidInstructionError
from procbot.core.procedure import Procedure
from procbot.simulation.bot import Bot
from procbot.simulation.optimizer import (
    Candidate,
    best_candidate,
    find_occurrences,
    optimize,
)
from procbot.simulation.path_planner import PathPlanner

F = Instruction.FORWARD
TL = Instruction.TURN_LEFT
TR = Instruction.TURN_RIGHT
J = Instruction.JUMP
EXIT = Instruction.EXIT
P1 = Instruction.EXECUTE_P1
P2 = Instruction.EXECUTE_P2


def ring_level():
    codes = [
        [4, 3, 3, 3, 3, 3, 3, 1],
        [5, 3, 0, 0, 0, 0, 0, 3],
        [2, 3, 0, 0, 0, 0, 0, 3],
        [3, 0, 0, 0, 0, 0, 0, 3],
        [3, 0, 0, 0, 0, 0, 0, 3],
        [3, 0, 0, 0, 0, 0, 0, 3],
        [3, 0, 0, 0, 0, 0, 0, 3],
        [1, 3, 3, 3, 3, 3, 3, 1],
    ]
    return Board(codes, Direction.EAST)


def test_rejects_call_markers():
    with pytest.raises(InvalidInstructionError):
        optimize([F, P1, EXIT])
    with pytest.raises(ValueError):
        optimize([F, F, P2, EXIT])


def test_rejects_bad_capacities():
    with pytest.raises(ValueError):
        optimize([F, EXIT], capacities=())
    with pytest.raises(ValueError):
        optimize([F, EXIT], capacities=(4, 4, 4, 4))


def test_trivial_split_fills_root_first():
    procedures = optimize([F, EXIT])
    assert len(procedures) == 1
    assert procedures[0].instructions == [F, EXIT]
    assert procedures[0].id == 0


def test_trivial_split_respects_capacities():
    procedures = optimize([F, TL, EXIT], capacities=(1, 1, 1))
    assert [p.instructions for p in procedures] == [[F], [TL], [EXIT]]
    assert [p.id for p in procedures] == [0, 1, 2]


def test_occurrences_are_non_overlapping():
    assert find_occurrences([F, F, F, F, EXIT], [F, F]) == [0, 2]
    assert find_occurrences([F, F, F, EXIT], [F, F]) == [0]


def test_occurrences_never_include_last_instruction():
    assert find_occurrences([F, TL, F, TL], [F, TL]) == [0]


def test_candidate_score():
    assert Candidate((F, F), (0, 2, 4)).score == 3
    assert Candidate((F, TL, F), (3,)).score == 2


def test_best_candidate_respects_capacity():
    raw = [F] * 6 + [EXIT]
    assert best_candidate(raw, 8).sequence == (F,) * 6
    assert best_candidate(raw, 3).sequence == (F,) * 3
    assert best_candidate([F, EXIT], 8) is None


def test_corridor_folds_into_first_child():
    root, p1, p2 = optimize([F] * 6 + [EXIT])
    assert root.instructions == [P1, EXIT]
    assert p1.instructions == [F] * 6
    assert p2.is_empty()
    assert [root.id, p1.id, p2.id] == [0, 1, 2]


def test_repeated_sides_fold_into_calls():
    raw = ([F] * 7 + [TR]) * 3 + [F] * 4 + [EXIT]
    root, p1, p2 = optimize(raw)
    assert p1.instructions == [F] * 7 + [TR]
    assert p2.instructions == [P1, P1, P1, F, F, F, F]
    assert root.instructions == [P2, EXIT]


def test_children_never_exceed_capacity():
    raw = [F, TR, F, F, TL, J, F, TR, F, F, TL, J, F, F, F, TR, TR, F, J, F, EXIT]
    procedures = optimize(raw, capacities=(12, 3, 2))
    assert len(procedures[1]) <= 3
    assert len(procedures[2]) <= 2
    assert P2 not in procedures[1]


def test_root_over_capacity_only_warns(caplog):
    with caplog.at_level(logging.WARNING, logger='procbot.simulation.optimizer'):
        procedures = optimize([F] * 6 + [EXIT], capacities=(2,))
    assert len(procedures) == 1
    assert len(procedures[0]) == 7
    assert "Root procedure too big" in caplog.text


def _moves(actions):
    return [(a.type, a.position, a.direction, a.destination) for a in actions.without_markers()]


def test_optimized_procedures_replay_raw_moves():
    board = ring_level()
    raw = PathPlanner(board).solve()

    direct = Bot(board.copy()).execute(Procedure(raw, 0), Procedure(), Procedure())
    root, p1, p2 = optimize(raw)
    folded = Bot(board.copy()).execute(root, p1, p2)

    assert direct.successful()
    assert folded.successful()
    assert _moves(folded) == _moves(direct)
