import json

import pytest

from procbot.core.actions import Action, Actions
from procbot.core.definitions import ActionType, Direction, Instruction
from procbot.core.procedure import Procedure, contains_illegal_recursion, verify

F = Instruction.FORWARD
EXIT = Instruction.EXIT
P1 = Instruction.EXECUTE_P1
P2 = Instruction.EXECUTE_P2


def test_procedure_is_a_queue():
    p = Procedure([F, Instruction.TURN_LEFT, EXIT], procedure_id=0)
    assert p.peek() is F
    assert p.poll() is F
    assert p.remove() is Instruction.TURN_LEFT
    assert len(p) == 1
    assert p.poll() is EXIT
    assert p.poll() is None
    with pytest.raises(IndexError):
        p.remove()


def test_procedure_copy_is_independent():
    p = Procedure([F, EXIT], procedure_id=1)
    clone = p.copy()
    clone.poll()
    assert len(p) == 2
    assert clone.id == 1
    assert p.with_id(2).id == 2
    assert p.with_id(2) == p


def test_count_and_contains():
    p = Procedure([F, F, P1, EXIT])
    assert p.count(F) == 2
    assert p.count(P2) == 0
    assert P1 in p
    assert P2 not in p


@pytest.mark.parametrize("p1,p2,illegal", [
    ([F], [F], False),
    ([P1], [F], True),
    ([F], [P2], True),
    ([P2], [P1], True),
    ([F], [P1], False),
    ([P2], [F], False),
])
def test_contains_illegal_recursion(p1, p2, illegal):
    assert contains_illegal_recursion(Procedure(p1), Procedure(p2)) is illegal


def test_verify_requires_exactly_one_exit():
    assert verify(Procedure([F, EXIT]), Procedure(), Procedure())
    assert verify(Procedure([P1]), Procedure([F, EXIT]), Procedure())
    assert not verify(Procedure([F]), Procedure(), Procedure())
    assert not verify(Procedure([EXIT]), Procedure([EXIT]), Procedure())
    assert not verify(Procedure([EXIT]), Procedure([P1]), Procedure())


def test_action_equality_uses_type_and_tags():
    a = Action(ActionType.MOVE, (0, 0), Direction.EAST, (1, 0)).tagged(0, 3)
    b = Action(ActionType.MOVE, (5, 5), Direction.WEST).tagged(0, 3)
    assert a == b
    assert a != b.tagged(1, 3)
    assert a == ActionType.MOVE
    assert a.end_position == (1, 0)
    assert b.end_position == (5, 5)


def test_actions_success_and_failure():
    log = Actions([Action(ActionType.MOVE), Action(ActionType.EXIT_SUCCESSFUL)])
    assert log.successful()
    assert not log.failed()
    assert log.get_failed() is None

    log.add(Action(ActionType.RUN_INTO_WALL))
    assert log.failed()
    assert not log.successful()
    assert log.get_failed().type is ActionType.RUN_INTO_WALL
    assert log.last().type is ActionType.RUN_INTO_WALL


def test_actions_two_successful_exits_is_not_success():
    log = Actions([Action(ActionType.EXIT_SUCCESSFUL), Action(ActionType.EXIT_SUCCESSFUL)])
    assert not log.successful()


def test_actions_rejects_none():
    with pytest.raises(ValueError):
        Actions().add(None)


def test_without_markers_and_json():
    log = Actions([
        Action(ActionType.START, (0, 0), Direction.EAST),
        Action(ActionType.START_EXECUTE_P1).tagged(0, 0),
        Action(ActionType.TURN_LEFT, (0, 0), Direction.EAST).tagged(1, 0),
        Action(ActionType.STOP_EXECUTE_P1).tagged(0, 0),
    ])
    assert log.without_markers().types() == [ActionType.TURN_LEFT]

    decoded = json.loads(log.to_json())
    assert decoded[0] == {
        'type': 'START', 'position': [0, 0], 'direction': 'EAST',
        'destination': None, 'procedure': -1, 'instruction': -1,
    }
    assert decoded[2]['procedure'] == 1
