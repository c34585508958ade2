"""
Actions
=======

An Action records the outcome of one executed instruction (or a recursion
marker). The ordered list of actions produced by a run is the only artifact
consumed by replay/animation layers.
"""

import json
from dataclasses import dataclass, replace
from typing import Dict, Iterable, Iterator, List, Optional, Union

from procbot.core.definitions import ActionType, Direction, Position, UNASSIGNED_PROCEDURE_ID


@dataclass(frozen=True, eq=False)
class Action:
    """One logged, tagged outcome."""
    type: ActionType
    position: Optional[Position] = None
    direction: Optional[Direction] = None
    destination: Optional[Position] = None
    procedure: int = UNASSIGNED_PROCEDURE_ID
    instruction: int = -1

    @property
    def failed(self) -> bool:
        return self.type.failed

    @property
    def end_position(self) -> Optional[Position]:
        """Where the action ended (destination, or position if none)."""
        return self.destination if self.destination is not None else self.position

    def tagged(self, procedure: int, instruction: int) -> 'Action':
        """Copy carrying the owning procedure id and instruction index."""
        return replace(self, procedure=procedure, instruction=instruction)

    def to_dict(self) -> Dict:
        return {
            'type': self.type.name,
            'position': list(self.position) if self.position is not None else None,
            'direction': self.direction.name if self.direction is not None else None,
            'destination': list(self.destination) if self.destination is not None else None,
            'procedure': self.procedure,
            'instruction': self.instruction,
        }

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Action):
            return (self.type is other.type
                    and self.procedure == other.procedure
                    and self.instruction == other.instruction)
        if isinstance(other, ActionType):
            return self.type is other
        return NotImplemented

    def __hash__(self) -> int:
        return hash((self.type, self.procedure, self.instruction))


class Actions:
    """
    Append-only action log.

    A log is successful if no action failed and it holds exactly one
    EXIT_SUCCESSFUL.
    """

    def __init__(self, actions: Optional[Iterable[Action]] = None):
        self._actions: List[Action] = list(actions or [])

    def add(self, action: Action):
        if action is None:
            raise ValueError("None is not an action")
        self._actions.append(action)

    def extend(self, actions: Iterable[Action]):
        for action in actions:
            self.add(action)

    def with_action(self, action: Action) -> 'Actions':
        """Append and return self, for one-line construction."""
        self.add(action)
        return self

    def last(self) -> Optional[Action]:
        return self._actions[-1] if self._actions else None

    def get_failed(self) -> Optional[Action]:
        """First failed action, None if nothing failed."""
        return next((a for a in self._actions if a.failed), None)

    def failed(self) -> bool:
        return self.get_failed() is not None

    def successful(self) -> bool:
        exits = sum(1 for a in self._actions if a.type is ActionType.EXIT_SUCCESSFUL)
        return not self.failed() and exits == 1

    def types(self) -> List[ActionType]:
        return [a.type for a in self._actions]

    def without_markers(self) -> 'Actions':
        """Log with START/STOP call markers and the START action removed."""
        return Actions(a for a in self._actions if not a.type.is_marker)

    def to_json(self) -> str:
        return json.dumps([a.to_dict() for a in self._actions])

    def __len__(self) -> int:
        return len(self._actions)

    def __iter__(self) -> Iterator[Action]:
        return iter(self._actions)

    def __getitem__(self, index: Union[int, slice]):
        if isinstance(index, slice):
            return Actions(self._actions[index])
        return self._actions[index]

    def __contains__(self, item: object) -> bool:
        return any(a == item for a in self._actions)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Actions):
            return NotImplemented
        return self._actions == other._actions

    def __repr__(self) -> str:
        return f"Actions({[a.type.name for a in self._actions]})"


__all__ = ['Action', 'Actions']
