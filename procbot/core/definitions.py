"""
PROCBOT DEFINITIONS
===================
Central constants and type definitions for the entire project.

This file is the SINGLE SOURCE OF TRUTH for:
- Tile types (level-file codes) and their walk/jump flags
- Bot directions and rotation helpers
- Instructions (including the recursion markers)
- Action types (including the terminal-failure flags)
- Procedure capacities

Import from here instead of duplicating constants across modules.
"""

from enum import IntEnum
from typing import Dict, FrozenSet, List, Optional, Tuple

Position = Tuple[int, int]


# ==========================================
# TILE TYPES (LEVEL FILE CODES)
# ==========================================
# These codes MUST match the integers stored in level files

class TileType(IntEnum):
    """Tile kinds of the game board. Values are the level-file codes."""
    ABYSS = 0    # Not enterable, can be jumped over
    COIN = 1     # Collectible, becomes NORMAL when picked up
    DOOR = 2     # Exit of the level
    NORMAL = 3   # Plain walkable tile
    START = 4    # Starting tile of the bot
    WALL = 5     # Not enterable, not jumpable

    @property
    def walkable(self) -> bool:
        return self in WALKABLE_TILES

    @property
    def jumpable(self) -> bool:
        return self in JUMPABLE_TILES

    def describe(self) -> str:
        return f"{self.name}\n{TILE_DESCRIPTIONS[self]}"

    @classmethod
    def from_ordinal(cls, ordinal: int) -> 'TileType':
        try:
            return cls(ordinal)
        except ValueError:
            raise ValueError(f"Tile code doesn't exist (ordinal={ordinal})") from None


WALKABLE_TILES: FrozenSet[TileType] = frozenset({
    TileType.COIN,
    TileType.DOOR,
    TileType.NORMAL,
    TileType.START,
})

JUMPABLE_TILES: FrozenSet[TileType] = frozenset({
    TileType.ABYSS,
})

# Raw integer sets for numpy masks (np.isin)
WALKABLE_IDS = {int(t) for t in WALKABLE_TILES}
JUMPABLE_IDS = {int(t) for t in JUMPABLE_TILES}

TILE_DESCRIPTIONS: Dict[TileType, str] = {
    TileType.ABYSS: (
        "Cannot be entered by the bot.\n"
        "However, an abyss that is exactly one field wide can be jumped over."
    ),
    TileType.COIN: (
        "Coins can be collected by the bot, the field becomes a \"normal\" field.\n"
        "Only when all coins have been collected, the door can be opened."
    ),
    TileType.DOOR: (
        "When the door is opened, the level is won.\n"
        "There must be exactly one door per level."
    ),
    TileType.NORMAL: "A simple, empty field.",
    TileType.START: (
        "On the start field the bot starts the level in an orientation to be defined per level.\n"
        "There must be exactly one start field per level."
    ),
    TileType.WALL: "A field that cannot be entered.",
}

# ASCII rendering (debugging / CLI)
TILE_TO_CHAR: Dict[TileType, str] = {
    TileType.ABYSS: '~',
    TileType.COIN: 'o',
    TileType.DOOR: 'D',
    TileType.NORMAL: '.',
    TileType.START: 'S',
    TileType.WALL: '#',
}


def is_walkable(tile: Optional[int]) -> bool:
    """Null-safe walkable check (flood fill clears visited tiles to None)."""
    return tile is not None and int(tile) in WALKABLE_IDS


def is_jumpable(tile: Optional[int]) -> bool:
    """Null-safe jumpable check."""
    return tile is not None and int(tile) in JUMPABLE_IDS


# ==========================================
# DIRECTIONS
# ==========================================

class Direction(IntEnum):
    """
    Facing of the bot. Origin is top-left, so NORTH points to negative y.
    """
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def vector(self) -> Position:
        return DIRECTION_VECTORS[self]

    def rotate(self, rotation: int) -> 'Direction':
        """Rotate by `rotation` quarter turns (positive = clockwise)."""
        return Direction((self.value + rotation) % len(Direction))

    @classmethod
    def from_ordinal(cls, ordinal: int) -> 'Direction':
        try:
            return cls(ordinal)
        except ValueError:
            raise ValueError(f"Direction doesn't exist (ordinal={ordinal})") from None

    @staticmethod
    def from_to(start: Position, target: Position) -> 'Direction':
        """Dominant direction pointing from `start` to `target`."""
        horizontal = start[0] - target[0]
        vertical = start[1] - target[1]

        if abs(horizontal) >= abs(vertical):
            return Direction.WEST if horizontal >= 0 else Direction.EAST
        return Direction.NORTH if vertical >= 0 else Direction.SOUTH

    @staticmethod
    def rotate_from_to(start: 'Direction', target: 'Direction') -> List['Instruction']:
        """
        Minimal turn sequence from `start` to `target`.

        One turn for a quarter rotation, two TURN_RIGHT for a reversal,
        nothing if already facing `target`.
        """
        diff = target.value - start.value
        if diff > 2:
            diff -= 4
        if diff < -2:
            diff += 4

        if abs(diff) == 2:
            return [Instruction.TURN_RIGHT, Instruction.TURN_RIGHT]
        if diff > 0:
            return [Instruction.TURN_RIGHT]
        if diff < 0:
            return [Instruction.TURN_LEFT]
        return []


DIRECTION_VECTORS: Dict[Direction, Position] = {
    Direction.NORTH: (0, -1),
    Direction.EAST: (1, 0),
    Direction.SOUTH: (0, 1),
    Direction.WEST: (-1, 0),
}

# Neighbour scan order used by the flood fill and the graph builder.
# Changing it changes which of several equal-length paths is chosen.
NEIGHBOUR_ORDER: Tuple[Direction, ...] = (
    Direction.EAST,
    Direction.WEST,
    Direction.SOUTH,
    Direction.NORTH,
)

BOT_TO_CHAR: Dict[Direction, str] = {
    Direction.NORTH: '^',
    Direction.EAST: '>',
    Direction.SOUTH: 'v',
    Direction.WEST: '<',
}


def offset(position: Position, direction: Direction, distance: int = 1) -> Position:
    """Position `distance` tiles away from `position` in `direction`."""
    dx, dy = direction.vector
    return (position[0] + dx * distance, position[1] + dy * distance)


# ==========================================
# INSTRUCTIONS
# ==========================================

class Instruction(IntEnum):
    """Bot commands. EXECUTE_P1/EXECUTE_P2 call a child procedure."""
    FORWARD = 0
    TURN_LEFT = 1
    TURN_RIGHT = 2
    JUMP = 3
    EXIT = 4
    EXECUTE_P1 = 5
    EXECUTE_P2 = 6

    @property
    def is_recursion_call(self) -> bool:
        return self in RECURSION_CALLS

    @staticmethod
    def recursive(index: int) -> 'Instruction':
        """Call marker for child procedure `index` (1 or 2)."""
        if index == 1:
            return Instruction.EXECUTE_P1
        if index == 2:
            return Instruction.EXECUTE_P2
        raise ValueError(f"No call instruction for procedure {index}")

    def describe(self) -> str:
        return f"{self.name}\n{INSTRUCTION_DESCRIPTIONS[self]}"


RECURSION_CALLS: FrozenSet[Instruction] = frozenset({
    Instruction.EXECUTE_P1,
    Instruction.EXECUTE_P2,
})

INSTRUCTION_DESCRIPTIONS: Dict[Instruction, str] = {
    Instruction.FORWARD: (
        "The bot moves forward one field in its current orientation.\n"
        "Only works if the target field is normal, a coin or the start field."
    ),
    Instruction.TURN_LEFT: "The bot rotates 90° to the left.",
    Instruction.TURN_RIGHT: "The bot rotates 90° to the right.",
    Instruction.JUMP: (
        "The bot jumps in its current orientation over exactly one field.\n"
        "Only works if the field in front of the bot is an abyss and the field after it is normal,\n"
        "a coin or the starting field."
    ),
    Instruction.EXIT: (
        "The door is opened and thus removed.\n"
        "Only works if the bot is directly in front of the door in the correct orientation\n"
        "and there are no more coins."
    ),
    Instruction.EXECUTE_P1: (
        "Procedure 1 is called and all instructions in it are executed.\n"
        "A procedure may not call itself, and the two procedures may not call each other."
    ),
    Instruction.EXECUTE_P2: (
        "Procedure 2 is called and all instructions in it are executed.\n"
        "A procedure may not call itself, and the two procedures may not call each other."
    ),
}


# ==========================================
# ACTION TYPES
# ==========================================

class ActionType(IntEnum):
    """Outcome of one executed instruction, or a recursion marker."""
    MOVE = 0
    TURN_LEFT = 1
    TURN_RIGHT = 2
    JUMP = 3
    RUN_INTO_WALL = 4
    FALL_INTO_ABYSS = 5
    COLLECT_COIN = 6
    EXIT_SUCCESSFUL = 7
    EXIT_FAILED = 8
    START_EXECUTE_P1 = 9
    START_EXECUTE_P2 = 10
    STOP_EXECUTE_P1 = 11
    STOP_EXECUTE_P2 = 12
    START = 13

    @property
    def failed(self) -> bool:
        """Terminal failure: execution must stop after this action."""
        return self in FAILURE_ACTIONS

    @property
    def is_marker(self) -> bool:
        return self in MARKER_ACTIONS


FAILURE_ACTIONS: FrozenSet[ActionType] = frozenset({
    ActionType.RUN_INTO_WALL,
    ActionType.FALL_INTO_ABYSS,
    ActionType.EXIT_FAILED,
})

MARKER_ACTIONS: FrozenSet[ActionType] = frozenset({
    ActionType.START_EXECUTE_P1,
    ActionType.START_EXECUTE_P2,
    ActionType.STOP_EXECUTE_P1,
    ActionType.STOP_EXECUTE_P2,
    ActionType.START,
})

# Marker pairs keyed by the child procedure id being called
CALL_MARKERS: Dict[int, Tuple[ActionType, ActionType]] = {
    1: (ActionType.START_EXECUTE_P1, ActionType.STOP_EXECUTE_P1),
    2: (ActionType.START_EXECUTE_P2, ActionType.STOP_EXECUTE_P2),
}


# ==========================================
# PROCEDURE CAPACITIES
# ==========================================

ROOT_PROCEDURE_ID: int = 0
UNASSIGNED_PROCEDURE_ID: int = -1

ROOT_CAPACITY: int = 12
CHILD_CAPACITY: int = 8

# (root, P1, P2) for the standard puzzle
PROCEDURE_CAPACITIES: Tuple[int, ...] = (ROOT_CAPACITY, CHILD_CAPACITY, CHILD_CAPACITY)
PROCEDURE_COUNT: int = len(PROCEDURE_CAPACITIES)

JUMP_DISTANCE: int = 2


# ==========================================
# EXPORTS
# ==========================================

__all__ = [
    # Types
    'Position',
    'TileType',
    'Direction',
    'Instruction',
    'ActionType',

    # Tile sets
    'WALKABLE_TILES',
    'JUMPABLE_TILES',
    'WALKABLE_IDS',
    'JUMPABLE_IDS',
    'TILE_DESCRIPTIONS',
    'TILE_TO_CHAR',
    'is_walkable',
    'is_jumpable',

    # Directions
    'DIRECTION_VECTORS',
    'NEIGHBOUR_ORDER',
    'BOT_TO_CHAR',
    'offset',

    # Instructions / actions
    'RECURSION_CALLS',
    'INSTRUCTION_DESCRIPTIONS',
    'FAILURE_ACTIONS',
    'MARKER_ACTIONS',
    'CALL_MARKERS',

    # Procedures
    'ROOT_PROCEDURE_ID',
    'UNASSIGNED_PROCEDURE_ID',
    'ROOT_CAPACITY',
    'CHILD_CAPACITY',
    'PROCEDURE_CAPACITIES',
    'PROCEDURE_COUNT',
    'JUMP_DISTANCE',
]
