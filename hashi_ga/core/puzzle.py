"""
Core data structures for Hashiwokakero puzzles.
"""

from dataclasses import dataclass, field
from enum import IntEnum
from typing import List, Optional, Tuple


# Cell values of the board grid.
#  0:    empty cell
#  1-8:  island requiring that many bridge-ends
#  -1:   |  single vertical bridge
#  -2:   || double vertical bridge
#  -3:   -  single horizontal bridge
#  -4:   =  double horizontal bridge
EMPTY = 0
MIN_ISLAND_VALUE = 1
MAX_ISLAND_VALUE = 8
VERT_SINGLE_BRIDGE = -1
VERT_DOUBLE_BRIDGE = -2
HORI_SINGLE_BRIDGE = -3
HORI_DOUBLE_BRIDGE = -4

BRIDGE_MARKERS = (VERT_SINGLE_BRIDGE, VERT_DOUBLE_BRIDGE,
                  HORI_SINGLE_BRIDGE, HORI_DOUBLE_BRIDGE)

MAX_BRIDGES_PER_LINK = 2


class Direction(IntEnum):
    """Cardinal directions, valued by their bit position in a packed gene"""
    LEFT = 0
    RIGHT = 1
    DOWN = 2
    UP = 3

    @property
    def opposite(self) -> 'Direction':
        return _OPPOSITES[self]

    @property
    def step(self) -> Tuple[int, int]:
        """(d_row, d_col) of one cell in this direction"""
        return _STEPS[self]

    @property
    def is_horizontal(self) -> bool:
        return self in (Direction.LEFT, Direction.RIGHT)


_OPPOSITES = {
    Direction.LEFT: Direction.RIGHT,
    Direction.RIGHT: Direction.LEFT,
    Direction.DOWN: Direction.UP,
    Direction.UP: Direction.DOWN,
}

# Rows grow downwards, as in the board arrays.
_STEPS = {
    Direction.LEFT: (0, -1),
    Direction.RIGHT: (0, 1),
    Direction.DOWN: (1, 0),
    Direction.UP: (-1, 0),
}


@dataclass
class NeighborLink:
    """
    One island's view of a neighbor in a given direction.

    Links come in reciprocal pairs: if island A sees B to the RIGHT with
    k bridges, B sees A to the LEFT with k bridges.
    """
    neighbor: int
    direction: Direction
    bridges: int = 0

    def __repr__(self):
        return f"NeighborLink(->{self.neighbor}, {self.direction.name}, bridges={self.bridges})"


@dataclass
class Island:
    """Represents an island in the puzzle"""
    row: int
    col: int
    value: int
    id: int = field(default=-1)
    complete: bool = False
    neighbors: List[NeighborLink] = field(default_factory=list)

    def link(self, direction: Direction) -> Optional[NeighborLink]:
        """Get the link in the given direction, if there is one"""
        for neighbor in self.neighbors:
            if neighbor.direction == direction:
                return neighbor
        return None

    @property
    def directions(self) -> List[Direction]:
        """Directions that hold a neighbor"""
        return [neighbor.direction for neighbor in self.neighbors]

    @property
    def current_bridges(self) -> int:
        return sum(neighbor.bridges for neighbor in self.neighbors)

    def __hash__(self):
        return hash((self.row, self.col))

    def __eq__(self, other):
        if isinstance(other, Island):
            return self.row == other.row and self.col == other.col
        return False

    def __repr__(self):
        return f"Island({self.id}: {self.row}, {self.col}, value={self.value})"


@dataclass(frozen=True)
class Link:
    """An unordered island pair that may hold bridges, seen from island ``a``"""
    index: int
    a: int
    b: int
    direction: Direction

    @property
    def is_horizontal(self) -> bool:
        return self.direction.is_horizontal

    def __repr__(self):
        return f"Link({self.index}: {self.a}-{self.direction.name}->{self.b})"
