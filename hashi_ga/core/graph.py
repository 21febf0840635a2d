"""
Island adjacency graph built from a Hashiwokakero board grid.
"""

from typing import Dict, Iterable, List, Optional, Set, Tuple, Union

import numpy as np

from .exceptions import GraphError
from .puzzle import (
    Direction, Island, Link, NeighborLink,
    EMPTY, MIN_ISLAND_VALUE, MAX_ISLAND_VALUE, HORI_DOUBLE_BRIDGE, BRIDGE_MARKERS,
)


GridLike = Union[np.ndarray, List[List[int]]]


class IslandGraph:
    """
    Islands of a board and the links between islands that can see each other.

    Islands are kept in a single list and identified by their index in it,
    assigned in row-major scan order. Links refer to neighbors by index.
    """

    def __init__(self, grid: GridLike):
        """
        Build the graph from a board grid.

        Args:
            grid: Rectangular matrix, 0 for empty cells, 1-8 for islands and
                -1..-4 for bridges already drawn on the board

        Raises:
            GraphError: If the grid is malformed or an island cannot have
                any neighbor
        """
        self.grid = self._validate_grid(grid)
        self.height, self.width = self.grid.shape
        self.islands: List[Island] = []
        self.links: List[Link] = []
        self.crossings: List[Tuple[int, int]] = []
        self._island_map: Dict[Tuple[int, int], Island] = {}
        self._link_index: Dict[Tuple[int, Direction], int] = {}
        self._crossing_map: Dict[int, Set[int]] = {}

        self.build()

    @classmethod
    def from_islands(cls, width: int, height: int,
                     islands: Iterable[Tuple[int, int, int]]) -> 'IslandGraph':
        """Create a graph from (row, col, value) triples"""
        if width <= 0 or height <= 0:
            raise GraphError(f"Invalid board dimensions {width}x{height}")

        grid = np.zeros((height, width), dtype=int)
        for row, col, value in islands:
            if not (0 <= row < height and 0 <= col < width):
                raise GraphError(f"Island at ({row}, {col}) is outside the board")
            if not (MIN_ISLAND_VALUE <= value <= MAX_ISLAND_VALUE):
                raise GraphError(f"Island at ({row}, {col}) has invalid value: {value}")
            if grid[row, col] != EMPTY:
                raise GraphError(f"Duplicate island at ({row}, {col})")
            grid[row, col] = value

        return cls(grid)

    @staticmethod
    def _validate_grid(grid: GridLike) -> np.ndarray:
        """Check shape and cell values, returning an integer array"""
        try:
            array = np.asarray(grid)
        except ValueError as e:
            raise GraphError(f"Grid rows have inconsistent lengths: {e}") from e

        if array.dtype == object or array.ndim != 2:
            raise GraphError("Grid must be a rectangular two-dimensional matrix")
        if array.size == 0:
            raise GraphError("Grid is empty")
        if not np.issubdtype(array.dtype, np.integer):
            raise GraphError(f"Grid cells must be integers, got {array.dtype}")

        invalid = (array < HORI_DOUBLE_BRIDGE) | (array > MAX_ISLAND_VALUE)
        if invalid.any():
            row, col = np.argwhere(invalid)[0]
            raise GraphError(
                f"Invalid cell value {array[row, col]} at ({row}, {col})")

        return array.astype(int)

    def build(self):
        """(Re)build islands and links from the grid"""
        self.islands = []
        self._island_map = {}

        for row, col in np.argwhere(self.grid > EMPTY):
            island = Island(int(row), int(col), int(self.grid[row, col]),
                            id=len(self.islands))
            self.islands.append(island)
            self._island_map[(island.row, island.col)] = island

        if not self.islands:
            raise GraphError("Grid contains no islands")

        for island in self.islands:
            island.neighbors.clear()
        for island in self.islands:
            self.update_neighbor_info(island, clear_neighbors=False)

        for island in self.islands:
            if not island.neighbors:
                raise GraphError(
                    f"Island {island.id} at ({island.row}, {island.col}) has no possible neighbors")

        self._collect_links()
        self._compute_crossings()
        self.validate_pairing()

    def update_neighbor_info(self, island: Island, clear_neighbors: bool = True):
        """
        Find the first island hit in each direction and record a link pair.

        A hit on a bridge marker or on the board edge means no neighbor in
        that direction.
        """
        if clear_neighbors:
            for neighbor in island.neighbors:
                other = self.islands[neighbor.neighbor]
                other.neighbors = [n for n in other.neighbors if n.neighbor != island.id]
            island.neighbors.clear()

        for direction in Direction:
            other = self.get_island_in_direction(direction, island.row, island.col)
            if other is None:
                continue
            if island.link(direction) is None:
                island.neighbors.append(NeighborLink(other.id, direction))
            if other.link(direction.opposite) is None:
                other.neighbors.append(NeighborLink(island.id, direction.opposite))

    def get_island_in_direction(self, direction: Direction, row: int, col: int) -> Optional[Island]:
        """Scan outwards from (row, col) and return the first island seen"""
        d_row, d_col = direction.step
        row, col = row + d_row, col + d_col

        while 0 <= row < self.height and 0 <= col < self.width:
            cell = self.grid[row, col]
            if cell > EMPTY:
                return self._island_map[(row, col)]
            if cell in BRIDGE_MARKERS:
                return None
            row, col = row + d_row, col + d_col

        return None

    def _collect_links(self):
        """List every reciprocal link pair once"""
        self.links = []
        self._link_index = {}

        for island in self.islands:
            for neighbor in sorted(island.neighbors, key=lambda n: n.direction):
                if island.id < neighbor.neighbor:
                    link = Link(len(self.links), island.id, neighbor.neighbor, neighbor.direction)
                    self.links.append(link)
                    self._link_index[(island.id, neighbor.direction)] = link.index
                    self._link_index[(neighbor.neighbor, neighbor.direction.opposite)] = link.index

    def _compute_crossings(self):
        """Find link pairs whose bridges would cross"""
        self.crossings = []
        self._crossing_map = {link.index: set() for link in self.links}

        horizontal = [link for link in self.links if link.is_horizontal]
        vertical = [link for link in self.links if not link.is_horizontal]

        for h_link in horizontal:
            h_start, h_end = self.islands[h_link.a], self.islands[h_link.b]
            h_row = h_start.row
            h_col_min, h_col_max = sorted((h_start.col, h_end.col))

            for v_link in vertical:
                v_start, v_end = self.islands[v_link.a], self.islands[v_link.b]
                v_col = v_start.col
                v_row_min, v_row_max = sorted((v_start.row, v_end.row))

                if h_col_min < v_col < h_col_max and v_row_min < h_row < v_row_max:
                    self.crossings.append((h_link.index, v_link.index))
                    self._crossing_map[h_link.index].add(v_link.index)
                    self._crossing_map[v_link.index].add(h_link.index)

    def validate_pairing(self):
        """Raise GraphError unless every link has an equal, opposite partner"""
        for island in self.islands:
            for neighbor in island.neighbors:
                other = self.islands[neighbor.neighbor]
                back = other.link(neighbor.direction.opposite)
                if back is None or back.neighbor != island.id:
                    raise GraphError(
                        f"Island {island.id} links {neighbor.direction.name} to {other.id} "
                        f"without a reciprocal link")
                if back.bridges != neighbor.bridges:
                    raise GraphError(
                        f"Link {island.id}<->{other.id} carries {neighbor.bridges} and "
                        f"{back.bridges} bridges on its two ends")

    def island_at(self, row: int, col: int) -> Optional[Island]:
        return self._island_map.get((row, col))

    def neighbor(self, island_id: int, direction: Direction) -> Optional[int]:
        """Index of the island seen from ``island_id`` in ``direction``"""
        link = self.islands[island_id].link(direction)
        return link.neighbor if link else None

    def link_index(self, island_id: int, direction: Direction) -> Optional[int]:
        return self._link_index.get((island_id, direction))

    def crossing_links(self, link_index: int) -> Set[int]:
        """Links that cannot hold bridges together with ``link_index``"""
        return self._crossing_map.get(link_index, set())

    def apply_chromosome(self, chromosome):
        """Copy a chromosome's bridge counts onto the links and update completion"""
        for island in self.islands:
            gene = chromosome[island.id]
            for neighbor in island.neighbors:
                neighbor.bridges = int(gene[neighbor.direction])
            island.complete = island.current_bridges == island.value

    def clear_bridges(self):
        for island in self.islands:
            for neighbor in island.neighbors:
                neighbor.bridges = 0
            island.complete = False

    def __len__(self):
        return len(self.islands)

    def __repr__(self):
        return f"IslandGraph({self.width}x{self.height}, {len(self.islands)} islands, {len(self.links)} links)"
