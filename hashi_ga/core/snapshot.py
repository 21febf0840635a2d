"""
Read-only board state handed to renderers.
"""

from dataclasses import dataclass
from typing import List, Tuple

import numpy as np

from .puzzle import (
    Direction, EMPTY,
    VERT_SINGLE_BRIDGE, VERT_DOUBLE_BRIDGE, HORI_SINGLE_BRIDGE, HORI_DOUBLE_BRIDGE,
)


@dataclass(frozen=True)
class IslandView:
    id: int
    row: int
    col: int
    value: int
    complete: bool


@dataclass(frozen=True)
class BoardSnapshot:
    """
    Islands and the resolved bridge layout of one chromosome.

    ``bridges[i][d]`` is the bridge count leaving island ``i`` in direction
    ``d``; ``base_grid`` is the board as loaded, bridge markers included.
    """
    width: int
    height: int
    islands: Tuple[IslandView, ...]
    bridges: Tuple[Tuple[int, ...], ...]
    base_grid: Tuple[Tuple[int, ...], ...]
    fitness: float = 0.0
    generation: int = 0

    @classmethod
    def from_graph(cls, graph, chromosome, fitness: float = 0.0, generation: int = 0) -> 'BoardSnapshot':
        bridges = tuple(tuple(int(gene[direction]) for direction in Direction)
                        for gene in chromosome)
        islands = tuple(
            IslandView(island.id, island.row, island.col, island.value,
                       sum(bridges[island.id]) == island.value)
            for island in graph.islands
        )
        base_grid = tuple(tuple(int(cell) for cell in row) for row in graph.grid)
        return cls(graph.width, graph.height, islands, bridges, base_grid, fitness, generation)

    def bridge_count(self, island_id: int, direction: Direction) -> int:
        return self.bridges[island_id][direction]

    def bridge_list(self) -> List[Tuple[int, int, int]]:
        """(island, neighbor, count) for every link holding bridges, listed once"""
        result = []
        positions = {(i.row, i.col): i for i in self.islands}
        for island in self.islands:
            for direction in (Direction.RIGHT, Direction.DOWN):
                count = self.bridges[island.id][direction]
                if count:
                    neighbor = self._neighbor(island, direction, positions)
                    if neighbor is not None:
                        result.append((island.id, neighbor.id, count))
        return result

    def _neighbor(self, island: IslandView, direction: Direction, positions):
        d_row, d_col = direction.step
        row, col = island.row + d_row, island.col + d_col
        while 0 <= row < self.height and 0 <= col < self.width:
            if (row, col) in positions:
                return positions[(row, col)]
            if self.base_grid[row][col] != EMPTY:
                return None
            row, col = row + d_row, col + d_col
        return None

    @property
    def is_complete(self) -> bool:
        return all(island.complete for island in self.islands)

    def to_grid(self) -> np.ndarray:
        """Board in loader encoding, with resolved bridges drawn as markers"""
        grid = np.array(self.base_grid, dtype=int)

        for island_id, neighbor_id, count in self.bridge_list():
            island = self.islands[island_id]
            neighbor = self.islands[neighbor_id]
            if island.row == neighbor.row:
                marker = HORI_SINGLE_BRIDGE if count == 1 else HORI_DOUBLE_BRIDGE
                grid[island.row, island.col + 1:neighbor.col] = marker
            else:
                marker = VERT_SINGLE_BRIDGE if count == 1 else VERT_DOUBLE_BRIDGE
                grid[island.row + 1:neighbor.row, island.col] = marker

        return grid
