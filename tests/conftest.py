"""Shared fixtures for the genetic solver tests."""

import matplotlib

matplotlib.use("Agg")

import pytest

from hashi_ga.core.graph import IslandGraph
from hashi_ga.core.puzzle import Direction
from hashi_ga.genetic.genome import Chromosome


TWO_ISLANDS = [[1, 1]]

SQUARE = [
    [2, 0, 2],
    [0, 0, 0],
    [2, 0, 2],
]

CROSSING = [
    [0, 1, 0],
    [1, 0, 1],
    [0, 1, 0],
]

# Islands in id order: A(0,0) B(0,2) C(0,4) D(2,0) E(2,2) H(2,4) F(4,0) G(4,4)
MEDIUM = [
    [2, 0, 4, 0, 2],
    [0, 0, 0, 0, 0],
    [4, 0, 4, 0, 4],
    [0, 0, 0, 0, 0],
    [2, 0, 0, 0, 2],
]

MEDIUM_SOLUTION = [
    (0, Direction.RIGHT, 1),
    (1, Direction.RIGHT, 1),
    (0, Direction.DOWN, 1),
    (1, Direction.DOWN, 2),
    (3, Direction.RIGHT, 1),
    (3, Direction.DOWN, 2),
    (2, Direction.DOWN, 1),
    (5, Direction.DOWN, 2),
    (4, Direction.RIGHT, 1),
]


class SequenceRandom:
    """Random source replaying fixed values, for operator tests"""

    def __init__(self, values):
        self.values = list(values)
        self.position = 0

    def random(self):
        value = self.values[self.position % len(self.values)]
        self.position += 1
        return value


def build_chromosome(graph, links):
    chromosome = Chromosome.empty(len(graph.islands))
    for island_id, direction, count in links:
        chromosome.set_link(graph, island_id, direction, count)
    return chromosome


@pytest.fixture
def two_islands():
    return IslandGraph(TWO_ISLANDS)


@pytest.fixture
def square():
    return IslandGraph(SQUARE)


@pytest.fixture
def crossing():
    return IslandGraph(CROSSING)


@pytest.fixture
def medium():
    return IslandGraph(MEDIUM)


@pytest.fixture
def medium_solution(medium):
    return build_chromosome(medium, MEDIUM_SOLUTION)
