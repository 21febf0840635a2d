"""
Fitness evaluation of chromosomes against the puzzle constraints.
"""

from dataclasses import dataclass
from typing import List

import networkx as nx

from ..core.exceptions import EvaluationError
from ..core.graph import IslandGraph
from ..core.puzzle import Direction
from .genome import BridgeCount, Chromosome, ScoredChromosome


# Penalty weights. Any positive weights keep the optimum exact: fitness
# reaches 1.0 only when every term is zero.
VALUE_WEIGHT = 1.0
CONSISTENCY_WEIGHT = 4.0
CONNECTIVITY_WEIGHT = 2.0
CROSSING_WEIGHT = 2.0

OPTIMAL_FITNESS = 1.0


@dataclass
class FitnessReport:
    """Breakdown of a chromosome's score"""
    value_mismatch: int
    inconsistencies: int
    unreachable: int
    crossings: int
    penalty: float
    fitness: float

    @property
    def is_optimal(self) -> bool:
        return self.penalty == 0

    def to_dict(self) -> dict:
        return {
            'value_mismatch': self.value_mismatch,
            'inconsistencies': self.inconsistencies,
            'unreachable': self.unreachable,
            'crossings': self.crossings,
            'penalty': self.penalty,
            'fitness': self.fitness,
        }


class FitnessEvaluator:
    """Scores chromosomes for one island graph"""

    def __init__(self, graph: IslandGraph):
        self.graph = graph
        self.evaluations = 0

    def evaluate(self, chromosome: Chromosome) -> FitnessReport:
        """
        Score a chromosome.

        Args:
            chromosome: Candidate layout, one gene per island

        Returns:
            Report with every penalty term and the normalized fitness

        Raises:
            EvaluationError: If the chromosome does not match the graph or a
                gene has a bridge towards a direction without a neighbor
        """
        graph = self.graph
        if len(chromosome) != len(graph.islands):
            raise EvaluationError(
                f"Chromosome has {len(chromosome)} genes for {len(graph.islands)} islands")

        self.evaluations += 1
        value_mismatch = 0
        inconsistencies = 0

        for island in graph.islands:
            gene = chromosome[island.id]
            for direction in Direction:
                if gene[direction] != BridgeCount.NONE and island.link(direction) is None:
                    raise EvaluationError(
                        f"Island {island.id} has bridges {direction.name} but no neighbor there")

            value_mismatch += abs(gene.connections - island.value)

            for neighbor in island.neighbors:
                mirrored = chromosome[neighbor.neighbor][neighbor.direction.opposite]
                if mirrored != gene[neighbor.direction]:
                    inconsistencies += 1

        active = self._active_links(chromosome)
        unreachable = self._count_unreachable(active)
        crossings = sum(1 for first, second in graph.crossings
                        if first in active and second in active)

        penalty = (VALUE_WEIGHT * value_mismatch
                   + CONSISTENCY_WEIGHT * inconsistencies
                   + CONNECTIVITY_WEIGHT * unreachable
                   + CROSSING_WEIGHT * crossings)

        return FitnessReport(
            value_mismatch=value_mismatch,
            inconsistencies=inconsistencies,
            unreachable=unreachable,
            crossings=crossings,
            penalty=penalty,
            fitness=OPTIMAL_FITNESS / (1.0 + penalty),
        )

    def evaluate_chromosome(self, scored: ScoredChromosome) -> FitnessReport:
        """Score a pair in place"""
        report = self.evaluate(scored.chromosome)
        scored.fitness = report.fitness
        return report

    def score(self, chromosome: Chromosome) -> ScoredChromosome:
        return ScoredChromosome(self.evaluate(chromosome).fitness, chromosome)

    def _active_links(self, chromosome: Chromosome) -> set:
        """Links where either end claims at least one bridge"""
        active = set()
        for link in self.graph.links:
            if (chromosome[link.a][link.direction] != BridgeCount.NONE
                    or chromosome[link.b][link.direction.opposite] != BridgeCount.NONE):
                active.add(link.index)
        return active

    def _count_unreachable(self, active: set) -> int:
        """Islands not reachable from island 0 over active links"""
        bridge_graph = nx.Graph()
        bridge_graph.add_nodes_from(range(len(self.graph.islands)))
        bridge_graph.add_edges_from(
            (self.graph.links[index].a, self.graph.links[index].b) for index in active)

        reachable = nx.node_connected_component(bridge_graph, 0)
        return len(self.graph.islands) - len(reachable)

    def connected_components(self, chromosome: Chromosome) -> List[set]:
        """Island groups joined by active bridges"""
        bridge_graph = nx.Graph()
        bridge_graph.add_nodes_from(range(len(self.graph.islands)))
        for index in self._active_links(chromosome):
            link = self.graph.links[index]
            bridge_graph.add_edge(link.a, link.b)
        return [set(component) for component in nx.connected_components(bridge_graph)]
