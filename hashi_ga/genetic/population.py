"""
Random initial populations of direction-valid chromosomes.
"""

from typing import List, Optional

from ..core.graph import IslandGraph
from ..core.puzzle import MAX_BRIDGES_PER_LINK
from .genome import Chromosome, Population, RandomSource
from .fitness import FitnessEvaluator


class PopulationInitializer:
    """Creates initial populations for one island graph"""

    def __init__(self, graph: IslandGraph, rng: RandomSource):
        self.graph = graph
        self.rng = rng

    def create_population(self, size: int, evaluator: FitnessEvaluator) -> Population:
        """
        Create ``size`` scored chromosomes.

        Args:
            size: Population size
            evaluator: Fitness evaluator used to score each chromosome

        Returns:
            Population of exactly ``size`` scored chromosomes
        """
        return [evaluator.score(self.create_chromosome()) for _ in range(size)]

    def create_chromosome(self) -> Chromosome:
        """Visit islands in id order and draw a count for every unresolved link"""
        chromosome = Chromosome.empty(len(self.graph.islands))
        resolved: List[Optional[int]] = [None] * len(self.graph.links)

        for island in self.graph.islands:
            self.initialize_island_connections(island.id, chromosome, resolved)

        return chromosome

    def initialize_island_connections(self, island_id: int, chromosome: Chromosome,
                                      resolved: List[Optional[int]]):
        """
        Draw bridges for an island's unresolved links and mirror them onto
        the neighbors.

        A draw never exceeds what either island still needs, and is zero for
        a link crossing one that already holds bridges.
        """
        graph = self.graph
        island = graph.islands[island_id]

        for neighbor in island.neighbors:
            index = graph.link_index(island_id, neighbor.direction)
            if resolved[index] is not None:
                continue

            other = graph.islands[neighbor.neighbor]
            cap = min(MAX_BRIDGES_PER_LINK,
                      max(0, island.value - chromosome.connections(island_id)),
                      max(0, other.value - chromosome.connections(other.id)))
            if any(resolved[crossing] for crossing in graph.crossing_links(index)):
                cap = 0

            count = self.rng.randint(0, cap)
            chromosome.set_link(graph, island_id, neighbor.direction, count)
            resolved[index] = count
