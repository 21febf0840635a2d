"""
Evolutionary operators: elitism, rank selection, crossover and mutation.

Every operator keeps the pairing invariant: both islands of a link always
carry the same bridge count for it.
"""

from typing import List, Tuple

from ..core.graph import IslandGraph
from .genome import BridgeCount, Chromosome, Population, RandomSource, ScoredChromosome


def sort_population(population: Population):
    """Sort in place, fittest first"""
    population.sort(key=lambda scored: scored.fitness, reverse=True)


def elite_count(population_size: int, elitism_perc: float) -> int:
    return min(population_size, int(elitism_perc * population_size))


def select_elites(population: Population, elitism_perc: float) -> Population:
    """Top fraction of a sorted population, carried over untouched"""
    return population[:elite_count(len(population), elitism_perc)]


def rank_weights(size: int) -> List[int]:
    """Selection weight for each rank of a sorted population, best first"""
    return [size - rank for rank in range(size)]


def select_parents(population: Population, rng: RandomSource,
                   weights: List[int]) -> Tuple[ScoredChromosome, ScoredChromosome]:
    """Pick two parents from a sorted population with rank-proportional odds"""
    first, second = rng.choices(population, weights=weights, k=2)
    return first, second


class Crossover:
    """Uniform whole-gene crossover"""

    def __init__(self, graph: IslandGraph, probability: float):
        self.graph = graph
        self.probability = probability

    def apply(self, parent1: Chromosome, parent2: Chromosome,
              rng: RandomSource) -> Tuple[Chromosome, Chromosome]:
        """
        Swap genes at matching island indices between copies of the parents.

        A link whose two islands ended up in different children is repaired by
        copying the count of the swapped island onto the other end.
        """
        child1 = parent1.copy()
        child2 = parent2.copy()
        swapped = [False] * len(child1)

        for index in range(len(child1)):
            if rng.random() < self.probability:
                child1.genes[index], child2.genes[index] = child2.genes[index], child1.genes[index]
                swapped[index] = True

        if any(swapped):
            self.repropagate(child1, swapped)
            self.repropagate(child2, swapped)

        return child1, child2

    def repropagate(self, chromosome: Chromosome, swapped: List[bool]):
        for link in self.graph.links:
            if swapped[link.a] == swapped[link.b]:
                continue
            if swapped[link.a]:
                count = chromosome[link.a][link.direction]
            else:
                count = chromosome[link.b][link.direction.opposite]
            chromosome.set_link(self.graph, link.a, link.direction, count)


class Mutation:
    """
    Per-bit mutation over the two bits (single, double) each link owns.

    Flipping a bit always changes the count: setting one bit clears the
    other, clearing a bit leaves no bridge.
    """

    def __init__(self, graph: IslandGraph, probability: float):
        self.graph = graph
        self.probability = probability

    def apply(self, chromosome: Chromosome, rng: RandomSource) -> int:
        """Mutate in place and return the number of flipped bits"""
        flips = 0
        for link in self.graph.links:
            count = chromosome[link.a][link.direction]
            for bit in (BridgeCount.SINGLE, BridgeCount.DOUBLE):
                if rng.random() < self.probability:
                    count = flip_bit(count, bit)
                    flips += 1
            if count != chromosome[link.a][link.direction]:
                chromosome.set_link(self.graph, link.a, link.direction, count)
        return flips


def flip_bit(count: BridgeCount, bit: BridgeCount) -> BridgeCount:
    """Flip the single or double flag of a bridge count"""
    if count == bit:
        return BridgeCount.NONE
    return bit
