"""Tests for selection, crossover and mutation."""

import random

import pytest

from hashi_ga.core.puzzle import Direction
from hashi_ga.core.validator import PuzzleValidator
from hashi_ga.genetic.genome import BridgeCount, Chromosome, ScoredChromosome
from hashi_ga.genetic.operators import (
    Crossover, Mutation, elite_count, flip_bit, rank_weights, select_elites, select_parents,
    sort_population,
)

from conftest import SequenceRandom, build_chromosome


def make_population(fitnesses):
    return [ScoredChromosome(fitness, Chromosome.empty(2)) for fitness in fitnesses]


class TestSelection:

    def test_sort_fittest_first(self):
        population = make_population([0.2, 0.9, 0.5])
        sort_population(population)

        assert [scored.fitness for scored in population] == [0.9, 0.5, 0.2]

    @pytest.mark.parametrize("size,perc,expected", [
        (20, 0.1, 2),
        (10, 0.0, 0),
        (10, 1.0, 10),
        (5, 0.1, 0),
    ])
    def test_elite_count(self, size, perc, expected):
        assert elite_count(size, perc) == expected

    def test_select_elites(self):
        population = make_population([0.9, 0.5, 0.2, 0.1])
        elites = select_elites(population, 0.5)

        assert elites == population[:2]

    def test_rank_weights(self):
        assert rank_weights(3) == [3, 2, 1]
        assert rank_weights(1) == [1]

    def test_select_parents_from_population(self):
        population = make_population([0.9, 0.5, 0.2])
        rng = random.Random(1)

        for _ in range(20):
            first, second = select_parents(population, rng, rank_weights(3))
            assert first in population
            assert second in population

    def test_top_rank_picked_most(self):
        population = make_population([0.9, 0.5, 0.2, 0.1])
        rng = random.Random(2)
        picks = {id(scored): 0 for scored in population}

        for _ in range(2000):
            for parent in select_parents(population, rng, rank_weights(4)):
                picks[id(parent)] += 1

        assert picks[id(population[0])] > picks[id(population[-1])]


class TestCrossover:

    def test_always_swap_exchanges_parents(self, medium, medium_solution):
        other = Chromosome.empty(len(medium))
        child1, child2 = Crossover(medium, 1.0).apply(medium_solution, other, random.Random(0))

        assert child1 == other
        assert child2 == medium_solution

    def test_never_swap_copies_parents(self, medium, medium_solution):
        other = Chromosome.empty(len(medium))
        child1, child2 = Crossover(medium, 0.0).apply(medium_solution, other, random.Random(0))

        assert child1 == medium_solution
        assert child2 == other
        assert child1 is not medium_solution

    def test_swapped_end_wins(self, two_islands):
        parent1 = build_chromosome(two_islands, [(0, Direction.RIGHT, 1)])
        parent2 = build_chromosome(two_islands, [(0, Direction.RIGHT, 2)])

        # Swap island 0 only
        rng = SequenceRandom([0.0, 0.9])
        child1, child2 = Crossover(two_islands, 0.5).apply(parent1, parent2, rng)

        assert child1.link_counts(two_islands) == [2]
        assert child2.link_counts(two_islands) == [1]

    def test_children_keep_pairing(self, medium, medium_solution):
        crossover = Crossover(medium, 0.5)
        rng = random.Random(4)
        other = build_chromosome(medium, [(link.a, link.direction, 2) for link in medium.links])

        for _ in range(30):
            for child in crossover.apply(medium_solution, other, rng):
                assert PuzzleValidator.validate_pairing(medium, child)

    def test_parents_untouched(self, medium, medium_solution):
        before = medium_solution.key()
        other = Chromosome.empty(len(medium))
        Crossover(medium, 0.5).apply(medium_solution, other, random.Random(9))

        assert medium_solution.key() == before
        assert other == Chromosome.empty(len(medium))


class TestMutation:

    @pytest.mark.parametrize("count,bit,expected", [
        (BridgeCount.NONE, BridgeCount.SINGLE, BridgeCount.SINGLE),
        (BridgeCount.NONE, BridgeCount.DOUBLE, BridgeCount.DOUBLE),
        (BridgeCount.SINGLE, BridgeCount.SINGLE, BridgeCount.NONE),
        (BridgeCount.SINGLE, BridgeCount.DOUBLE, BridgeCount.DOUBLE),
        (BridgeCount.DOUBLE, BridgeCount.SINGLE, BridgeCount.SINGLE),
        (BridgeCount.DOUBLE, BridgeCount.DOUBLE, BridgeCount.NONE),
    ])
    def test_flip_bit(self, count, bit, expected):
        assert flip_bit(count, bit) == expected

    def test_certain_mutation_flips_every_bit(self, medium):
        chromosome = Chromosome.empty(len(medium))
        flips = Mutation(medium, 1.0).apply(chromosome, random.Random(0))

        assert flips == 2 * len(medium.links)
        assert chromosome.link_counts(medium) == [2] * len(medium.links)
        assert PuzzleValidator.validate_pairing(medium, chromosome)

    def test_zero_probability_is_identity(self, medium, medium_solution):
        before = medium_solution.copy()
        flips = Mutation(medium, 0.0).apply(medium_solution, random.Random(0))

        assert flips == 0
        assert medium_solution == before

    def test_mutation_keeps_pairing(self, medium, medium_solution):
        mutation = Mutation(medium, 0.3)
        rng = random.Random(8)

        for _ in range(30):
            mutation.apply(medium_solution, rng)
            assert PuzzleValidator.validate_pairing(medium, medium_solution)
