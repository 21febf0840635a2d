"""
Genetic algorithm components for Hashiwokakero.
"""

from .genome import (
    BridgeCount, Gene, Chromosome, ScoredChromosome, Population,
    RandomSource, calc_connections_from_mask
)
from .fitness import FitnessEvaluator, FitnessReport, OPTIMAL_FITNESS
from .population import PopulationInitializer
from .operators import (
    Crossover, Mutation, sort_population, select_elites, select_parents,
    elite_count, rank_weights
)
from .wisdom import WisdomInjector

__all__ = [
    # Genome
    'BridgeCount', 'Gene', 'Chromosome', 'ScoredChromosome', 'Population',
    'RandomSource', 'calc_connections_from_mask',

    # Fitness
    'FitnessEvaluator', 'FitnessReport', 'OPTIMAL_FITNESS',

    # Operators
    'PopulationInitializer', 'Crossover', 'Mutation', 'WisdomInjector',
    'sort_population', 'select_elites', 'select_parents',
    'elite_count', 'rank_weights'
]
