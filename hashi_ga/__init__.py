"""
Genetic algorithm solver for Hashiwokakero ("Bridges") puzzles.
"""

from .core import IslandGraph, GraphError, ConfigurationError, EvaluationError
from .solvers import GeneticSolver, Parameters, SolverConfig, SolverResult

__version__ = "0.1.0"

__all__ = [
    'IslandGraph', 'GraphError', 'ConfigurationError', 'EvaluationError',
    'GeneticSolver', 'Parameters', 'SolverConfig', 'SolverResult',
]
