"""
Solvers for Hashiwokakero puzzles.
"""

from .base_solver import BaseSolver, Parameters, SolverConfig, SolverResult
from .genetic_solver import GeneticSolver, SolverState

__all__ = [
    # Base classes
    'BaseSolver',
    'Parameters',
    'SolverConfig',
    'SolverResult',

    # Genetic solver
    'GeneticSolver',
    'SolverState',
]


# Solver registry for easy access
SOLVER_REGISTRY = {
    'genetic': GeneticSolver,
}


def get_solver(name: str, params: Parameters = None, config: SolverConfig = None) -> BaseSolver:
    """
    Get a solver by name.

    Args:
        name: Solver name (genetic)
        params: Optional algorithm parameters
        config: Optional solver configuration

    Returns:
        Solver instance

    Raises:
        ValueError: If solver name is not recognized
    """
    solver_class = SOLVER_REGISTRY.get(name.lower())
    if not solver_class:
        raise ValueError(f"Unknown solver: {name}. Available: {list(SOLVER_REGISTRY.keys())}")

    return solver_class(params, config)
