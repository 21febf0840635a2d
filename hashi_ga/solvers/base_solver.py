"""
Base solver class and configuration for Hashiwokakero solvers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field, asdict, fields
from pathlib import Path
from typing import Optional, Dict, Any, List, Callable, Union
import time

import yaml

from .. import config as defaults
from ..core.exceptions import ConfigurationError, EvaluationError
from ..core.snapshot import BoardSnapshot
from ..core.utils import setup_logger, memory_usage


@dataclass
class Parameters:
    """Parameters used for the genetic algorithm"""
    population_size: int = defaults.GA_POPULATION_SIZE
    crossover_prob: float = defaults.GA_CROSSOVER_PROB
    mutation_prob: float = defaults.GA_MUTATION_PROB
    max_generations: int = defaults.GA_MAX_GENERATIONS
    with_wisdom: bool = defaults.GA_WITH_WISDOM
    gens_per_wisdom: int = defaults.GA_GENS_PER_WISDOM
    elitism_perc: float = defaults.GA_ELITISM_PERC
    wisdom_perc: float = defaults.GA_WISDOM_PERC
    random_seed: Optional[int] = None

    def validate(self):
        """
        Check every parameter type and range.

        Raises:
            ConfigurationError: On the first mistyped or out-of-range parameter
        """
        for name in ('population_size', 'max_generations', 'gens_per_wisdom'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ConfigurationError(f"{name} must be an integer, got {value!r}")
            if value < 1:
                raise ConfigurationError(f"{name} must be at least 1, got {value}")

        for name in ('crossover_prob', 'mutation_prob', 'elitism_perc', 'wisdom_perc'):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, (int, float)):
                raise ConfigurationError(f"{name} must be a number, got {value!r}")
            if not 0.0 <= value <= 1.0:
                raise ConfigurationError(f"{name} must be within [0, 1], got {value}")

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Parameters':
        """Create parameters from a mapping, rejecting unknown keys"""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            raise ConfigurationError(f"Unknown parameters: {sorted(unknown)}")
        params = cls(**data)
        params.validate()
        return params

    @classmethod
    def from_yaml(cls, filepath: Union[str, Path]) -> 'Parameters':
        """
        Load parameters from a YAML file.

        The file holds the parameters at top level or under a
        ``parameters`` key.
        """
        filepath = Path(filepath)
        if not filepath.exists():
            raise ConfigurationError(f"Configuration file not found: {filepath}")

        try:
            with open(filepath, 'r') as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Invalid YAML in {filepath}: {e}") from e

        if not isinstance(data, dict):
            raise ConfigurationError(f"Invalid configuration in {filepath}: expected a mapping")
        return cls.from_dict(data.get('parameters', data))


@dataclass
class SolverConfig:
    """Configuration for running a solver"""
    time_limit: Optional[float] = None  # seconds, None for no limit
    verbose: bool = False
    log_file: Optional[Path] = None


@dataclass
class SolverResult:
    """Result from puzzle solver"""
    success: bool
    solution: Optional[BoardSnapshot] = None
    solve_time: float = 0.0
    generations: int = 0
    memory_used: float = 0.0  # MB
    message: str = ""
    best_fitness: float = 0.0

    # Additional information
    history: List[float] = field(default_factory=list)
    stats: Dict[str, Any] = field(default_factory=dict)

    def __repr__(self):
        status = "Success" if self.success else "Failed"
        return f"SolverResult({status}, time={self.solve_time:.2f}s, generations={self.generations})"


class BaseSolver(ABC):
    """Abstract base class for Hashiwokakero solvers"""

    def __init__(self, config: Optional[SolverConfig] = None):
        """Initialize solver with configuration."""
        self.config = config or SolverConfig()
        self.logger = setup_logger(
            self.__class__.__name__,
            self.config.log_file,
            "DEBUG" if self.config.verbose else defaults.LOG_LEVEL
        )

        # Callbacks for monitoring progress
        self._progress_callbacks: List[Callable] = []

        self._start_time: Optional[float] = None

    def add_progress_callback(self, callback: Callable):
        """Add a callback ``callback(generation, best, stats)`` run after each generation."""
        self._progress_callbacks.append(callback)

    def solve(self, grid) -> SolverResult:
        """Solve the puzzle given as a board grid."""
        self.logger.info(f"Starting {self.__class__.__name__} solver")

        self._start_time = time.time()
        initial_memory = memory_usage()

        try:
            result = self._solve(grid)
        except EvaluationError:
            self.logger.critical("Genome invariant broken during evaluation", exc_info=True)
            raise
        except Exception as e:
            self.logger.error(f"Error during solving: {str(e)}", exc_info=True)
            return SolverResult(
                success=False,
                message=f"Solver error: {str(e)}",
                solve_time=time.time() - self._start_time
            )

        result.solve_time = time.time() - self._start_time
        result.memory_used = memory_usage() - initial_memory

        if result.success:
            self.logger.info(f"Solved in {result.solve_time:.2f}s after {result.generations} generations")
        else:
            self.logger.warning(f"Failed to solve: {result.message}")

        return result

    @abstractmethod
    def _solve(self, grid) -> SolverResult:
        """Implement the specific solving algorithm."""
        pass

    def _check_time_limit(self) -> bool:
        """Check if time limit has been exceeded"""
        if self._start_time is None or self.config.time_limit is None:
            return False
        return (time.time() - self._start_time) > self.config.time_limit

    def _call_progress_callbacks(self, generation: int, best=None,
                                 stats: Optional[Dict[str, Any]] = None):
        """Call all registered progress callbacks"""
        for callback in self._progress_callbacks:
            try:
                callback(generation, best, stats or {})
            except Exception as e:
                self.logger.error(f"Error in progress callback: {e}")
