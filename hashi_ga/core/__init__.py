# hashi_ga/core/__init__.py
"""
Core data structures and utilities for the Hashiwokakero solver.
"""

from .exceptions import HashiError, GraphError, ConfigurationError, EvaluationError
from .puzzle import Direction, Island, NeighborLink, Link
from .graph import IslandGraph
from .snapshot import BoardSnapshot, IslandView
from .validator import PuzzleValidator, ValidationResult
from .utils import (
    setup_logger, timer, memory_usage,
    PuzzleConverter, load_grid, save_grid
)

__all__ = [
    # Errors
    'HashiError', 'GraphError', 'ConfigurationError', 'EvaluationError',

    # Data structures
    'Direction', 'Island', 'NeighborLink', 'Link',
    'IslandGraph', 'BoardSnapshot', 'IslandView',

    # Validation
    'PuzzleValidator', 'ValidationResult',

    # Utilities
    'setup_logger', 'timer', 'memory_usage',
    'PuzzleConverter', 'load_grid', 'save_grid'
]
