"""
Visualization tools for Hashiwokakero boards and solver progress.
"""

from .static_viz import PuzzleVisualizer, plot_fitness_history

__all__ = [
    'PuzzleVisualizer',
    'plot_fitness_history'
]
