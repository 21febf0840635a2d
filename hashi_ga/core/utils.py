"""
Utility functions for the Hashiwokakero solver.
"""

import json
import logging
import os
import time
from functools import wraps
from pathlib import Path
from typing import Optional, Union

import numpy as np
import psutil

from .. import config
from .exceptions import GraphError
from .puzzle import (
    EMPTY, VERT_SINGLE_BRIDGE, VERT_DOUBLE_BRIDGE, HORI_SINGLE_BRIDGE, HORI_DOUBLE_BRIDGE,
)
from .snapshot import BoardSnapshot


def setup_logger(name: str, log_file: Optional[Path] = None, level: str = "INFO") -> logging.Logger:
    """
    Set up a logger with console and optional file output.

    Args:
        name: Logger name
        log_file: Optional log file path
        level: Logging level

    Returns:
        Configured logger
    """
    logger = logging.getLogger(name)
    logger.setLevel(getattr(logging, level.upper()))

    # Remove existing handlers
    logger.handlers = []

    console_handler = logging.StreamHandler()
    console_handler.setLevel(getattr(logging, level.upper()))

    formatter = logging.Formatter(config.LOG_FORMAT, datefmt=config.LOG_DATEFMT)
    console_handler.setFormatter(formatter)
    logger.addHandler(console_handler)

    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        file_handler = logging.FileHandler(log_file)
        file_handler.setLevel(getattr(logging, level.upper()))
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

    return logger


def timer(func):
    """Decorator to time function execution"""
    @wraps(func)
    def wrapper(*args, **kwargs):
        start_time = time.time()
        result = func(*args, **kwargs)
        execution_time = time.time() - start_time

        # Log through the instance logger when there is one
        if args and hasattr(args[0], 'logger'):
            args[0].logger.debug(f"{func.__name__} took {execution_time:.3f} seconds")

        return result
    return wrapper


def memory_usage():
    """Get current memory usage in MB"""
    process = psutil.Process(os.getpid())
    return process.memory_info().rss / 1024 / 1024


BRIDGE_GLYPHS = {
    VERT_SINGLE_BRIDGE: '│',
    VERT_DOUBLE_BRIDGE: '║',
    HORI_SINGLE_BRIDGE: '─',
    HORI_DOUBLE_BRIDGE: '═',
}


class PuzzleConverter:
    """Convert boards between different formats"""

    @staticmethod
    def from_string(s: str) -> np.ndarray:
        """
        Create a grid from a compact string, one character per cell.
        Digits 1-8 are islands; '0', '.' and spaces are empty.
        """
        lines = [line.rstrip() for line in s.strip('\n').split('\n')]
        height = len(lines)
        width = max(len(line) for line in lines) if lines else 0

        grid = np.zeros((height, width), dtype=int)
        for row, line in enumerate(lines):
            for col, char in enumerate(line):
                if '1' <= char <= '8':
                    grid[row, col] = int(char)
                elif char not in '0. ':
                    raise GraphError(f"Cannot parse '{char}' at ({row}, {col})")
        return grid

    @staticmethod
    def grid_to_string(grid: np.ndarray) -> str:
        """Render a grid in loader encoding with box-drawing bridge glyphs"""
        lines = []
        for row in np.asarray(grid):
            chars = []
            for cell in row:
                if cell > EMPTY:
                    chars.append(str(cell))
                elif cell < EMPTY:
                    chars.append(BRIDGE_GLYPHS[cell])
                else:
                    chars.append('.')
            lines.append(''.join(chars))
        return '\n'.join(lines)

    @staticmethod
    def to_string(snapshot: BoardSnapshot, show_bridges: bool = True) -> str:
        """
        Convert a board snapshot to a string.

        Args:
            snapshot: Board state to draw
            show_bridges: Whether to draw the resolved bridges

        Returns:
            String representation of the board
        """
        grid = snapshot.to_grid() if show_bridges else np.array(snapshot.base_grid, dtype=int)
        return PuzzleConverter.grid_to_string(grid)


def load_grid(filepath: Union[str, Path]) -> np.ndarray:
    """
    Load a board grid from a file.

    JSON files hold ``{"grid": [[...], ...]}``. Any other file uses the .has
    layout: a ``width height [num_islands]`` line followed by ``height`` rows
    of whitespace or comma separated integers.

    Raises:
        FileNotFoundError: If the file does not exist
        GraphError: If the content does not describe a rectangular grid
    """
    filepath = Path(filepath)
    if not filepath.exists():
        raise FileNotFoundError(f"File not found: {filepath}")

    if filepath.suffix.lower() == '.json':
        with open(filepath, 'r') as f:
            data = json.load(f)
        if not isinstance(data, dict) or 'grid' not in data:
            raise GraphError(f"Invalid format in {filepath}: expected a 'grid' entry")
        try:
            return np.array(data['grid'], dtype=int)
        except (TypeError, ValueError) as e:
            raise GraphError(f"Invalid grid in {filepath}: {e}") from e

    with open(filepath, 'r') as f:
        lines = [line.strip() for line in f.readlines() if line.strip()]

    if not lines:
        raise GraphError(f"Empty file: {filepath}")

    try:
        dimensions = [int(value) for value in lines[0].replace(',', ' ').split()]
        rows = [[int(value) for value in line.replace(',', ' ').split()] for line in lines[1:]]
    except ValueError as e:
        raise GraphError(f"Invalid number in {filepath}: {e}") from e

    if len(dimensions) < 2:
        raise GraphError(f"Invalid format in {filepath}: expected 'width height' on first line")

    width, height = dimensions[0], dimensions[1]
    if len(rows) != height or any(len(row) != width for row in rows):
        raise GraphError(
            f"Grid in {filepath} does not match its declared size {width}x{height}")

    return np.array(rows, dtype=int)


def save_grid(grid: np.ndarray, filepath: Union[str, Path]):
    """Save a grid in the .has layout"""
    grid = np.asarray(grid)
    height, width = grid.shape
    num_islands = int((grid > EMPTY).sum())

    with open(filepath, 'w') as f:
        f.write(f"{width} {height} {num_islands}\n")
        for row in grid:
            f.write(' '.join(str(int(cell)) for cell in row) + '\n')
