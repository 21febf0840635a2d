"""
Exception types raised by the Hashiwokakero genetic solver.
"""


class HashiError(Exception):
    """Base class for all solver errors"""


class GraphError(HashiError, ValueError):
    """Malformed grid, island without neighbors or inconsistent link pairing"""


class ConfigurationError(HashiError, ValueError):
    """Out-of-range algorithm parameters"""


class EvaluationError(HashiError, RuntimeError):
    """
    Invariant violation found while scoring a chromosome.

    This signals a bug in a genome operator, not an unsolvable puzzle.
    """
