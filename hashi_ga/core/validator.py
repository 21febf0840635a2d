"""
Validator for Hashiwokakero solution constraints.
"""

from typing import List

import networkx as nx

from .graph import IslandGraph
from .puzzle import Direction, MAX_BRIDGES_PER_LINK


class ValidationResult:
    """Result of solution validation"""

    def __init__(self):
        self.is_valid = True
        self.errors: List[str] = []
        self.warnings: List[str] = []

    def add_error(self, error: str):
        """Add an error message"""
        self.errors.append(error)
        self.is_valid = False

    def add_warning(self, warning: str):
        """Add a warning message"""
        self.warnings.append(warning)

    def __bool__(self):
        return self.is_valid

    def __repr__(self):
        status = "Valid" if self.is_valid else "Invalid"
        return f"ValidationResult({status}, {len(self.errors)} errors, {len(self.warnings)} warnings)"


class PuzzleValidator:
    """Checks a bridge layout against the puzzle rules, independently of fitness scoring"""

    @staticmethod
    def validate_structure(graph: IslandGraph) -> ValidationResult:
        """Check the graph can hold a solution at all"""
        result = ValidationResult()

        total = sum(island.value for island in graph.islands)
        if total % 2 != 0:
            result.add_error(f"Total bridge requirements ({total}) is odd - impossible to solve")

        for island in graph.islands:
            capacity = MAX_BRIDGES_PER_LINK * len(island.neighbors)
            if island.value > capacity:
                result.add_error(
                    f"Island {island.id} requires {island.value} bridges but can hold at most {capacity}")

        return result

    @staticmethod
    def validate_pairing(graph: IslandGraph, chromosome) -> ValidationResult:
        """Check both ends of every link agree and no bridge points at nothing"""
        result = ValidationResult()

        for island in graph.islands:
            gene = chromosome[island.id]
            for direction in Direction:
                count = gene[direction]
                link = island.link(direction)
                if link is None:
                    if count:
                        result.add_error(f"Island {island.id} has bridges towards a direction without neighbor")
                    continue
                mirrored = chromosome[link.neighbor][link.direction.opposite]
                if mirrored != count:
                    result.add_error(
                        f"Link {island.id}<->{link.neighbor} carries {int(count)} and {int(mirrored)} bridges")

        return result

    @staticmethod
    def validate_solution(graph: IslandGraph, chromosome) -> ValidationResult:
        """Validate if a chromosome is a complete solution"""
        result = PuzzleValidator.validate_pairing(graph, chromosome)
        counts = chromosome.link_counts(graph)

        for island in graph.islands:
            bridge_count = chromosome.connections(island.id)
            if bridge_count != island.value:
                result.add_error(f"Island {island.id} has {bridge_count} bridges, requires {island.value}")

        for first, second in graph.crossings:
            if counts[first] and counts[second]:
                result.add_error(f"Bridges {graph.links[first]} and {graph.links[second]} cross")

        bridge_graph = nx.Graph()
        bridge_graph.add_nodes_from(island.id for island in graph.islands)
        bridge_graph.add_edges_from(
            (link.a, link.b) for link, count in zip(graph.links, counts) if count)
        if not nx.is_connected(bridge_graph):
            result.add_error("Not all islands are connected")

        return result
