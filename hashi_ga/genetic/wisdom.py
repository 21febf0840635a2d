"""
Heuristic injection ("wisdom"): forced-move repair of weak chromosomes.
"""

from typing import Dict, List

from ..core.graph import IslandGraph
from ..core.puzzle import Island, MAX_BRIDGES_PER_LINK
from .genome import Chromosome, Population
from .fitness import FitnessEvaluator


class WisdomInjector:
    """
    Applies deterministic forced moves to chromosomes.

    For an island with ``remaining`` bridge-ends still to place over its
    ``open`` links (links not fixed yet in this pass):

    * one open link and 1 or 2 remaining: that link takes them all
    * remaining is twice the open links: every open link is double
    * remaining equals the open links: every open link is single
    * nothing remaining: every open link is empty

    Rules are applied in island id order until no link changes. Links that
    stay open keep the chromosome's counts.
    """

    def __init__(self, graph: IslandGraph):
        self.graph = graph

    def forced_moves(self) -> Dict[int, int]:
        """Link index -> count for every link decided by the rules"""
        fixed: Dict[int, int] = {}

        changed = True
        while changed:
            changed = False
            for island in self.graph.islands:
                decided = self._apply_rules(island, fixed)
                if decided:
                    fixed.update(decided)
                    changed = True

        return fixed

    def _apply_rules(self, island: Island, fixed: Dict[int, int]) -> Dict[int, int]:
        open_links: List[int] = []
        remaining = island.value

        for neighbor in island.neighbors:
            index = self.graph.link_index(island.id, neighbor.direction)
            if index in fixed:
                remaining -= fixed[index]
            else:
                open_links.append(index)

        if not open_links or remaining < 0:
            return {}

        if len(open_links) == 1 and 0 < remaining <= MAX_BRIDGES_PER_LINK:
            return {open_links[0]: remaining}
        if remaining == MAX_BRIDGES_PER_LINK * len(open_links):
            return {index: MAX_BRIDGES_PER_LINK for index in open_links}
        if remaining == len(open_links):
            return {index: 1 for index in open_links}
        if remaining == 0:
            return {index: 0 for index in open_links}
        return {}

    def repair(self, chromosome: Chromosome, moves: Dict[int, int] = None) -> Chromosome:
        """Return a copy of the chromosome with the forced moves written in"""
        if moves is None:
            moves = self.forced_moves()

        repaired = chromosome.copy()
        for index, count in moves.items():
            link = self.graph.links[index]
            repaired.set_link(self.graph, link.a, link.direction, count)
        return repaired

    def inject(self, population: Population, count: int, evaluator: FitnessEvaluator) -> int:
        """
        Replace the ``count`` weakest members of a sorted population with
        repaired copies of themselves.

        Returns:
            Number of members replaced
        """
        count = min(count, len(population))
        if count <= 0:
            return 0

        moves = self.forced_moves()
        for position in range(len(population) - count, len(population)):
            repaired = self.repair(population[position].chromosome, moves)
            population[position] = evaluator.score(repaired)

        return count
