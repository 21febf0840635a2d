"""
Genome representation of candidate bridge layouts.

A gene holds the bridges leaving one island, one count per direction.
Packed into a byte, the upper word flags double connections and the lower
word flags single connections, one bit per direction:

    UDRL UDRL
    0100 1011   -> double down, single up, right and left
"""

from dataclasses import dataclass
from enum import IntEnum
from typing import Iterator, List, Optional, Protocol, Sequence

from ..core.puzzle import Direction


BITMASK_BOUNDARY = 4
NIBBLE = 0x0F


class BridgeCount(IntEnum):
    NONE = 0
    SINGLE = 1
    DOUBLE = 2


class RandomSource(Protocol):
    """Subset of ``random.Random`` used by the genetic operators"""

    def random(self) -> float: ...

    def randint(self, a: int, b: int) -> int: ...

    def choices(self, population, weights=None, *, cum_weights=None, k=1) -> list: ...


class Gene:
    """Bridge counts from one island towards its four directions"""

    __slots__ = ('bridges',)

    def __init__(self, bridges: Optional[Sequence[int]] = None):
        if bridges is None:
            self.bridges = [BridgeCount.NONE] * len(Direction)
        else:
            if len(bridges) != len(Direction):
                raise ValueError(f"A gene needs {len(Direction)} directions, got {len(bridges)}")
            self.bridges = [BridgeCount(count) for count in bridges]

    def __getitem__(self, direction: Direction) -> BridgeCount:
        return self.bridges[direction]

    def __setitem__(self, direction: Direction, count: int):
        self.bridges[direction] = BridgeCount(count)

    def to_mask(self) -> int:
        """Pack into one byte: double flags in the upper word, single in the lower"""
        mask = 0
        for direction in Direction:
            count = self.bridges[direction]
            if count == BridgeCount.SINGLE:
                mask |= 1 << direction
            elif count == BridgeCount.DOUBLE:
                mask |= 1 << (direction + BITMASK_BOUNDARY)
        return mask

    @classmethod
    def from_mask(cls, mask: int) -> 'Gene':
        if not 0 <= mask <= 0xFF:
            raise ValueError(f"Gene mask out of range: {mask}")
        singles = mask & NIBBLE
        doubles = mask >> BITMASK_BOUNDARY
        if singles & doubles:
            raise ValueError(f"Gene mask {mask:08b} flags a direction as both single and double")

        gene = cls()
        for direction in Direction:
            if singles >> direction & 1:
                gene[direction] = BridgeCount.SINGLE
            elif doubles >> direction & 1:
                gene[direction] = BridgeCount.DOUBLE
        return gene

    @property
    def connections(self) -> int:
        """Number of bridge-ends, weighting double bits by two"""
        return calc_connections_from_mask(self.to_mask())

    def copy(self) -> 'Gene':
        gene = Gene.__new__(Gene)
        gene.bridges = list(self.bridges)
        return gene

    def __eq__(self, other):
        if isinstance(other, Gene):
            return self.bridges == other.bridges
        return NotImplemented

    def __repr__(self):
        mask = self.to_mask()
        return f"Gene({mask >> BITMASK_BOUNDARY:04b} {mask & NIBBLE:04b})"


def calc_connections_from_mask(mask: int) -> int:
    """Count bridge-ends in a packed gene"""
    total = 0
    for direction in Direction:
        total += (mask >> direction) & 1
        total += 2 * ((mask >> (direction + BITMASK_BOUNDARY)) & 1)
    return total


class Chromosome:
    """One gene per island, index-aligned with the graph's island list"""

    def __init__(self, genes: List[Gene]):
        self.genes = genes

    @classmethod
    def empty(cls, size: int) -> 'Chromosome':
        return cls([Gene() for _ in range(size)])

    @classmethod
    def from_key(cls, key: bytes) -> 'Chromosome':
        return cls([Gene.from_mask(mask) for mask in key])

    def __len__(self):
        return len(self.genes)

    def __getitem__(self, index: int) -> Gene:
        return self.genes[index]

    def __iter__(self) -> Iterator[Gene]:
        return iter(self.genes)

    def copy(self) -> 'Chromosome':
        return Chromosome([gene.copy() for gene in self.genes])

    def set_link(self, graph, island_id: int, direction: Direction, count: int):
        """Set the bridges of a link on both of its islands"""
        neighbor = graph.neighbor(island_id, direction)
        if neighbor is None:
            raise ValueError(f"Island {island_id} has no neighbor {direction.name}")
        self.genes[island_id][direction] = count
        self.genes[neighbor][direction.opposite] = count

    def connections(self, island_id: int) -> int:
        return self.genes[island_id].connections

    def link_counts(self, graph) -> List[int]:
        """Bridge count of every graph link, read from the link's first island"""
        return [int(self.genes[link.a][link.direction]) for link in graph.links]

    def key(self) -> bytes:
        """Packed genes, used to compare chromosomes byte for byte"""
        return bytes(gene.to_mask() for gene in self.genes)

    def __eq__(self, other):
        if isinstance(other, Chromosome):
            return self.genes == other.genes
        return NotImplemented

    def __repr__(self):
        return f"Chromosome({self.key().hex()})"


@dataclass
class ScoredChromosome:
    """A chromosome and how close it is to a solution"""
    fitness: float
    chromosome: Chromosome

    def __repr__(self):
        return f"ScoredChromosome({self.fitness:.4f}, {self.chromosome!r})"


# A population is a collection of scored chromosomes.
Population = List[ScoredChromosome]
