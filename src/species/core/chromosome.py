"""
Chromosome Representation for Species.

The population engine treats chromosomes as opaque handles that expose a
settable fitness. This module provides the protocol the engine relies on and
a reference chromosome holding a read-only mapping of genes.
"""

from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Protocol, runtime_checkable
import copy
import uuid


@runtime_checkable
class ChromosomeLike(Protocol):
    """Anything the population can score: a ``fitness`` value and a setter."""

    fitness: Optional[float]

    def set_fitness(self, fitness: float) -> None:
        ...


class Chromosome:
    """
    A candidate solution carrying gene data and a fitness score.

    Genes are stored as a read-only mapping; use :meth:`with_genes` to derive
    a changed chromosome. Fitness is unset (``None``) until scored.
    """

    def __init__(self, genes: Optional[Mapping[str, Any]] = None, fitness: Optional[float] = None):
        self._genes: Dict[str, Any] = dict(genes or {})
        self.fitness = fitness
        self.chromosome_id: str = uuid.uuid4().hex[:16]

    @property
    def genes(self) -> Mapping[str, Any]:
        """Read-only view of the gene data."""
        return MappingProxyType(self._genes)

    def get(self, key: str, default: Any = None) -> Any:
        """Get a single gene value."""
        return self._genes.get(key, default)

    def set_fitness(self, fitness: float) -> None:
        """Record the fitness computed for this chromosome."""
        self.fitness = fitness

    def with_genes(self, **changes: Any) -> "Chromosome":
        """Create a new, unscored chromosome with some genes replaced."""
        genes = dict(self._genes)
        genes.update(changes)
        return Chromosome(genes)

    def clone(self) -> "Chromosome":
        """Create a copy with the same genes and fitness but a new id."""
        return Chromosome(copy.deepcopy(self._genes), fitness=self.fitness)

    def to_dict(self) -> Dict[str, Any]:
        """Convert chromosome to dictionary representation."""
        return {
            "chromosome_id": self.chromosome_id,
            "genes": copy.deepcopy(self._genes),
            "fitness": self.fitness
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Chromosome":
        """Create chromosome from dictionary representation."""
        chromosome = cls(data.get("genes", {}), fitness=data.get("fitness"))
        if "chromosome_id" in data:
            chromosome.chromosome_id = data["chromosome_id"]
        return chromosome

    def __repr__(self) -> str:
        return f"Chromosome(id={self.chromosome_id}, genes={self._genes!r}, fitness={self.fitness!r})"
