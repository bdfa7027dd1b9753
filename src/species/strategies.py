"""
Simple strategy functions for numeric-gene chromosomes.

These are small async building blocks for drivers and tests: a random seed
factory, uniform crossover, single-gene mutation and a constant fitness.
"""

from typing import Awaitable, Callable, Optional, Sequence
import random

from src.species.core.chromosome import Chromosome


def create_random_chromosome(
    keys: Sequence[str] = ("a", "b"),
    low: int = 0,
    high: int = 100,
    rng: Optional[random.Random] = None
) -> Callable[[], Awaitable[Chromosome]]:
    """Build a seed function producing chromosomes with random integer genes."""
    rng = rng or random.Random()

    async def seed() -> Chromosome:
        return Chromosome({key: rng.randint(low, high) for key in keys})

    return seed


async def crossover_chromosomes(
    parent1: Chromosome,
    parent2: Chromosome,
    rng: Optional[random.Random] = None
) -> Chromosome:
    """Uniform crossover: each gene comes from a randomly chosen parent."""
    rng = rng or random
    genes = {}
    for key in sorted(set(parent1.genes) | set(parent2.genes)):
        donor = parent1 if rng.random() < 0.5 else parent2
        if key not in donor.genes:
            donor = parent2 if donor is parent1 else parent1
        genes[key] = donor.genes[key]
    return Chromosome(genes)


async def mutate_chromosome(
    chromosome: Chromosome,
    low: int = 0,
    high: int = 100,
    rng: Optional[random.Random] = None
) -> Chromosome:
    """Replace one randomly chosen gene with a different random integer."""
    rng = rng or random
    if not chromosome.genes or low == high:
        return chromosome.with_genes()

    key = rng.choice(sorted(chromosome.genes))
    old = chromosome.genes[key]
    value = old
    while value == old:
        value = rng.randint(low, high)
    return chromosome.with_genes(**{key: value})


def constant_fitness(value: float) -> Callable[[Chromosome], Awaitable[float]]:
    """Build a fitness function that scores every chromosome as ``value``."""

    async def fitness(chromosome: Chromosome) -> float:
        return value

    return fitness


def gene_sum_fitness() -> Callable[[Chromosome], Awaitable[float]]:
    """Build a fitness function that scores a chromosome by the sum of its genes."""

    async def fitness(chromosome: Chromosome) -> float:
        return float(sum(chromosome.genes.values()))

    return fitness
