"""
Population Management for Species.

This module manages a generation of chromosomes through seeding, fitness
evaluation, culling, breeding and mutation. Every domain-specific step is
delegated to caller-supplied async strategy functions; the population only
decides which chromosomes are kept, paired and replaced.

Members are held in a tuple. Each operation builds the next tuple in full and
publishes it with a single assignment, so a reader never sees a half-updated
member sequence.
"""

from functools import cmp_to_key
from typing import Any, Awaitable, Callable, Dict, Iterable, List, Mapping, Optional, Tuple, Union
import asyncio
import random
import statistics

import logfire

from src.species.core.chromosome import ChromosomeLike
from src.species.core.config import PopulationOptions
from src.species.exceptions import EmptyPopulationError


SeedFunc = Callable[[], Awaitable[ChromosomeLike]]
FitnessFunc = Callable[[ChromosomeLike], Awaitable[float]]
BreedFunc = Callable[[ChromosomeLike, ChromosomeLike], Awaitable[ChromosomeLike]]
MutateFunc = Callable[[ChromosomeLike], Awaitable[ChromosomeLike]]


async def gather_all(awaitables: Iterable[Awaitable[Any]]) -> List[Any]:
    """
    Run awaitables concurrently and collect their results in order.

    On the first failure the calls still running are cancelled and awaited
    before the exception is re-raised, so nothing keeps running once the
    enclosing operation has failed.
    """
    tasks = [asyncio.ensure_future(awaitable) for awaitable in awaitables]
    try:
        return await asyncio.gather(*tasks)
    except BaseException:
        for task in tasks:
            task.cancel()
        await asyncio.gather(*tasks, return_exceptions=True)
        raise


def compare_fitness(a: Optional[float], b: Optional[float], minimize_fitness: bool = False) -> int:
    """
    Order two fitness values best-first.

    Returns a negative number when ``a`` ranks before ``b``, positive when it
    ranks after and 0 when they are equal. Unset fitness ranks after any set
    fitness.
    """
    if a == b:
        return 0
    if a is None:
        return 1
    if b is None:
        return -1
    if minimize_fitness:
        return 1 if a > b else -1
    return 1 if a < b else -1


class Population:
    """
    Manages a population of chromosomes in the evolutionary algorithm.

    The driver owns the population and calls its operations one at a time;
    there is no internal locking.
    """

    def __init__(
        self,
        options: Union[PopulationOptions, Mapping[str, Any], None] = None,
        **overrides: Any
    ):
        """Initialize an empty population at generation 0."""
        self.options = PopulationOptions.coerce(options, **overrides)
        self.generation = 0
        self._members: Tuple[ChromosomeLike, ...] = ()
        self._random = random.Random(self.options.random_seed)
        self._sort_key = cmp_to_key(self.compare_chromosomes)

    @property
    def members(self) -> Tuple[ChromosomeLike, ...]:
        """Current member snapshot."""
        return self._members

    @property
    def size(self) -> int:
        """Number of current members."""
        return len(self._members)

    def __len__(self) -> int:
        return len(self._members)

    def get_members(self) -> Tuple[ChromosomeLike, ...]:
        """Get the current member snapshot."""
        return self._members

    def compare_chromosomes(self, a: ChromosomeLike, b: ChromosomeLike) -> int:
        """Compare two chromosomes by fitness in the configured direction."""
        return compare_fitness(a.fitness, b.fitness, self.options.minimize_fitness)

    async def seed(self, seed_func: SeedFunc) -> Tuple[ChromosomeLike, ...]:
        """
        Create ``population_size`` chromosomes and append them all at once.

        Every ``seed_func()`` call is issued concurrently. If any call fails the
        exception propagates, the calls still running are cancelled and no
        seeded chromosome is added.

        Returns:
            The newly seeded chromosomes
        """
        count = self.options.population_size
        with logfire.span("Seed population", count=count, existing=self.size):
            try:
                seeded = await gather_all(seed_func() for _ in range(count))
            except Exception as e:
                logfire.error("Seeding failed", error=str(e), error_type=type(e).__name__)
                raise

            self._members = self._members + tuple(seeded)
            logfire.info(f"Seeded {len(seeded)} chromosomes", population_size=self.size)
            return tuple(seeded)

    async def calculate_fitness(self, fitness_func: FitnessFunc) -> Tuple[ChromosomeLike, ...]:
        """
        Score every member concurrently and store the result on the chromosome.

        Not atomic: if one evaluation fails, members whose evaluation already
        finished keep their new fitness. Evaluations still running when the
        failure happens are cancelled.
        """
        members = self._members

        async def evaluate(chromosome: ChromosomeLike) -> ChromosomeLike:
            fitness = await fitness_func(chromosome)
            chromosome.set_fitness(fitness)
            return chromosome

        with logfire.span("Calculate population fitness", size=len(members)):
            try:
                await gather_all(evaluate(member) for member in members)
            except Exception as e:
                logfire.error("Fitness evaluation failed", error=str(e), error_type=type(e).__name__)
                raise

            logfire.debug(f"Evaluated {len(members)} chromosomes", generation=self.generation)
            return members

    def cull(self) -> Tuple[ChromosomeLike, ...]:
        """
        Keep only the fittest members.

        The kept count is ``round(size * (1 - cull_percentage / 100))``. The
        sort is stable so equally fit members keep their relative order.

        Returns:
            The retained members, best first
        """
        members = self._members
        number_to_take = self.options.number_to_keep(len(members))

        with logfire.span("Cull population", size=len(members), keep=number_to_take):
            ranked = sorted(members, key=self._sort_key)
            self._members = tuple(ranked[:number_to_take])
            logfire.debug(
                f"Culled {len(members) - number_to_take} chromosomes",
                population_size=self.size
            )
            return self._members

    async def fill_by_breeding(self, breed_func: BreedFunc) -> Tuple[ChromosomeLike, ...]:
        """
        Breed offspring until the population is back at ``population_size``.

        Parents are drawn uniformly at random with replacement from the current
        members, including offspring bred earlier in the same call. Each
        ``breed_func`` call finishes and its child is appended before the next
        pair is drawn. Children appended before a failure are kept.

        Raises:
            EmptyPopulationError: If breeding is needed but there are no members
        """
        target = self.options.population_size
        if self.size >= target:
            return self._members

        if not self._members:
            raise EmptyPopulationError(
                "Cannot breed from an empty population",
                operation="fill_by_breeding",
                details={"population_size": target}
            )

        with logfire.span("Fill population by breeding", size=self.size, target=target):
            bred = 0
            while self.size < target:
                parent1 = self.get_random_chromosome()
                parent2 = self.get_random_chromosome()
                try:
                    child = await breed_func(parent1, parent2)
                except Exception as e:
                    logfire.error(
                        "Breeding failed",
                        error=str(e),
                        error_type=type(e).__name__,
                        bred=bred
                    )
                    raise
                self.add_member(child)
                bred += 1

            logfire.info(f"Bred {bred} chromosomes", population_size=self.size)
            return self._members

    async def mutate(self, mutate_func: MutateFunc, mutate_chance: float) -> Tuple[ChromosomeLike, ...]:
        """
        Replace each member with ``mutate_func(member)`` with probability ``mutate_chance``.

        All mutations run concurrently. Positional order is preserved and the
        new member tuple is only published once every mutation succeeded; on a
        failure the mutations still running are cancelled.

        Raises:
            ValueError: If ``mutate_chance`` is outside [0, 1]
        """
        if not 0 <= mutate_chance <= 1:
            raise ValueError(f"mutate_chance must be between 0 and 1, got {mutate_chance}")

        members = self._members
        selected = [self._random.random() < mutate_chance for _ in members]

        async def keep(member: ChromosomeLike) -> ChromosomeLike:
            return member

        with logfire.span("Mutate population", size=len(members), mutate_chance=mutate_chance):
            try:
                mutated = await gather_all(
                    mutate_func(member) if chosen else keep(member)
                    for member, chosen in zip(members, selected)
                )
            except Exception as e:
                logfire.error("Mutation failed", error=str(e), error_type=type(e).__name__)
                raise

            self._members = tuple(mutated)
            logfire.debug(f"Mutated {sum(selected)} chromosomes", population_size=self.size)
            return self._members

    def add_member(self, chromosome: ChromosomeLike) -> None:
        """Append a chromosome to the population."""
        self._members = self._members + (chromosome,)

    def get_random_chromosome(self) -> ChromosomeLike:
        """
        Pick one member uniformly at random.

        Raises:
            EmptyPopulationError: If the population has no members
        """
        if not self._members:
            raise EmptyPopulationError(
                "Cannot select from an empty population",
                operation="get_random_chromosome"
            )
        return self._random.choice(self._members)

    def get_fittest_chromosome(self) -> Optional[ChromosomeLike]:
        """Get the best scored member, or None if no member has a fitness yet."""
        scored = [member for member in self._members if member.fitness is not None]
        if not scored:
            return None
        return min(scored, key=self._sort_key)

    def increment_generation(self) -> int:
        """Advance the generation counter by one."""
        self.generation += 1
        return self.generation

    def calculate_statistics(self) -> Dict[str, Any]:
        """Calculate fitness statistics for the scored members."""
        fitnesses = [member.fitness for member in self._members if member.fitness is not None]

        if not fitnesses:
            return {}

        ranked = sorted(fitnesses, reverse=not self.options.minimize_fitness)
        return {
            "generation": self.generation,
            "population_size": self.size,
            "evaluated_count": len(fitnesses),
            "best_fitness": ranked[0],
            "worst_fitness": ranked[-1],
            "avg_fitness": statistics.mean(fitnesses),
            "median_fitness": statistics.median(fitnesses),
            "fitness_std": statistics.stdev(fitnesses) if len(fitnesses) > 1 else 0
        }

    def __repr__(self) -> str:
        return (
            f"Population(generation={self.generation}, size={self.size}, "
            f"population_size={self.options.population_size})"
        )
