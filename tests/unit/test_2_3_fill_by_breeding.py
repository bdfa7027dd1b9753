"""
Unit tests for refilling a population by breeding (Subtask 2.3).

Tests cover:
- Number of breed calls and final size
- No-op when already full
- Sequential breeding and offspring as future parents
- Failure handling and empty-population precondition
"""

import asyncio
from unittest.mock import AsyncMock

import pytest

from src.species import Chromosome, EmptyPopulationError, Population, SpeciesError


class TestFillByBreeding:
    """Test suite for filling a population by breeding."""

    @pytest.mark.asyncio
    async def test_breeds_missing_members(self, breed_func):
        """Test 2 members with target 10 breed exactly 8 times."""
        population = Population(population_size=10)
        population.add_member(Chromosome({"a": 1, "b": 2}))
        population.add_member(Chromosome({"a": 2, "b": 3}))
        breed = AsyncMock(side_effect=breed_func)

        await population.fill_by_breeding(breed)

        assert breed.await_count == 8
        assert population.size == 10

    @pytest.mark.asyncio
    async def test_full_population_is_noop(self, scored_chromosomes):
        """Test nothing is bred when the population is already full."""
        population = Population(population_size=5)
        for member in scored_chromosomes:
            population.add_member(member)
        before = population.members
        breed = AsyncMock()

        result = await population.fill_by_breeding(breed)

        breed.assert_not_awaited()
        assert result is before
        assert population.size == 10

    @pytest.mark.asyncio
    async def test_single_member_breeds_with_itself(self):
        """Test a lone member is selected as both parents."""
        population = Population(population_size=3)
        lone = Chromosome({"a": 1})
        population.add_member(lone)
        pairs = []

        async def breed(parent1, parent2):
            pairs.append((parent1, parent2))
            return Chromosome({"a": 2})

        await population.fill_by_breeding(breed)

        assert population.size == 3
        assert pairs[0] == (lone, lone)

    @pytest.mark.asyncio
    async def test_parents_come_from_current_members(self):
        """Test every parent is a member at the time it is drawn."""
        population = Population(population_size=20, random_seed=3)
        population.add_member(Chromosome({"a": 0}))
        population.add_member(Chromosome({"a": 1}))

        async def breed(parent1, parent2):
            assert parent1 in population.members
            assert parent2 in population.members
            return Chromosome({"a": parent1.get("a") + parent2.get("a")})

        await population.fill_by_breeding(breed)

        assert population.size == 20

    @pytest.mark.asyncio
    async def test_offspring_become_parents(self):
        """Test children bred earlier in the call can be drawn as parents."""
        population = Population(population_size=60, random_seed=11)
        founder = Chromosome({"generation": 0})
        population.add_member(founder)
        parent_generations = []

        async def breed(parent1, parent2):
            parent_generations.append(parent1.get("generation"))
            parent_generations.append(parent2.get("generation"))
            return Chromosome({"generation": 1})

        await population.fill_by_breeding(breed)

        assert 1 in parent_generations

    @pytest.mark.asyncio
    async def test_breeding_is_sequential(self):
        """Test only one breed call is in flight at a time."""
        population = Population(population_size=6)
        population.add_member(Chromosome({"a": 1}))
        in_flight = {"current": 0, "peak": 0}

        async def slow_breed(parent1, parent2):
            in_flight["current"] += 1
            in_flight["peak"] = max(in_flight["peak"], in_flight["current"])
            await asyncio.sleep(0)
            in_flight["current"] -= 1
            return Chromosome({"a": 2})

        await population.fill_by_breeding(slow_breed)

        assert in_flight["peak"] == 1
        assert population.size == 6

    @pytest.mark.asyncio
    async def test_failure_keeps_completed_offspring(self):
        """Test children bred before a failure stay in the population."""
        population = Population(population_size=10)
        population.add_member(Chromosome({"a": 1}))
        calls = {"count": 0}

        async def flaky_breed(parent1, parent2):
            calls["count"] += 1
            if calls["count"] == 4:
                raise RuntimeError("breeding failed")
            return Chromosome({"a": calls["count"]})

        with pytest.raises(RuntimeError, match="breeding failed"):
            await population.fill_by_breeding(flaky_breed)

        assert population.size == 4

    @pytest.mark.asyncio
    async def test_empty_population_raises(self):
        """Test breeding from no members is an explicit error."""
        population = Population(population_size=5)
        breed = AsyncMock()

        with pytest.raises(EmptyPopulationError) as exc_info:
            await population.fill_by_breeding(breed)

        assert isinstance(exc_info.value, SpeciesError)
        assert exc_info.value.operation == "fill_by_breeding"
        breed.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cull_then_fill_restores_size(self, seed_func, breed_func, counting_fitness):
        """Test a cull followed by breeding returns to population_size."""
        population = Population(population_size=10, cull_percentage=30)
        await population.seed(seed_func)
        await population.calculate_fitness(counting_fitness)

        population.cull()
        assert population.size == 7

        await population.fill_by_breeding(breed_func)
        assert population.size == 10
