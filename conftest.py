"""
PyTest configuration and fixtures for Species.

This module provides shared test fixtures: settings, chromosomes, reference
strategy functions and a local-only Logfire configuration.
"""

import os
import sys
import random
from typing import List

import pytest

# Add project root to Python path
sys.path.insert(0, os.path.dirname(os.path.abspath(__file__)))

from src.core.config import Settings, settings
from src.core.observability import configure_observability
from src.species import Chromosome
from src.species.strategies import (
    create_random_chromosome,
    crossover_chromosomes,
    mutate_chromosome,
)


# Override settings for testing
settings.environment = "testing"
settings.logfire_environment = "testing"
settings.logfire_send_to_logfire = False
settings.logfire_console = False

configure_observability(settings)


@pytest.fixture
def test_settings() -> Settings:
    """Settings instance isolated from the global one."""
    return Settings(
        environment="testing",
        logfire_environment="testing",
        logfire_send_to_logfire=False,
        logfire_console=False
    )


@pytest.fixture
def rng() -> random.Random:
    """Deterministic random source."""
    return random.Random(1234)


@pytest.fixture
def seed_func(rng):
    """Async seed function producing two-gene chromosomes."""
    return create_random_chromosome(keys=("a", "b"), rng=rng)


@pytest.fixture
def breed_func(rng):
    """Async uniform crossover."""
    async def breed(parent1: Chromosome, parent2: Chromosome) -> Chromosome:
        return await crossover_chromosomes(parent1, parent2, rng=rng)
    return breed


@pytest.fixture
def mutate_func(rng):
    """Async single-gene mutation."""
    async def mutate(chromosome: Chromosome) -> Chromosome:
        return await mutate_chromosome(chromosome, rng=rng)
    return mutate


@pytest.fixture
def scored_chromosomes() -> List[Chromosome]:
    """Chromosomes with fitness 1..10 in ascending order."""
    return [Chromosome({"a": i}, fitness=float(i)) for i in range(1, 11)]


@pytest.fixture
def counting_fitness():
    """Async fitness function returning 1, 2, 3, ... in call order."""
    calls = {"count": 0}

    async def fitness(chromosome: Chromosome) -> float:
        calls["count"] += 1
        return calls["count"]

    fitness.calls = calls
    return fitness
