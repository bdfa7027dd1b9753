"""
Species Core Module - Population Engine Components.

This module contains the options, chromosome representation and the
population manager that drives seeding, scoring, culling, breeding and
mutation.
"""

from src.species.core.config import (
    PopulationOptions,
    create_default_options,
    create_test_options
)

from src.species.core.chromosome import (
    Chromosome,
    ChromosomeLike
)

from src.species.core.population import (
    Population,
    compare_fitness
)

__all__ = [
    # Configuration
    "PopulationOptions",
    "create_default_options",
    "create_test_options",

    # Chromosome representation
    "Chromosome",
    "ChromosomeLike",

    # Population management
    "Population",
    "compare_fitness"
]
