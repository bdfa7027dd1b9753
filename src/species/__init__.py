"""
Species Evolutionary Population Framework.

This module implements a reusable population manager for evolutionary
algorithms. The caller supplies async strategy functions for seeding,
fitness, breeding and mutation; the population handles selection and
replacement.
"""

from src.species.core.config import (
    PopulationOptions,
    create_default_options,
    create_test_options
)
from src.species.core.population import Population, compare_fitness
from src.species.core.chromosome import Chromosome, ChromosomeLike
from src.species.exceptions import SpeciesError, EmptyPopulationError

__version__ = "1.0.0"

__all__ = [
    # Configuration
    "PopulationOptions",
    "create_default_options",
    "create_test_options",
    # Population
    "Population",
    "compare_fitness",
    # Chromosome
    "Chromosome",
    "ChromosomeLike",
    # Errors
    "SpeciesError",
    "EmptyPopulationError",
]
