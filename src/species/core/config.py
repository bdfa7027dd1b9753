"""
Species Configuration Module.

This module defines the immutable options a population is created with:
target size, cull percentage and fitness direction.
"""

from decimal import Decimal, ROUND_HALF_UP
from typing import Optional, Dict, Any, Mapping, Union
from pydantic import BaseModel, Field, ConfigDict
import os


class PopulationOptions(BaseModel):
    """Options controlling a single population."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    population_size: int = Field(
        default=100,
        ge=1,
        description="Target number of chromosomes in the population"
    )
    cull_percentage: float = Field(
        default=10,
        ge=0,
        le=100,
        description="Percentage of the population discarded by each cull"
    )
    minimize_fitness: bool = Field(
        default=False,
        description="Whether lower fitness (True) or higher fitness (False) is better"
    )
    random_seed: Optional[int] = Field(
        default=None,
        description="Seed for parent selection and mutation draws"
    )

    def number_to_keep(self, size: int) -> int:
        """Number of members a cull keeps out of ``size``, rounding half up."""
        keep = Decimal(size) * (1 - Decimal(str(self.cull_percentage)) / 100)
        return int(keep.quantize(Decimal(1), rounding=ROUND_HALF_UP))

    @classmethod
    def from_env(cls) -> "PopulationOptions":
        """Create options from environment variables."""
        options = {}

        if pop_size := os.getenv("SPECIES_POPULATION_SIZE"):
            options["population_size"] = int(pop_size)
        if cull := os.getenv("SPECIES_CULL_PERCENTAGE"):
            options["cull_percentage"] = float(cull)
        if minimize := os.getenv("SPECIES_MINIMIZE_FITNESS"):
            options["minimize_fitness"] = minimize.strip().lower() in {"1", "true", "yes", "on"}
        if random_seed := os.getenv("SPECIES_RANDOM_SEED"):
            options["random_seed"] = int(random_seed)

        return cls(**options)

    @classmethod
    def from_settings(cls, settings) -> "PopulationOptions":
        """Create options from application settings."""
        return cls(**settings.get_population_defaults())

    @classmethod
    def coerce(
        cls,
        options: Union["PopulationOptions", Mapping[str, Any], None] = None,
        **overrides: Any
    ) -> "PopulationOptions":
        """Merge supplied options and keyword overrides over the defaults."""
        if isinstance(options, cls):
            values = options.to_dict()
        else:
            values = dict(options or {})
        values.update(overrides)
        return cls(**values)

    def to_dict(self) -> Dict[str, Any]:
        """Convert options to dictionary."""
        return self.model_dump()


def create_default_options() -> PopulationOptions:
    """Create the documented default options (100 members, 10% cull, maximize)."""
    return PopulationOptions()


def create_test_options() -> PopulationOptions:
    """Create options suitable for testing (small and reproducible)."""
    return PopulationOptions(
        population_size=10,
        cull_percentage=20,
        random_seed=42
    )
