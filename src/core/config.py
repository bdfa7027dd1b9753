"""
Core configuration module for the Species evolutionary toolkit.

This module manages all application settings using Pydantic Settings,
providing type-safe configuration with environment variable support.
"""

from typing import Optional, Dict, Any
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Application settings with environment variable support.

    All settings can be overridden via environment variables or a ``.env`` file.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        # Allow extra fields for forward compatibility
        extra="ignore"
    )

    # Application settings
    app_name: str = "Species"
    debug: bool = Field(default=False)
    environment: str = Field(default="development")
    log_level: str = Field(default="INFO")

    # Logfire settings
    logfire_token: str = Field(default="")
    logfire_service_name: str = Field(default="species-population")
    logfire_environment: str = Field(default="development")
    logfire_send_to_logfire: bool = Field(default=False)
    logfire_console: bool = Field(default=True)

    # Population defaults
    species_population_size: int = Field(default=100)
    species_cull_percentage: float = Field(default=10.0)
    species_minimize_fitness: bool = Field(default=False)
    species_random_seed: Optional[int] = Field(default=None)

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v):
        """Accept log levels in any case."""
        if isinstance(v, str):
            v = v.strip().upper()
            if v not in {"DEBUG", "INFO", "WARNING", "ERROR"}:
                raise ValueError(f"Unknown log level: {v}")
        return v

    @field_validator("species_random_seed", mode="before")
    @classmethod
    def parse_random_seed(cls, v):
        """Treat an empty string as no seed."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    def get_logfire_settings(self) -> Dict[str, Any]:
        """Get Logfire configuration."""
        return {
            "token": self.logfire_token or None,
            "service_name": self.logfire_service_name,
            "environment": self.logfire_environment,
            "send_to_logfire": self.logfire_send_to_logfire and bool(self.logfire_token),
        }

    def get_population_defaults(self) -> Dict[str, Any]:
        """Get default population options as keyword arguments."""
        return {
            "population_size": self.species_population_size,
            "cull_percentage": self.species_cull_percentage,
            "minimize_fitness": self.species_minimize_fitness,
            "random_seed": self.species_random_seed,
        }

    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment.lower() == "production"

    def is_development(self) -> bool:
        """Check if running in development environment."""
        return self.environment.lower() == "development"

    def is_testing(self) -> bool:
        """Check if running in testing environment."""
        return self.environment.lower() == "testing"


# Create global settings instance
settings = Settings()
