"""
Application settings.

Values come from ``BENTHIC_``-prefixed environment variables or a local
``.env`` file, falling back to the defaults below.
"""

from __future__ import annotations

from functools import lru_cache
from pathlib import Path

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Runtime configuration for the habitat affinity workflow."""

    model_config = SettingsConfigDict(
        env_prefix="BENTHIC_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "benthic-affinity"
    app_env: str = Field(default="development", description="development or production")
    debug: bool = False

    # --- Data layout ---
    data_dir: Path = Path("data")
    observations_file: str = "observations.csv"
    traits_file: str = "species_traits.csv"
    species_list_file: str = "species_list.csv"

    # --- Report server ---
    serve_port: int = 8000

    @property
    def observations_path(self) -> Path:
        """Prepared observation table, relative to the store base."""
        return Path("prepared") / self.observations_file

    @property
    def traits_path(self) -> Path:
        return Path("reference") / self.traits_file

    @property
    def species_list_path(self) -> Path:
        return Path("reference") / self.species_list_file


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return the process-wide settings, loaded once."""
    return Settings()
