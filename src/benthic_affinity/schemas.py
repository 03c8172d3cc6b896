"""
Domain models for benthic habitat affinity.

Pydantic models for rows of the prepared input tables. These define the
canonical schema - loaders normalize CSV rows to these, and validation
errors surface at load time rather than inside the summarizer.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, field_validator

# =============================================================================
# Observations
# =============================================================================


class Observation(BaseModel):
    """Abundance of one species at one sampling event, with habitat attributes.

    Produced upstream by matching raw abundance records to the sediment and
    seabed-classification layers. An event matched to two habitat polygons
    appears as two observations.
    """

    model_config = {"frozen": True, "str_strip_whitespace": True}

    species_id: str = Field(..., min_length=1, description="Species identifier (AphiaID)")
    event_id: str = Field(..., min_length=1, description="Sampling event identifier")
    abundance: float = Field(..., gt=0, description="Individuals counted at the event")
    continuous: dict[str, float | None] = Field(default_factory=dict)
    categorical: dict[str, str | None] = Field(default_factory=dict)

    @field_validator("categorical")
    @classmethod
    def blank_category_is_missing(cls, value: dict[str, str | None]) -> dict[str, str | None]:
        return {k: (v.strip() or None) if isinstance(v, str) else v for k, v in value.items()}


# =============================================================================
# Species reference
# =============================================================================


class SpeciesRecord(BaseModel):
    """A species of interest from the species list."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    species_id: str = Field(..., min_length=1)
    scientific_name: str | None = None


class SpeciesTraits(BaseModel):
    """Habitat-preference flags for one species from the trait reference."""

    model_config = {"frozen": True, "str_strip_whitespace": True}

    species_id: str = Field(..., min_length=1)
    traits: dict[str, str | bool | None] = Field(default_factory=dict)
