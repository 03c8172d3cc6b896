"""Habitat summary data models."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class SpeciesHabitatSummary:
    """Abundance-weighted habitat profile of one species.

    ``categorical`` is sparse: only categories observed for this species are
    present, including the explicit missing bucket when some observations
    had no value. A species with no observations has zero counts, None
    continuous means and empty category mappings.
    """

    species_id: str
    scientific_name: str | None = None
    total_occ: int = 0
    n_events: int = 0
    total_abundance: float = 0.0
    mean_abundance: float | None = None
    continuous: dict[str, float | None] = field(default_factory=dict)
    categorical: dict[str, dict[str, float]] = field(default_factory=dict)
    traits: dict[str, str | bool | None] = field(default_factory=dict)

    @property
    def has_observations(self) -> bool:
        return self.total_occ > 0

    def frequency(self, attribute: str, category: str) -> float:
        """Weighted frequency of one category, 0.0 if never observed."""
        return self.categorical.get(attribute, {}).get(category, 0.0)


@dataclass
class EventHabitatSummary:
    """Unweighted habitat distribution across all sampling events.

    The population baseline that species profiles are compared against.
    """

    n_events: int = 0
    n_rows: int = 0
    continuous: dict[str, float | None] = field(default_factory=dict)
    categorical: dict[str, dict[str, float]] = field(default_factory=dict)


@dataclass
class SummaryTable:
    """Dense wide table: one row per species, a fixed ordered column set."""

    columns: list[str] = field(default_factory=list)
    rows: list[dict[str, object]] = field(default_factory=list)

    def row_for(self, species_id: str) -> dict[str, object] | None:
        """Return the row for a species, or None if it isn't in the table."""
        for row in self.rows:
            if row.get("species_id") == species_id:
                return row
        return None
