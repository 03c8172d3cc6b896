"""Species abundance observations (prepared upstream).

One row per species per sampling event, already annotated with sediment
grain-size values and seabed-habitat classes by the spatial-matching stage.

Public API:
  - observations: ObservationTable, load_observations
"""

from benthic_affinity.datasources.abundance.observations import (
    ABUNDANCE_COLUMN,
    EVENT_COLUMN,
    SPECIES_COLUMN,
    ObservationTable,
    load_observations,
)

__all__ = [
    "ABUNDANCE_COLUMN",
    "EVENT_COLUMN",
    "SPECIES_COLUMN",
    "ObservationTable",
    "load_observations",
]
