"""Species abundance observations matched to sediment and habitat layers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

import pandas as pd
from pydantic import ValidationError

from benthic_affinity.datasources.tables import numeric_column, read_table, row_location
from benthic_affinity.reference import CATEGORICAL_NAMES, CONTINUOUS_NAMES
from benthic_affinity.schemas import Observation

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

# Identity columns every observation table must carry
SPECIES_COLUMN = "species_id"
EVENT_COLUMN = "event_id"
ABUNDANCE_COLUMN = "abundance"


@dataclass
class ObservationTable:
    """Validated observations plus a count of rows excluded at load time."""

    observations: list[Observation] = field(default_factory=list)
    dropped_rows: int = 0

    @property
    def species_ids(self) -> list[str]:
        """Distinct species identifiers, in order of first appearance."""
        return list(dict.fromkeys(obs.species_id for obs in self.observations))

    @property
    def event_ids(self) -> list[str]:
        """Distinct sampling event identifiers, in order of first appearance."""
        return list(dict.fromkeys(obs.event_id for obs in self.observations))


def load_observations(
    path: Path,
    continuous: Sequence[str] = CONTINUOUS_NAMES,
    categorical: Sequence[str] = CATEGORICAL_NAMES,
) -> ObservationTable:
    """Load the prepared observation table.

    Rows with an empty or zero abundance are dropped (species not recorded at
    that event). Duplicate rows for one event, from events matched to two
    habitat polygons, are kept as they are.

    Args:
        path: CSV file with ``species_id``, ``event_id``, ``abundance`` and one
            column per configured attribute.
        continuous: Continuous attribute columns to read.
        categorical: Categorical attribute columns to read.

    Returns:
        ObservationTable with the validated observations.

    Raises:
        ValueError: On a missing column, a malformed numeric value, a negative
            abundance, or an empty species/event identifier.
    """
    required = (SPECIES_COLUMN, EVENT_COLUMN, ABUNDANCE_COLUMN, *continuous, *categorical)
    frame = read_table(path, required)
    numbers = pd.DataFrame(
        {name: numeric_column(frame, name, path) for name in (ABUNDANCE_COLUMN, *continuous)},
        index=frame.index,
    )

    abundance = numbers[ABUNDANCE_COLUMN]
    recorded = abundance.notna() & (abundance != 0)
    negative = abundance < 0
    if negative.any():
        index = negative.idxmax()
        msg = f"{row_location(path, index)}: negative abundance {abundance[index]}"
        raise ValueError(msg)

    table = ObservationTable(dropped_rows=int((~recorded).sum()))
    for index in frame.index[recorded]:
        try:
            obs = Observation(
                species_id=frame.at[index, SPECIES_COLUMN],
                event_id=frame.at[index, EVENT_COLUMN],
                abundance=float(abundance[index]),
                continuous={name: _number(numbers.at[index, name]) for name in continuous},
                categorical={name: frame.at[index, name] for name in categorical},
            )
        except ValidationError as e:
            msg = f"{row_location(path, index)}: invalid observation: {e.errors()[0]['msg']}"
            raise ValueError(msg) from e
        table.observations.append(obs)

    return table


def _number(value: float) -> float | None:
    return None if pd.isna(value) else float(value)
