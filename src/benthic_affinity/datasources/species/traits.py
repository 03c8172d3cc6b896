"""Species habitat-preference traits from the independent trait reference."""

from __future__ import annotations

from typing import TYPE_CHECKING

from benthic_affinity.datasources.tables import parse_flag, read_table, row_location
from benthic_affinity.reference import TRAIT_FIELDS
from benthic_affinity.schemas import SpeciesTraits

if TYPE_CHECKING:
    from collections.abc import Sequence
    from pathlib import Path

    from benthic_affinity.reference import TraitSpec


def load_traits(path: Path, fields: Sequence[TraitSpec] = TRAIT_FIELDS) -> list[SpeciesTraits]:
    """Load trait rows keyed by ``species_id``.

    Flag fields parse as booleans; other fields are kept as text. Missing cells
    become None. Columns not listed in ``fields`` are ignored.

    Raises:
        ValueError: On a missing column or an unrecognized flag value.
    """
    frame = read_table(path, required=("species_id", *(f.name for f in fields)))
    frame = frame.dropna(subset=["species_id"])

    rows: list[SpeciesTraits] = []
    for index, row in frame.iterrows():
        where = row_location(path, index)
        values: dict[str, str | bool | None] = {}
        for spec in fields:
            raw = row[spec.name]
            if spec.is_flag:
                values[spec.name] = parse_flag(raw, column=spec.name, where=where)
            else:
                values[spec.name] = raw
        rows.append(SpeciesTraits(species_id=row["species_id"], traits=values))
    return rows
