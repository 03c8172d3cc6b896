"""Species of interest."""

from __future__ import annotations

from typing import TYPE_CHECKING

from benthic_affinity.datasources.tables import read_table
from benthic_affinity.schemas import SpeciesRecord

if TYPE_CHECKING:
    from pathlib import Path

SPECIES_COLUMN = "species_id"
NAME_COLUMN = "scientific_name"


def load_species_list(path: Path) -> list[SpeciesRecord]:
    """Load the species list, keeping the first row for a repeated identifier.

    ``scientific_name`` is optional; rows with an empty ``species_id`` are skipped.
    """
    frame = read_table(path, required=(SPECIES_COLUMN,))
    frame = frame.dropna(subset=[SPECIES_COLUMN]).drop_duplicates(
        subset=[SPECIES_COLUMN], keep="first"
    )
    if NAME_COLUMN not in frame.columns:
        frame[NAME_COLUMN] = None
    return [
        SpeciesRecord(species_id=species_id, scientific_name=name)
        for species_id, name in zip(frame[SPECIES_COLUMN], frame[NAME_COLUMN], strict=True)
    ]
