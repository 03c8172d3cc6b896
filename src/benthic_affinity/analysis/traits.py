"""Merge species trait flags into habitat summaries."""

from __future__ import annotations

from dataclasses import replace
from typing import TYPE_CHECKING

from benthic_affinity.reference import TRAIT_NAMES

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping, Sequence

    from benthic_affinity.analysis.models import SpeciesHabitatSummary
    from benthic_affinity.schemas import SpeciesTraits


def index_traits(rows: Iterable[SpeciesTraits]) -> dict[str, SpeciesTraits]:
    """Key trait rows by species id.

    Raises:
        ValueError: If a species has more than one trait row.
    """
    indexed: dict[str, SpeciesTraits] = {}
    for row in rows:
        if row.species_id in indexed:
            msg = f"Duplicate trait row for species {row.species_id}"
            raise ValueError(msg)
        indexed[row.species_id] = row
    return indexed


def merge_traits(
    summary: SpeciesHabitatSummary,
    traits: Mapping[str, SpeciesTraits],
    fields: Sequence[str] = TRAIT_NAMES,
) -> SpeciesHabitatSummary:
    """Attach the species' trait fields to its summary.

    A species without a trait row gets every field set to None. The input
    summary is not modified.
    """
    record = traits.get(summary.species_id)
    values = record.traits if record is not None else {}
    return replace(summary, traits={name: values.get(name) for name in fields})
