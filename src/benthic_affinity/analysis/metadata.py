"""Column metadata for the species habitat summary table.

Every column of the wide summary table gets a human-readable description and
a provenance source. The metadata table is written next to the summary and
must document exactly the same columns, so an undocumented column is an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from benthic_affinity.reference import (
    CATEGORICAL_ATTRIBUTES,
    CONTINUOUS_ATTRIBUTES,
    MISSING_CATEGORY,
    TRAIT_FIELDS,
)
from benthic_affinity.reference.attributes import ABUNDANCE_SOURCE, TRAIT_SOURCE

if TYPE_CHECKING:
    from collections.abc import Sequence

    from benthic_affinity.reference import AttributeSpec, TraitSpec

METADATA_COLUMNS = ["column", "description", "source"]

SPECIES_LIST_SOURCE = "Species list of interest"

_FIXED_COLUMNS: dict[str, tuple[str, str]] = {
    "species_id": ("Species identifier (WoRMS AphiaID)", ABUNDANCE_SOURCE),
    "scientific_name": ("Scientific name of the species", SPECIES_LIST_SOURCE),
    "total_occ": (
        "Number of observations of the species; events matched to two habitat "
        "classes count twice",
        ABUNDANCE_SOURCE,
    ),
    "n_events": ("Number of distinct sampling events with the species", ABUNDANCE_SOURCE),
    "total_abundance": ("Sum of abundance over all observations", ABUNDANCE_SOURCE),
    "mean_abundance": ("Mean abundance per observation", ABUNDANCE_SOURCE),
}


@dataclass(frozen=True)
class ColumnMetadata:
    """One row of the metadata table."""

    column: str
    description: str
    source: str

    def as_row(self) -> dict[str, str]:
        return {"column": self.column, "description": self.description, "source": self.source}


def describe_column(
    column: str,
    continuous: Sequence[AttributeSpec] = CONTINUOUS_ATTRIBUTES,
    categorical: Sequence[AttributeSpec] = CATEGORICAL_ATTRIBUTES,
    trait_fields: Sequence[TraitSpec] = TRAIT_FIELDS,
) -> ColumnMetadata:
    """Describe one summary column.

    Raises:
        ValueError: If the column is not part of the summary schema.
    """
    if column in _FIXED_COLUMNS:
        description, source = _FIXED_COLUMNS[column]
        return ColumnMetadata(column, description, source)

    for spec in continuous:
        if spec.name == column:
            return ColumnMetadata(
                column,
                f"Abundance-weighted mean: {spec.description} "
                "(observations without a value excluded)",
                spec.source,
            )

    for trait in trait_fields:
        if trait.name == column:
            kind = "flag" if trait.is_flag else "category"
            return ColumnMetadata(column, f"Trait {kind}: {trait.description}", TRAIT_SOURCE)

    # Longest prefix wins so "Energy_High" can't match a shorter attribute name
    for spec in sorted(categorical, key=lambda s: len(s.name), reverse=True):
        prefix = f"{spec.name}_"
        if column.startswith(prefix) and len(column) > len(prefix):
            category = column[len(prefix) :]
            if category == MISSING_CATEGORY:
                description = (
                    f"Abundance-weighted share of observations with no value for: "
                    f"{spec.description}"
                )
            else:
                description = (
                    f"Abundance-weighted frequency of {spec.description} = {category}"
                )
            return ColumnMetadata(column, description, spec.source)

    msg = f"Column {column!r} is not documented in the summary schema"
    raise ValueError(msg)


def build_column_metadata(
    columns: Sequence[str],
    continuous: Sequence[AttributeSpec] = CONTINUOUS_ATTRIBUTES,
    categorical: Sequence[AttributeSpec] = CATEGORICAL_ATTRIBUTES,
    trait_fields: Sequence[TraitSpec] = TRAIT_FIELDS,
) -> list[ColumnMetadata]:
    """Build the metadata table for a summary table's columns, in column order."""
    return [describe_column(c, continuous, categorical, trait_fields) for c in columns]
