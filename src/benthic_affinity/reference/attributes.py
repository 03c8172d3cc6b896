"""Closed habitat attribute schema.

The observation table carries a fixed set of continuous sediment variables
and categorical seabed-classification labels. Each attribute belongs to a
family, which drives the column grouping of the species summary table and
the provenance column of the metadata table.
"""

from __future__ import annotations

from dataclasses import dataclass

# Explicit bucket for observations with no category for an attribute
MISSING_CATEGORY = "NA"

SEDIMENT_SOURCE = "Seabed sediment grain-size layer (point samples, nearest match)"
HABITAT_SOURCE = "EUSeaMap broad-scale seabed habitat map (polygon overlay)"
ABUNDANCE_SOURCE = "Species abundance dataset (grab/core sampling events)"
TRAIT_SOURCE = "Species trait reference (habitat preference flags)"


@dataclass(frozen=True)
class AttributeSpec:
    """One habitat attribute carried by every observation."""

    name: str
    description: str
    source: str
    family: str


CONTINUOUS_ATTRIBUTES: tuple[AttributeSpec, ...] = (
    AttributeSpec(
        "MudPercent", "Mud (<63 um) content of the sediment, %", SEDIMENT_SOURCE, "sediment"
    ),
    AttributeSpec(
        "SandPercent", "Sand (63 um-2 mm) content of the sediment, %", SEDIMENT_SOURCE, "sediment"
    ),
    AttributeSpec(
        "GravelPercent", "Gravel (>2 mm) content of the sediment, %", SEDIMENT_SOURCE, "sediment"
    ),
    AttributeSpec(
        "MeanGrainSize", "Mean grain size of the sediment, um", SEDIMENT_SOURCE, "sediment"
    ),
    AttributeSpec("Depth", "Water depth at the sampling event, m", HABITAT_SOURCE, "physical"),
)

CATEGORICAL_ATTRIBUTES: tuple[AttributeSpec, ...] = (
    AttributeSpec("Folk", "Folk sediment classification", SEDIMENT_SOURCE, "sediment"),
    AttributeSpec("Substrate", "Seabed substrate type", HABITAT_SOURCE, "habitat"),
    AttributeSpec(
        "Biozone",
        "Biological zone (infralittoral, circalittoral, ...)",
        HABITAT_SOURCE,
        "habitat",
    ),
    AttributeSpec("Energy", "Seabed energy class", HABITAT_SOURCE, "habitat"),
    AttributeSpec("EUNIS", "EUNIS habitat classification code", HABITAT_SOURCE, "habitat"),
)

# Column families in presentation order
FAMILY_ORDER: tuple[str, ...] = ("sediment", "physical", "habitat")

CONTINUOUS_NAMES: tuple[str, ...] = tuple(a.name for a in CONTINUOUS_ATTRIBUTES)
CATEGORICAL_NAMES: tuple[str, ...] = tuple(a.name for a in CATEGORICAL_ATTRIBUTES)


def category_column(attribute: str, category: str) -> str:
    """Wide-table column name for one category of a categorical attribute."""
    return f"{attribute}_{category}"


def attribute_spec(name: str) -> AttributeSpec | None:
    """Look up a configured continuous or categorical attribute by name."""
    for spec in CONTINUOUS_ATTRIBUTES + CATEGORICAL_ATTRIBUTES:
        if spec.name == name:
            return spec
    return None


def order_by_family(names: tuple[str, ...] | list[str]) -> list[str]:
    """Sort attribute names into family order, keeping configured order within a family.

    Names that are not part of the configured schema go last, in the order given.
    """
    known: list[tuple[int, int, str]] = []
    unknown: list[str] = []
    configured = CONTINUOUS_ATTRIBUTES + CATEGORICAL_ATTRIBUTES
    for name in names:
        spec = attribute_spec(name)
        if spec is None:
            unknown.append(name)
            continue
        family_rank = (
            FAMILY_ORDER.index(spec.family) if spec.family in FAMILY_ORDER else len(FAMILY_ORDER)
        )
        known.append((family_rank, configured.index(spec), name))
    return [name for _, _, name in sorted(known)] + unknown
