"""Species trait fields from the independent trait reference."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TraitSpec:
    """One trait column merged into the species summary."""

    name: str
    description: str
    is_flag: bool = True


TRAIT_FIELDS: tuple[TraitSpec, ...] = (
    TraitSpec("prefers_mud", "Reported to prefer muddy sediments"),
    TraitSpec("prefers_sand", "Reported to prefer sandy sediments"),
    TraitSpec("prefers_gravel", "Reported to prefer gravelly sediments"),
    TraitSpec("prefers_rock", "Reported to prefer rock or hard substrata"),
    TraitSpec(
        "living_habit",
        "Living habit (burrow-dwelling, tube-dwelling, free-living, attached)",
        is_flag=False,
    ),
)

TRAIT_NAMES: tuple[str, ...] = tuple(t.name for t in TRAIT_FIELDS)
