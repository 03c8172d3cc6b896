"""Species habitat profile renderer.

One page section per species: abundance counts, abundance-weighted sediment
means next to the event baseline, a frequency-bar panel per categorical
habitat attribute, and the merged trait flags.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from benthic_affinity.reference import (
    CATEGORICAL_ATTRIBUTES,
    CONTINUOUS_ATTRIBUTES,
    MISSING_CATEGORY,
    TRAIT_FIELDS,
)
from benthic_affinity.renderers import render_template
from benthic_affinity.renderers.category_palette import build_category_palette
from benthic_affinity.renderers.format_utils import as_float, bar_width, fmt_number, fmt_pct

if TYPE_CHECKING:
    from collections.abc import Sequence

    from benthic_affinity.reference import AttributeSpec, TraitSpec


def category_frequencies(
    row: dict[str, Any], columns: Sequence[str], attribute: str
) -> dict[str, float]:
    """Pull one attribute's non-zero category frequencies out of a wide row."""
    prefix = f"{attribute}_"
    freqs: dict[str, float] = {}
    for column in columns:
        if not column.startswith(prefix):
            continue
        value = as_float(row.get(column))
        if value:
            freqs[column[len(prefix) :]] = value
    return freqs


def _trait_display(value: object) -> str:
    if value is None or value == "":
        return "unknown"
    if value is True or value in ("True", "true"):
        return "yes"
    if value is False or value in ("False", "false"):
        return "no"
    return str(value)


def build_species_profile_html(
    row: dict[str, Any],
    columns: Sequence[str],
    baseline: dict[str, Any] | None = None,
    continuous: Sequence[AttributeSpec] = CONTINUOUS_ATTRIBUTES,
    categorical: Sequence[AttributeSpec] = CATEGORICAL_ATTRIBUTES,
    trait_fields: Sequence[TraitSpec] = TRAIT_FIELDS,
) -> str:
    """Build the habitat profile HTML for one species.

    Args:
        row: One row of the wide summary table (from the summary JSON or CSV).
        columns: Column names of the summary table.
        baseline: Event baseline dict (``continuous``/``categorical`` keys),
            shown alongside the species values when given.
        continuous: Continuous attributes to show.
        categorical: Categorical attributes to show.
        trait_fields: Trait fields to show.

    Returns:
        Rendered HTML fragment.
    """
    species_id = str(row.get("species_id", ""))
    name = row.get("scientific_name") or species_id
    total_occ = int(as_float(row.get("total_occ")) or 0)

    if total_occ == 0:
        return render_template(
            "species_profile.html.j2",
            species_id=species_id,
            name=name,
            has_observations=False,
        )

    base_means: dict[str, Any] = (baseline or {}).get("continuous", {})
    base_freqs: dict[str, dict[str, float]] = (baseline or {}).get("categorical", {})

    means = [
        {
            "name": spec.name,
            "description": spec.description,
            "value": fmt_number(row.get(spec.name)),
            "baseline": fmt_number(base_means.get(spec.name)),
        }
        for spec in continuous
        if spec.name in columns
    ]

    panels = []
    for spec in categorical:
        freqs = category_frequencies(row, columns, spec.name)
        reference = base_freqs.get(spec.name, {})
        palette = build_category_palette([*freqs, *reference])
        bars = [
            {
                "category": "no value" if category == MISSING_CATEGORY else category,
                "color": palette[category],
                "width": bar_width(freq),
                "pct": fmt_pct(freq),
                "baseline_pct": fmt_pct(reference.get(category, 0.0)),
            }
            for category, freq in sorted(freqs.items(), key=lambda kv: kv[1], reverse=True)
        ]
        panels.append({"name": spec.name, "description": spec.description, "bars": bars})

    traits = [
        {"name": t.name, "description": t.description, "value": _trait_display(row.get(t.name))}
        for t in trait_fields
        if t.name in columns
    ]

    return render_template(
        "species_profile.html.j2",
        species_id=species_id,
        name=name,
        has_observations=True,
        total_occ=total_occ,
        n_events=int(as_float(row.get("n_events")) or 0),
        total_abundance=fmt_number(row.get("total_abundance")),
        mean_abundance=fmt_number(row.get("mean_abundance")),
        means=means,
        panels=panels,
        traits=traits,
    )
