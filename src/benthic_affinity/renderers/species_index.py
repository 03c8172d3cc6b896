"""Species overview table renderer.

Ranks species by total abundance and shows each one's dominant category
for every categorical habitat attribute, linking to the profile pages.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from benthic_affinity.reference import CATEGORICAL_NAMES, MISSING_CATEGORY
from benthic_affinity.renderers import render_template
from benthic_affinity.renderers.format_utils import (
    as_float,
    fmt_number,
    fmt_pct,
    species_page_name,
)
from benthic_affinity.renderers.species_profile import category_frequencies

if TYPE_CHECKING:
    from collections.abc import Sequence


def dominant_category(
    row: dict[str, Any], columns: Sequence[str], attribute: str
) -> tuple[str, float] | None:
    """Most abundant non-missing category of an attribute, or None."""
    freqs = category_frequencies(row, columns, attribute)
    freqs.pop(MISSING_CATEGORY, None)
    if not freqs:
        return None
    category = max(freqs, key=lambda c: (freqs[c], c))
    return category, freqs[category]


def build_species_index_html(
    rows: Sequence[dict[str, Any]],
    columns: Sequence[str],
    categorical: Sequence[str] = CATEGORICAL_NAMES,
) -> str:
    """Build the species overview table HTML."""
    if not rows:
        return "<p>No species summaries available.</p>"

    ranked = sorted(rows, key=lambda r: as_float(r.get("total_abundance")) or 0.0, reverse=True)

    species_rows = []
    for row in ranked:
        species_id = str(row.get("species_id", ""))
        dominants = []
        for attribute in categorical:
            found = dominant_category(row, columns, attribute)
            dominants.append(f"{found[0]} ({fmt_pct(found[1])})" if found else "\u2013")
        species_rows.append(
            {
                "species_id": species_id,
                "name": row.get("scientific_name") or species_id,
                "href": species_page_name(species_id),
                "total_occ": fmt_number(row.get("total_occ"), digits=0),
                "total_abundance": fmt_number(row.get("total_abundance")),
                "dominants": dominants,
            }
        )

    return render_template(
        "species_index.html.j2",
        attributes=list(categorical),
        species=species_rows,
    )
