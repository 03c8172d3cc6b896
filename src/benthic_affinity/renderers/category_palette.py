"""Category colors for frequency bars.

Shared by the species profile and event baseline renderers so a category
has the same color on every page.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from benthic_affinity.reference import MISSING_CATEGORY

if TYPE_CHECKING:
    from collections.abc import Iterable

MISSING_COLOR = "#bbbbbb"

_CATEGORY_COLORS = [
    "#4363d8",  # blue
    "#f58231",  # orange
    "#3cb44b",  # green
    "#e6194b",  # red
    "#911eb4",  # purple
    "#42d4f4",  # cyan
    "#9a6324",  # brown
    "#469990",  # teal
    "#f032e6",  # magenta
    "#808000",  # olive
    "#dcbeff",  # lavender
    "#ffe119",  # yellow
]


def build_category_palette(categories: Iterable[str]) -> dict[str, str]:
    """Assign a color to each category, in sorted order; missing is always grey."""
    palette: dict[str, str] = {}
    ranked = sorted(c for c in set(categories) if c != MISSING_CATEGORY)
    for i, category in enumerate(ranked):
        palette[category] = _CATEGORY_COLORS[i % len(_CATEGORY_COLORS)]
    palette[MISSING_CATEGORY] = MISSING_COLOR
    return palette
