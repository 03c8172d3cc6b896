"""Event baseline renderer: unweighted habitat distribution across events."""

from __future__ import annotations

from typing import Any

from benthic_affinity.reference import MISSING_CATEGORY
from benthic_affinity.renderers import render_template
from benthic_affinity.renderers.category_palette import build_category_palette
from benthic_affinity.renderers.format_utils import bar_width, fmt_number, fmt_pct


def build_event_baseline_html(baseline: dict[str, Any] | None) -> str:
    """Build HTML for the event baseline (as saved by the summarize flow)."""
    if not baseline or not baseline.get("n_rows"):
        return "<p>No sampling event baseline available.</p>"

    means = [
        {"name": name, "value": fmt_number(value)}
        for name, value in baseline.get("continuous", {}).items()
    ]

    panels = []
    for name, freqs in baseline.get("categorical", {}).items():
        palette = build_category_palette(freqs)
        bars = [
            {
                "category": "no value" if category == MISSING_CATEGORY else category,
                "color": palette[category],
                "width": bar_width(freq),
                "pct": fmt_pct(freq),
            }
            for category, freq in sorted(freqs.items(), key=lambda kv: kv[1], reverse=True)
        ]
        panels.append({"name": name, "bars": bars})

    return render_template(
        "event_baseline.html.j2",
        n_events=baseline.get("n_events", 0),
        n_rows=baseline.get("n_rows", 0),
        means=means,
        panels=panels,
    )
