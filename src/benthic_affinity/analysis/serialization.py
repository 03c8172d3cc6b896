"""JSON/CSV serialization helpers for habitat summaries."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from benthic_affinity.analysis.metadata import ColumnMetadata
    from benthic_affinity.analysis.models import EventHabitatSummary, SummaryTable

EVENT_BASELINE_COLUMNS = ["kind", "attribute", "category", "value"]


def summary_table_to_dict(
    table: SummaryTable,
    metadata: list[ColumnMetadata],
) -> dict[str, Any]:
    """Serialize the wide summary table and its metadata to a JSON-compatible dict.

    Args:
        table: Dense species summary table.
        metadata: Column metadata, one entry per table column.

    Returns:
        Dict with columns, rows and metadata entries.
    """
    return {
        "columns": list(table.columns),
        "rows": [dict(row) for row in table.rows],
        "metadata": [m.as_row() for m in metadata],
    }


def event_summary_to_dict(summary: EventHabitatSummary) -> dict[str, Any]:
    """Serialize the event baseline to a JSON-compatible dict."""
    return asdict(summary)


def event_summary_to_rows(summary: EventHabitatSummary) -> list[dict[str, Any]]:
    """Flatten the event baseline into a long table.

    One ``count`` row per counter, one ``mean`` row per continuous attribute
    and one ``frequency`` row per observed category.
    """
    rows: list[dict[str, Any]] = [
        {"kind": "count", "attribute": "n_events", "category": "", "value": summary.n_events},
        {"kind": "count", "attribute": "n_rows", "category": "", "value": summary.n_rows},
    ]
    for name, mean in summary.continuous.items():
        rows.append({"kind": "mean", "attribute": name, "category": "", "value": mean})
    for name, freqs in summary.categorical.items():
        for category, freq in freqs.items():
            rows.append(
                {"kind": "frequency", "attribute": name, "category": category, "value": freq}
            )
    return rows
