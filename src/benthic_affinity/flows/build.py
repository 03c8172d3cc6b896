"""
Prefect flow for building the static species habitat report.

Renders the derived summary table and event baseline into HTML pages:
an overview page plus one profile page per species.

Run locally:
    python -m benthic_affinity.flows.build
"""

from __future__ import annotations

from datetime import datetime
from pathlib import Path
from typing import Any

from prefect import flow, task

from benthic_affinity.config import get_settings
from benthic_affinity.renderers import render_template
from benthic_affinity.renderers.event_baseline import build_event_baseline_html
from benthic_affinity.renderers.format_utils import species_page_name
from benthic_affinity.renderers.species_index import build_species_index_html
from benthic_affinity.renderers.species_profile import build_species_profile_html
from benthic_affinity.store import DataStore

# Store
store = DataStore(get_settings().data_dir)

# Paths matching what summarize.py writes
SUMMARY_JSON_PATH = Path("derived/species_habitat_summary.json")
BASELINE_JSON_PATH = Path("derived/event_habitat_baseline.json")

REPORT_TITLE = "Benthic species habitat affinity"


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-summary")
def load_summary() -> dict[str, Any] | None:
    """Load the species summary table (columns, rows, metadata) from store."""
    data = store.read(SUMMARY_JSON_PATH)
    if data is None:
        return None
    meta = store.read_meta(SUMMARY_JSON_PATH)
    return {"written_at": meta.get("written_at", ""), **data}


@task(name="load-baseline")
def load_baseline() -> dict[str, Any] | None:
    """Load the event baseline from store."""
    data: dict[str, Any] | None = store.read(BASELINE_JSON_PATH)
    return data


# =============================================================================
# Page tasks and flow
# =============================================================================


def _updated_label(written_at: str) -> str:
    if not written_at:
        return ""
    return datetime.fromisoformat(written_at).strftime("%Y-%m-%d %H:%M UTC")


@task(name="build-index")
def build_index_page(summary: dict[str, Any], baseline: dict[str, Any] | None) -> str:
    """Build the overview page: species table plus event baseline."""
    content = build_species_index_html(summary.get("rows", []), summary.get("columns", []))
    content += build_event_baseline_html(baseline)
    return render_template(
        "base.html.j2",
        title=REPORT_TITLE,
        updated=_updated_label(summary.get("written_at", "")),
        back_link=False,
        content=content,
    )


@task(name="build-species-pages")
def build_species_pages(
    summary: dict[str, Any], baseline: dict[str, Any] | None
) -> dict[str, str]:
    """Build one profile page per species, keyed by file name."""
    columns: list[str] = summary.get("columns", [])
    updated = _updated_label(summary.get("written_at", ""))
    pages: dict[str, str] = {}
    for row in summary.get("rows", []):
        species_id = str(row.get("species_id", ""))
        name = row.get("scientific_name") or species_id
        pages[species_page_name(species_id)] = render_template(
            "base.html.j2",
            title=f"{name} \u2013 habitat profile",
            updated=updated,
            back_link=True,
            content=build_species_profile_html(row, columns, baseline),
        )
    return pages


@task(name="write-site")
def write_site(pages: dict[str, str]) -> Path:
    """Write HTML pages to the site directory."""
    site_dir = store.derived / "site"
    site_dir.mkdir(parents=True, exist_ok=True)
    for file_name, html in pages.items():
        with (site_dir / file_name).open("w") as f:
            f.write(html)
    return site_dir / "index.html"


@flow(name="build-report", log_prints=True)
def build_all() -> dict[str, Any]:
    """
    Build the static habitat report from the derived summaries.

    Run the summarize flow first.
    """
    print("Loading species summary...")
    summary = load_summary()
    if not summary:
        print("No species summary found. Run the summarize flow first.")
        return {"error": "no data"}

    print("Loading event baseline...")
    baseline = load_baseline()
    if not baseline:
        print("Warning: No event baseline found. Building without baseline comparison.")

    print("Building pages...")
    pages = {"index.html": build_index_page(summary, baseline)}
    pages.update(build_species_pages(summary, baseline))

    print("Writing site...")
    output_path = write_site(pages)

    print(f"Report built: {output_path} ({len(pages)} pages)")
    return {"pages": len(pages), "output": str(output_path)}


if __name__ == "__main__":
    result = build_all()
    print(f"Flow complete: {result}")
