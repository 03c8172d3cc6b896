"""
Prefect flow for computing species habitat summaries.

Loads the prepared observation table and the species reference tables from
the store, summarizes every species, and writes the wide summary table, its
column metadata and the event baseline to the derived tier.

Run locally:
    python -m benthic_affinity.flows.summarize
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from prefect import flow, task

from benthic_affinity.analysis import (
    build_column_metadata,
    build_summary_table,
    index_traits,
    summarize_all_species,
    summarize_events,
)
from benthic_affinity.analysis.metadata import METADATA_COLUMNS, ColumnMetadata
from benthic_affinity.analysis.models import EventHabitatSummary, SummaryTable
from benthic_affinity.analysis.serialization import (
    EVENT_BASELINE_COLUMNS,
    event_summary_to_dict,
    event_summary_to_rows,
    summary_table_to_dict,
)
from benthic_affinity.config import get_settings
from benthic_affinity.datasources.abundance import ObservationTable, load_observations
from benthic_affinity.datasources.species import load_species_list, load_traits
from benthic_affinity.schemas import SpeciesRecord, SpeciesTraits
from benthic_affinity.store import DataStore

settings = get_settings()
store = DataStore(settings.data_dir)

SOURCE = "benthic-affinity/habitat-summarizer"

# Derived outputs, read back by flows/build.py
SUMMARY_CSV_PATH = Path("derived/species_habitat_summary.csv")
SUMMARY_JSON_PATH = Path("derived/species_habitat_summary.json")
METADATA_CSV_PATH = Path("derived/species_habitat_metadata.csv")
BASELINE_CSV_PATH = Path("derived/event_habitat_baseline.csv")
BASELINE_JSON_PATH = Path("derived/event_habitat_baseline.json")


# =============================================================================
# Data loading tasks
# =============================================================================


@task(name="load-observations")
def load_observation_table() -> ObservationTable | None:
    """Load the prepared observation table, or None if it hasn't been provided."""
    path = store.file_path(settings.observations_path)
    if path is None:
        return None
    return load_observations(path)


@task(name="load-traits")
def load_trait_reference() -> dict[str, SpeciesTraits] | None:
    """Load the species trait reference keyed by species id."""
    path = store.file_path(settings.traits_path)
    if path is None:
        return None
    return index_traits(load_traits(path))


@task(name="load-species-list")
def load_species() -> list[SpeciesRecord] | None:
    """Load the species list of interest."""
    path = store.file_path(settings.species_list_path)
    if path is None:
        return None
    return load_species_list(path)


# =============================================================================
# Summary tasks
# =============================================================================


@task(name="summarize-species")
def compute_species_table(
    table: ObservationTable,
    species: list[SpeciesRecord] | None,
    traits: dict[str, SpeciesTraits],
) -> tuple[SummaryTable, list[ColumnMetadata]]:
    """Summarize every species and union the results into the wide table."""
    summaries = summarize_all_species(table.observations, species, traits=traits)
    summary_table = build_summary_table(summaries)
    return summary_table, build_column_metadata(summary_table.columns)


@task(name="summarize-events")
def compute_event_baseline(table: ObservationTable) -> EventHabitatSummary:
    """Summarize habitat attributes across all sampling events."""
    return summarize_events(table.observations)


@task(name="save-outputs")
def save_outputs(
    summary_table: SummaryTable,
    metadata: list[ColumnMetadata],
    baseline: EventHabitatSummary,
    observations: int = 0,
    dropped_rows: int = 0,
) -> dict[str, str]:
    """Write the summary, metadata and baseline tables to the derived tier."""
    summary_csv = store.write_table(
        SUMMARY_CSV_PATH,
        summary_table.rows,
        summary_table.columns,
        source=SOURCE,
        observations=observations,
        dropped_rows=dropped_rows,
    )
    metadata_csv = store.write_table(
        METADATA_CSV_PATH,
        [m.as_row() for m in metadata],
        METADATA_COLUMNS,
        source=SOURCE,
        describes=str(SUMMARY_CSV_PATH),
    )
    baseline_csv = store.write_table(
        BASELINE_CSV_PATH,
        event_summary_to_rows(baseline),
        EVENT_BASELINE_COLUMNS,
        source=SOURCE,
    )
    store.write(
        SUMMARY_JSON_PATH,
        summary_table_to_dict(summary_table, metadata),
        source=SOURCE,
        observations=observations,
    )
    store.write(BASELINE_JSON_PATH, event_summary_to_dict(baseline), source=SOURCE)
    return {
        "summary": str(summary_csv),
        "metadata": str(metadata_csv),
        "baseline": str(baseline_csv),
    }


@flow(name="summarize-habitat", log_prints=True)
def summarize_all() -> dict[str, Any]:
    """
    Compute species habitat summaries from the prepared data.

    This is the main Prefect flow of the workflow.
    """
    print("Loading observations...")
    table = load_observation_table()
    if table is None:
        print(f"No observation table found at {store.base / settings.observations_path}.")
        return {"error": "no observations"}
    print(
        f"Loaded {len(table.observations)} observations of {len(table.species_ids)} species "
        f"({table.dropped_rows} rows without abundance dropped)"
    )

    print("Loading species list...")
    species = load_species()
    if species is None:
        print("Warning: No species list found. Summarizing every observed species.")

    print("Loading trait reference...")
    traits = load_trait_reference()
    if traits is None:
        print("Warning: No trait reference found. Trait fields will be empty.")
        traits = {}

    print("Summarizing species...")
    summary_table, metadata = compute_species_table(table, species, traits)

    print("Summarizing sampling events...")
    baseline = compute_event_baseline(table)

    print("Writing outputs...")
    outputs = save_outputs(
        summary_table,
        metadata,
        baseline,
        observations=len(table.observations),
        dropped_rows=table.dropped_rows,
    )

    print(f"Summaries written: {outputs['summary']}")
    return {"species": len(summary_table.rows), "events": baseline.n_events, **outputs}


if __name__ == "__main__":
    result = summarize_all()
    print(f"Flow complete: {result}")
