"""Habitat summaries: the domain logic layer.

Each module turns validated observations (and optional species traits) into
structures that the flows can store and the renderers can consume directly.

Dependency rule: analysis/ imports from schemas and reference only.
It never reads files and never produces HTML.

Modules:
  - habitat_summary: observations -> per-species weighted profiles,
    event baseline, dense wide table
  - traits: trait reference rows -> merged trait fields
  - metadata: wide-table columns -> column/description/source table
  - serialization: summaries -> JSON/CSV-ready dicts

Adding an analysis module
-------------------------
1. Create ``analysis/{name}.py`` with a pure function::

       from benthic_affinity.schemas import Observation

       def summarize_something(
           observations: list[Observation],
       ) -> dict[str, SomeProfile]:
           ...

2. Rules:
   - Take validated models (never call loaders here).
   - No I/O, no Prefect decorators.
   - Return dataclasses or dicts that renderers can consume.

3. Wire into the pipeline (see ``flows/summarize.py``).

4. Re-export in ``__init__.py`` and add tests in ``tests/test_{name}.py``.
"""

from benthic_affinity.analysis.habitat_summary import (
    HabitatAccumulator,
    accumulate_by_species,
    build_summary_table,
    empty_summary,
    summarize_all_species,
    summarize_events,
    summarize_species,
)
from benthic_affinity.analysis.metadata import ColumnMetadata, build_column_metadata
from benthic_affinity.analysis.models import (
    EventHabitatSummary,
    SpeciesHabitatSummary,
    SummaryTable,
)
from benthic_affinity.analysis.traits import index_traits, merge_traits

__all__ = [
    "ColumnMetadata",
    "EventHabitatSummary",
    "HabitatAccumulator",
    "SpeciesHabitatSummary",
    "SummaryTable",
    "accumulate_by_species",
    "build_column_metadata",
    "build_summary_table",
    "empty_summary",
    "index_traits",
    "merge_traits",
    "summarize_all_species",
    "summarize_events",
    "summarize_species",
]
