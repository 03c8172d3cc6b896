"""Benthic Affinity - abundance-weighted habitat profiles for benthic species.

Architecture::

    reference/     Closed attribute schema (sediment, habitat, trait fields)
    datasources/   Prepared CSV tables (observations, species list, traits)
    store.py       Tiered data directory (prepared → reference → derived)
    analysis/      Habitat summarizer, trait merge, column metadata
    renderers/     Pure data → HTML (species index, profiles, event baseline)
    flows/         Prefect orchestration (summarize writes tables, build renders report)

Data flow: prepared CSVs → datasources (validate) → analysis → store (derived)
→ renderers → derived/site/

Extension points (see each package's docstring for step-by-step guides):
  - New input table:   datasources/__init__.py
  - New analysis:      analysis/__init__.py
  - New report section: renderers/__init__.py
"""

__version__ = "0.1.0"

from benthic_affinity.config import Settings
from benthic_affinity.schemas import Observation

__all__ = ["Observation", "Settings", "__version__"]
