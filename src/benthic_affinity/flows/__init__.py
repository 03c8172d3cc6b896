"""
Prefect flows for the data pipeline.

Flows:
- summarize: Load prepared tables, compute species habitat summaries,
  metadata and the event baseline
- build: Render the derived summaries into a static HTML report

Usage (local):
    python -m benthic_affinity.flows.summarize
    python -m benthic_affinity.flows.build

Usage (Prefect):
    prefect server start  # Optional, for dashboard
    prefect deployment run 'summarize-habitat/default'
"""
