"""
Tests for the report build flow.
"""

from __future__ import annotations

import json
from typing import TYPE_CHECKING, Any

import pytest

from benthic_affinity.flows import build
from benthic_affinity.store import DataStore

if TYPE_CHECKING:
    from pathlib import Path


def write_envelope(base_dir: Path, path: str, data: object, source: str = "test") -> None:
    """Write test data in the metadata envelope format."""
    full = base_dir / path
    full.parent.mkdir(parents=True, exist_ok=True)
    envelope = {
        "meta": {"source": source, "written_at": "2026-02-04T12:00:00+00:00"},
        "data": data,
    }
    full.write_text(json.dumps(envelope))


SAMPLE_SUMMARY: dict[str, Any] = {
    "columns": [
        "species_id",
        "scientific_name",
        "total_occ",
        "n_events",
        "total_abundance",
        "mean_abundance",
        "MudPercent",
        "Substrate_Sand",
    ],
    "rows": [
        {
            "species_id": "103228",
            "scientific_name": "Spiophanes bombyx",
            "total_occ": 2,
            "n_events": 2,
            "total_abundance": 20.0,
            "mean_abundance": 10.0,
            "MudPercent": 35.0,
            "Substrate_Sand": 1.0,
        },
        {
            "species_id": "999999",
            "scientific_name": "Abra alba",
            "total_occ": 0,
            "n_events": 0,
            "total_abundance": 0.0,
            "mean_abundance": None,
            "MudPercent": None,
            "Substrate_Sand": None,
        },
    ],
    "metadata": [],
}

SAMPLE_BASELINE: dict[str, Any] = {
    "n_events": 2,
    "n_rows": 2,
    "continuous": {"MudPercent": 30.0},
    "categorical": {"Substrate": {"Sand": 1.0}},
}


@pytest.fixture
def store(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> DataStore:
    ds = DataStore(tmp_path)
    monkeypatch.setattr(build, "store", ds)
    return ds


class TestLoadTasks:
    """Test loading derived data."""

    def test_load_summary(self, store: DataStore) -> None:
        write_envelope(store.base, "derived/species_habitat_summary.json", SAMPLE_SUMMARY)
        result = build.load_summary()
        assert result is not None
        assert result["written_at"] == "2026-02-04T12:00:00+00:00"
        assert result["rows"] == SAMPLE_SUMMARY["rows"]

    def test_load_summary_missing(self, store: DataStore) -> None:
        assert build.load_summary() is None

    def test_load_baseline(self, store: DataStore) -> None:
        write_envelope(store.base, "derived/event_habitat_baseline.json", SAMPLE_BASELINE)
        assert build.load_baseline() == SAMPLE_BASELINE


class TestPages:
    """Test page building tasks."""

    def test_index_page(self) -> None:
        summary = {"written_at": "2026-02-04T12:00:00+00:00", **SAMPLE_SUMMARY}
        html = build.build_index_page(summary, SAMPLE_BASELINE)
        assert html.startswith("<!DOCTYPE html>")
        assert "2026-02-04 12:00 UTC" in html
        assert "Spiophanes bombyx" in html
        assert "All sampling events" in html

    def test_species_pages(self) -> None:
        pages = build.build_species_pages(SAMPLE_SUMMARY, SAMPLE_BASELINE)
        assert set(pages) == {"species_103228.html", "species_999999.html"}
        assert "35.0" in pages["species_103228.html"]
        assert "No observations" in pages["species_999999.html"]

    def test_species_pages_keep_ids_that_sanitize_alike(self) -> None:
        first, _ = SAMPLE_SUMMARY["rows"]
        summary = {
            **SAMPLE_SUMMARY,
            "rows": [{**first, "species_id": "a/b"}, {**first, "species_id": "a_b"}],
        }
        pages = build.build_species_pages(summary, SAMPLE_BASELINE)
        assert len(pages) == 2

    def test_write_site(self, store: DataStore) -> None:
        result = build.write_site({"index.html": "<p>index</p>", "species_1.html": "<p>1</p>"})
        assert result == store.derived / "site" / "index.html"
        assert result.read_text() == "<p>index</p>"
        assert (store.derived / "site" / "species_1.html").exists()


class TestBuildAllFlow:
    """Test the main build flow."""

    def test_build_all_no_summary(self, store: DataStore) -> None:
        assert build.build_all() == {"error": "no data"}

    def test_build_all(self, store: DataStore) -> None:
        write_envelope(store.base, "derived/species_habitat_summary.json", SAMPLE_SUMMARY)
        write_envelope(store.base, "derived/event_habitat_baseline.json", SAMPLE_BASELINE)

        result = build.build_all()

        assert result["pages"] == 3
        index = (store.derived / "site" / "index.html").read_text()
        assert 'href="species_103228.html"' in index
