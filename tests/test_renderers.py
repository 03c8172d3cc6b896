"""Tests for the report renderers."""

from __future__ import annotations

from typing import Any

import pytest

from benthic_affinity.reference import MISSING_CATEGORY
from benthic_affinity.renderers.category_palette import MISSING_COLOR, build_category_palette
from benthic_affinity.renderers.event_baseline import build_event_baseline_html
from benthic_affinity.renderers.format_utils import (
    as_float,
    bar_width,
    fmt_number,
    fmt_pct,
    species_page_name,
)
from benthic_affinity.renderers.species_index import (
    build_species_index_html,
    dominant_category,
)
from benthic_affinity.renderers.species_profile import (
    build_species_profile_html,
    category_frequencies,
)

COLUMNS = [
    "species_id",
    "scientific_name",
    "total_occ",
    "n_events",
    "total_abundance",
    "mean_abundance",
    "MudPercent",
    "Substrate_Mud",
    "Substrate_Sand",
    f"Substrate_{MISSING_CATEGORY}",
    "prefers_mud",
]

ROW: dict[str, Any] = {
    "species_id": "103228",
    "scientific_name": "Spiophanes bombyx",
    "total_occ": 2,
    "n_events": 2,
    "total_abundance": 20.0,
    "mean_abundance": 10.0,
    "MudPercent": 35.0,
    "Substrate_Mud": 0.0,
    "Substrate_Sand": 0.75,
    f"Substrate_{MISSING_CATEGORY}": 0.25,
    "prefers_mud": True,
}

EMPTY_ROW: dict[str, Any] = {
    "species_id": "555",
    "scientific_name": None,
    "total_occ": 0,
    "n_events": 0,
    "total_abundance": 0.0,
    "mean_abundance": None,
    "MudPercent": None,
    "Substrate_Mud": None,
    "Substrate_Sand": None,
    f"Substrate_{MISSING_CATEGORY}": None,
    "prefers_mud": None,
}

BASELINE: dict[str, Any] = {
    "n_events": 4,
    "n_rows": 5,
    "continuous": {"MudPercent": 42.0},
    "categorical": {"Substrate": {"Mud": 0.4, "Sand": 0.6}},
}


class TestFormatUtils:
    """Test number formatting helpers."""

    @pytest.mark.parametrize(
        ("value", "expected"),
        [(None, "\u2013"), ("", "\u2013"), (35.0, "35.0"), ("12.345", "12.3"), ("abc", "abc")],
    )
    def test_fmt_number(self, value: object, expected: str) -> None:
        assert fmt_number(value) == expected

    def test_fmt_number_integer(self) -> None:
        assert fmt_number(3.0, digits=0) == "3"

    def test_fmt_pct(self) -> None:
        assert fmt_pct(0.25) == "25.0%"
        assert fmt_pct(None) == "\u2013"

    def test_bar_width(self) -> None:
        assert bar_width(0.5) == 100
        assert bar_width(None) == 0
        assert bar_width(1.5) == 200

    def test_species_page_name_is_safe(self) -> None:
        assert species_page_name("103228") == "species_103228.html"
        name = species_page_name("a/b c")
        assert name.startswith("species_a_b_c-")
        assert name.endswith(".html")
        assert "/" not in name

    def test_species_page_name_distinct_ids_do_not_collide(self) -> None:
        assert species_page_name("a/b") != species_page_name("a_b")
        assert species_page_name("a_b") == "species_a_b.html"
        assert species_page_name("a/b") == species_page_name("a/b")

    def test_as_float(self) -> None:
        assert as_float("1.5") == 1.5
        assert as_float("") is None
        assert as_float("x") is None


class TestCategoryPalette:
    """Test category color assignment."""

    def test_missing_is_grey(self) -> None:
        palette = build_category_palette(["Sand", MISSING_CATEGORY, "Mud"])
        assert palette[MISSING_CATEGORY] == MISSING_COLOR

    def test_stable_order(self) -> None:
        assert build_category_palette(["Sand", "Mud"]) == build_category_palette(["Mud", "Sand"])


class TestSpeciesProfile:
    """Test the species profile renderer."""

    def test_category_frequencies_skip_zero(self) -> None:
        freqs = category_frequencies(ROW, COLUMNS, "Substrate")
        assert freqs == {"Sand": 0.75, MISSING_CATEGORY: 0.25}

    def test_category_frequencies_from_csv_text(self) -> None:
        row = {"Substrate_Sand": "1.0", "Substrate_Mud": "0.0"}
        assert category_frequencies(row, list(row), "Substrate") == {"Sand": 1.0}

    def test_profile_contents(self) -> None:
        html = build_species_profile_html(ROW, COLUMNS, BASELINE)
        assert "Spiophanes bombyx" in html
        assert "103228" in html
        assert "35.0" in html
        assert "75.0%" in html
        assert "no value" in html
        assert "42.0" in html  # baseline mean
        assert "prefers_mud" in html

    def test_profile_without_baseline(self) -> None:
        html = build_species_profile_html(ROW, COLUMNS)
        assert "Sand" in html

    def test_profile_no_observations(self) -> None:
        html = build_species_profile_html(EMPTY_ROW, COLUMNS, BASELINE)
        assert "No observations" in html
        assert "555" in html


class TestSpeciesIndex:
    """Test the species overview renderer."""

    def test_dominant_category_ignores_missing(self) -> None:
        row = {"Substrate_Sand": 0.3, f"Substrate_{MISSING_CATEGORY}": 0.7}
        assert dominant_category(row, list(row), "Substrate") == ("Sand", 0.3)

    def test_dominant_category_none(self) -> None:
        assert dominant_category(EMPTY_ROW, COLUMNS, "Substrate") is None

    def test_index_ranks_by_abundance(self) -> None:
        html = build_species_index_html([EMPTY_ROW, ROW], COLUMNS, ["Substrate"])
        assert html.index("Spiophanes bombyx") < html.index("species_555.html")
        assert "Sand (75.0%)" in html
        assert 'href="species_103228.html"' in html

    def test_index_empty(self) -> None:
        assert "No species" in build_species_index_html([], COLUMNS)


class TestEventBaseline:
    """Test the event baseline renderer."""

    def test_baseline_contents(self) -> None:
        html = build_event_baseline_html(BASELINE)
        assert "4 events" in html
        assert "60.0%" in html
        assert "42.0" in html

    def test_baseline_missing(self) -> None:
        assert "No sampling event baseline" in build_event_baseline_html(None)
