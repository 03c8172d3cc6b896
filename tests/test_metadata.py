"""Tests for the summary column metadata table."""

from __future__ import annotations

import pytest

from benthic_affinity.analysis import build_summary_table, summarize_all_species
from benthic_affinity.analysis.metadata import (
    METADATA_COLUMNS,
    build_column_metadata,
    describe_column,
)
from benthic_affinity.reference import (
    CATEGORICAL_NAMES,
    CONTINUOUS_NAMES,
    MISSING_CATEGORY,
    TRAIT_NAMES,
)
from benthic_affinity.reference.attributes import HABITAT_SOURCE, SEDIMENT_SOURCE, TRAIT_SOURCE
from benthic_affinity.schemas import Observation


def _obs(species_id: str, event_id: str, abundance: float, **attrs: object) -> Observation:
    return Observation(
        species_id=species_id,
        event_id=event_id,
        abundance=abundance,
        continuous={name: attrs.get(name) for name in CONTINUOUS_NAMES},  # type: ignore[misc]
        categorical={name: attrs.get(name) for name in CATEGORICAL_NAMES},  # type: ignore[misc]
    )


class TestDescribeColumn:
    """Test describe_column."""

    def test_fixed_column(self) -> None:
        meta = describe_column("total_occ")
        assert meta.column == "total_occ"
        assert "observations" in meta.description.lower()

    def test_continuous_column(self) -> None:
        meta = describe_column("MudPercent")
        assert meta.description.startswith("Abundance-weighted mean")
        assert meta.source == SEDIMENT_SOURCE

    def test_category_column(self) -> None:
        meta = describe_column("Substrate_Sand")
        assert "Sand" in meta.description
        assert meta.source == HABITAT_SOURCE

    def test_category_with_underscore(self) -> None:
        meta = describe_column("EUNIS_A5_2")
        assert meta.description.endswith("= A5_2")

    def test_missing_bucket_column(self) -> None:
        meta = describe_column(f"Folk_{MISSING_CATEGORY}")
        assert "no value" in meta.description
        assert meta.source == SEDIMENT_SOURCE

    def test_trait_column(self) -> None:
        meta = describe_column("prefers_mud")
        assert meta.source == TRAIT_SOURCE
        assert meta.description.startswith("Trait flag")

    def test_unknown_column_rejected(self) -> None:
        with pytest.raises(ValueError, match="not documented"):
            describe_column("Salinity")

    def test_bare_prefix_rejected(self) -> None:
        with pytest.raises(ValueError):
            describe_column("Substrate_")


class TestBuildColumnMetadata:
    """Test that metadata stays in lockstep with the summary table."""

    def test_documents_every_summary_column(self) -> None:
        observations = [
            _obs("1", "A", 3, MudPercent=10.0, Substrate="Sand", Folk="sand", EUNIS="A5.23"),
            _obs("2", "B", 1, Depth=40.0, Substrate="Mud", Biozone="Circalittoral"),
        ]
        summaries = summarize_all_species(observations, traits={})
        table = build_summary_table(summaries)

        metadata = build_column_metadata(table.columns)

        assert [m.column for m in metadata] == table.columns
        assert all(m.description and m.source for m in metadata)
        for name in TRAIT_NAMES:
            assert name in table.columns

    def test_rows_have_three_columns(self) -> None:
        metadata = build_column_metadata(["species_id", "MudPercent"])
        assert [list(m.as_row()) for m in metadata] == [METADATA_COLUMNS, METADATA_COLUMNS]
