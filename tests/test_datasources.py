"""Tests for the prepared-table loaders."""

from __future__ import annotations

from typing import TYPE_CHECKING

import pytest

from benthic_affinity.datasources.abundance import load_observations
from benthic_affinity.datasources.species import load_species_list, load_traits
from benthic_affinity.datasources.tables import numeric_column, parse_flag, read_table
from benthic_affinity.reference import TraitSpec

if TYPE_CHECKING:
    from pathlib import Path

CONTINUOUS = ("MudPercent",)
CATEGORICAL = ("Substrate",)


def write_csv(path: Path, text: str) -> Path:
    path.write_text(text.strip() + "\n")
    return path


class TestReadTable:
    """Test the shared CSV reader."""

    def test_missing_tokens_become_none(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "t.csv", "a,b,c\nNA, ,x\nnan,NULL,\n")
        frame = read_table(path, required=("a", "b"))
        assert frame.to_dict("records") == [
            {"a": None, "b": None, "c": "x"},
            {"a": None, "b": None, "c": None},
        ]

    def test_strips_header_and_cells(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "t.csv", " species_id , name\n 103228 , Spiophanes bombyx \n")
        frame = read_table(path, required=("species_id",))
        assert list(frame.columns) == ["species_id", "name"]
        assert frame.to_dict("records") == [{"species_id": "103228", "name": "Spiophanes bombyx"}]

    def test_missing_column_rejected(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "t.csv", "a\n1\n")
        with pytest.raises(ValueError, match="missing required column.*b"):
            read_table(path, required=("a", "b"))

    def test_header_only(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "t.csv", "a,b\n")
        assert read_table(path, required=("a",)).empty


class TestNumericColumn:
    """Test numeric_column."""

    def test_parses_numbers_and_missing(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "t.csv", "x\n12.5\nNA\n3\n")
        values = numeric_column(read_table(path, ("x",)), "x", path)
        assert values[0] == 12.5
        assert values.isna()[1]
        assert values[2] == 3.0

    def test_rejects_text_with_line(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "t.csv", "MudPercent\n20\ntwelve\n")
        with pytest.raises(ValueError, match=r"t\.csv:3: column 'MudPercent' has non-numeric"):
            numeric_column(read_table(path, ("MudPercent",)), "MudPercent", path)

    def test_rejects_infinity(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "t.csv", "x\ninf\n")
        with pytest.raises(ValueError, match="non-finite"):
            numeric_column(read_table(path, ("x",)), "x", path)


class TestParseFlag:
    """Test parse_flag."""

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("true", True), ("Yes", True), ("1", True), ("false", False), ("N", False), ("0", False)],
    )
    def test_parse_flag(self, raw: str, expected: bool) -> None:
        assert parse_flag(raw, column="x", where="f:1") is expected

    def test_missing_is_none(self) -> None:
        assert parse_flag(None, column="x", where="f:1") is None

    def test_parse_flag_rejects_other(self) -> None:
        with pytest.raises(ValueError, match="non-boolean"):
            parse_flag("maybe", column="x", where="f:1")



class TestLoadObservations:
    """Test load_observations."""

    def test_loads_rows(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "obs.csv",
            """
species_id,event_id,abundance,MudPercent,Substrate
103228,X,5,20,Sand
103228,Y,15,40,Sand
131143,X,2,,NA
""",
        )
        table = load_observations(path, CONTINUOUS, CATEGORICAL)

        assert len(table.observations) == 3
        first = table.observations[0]
        assert first.species_id == "103228"
        assert first.abundance == 5.0
        assert first.continuous == {"MudPercent": 20.0}
        assert first.categorical == {"Substrate": "Sand"}
        last = table.observations[2]
        assert last.continuous == {"MudPercent": None}
        assert last.categorical == {"Substrate": None}
        assert table.species_ids == ["103228", "131143"]
        assert table.event_ids == ["X", "Y"]

    def test_zero_and_empty_abundance_dropped(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "obs.csv",
            """
species_id,event_id,abundance,MudPercent,Substrate
1,A,0,20,Sand
1,B,,20,Sand
1,C,3,20,Sand
""",
        )
        table = load_observations(path, CONTINUOUS, CATEGORICAL)
        assert [o.event_id for o in table.observations] == ["C"]
        assert table.dropped_rows == 2

    def test_duplicate_rows_kept(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "obs.csv",
            """
species_id,event_id,abundance,MudPercent,Substrate
1,A,4,20,Sand
1,A,4,20,Mud
""",
        )
        table = load_observations(path, CONTINUOUS, CATEGORICAL)
        assert len(table.observations) == 2

    def test_malformed_numeric_rejected(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "obs.csv",
            """
species_id,event_id,abundance,MudPercent,Substrate
1,A,4,20,Sand
1,B,4,lots,Sand
""",
        )
        with pytest.raises(ValueError, match=r"obs\.csv:3: column 'MudPercent'"):
            load_observations(path, CONTINUOUS, CATEGORICAL)

    def test_negative_abundance_rejected(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "obs.csv",
            """
species_id,event_id,abundance,MudPercent,Substrate
1,A,-2,20,Sand
""",
        )
        with pytest.raises(ValueError, match="negative abundance"):
            load_observations(path, CONTINUOUS, CATEGORICAL)

    def test_empty_species_rejected(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "obs.csv",
            """
species_id,event_id,abundance,MudPercent,Substrate
,A,2,20,Sand
""",
        )
        with pytest.raises(ValueError, match="invalid observation"):
            load_observations(path, CONTINUOUS, CATEGORICAL)

    def test_missing_column_rejected(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "obs.csv",
            """
species_id,event_id,abundance,Substrate
1,A,2,Sand
""",
        )
        with pytest.raises(ValueError, match="missing required column.*MudPercent"):
            load_observations(path, CONTINUOUS, CATEGORICAL)


class TestLoadSpeciesList:
    """Test load_species_list."""

    def test_loads_and_dedupes(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "species.csv",
            """
species_id,scientific_name
103228,Spiophanes bombyx
131143,
103228,Duplicate
,Nameless
""",
        )
        records = load_species_list(path)
        assert [r.species_id for r in records] == ["103228", "131143"]
        assert records[0].scientific_name == "Spiophanes bombyx"
        assert records[1].scientific_name is None

    def test_name_column_optional(self, tmp_path: Path) -> None:
        path = write_csv(tmp_path / "species.csv", "species_id\n1\n2")
        assert [r.species_id for r in load_species_list(path)] == ["1", "2"]


class TestLoadTraits:
    """Test load_traits."""

    FIELDS = (TraitSpec("prefers_mud", "mud"), TraitSpec("living_habit", "habit", is_flag=False))

    def test_parses_flags_and_text(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "traits.csv",
            """
species_id,prefers_mud,living_habit,ignored
103228,yes,tube-dwelling,x
131143,,burrow-dwelling,y
""",
        )
        rows = load_traits(path, self.FIELDS)
        assert rows[0].species_id == "103228"
        assert rows[0].traits == {"prefers_mud": True, "living_habit": "tube-dwelling"}
        assert rows[1].traits == {"prefers_mud": None, "living_habit": "burrow-dwelling"}

    def test_bad_flag_rejected(self, tmp_path: Path) -> None:
        path = write_csv(
            tmp_path / "traits.csv",
            """
species_id,prefers_mud,living_habit
1,sometimes,free-living
""",
        )
        with pytest.raises(ValueError, match="traits.csv:2"):
            load_traits(path, self.FIELDS)
