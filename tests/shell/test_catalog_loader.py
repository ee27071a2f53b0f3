"""Tests for the catalog CSV loader.

Uses pytest's tmp_path to write small catalogs to disk.
"""

import pytest

from src.shell.catalog_loader import CatalogLoadError, read_catalog_rows


HEADER = "magnitude,latitude,longitude,depth,time,place\n"


class TestReadCatalogRows:
    """Tests for read_catalog_rows()."""

    def test_reads_rows_as_strings(self, tmp_path):
        path = tmp_path / "quakes.csv"
        path.write_text(HEADER + "5.0,34.05,-118.25,10,1703001600000,Los Angeles\n")

        rows = read_catalog_rows(path)

        assert rows == [{
            "magnitude": "5.0",
            "latitude": "34.05",
            "longitude": "-118.25",
            "depth": "10",
            "time": "1703001600000",
            "place": "Los Angeles",
        }]

    def test_empty_cells_are_empty_strings(self, tmp_path):
        path = tmp_path / "quakes.csv"
        path.write_text(HEADER + "5.0,34.05,-118.25,,1703001600000,\n")

        rows = read_catalog_rows(path)

        assert rows[0]["depth"] == ""
        assert rows[0]["place"] == ""

    def test_skips_blank_lines(self, tmp_path):
        path = tmp_path / "quakes.csv"
        path.write_text(
            HEADER
            + "5.0,34.05,-118.25,10,1703001600000,A\n"
            + "\n"
            + "4.0,34.10,-118.30,8,1703001500000,B\n"
        )

        rows = read_catalog_rows(path)

        assert [r["place"] for r in rows] == ["A", "B"]

    def test_header_only_returns_no_rows(self, tmp_path):
        path = tmp_path / "quakes.csv"
        path.write_text(HEADER)

        assert read_catalog_rows(path) == []

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(CatalogLoadError, match="not found"):
            read_catalog_rows(tmp_path / "missing.csv")

    def test_empty_file_raises(self, tmp_path):
        path = tmp_path / "quakes.csv"
        path.write_text("")

        with pytest.raises(CatalogLoadError, match="empty"):
            read_catalog_rows(path)

    def test_missing_required_column_raises(self, tmp_path):
        path = tmp_path / "quakes.csv"
        path.write_text("magnitude,latitude,longitude\n5.0,34.05,-118.25\n")

        with pytest.raises(CatalogLoadError, match="time"):
            read_catalog_rows(path)

    def test_malformed_csv_raises(self, tmp_path):
        path = tmp_path / "quakes.csv"
        path.write_text(
            HEADER
            + "5.0,34.05,-118.25,10,1703001600000,A\n"
            + "4.0,34.10,-118.30,8,1703001500000,B,extra,cells\n"
        )

        with pytest.raises(CatalogLoadError):
            read_catalog_rows(path)
