"""Tests for Bronze ingestion."""

from pathlib import Path

import polars as pl
import pytest

from olympic_dwh.config import Config
from olympic_dwh.ingest.bronze import (
    BRONZE_COLUMNS,
    BronzeSchemaError,
    conform_columns,
    load_bronze,
    read_raw_csv,
)


class TestReadRawCsv:
    """Tests for read_raw_csv function."""

    def test_all_columns_are_strings(self, tmp_path: Path) -> None:
        """Test that numeric-looking values are not coerced."""
        path = tmp_path / "x.csv"
        path.write_text("a,b\n1,2.5\n007,\n", encoding="utf-8")
        df = read_raw_csv(path)

        assert df.dtypes == [pl.Utf8, pl.Utf8]
        assert df["a"].to_list() == ["1", "007"]

    def test_missing_file(self, tmp_path: Path) -> None:
        """Test that a missing extract raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_raw_csv(tmp_path / "missing.csv")


class TestConformColumns:
    """Tests for conform_columns function."""

    def test_renames_positionally(self) -> None:
        """Test positional renaming."""
        df = pl.DataFrame({"NOC": ["FRA"], "Region": ["France"], "Notes": [None]})
        assert conform_columns(df, "noc_regions").columns == BRONZE_COLUMNS["noc_regions"]

    def test_column_count_mismatch(self) -> None:
        """Test that an unexpected shape raises BronzeSchemaError."""
        df = pl.DataFrame({"NOC": ["FRA"], "Region": ["France"]})
        with pytest.raises(BronzeSchemaError, match="noc_regions"):
            conform_columns(df, "noc_regions")

    def test_populations_keeps_year_headers(self) -> None:
        """Test that only the identifying population columns are renamed."""
        df = pl.DataFrame({"Country Name": ["France"], "Country Code": ["FRA"], "1960": ["1"]})
        assert conform_columns(df, "populations").columns == [
            "country_name",
            "country_code",
            "1960",
        ]

    def test_populations_too_narrow(self) -> None:
        """Test a populations extract without identifying columns."""
        with pytest.raises(BronzeSchemaError):
            conform_columns(pl.DataFrame({"Country Name": ["France"]}), "populations")


class TestLoadBronze:
    """Tests for load_bronze function."""

    def test_loads_all_tables(self, config: Config) -> None:
        """Test loading the sample extracts."""
        bronze = load_bronze(config)

        assert bronze.row_counts() == {
            "bronze_bios": 4,
            "bronze_bios_locs": 4,
            "bronze_noc_regions": 4,
            "bronze_populations": 2,
            "bronze_results": 5,
        }
        assert bronze.results.columns == BRONZE_COLUMNS["results"]

    def test_missing_extract(self, config: Config) -> None:
        """Test that a missing extract fails the load."""
        (config.storage.root / "raw" / "results.csv").unlink()
        with pytest.raises(FileNotFoundError):
            load_bronze(config)

    def test_configured_file_names(self, config: Config) -> None:
        """Test that source file names come from config."""
        raw = config.storage.root / "raw"
        (raw / "bios.csv").rename(raw / "athletes.csv")
        config.sources.bios = "athletes.csv"

        assert len(load_bronze(config).bios) == 4
