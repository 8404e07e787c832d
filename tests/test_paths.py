"""Tests for path management and the Gold table store."""

from pathlib import Path

import polars as pl
import pytest

from olympic_dwh.config import Config
from olympic_dwh.storage.paths import PathManager
from olympic_dwh.storage.warehouse import GOLD_TABLES, WarehouseStore


@pytest.fixture
def path_manager() -> PathManager:
    """Create a path manager with test config."""
    config = Config.model_validate(
        {
            "storage": {"root": "/tmp/test-data", "raw_dir": "extracts"},
            "sources": {"results": "olympic_results.csv"},
        }
    )
    return PathManager(config)


class TestPathManagerRoots:
    """Tests for root path generation."""

    def test_raw_root(self, path_manager: PathManager) -> None:
        """Test raw root path generation."""
        assert path_manager.raw_root == Path("/tmp/test-data/extracts")

    def test_gold_root(self, path_manager: PathManager) -> None:
        """Test gold root path generation."""
        assert path_manager.gold_root == Path("/tmp/test-data/gold")

    def test_exports_root(self, path_manager: PathManager) -> None:
        """Test exports root path generation."""
        assert path_manager.exports_root == Path("/tmp/test-data/exports")


class TestPathManagerFiles:
    """Tests for file path generation."""

    def test_raw_path(self, path_manager: PathManager) -> None:
        """Test raw extract paths use configured file names."""
        assert path_manager.raw_path("bios") == Path("/tmp/test-data/extracts/bios.csv")
        assert path_manager.raw_path("results") == Path(
            "/tmp/test-data/extracts/olympic_results.csv"
        )

    def test_gold_path(self, path_manager: PathManager) -> None:
        """Test Gold table paths."""
        assert path_manager.gold_path("dim_games") == Path("/tmp/test-data/gold/dim_games.parquet")

    def test_export_path(self, path_manager: PathManager) -> None:
        """Test exported view paths."""
        assert path_manager.export_path("vw_kpi_overview") == Path(
            "/tmp/test-data/exports/vw_kpi_overview.csv"
        )

    def test_ensure_directories(self, tmp_path: Path) -> None:
        """Test directory creation."""
        paths = PathManager(Config.model_validate({"storage": {"root": str(tmp_path)}}))

        paths.ensure_directories()

        assert paths.gold_root.is_dir()
        assert paths.exports_root.is_dir()


class TestWarehouseStore:
    """Tests for WarehouseStore."""

    @pytest.fixture
    def store(self, tmp_path: Path) -> WarehouseStore:
        """Store rooted in a temp directory."""
        return WarehouseStore(Config.model_validate({"storage": {"root": str(tmp_path)}}))

    def test_write_and_read_table(self, store: WarehouseStore) -> None:
        """Test a Gold table round trip preserves types and sort order."""
        df = pl.DataFrame({"game_key": [2, 1], "olympic_year": [1968, 1964]})

        assert store.write_table("dim_games", df, sort_by=["game_key"]) == 2

        result = store.read_table("dim_games")
        assert result["game_key"].to_list() == [1, 2]
        assert result.schema["olympic_year"] == pl.Int64

    def test_read_table_keeps_narrow_types(self, store: WarehouseStore) -> None:
        """Test that a sorted Gold table with nulls reads back with its written types."""
        df = pl.DataFrame(
            {"athlete_key": [3, None, 1], "place": [2, 1, None]},
            schema={"athlete_key": pl.Int64, "place": pl.Int32},
        )

        store.write_table("fact_olympic_results", df, sort_by=["athlete_key", "place"])

        result = store.read_table("fact_olympic_results")
        assert result.schema["place"] == pl.Int32
        assert result["athlete_key"].to_list() == [1, 3, None]
        assert result["place"].to_list() == [None, 2, 1]

    def test_read_missing_table(self, store: WarehouseStore) -> None:
        """Test that reading an unbuilt table fails clearly."""
        with pytest.raises(FileNotFoundError, match="Run the pipeline first"):
            store.read_table("dim_nocs")

    def test_table_exists_and_row_count(self, store: WarehouseStore) -> None:
        """Test existence and row count helpers."""
        assert not store.table_exists("dim_nocs")
        assert store.row_count("dim_nocs") == 0

        store.write_table("dim_nocs", pl.DataFrame({"noc_key": [1, 2, 3]}))

        assert store.table_exists("dim_nocs")
        assert store.row_count("dim_nocs") == 3

    def test_drop_tables(self, store: WarehouseStore) -> None:
        """Test that only existing tables are reported as dropped."""
        store.write_table("dim_nocs", pl.DataFrame({"noc_key": [1]}))
        store.write_table("dim_games", pl.DataFrame({"game_key": [1]}))

        dropped = store.drop_tables()

        assert dropped == ["dim_nocs", "dim_games"]
        assert not any(store.table_exists(t) for t in GOLD_TABLES)

    def test_read_all_requires_every_table(self, store: WarehouseStore) -> None:
        """Test that read_all fails if any table is missing."""
        store.write_table("dim_nocs", pl.DataFrame({"noc_key": [1]}))

        with pytest.raises(FileNotFoundError):
            store.read_all()
