"""Gold table store backed by Parquet files.

Every pipeline run drops the Gold tables it owns and rewrites them from
scratch; there is no merge or append path.
"""

import logging
from datetime import UTC, datetime

import polars as pl

from olympic_dwh.config import Config
from olympic_dwh.storage.parquet_writer import ParquetWriter, read_parquet
from olympic_dwh.storage.paths import PathManager

logger = logging.getLogger(__name__)

GOLD_TABLES: tuple[str, ...] = (
    "dim_athletes",
    "dim_nocs",
    "dim_games",
    "dim_sport_events",
    "fact_olympic_results",
)


class WarehouseStore:
    """Reads and writes Gold tables under the configured gold directory."""

    def __init__(self, config: Config) -> None:
        """Initialize the store.

        Args:
            config: Application configuration.
        """
        self.paths = PathManager(config)
        self.writer = ParquetWriter(compression=config.parquet.compression)

    def drop_tables(self, tables: tuple[str, ...] | list[str] = GOLD_TABLES) -> list[str]:
        """Delete the given Gold tables if present.

        Args:
            tables: Table names to drop.

        Returns:
            Names of tables that existed and were removed.
        """
        dropped = []
        for table in tables:
            path = self.paths.gold_path(table)
            if path.exists():
                path.unlink()
                dropped.append(table)
        if dropped:
            logger.info("Dropped %d gold tables: %s", len(dropped), ", ".join(dropped))
        return dropped

    def write_table(
        self,
        table: str,
        df: pl.DataFrame,
        sort_by: list[str] | None = None,
    ) -> int:
        """Write a DataFrame as a Gold table.

        Args:
            table: Gold table name.
            df: Table contents.
            sort_by: Columns to sort by before writing.

        Returns:
            Number of rows written.
        """
        path = self.paths.gold_path(table)
        self.writer.write(
            df.to_arrow(),
            path,
            sort_by=sort_by,
            metadata={
                "layer": "gold",
                "table": table,
                "built_at": datetime.now(UTC).isoformat(),
            },
        )
        logger.debug("Wrote %s: %d rows to %s", table, len(df), path)
        return len(df)

    def read_table(self, table: str) -> pl.DataFrame:
        """Read a Gold table.

        Raises:
            FileNotFoundError: If the table hasn't been built.
        """
        path = self.paths.gold_path(table)
        if not path.exists():
            msg = f"Gold table not found: {path}. Run the pipeline first."
            raise FileNotFoundError(msg)
        return pl.DataFrame(read_parquet(path))

    def table_exists(self, table: str) -> bool:
        """Check whether a Gold table file exists."""
        return self.paths.gold_path(table).exists()

    def row_count(self, table: str) -> int:
        """Row count of a Gold table (0 if missing)."""
        return ParquetWriter.count_rows(self.paths.gold_path(table))

    def read_all(self) -> dict[str, pl.DataFrame]:
        """Read every Gold table.

        Raises:
            FileNotFoundError: If any table is missing.
        """
        return {table: self.read_table(table) for table in GOLD_TABLES}
