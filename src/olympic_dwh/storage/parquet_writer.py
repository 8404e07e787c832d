"""Parquet writer for Gold tables.

Provides deterministic writing of Arrow tables to Parquet format with:
- Consistent sorting for deterministic output
- Atomic replacement of the target file
- Compression
- Metadata tracking
"""

import os
import tempfile
from pathlib import Path

import polars as pl
import pyarrow as pa
import pyarrow.parquet as pq


class ParquetWriter:
    """Writer for Parquet tables with deterministic output.

    Ensures that rebuilding the same table twice produces identical
    Parquet content by:
    - Sorting data by stable keys (nulls last)
    - Using consistent Parquet writer settings
    - Writing to a temp file and renaming it over the target, so readers
      never see a half-written table

    Example:
        writer = ParquetWriter()
        writer.write(
            table=dim_games.to_arrow(),
            path=Path("data/gold/dim_games.parquet"),
            sort_by=["game_key"],
        )
    """

    def __init__(
        self,
        compression: str = "snappy",
        version: str = "2.6",
    ) -> None:
        """Initialize Parquet writer.

        Args:
            compression: Compression codec (snappy, gzip, brotli, zstd, lz4, none).
            version: Parquet format version (1.0, 2.4, 2.6).
        """
        self.compression = None if compression == "none" else compression
        self.version = version

    def write(
        self,
        table: pa.Table,
        path: Path,
        sort_by: list[str] | None = None,
        metadata: dict[str, str] | None = None,
    ) -> None:
        """Write Arrow table to Parquet file, replacing any existing file.

        Args:
            table: PyArrow table to write.
            path: Path to output Parquet file.
            sort_by: Column names to sort by for deterministic output.
            metadata: Custom metadata to attach to Parquet file.
        """
        path.parent.mkdir(parents=True, exist_ok=True)

        if sort_by:
            table = self._sort_table(table, sort_by)

        if metadata:
            existing_metadata = table.schema.metadata or {}
            combined_metadata = {**existing_metadata, **metadata}
            table = table.replace_schema_metadata(combined_metadata)

        fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.stem}.", suffix=".tmp")
        os.close(fd)
        try:
            pq.write_table(
                table,
                tmp_name,
                compression=self.compression,
                version=self.version,
                write_statistics=True,
                use_dictionary=True,
                store_schema=True,
            )
            os.replace(tmp_name, path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

    def _sort_table(self, table: pa.Table, sort_by: list[str]) -> pa.Table:
        """Sort Arrow table by specified columns, nulls last.

        The sort order is computed in polars over the key columns only; the
        rows are then taken from the original table so its Arrow types are kept.

        Args:
            table: PyArrow table to sort.
            sort_by: Column names to sort by.

        Returns:
            Sorted PyArrow table.
        """
        order = (
            pl.DataFrame(table.select(sort_by))
            .select(pl.arg_sort_by(sort_by, nulls_last=True, maintain_order=True))
            .to_series()
        )
        return table.take(order.to_list())

    @staticmethod
    def count_rows(path: Path) -> int:
        """Count rows in Parquet file.

        Args:
            path: Path to Parquet file.

        Returns:
            Number of rows in file. Returns 0 if file doesn't exist.
        """
        if not path.exists():
            return 0

        metadata = pq.read_metadata(path)
        return int(metadata.num_rows)


def read_parquet(path: Path) -> pa.Table:
    """Read Parquet file into Arrow table.

    Args:
        path: Path to Parquet file.

    Returns:
        PyArrow table.

    Raises:
        FileNotFoundError: If file doesn't exist.
    """
    return pq.read_table(path)
