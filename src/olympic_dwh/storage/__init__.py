"""Storage utilities for raw, gold, and export data."""

from olympic_dwh.storage.parquet_writer import ParquetWriter, read_parquet
from olympic_dwh.storage.paths import PathManager
from olympic_dwh.storage.warehouse import GOLD_TABLES, WarehouseStore

__all__ = [
    "GOLD_TABLES",
    "ParquetWriter",
    "PathManager",
    "WarehouseStore",
    "read_parquet",
]
