"""Bronze ingestion of raw CSV extracts."""

from olympic_dwh.ingest.bronze import BronzeSchemaError, BronzeTables, load_bronze

__all__ = [
    "BronzeSchemaError",
    "BronzeTables",
    "load_bronze",
]
