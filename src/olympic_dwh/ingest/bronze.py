"""Bronze layer ingestion.

Loads the five raw CSV extracts as all-string polars DataFrames. Columns are
renamed positionally to the Bronze column names so that downstream code does
not depend on the source headers ("Unnamed: 7", "As", ...). No type coercion
or cleanup happens here.
"""

import logging
from dataclasses import dataclass
from pathlib import Path

import polars as pl

from olympic_dwh.config import Config
from olympic_dwh.storage.paths import PathManager

logger = logging.getLogger(__name__)

BRONZE_COLUMNS: dict[str, list[str]] = {
    "bios": [
        "roles",
        "sex",
        "full_name",
        "used_name",
        "born",
        "died",
        "noc",
        "athlete_id",
        "measurements",
        "affiliations",
        "nick_petnames",
        "titles",
        "other_names",
        "nationality",
        "original_name",
        "name_order",
    ],
    "bios_locs": [
        "athlete_id",
        "name",
        "born_date",
        "born_city",
        "born_region",
        "born_country",
        "noc",
        "height_cm",
        "weight_kg",
        "died_date",
        "lat",
        "long",
    ],
    "noc_regions": ["noc", "region", "notes"],
    "results": [
        "games",
        "sport_event",
        "team",
        "pos",
        "medal",
        "as_name",
        "athlete_id",
        "noc",
        "discipline",
        "nationality",
        "unnamed_7",
    ],
}

# Populations is wide: the two identifying columns, then one column per year.
POPULATION_ID_COLUMNS: list[str] = ["country_name", "country_code"]

BRONZE_TABLES: tuple[str, ...] = ("bios", "bios_locs", "noc_regions", "populations", "results")


class BronzeSchemaError(Exception):
    """Raised when a raw extract does not have the expected shape."""


@dataclass
class BronzeTables:
    """Raw extracts, one all-string DataFrame per source."""

    bios: pl.DataFrame
    bios_locs: pl.DataFrame
    noc_regions: pl.DataFrame
    populations: pl.DataFrame
    results: pl.DataFrame

    def row_counts(self) -> dict[str, int]:
        """Row count per Bronze table."""
        return {f"bronze_{name}": len(getattr(self, name)) for name in BRONZE_TABLES}


def read_raw_csv(path: Path, encoding: str = "utf8") -> pl.DataFrame:
    """Read a CSV file with every column as a string.

    Args:
        path: CSV file path.
        encoding: polars CSV encoding ("utf8" or "utf8-lossy").

    Returns:
        DataFrame with String columns.

    Raises:
        FileNotFoundError: If the file doesn't exist.
    """
    if not path.exists():
        msg = f"Raw file not found: {path}"
        raise FileNotFoundError(msg)

    return pl.read_csv(path, infer_schema_length=0, encoding=encoding)


def conform_columns(df: pl.DataFrame, table: str) -> pl.DataFrame:
    """Rename columns positionally to the Bronze names for a table.

    Args:
        df: Raw DataFrame as read from CSV.
        table: Bronze table name.

    Returns:
        DataFrame with Bronze column names.

    Raises:
        BronzeSchemaError: If the column count doesn't match.
    """
    if table == "populations":
        if len(df.columns) < len(POPULATION_ID_COLUMNS):
            msg = (
                f"populations: expected at least {len(POPULATION_ID_COLUMNS)} columns, "
                f"got {len(df.columns)}"
            )
            raise BronzeSchemaError(msg)
        mapping = dict(zip(df.columns, POPULATION_ID_COLUMNS, strict=False))
        return df.rename(mapping)

    expected = BRONZE_COLUMNS[table]
    if len(df.columns) != len(expected):
        msg = f"{table}: expected {len(expected)} columns, got {len(df.columns)}: {df.columns}"
        raise BronzeSchemaError(msg)

    return df.rename(dict(zip(df.columns, expected, strict=True)))


def load_bronze(config: Config) -> BronzeTables:
    """Load all raw extracts into Bronze DataFrames.

    Args:
        config: Application configuration.

    Returns:
        BronzeTables with one DataFrame per source.

    Raises:
        FileNotFoundError: If a raw file is missing.
        BronzeSchemaError: If a raw file has an unexpected shape.
    """
    paths = PathManager(config)
    frames: dict[str, pl.DataFrame] = {}

    logger.info("Loading Bronze layer from %s", paths.raw_root)

    for table in BRONZE_TABLES:
        path = paths.raw_path(table)
        df = conform_columns(read_raw_csv(path, encoding=config.sources.encoding), table)
        logger.info("Loaded bronze_%s: %d rows from %s", table, len(df), path.name)
        frames[table] = df

    return BronzeTables(**frames)
