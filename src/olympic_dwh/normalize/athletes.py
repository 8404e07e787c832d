"""Athlete biography normalizers.

Produces the two Silver athlete tables:
- silver_bios: parsed birth/death dates and locations, cleaned names and
  unit-qualified height/weight from the Olympedia biography extract.
- silver_bios_locs: typed copy of the geocoded biography extract
  (used to enrich dim_athletes with coordinates).
"""

import logging
from typing import Any

import polars as pl

from olympic_dwh.config import NormalizationConfig
from olympic_dwh.normalize.common import (
    clean_name,
    clean_text,
    extract_measurement,
    parse_float,
    parse_int,
    parse_iso_date,
)
from olympic_dwh.normalize.dates import parse_date
from olympic_dwh.normalize.locations import parse_location

logger = logging.getLogger(__name__)

SILVER_BIOS_SCHEMA: dict[str, type[pl.DataType]] = {
    "sex": pl.Utf8,
    "used_name": pl.Utf8,
    "born_date": pl.Date,
    "born_city": pl.Utf8,
    "born_region": pl.Utf8,
    "born_country_code": pl.Utf8,
    "died_date": pl.Date,
    "died_city": pl.Utf8,
    "died_region": pl.Utf8,
    "died_country_code": pl.Utf8,
    "noc": pl.Utf8,
    "athlete_id": pl.Int64,
    "height_cm": pl.Float64,
    "weight_kg": pl.Float64,
}

SILVER_BIOS_LOCS_SCHEMA: dict[str, type[pl.DataType]] = {
    "athlete_id": pl.Int64,
    "name": pl.Utf8,
    "born_date": pl.Date,
    "born_city": pl.Utf8,
    "born_region": pl.Utf8,
    "noc": pl.Utf8,
    "height_cm": pl.Float64,
    "weight_kg": pl.Float64,
    "died_date": pl.Date,
    "lat": pl.Float64,
    "long": pl.Float64,
}


def normalize_bios(
    bronze: pl.DataFrame,
    settings: NormalizationConfig | None = None,
) -> pl.DataFrame:
    """Normalize the raw biography extract into silver_bios.

    Every input row produces exactly one output row; fields that fail to
    parse are null.

    Args:
        bronze: Bronze bios DataFrame (all-string columns).
        settings: Normalization settings (placeholders, name separators).

    Returns:
        DataFrame with SILVER_BIOS_SCHEMA columns.
    """
    settings = settings or NormalizationConfig()
    placeholders = tuple(settings.placeholder_tokens)
    separators = tuple(settings.name_separators)

    records = [
        _normalize_bio_record(row, placeholders, separators)
        for row in bronze.iter_rows(named=True)
    ]

    df = pl.DataFrame(records, schema=SILVER_BIOS_SCHEMA)

    logger.info(
        "Normalized %d bios (%d without birth date, %d without athlete_id)",
        len(df),
        df["born_date"].null_count(),
        df["athlete_id"].null_count(),
    )
    return df


def _normalize_bio_record(
    row: dict[str, Any],
    placeholders: tuple[str, ...],
    separators: tuple[str, ...],
) -> dict[str, Any]:
    """Normalize a single bios row."""
    born = parse_location(row.get("born"), placeholders)
    died = parse_location(row.get("died"), placeholders)
    measurements = row.get("measurements")

    return {
        "sex": clean_text(row.get("sex")),
        "used_name": clean_name(row.get("used_name"), separators),
        "born_date": parse_date(row.get("born")),
        "born_city": born.city,
        "born_region": born.region,
        "born_country_code": born.country_code,
        "died_date": parse_date(row.get("died")),
        "died_city": died.city,
        "died_region": died.region,
        "died_country_code": died.country_code,
        "noc": clean_name(row.get("noc"), separators),
        "athlete_id": parse_int(row.get("athlete_id")),
        "height_cm": extract_measurement(measurements, "cm"),
        "weight_kg": extract_measurement(measurements, "kg"),
    }


def normalize_bios_locs(bronze: pl.DataFrame) -> pl.DataFrame:
    """Normalize the geocoded biography extract into silver_bios_locs.

    Args:
        bronze: Bronze bios_locs DataFrame (all-string columns).

    Returns:
        DataFrame with SILVER_BIOS_LOCS_SCHEMA columns.
    """
    records = [
        {
            "athlete_id": parse_int(row.get("athlete_id")),
            "name": clean_text(row.get("name")),
            "born_date": parse_iso_date(row.get("born_date")),
            "born_city": clean_text(row.get("born_city")),
            "born_region": clean_text(row.get("born_region")),
            "noc": clean_text(row.get("noc")),
            "height_cm": parse_float(row.get("height_cm")),
            "weight_kg": parse_float(row.get("weight_kg")),
            "died_date": parse_iso_date(row.get("died_date")),
            "lat": parse_float(row.get("lat")),
            "long": parse_float(row.get("long")),
        }
        for row in bronze.iter_rows(named=True)
    ]

    df = pl.DataFrame(records, schema=SILVER_BIOS_LOCS_SCHEMA)
    logger.info(
        "Normalized %d bios_locs (%d with coordinates)", len(df), len(df) - df["lat"].null_count()
    )
    return df
