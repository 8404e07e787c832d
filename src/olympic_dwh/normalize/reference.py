"""Reference data normalizers: NOC regions and country populations."""

import logging
import re

import polars as pl

from olympic_dwh.normalize.common import clean_text, normalize_code

logger = logging.getLogger(__name__)

SILVER_NOC_REGIONS_SCHEMA: dict[str, type[pl.DataType]] = {
    "noc": pl.Utf8,
    "region": pl.Utf8,
    "notes": pl.Utf8,
}

SILVER_POPULATIONS_SCHEMA: dict[str, type[pl.DataType]] = {
    "country_name": pl.Utf8,
    "country_code": pl.Utf8,
    "year": pl.Int64,
    "population": pl.Float64,
}

_YEAR_COLUMN_RE = re.compile(r"^\s*(\d{4})\s*$")


def normalize_noc_regions(bronze: pl.DataFrame) -> pl.DataFrame:
    """Normalize the NOC-to-region reference into silver_noc_regions.

    NOC codes are upper-cased so they join cleanly with results.

    Args:
        bronze: Bronze noc_regions DataFrame.

    Returns:
        DataFrame with SILVER_NOC_REGIONS_SCHEMA columns.
    """
    records = [
        {
            "noc": normalize_code(row.get("noc")),
            "region": clean_text(row.get("region")),
            "notes": clean_text(row.get("notes")),
        }
        for row in bronze.iter_rows(named=True)
    ]

    df = pl.DataFrame(records, schema=SILVER_NOC_REGIONS_SCHEMA)
    logger.info("Normalized %d noc_regions", len(df))
    return df


def _blank_to_null(expr: pl.Expr) -> pl.Expr:
    return pl.when(expr == "").then(None).otherwise(expr)


def year_columns(columns: list[str]) -> dict[str, int]:
    """Find the per-year columns of the wide population extract.

    Args:
        columns: Column names of the Bronze populations table.

    Returns:
        Mapping of column name to year, in column order.
    """
    years: dict[str, int] = {}
    for column in columns:
        m = _YEAR_COLUMN_RE.match(column)
        if m:
            years[column] = int(m.group(1))
    return years


def normalize_populations(bronze: pl.DataFrame) -> pl.DataFrame:
    """Reshape the wide population extract into long (year, population) rows.

    Year columns are taken from the input's own header, so new years in the
    source are picked up without code changes. Cells without a population
    value produce no row.

    Args:
        bronze: Bronze populations DataFrame (country_name, country_code, <year>...).

    Returns:
        DataFrame with SILVER_POPULATIONS_SCHEMA columns, ordered by
        country_code and year.
    """
    years = year_columns(bronze.columns)
    if not years:
        logger.warning("No year columns found in populations extract")
        return pl.DataFrame(schema=SILVER_POPULATIONS_SCHEMA)

    long = bronze.unpivot(
        on=list(years),
        index=["country_name", "country_code"],
        variable_name="year_column",
        value_name="population_raw",
    )

    df = (
        long.with_columns(
            _blank_to_null(pl.col("country_name").str.strip_chars()).alias("country_name"),
            _blank_to_null(pl.col("country_code").str.strip_chars().str.to_uppercase()).alias(
                "country_code"
            ),
            pl.col("year_column").replace_strict(years, return_dtype=pl.Int64).alias("year"),
            pl.col("population_raw")
            .str.strip_chars()
            .cast(pl.Float64, strict=False)
            .alias("population"),
        )
        .filter(pl.col("population").is_not_null())
        .select(list(SILVER_POPULATIONS_SCHEMA))
        .sort(["country_code", "year"], nulls_last=True)
    )

    logger.info(
        "Normalized populations: %d countries x %d years -> %d rows",
        len(bronze),
        len(years),
        len(df),
    )
    return df
