"""Competition results normalizer.

Converts raw results into silver_results:
- games label split into olympic_year / game_type ("1912 Summer Olympics")
- finishing position parsed with tie indicator ("=3" -> 3, tied)
- NOC codes upper-cased for joining with the NOC dimension
- medal restricted to Gold/Silver/Bronze
"""

import logging
from typing import Any

import polars as pl

from olympic_dwh.normalize.common import (
    clean_text,
    normalize_code,
    normalize_medal,
    parse_games,
    parse_int,
    parse_position,
)

logger = logging.getLogger(__name__)

SILVER_RESULTS_SCHEMA: dict[str, type[pl.DataType]] = {
    "olympic_year": pl.Int64,
    "game_type": pl.Utf8,
    "sport_event": pl.Utf8,
    "team": pl.Utf8,
    "pos": pl.Int64,
    "is_tied": pl.Boolean,
    "medal": pl.Utf8,
    "as_name": pl.Utf8,
    "athlete_id": pl.Int64,
    "noc": pl.Utf8,
    "discipline": pl.Utf8,
}


def normalize_results(bronze: pl.DataFrame) -> pl.DataFrame:
    """Normalize raw competition results into silver_results.

    Exactly one output row per input row, in input order.

    Args:
        bronze: Bronze results DataFrame (all-string columns).

    Returns:
        DataFrame with SILVER_RESULTS_SCHEMA columns.
    """
    records = [_normalize_result_record(row) for row in bronze.iter_rows(named=True)]
    df = pl.DataFrame(records, schema=SILVER_RESULTS_SCHEMA)

    logger.info(
        "Normalized %d results (%d unparsed games, %d unplaced, %d medals)",
        len(df),
        df["olympic_year"].null_count(),
        df["pos"].null_count(),
        len(df) - df["medal"].null_count(),
    )
    return df


def _normalize_result_record(row: dict[str, Any]) -> dict[str, Any]:
    """Normalize a single results row."""
    games = parse_games(row.get("games"))
    position = parse_position(row.get("pos"))

    return {
        "olympic_year": games.year,
        "game_type": games.season,
        "sport_event": clean_text(row.get("sport_event")),
        "team": clean_text(row.get("team")),
        "pos": position.place,
        "is_tied": position.is_tied,
        "medal": normalize_medal(row.get("medal")),
        "as_name": clean_text(row.get("as_name")),
        "athlete_id": parse_int(row.get("athlete_id")),
        "noc": normalize_code(row.get("noc")),
        "discipline": clean_text(row.get("discipline")),
    }
