"""Fact builder for fact_olympic_results.

Resolves each Silver result row against the Gold dimensions through
natural-key lookups built fresh for the call. Exactly one fact row is
produced per result row.

Mandatory relationships (athlete, games) that fail to resolve leave a null
key and are counted and reported as warnings. Optional relationships
(sport event, NOC) that fail to resolve leave a null key silently.
"""

import logging
from dataclasses import dataclass, field
from typing import Any

import polars as pl

from olympic_dwh.model.dimensions import (
    ATHLETE_KEY,
    GAMES_KEY,
    NOC_KEY,
    SPORT_EVENT_KEY,
    DimensionTables,
)
from olympic_dwh.model.lookup import KeyLookup

logger = logging.getLogger(__name__)

FACT_SCHEMA: dict[str, type[pl.DataType]] = {
    "athlete_key": pl.Int64,
    "game_key": pl.Int64,
    "sport_event_key": pl.Int64,
    "noc_key": pl.Int64,
    "place": pl.Int64,
    "medal": pl.Utf8,
    "is_tied": pl.Boolean,
}

MANDATORY_KEYS = ("athlete_key", "game_key")
OPTIONAL_KEYS = ("sport_event_key", "noc_key")


class FactIntegrityError(Exception):
    """Raised when the fact table does not have one row per result row."""


@dataclass
class FactBuildResult:
    """Built fact table plus resolution statistics."""

    fact: pl.DataFrame
    unresolved: dict[str, int] = field(default_factory=dict)

    @property
    def unresolved_mandatory(self) -> int:
        """Total rows with a missing mandatory key."""
        return sum(self.unresolved.get(key, 0) for key in MANDATORY_KEYS)


def build_lookups(dimensions: DimensionTables) -> dict[str, KeyLookup]:
    """Build one natural-key lookup per dimension, keyed by fact column."""
    return {
        "athlete_key": KeyLookup.from_dimension(
            "dim_athletes", dimensions.athletes, ATHLETE_KEY, "athlete_key"
        ),
        "game_key": KeyLookup.from_dimension("dim_games", dimensions.games, GAMES_KEY, "game_key"),
        "sport_event_key": KeyLookup.from_dimension(
            "dim_sport_events", dimensions.sport_events, SPORT_EVENT_KEY, "sport_event_key"
        ),
        "noc_key": KeyLookup.from_dimension("dim_nocs", dimensions.nocs, NOC_KEY, "noc_key"),
    }


def _natural_keys(row: dict[str, Any]) -> dict[str, tuple[Any, ...]]:
    return {
        "athlete_key": (row["athlete_id"],),
        "game_key": (row["olympic_year"], row["game_type"]),
        "sport_event_key": (row["discipline"], row["sport_event"], row["team"]),
        "noc_key": (row["noc"],),
    }


def build_facts(results: pl.DataFrame, dimensions: DimensionTables) -> FactBuildResult:
    """Build fact_olympic_results from silver_results.

    Args:
        results: silver_results DataFrame.
        dimensions: Built Gold dimensions.

    Returns:
        FactBuildResult with the fact table and per-key unresolved counts.

    Raises:
        FactIntegrityError: If the fact row count differs from the input.
    """
    lookups = build_lookups(dimensions)
    unresolved = dict.fromkeys(lookups, 0)

    records = []
    for row in results.iter_rows(named=True):
        record: dict[str, Any] = {}
        for column, key in _natural_keys(row).items():
            surrogate = lookups[column].resolve(key)
            if surrogate is None:
                unresolved[column] += 1
            record[column] = surrogate
        record["place"] = row["pos"]
        record["medal"] = row["medal"]
        record["is_tied"] = row["is_tied"]
        records.append(record)

    fact = pl.DataFrame(records, schema=FACT_SCHEMA)

    if len(fact) != len(results):
        msg = f"fact_olympic_results has {len(fact)} rows, expected {len(results)}"
        raise FactIntegrityError(msg)

    for column in MANDATORY_KEYS:
        if unresolved[column]:
            logger.warning(
                "%d result rows could not be resolved to %s",
                unresolved[column],
                lookups[column].name,
            )
    for column in OPTIONAL_KEYS:
        if unresolved[column]:
            logger.debug(
                "%d result rows without %s (left null)",
                unresolved[column],
                lookups[column].name,
            )

    logger.info("Built fact_olympic_results: %d rows", len(fact))
    return FactBuildResult(fact=fact, unresolved=unresolved)
