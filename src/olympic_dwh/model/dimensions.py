"""Gold dimension builders.

Each dimension holds one row per distinct natural key found in its Silver
sources, a fully-null key included, plus a dense surrogate key (1..n)
assigned in natural-key order (nulls last).
Dimensions are rebuilt from scratch on every run.

Tables:
- dim_athletes: athlete_id, from silver_bios (coordinates from silver_bios_locs)
- dim_nocs: noc, from silver_noc_regions and silver_results
- dim_games: (olympic_year, season), from silver_results
- dim_sport_events: (discipline, sport_event, team), from silver_results
"""

import logging
from collections.abc import Sequence
from dataclasses import dataclass

import polars as pl

from olympic_dwh.normalize.stage import SilverTables

logger = logging.getLogger(__name__)

ATHLETE_KEY = ("athlete_id",)
NOC_KEY = ("noc",)
GAMES_KEY = ("olympic_year", "season")
SPORT_EVENT_KEY = ("discipline", "sport_event", "team")

DIM_ATHLETES_COLUMNS = [
    "athlete_key",
    "athlete_id",
    "name",
    "gender",
    "birth_date",
    "height_cm",
    "weight_kg",
    "born_city",
    "born_region",
    "born_country_code",
    "latitude",
    "longitude",
    "noc",
    "died_date",
    "died_city",
    "died_region",
    "died_country_code",
]


@dataclass
class DimensionTables:
    """Built Gold dimensions."""

    athletes: pl.DataFrame
    nocs: pl.DataFrame
    games: pl.DataFrame
    sport_events: pl.DataFrame

    def as_tables(self) -> dict[str, pl.DataFrame]:
        """Dimensions keyed by Gold table name."""
        return {
            "dim_athletes": self.athletes,
            "dim_nocs": self.nocs,
            "dim_games": self.games,
            "dim_sport_events": self.sport_events,
        }


def build_dimension(
    name: str,
    key_columns: Sequence[str],
    key_sources: Sequence[pl.DataFrame],
    surrogate: str,
    enrich: Sequence[pl.DataFrame] = (),
) -> pl.DataFrame:
    """Build one dimension table.

    Args:
        name: Dimension name (for logging).
        key_columns: Natural-key columns.
        key_sources: Frames contributing natural keys; each must contain
            all key_columns.
        surrogate: Name of the surrogate key column.
        enrich: Frames with descriptive attributes, left-joined on the
            natural key. Each is reduced to its first row per key first.

    Returns:
        DataFrame with the surrogate key first, then the natural key,
        then enrichment attributes.
    """
    keys = list(key_columns)

    df = pl.concat([source.select(keys) for source in key_sources], how="vertical_relaxed")
    df = df.unique()

    for attributes in enrich:
        deduped = attributes.unique(subset=keys, keep="first", maintain_order=True)
        df = df.join(deduped, on=keys, how="left")

    df = (
        df.sort(keys, nulls_last=True)
        .with_row_index(surrogate, offset=1)
        .with_columns(pl.col(surrogate).cast(pl.Int64))
    )

    logger.info("Built %s: %d rows", name, len(df))
    return df


def build_dim_athletes(bios: pl.DataFrame, bios_locs: pl.DataFrame) -> pl.DataFrame:
    """Build dim_athletes from silver_bios, with birth coordinates from silver_bios_locs.

    Bios rows without an athlete_id cannot be referenced by any result and are
    left out.
    """
    attributes = bios.select(
        "athlete_id",
        pl.col("used_name").alias("name"),
        pl.col("sex").alias("gender"),
        pl.col("born_date").alias("birth_date"),
        "height_cm",
        "weight_kg",
        "born_city",
        "born_region",
        "born_country_code",
        "noc",
        "died_date",
        "died_city",
        "died_region",
        "died_country_code",
    )
    coordinates = bios_locs.select(
        "athlete_id",
        pl.col("lat").alias("latitude"),
        pl.col("long").alias("longitude"),
    ).filter(pl.col("athlete_id").is_not_null())

    dim = build_dimension(
        "dim_athletes",
        ATHLETE_KEY,
        [bios.filter(pl.col("athlete_id").is_not_null())],
        "athlete_key",
        enrich=[attributes, coordinates],
    )
    return dim.select(DIM_ATHLETES_COLUMNS)


def build_dim_nocs(noc_regions: pl.DataFrame, results: pl.DataFrame) -> pl.DataFrame:
    """Build dim_nocs from every NOC code seen in the reference table or results."""
    dim = build_dimension(
        "dim_nocs",
        NOC_KEY,
        [noc_regions, results],
        "noc_key",
        enrich=[noc_regions.select("noc", "region", "notes")],
    )
    return dim.select("noc_key", "noc", "region", "notes")


def build_dim_games(results: pl.DataFrame) -> pl.DataFrame:
    """Build dim_games from the (year, season) pairs in results."""
    games = results.select("olympic_year", pl.col("game_type").alias("season"))
    dim = build_dimension("dim_games", GAMES_KEY, [games], "game_key")
    return dim.select("game_key", *GAMES_KEY)


def build_dim_sport_events(results: pl.DataFrame) -> pl.DataFrame:
    """Build dim_sport_events from the (discipline, event, team) triples in results."""
    dim = build_dimension("dim_sport_events", SPORT_EVENT_KEY, [results], "sport_event_key")
    return dim.select("sport_event_key", *SPORT_EVENT_KEY)


def build_dimensions(silver: SilverTables) -> DimensionTables:
    """Build all Gold dimensions from the Silver tables.

    Args:
        silver: Normalized Silver tables.

    Returns:
        DimensionTables with every dimension built.
    """
    return DimensionTables(
        athletes=build_dim_athletes(silver.bios, silver.bios_locs),
        nocs=build_dim_nocs(silver.noc_regions, silver.results),
        games=build_dim_games(silver.results),
        sport_events=build_dim_sport_events(silver.results),
    )
