"""Analytical views over the Gold star schema.

Each view is a read-only aggregate computed from the Gold tables:

- vw_olympics_analysis_base: fact joined to every dimension (detail grain)
- vw_athlete_trend_over_time: distinct athletes per (olympic_year, season)
- vw_athletes_by_noc: distinct athletes per NOC
- vw_kpi_overview: single row of global totals
- vw_medal_efficiency_by_noc: medals per distinct athlete, per NOC
- vw_medals_by_games: medals by tier per games
- vw_medals_by_noc: medals by tier per NOC
- vw_most_decorated_athletes: medals by tier per medal-winning athlete
- vw_sport_participation: distinct athletes per discipline
- vw_top_athletes_by_games: distinct games attended per athlete

Rows with a null dimension key drop out of views that inner-join that
dimension.
"""

import logging
from collections.abc import Callable

import polars as pl

from olympic_dwh.config import AnalyticsConfig

logger = logging.getLogger(__name__)

GoldTables = dict[str, pl.DataFrame]


def _medal_counts() -> list[pl.Expr]:
    """Medal tallies by tier."""
    return [
        pl.col("medal").is_not_null().sum().cast(pl.Int64).alias("total_medals"),
        (pl.col("medal") == "Gold").sum().cast(pl.Int64).alias("gold_medals"),
        (pl.col("medal") == "Silver").sum().cast(pl.Int64).alias("silver_medals"),
        (pl.col("medal") == "Bronze").sum().cast(pl.Int64).alias("bronze_medals"),
    ]


def _distinct_athletes(alias: str) -> pl.Expr:
    return pl.col("athlete_key").drop_nulls().n_unique().cast(pl.Int64).alias(alias)


def olympics_analysis_base(tables: GoldTables) -> pl.DataFrame:
    """Detail-grain view: one row per fact, with dimension attributes attached."""
    athletes = tables["dim_athletes"].select(
        "athlete_key",
        "athlete_id",
        pl.col("name").alias("athlete_name"),
        "gender",
        "birth_date",
        "height_cm",
        "weight_kg",
        pl.col("noc").alias("athlete_country"),
    )
    nocs = tables["dim_nocs"].select("noc_key", "noc", "region")

    return (
        tables["fact_olympic_results"]
        .join(athletes, on="athlete_key", how="left")
        .join(tables["dim_games"], on="game_key", how="left")
        .join(tables["dim_sport_events"], on="sport_event_key", how="left")
        .join(nocs, on="noc_key", how="left")
        .select(
            "athlete_id",
            "athlete_name",
            "gender",
            "birth_date",
            "height_cm",
            "weight_kg",
            "athlete_country",
            "olympic_year",
            "season",
            "discipline",
            "sport_event",
            "team",
            "noc",
            "region",
            "place",
            "is_tied",
            "medal",
        )
        .sort(
            ["olympic_year", "season", "discipline", "sport_event", "athlete_id"],
            nulls_last=True,
        )
    )


def athlete_trend_over_time(tables: GoldTables) -> pl.DataFrame:
    """Distinct athletes per Olympic Games."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_games"], on="game_key", how="inner")
        .group_by(["olympic_year", "season"])
        .agg(_distinct_athletes("athlete_count"))
        .sort(["olympic_year", "season"], nulls_last=True)
    )


def athletes_by_noc(tables: GoldTables) -> pl.DataFrame:
    """Distinct athletes per NOC."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_nocs"], on="noc_key", how="inner")
        .group_by(["noc", "region"])
        .agg(_distinct_athletes("total_athletes"))
        .sort(["total_athletes", "noc"], descending=[True, False])
    )


def kpi_overview(tables: GoldTables) -> pl.DataFrame:
    """Single-row summary of the warehouse."""
    medals = tables["fact_olympic_results"].select(_medal_counts())
    totals = pl.DataFrame(
        {
            "total_athletes": [len(tables["dim_athletes"])],
            "total_olympic_games": [len(tables["dim_games"])],
        },
        schema={"total_athletes": pl.Int64, "total_olympic_games": pl.Int64},
    )
    return pl.concat([totals, medals], how="horizontal")


def medal_efficiency_by_noc(tables: GoldTables, min_athletes: int = 50) -> pl.DataFrame:
    """Medals per distinct athlete for NOCs with at least min_athletes athletes."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_nocs"], on="noc_key", how="inner")
        .group_by(["noc", "region"])
        .agg(
            pl.col("medal").is_not_null().sum().cast(pl.Int64).alias("total_medals"),
            _distinct_athletes("total_athletes"),
        )
        .filter(pl.col("total_athletes") >= min_athletes)
        .with_columns(
            (pl.col("total_medals") / pl.col("total_athletes")).round(4).alias("medals_per_athlete")
        )
        .sort(["medals_per_athlete", "noc"], descending=[True, False])
    )


def medals_by_games(tables: GoldTables) -> pl.DataFrame:
    """Medal tallies per Olympic Games."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_games"], on="game_key", how="inner")
        .group_by(["olympic_year", "season"])
        .agg(_medal_counts())
        .sort(["olympic_year", "season"], nulls_last=True)
    )


def medals_by_noc(tables: GoldTables) -> pl.DataFrame:
    """Medal tallies per NOC."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_nocs"], on="noc_key", how="inner")
        .group_by(["noc", "region"])
        .agg(_medal_counts())
        .sort(["total_medals", "noc"], descending=[True, False])
    )


def most_decorated_athletes(tables: GoldTables) -> pl.DataFrame:
    """Medal tallies per athlete, limited to athletes with at least one medal."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_athletes"], on="athlete_key", how="inner")
        .group_by(["athlete_key", "name"])
        .agg(_medal_counts())
        .filter(pl.col("total_medals") > 0)
        .sort(
            ["total_medals", "gold_medals", "athlete_key"],
            descending=[True, True, False],
        )
        .drop("athlete_key")
    )


def sport_participation(tables: GoldTables) -> pl.DataFrame:
    """Distinct athletes per discipline."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_sport_events"], on="sport_event_key", how="inner")
        .group_by("discipline")
        .agg(_distinct_athletes("athlete_count"))
        .sort(["athlete_count", "discipline"], descending=[True, False], nulls_last=True)
    )


def top_athletes_by_games(tables: GoldTables) -> pl.DataFrame:
    """Distinct Olympic Games attended per athlete."""
    return (
        tables["fact_olympic_results"]
        .join(tables["dim_athletes"], on="athlete_key", how="inner")
        .join(tables["dim_games"], on="game_key", how="inner")
        .group_by(["athlete_key", "name"])
        .agg(pl.col("game_key").n_unique().cast(pl.Int64).alias("olympic_games_participated"))
        .sort(["olympic_games_participated", "athlete_key"], descending=[True, False])
        .drop("athlete_key")
    )


VIEWS: dict[str, Callable[[GoldTables, AnalyticsConfig], pl.DataFrame]] = {
    "vw_olympics_analysis_base": lambda t, _: olympics_analysis_base(t),
    "vw_athlete_trend_over_time": lambda t, _: athlete_trend_over_time(t),
    "vw_athletes_by_noc": lambda t, _: athletes_by_noc(t),
    "vw_kpi_overview": lambda t, _: kpi_overview(t),
    "vw_medal_efficiency_by_noc": lambda t, c: medal_efficiency_by_noc(
        t, c.min_athletes_for_efficiency
    ),
    "vw_medals_by_games": lambda t, _: medals_by_games(t),
    "vw_medals_by_noc": lambda t, _: medals_by_noc(t),
    "vw_most_decorated_athletes": lambda t, _: most_decorated_athletes(t),
    "vw_sport_participation": lambda t, _: sport_participation(t),
    "vw_top_athletes_by_games": lambda t, _: top_athletes_by_games(t),
}


def compute_views(
    tables: GoldTables,
    settings: AnalyticsConfig | None = None,
) -> dict[str, pl.DataFrame]:
    """Compute every analytical view.

    Args:
        tables: Gold tables keyed by table name.
        settings: Analytics settings.

    Returns:
        Views keyed by view name.
    """
    settings = settings or AnalyticsConfig()
    views = {}
    for name, build in VIEWS.items():
        views[name] = build(tables, settings)
        logger.info("Computed %s: %d rows", name, len(views[name]))
    return views
