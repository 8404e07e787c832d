"""Gold layer quality checks.

Validates the star schema after a rebuild:
1. Surrogate key uniqueness per dimension
2. Natural key completeness (athlete_id)
3. Referential integrity between the fact table and mandatory dimensions
4. Optional relationship null counts (informational)
5. Row count reconciliation (Silver -> Gold)
6. Domain validity for medals and placements
"""

import logging
from dataclasses import dataclass, field

import polars as pl

from olympic_dwh.normalize.common import MEDALS

logger = logging.getLogger(__name__)

SURROGATE_KEYS: dict[str, str] = {
    "dim_athletes": "athlete_key",
    "dim_games": "game_key",
    "dim_sport_events": "sport_event_key",
    "dim_nocs": "noc_key",
}


@dataclass
class CheckResult:
    """Outcome of a single quality check."""

    name: str
    passed: bool
    observed: int
    message: str
    informational: bool = False

    def __str__(self) -> str:
        """Format result for display."""
        status = "INFO" if self.informational else ("PASS" if self.passed else "FAIL")
        return f"[{status}] {self.name}: {self.message}"


@dataclass
class QualityReport:
    """Collected results of a quality check run."""

    results: list[CheckResult] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        """True when every non-informational check passed."""
        return all(r.passed for r in self.results if not r.informational)

    @property
    def failures(self) -> list[CheckResult]:
        """Failed non-informational checks."""
        return [r for r in self.results if not r.passed and not r.informational]

    def add(self, result: CheckResult) -> None:
        """Add a check result."""
        self.results.append(result)
        if result.informational or result.passed:
            logger.debug("%s", result)
        else:
            logger.warning("%s", result)


def check_unique_surrogate(table: str, df: pl.DataFrame, key: str) -> CheckResult:
    """Surrogate keys must be unique and non-null."""
    nulls = df[key].null_count()
    duplicates = len(df) - df[key].drop_nulls().n_unique() - nulls
    observed = duplicates + nulls
    return CheckResult(
        name=f"{table}.{key} unique",
        passed=observed == 0,
        observed=observed,
        message=f"{duplicates} duplicate and {nulls} null keys",
    )


def check_not_null(table: str, df: pl.DataFrame, column: str) -> CheckResult:
    """Natural key column must be populated."""
    nulls = df[column].null_count()
    return CheckResult(
        name=f"{table}.{column} not null",
        passed=nulls == 0,
        observed=nulls,
        message=f"{nulls} null values",
    )


def count_orphans(fact: pl.DataFrame, dimension: pl.DataFrame, key: str) -> int:
    """Fact rows whose key is null or absent from the dimension."""
    known = dimension[key].drop_nulls().unique()
    return len(fact.filter(pl.col(key).is_null() | ~pl.col(key).is_in(known.to_list())))


def check_referential_integrity(
    fact: pl.DataFrame,
    table: str,
    dimension: pl.DataFrame,
    key: str,
    mandatory: bool = True,
) -> CheckResult:
    """Fact keys must resolve to a dimension row.

    For optional relationships the null count is reported but never fails.
    Non-null keys that are missing from the dimension always fail.
    """
    orphans = count_orphans(fact, dimension, key)
    nulls = fact[key].null_count()

    if mandatory:
        return CheckResult(
            name=f"fact -> {table}",
            passed=orphans == 0,
            observed=orphans,
            message=f"{orphans} orphan {key} values",
        )

    dangling = orphans - nulls
    return CheckResult(
        name=f"fact -> {table} (optional)",
        passed=dangling == 0,
        observed=nulls,
        message=f"{nulls} null {key} values, {dangling} dangling",
        informational=dangling == 0,
    )


def check_row_reconciliation(fact: pl.DataFrame, silver_results_count: int) -> CheckResult:
    """Fact table must have one row per Silver result row."""
    diff = len(fact) - silver_results_count
    return CheckResult(
        name="silver_results -> fact row count",
        passed=diff == 0,
        observed=len(fact),
        message=f"{len(fact)} fact rows, {silver_results_count} silver rows",
    )


def check_medal_domain(fact: pl.DataFrame) -> CheckResult:
    """Medal must be Gold, Silver, Bronze or null."""
    invalid = fact.filter(pl.col("medal").is_not_null() & ~pl.col("medal").is_in(list(MEDALS)))
    return CheckResult(
        name="fact.medal domain",
        passed=len(invalid) == 0,
        observed=len(invalid),
        message=f"{len(invalid)} rows outside {', '.join(MEDALS)}",
    )


def check_positive_place(fact: pl.DataFrame) -> CheckResult:
    """Placements must be positive when present."""
    invalid = fact.filter(pl.col("place") <= 0)
    return CheckResult(
        name="fact.place positive",
        passed=len(invalid) == 0,
        observed=len(invalid),
        message=f"{len(invalid)} non-positive placements",
    )


def run_quality_checks(
    tables: dict[str, pl.DataFrame],
    silver_results_count: int | None = None,
) -> QualityReport:
    """Run every Gold quality check.

    Args:
        tables: Gold tables keyed by table name.
        silver_results_count: Row count of silver_results from the same run.
            The reconciliation check is skipped when None.

    Returns:
        QualityReport with one result per check.
    """
    report = QualityReport()
    fact = tables["fact_olympic_results"]

    for table, key in SURROGATE_KEYS.items():
        report.add(check_unique_surrogate(table, tables[table], key))

    report.add(check_not_null("dim_athletes", tables["dim_athletes"], "athlete_id"))

    report.add(
        check_referential_integrity(fact, "dim_athletes", tables["dim_athletes"], "athlete_key")
    )
    report.add(check_referential_integrity(fact, "dim_games", tables["dim_games"], "game_key"))
    report.add(
        check_referential_integrity(
            fact, "dim_sport_events", tables["dim_sport_events"], "sport_event_key", mandatory=False
        )
    )
    report.add(
        check_referential_integrity(
            fact, "dim_nocs", tables["dim_nocs"], "noc_key", mandatory=False
        )
    )

    if silver_results_count is not None:
        report.add(check_row_reconciliation(fact, silver_results_count))

    report.add(check_medal_domain(fact))
    report.add(check_positive_place(fact))

    logger.info(
        "Quality checks: %d run, %d failed",
        len(report.results),
        len(report.failures),
    )
    return report
