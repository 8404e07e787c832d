"""Pipeline orchestrator.

Runs one full rebuild of the warehouse:

    IDLE -> NORMALIZING_RAW -> BUILDING_DIMENSIONS -> BUILDING_FACTS -> COMPLETED

Quality checks run over the freshly built Gold tables once facts are written;
failed checks are logged and reported but do not fail the run. Any stage
failure moves the pipeline to FAILED and raises PipelineStageError.
Gold tables are dropped before dimensions are built, and every dimension is
written before facts are resolved against it.
"""

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from olympic_dwh.analytics.quality import QualityReport, run_quality_checks
from olympic_dwh.config import Config
from olympic_dwh.ingest.bronze import load_bronze
from olympic_dwh.model.dimensions import DimensionTables, build_dimensions
from olympic_dwh.model.facts import FactBuildResult, build_facts
from olympic_dwh.normalize.stage import SilverTables, run_normalization
from olympic_dwh.storage.warehouse import WarehouseStore

logger = logging.getLogger(__name__)

# Sort order used when writing each Gold table.
GOLD_SORT_KEYS: dict[str, list[str]] = {
    "dim_athletes": ["athlete_key"],
    "dim_nocs": ["noc_key"],
    "dim_games": ["game_key"],
    "dim_sport_events": ["sport_event_key"],
    "fact_olympic_results": ["athlete_key", "game_key", "sport_event_key", "noc_key", "place"],
}


class PipelineState(str, Enum):
    """Lifecycle state of a pipeline run."""

    IDLE = "idle"
    NORMALIZING_RAW = "normalizing_raw"
    BUILDING_DIMENSIONS = "building_dimensions"
    BUILDING_FACTS = "building_facts"
    COMPLETED = "completed"
    FAILED = "failed"


class PipelineStageError(Exception):
    """Raised when a pipeline stage fails; the original error is chained."""

    def __init__(self, stage: PipelineState, cause: BaseException) -> None:
        self.stage = stage
        self.cause = cause
        super().__init__(f"Stage {stage.value} failed: {cause}")


@dataclass
class StageReport:
    """Row counts and timing for one completed stage."""

    name: str
    row_counts: dict[str, int] = field(default_factory=dict)
    duration_seconds: float = 0.0


@dataclass
class PipelineReport:
    """Summary of a pipeline run."""

    state: PipelineState = PipelineState.IDLE
    stages: list[StageReport] = field(default_factory=list)
    unresolved: dict[str, int] = field(default_factory=dict)
    start_time: str | None = None
    end_time: str | None = None
    duration_seconds: float = 0.0
    quality: QualityReport | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for logging and display."""
        quality = None
        if self.quality is not None:
            quality = {
                "passed": self.quality.passed,
                "failures": [str(r) for r in self.quality.failures],
            }
        return {
            "state": self.state.value,
            "start_time": self.start_time,
            "end_time": self.end_time,
            "duration_seconds": self.duration_seconds,
            "unresolved": dict(self.unresolved),
            "stages": [
                {
                    "name": stage.name,
                    "row_counts": dict(stage.row_counts),
                    "duration_seconds": stage.duration_seconds,
                }
                for stage in self.stages
            ],
            "quality": quality,
        }


class PipelineOrchestrator:
    """Runs the Bronze -> Silver -> Gold rebuild.

    Single-threaded and run-to-completion. Concurrent runs against the same
    storage root must be serialized by the caller.
    """

    def __init__(self, config: Config, store: WarehouseStore | None = None) -> None:
        """Initialize the orchestrator.

        Args:
            config: Application configuration.
            store: Gold table store (defaults to one built from config).
        """
        self.config = config
        self.store = store or WarehouseStore(config)
        self.state = PipelineState.IDLE

    def run(self) -> PipelineReport:
        """Execute a full rebuild.

        Returns:
            PipelineReport with per-stage row counts and timings.

        Raises:
            PipelineStageError: If any stage fails.
        """
        report = PipelineReport(start_time=datetime.now(UTC).isoformat())
        started = time.perf_counter()

        logger.info("Starting pipeline run (storage root: %s)", self.config.storage.root)
        self.store.paths.ensure_directories()

        silver = self._run_stage(report, PipelineState.NORMALIZING_RAW, self._normalize_raw)
        dimensions = self._run_stage(
            report, PipelineState.BUILDING_DIMENSIONS, lambda: self._build_dimensions(silver)
        )
        facts = self._run_stage(
            report, PipelineState.BUILDING_FACTS, lambda: self._build_facts(silver, dimensions)
        )

        report.unresolved = dict(facts.unresolved)
        report.quality = self._check_quality(dimensions, facts, len(silver.results))
        self.state = PipelineState.COMPLETED
        report.state = self.state
        report.end_time = datetime.now(UTC).isoformat()
        report.duration_seconds = time.perf_counter() - started

        logger.info(
            "Pipeline complete in %.2fs: %d fact rows, %d unresolved mandatory keys",
            report.duration_seconds,
            len(facts.fact),
            facts.unresolved_mandatory,
        )
        return report

    def _run_stage(
        self,
        report: PipelineReport,
        stage: PipelineState,
        fn: Callable[[], tuple[Any, dict[str, int]]],
    ) -> Any:
        """Run one stage, recording its report or failing the pipeline."""
        self.state = stage
        report.state = stage
        logger.info("Stage %s started", stage.value)
        started = time.perf_counter()

        try:
            result, row_counts = fn()
        except Exception as e:
            self.state = PipelineState.FAILED
            report.state = self.state
            logger.exception("Stage %s failed", stage.value)
            raise PipelineStageError(stage, e) from e

        duration = time.perf_counter() - started
        report.stages.append(StageReport(stage.value, row_counts, duration))
        logger.info(
            "Stage %s finished in %.2fs: %s",
            stage.value,
            duration,
            ", ".join(f"{name}={count}" for name, count in row_counts.items()),
        )
        return result

    def _normalize_raw(self) -> tuple[SilverTables, dict[str, int]]:
        bronze = load_bronze(self.config)
        silver = run_normalization(bronze, self.config.normalization)
        return silver, {**bronze.row_counts(), **silver.row_counts()}

    def _build_dimensions(self, silver: SilverTables) -> tuple[DimensionTables, dict[str, int]]:
        self.store.drop_tables()
        dimensions = build_dimensions(silver)

        row_counts = {}
        for table, df in dimensions.as_tables().items():
            row_counts[table] = self.store.write_table(table, df, sort_by=GOLD_SORT_KEYS[table])
        return dimensions, row_counts

    def _build_facts(
        self, silver: SilverTables, dimensions: DimensionTables
    ) -> tuple[FactBuildResult, dict[str, int]]:
        result = build_facts(silver.results, dimensions)
        count = self.store.write_table(
            "fact_olympic_results",
            result.fact,
            sort_by=GOLD_SORT_KEYS["fact_olympic_results"],
        )
        return result, {"fact_olympic_results": count}


    def _check_quality(
        self, dimensions: DimensionTables, facts: FactBuildResult, silver_results_count: int
    ) -> QualityReport:
        tables = {**dimensions.as_tables(), "fact_olympic_results": facts.fact}
        quality = run_quality_checks(tables, silver_results_count=silver_results_count)
        for failure in quality.failures:
            logger.warning("Quality check failed: %s", failure)
        return quality


def run_pipeline(config: Config) -> PipelineReport:
    """Run a full pipeline rebuild with the given configuration."""
    return PipelineOrchestrator(config).run()
