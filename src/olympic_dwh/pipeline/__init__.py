"""Pipeline orchestration."""

from olympic_dwh.pipeline.orchestrator import (
    PipelineOrchestrator,
    PipelineReport,
    PipelineStageError,
    PipelineState,
    StageReport,
    run_pipeline,
)

__all__ = [
    "PipelineOrchestrator",
    "PipelineReport",
    "PipelineStageError",
    "PipelineState",
    "StageReport",
    "run_pipeline",
]
