"""Analytical views, CSV export and Gold quality checks."""

from olympic_dwh.analytics.export import export_views, write_views
from olympic_dwh.analytics.quality import CheckResult, QualityReport, run_quality_checks
from olympic_dwh.analytics.views import VIEWS, compute_views

__all__ = [
    "VIEWS",
    "CheckResult",
    "QualityReport",
    "compute_views",
    "export_views",
    "run_quality_checks",
    "write_views",
]
