"""CSV export of the analytical views."""

import logging
from pathlib import Path

import polars as pl

from olympic_dwh.analytics.views import compute_views
from olympic_dwh.config import Config
from olympic_dwh.storage.paths import PathManager
from olympic_dwh.storage.warehouse import WarehouseStore

logger = logging.getLogger(__name__)


def write_views(views: dict[str, pl.DataFrame], paths: PathManager) -> dict[str, Path]:
    """Write each view as a CSV file with a header row.

    Args:
        views: Views keyed by view name.
        paths: Path manager for the export directory.

    Returns:
        Mapping of view name to written file path.
    """
    paths.ensure_directories()

    written: dict[str, Path] = {}
    for name, df in views.items():
        path = paths.export_path(name)
        df.write_csv(path, include_header=True)
        written[name] = path
        logger.debug("Exported %s: %d rows to %s", name, len(df), path)

    logger.info("Exported %d views to %s", len(written), paths.exports_root)
    return written


def export_views(config: Config, store: WarehouseStore | None = None) -> dict[str, Path]:
    """Compute the analytical views from Gold tables and export them as CSV.

    Args:
        config: Application configuration.
        store: Gold table store (defaults to one built from config).

    Returns:
        Mapping of view name to written file path.

    Raises:
        FileNotFoundError: If the Gold tables have not been built.
    """
    store = store or WarehouseStore(config)
    views = compute_views(store.read_all(), config.analytics)
    return write_views(views, store.paths)
