"""Path management for data storage."""

from pathlib import Path
from typing import Literal

from olympic_dwh.config import Config

RawSource = Literal["bios", "bios_locs", "noc_regions", "populations", "results"]

GoldTable = Literal[
    "dim_athletes",
    "dim_nocs",
    "dim_games",
    "dim_sport_events",
    "fact_olympic_results",
]


class PathManager:
    """Manages paths for raw, gold, and export data.

    All paths follow a consistent structure:
    - Raw: <root>/<raw_dir>/<source file>.csv
    - Gold: <root>/<gold_dir>/<table>.parquet
    - Exports: <root>/<exports_dir>/<view>.csv
    """

    def __init__(self, config: Config) -> None:
        """Initialize path manager with configuration.

        Args:
            config: Application configuration.
        """
        self.config = config
        self.root = Path(config.storage.root)

    @property
    def raw_root(self) -> Path:
        """Root path for raw CSV extracts."""
        return self.root / self.config.storage.raw_dir

    @property
    def gold_root(self) -> Path:
        """Root path for Gold Parquet tables."""
        return self.root / self.config.storage.gold_dir

    @property
    def exports_root(self) -> Path:
        """Root path for exported view CSVs."""
        return self.root / self.config.storage.exports_dir

    def raw_path(self, source: RawSource) -> Path:
        """Path to a raw CSV extract."""
        filename: str = getattr(self.config.sources, source)
        return self.raw_root / filename

    def gold_path(self, table: GoldTable | str) -> Path:
        """Path to a Gold Parquet table."""
        return self.gold_root / f"{table}.parquet"

    def export_path(self, view: str) -> Path:
        """Path to an exported view CSV."""
        return self.exports_root / f"{view}.csv"

    def ensure_directories(self) -> None:
        """Create gold and export directories if they don't exist."""
        self.gold_root.mkdir(parents=True, exist_ok=True)
        self.exports_root.mkdir(parents=True, exist_ok=True)
