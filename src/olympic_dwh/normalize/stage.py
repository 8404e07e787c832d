"""Silver stage: apply every normalizer to the Bronze extracts."""

import logging
from dataclasses import dataclass

import polars as pl

from olympic_dwh.config import NormalizationConfig
from olympic_dwh.ingest.bronze import BronzeTables
from olympic_dwh.normalize.athletes import normalize_bios, normalize_bios_locs
from olympic_dwh.normalize.reference import normalize_noc_regions, normalize_populations
from olympic_dwh.normalize.results import normalize_results

logger = logging.getLogger(__name__)


@dataclass
class SilverTables:
    """Cleansed record sets, one DataFrame per source entity.

    Silver tables live only for the duration of a pipeline run.
    """

    bios: pl.DataFrame
    bios_locs: pl.DataFrame
    noc_regions: pl.DataFrame
    populations: pl.DataFrame
    results: pl.DataFrame

    def row_counts(self) -> dict[str, int]:
        """Row count per Silver table."""
        return {
            "silver_bios": len(self.bios),
            "silver_bios_locs": len(self.bios_locs),
            "silver_noc_regions": len(self.noc_regions),
            "silver_populations": len(self.populations),
            "silver_results": len(self.results),
        }


def run_normalization(
    bronze: BronzeTables,
    settings: NormalizationConfig | None = None,
) -> SilverTables:
    """Normalize all Bronze extracts.

    Args:
        bronze: Raw extracts.
        settings: Normalization settings.

    Returns:
        SilverTables with one cleansed DataFrame per source.
    """
    settings = settings or NormalizationConfig()

    silver = SilverTables(
        bios=normalize_bios(bronze.bios, settings),
        bios_locs=normalize_bios_locs(bronze.bios_locs),
        noc_regions=normalize_noc_regions(bronze.noc_regions),
        populations=normalize_populations(bronze.populations),
        results=normalize_results(bronze.results),
    )

    logger.info(
        "Silver layer ready: %s",
        ", ".join(f"{name}={count}" for name, count in silver.row_counts().items()),
    )
    return silver
