"""Test fixtures for olympic-dwh.

Provides fixtures for:
- Small raw CSV extracts covering the tricky source formats
- Test configurations rooted in a temp directory
- Silver tables and in-memory Gold tables built from the extracts
"""

import csv
from collections.abc import Callable
from pathlib import Path

import polars as pl
import pytest

from olympic_dwh.config import Config
from olympic_dwh.ingest.bronze import load_bronze
from olympic_dwh.model.dimensions import build_dimensions
from olympic_dwh.model.facts import build_facts
from olympic_dwh.normalize.stage import SilverTables, run_normalization

BIOS_HEADER = [
    "Roles",
    "Sex",
    "Full name",
    "Used name",
    "Born",
    "Died",
    "NOC",
    "athlete_id",
    "Measurements",
    "Affiliations",
    "Nick/petnames",
    "Title(s)",
    "Other names",
    "Nationality",
    "Original name",
    "Name order",
]

BIOS_ROWS = [
    [
        "Competitor",
        "Male",
        "Jean-Claude Killy",
        "Jean-Claude•Killy",
        "30 August 1943 in Saint-Cloud, Hauts-de-Seine (FRA)",
        "",
        "France",
        "1",
        "173 cm / 70 kg",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
    ],
    [
        "Competitor",
        "Female",
        "Aiko Tanaka",
        "Aiko•Tanaka",
        "(circa 1923) in Tokyo, ? (JPN)",
        "1 April 1990 in Tokyo, Tokyo (JPN)",
        "Japan",
        "2",
        "160 cm",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
    ],
    [
        "Competitor",
        "Male",
        "John Smith",
        "john  smith",
        "1926 or 1927",
        "",
        "united states",
        "3",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
    ],
    [
        "Competitor",
        "Female",
        "Unknown Person",
        "Unknown•Person",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
        "",
    ],
]

BIOS_LOCS_HEADER = [
    "athlete_id",
    "name",
    "born_date",
    "born_city",
    "born_region",
    "born_country",
    "NOC",
    "height_cm",
    "weight_kg",
    "died_date",
    "lat",
    "long",
]

BIOS_LOCS_ROWS = [
    ["1", "Jean-Claude Killy", "1943-08-30", "Saint-Cloud", "Hauts-de-Seine", "FRA", "France",
     "173.0", "70.0", "", "48.84", "2.22"],
    ["2", "Aiko Tanaka", "1923-01-01", "Tokyo", "", "JPN", "Japan",
     "160.0", "", "1990-04-01", "35.68", "139.69"],
    ["1", "Jean-Claude Killy", "1943-08-30", "Paris", "", "FRA", "France",
     "", "", "", "0.0", "0.0"],
    ["bad", "Broken Row", "not a date", "", "", "", "", "tall", "", "", "n/a", ""],
]  # fmt: skip

NOC_REGIONS_HEADER = ["NOC", "region", "notes"]

NOC_REGIONS_ROWS = [
    ["FRA", "France", ""],
    ["JPN", "Japan", ""],
    ["USA", "USA", ""],
    ["ger", "Germany", ""],
]

POPULATIONS_HEADER = ["Country Name", "Country Code", "1960", "1961", "2023"]

POPULATIONS_ROWS = [
    ["France", "FRA", "46000000", "46500000", "68000000"],
    ["Japan", "JPN", "93000000", "", "124000000"],
]

RESULTS_HEADER = [
    "Games",
    "Event",
    "Team",
    "Pos",
    "Medal",
    "As",
    "athlete_id",
    "NOC",
    "Discipline",
    "Nationality",
    "Unnamed: 7",
]

RESULTS_ROWS = [
    ["1968 Winter Olympics", "Downhill, Men", "", "1", "Gold", "Jean-Claude Killy", "1",
     "FRA", "Alpine Skiing", "", ""],
    ["1968 Winter Olympics", "Slalom, Men", "", "=3", "bronze", "Jean-Claude Killy", "1",
     "fra", "Alpine Skiing", "", ""],
    ["1964 Summer Olympics", "100 metres, Women", "", "7.0", "", "Aiko Tanaka", "2",
     "JPN", "Athletics", "", ""],
    ["1964 Summer Olympics", "4 x 100 metres Relay, Women", "Japan", "DNS", "", "Aiko Tanaka",
     "2", "JPN", "Athletics", "", ""],
    ["1956 Equestrian Olympics", "Dressage, Individual", "", "5", "", "John Smith", "3",
     "USA", "Equestrian", "", ""],
]  # fmt: skip


def write_csv(path: Path, header: list[str], rows: list[list[str]]) -> Path:
    """Write a CSV file with a header row."""
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", newline="", encoding="utf-8") as f:
        writer = csv.writer(f)
        writer.writerow(header)
        writer.writerows(rows)
    return path


def write_raw_extracts(
    raw_dir: Path,
    results_rows: list[list[str]] | None = None,
) -> Path:
    """Write all five raw extracts into raw_dir.

    Args:
        raw_dir: Target directory.
        results_rows: Replacement rows for results.csv.

    Returns:
        The raw directory.
    """
    write_csv(raw_dir / "bios.csv", BIOS_HEADER, BIOS_ROWS)
    write_csv(raw_dir / "bios_locs.csv", BIOS_LOCS_HEADER, BIOS_LOCS_ROWS)
    write_csv(raw_dir / "noc_regions.csv", NOC_REGIONS_HEADER, NOC_REGIONS_ROWS)
    write_csv(raw_dir / "populations.csv", POPULATIONS_HEADER, POPULATIONS_ROWS)
    write_csv(
        raw_dir / "results.csv",
        RESULTS_HEADER,
        RESULTS_ROWS if results_rows is None else results_rows,
    )
    return raw_dir


@pytest.fixture
def config(tmp_path: Path) -> Config:
    """Config rooted in a temp directory with raw extracts in place."""
    root = tmp_path / "data"
    write_raw_extracts(root / "raw")
    return Config.model_validate({"storage": {"root": str(root)}})


@pytest.fixture
def silver(config: Config) -> SilverTables:
    """Silver tables normalized from the sample extracts."""
    return run_normalization(load_bronze(config), config.normalization)


@pytest.fixture
def gold_tables(silver: SilverTables) -> dict[str, pl.DataFrame]:
    """Gold tables built in memory from the sample extracts."""
    dimensions = build_dimensions(silver)
    tables = dimensions.as_tables()
    tables["fact_olympic_results"] = build_facts(silver.results, dimensions).fact
    return tables


@pytest.fixture
def raw_writer() -> Callable[..., Path]:
    """Writer for custom raw extracts (see write_raw_extracts)."""
    return write_raw_extracts
