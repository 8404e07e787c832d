"""Normalizers converting Bronze extracts into Silver (cleansed) tables.

Each normalizer module handles specific tables:
- dates: free-form date parsing (used for biography born/died fields)
- locations: "in City, Region (CODE)" parsing
- common: field-level cleanup shared by all normalizers
- athletes: silver_bios, silver_bios_locs
- reference: silver_noc_regions, silver_populations
- results: silver_results
- stage: runs all of the above
"""

from olympic_dwh.normalize.dates import DateMatch, match_date, parse_date
from olympic_dwh.normalize.locations import ParsedLocation, parse_location
from olympic_dwh.normalize.stage import SilverTables, run_normalization

__all__ = [
    "DateMatch",
    "ParsedLocation",
    "SilverTables",
    "match_date",
    "parse_date",
    "parse_location",
    "run_normalization",
]
