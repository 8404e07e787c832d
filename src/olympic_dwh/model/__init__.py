"""Gold star-schema model: dimensions, facts and key lookups."""

from olympic_dwh.model.dimensions import DimensionTables, build_dimension, build_dimensions
from olympic_dwh.model.facts import FactBuildResult, FactIntegrityError, build_facts
from olympic_dwh.model.lookup import KeyLookup

__all__ = [
    "DimensionTables",
    "FactBuildResult",
    "FactIntegrityError",
    "KeyLookup",
    "build_dimension",
    "build_dimensions",
    "build_facts",
]
