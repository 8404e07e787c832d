"""Natural-key to surrogate-key lookup for fact resolution."""

from collections.abc import Sequence
from typing import Any

import polars as pl

NaturalKey = tuple[Any, ...]


class KeyLookup:
    """Maps natural-key tuples of one dimension to its surrogate keys.

    Matching is null-safe: a missing component matches a missing component,
    so a partially-null natural key resolves to the dimension row that holds
    the same partial key. A fully-null key never resolves.
    """

    def __init__(
        self,
        name: str,
        key_columns: Sequence[str],
        mapping: dict[NaturalKey, int],
    ) -> None:
        self.name = name
        self.key_columns = tuple(key_columns)
        self._mapping = mapping

    @classmethod
    def from_dimension(
        cls,
        name: str,
        dimension: pl.DataFrame,
        key_columns: Sequence[str],
        surrogate: str,
    ) -> "KeyLookup":
        """Build a lookup from a built dimension table.

        Args:
            name: Dimension name (for logging).
            dimension: Dimension DataFrame with natural-key and surrogate columns.
            key_columns: Natural-key columns, in tuple order.
            surrogate: Surrogate key column.

        Returns:
            KeyLookup over every row of the dimension.
        """
        mapping: dict[NaturalKey, int] = {}
        for row in dimension.select([*key_columns, surrogate]).iter_rows():
            mapping[tuple(row[:-1])] = row[-1]
        return cls(name, key_columns, mapping)

    def resolve(self, key: NaturalKey) -> int | None:
        """Surrogate key for a natural key, or None if unknown or fully null."""
        if all(part is None for part in key):
            return None
        return self._mapping.get(key)

    def __len__(self) -> int:
        return len(self._mapping)

    def __contains__(self, key: object) -> bool:
        return key in self._mapping
