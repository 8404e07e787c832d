"""Common utilities for Silver-layer normalization.

Provides the small field-level cleanups shared by all normalizers: name
cleanup, code normalization, unit-qualified measurement extraction, finishing
position parsing and the games label split.
"""

import math
import re
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import date

_WHITESPACE_RE = re.compile(r"\s+")
_POSITION_RE = re.compile(r"^\s*=?(\d+)(?:\.0)?\s*$")
_TIED_POSITION_RE = re.compile(r"^\s*=\d+(?:\.0)?\s*$")
_GAMES_YEAR_RE = re.compile(r"^(\d{4})")
_GAMES_LABEL_RE = re.compile(
    r"^\d{4}(?:-\d{2})?\s+(.*?)\s+(?:Olympic Games|Olympics|Olympic|Games)$",
    re.IGNORECASE,
)
_MEASUREMENT_RE_CACHE: dict[str, re.Pattern[str]] = {}

MEDALS: tuple[str, ...] = ("Gold", "Silver", "Bronze")


@dataclass(frozen=True)
class ParsedPosition:
    """Finishing position and tie indicator.

    Attributes:
        place: Numeric position, or None if the text has no parseable number.
        is_tied: True for "=N", False for "N", None when place is None.
    """

    place: int | None
    is_tied: bool | None


@dataclass(frozen=True)
class ParsedGames:
    """Games label split into year and season/type."""

    year: int | None
    season: str | None


def clean_text(value: str | None) -> str | None:
    """Trim and collapse whitespace; empty strings become None."""
    if value is None:
        return None
    value = _WHITESPACE_RE.sub(" ", str(value)).strip()
    return value or None


def clean_name(value: str | None, separators: Iterable[str] = ("•",)) -> str | None:
    """Normalize a person or country name.

    Replaces separator artifacts (e.g. "Jean•Claude") with spaces, collapses
    whitespace, trims and title-cases.

    Args:
        value: Raw name text.
        separators: Characters used by the source as word separators.

    Returns:
        Cleaned name, or None if nothing remains.
    """
    if value is None:
        return None
    text = str(value)
    for separator in separators:
        text = text.replace(separator, " ")
    cleaned = clean_text(text)
    return cleaned.title() if cleaned else None


def normalize_code(value: str | None) -> str | None:
    """Trim and upper-case a reference code (NOC, country code)."""
    cleaned = clean_text(value)
    return cleaned.upper() if cleaned else None


def extract_measurement(text: str | None, unit: str) -> float | None:
    """Extract the number immediately preceding a unit suffix.

    "183 cm / 76 kg" yields 183.0 for "cm" and 76.0 for "kg"; only the number
    adjacent to the requested unit is taken.

    Args:
        text: Combined measurement text.
        unit: Unit suffix, e.g. "cm" or "kg".

    Returns:
        The measurement, or None if no unit-qualified number is present.
    """
    if text is None:
        return None

    pattern = _MEASUREMENT_RE_CACHE.get(unit)
    if pattern is None:
        pattern = re.compile(rf"(\d{{2,3}})\s*{re.escape(unit)}", re.IGNORECASE)
        _MEASUREMENT_RE_CACHE[unit] = pattern

    m = pattern.search(str(text))
    return float(m.group(1)) if m else None


def parse_position(text: str | None) -> ParsedPosition:
    """Parse a finishing position such as "3", "=3" or "7.0".

    Text without a parseable number ("DNS", "AC", "3 r1/4") yields
    ParsedPosition(None, None): no claim is made about tie status.
    """
    if text is None:
        return ParsedPosition(place=None, is_tied=None)

    m = _POSITION_RE.match(str(text))
    if not m:
        return ParsedPosition(place=None, is_tied=None)

    return ParsedPosition(
        place=int(m.group(1)),
        is_tied=bool(_TIED_POSITION_RE.match(str(text))),
    )


def parse_games(text: str | None) -> ParsedGames:
    """Split a games label like "1912 Summer Olympics" into (1912, "Summer")."""
    if text is None:
        return ParsedGames(year=None, season=None)

    stripped = str(text).strip()
    year_match = _GAMES_YEAR_RE.match(stripped)
    label_match = _GAMES_LABEL_RE.match(stripped)

    return ParsedGames(
        year=int(year_match.group(1)) if year_match else None,
        season=clean_text(label_match.group(1)) if label_match else None,
    )


def parse_int(value: str | None) -> int | None:
    """Cast to int, accepting integral floats like "42.0"; invalid input is None."""
    cleaned = clean_text(value)
    if cleaned is None:
        return None
    try:
        return int(cleaned)
    except ValueError:
        pass
    number = parse_float(cleaned)
    if number is None or not number.is_integer():
        return None
    return int(number)


def parse_float(value: str | None) -> float | None:
    """Cast to float; invalid or non-finite input is None."""
    cleaned = clean_text(value)
    if cleaned is None:
        return None
    try:
        number = float(cleaned)
    except ValueError:
        return None
    if not math.isfinite(number):
        return None
    return number


def parse_iso_date(value: str | None) -> date | None:
    """Parse a YYYY-MM-DD date; anything else is None."""
    cleaned = clean_text(value)
    if cleaned is None:
        return None
    try:
        return date.fromisoformat(cleaned[:10])
    except ValueError:
        return None


def normalize_medal(value: str | None) -> str | None:
    """Title-case a medal value; anything outside Gold/Silver/Bronze is None."""
    cleaned = clean_text(value)
    if cleaned is None:
        return None
    medal = cleaned.title()
    return medal if medal in MEDALS else None
