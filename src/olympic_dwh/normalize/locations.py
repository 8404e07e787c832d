"""Location parsing for "in City, Region (CODE)" biography fragments.

Supported shapes:
    "in City, Region (NOC)"
    "in ?, Region (NOC)"            -> city is None
    "in City, Region (NOC) (circa YYYY)"
    "(circa YYYY)"                  -> all None

Each component is extracted independently, so a fragment with a usable
country code but no usable city still yields the code. A placeholder
region does not discard the city either: "in Tokyo, ? (JPN)" yields city
"Tokyo", region None and code "JPN".
"""

import re
from collections.abc import Iterable
from dataclasses import dataclass

_CITY_RE = re.compile(r"\bin\s+([^,]+),")
_REGION_RE = re.compile(r",\s+([^,]+?)\s+\([A-Za-z]{3}\)")
_COUNTRY_CODE_RE = re.compile(r"\(([A-Za-z]{3})\)")

DEFAULT_PLACEHOLDERS: tuple[str, ...] = ("?",)


@dataclass(frozen=True)
class ParsedLocation:
    """Structured location components, each possibly None."""

    city: str | None = None
    region: str | None = None
    country_code: str | None = None


def _clean(value: str | None, placeholders: Iterable[str]) -> str | None:
    if value is None:
        return None
    value = value.strip()
    if not value or value in placeholders:
        return None
    return value


def extract_city(text: str, placeholders: Iterable[str] = DEFAULT_PLACEHOLDERS) -> str | None:
    """Text after "in" and before the first comma."""
    m = _CITY_RE.search(text)
    return _clean(m.group(1) if m else None, tuple(placeholders))


def extract_region(text: str, placeholders: Iterable[str] = DEFAULT_PLACEHOLDERS) -> str | None:
    """Text between the comma and the parenthesized country code."""
    m = _REGION_RE.search(text)
    return _clean(m.group(1) if m else None, tuple(placeholders))


def extract_country_code(text: str) -> str | None:
    """First three-letter parenthesized token, upper-cased."""
    m = _COUNTRY_CODE_RE.search(text)
    return m.group(1).upper() if m else None


def parse_location(
    text: str | None,
    placeholders: Iterable[str] = DEFAULT_PLACEHOLDERS,
) -> ParsedLocation:
    """Parse a location fragment into city, region and country code.

    Never raises: missing or malformed components are None.

    Args:
        text: Raw fragment, e.g. "1 April 1871 in Tokyo, Tokyo (JPN)".
        placeholders: Tokens that mean "unknown" (normalized to None).

    Returns:
        ParsedLocation with independently extracted components.
    """
    if text is None or not isinstance(text, str):
        return ParsedLocation()

    tokens = tuple(placeholders)
    return ParsedLocation(
        city=extract_city(text, tokens),
        region=extract_region(text, tokens),
        country_code=extract_country_code(text),
    )
