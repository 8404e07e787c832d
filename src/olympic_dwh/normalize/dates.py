"""Free-form date parsing for athlete biography fields.

Biography text mixes full dates, partial dates, approximate years and
ambiguous ranges, often followed by a location:

    "1 April 1871 in Kraków, Małopolskie (POL)"  -> 1871-04-01
    "April 1871"                                 -> 1871-04-01
    "(circa 1923)", "c. 1915"                    -> 1923-01-01, 1915-01-01
    "1871"                                       -> 1871-01-01
    "(1926 or 1927)"                             -> None

Parsing is an ordered list of rules. Each rule returns a DateMatch when its
pattern applies (the payload may be None, e.g. for ambiguous ranges) or None
when it does not, and the first DateMatch wins. Missing month/day values are
imputed as January 1st / the 1st of the month.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date

MONTHS: dict[str, int] = {
    "january": 1,
    "february": 2,
    "march": 3,
    "april": 4,
    "may": 5,
    "june": 6,
    "july": 7,
    "august": 8,
    "september": 9,
    "october": 10,
    "november": 11,
    "december": 12,
}


@dataclass(frozen=True)
class DateMatch:
    """Result of a date rule that applied.

    Attributes:
        rule: Name of the rule that matched.
        value: Parsed date, or None when the rule resolves to "no date".
    """

    rule: str
    value: date | None


DateRule = Callable[[str], DateMatch | None]

_AMBIGUOUS_RANGE_RE = re.compile(r"\d{4}\s+or\s+\d{4}", re.IGNORECASE)
_DAY_MONTH_YEAR_RE = re.compile(r"^(\d{1,2})\s+([A-Za-z]+)\s+(\d{4})")
_MONTH_YEAR_RE = re.compile(r"^([A-Za-z]+)\s+(\d{4})")
_CIRCA_PAREN_RE = re.compile(r"\((?:circa|c\.)\s+(\d{4})\)", re.IGNORECASE)
_CIRCA_BARE_RE = re.compile(r"(?:^|\s)(?:circa|c\.)\s+(\d{4})", re.IGNORECASE)
_YEAR_ONLY_RE = re.compile(r"^(\d{4})")


def month_number(name: str) -> int | None:
    """Resolve an English month name or three-letter abbreviation.

    Args:
        name: Month word, any case.

    Returns:
        Month number 1-12, or None if the word is not a month.
    """
    key = name.lower()
    if key in MONTHS:
        return MONTHS[key]
    if len(key) == 3:
        for full_name, number in MONTHS.items():
            if full_name.startswith(key):
                return number
    return None


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def match_ambiguous_range(text: str) -> DateMatch | None:
    """Year ranges such as "1926 or 1927" are never resolved by guessing."""
    if _AMBIGUOUS_RANGE_RE.search(text):
        return DateMatch(rule="ambiguous_range", value=None)
    return None


def match_day_month_year(text: str) -> DateMatch | None:
    """Leading "D Month YYYY"."""
    m = _DAY_MONTH_YEAR_RE.match(text)
    if not m:
        return None
    month = month_number(m.group(2))
    if month is None:
        return None
    value = _safe_date(int(m.group(3)), month, int(m.group(1)))
    if value is None:
        return None
    return DateMatch(rule="day_month_year", value=value)


def match_month_year(text: str) -> DateMatch | None:
    """Leading "Month YYYY", day imputed as the 1st."""
    m = _MONTH_YEAR_RE.match(text)
    if not m:
        return None
    month = month_number(m.group(1))
    if month is None:
        # "circa 1923" has the same shape; let the approximate-year rules handle it
        return None
    value = _safe_date(int(m.group(2)), month, 1)
    if value is None:
        return None
    return DateMatch(rule="month_year", value=value)


def _match_year(pattern: re.Pattern[str], rule: str, text: str) -> DateMatch | None:
    m = pattern.search(text)
    if not m:
        return None
    value = _safe_date(int(m.group(1)), 1, 1)
    if value is None:
        return None
    return DateMatch(rule=rule, value=value)


def match_circa_parenthesized(text: str) -> DateMatch | None:
    """"(circa YYYY)" or "(c. YYYY)" anywhere in the text."""
    return _match_year(_CIRCA_PAREN_RE, "circa_parenthesized", text)


def match_circa_bare(text: str) -> DateMatch | None:
    """"circa YYYY" or "c. YYYY" without parentheses."""
    return _match_year(_CIRCA_BARE_RE, "circa_bare", text)


def match_year_only(text: str) -> DateMatch | None:
    """Leading four-digit year."""
    return _match_year(_YEAR_ONLY_RE, "year_only", text)


# Order matters: approximate-year rules must run before the bare-year rule.
DATE_RULES: tuple[DateRule, ...] = (
    match_ambiguous_range,
    match_day_month_year,
    match_month_year,
    match_circa_parenthesized,
    match_circa_bare,
    match_year_only,
)


def match_date(text: str | None) -> DateMatch | None:
    """Evaluate the date rules in precedence order.

    Args:
        text: Raw date text (may be None).

    Returns:
        The first DateMatch produced by a rule, or None if no rule applies.
    """
    if text is None or not isinstance(text, str):
        return None

    stripped = text.strip()
    if not stripped:
        return None

    for rule in DATE_RULES:
        result = rule(stripped)
        if result is not None:
            return result
    return None


def parse_date(text: str | None) -> date | None:
    """Parse free-form date text into a calendar date.

    Never raises: unrecognized or ambiguous text returns None.

    Args:
        text: Raw date text (may be None).

    Returns:
        Parsed date or None.
    """
    result = match_date(text)
    return result.value if result is not None else None
