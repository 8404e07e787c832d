"""Tests for free-form date parsing."""

from datetime import date

import pytest

from olympic_dwh.normalize.dates import (
    DATE_RULES,
    match_ambiguous_range,
    match_circa_bare,
    match_circa_parenthesized,
    match_date,
    match_day_month_year,
    match_month_year,
    match_year_only,
    month_number,
    parse_date,
)


class TestMonthNumber:
    """Tests for month_number function."""

    def test_full_names(self) -> None:
        """Test full English month names in any case."""
        assert month_number("January") == 1
        assert month_number("september") == 9
        assert month_number("DECEMBER") == 12

    def test_abbreviations(self) -> None:
        """Test three-letter abbreviations."""
        assert month_number("Jan") == 1
        assert month_number("aug") == 8
        assert month_number("May") == 5

    def test_not_a_month(self) -> None:
        """Test that other words are rejected."""
        assert month_number("circa") is None
        assert month_number("Ju") is None
        assert month_number("Augustus") is None


class TestDateRules:
    """Tests for each rule in isolation."""

    def test_ambiguous_range_matches_with_null_payload(self) -> None:
        """Test that a year range matches but yields no date."""
        result = match_ambiguous_range("(1926 or 1927)")
        assert result is not None
        assert result.rule == "ambiguous_range"
        assert result.value is None

    def test_ambiguous_range_no_match(self) -> None:
        """Test that a single year is not a range."""
        assert match_ambiguous_range("1926") is None

    def test_day_month_year(self) -> None:
        """Test a full date."""
        result = match_day_month_year("1 April 1871 in Paris, Île-de-France (FRA)")
        assert result is not None
        assert result.value == date(1871, 4, 1)

    def test_day_month_year_invalid_calendar_date(self) -> None:
        """Test that 31 February is no match rather than an error."""
        assert match_day_month_year("31 February 1900") is None

    def test_day_month_year_unknown_month(self) -> None:
        """Test that an unknown month word is no match."""
        assert match_day_month_year("12 Smarch 1900") is None

    def test_month_year_imputes_first_day(self) -> None:
        """Test that month-year dates use the 1st of the month."""
        result = match_month_year("April 1871")
        assert result is not None
        assert result.value == date(1871, 4, 1)

    def test_month_year_rejects_circa(self) -> None:
        """Test that "circa 1923" is not taken for a month-year date."""
        assert match_month_year("circa 1923") is None

    def test_circa_parenthesized(self) -> None:
        """Test parenthesized approximate years."""
        assert match_circa_parenthesized("(circa 1923)").value == date(1923, 1, 1)
        assert match_circa_parenthesized("in Rome (c. 1915)").value == date(1915, 1, 1)

    def test_circa_bare(self) -> None:
        """Test bare approximate years."""
        assert match_circa_bare("circa 1923").value == date(1923, 1, 1)
        assert match_circa_bare("born c. 1880 in Oslo").value == date(1880, 1, 1)

    def test_circa_bare_requires_word_boundary(self) -> None:
        """Test that "circa" glued to a preceding word is ignored."""
        assert match_circa_bare("xcirca 1923") is None

    def test_year_only(self) -> None:
        """Test a leading bare year."""
        assert match_year_only("1871 in London").value == date(1871, 1, 1)

    def test_year_only_requires_leading_year(self) -> None:
        """Test that a year in the middle of text is not picked up."""
        assert match_year_only("in London 1871") is None

    def test_rule_precedence_order(self) -> None:
        """Test that the rules are evaluated in the documented order."""
        assert [rule.__name__ for rule in DATE_RULES] == [
            "match_ambiguous_range",
            "match_day_month_year",
            "match_month_year",
            "match_circa_parenthesized",
            "match_circa_bare",
            "match_year_only",
        ]


class TestParseDate:
    """Tests for parse_date function."""

    @pytest.mark.parametrize(
        ("text", "expected"),
        [
            ("1 April 1871", date(1871, 4, 1)),
            ("21 Dec 1950 in Sapporo, Hokkaido (JPN)", date(1950, 12, 21)),
            ("April 1871", date(1871, 4, 1)),
            ("circa 1923", date(1923, 1, 1)),
            ("(circa 1923)", date(1923, 1, 1)),
            ("c. 1915", date(1915, 1, 1)),
            ("1871", date(1871, 1, 1)),
            ("  1 april 1871  ", date(1871, 4, 1)),
        ],
    )
    def test_parses_supported_formats(self, text: str, expected: date) -> None:
        """Test each supported date format."""
        assert parse_date(text) == expected

    @pytest.mark.parametrize(
        "text",
        ["1926 or 1927", "(1926 or 1927) in Berlin", "", "   ", "unknown", "in Paris", None],
    )
    def test_returns_none_for_unparseable(self, text: str | None) -> None:
        """Test that ambiguous or unrecognized text gives None."""
        assert parse_date(text) is None

    def test_ambiguous_range_wins_over_year_only(self) -> None:
        """Test that "1926 or 1927" is not resolved to 1926."""
        result = match_date("1926 or 1927")
        assert result is not None
        assert result.rule == "ambiguous_range"
        assert parse_date("1926 or 1927") is None

    def test_circa_wins_over_year_inside_location(self) -> None:
        """Test the approximate-year rule for a fragment with a location."""
        result = match_date("(circa 1923) in Tokyo, ? (JPN)")
        assert result is not None
        assert result.rule == "circa_parenthesized"
        assert result.value == date(1923, 1, 1)

    def test_invalid_calendar_date_falls_through(self) -> None:
        """Test that 31 February falls back to a later rule instead of raising."""
        assert parse_date("31 February 1900") is None
        assert match_date("31 February 1900") is None

    def test_non_string_input(self) -> None:
        """Test that non-string input never raises."""
        assert parse_date(1871) is None  # type: ignore[arg-type]

    def test_never_raises_on_odd_input(self) -> None:
        """Test a grab-bag of malformed input."""
        for text in ["0 January 1900", "99 May 2000", "May 0000", "(c. 0000)", "0000"]:
            parse_date(text)
