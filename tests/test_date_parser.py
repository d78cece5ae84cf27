"""Tests for date_parser module - ISO, US and European date resolution."""

import pytest

from spendpivot.date_parser import ResolvedDate, resolve_date


class TestYearFirst:
    """Tests for YYYY-MM-DD and YYYY/MM/DD dates."""

    def test_iso_date(self):
        """ISO dates are taken as-is."""
        assert resolve_date('2025-04-25') == ResolvedDate(2025, 4, 25)

    def test_slash_year_first(self):
        """Year-first dates with slashes are taken as-is."""
        assert resolve_date('2025/04/25') == ResolvedDate(2025, 4, 25)

    def test_single_digit_month_and_day(self):
        """Month and day may be a single digit."""
        assert resolve_date('2024-1-5') == ResolvedDate(2024, 1, 5)

    def test_surrounding_whitespace(self):
        """Whitespace around the date is ignored."""
        assert resolve_date('  2025-04-25 ') == ResolvedDate(2025, 4, 25)

    def test_month_out_of_range(self):
        """A month over 12 is not a date."""
        assert resolve_date('2025-13-01') is None


class TestYearLast:
    """Tests for N/N/YYYY and N-N-YYYY disambiguation."""

    def test_ambiguous_defaults_to_us(self):
        """03/04/2025 is March 4th."""
        assert resolve_date('03/04/2025') == ResolvedDate(2025, 3, 4)

    def test_first_token_over_12_is_day(self):
        """25/04/2025 can only be the 25th of April."""
        assert resolve_date('25/04/2025') == ResolvedDate(2025, 4, 25)

    def test_second_token_over_12_is_day(self):
        """04/25/2025 is plain US order."""
        assert resolve_date('04/25/2025') == ResolvedDate(2025, 4, 25)

    def test_dashes(self):
        """Dashes work like slashes."""
        assert resolve_date('12-31-2024') == ResolvedDate(2024, 12, 31)
        assert resolve_date('31-12-2024') == ResolvedDate(2024, 12, 31)

    def test_both_tokens_over_12(self):
        """Neither reading is valid when both tokens exceed 12."""
        assert resolve_date('25/25/2025') is None

    def test_mixed_separators(self):
        """The two separators must match."""
        assert resolve_date('03/04-2025') is None


class TestNoMatch:
    """Tests for inputs that are not recognized dates."""

    @pytest.mark.parametrize('text', [
        '',
        'yesterday',
        '03/04/25',
        '2025-04',
        '25.04.2025',
        'Apr 25, 2025',
        '2025-04-25T10:00:00',
    ])
    def test_unrecognized_shapes(self, text):
        """Other shapes never raise and yield None."""
        assert resolve_date(text) is None

    def test_none_input(self):
        """None is treated like an empty string."""
        assert resolve_date(None) is None
