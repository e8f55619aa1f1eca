"""
Unit tests for locale-aware number normalization.
"""

import pytest
from energy_invoice_extractor.extractors.number_normalizer import (
    normalize_german_decimal,
    parse_kwh_value,
    format_kwh,
    within_bounds,
)


class TestNormalizeGermanDecimal:
    """Test the separator decision table."""

    @pytest.mark.parametrize("raw", ["2573.1", "2.573,1", "2,573.1"])
    def test_canonical_german_and_english_forms_agree(self, raw):
        """Test that all three spellings normalize to the same value."""
        assert normalize_german_decimal(raw) == 2573.1

    def test_decimal_comma(self):
        """Test comma followed by 1-2 digits is a decimal separator."""
        assert normalize_german_decimal("2573,1") == 2573.1
        assert normalize_german_decimal("12,50") == 12.5

    def test_comma_as_thousands_separator(self):
        """Test comma followed by 3 digits groups thousands."""
        assert normalize_german_decimal("2,573") == 2573.0

    def test_dot_as_thousands_separator(self):
        """Test dot followed by 3 digits groups thousands."""
        assert normalize_german_decimal("2.573") == 2573.0
        assert normalize_german_decimal("1.234.567") == 1234567.0

    def test_dot_as_decimal_point(self):
        """Test dot followed by 1-2 digits is kept as decimal point."""
        assert normalize_german_decimal("57.25") == 57.25

    def test_plain_integer(self):
        """Test token without separators."""
        assert normalize_german_decimal("2573") == 2573.0

    def test_surrounding_whitespace_is_ignored(self):
        """Test that whitespace around the token does not matter."""
        assert normalize_german_decimal(" 2.573,1 ") == 2573.1

    @pytest.mark.parametrize("raw", ["", "abc", "1,2,3", "nan", "1e5", "12,5kWh"])
    def test_unparsable_tokens(self, raw):
        """Test that unparsable tokens yield None instead of raising."""
        assert normalize_german_decimal(raw) is None

    def test_none(self):
        """Test None input."""
        assert normalize_german_decimal(None) is None


class TestParseKwhValue:
    """Test the consumption acceptance bounds."""

    def test_value_inside_bounds(self):
        """Test typical yearly consumption."""
        assert parse_kwh_value("2.573,1", (1, 100000)) == 2573.1

    def test_bounds_are_exclusive(self):
        """Test that exactly 1 and exactly 100000 are rejected."""
        assert parse_kwh_value("1,0", (1, 100000)) is None
        assert parse_kwh_value("100.000", (1, 100000)) is None

    def test_value_rounding_onto_bound_is_rejected(self):
        """Test that a value whose one-decimal form reaches the bound is rejected."""
        assert parse_kwh_value("99.999,97", (1, 100000)) is None
        assert parse_kwh_value("1,04", (1, 100000)) is None

    def test_invoice_numbers_and_years_are_filtered(self):
        """Test that large numbers and fractions below 1 are not consumption."""
        assert parse_kwh_value("2023004711", (1, 100000)) is None
        assert parse_kwh_value("0,5", (1, 100000)) is None

    def test_default_bounds_from_settings(self):
        """Test that default bounds come from settings."""
        assert parse_kwh_value("99.999,9") == 99999.9
        assert parse_kwh_value("250.000") is None

    def test_unparsable_token(self):
        """Test that garbage yields None."""
        assert parse_kwh_value("x.y", (1, 100000)) is None

    def test_within_bounds(self):
        """Test the bounds helper directly."""
        assert within_bounds(2573.1, (1, 100000))
        assert not within_bounds(float('nan'), (1, 100000))
        assert not within_bounds(float('inf'), (1, 100000))


class TestFormatKwh:
    """Test canonical kWh rendering."""

    def test_one_fractional_digit(self):
        """Test that exactly one digit follows the decimal point."""
        assert format_kwh(2573.0) == "2573.0"
        assert format_kwh(2573.14) == "2573.1"
        assert format_kwh(12.5) == "12.5"
