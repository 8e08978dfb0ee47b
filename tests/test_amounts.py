"""
Tests for number parsing, line scanning and reconciliation.
"""

from decimal import Decimal

import pytest

from invoice_interpreter.amounts import (
    CurrencyAmount,
    VatBreakdown,
    parse_amount,
    reconcile,
    scan_lines,
)
from invoice_interpreter.amounts.line_scanner import last_amount_on_line, rate_pattern
from invoice_interpreter.amounts.number_parser import strip_currency


class TestParseAmount:
    """Regional decimal/grouping resolution."""

    @pytest.mark.parametrize("raw, expected", [
        ("1.234,56", "1234.56"),
        ("1 234,56", "1234.56"),
        ("12.345.678,9", "12345678.9"),
        ("1,234.56", "1234.56"),
        ("1,234,567.50", "1234567.50"),
        ("1234,56", "1234.56"),
        ("1234.56", "1234.56"),
        ("1234", "1234"),
    ])
    def test_formats(self, raw, expected):
        result = parse_amount(raw, "EUR")
        assert result.amount == Decimal(expected)

    def test_amount_is_exact_decimal(self):
        result = parse_amount("0,10", "EUR")
        assert isinstance(result.amount, Decimal)
        assert result.amount == Decimal("0.10")

    def test_parsed_confidence_and_currency(self):
        result = parse_amount("99,90", "DKK")
        assert result.confidence == 0.8
        assert result.currency_code == "DKK"

    def test_strips_currency_vocabulary(self):
        assert parse_amount("1.234,56 kr", "ISK").amount == Decimal("1234.56")
        assert parse_amount("€ 12,50", "EUR").amount == Decimal("12.50")
        assert parse_amount("$1,234.56", "USD").amount == Decimal("1234.56")

    def test_longer_currency_names_stripped_first(self):
        assert strip_currency("500 krónur", "ISK") == "500"

    def test_non_breaking_space_grouping(self):
        assert parse_amount("1\u00a0234,56", "EUR").amount == Decimal("1234.56")

    @pytest.mark.parametrize("raw", ["", "abc", "12 items", "1.2.3", "12,345,6", "1.200"])
    def test_unparseable_is_none(self, raw):
        assert parse_amount(raw, "EUR") is None

    def test_none_input(self):
        assert parse_amount(None, "EUR") is None


class TestRatePattern:
    """VAT rate anchoring inside a line."""

    def test_rate_followed_by_amount(self):
        match = rate_pattern(24.0).search("VSK 24% 1200")
        assert match.group(1) == "1200"

    def test_zero_rate_does_not_match_inside_numbers(self):
        assert rate_pattern(0.0).search("VSK 24% 1200") is None

    def test_fractional_rate(self):
        match = rate_pattern(5.5).search("TVA 5,5% 1,10")
        assert match.group(1) == "1,10"

    def test_integer_rate_does_not_match_longer_number(self):
        assert rate_pattern(2.1).search("TVA 20% 4,00") is None


class TestScanLines:
    """Line-by-line location of VAT, subtotal and total figures."""

    def test_icelandic_receipt(self):
        result = scan_lines("Bónus\nVSK 24% 1200\nSamtals 6200", "ISK", "is")
        assert list(result.rate_map) == [24.0]
        assert result.rate_map[24.0].amount == Decimal("1200")
        assert result.total.amount == Decimal("6200")
        assert result.subtotal is None
        assert result.tax is None

    def test_multiple_rates(self):
        text = "VSK 24% 1200\nVSK 11% 330\nSamtals 7000"
        result = scan_lines(text, "ISK", "is")
        assert result.rate_map[24.0].amount == Decimal("1200")
        assert result.rate_map[11.0].amount == Decimal("330")

    def test_later_line_overwrites_same_rate(self):
        text = "VSK 24% 100\nVSK 24% 250"
        result = scan_lines(text, "ISK", "is")
        assert result.rate_map[24.0].amount == Decimal("250")

    def test_total_takes_last_number_on_line(self):
        result = scan_lines("Total 3 items 45.90", "USD", "en")
        assert result.total.amount == Decimal("45.90")

    def test_first_total_line_wins(self):
        result = scan_lines("Total 10.00\nTotal 99.00", "USD", "en")
        assert result.total.amount == Decimal("10.00")

    def test_subtotal_line_is_not_a_total(self):
        text = "Subtotal 100.00\nTax 8.50\nTotal 108.50"
        result = scan_lines(text, "USD", "en")
        assert result.subtotal.amount == Decimal("100.00")
        assert result.total.amount == Decimal("108.50")

    def test_german_zwischensumme(self):
        text = "Zwischensumme 20,00\nMwSt 19% 3,80\nSumme 23,80"
        result = scan_lines(text, "EUR", "de")
        assert result.subtotal.amount == Decimal("20.00")
        assert result.total.amount == Decimal("23.80")
        assert result.rate_map[19.0].amount == Decimal("3.80")

    def test_french_net_a_payer_is_a_total(self):
        result = scan_lines("TVA 20% 20,00\nNet à payer 120,00", "EUR", "fr")
        assert result.total.amount == Decimal("120.00")
        assert result.rate_map[20.0].amount == Decimal("20.00")

    def test_grand_total_net_is_a_total(self):
        result = scan_lines("Grand total net 45.00", "USD", "en")
        assert result.total.amount == Decimal("45.00")

    def test_unknown_language_uses_english_terms(self):
        result = scan_lines("Total: 123.45 €", "EUR", None)
        assert result.total.amount == Decimal("123.45")
        assert result.rate_map == {}

    def test_empty_text(self):
        result = scan_lines("", "EUR")
        assert result.subtotal is None
        assert result.total is None
        assert result.rate_map == {}

    def test_last_amount_on_line_without_numbers(self):
        assert last_amount_on_line("Samtals", "ISK") is None


class TestReconcile:
    """Single-step subtotal/tax/total inference."""

    def test_total_from_subtotal_and_tax(self, isk):
        result = reconcile(isk(5000), isk(1200), {}, None, "ISK")
        assert result.total.amount == Decimal("6200")
        assert result.total.confidence == 0.9

    @pytest.mark.parametrize("subtotal, tax", [
        ("0", "0"),
        ("19.99", "4.80"),
        ("100000.01", "0.99"),
    ])
    def test_total_identity(self, subtotal, tax):
        result = reconcile(
            CurrencyAmount(Decimal(subtotal), "EUR"),
            CurrencyAmount(Decimal(tax), "EUR"),
            {},
            None,
            "EUR"
        )
        assert result.total.amount == Decimal(subtotal) + Decimal(tax)

    def test_subtotal_from_total_and_tax(self, isk):
        result = reconcile(None, isk(1200), {}, isk(6200), "ISK")
        assert result.subtotal.amount == Decimal("5000")
        assert result.subtotal.confidence == 0.8

    def test_tax_from_total_and_subtotal(self, isk):
        result = reconcile(isk(5000), None, {}, isk(6200), "ISK")
        assert result.tax.amount == Decimal("1200")
        assert result.tax.confidence == 0.8

    def test_negative_derived_tax_rejected(self, isk):
        result = reconcile(isk(7000), None, {}, isk(6200), "ISK")
        assert result.tax is None

    def test_rounding_noise_tax_accepted(self):
        subtotal = CurrencyAmount(Decimal("10.01"), "EUR")
        total = CurrencyAmount(Decimal("10.00"), "EUR")
        result = reconcile(subtotal, None, {}, total, "EUR")
        assert result.tax.amount == Decimal("-0.01")

    def test_rate_map_sum_becomes_tax(self, isk):
        rate_map = {24.0: isk(1200), 11.0: isk(330)}
        result = reconcile(None, None, rate_map, None, "ISK")
        assert result.tax.amount == Decimal("1530")
        assert result.tax.confidence == 0.9

    def test_explicit_tax_beats_rate_map(self, isk):
        result = reconcile(None, isk(100), {24.0: isk(1200)}, None, "ISK")
        assert result.tax.amount == Decimal("100")

    def test_two_missing_is_noop(self, isk):
        result = reconcile(None, None, {}, isk(6200), "ISK")
        assert result.subtotal is None
        assert result.tax is None
        assert result.total.amount == Decimal("6200")

    def test_all_missing_is_noop(self):
        result = reconcile(None, None, {}, None, "EUR")
        assert result == (None, None, None)

    def test_nothing_missing_is_noop(self, isk):
        result = reconcile(isk(1), isk(2), {}, isk(99), "ISK")
        assert result.total.amount == Decimal("99")

    def test_single_step_only(self, isk):
        """Rate-map tax fills one field; the second gap stays open."""
        result = reconcile(None, None, {24.0: isk(1200)}, None, "ISK")
        assert result.subtotal is None
        assert result.total is None


class TestVatBreakdown:
    """Breakdown value type."""

    def test_rate_map_is_read_only(self, isk):
        breakdown = VatBreakdown(rate_map={24.0: isk(1200)})
        with pytest.raises(TypeError):
            breakdown.rate_map[11.0] = isk(1)

    def test_missing_amounts(self, isk):
        breakdown = VatBreakdown(total=isk(6200))
        assert breakdown.missing_amounts == ["subtotal", "tax"]

    def test_to_dict_sorts_rates_descending(self, isk):
        breakdown = VatBreakdown(rate_map={11.0: isk(330), 24.0: isk(1200)})
        assert list(breakdown.to_dict()["rate_map"]) == ["24.0", "11.0"]
        assert breakdown.to_dict()["rate_map"]["24.0"]["amount"] == "1200"
