"""
Tests for currency and language detection.
"""

import pytest

from invoice_interpreter.locales import (
    country_for_language,
    detect_currency,
    detect_language,
    resolve_currency,
    vat_rates_for_country,
)
from invoice_interpreter.locales.detectors import currency_scores
from invoice_interpreter.locales.tables import (
    CURRENCY_PATTERNS,
    DEFAULT_VAT_RATES,
    VAT_RATES_BY_COUNTRY,
)


class TestCurrencyDetection:
    """Token-scoring currency detection."""

    def test_kronur_resolves_to_isk(self):
        assert detect_currency("Total: 1.234 kr VSK 24%") == "ISK"

    def test_shared_kr_tie_goes_to_first_declared(self):
        """"kr" scores for ISK, DKK, NOK and SEK alike."""
        scores = currency_scores("250 kr")
        assert scores["ISK"] == scores["DKK"] == scores["NOK"] == scores["SEK"] == 1
        assert detect_currency("250 kr") == "ISK"

    def test_iso_code_breaks_kr_tie(self):
        assert detect_currency("Total 250 kr SEK") == "SEK"

    def test_euro_symbol(self):
        assert detect_currency("Total: 123.45 €") == "EUR"

    def test_pound_and_dollar(self):
        assert detect_currency("Total £12.50") == "GBP"
        assert detect_currency("Amount due $40.00 USD") == "USD"

    def test_no_vocabulary_defaults_to_eur(self):
        assert detect_currency("") == "EUR"
        assert detect_currency("1200 6200") == "EUR"

    def test_case_insensitive(self):
        assert detect_currency("total 99 chf") == "CHF"

    def test_danish_and_norwegian_codes(self):
        assert detect_currency("Total 250 kr DKK") == "DKK"
        assert detect_currency("Sum 99 kr NOK") == "NOK"


class TestLanguageDetection:
    """VAT-term language detection."""

    def test_icelandic(self):
        assert detect_language("VSK 24% 1200") == "is"

    def test_german(self):
        assert detect_language("MwSt 19% 3,80\nSumme 23,80") == "de"

    def test_french(self):
        assert detect_language("TVA 20% 4,00") == "fr"

    def test_moms_tie_goes_to_danish(self):
        assert detect_language("Moms 25% 50,00") == "da"

    def test_no_vat_term_is_none(self):
        assert detect_language("Bónus\nSamtals 6200") is None
        assert detect_language("") is None


class TestLocaleMapping:
    """Language to country, country to currency and VAT rates."""

    def test_country_for_language(self):
        assert country_for_language("is") == "IS"
        assert country_for_language("en") == "US"
        assert country_for_language("de") == "DE"
        assert country_for_language(None) is None
        assert country_for_language("xx") is None

    def test_vat_rates_for_country(self):
        assert vat_rates_for_country("IS") == (24.0, 11.0, 0.0)
        assert vat_rates_for_country("FR") == VAT_RATES_BY_COUNTRY["FR"]

    def test_unknown_country_uses_default_rates(self):
        assert vat_rates_for_country(None) == DEFAULT_VAT_RATES
        assert vat_rates_for_country("ZZ") == DEFAULT_VAT_RATES

    def test_resolve_currency_prefers_vocabulary(self):
        assert resolve_currency("Total 10 €", "IS") == "EUR"

    def test_resolve_currency_falls_back_to_country(self):
        assert resolve_currency("VSK 24% 1200", "IS") == "ISK"
        assert resolve_currency("MwSt 19% 3,80", "DE") == "EUR"

    def test_resolve_currency_without_country(self):
        assert resolve_currency("1200", None) == "EUR"

    def test_tables_are_read_only(self):
        with pytest.raises(TypeError):
            CURRENCY_PATTERNS["XXX"] = ("x",)
