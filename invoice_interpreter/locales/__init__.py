"""
Locale Module for the Invoice Interpretation Engine.

This module provides:
    - Static per-language and per-country vocabulary tables
    - Currency detection
    - Language detection and language -> country mapping
    - Country VAT rate sets
"""

from .detectors import (
    detect_currency,
    detect_language,
    currency_scores,
    language_scores,
    country_for_language,
    vat_rates_for_country,
    resolve_currency
)

__all__ = [
    'detect_currency',
    'detect_language',
    'currency_scores',
    'language_scores',
    'country_for_language',
    'vat_rates_for_country',
    'resolve_currency'
]
