"""
Currency and Language Detectors.

Both detectors share one token-scoring scheme: the text is lower-cased and
split on whitespace, and each vocabulary entry scores one point for every
token that contains it. The highest score wins; ties go to the entry
declared first in the table.

Example:
    >>> detect_currency("Total: 1.234 kr VSK 24%")
    'ISK'
    >>> detect_language("VSK 24% 1200")
    'is'
    >>> country_for_language("is")
    'IS'
"""

from typing import Dict, Iterable, Mapping, Optional, Tuple

from invoice_interpreter.utils.helpers import normalize_text
from invoice_interpreter.utils.logger import get_logger
from .tables import (
    COUNTRY_CURRENCY,
    CURRENCY_PATTERNS,
    DEFAULT_CURRENCY,
    DEFAULT_VAT_RATES,
    LANGUAGE_TO_COUNTRY,
    VAT_RATES_BY_COUNTRY,
    VAT_TERMS,
)

logger = get_logger(__name__)


def _score_vocabularies(
    text: str,
    vocabularies: Mapping[str, Iterable[str]]
) -> Dict[str, int]:
    tokens = normalize_text(text).lower().split()
    scores = {}
    for key, patterns in vocabularies.items():
        scores[key] = sum(
            1
            for pattern in patterns
            for token in tokens
            if pattern.lower() in token
        )
    return scores


def _best_key(scores: Dict[str, int]) -> Optional[str]:
    """Highest positive score; first declared key wins a tie."""
    best_key = None
    best_score = 0
    for key, score in scores.items():
        if score > best_score:
            best_key, best_score = key, score
    return best_key


def currency_scores(text: str) -> Dict[str, int]:
    """Per-currency token scores, in table priority order."""
    return _score_vocabularies(text, CURRENCY_PATTERNS)


def language_scores(text: str) -> Dict[str, int]:
    """Per-language VAT-term scores, in table priority order."""
    return _score_vocabularies(text, VAT_TERMS)


def detect_currency(text: str) -> str:
    """
    Detect the most likely currency of a receipt text.

    Args:
        text: Recognized receipt text.

    Returns:
        ISO currency code; "EUR" when no currency vocabulary occurs.
    """
    scores = currency_scores(text)
    currency = _best_key(scores) or DEFAULT_CURRENCY
    logger.debug(f"Currency detection scores: {scores} -> {currency}")
    return currency


def detect_language(text: str) -> Optional[str]:
    """
    Detect the receipt language from its VAT vocabulary.

    Args:
        text: Recognized receipt text.

    Returns:
        Language code, or None when no VAT term occurs.
    """
    scores = language_scores(text)
    language = _best_key(scores)
    logger.debug(f"Language detection scores: {scores} -> {language}")
    return language


def country_for_language(language: Optional[str]) -> Optional[str]:
    return LANGUAGE_TO_COUNTRY.get(language) if language else None


def vat_rates_for_country(country: Optional[str]) -> Tuple[float, ...]:
    return VAT_RATES_BY_COUNTRY.get(country, DEFAULT_VAT_RATES)


def resolve_currency(text: str, country: Optional[str] = None) -> str:
    """
    Currency for a receipt, falling back to the detected country.

    A receipt that names no currency at all (e.g. an Icelandic slip that
    only prints "VSK" and bare numbers) takes the national currency of the
    country its language maps to, and only then the "EUR" default.

    Args:
        text: Recognized receipt text.
        country: Country code from language detection, if any.

    Returns:
        ISO currency code.
    """
    scores = currency_scores(text)
    currency = _best_key(scores)
    if currency is None:
        currency = COUNTRY_CURRENCY.get(country, DEFAULT_CURRENCY)
        logger.debug(f"No currency vocabulary found, using {currency} (country={country})")
    return currency
