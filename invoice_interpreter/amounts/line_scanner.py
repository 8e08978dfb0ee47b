"""
Line Scanner.

Walks the receipt line by line with the vocabularies of the detected
language and collects:
    - amounts printed next to a VAT rate (one entry per rate)
    - the first total line
    - the first subtotal line

Total and subtotal take the LAST numeric run on their line: printed rows
tend to start with quantities or percentages and end with the money value.

Example:
    >>> result = scan_lines("VSK 24% 1200\\nSamtals 6200", "ISK", "is")
    >>> result.rate_map[24.0].amount, result.total.amount
    (Decimal('1200'), Decimal('6200'))
"""

import re
from typing import Dict, List, NamedTuple, Optional, Sequence

from invoice_interpreter.locales.detectors import country_for_language, vat_rates_for_country
from invoice_interpreter.locales.tables import ENGLISH, SUBTOTAL_TERMS, TOTAL_TERMS, VAT_TERMS
from invoice_interpreter.utils.helpers import split_lines
from invoice_interpreter.utils.logger import get_logger
from .currency_amount import CurrencyAmount
from .number_parser import parse_amount

logger = get_logger(__name__)

# Starts and ends with a digit; may contain grouping/decimal separators.
NUMERIC_RUN = r'\d[\d.,\s]*\d|\d'
_NUMERIC_RUN_PATTERN = re.compile(NUMERIC_RUN)


class LineScanResult(NamedTuple):
    subtotal: Optional[CurrencyAmount]
    tax: Optional[CurrencyAmount]
    rate_map: Dict[float, CurrencyAmount]
    total: Optional[CurrencyAmount]


def rate_pattern(rate: float) -> re.Pattern:
    """
    Pattern for an amount printed after a VAT rate.

    The integer part of the rate must stand alone (not inside a longer
    number), may carry a one/two digit fraction and a percent sign, and is
    followed somewhere later on the line by the numeric run captured as
    group 1.
    """
    return re.compile(
        rf'(?<![\d.,]){int(rate)}(?:[.,]\d{{1,2}})?(?![.,]?\d)\s*%?.*?({NUMERIC_RUN})',
        re.IGNORECASE
    )


def last_amount_on_line(line: str, currency_code: str) -> Optional[CurrencyAmount]:
    """Parse the trailing numeric run of a line."""
    runs = _NUMERIC_RUN_PATTERN.findall(line)
    if not runs:
        return None
    return parse_amount(runs[-1], currency_code)


def _contains_any(lower_line: str, terms: Sequence[str]) -> bool:
    return any(term.lower() in lower_line for term in terms)


def mask_terms(lower_line: str, terms: Sequence[str]) -> str:
    """Blank out every occurrence of the terms, longest first."""
    for term in sorted(terms, key=len, reverse=True):
        lower_line = lower_line.replace(term.lower(), " ")
    return lower_line


def scan_lines(
    text: str,
    currency_code: str,
    language_code: Optional[str] = None
) -> LineScanResult:
    """
    Locate VAT-rate amounts, subtotal and total in receipt text.

    Args:
        text: Recognized receipt text.
        currency_code: Currency used to parse every amount.
        language_code: Detected language; English vocabularies when None
            or unknown.

    Returns:
        LineScanResult. The scanner never reads an explicit tax figure;
        tax is left to reconciliation.
    """
    vat_terms = VAT_TERMS.get(language_code) or VAT_TERMS[ENGLISH]
    total_terms = TOTAL_TERMS.get(language_code) or TOTAL_TERMS[ENGLISH]
    subtotal_terms = SUBTOTAL_TERMS.get(language_code) or SUBTOTAL_TERMS[ENGLISH]

    rates = vat_rates_for_country(country_for_language(language_code))
    rate_patterns = [(rate, rate_pattern(rate)) for rate in rates]

    subtotal: Optional[CurrencyAmount] = None
    total: Optional[CurrencyAmount] = None
    rate_map: Dict[float, CurrencyAmount] = {}

    lines: List[str] = split_lines(text)
    for line in lines:
        lower_line = line.lower()

        if _contains_any(lower_line, vat_terms):
            for rate, pattern in rate_patterns:
                match = pattern.search(line)
                if match is None:
                    continue
                amount = parse_amount(match.group(1), currency_code)
                if amount is not None:
                    rate_map[rate] = amount
                    logger.debug(f"VAT {rate}% -> {amount.amount} ({line!r})")

        is_subtotal_line = _contains_any(lower_line, subtotal_terms)

        # "subtotal" contains "total", "zwischensumme" contains "summe"
        total_candidate = mask_terms(lower_line, subtotal_terms)
        if total is None and _contains_any(total_candidate, total_terms):
            total = last_amount_on_line(line, currency_code)
            if total is not None:
                logger.debug(f"Total -> {total.amount} ({line!r})")

        if subtotal is None and is_subtotal_line:
            subtotal = last_amount_on_line(line, currency_code)
            if subtotal is not None:
                logger.debug(f"Subtotal -> {subtotal.amount} ({line!r})")

    return LineScanResult(subtotal=subtotal, tax=None, rate_map=rate_map, total=total)
