"""
Numeric Token Parser.

Converts a raw numeric substring into a CurrencyAmount, resolving the
regional decimal/grouping ambiguity by trying a fixed, ordered list of
formats. The same digits can mean different things ("1,234" is a US
thousand or a European 1.234), so the order decides: grouped forms are
tried before bare decimals.

Example:
    >>> parse_amount("1.234,56 kr", "ISK").amount
    Decimal('1234.56')
    >>> parse_amount("1,234.56", "USD").amount
    Decimal('1234.56')
    >>> parse_amount("12 items", "EUR") is None
    True
"""

import re
from decimal import Decimal, InvalidOperation
from typing import Callable, List, Optional, Tuple

from invoice_interpreter.locales.tables import CURRENCY_PATTERNS
from invoice_interpreter.utils.helpers import collapse_whitespace
from invoice_interpreter.utils.logger import get_logger
from .currency_amount import CurrencyAmount, PARSED_CONFIDENCE

logger = get_logger(__name__)

# (name, full-match pattern, digits -> plain decimal string)
NUMBER_FORMATS: List[Tuple[str, re.Pattern, Callable[[str], str]]] = [
    (
        'european_grouped',
        re.compile(r'\d{1,3}(?:[. ]\d{3})*,\d{1,2}'),
        lambda s: re.sub(r'[. ]', '', s).replace(',', '.')
    ),
    (
        'us_grouped',
        re.compile(r'\d{1,3}(?:,\d{3})*\.\d{1,2}'),
        lambda s: s.replace(',', '')
    ),
    (
        'comma_decimal',
        re.compile(r'\d+,\d{1,2}'),
        lambda s: s.replace(',', '.')
    ),
    (
        'dot_decimal',
        re.compile(r'\d+\.\d{1,2}'),
        lambda s: s
    ),
    (
        'integer',
        re.compile(r'\d+'),
        lambda s: s
    ),
]


def strip_currency(text: str, currency_code: str) -> str:
    """
    Remove every vocabulary pattern of one currency from a numeric string.

    Longer patterns go first so "krónur" is not left as "ónur" after "kr"
    has been removed.
    """
    patterns = sorted(CURRENCY_PATTERNS.get(currency_code, ()), key=len, reverse=True)
    for pattern in patterns:
        text = re.sub(re.escape(pattern), '', text, flags=re.IGNORECASE)
    return text.strip()


def parse_amount(raw_text: str, currency_code: str) -> Optional[CurrencyAmount]:
    """
    Parse a numeric token into a currency amount.

    Args:
        raw_text: Numeric substring as recognized, possibly with currency.
        currency_code: Currency whose symbols/names should be stripped.

    Returns:
        CurrencyAmount with confidence 0.8, or None if no format matches.
    """
    if not raw_text:
        return None

    number_text = strip_currency(collapse_whitespace(raw_text), currency_code)

    for name, pattern, to_plain in NUMBER_FORMATS:
        if pattern.fullmatch(number_text):
            try:
                amount = Decimal(to_plain(number_text))
            except InvalidOperation:
                return None
            logger.debug(f"Parsed '{raw_text}' as {name}: {amount} {currency_code}")
            return CurrencyAmount(amount, currency_code, PARSED_CONFIDENCE)

    logger.debug(f"Could not parse amount: '{raw_text}'")
    return None
