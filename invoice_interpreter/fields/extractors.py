"""
Field Extractors.

This module derives the non-monetary fields of a receipt, independently of
the currency/VAT pipeline:
    - vendor name (first line that is not just digits/punctuation)
    - invoice number (ordered regex list)
    - date (day-first formats only)

Month-first (US) dates are not supported: "03/15/2024" has no valid
day-first reading and yields None, while "03/04/2024" is read as 3 April.
"""

import re
import unicodedata
from datetime import date, datetime
from typing import List, Optional

from invoice_interpreter.config import get_config
from invoice_interpreter.utils.helpers import normalize_text, split_lines
from invoice_interpreter.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

# Icelandic for "unknown company"
UNKNOWN_VENDOR = "Óþekkt fyrirtæki"

INVOICE_NUMBER_PATTERNS = [
    re.compile(r'(?:reikningur|invoice|receipt)\s*(?:#\s*:?|:)\s*(\d+)', re.IGNORECASE),
    re.compile(r'#(\d+)'),
    re.compile(r'\bnr\.?\s*(\d+)', re.IGNORECASE),
    re.compile(r'\bnumber\s*[:#]\s*(\d+)', re.IGNORECASE),
]

DATE_PATTERN = re.compile(r'(?<!\d)(\d{1,2})[./-]\d{1,2}[./-]\d{2,4}(?!\d)')

DEFAULT_DATE_FORMATS = [
    "%d.%m.%Y",
    "%d/%m/%Y",
    "%d-%m-%Y",
    "%d.%m.%y",
    "%d/%m/%y",
    "%d-%m-%y",
]


def _is_digits_or_punctuation(line: str) -> bool:
    for char in line:
        if char.isspace():
            continue
        category = unicodedata.category(char)
        if not (category.startswith('N') or category.startswith('P')):
            return False
    return True


def extract_vendor(text: str) -> str:
    """
    Vendor name: the first line with something besides digits/punctuation.

    Args:
        text: Receipt text.

    Returns:
        Vendor line, or UNKNOWN_VENDOR.
    """
    for line in split_lines(text):
        if not _is_digits_or_punctuation(line):
            return line
    return UNKNOWN_VENDOR


def extract_invoice_number(text: str) -> Optional[str]:
    """
    First invoice number found by the ordered pattern list.

    Example:
        >>> extract_invoice_number("Reikningur #: 40213")
        '40213'
    """
    text = normalize_text(text)
    for pattern in INVOICE_NUMBER_PATTERNS:
        match = pattern.search(text)
        if match:
            return match.group(1)
    return None


class DateExtractor:
    """
    Finds the first numeric D.M.Y date in a text and parses it day-first.

    Input formats come from configuration ("fields.date.input_formats")
    and are tried in order; the first that parses wins. A date no format
    accepts (mixed separators, three-digit years) is absent.

    Example:
        >>> DateExtractor().extract("Dags. 15.03.2024 kl 12:01")
        datetime.date(2024, 3, 15)
    """

    def __init__(self, input_formats: Optional[List[str]] = None) -> None:
        self.input_formats = input_formats or get_config(
            "fields.date.input_formats",
            DEFAULT_DATE_FORMATS
        )

    def extract(self, text: str) -> Optional[date]:
        """
        Extract the receipt date.

        Args:
            text: Receipt text.

        Returns:
            Parsed date or None.
        """
        match = DATE_PATTERN.search(normalize_text(text))
        if match is None:
            return None

        date_str = match.group(0)
        parsed = self._try_explicit_formats(date_str)
        if parsed is None:
            logger.debug(f"Could not parse date: {date_str}")
        return parsed

    def _try_explicit_formats(self, date_str: str) -> Optional[date]:
        for fmt in self.input_formats:
            try:
                return datetime.strptime(date_str, fmt).date()
            except ValueError:
                continue
        return None


def extract_date(text: str) -> Optional[date]:
    """Convenience wrapper around DateExtractor with configured formats."""
    return DateExtractor().extract(text)
