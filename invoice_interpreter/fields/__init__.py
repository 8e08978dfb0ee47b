"""
Field Extraction Module for the Invoice Interpretation Engine.

This module provides:
    - Vendor name, invoice number and date extraction
    - Keyword-based spending category classification
"""

from .extractors import (
    UNKNOWN_VENDOR,
    DateExtractor,
    extract_vendor,
    extract_invoice_number,
    extract_date
)
from .category import InvoiceCategory, classify_category

__all__ = [
    'UNKNOWN_VENDOR',
    'DateExtractor',
    'extract_vendor',
    'extract_invoice_number',
    'extract_date',
    'InvoiceCategory',
    'classify_category'
]
