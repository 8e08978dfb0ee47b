"""
Invoice Interpretation Engine.

Turns OCR-produced receipt/invoice text from many countries and languages
into currency-tagged amounts, a detected locale, a reconciled
subtotal/tax/total triple, and vendor, number, date and category fields.

Modules:
    - locales: vocabulary tables, currency and language detection
    - amounts: number parsing, line scanning, reconciliation
    - fields: vendor, invoice number, date, category
    - assembler: InvoiceRecord construction and validation
    - capture: multi-page OCR fan-in
    - config / utils: settings, logging, exceptions

Architecture:
    text → currency + language detection → line scan → reconcile ─┐
         → field extraction ───────────────────────────────────────┴→ InvoiceRecord
"""

__version__ = "1.0.0"

from .amounts import CurrencyAmount, VatBreakdown, parse_amount, scan_lines, reconcile
from .assembler import (
    InvoiceAssembler,
    InvoiceRecord,
    extract_vat_breakdown,
    interpret_invoice,
    interpret_pages
)
from .fields import InvoiceCategory
from .locales import detect_currency, detect_language

__all__ = [
    'CurrencyAmount',
    'VatBreakdown',
    'InvoiceRecord',
    'InvoiceCategory',
    'InvoiceAssembler',
    'detect_currency',
    'detect_language',
    'parse_amount',
    'scan_lines',
    'reconcile',
    'extract_vat_breakdown',
    'interpret_invoice',
    'interpret_pages'
]
