"""
Assembly Module for the Invoice Interpretation Engine.

This module provides:
    - InvoiceRecord, the structured output value
    - Record consistency validation
    - InvoiceAssembler, composing every stage into a record
"""

from .invoice_record import InvoiceRecord, VatRateEntry
from .validators import RecordValidator, ValidationResult
from .assembler import (
    InvoiceAssembler,
    extract_vat_breakdown,
    interpret_invoice,
    interpret_pages
)

__all__ = [
    'InvoiceRecord',
    'VatRateEntry',
    'RecordValidator',
    'ValidationResult',
    'InvoiceAssembler',
    'extract_vat_breakdown',
    'interpret_invoice',
    'interpret_pages'
]
