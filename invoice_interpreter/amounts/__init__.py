"""
Amount Module for the Invoice Interpretation Engine.

This module provides:
    - CurrencyAmount / VatBreakdown value types
    - Regional number parsing
    - Line scanning for VAT, subtotal and total figures
    - Single-step subtotal/tax/total reconciliation
"""

from .currency_amount import CurrencyAmount, VatBreakdown
from .number_parser import parse_amount
from .line_scanner import scan_lines, LineScanResult
from .reconciler import reconcile, ReconciledAmounts

__all__ = [
    'CurrencyAmount',
    'VatBreakdown',
    'parse_amount',
    'scan_lines',
    'LineScanResult',
    'reconcile',
    'ReconciledAmounts'
]
