"""
Invoice Record Data Class.

This module defines the structured record produced for one OCR text
block. The record is immutable; persistence identifiers and timestamps
are the caller's business.
"""

import json
from dataclasses import dataclass, field
from datetime import date as date_type
from typing import Any, Dict, List, Mapping, NamedTuple, Optional, Tuple

from invoice_interpreter.amounts.currency_amount import CurrencyAmount, VatBreakdown
from invoice_interpreter.fields.category import InvoiceCategory
from invoice_interpreter.locales.tables import DEFAULT_CURRENCY


class VatRateEntry(NamedTuple):
    rate: float
    amount: CurrencyAmount
    currency_code: str


@dataclass(frozen=True)
class InvoiceRecord:
    """
    Structured facts extracted from one receipt/invoice text.

    Attributes:
        vendor: Vendor name (placeholder when none was found)
        invoice_number: Invoice/receipt number
        date: Receipt date (day-first parsing)
        subtotal: Amount before tax
        tax: Total tax amount
        total: Amount including tax
        currency_code: Currency of all amounts
        vat_breakdown: Per-rate VAT amounts and detection details
        category: Spending category
        warnings: Consistency warnings raised during validation

    Example:
        >>> record = interpret_invoice("Bónus\\nVSK 24% 1200\\nSamtals 6200")
        >>> record.total.amount, record.category
        (Decimal('6200'), <InvoiceCategory.GROCERIES: 'groceries'>)
    """
    vendor: str
    invoice_number: Optional[str] = None
    date: Optional[date_type] = None
    subtotal: Optional[CurrencyAmount] = None
    tax: Optional[CurrencyAmount] = None
    total: Optional[CurrencyAmount] = None
    currency_code: str = DEFAULT_CURRENCY
    vat_breakdown: VatBreakdown = field(default_factory=VatBreakdown)
    category: InvoiceCategory = InvoiceCategory.OTHER
    warnings: Tuple[str, ...] = ()

    @property
    def rate_map(self) -> Mapping[float, CurrencyAmount]:
        return self.vat_breakdown.rate_map

    @property
    def vat_rates(self) -> List[VatRateEntry]:
        """Per-rate VAT entries, highest rate first."""
        return [
            VatRateEntry(rate, amount, amount.currency_code)
            for rate, amount in sorted(self.rate_map.items(), reverse=True)
        ]

    @property
    def month_key(self) -> Optional[str]:
        """Bookkeeping month as "yyyy-MM", None without a date."""
        if self.date is None:
            return None
        return self.date.strftime("%Y-%m")

    @property
    def fields(self) -> Dict[str, Any]:
        return {
            'vendor': self.vendor,
            'invoice_number': self.invoice_number,
            'date': self.date,
            'subtotal': self.subtotal,
            'tax': self.tax,
            'total': self.total
        }

    @property
    def missing_fields(self) -> list:
        return [k for k, v in self.fields.items() if v is None or v == ""]

    def to_dict(self) -> Dict[str, Any]:
        """
        Convert to a JSON-friendly dictionary.

        Amounts are rendered as decimal strings to keep them exact.
        """
        return {
            'vendor': self.vendor,
            'invoice_number': self.invoice_number,
            'date': self.date.isoformat() if self.date else None,
            'month_key': self.month_key,
            'subtotal': self.subtotal.to_dict() if self.subtotal else None,
            'tax': self.tax.to_dict() if self.tax else None,
            'total': self.total.to_dict() if self.total else None,
            'currency_code': self.currency_code,
            'vat_breakdown': self.vat_breakdown.to_dict(),
            'category': self.category.value,
            'warnings': list(self.warnings)
        }

    def to_json(self, indent: int = 2) -> str:
        return json.dumps(self.to_dict(), indent=indent, ensure_ascii=False)

    def to_flat_dict(self) -> Dict[str, Any]:
        """
        Convert to a flat dictionary suitable for spreadsheet/database rows.

        Returns:
            Flat dictionary with one column per rate ("vat_24.0").
        """
        result = {
            'vendor': self.vendor,
            'invoice_number': self.invoice_number or '',
            'date': self.date.isoformat() if self.date else '',
            'month_key': self.month_key or '',
            'subtotal': str(self.subtotal.amount) if self.subtotal else '',
            'tax': str(self.tax.amount) if self.tax else '',
            'total': str(self.total.amount) if self.total else '',
            'currency_code': self.currency_code,
            'category': self.category.value,
            'detected_country': self.vat_breakdown.detected_country or '',
            'detected_language': self.vat_breakdown.detected_language or '',
        }

        for entry in self.vat_rates:
            result[f'vat_{entry.rate}'] = str(entry.amount.amount)

        for name in ('subtotal', 'tax', 'total'):
            amount = getattr(self, name)
            result[f'{name}_confidence'] = amount.confidence if amount else 0.0

        return result

    def __repr__(self) -> str:
        total = f"{self.total.amount} {self.currency_code}" if self.total else None
        return (
            f"InvoiceRecord("
            f"vendor={self.vendor!r}, "
            f"invoice={self.invoice_number}, "
            f"total={total}, "
            f"category={self.category.value})"
        )
