"""
Invoice Assembler Module.

This module provides the InvoiceAssembler class that composes every
interpretation stage into one InvoiceRecord.

Flow:
    Language → Country → Currency → Line Scan → Reconcile → VatBreakdown
                                                                  ↓
    Vendor / Number / Date → Category ──────────────→ Validate → InvoiceRecord

The assembler keeps no state between calls; one instance may be shared
by concurrent callers.
"""

from typing import Any, Callable, Optional, Sequence, Tuple

from invoice_interpreter.amounts.currency_amount import VatBreakdown
from invoice_interpreter.amounts.line_scanner import scan_lines
from invoice_interpreter.amounts.reconciler import reconcile
from invoice_interpreter.capture.page_collector import PageTextCollector
from invoice_interpreter.fields.category import classify_category
from invoice_interpreter.fields.extractors import (
    DateExtractor,
    extract_invoice_number,
    extract_vendor,
)
from invoice_interpreter.locales.detectors import (
    country_for_language,
    detect_language,
    resolve_currency,
)
from invoice_interpreter.utils.helpers import normalize_text
from invoice_interpreter.utils.logger import get_logger
from .invoice_record import InvoiceRecord
from .validators import RecordValidator

# Initialize module logger
logger = get_logger(__name__)


def extract_vat_breakdown(text: str) -> VatBreakdown:
    """
    Run the currency/VAT pipeline on a receipt text.

    Args:
        text: Recognized receipt text.

    Returns:
        Reconciled VatBreakdown.

    Example:
        >>> breakdown = extract_vat_breakdown("VSK 24% 1200\\nSamtals 6200")
        >>> breakdown.subtotal.amount
        Decimal('5000')
    """
    return _breakdown_with_currency(normalize_text(text))[0]


def _breakdown_with_currency(text: str) -> Tuple[VatBreakdown, str]:
    """Reconciled breakdown plus the currency its amounts were parsed in."""
    language = detect_language(text)
    country = country_for_language(language)
    currency = resolve_currency(text, country)

    scanned = scan_lines(text, currency, language)
    reconciled = reconcile(
        scanned.subtotal,
        scanned.tax,
        scanned.rate_map,
        scanned.total,
        currency
    )

    breakdown = VatBreakdown(
        subtotal=reconciled.subtotal,
        tax=reconciled.tax,
        total=reconciled.total,
        rate_map=scanned.rate_map,
        detected_country=country,
        detected_language=language
    )
    return breakdown, currency


class InvoiceAssembler:
    """
    Builds InvoiceRecord values from recognized text.

    Attributes:
        date_extractor: DateExtractor instance
        validator: RecordValidator instance

    Example:
        >>> assembler = InvoiceAssembler()
        >>> record = assembler.assemble(ocr_text)
        >>> print(record.total, record.category)
    """

    def __init__(self) -> None:
        self.date_extractor = DateExtractor()
        self.validator = RecordValidator()

    def assemble(self, text: str) -> InvoiceRecord:
        """
        Interpret one OCR text block.

        Never raises on any text: unknown or unparseable parts come back
        as defaults or None.

        Args:
            text: Recognized text, concatenated across pages.

        Returns:
            Immutable InvoiceRecord.
        """
        text = normalize_text(text)

        breakdown, currency = _breakdown_with_currency(text)

        vendor = extract_vendor(text)
        invoice_number = extract_invoice_number(text)
        receipt_date = self.date_extractor.extract(text)
        category = classify_category(vendor, text)

        fields = {
            'vendor': vendor,
            'invoice_number': invoice_number,
            'date': receipt_date,
            'subtotal': breakdown.subtotal,
            'tax': breakdown.tax,
            'total': breakdown.total
        }
        validation = self.validator.validate(fields, breakdown, receipt_date)

        record = InvoiceRecord(
            vendor=vendor,
            invoice_number=invoice_number,
            date=receipt_date,
            subtotal=breakdown.subtotal,
            tax=breakdown.tax,
            total=breakdown.total,
            currency_code=currency,
            vat_breakdown=breakdown,
            category=category,
            warnings=tuple(validation.warnings)
        )

        logger.debug(
            f"Assembled {record!r}: "
            f"{len(breakdown.rate_map)} VAT rate(s), "
            f"{len(validation.warnings)} warning(s)"
        )
        return record

    def assemble_pages(
        self,
        pages: Sequence[Any],
        recognizer: Callable[[Any], str],
        max_workers: Optional[int] = None
    ) -> InvoiceRecord:
        """
        Recognize a multi-page capture and interpret the joined text.

        Args:
            pages: Page objects understood by the recognizer.
            recognizer: OCR callable, page -> text.
            max_workers: Concurrent page recognitions.

        Returns:
            InvoiceRecord for the whole capture.

        Raises:
            OCRProcessingError: If any page failed recognition.
        """
        collector = PageTextCollector(recognizer, max_workers=max_workers)
        return self.assemble(collector.collect(pages))


def interpret_invoice(text: str) -> InvoiceRecord:
    """
    Convenience function: interpret one recognized text block.

    Example:
        >>> interpret_invoice("Total: 123.45 €").total.amount
        Decimal('123.45')
    """
    return InvoiceAssembler().assemble(text)


def interpret_pages(
    pages: Sequence[Any],
    recognizer: Callable[[Any], str],
    max_workers: Optional[int] = None
) -> InvoiceRecord:
    """Convenience function: recognize every page, then interpret."""
    return InvoiceAssembler().assemble_pages(pages, recognizer, max_workers)
