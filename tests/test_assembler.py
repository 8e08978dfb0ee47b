"""
End-to-end tests: text in, InvoiceRecord out.
"""

import json
from datetime import date
from decimal import Decimal

import pytest

from invoice_interpreter import (
    InvoiceAssembler,
    InvoiceCategory,
    InvoiceRecord,
    extract_vat_breakdown,
    interpret_invoice,
    interpret_pages,
)
from invoice_interpreter.assembler import assembler as assembler_module
from invoice_interpreter.fields import UNKNOWN_VENDOR
from invoice_interpreter.locales import resolve_currency
from invoice_interpreter.utils.exceptions import OCRProcessingError

FULL_RECEIPT = (
    "Krónan\n"
    "Reikningur #: 40213\n"
    "Dags. 15.03.2024\n"
    "VSK 24% 1200\n"
    "VSK 11% 110\n"
    "Samtals 7310"
)


class TestExtractVatBreakdown:

    def test_icelandic_receipt(self, bonus_receipt):
        breakdown = extract_vat_breakdown(bonus_receipt)

        assert breakdown.detected_language == "is"
        assert breakdown.detected_country == "IS"
        assert list(breakdown.rate_map) == [24.0]
        assert breakdown.rate_map[24.0].amount == Decimal("1200")
        assert breakdown.rate_map[24.0].currency_code == "ISK"
        assert breakdown.tax.amount == Decimal("1200")
        assert breakdown.tax.confidence == 0.9
        assert breakdown.total.amount == Decimal("6200")
        assert breakdown.subtotal.amount == Decimal("5000")
        assert breakdown.subtotal.confidence == 0.8

    def test_no_locale_vocabulary(self):
        breakdown = extract_vat_breakdown("Total: 123.45 €")
        assert breakdown.detected_language is None
        assert breakdown.detected_country is None
        assert breakdown.total.amount == Decimal("123.45")
        assert breakdown.total.currency_code == "EUR"
        assert breakdown.subtotal is None
        assert breakdown.tax is None


class TestInterpretInvoice:
    """Whole-pipeline behaviour."""

    def test_icelandic_grocery_receipt(self, bonus_receipt):
        record = interpret_invoice(bonus_receipt)

        assert record.vendor == "Bónus"
        assert record.currency_code == "ISK"
        assert record.category == InvoiceCategory.GROCERIES
        assert record.total.amount == Decimal("6200")
        assert record.tax.amount == Decimal("1200")
        assert record.subtotal.amount == Decimal("5000")
        assert record.invoice_number is None
        assert record.date is None
        assert record.month_key is None
        assert record.warnings == ()

    def test_full_receipt(self):
        record = interpret_invoice(FULL_RECEIPT)

        assert record.vendor == "Krónan"
        assert record.invoice_number == "40213"
        assert record.date == date(2024, 3, 15)
        assert record.month_key == "2024-03"
        assert record.currency_code == "ISK"
        assert record.tax.amount == Decimal("1310")
        assert record.subtotal.amount == Decimal("6000")
        assert [entry.rate for entry in record.vat_rates] == [24.0, 11.0]
        assert record.warnings == ()

    def test_euro_total_only(self):
        record = interpret_invoice("Total: 123.45 €")
        assert record.total.amount == Decimal("123.45")
        assert record.currency_code == "EUR"
        assert record.subtotal is None
        assert record.tax is None
        assert record.category == InvoiceCategory.OTHER

    @pytest.mark.parametrize("text", ["", "   \n\t  \n", None])
    def test_empty_input_degrades_to_defaults(self, text):
        record = interpret_invoice(text)
        assert record.vendor == UNKNOWN_VENDOR
        assert record.currency_code == "EUR"
        assert record.category == InvoiceCategory.OTHER
        assert record.total is None
        assert len(record.rate_map) == 0
        assert "Missing required field: total" in record.warnings

    def test_inconsistent_amounts_are_kept_with_warning(self):
        text = "Zwischensumme 100,00\nMwSt 19% 30,00\nSumme 120,00"
        record = interpret_invoice(text)

        assert record.currency_code == "EUR"
        assert record.subtotal.amount == Decimal("100.00")
        assert record.tax.amount == Decimal("30.00")
        assert record.total.amount == Decimal("120.00")
        assert len(record.warnings) == 1
        assert "differs from total" in record.warnings[0]

    def test_assembler_is_reusable(self, bonus_receipt):
        assembler = InvoiceAssembler()
        first = assembler.assemble(bonus_receipt)
        second = assembler.assemble("Total: 123.45 €")
        assert first.total.amount == Decimal("6200")
        assert second.total.amount == Decimal("123.45")

    def test_french_net_a_payer_total(self):
        record = interpret_invoice("TVA 20% 20,00\nNet à payer 120,00")
        assert record.currency_code == "EUR"
        assert record.total.amount == Decimal("120.00")

    def test_currency_resolved_once_per_receipt(self, bonus_receipt, monkeypatch):
        calls = []

        def counting_resolve(text, country):
            calls.append(country)
            return resolve_currency(text, country)

        monkeypatch.setattr(assembler_module, "resolve_currency", counting_resolve)
        record = InvoiceAssembler().assemble(bonus_receipt)
        assert calls == ["IS"]
        assert record.currency_code == "ISK"


class TestInterpretPages:

    def test_pages_are_joined_in_order(self):
        pages = ["Bónus", "VSK 24% 1200", "Samtals 6200"]
        record = interpret_pages(pages, lambda page: page, max_workers=3)
        assert record.vendor == "Bónus"
        assert record.total.amount == Decimal("6200")
        assert record.subtotal.amount == Decimal("5000")

    def test_failed_page_raises(self):
        def recognizer(page):
            if page == "bad":
                raise RuntimeError("unreadable page")
            return page

        with pytest.raises(OCRProcessingError) as exc_info:
            interpret_pages(["Bónus", "bad"], recognizer)
        assert exc_info.value.details["failed_pages"] == [1]


class TestInvoiceRecord:
    """Record value type and its serializations."""

    def test_is_immutable(self, bonus_receipt):
        record = interpret_invoice(bonus_receipt)
        with pytest.raises(AttributeError):
            record.vendor = "Other"

    def test_defaults(self):
        record = InvoiceRecord(vendor="Shop")
        assert record.currency_code == "EUR"
        assert record.category == InvoiceCategory.OTHER
        assert record.vat_rates == []
        assert record.missing_fields == [
            "invoice_number", "date", "subtotal", "tax", "total"
        ]

    def test_to_dict(self):
        data = interpret_invoice(FULL_RECEIPT).to_dict()
        assert data["date"] == "2024-03-15"
        assert data["month_key"] == "2024-03"
        assert data["total"] == {
            "amount": "7310",
            "currency_code": "ISK",
            "confidence": 0.8
        }
        assert data["category"] == "groceries"
        assert list(data["vat_breakdown"]["rate_map"]) == ["24.0", "11.0"]
        assert data["vat_breakdown"]["detected_country"] == "IS"

    def test_to_json_keeps_icelandic_characters(self, bonus_receipt):
        payload = interpret_invoice(bonus_receipt).to_json()
        assert "Bónus" in payload
        assert json.loads(payload)["currency_code"] == "ISK"

    def test_to_flat_dict(self):
        row = interpret_invoice(FULL_RECEIPT).to_flat_dict()
        assert row["vat_24.0"] == "1200"
        assert row["vat_11.0"] == "110"
        assert row["tax"] == "1310"
        assert row["tax_confidence"] == 0.9
        assert row["subtotal_confidence"] == 0.8
        assert row["detected_language"] == "is"

    def test_flat_dict_for_empty_record(self):
        row = InvoiceRecord(vendor=UNKNOWN_VENDOR).to_flat_dict()
        assert row["total"] == ""
        assert row["total_confidence"] == 0.0
        assert not any(key.startswith("vat_") for key in row)

    def test_repr(self, bonus_receipt):
        assert "total=6200 ISK" in repr(interpret_invoice(bonus_receipt))
