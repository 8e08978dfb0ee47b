"""
Amount Reconciler.

Fills in at most one missing value of the subtotal/tax/total triple using
subtotal + tax = total. Exactly one arithmetic step is applied; the
result is never reconciled again.
"""

from decimal import Decimal
from typing import Mapping, NamedTuple, Optional

from invoice_interpreter.utils.logger import get_logger
from .currency_amount import (
    AGGREGATED_CONFIDENCE,
    DERIVED_CONFIDENCE,
    SUMMED_TOTAL_CONFIDENCE,
    CurrencyAmount,
)

logger = get_logger(__name__)

# Derived tax may dip this far below zero from rounding/OCR noise.
NEGATIVE_TAX_TOLERANCE = Decimal("-0.01")


class ReconciledAmounts(NamedTuple):
    subtotal: Optional[CurrencyAmount]
    tax: Optional[CurrencyAmount]
    total: Optional[CurrencyAmount]


def sum_rate_map(
    rate_map: Mapping[float, CurrencyAmount],
    currency_code: str
) -> CurrencyAmount:
    """Aggregate per-rate amounts into one tax amount."""
    amount = sum((entry.amount for entry in rate_map.values()), Decimal(0))
    return CurrencyAmount(amount, currency_code, AGGREGATED_CONFIDENCE)


def reconcile(
    subtotal: Optional[CurrencyAmount],
    tax: Optional[CurrencyAmount],
    rate_map: Mapping[float, CurrencyAmount],
    total: Optional[CurrencyAmount],
    currency_code: str
) -> ReconciledAmounts:
    """
    Infer one missing amount from the other two.

    Step 1 sums the rate map into tax when no tax was read. Step 2 applies
    the first matching rule:
        a. tax = total - subtotal   (rejected below -0.01)
        b. subtotal = total - tax
        c. total = subtotal + tax

    Args:
        subtotal: Subtotal read from the receipt, if any.
        tax: Tax read from the receipt, if any.
        rate_map: Per-rate VAT amounts.
        total: Total read from the receipt, if any.
        currency_code: Currency for derived amounts.

    Returns:
        ReconciledAmounts; fields stay None when two or more were missing.
    """
    if tax is None and rate_map:
        tax = sum_rate_map(rate_map, currency_code)
        logger.debug(f"Tax from {len(rate_map)} rate(s): {tax.amount}")

    if subtotal is not None and total is not None and tax is None:
        tax_amount = total.amount - subtotal.amount
        if tax_amount >= NEGATIVE_TAX_TOLERANCE:
            tax = CurrencyAmount(tax_amount, currency_code, DERIVED_CONFIDENCE)
            logger.debug(f"Derived tax = total - subtotal = {tax_amount}")
        else:
            logger.debug(f"Rejected negative derived tax {tax_amount}")

    elif subtotal is None and total is not None and tax is not None:
        subtotal = CurrencyAmount(total.amount - tax.amount, currency_code, DERIVED_CONFIDENCE)
        logger.debug(f"Derived subtotal = total - tax = {subtotal.amount}")

    elif total is None and subtotal is not None and tax is not None:
        total = CurrencyAmount(subtotal.amount + tax.amount, currency_code, SUMMED_TOTAL_CONFIDENCE)
        logger.debug(f"Derived total = subtotal + tax = {total.amount}")

    return ReconciledAmounts(subtotal=subtotal, tax=tax, total=total)
