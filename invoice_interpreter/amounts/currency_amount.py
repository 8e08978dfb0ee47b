"""
Currency Amount Data Classes.

This module defines the value types passed between the amount pipeline
stages: a single currency-tagged amount, and the VAT breakdown produced
by scanning and reconciliation.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

# Confidence attached by each heuristic branch. These identify the path
# that produced an amount; they are not probabilities.
PARSED_CONFIDENCE = 0.8
AGGREGATED_CONFIDENCE = 0.9
DERIVED_CONFIDENCE = 0.8
SUMMED_TOTAL_CONFIDENCE = 0.9


@dataclass(frozen=True)
class CurrencyAmount:
    """
    A monetary amount tagged with its currency and a confidence score.

    Attributes:
        amount: Exact decimal value
        currency_code: ISO 4217 style code ("ISK", "EUR", ...)
        confidence: Which heuristic produced the value (0.0 to 1.0)

    Example:
        >>> CurrencyAmount(Decimal("1200"), "ISK", 0.8)
        CurrencyAmount(amount=Decimal('1200'), currency_code='ISK', confidence=0.8)
    """
    amount: Decimal
    currency_code: str
    confidence: float = PARSED_CONFIDENCE

    def to_dict(self) -> Dict[str, Any]:
        return {
            'amount': str(self.amount),
            'currency_code': self.currency_code,
            'confidence': self.confidence
        }


def _freeze_rate_map(rate_map: Optional[Mapping[float, CurrencyAmount]]) -> Mapping[float, CurrencyAmount]:
    return MappingProxyType(dict(rate_map or {}))


@dataclass(frozen=True)
class VatBreakdown:
    """
    Tax breakdown of one receipt.

    Attributes:
        subtotal: Amount before tax
        tax: Total tax amount
        total: Amount including tax
        rate_map: Tax rate percentage -> amount taxed at that rate
        detected_country: Country code derived from the language
        detected_language: Language code of the VAT vocabulary found

    After reconciliation at most one of subtotal/tax/total is missing,
    unless the receipt did not carry enough figures to infer any.
    """
    subtotal: Optional[CurrencyAmount] = None
    tax: Optional[CurrencyAmount] = None
    total: Optional[CurrencyAmount] = None
    rate_map: Mapping[float, CurrencyAmount] = field(default_factory=dict)
    detected_country: Optional[str] = None
    detected_language: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'rate_map', _freeze_rate_map(self.rate_map))

    @property
    def missing_amounts(self) -> list:
        """Names of the subtotal/tax/total fields that are absent."""
        return [
            name for name in ('subtotal', 'tax', 'total')
            if getattr(self, name) is None
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'subtotal': self.subtotal.to_dict() if self.subtotal else None,
            'tax': self.tax.to_dict() if self.tax else None,
            'total': self.total.to_dict() if self.total else None,
            'rate_map': {
                str(rate): amount.to_dict()
                for rate, amount in sorted(self.rate_map.items(), reverse=True)
            },
            'detected_country': self.detected_country,
            'detected_language': self.detected_language
        }
