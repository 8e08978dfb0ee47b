"""
Record Validators Module.

Consistency checks over an assembled record. Validation never changes
or rejects a value; every finding becomes a warning on the record.

Checks:
    - Required fields present
    - Amounts non-negative and within range
    - subtotal + tax == total, tax <= total
    - Rate map sum == tax
    - Date year within range
"""

from datetime import date
from decimal import Decimal
from typing import Any, Dict, List, Optional, Tuple

from invoice_interpreter.amounts.currency_amount import CurrencyAmount, VatBreakdown
from invoice_interpreter.config import get_config
from invoice_interpreter.fields.extractors import UNKNOWN_VENDOR
from invoice_interpreter.utils.logger import get_logger

# Initialize module logger
logger = get_logger(__name__)

AMOUNT_TOLERANCE = Decimal("0.01")


class DateValidator:
    """
    Validates the receipt date against a plausible year range.

    Example:
        >>> DateValidator().validate(date(1999, 1, 1))
        (False, 'Year 1999 is too old')
    """

    def __init__(self) -> None:
        self.min_year = get_config("validation.min_year", 2000)
        self.max_year = get_config("validation.max_year", 2100)

    def validate(self, value: date) -> Tuple[bool, str]:
        if value.year < self.min_year:
            return False, f"Year {value.year} is too old"
        if value.year > self.max_year:
            return False, f"Year {value.year} is too far in future"
        return True, "Valid date"


class AmountValidator:
    """
    Validates individual amounts and the subtotal/tax/total relationship.
    """

    MIN_AMOUNT = Decimal(0)
    MAX_AMOUNT = Decimal(1_000_000_000)

    def validate(self, name: str, value: CurrencyAmount) -> Tuple[bool, str]:
        if value.amount < self.MIN_AMOUNT:
            return False, f"{name} cannot be negative ({value.amount})"
        if value.amount > self.MAX_AMOUNT:
            return False, f"{name} {value.amount} exceeds maximum"
        return True, "Valid amount"

    def check_consistency(self, breakdown: VatBreakdown) -> List[str]:
        """
        Cross-check the amounts of a VAT breakdown.

        Args:
            breakdown: Reconciled breakdown.

        Returns:
            List of inconsistency messages (empty when consistent).
        """
        problems = []
        subtotal, tax, total = breakdown.subtotal, breakdown.tax, breakdown.total

        if tax is not None and total is not None and tax.amount > total.amount:
            problems.append(f"Tax {tax.amount} exceeds total {total.amount}")

        if subtotal is not None and tax is not None and total is not None:
            difference = abs(subtotal.amount + tax.amount - total.amount)
            if difference > AMOUNT_TOLERANCE:
                problems.append(
                    f"Subtotal + tax differs from total by {difference}"
                )

        if tax is not None and breakdown.rate_map:
            rate_sum = sum((entry.amount for entry in breakdown.rate_map.values()), Decimal(0))
            if abs(rate_sum - tax.amount) > AMOUNT_TOLERANCE:
                problems.append(f"VAT rate amounts sum to {rate_sum}, tax is {tax.amount}")

        return problems


class RecordValidator:
    """
    Runs every record-level check and collects the findings.

    Example:
        >>> validator = RecordValidator()
        >>> result = validator.validate(fields, breakdown)
        >>> result.warnings
        ['Missing required field: total']
    """

    def __init__(self) -> None:
        self.required_fields = get_config(
            "validation.required_fields",
            ["total"]
        )
        self.date_validator = DateValidator()
        self.amount_validator = AmountValidator()

        logger.debug(f"RecordValidator initialized (required: {self.required_fields})")

    def check_required_fields(self, fields: Dict[str, Any]) -> Tuple[bool, List[str]]:
        """
        Check if all required fields are present.

        The unknown-vendor placeholder counts as missing.
        """
        missing = []
        for required in self.required_fields:
            value = fields.get(required)
            if value is None or value == "" or (required == 'vendor' and value == UNKNOWN_VENDOR):
                missing.append(required)
        return len(missing) == 0, missing

    def validate(
        self,
        fields: Dict[str, Any],
        breakdown: VatBreakdown,
        receipt_date: Optional[date] = None
    ) -> 'ValidationResult':
        """
        Validate record fields and the VAT breakdown.

        Args:
            fields: Field name -> value (vendor, invoice_number, total, ...).
            breakdown: Reconciled VAT breakdown.
            receipt_date: Extracted date, if any.

        Returns:
            ValidationResult with warnings.
        """
        validation = ValidationResult()

        _, missing = self.check_required_fields(fields)
        for name in missing:
            validation.add_warning(f"Missing required field: {name}")

        for name in ('subtotal', 'tax', 'total'):
            amount = getattr(breakdown, name)
            if amount is not None:
                is_valid, message = self.amount_validator.validate(name, amount)
                validation.add_field_result(name, is_valid, message)

        for problem in self.amount_validator.check_consistency(breakdown):
            validation.add_warning(problem)

        if receipt_date is not None:
            is_valid, message = self.date_validator.validate(receipt_date)
            validation.add_field_result('date', is_valid, message)

        return validation


class ValidationResult:
    """
    Contains the result of validation checks.

    Attributes:
        warnings: List of warning messages
        field_results: Per-field validation results
    """

    def __init__(self):
        self.warnings: List[str] = []
        self.field_results: Dict[str, Tuple[bool, str]] = {}

    @property
    def is_consistent(self) -> bool:
        return not self.warnings

    def add_warning(self, message: str) -> None:
        self.warnings.append(message)

    def add_field_result(self, field: str, is_valid: bool, message: str) -> None:
        """Add a field-level result; invalid fields become warnings."""
        self.field_results[field] = (is_valid, message)
        if not is_valid:
            self.add_warning(f"{field}: {message}")

    def to_dict(self) -> Dict[str, Any]:
        return {
            'is_consistent': self.is_consistent,
            'warnings': self.warnings,
            'field_results': self.field_results
        }
