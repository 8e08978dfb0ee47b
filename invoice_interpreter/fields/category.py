"""
Spending Category Classifier.

Keyword classifier over the vendor name and the full receipt text. The
keyword sets target Icelandic retail chains and vocabulary, with a few
English fallbacks.
"""

from enum import Enum
from typing import NamedTuple, Tuple

from invoice_interpreter.utils.helpers import normalize_text


class InvoiceCategory(Enum):
    GROCERIES = "groceries"
    UTILITIES = "utilities"
    TRANSPORTATION = "transportation"
    HEALTHCARE = "healthcare"
    ENTERTAINMENT = "entertainment"
    SHOPPING = "shopping"
    BUSINESS = "business"
    OTHER = "other"

    @property
    def display_name(self) -> str:
        return _DISPLAY_NAMES[self]


_DISPLAY_NAMES = {
    InvoiceCategory.GROCERIES: "Matvörur",
    InvoiceCategory.UTILITIES: "Veitur",
    InvoiceCategory.TRANSPORTATION: "Samgöngur",
    InvoiceCategory.HEALTHCARE: "Heilbrigðisþjónusta",
    InvoiceCategory.ENTERTAINMENT: "Afþreying",
    InvoiceCategory.SHOPPING: "Verslanir",
    InvoiceCategory.BUSINESS: "Viðskipti",
    InvoiceCategory.OTHER: "Annað",
}


class CategoryKeywords(NamedTuple):
    category: InvoiceCategory
    vendor_keywords: Tuple[str, ...]
    text_keywords: Tuple[str, ...]


# Checked in order; first hit wins.
CATEGORY_KEYWORDS: Tuple[CategoryKeywords, ...] = (
    CategoryKeywords(
        InvoiceCategory.GROCERIES,
        ("bónus", "nettó", "krónan"),
        ("matvörur", "grocery"),
    ),
    CategoryKeywords(
        InvoiceCategory.UTILITIES,
        ("orkuveita", "veitur"),
        ("rafmagn", "hitaveita"),
    ),
    CategoryKeywords(
        InvoiceCategory.TRANSPORTATION,
        ("olís", "n1", "orkan"),
        ("bensín", "dísel"),
    ),
    CategoryKeywords(
        InvoiceCategory.HEALTHCARE,
        ("apótek", "heilsu"),
        ("lyf", "health"),
    ),
)


def classify_category(vendor: str, text: str) -> InvoiceCategory:
    """
    Classify a receipt into a spending category.

    Args:
        vendor: Extracted vendor name.
        text: Full receipt text.

    Returns:
        First matching category, InvoiceCategory.OTHER otherwise.

    Example:
        >>> classify_category("Bónus", "VSK 24% 1200")
        <InvoiceCategory.GROCERIES: 'groceries'>
    """
    lower_vendor = normalize_text(vendor).lower()
    lower_text = normalize_text(text).lower()

    for entry in CATEGORY_KEYWORDS:
        if any(keyword in lower_vendor for keyword in entry.vendor_keywords):
            return entry.category
        if any(keyword in lower_text for keyword in entry.text_keywords):
            return entry.category

    return InvoiceCategory.OTHER
