"""
Locale Tables.

Compiled-in, read-only vocabularies used by the detectors and the line
scanner. Every table is an immutable mapping built once at import time and
shared by reference; nothing in the package mutates them.

Mapping order is meaningful: CURRENCY_PATTERNS and VAT_TERMS are declared in
priority order, and that order breaks score ties during detection.
"""

from types import MappingProxyType

ENGLISH = "en"
DEFAULT_CURRENCY = "EUR"

# Symbol, ISO code and spelled-out names per currency, in tie-break priority.
CURRENCY_PATTERNS = MappingProxyType({
    "ISK": ("kr", "krónur", "króna", "ISK"),
    "EUR": ("€", "EUR", "euro", "euros"),
    "USD": ("$", "USD", "dollar", "dollars"),
    "GBP": ("£", "GBP", "pound", "pounds"),
    "DKK": ("kr", "DKK", "danske kroner"),
    "NOK": ("kr", "NOK", "norske kroner"),
    "SEK": ("kr", "SEK", "svenska kronor"),
    "CHF": ("CHF", "franc", "francs"),
})

# VAT/tax vocabulary per language, in tie-break priority.
VAT_TERMS = MappingProxyType({
    "is": ("VSK", "virðisaukaskattur"),
    "en": ("VAT", "tax", "sales tax", "value added tax"),
    "da": ("MOMS", "merværdiafgift"),
    "no": ("MVA", "merverdiavgift"),
    "sv": ("MOMS", "mervärdesskatt"),
    "de": ("MwSt", "Mehrwertsteuer", "Umsatzsteuer"),
    "fr": ("TVA", "taxe sur la valeur ajoutée"),
    "es": ("IVA", "impuesto sobre el valor añadido"),
    "it": ("IVA", "imposta sul valore aggiunto"),
})

TOTAL_TERMS = MappingProxyType({
    "is": ("samtals", "til greiðslu", "heild", "alls"),
    "en": ("total", "amount due", "grand total", "sum"),
    "da": ("total", "i alt", "til betaling"),
    "no": ("totalt", "til betaling", "sum"),
    "sv": ("totalt", "att betala", "summa"),
    "de": ("gesamt", "summe", "zu zahlen", "total"),
    "fr": ("total", "montant total", "à payer"),
    "es": ("total", "importe total", "a pagar"),
    "it": ("totale", "importo totale", "da pagare"),
})

SUBTOTAL_TERMS = MappingProxyType({
    "is": ("án vsk", "nettó", "undirheild"),
    "en": ("subtotal", "net", "before tax", "excl. tax"),
    "da": ("subtotal", "ekskl. moms", "netto"),
    "no": ("subtotal", "ekskl. mva", "netto"),
    "sv": ("subtotal", "exkl. moms", "netto"),
    "de": ("zwischensumme", "netto", "ohne mwst"),
    "fr": ("sous-total", "hors taxes", "net"),
    "es": ("subtotal", "sin iva", "neto"),
    "it": ("subtotale", "senza iva", "netto"),
})

# English maps to US: an English receipt is most often a US sales-tax slip.
LANGUAGE_TO_COUNTRY = MappingProxyType({
    "is": "IS",
    "en": "US",
    "da": "DK",
    "no": "NO",
    "sv": "SE",
    "de": "DE",
    "fr": "FR",
    "es": "ES",
    "it": "IT",
})

COUNTRY_CURRENCY = MappingProxyType({
    "IS": "ISK",
    "DK": "DKK",
    "NO": "NOK",
    "SE": "SEK",
    "DE": "EUR",
    "FR": "EUR",
    "ES": "EUR",
    "IT": "EUR",
    "US": "USD",
    "GB": "GBP",
})

VAT_RATES_BY_COUNTRY = MappingProxyType({
    "IS": (24.0, 11.0, 0.0),
    "DK": (25.0, 0.0),
    "NO": (25.0, 15.0, 0.0),
    "SE": (25.0, 12.0, 6.0, 0.0),
    "DE": (19.0, 7.0, 0.0),
    "FR": (20.0, 10.0, 5.5, 2.1, 0.0),
    "ES": (21.0, 10.0, 4.0, 0.0),
    "IT": (22.0, 10.0, 5.0, 4.0, 0.0),
    "US": (8.5, 7.0, 6.0, 0.0),  # state sales tax varies
    "GB": (20.0, 5.0, 0.0),
})

# Used when no country could be detected.
DEFAULT_VAT_RATES = (24.0, 20.0, 19.0, 25.0, 21.0, 0.0)
