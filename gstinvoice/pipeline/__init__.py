"""Pipeline stages for invoice computation."""

from .amount_in_words import amount_to_words, rupees_in_words
from .invoice_builder import build_invoice
from .line_normalizer import normalize_lines
from .line_tax_calculator import apply_tax
from .paginator import paginate
from .tax_jurisdiction import resolve_regime
from .totals_aggregator import aggregate_totals
from .validation import validate_document

__all__ = [
    "normalize_lines",
    "resolve_regime",
    "apply_tax",
    "aggregate_totals",
    "amount_to_words",
    "rupees_in_words",
    "paginate",
    "build_invoice",
    "validate_document",
]
