"""Aggregate document totals from taxed lines."""

from decimal import Decimal
from typing import Sequence

from ..models.document_totals import DocumentTotals
from ..models.invoice_line import TaxedLine

_ZERO = Decimal("0")


def aggregate_totals(lines: Sequence[TaxedLine]) -> DocumentTotals:
    """Sum taxable value, tax components, grand total and quantity.

    No rounding happens here: per-line values are already rounded, so the
    aggregate is their exact sum and grand_total equals the sum of line
    totals.
    """
    total_taxable = sum((line.taxable_amount for line in lines), _ZERO)
    total_cgst = sum((line.cgst for line in lines), _ZERO)
    total_sgst = sum((line.sgst for line in lines), _ZERO)
    total_igst = sum((line.igst for line in lines), _ZERO)

    return DocumentTotals(
        total_taxable=total_taxable,
        total_cgst=total_cgst,
        total_sgst=total_sgst,
        total_igst=total_igst,
        grand_total=sum((line.line_total for line in lines), _ZERO),
        total_quantity=sum((line.quantity for line in lines), _ZERO),
        total_line_count=len(lines),
    )
