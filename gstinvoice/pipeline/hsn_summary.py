"""Group taxed lines by HSN/SAC code for the tax summary table."""

from decimal import Decimal
from typing import Dict, List, Sequence

from ..models.hsn_summary import HsnSummaryRow
from ..models.invoice_line import TaxedLine

MISSING_CODE = "-"


def summarize_by_hsn(lines: Sequence[TaxedLine]) -> List[HsnSummaryRow]:
    """Sum taxable value and tax components per HSN/SAC code.

    Groups keep first-seen order. Lines without a code share the "-" group.
    The rate shown for a group is the rate of its first line.
    """
    groups: Dict[str, dict] = {}
    for line in lines:
        code = line.code or MISSING_CODE
        group = groups.get(code)
        if group is None:
            group = groups[code] = {
                "code": code,
                "taxable_value": Decimal("0"),
                "gst_rate": line.gst_rate,
                "cgst": Decimal("0"),
                "sgst": Decimal("0"),
                "igst": Decimal("0"),
                "total": Decimal("0"),
            }
        group["taxable_value"] += line.taxable_amount
        group["cgst"] += line.cgst
        group["sgst"] += line.sgst
        group["igst"] += line.igst
        group["total"] += line.line_total

    return [HsnSummaryRow(**group) for group in groups.values()]
