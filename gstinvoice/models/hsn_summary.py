"""HsnSummaryRow data model for the HSN/SAC tax summary table."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict

_ZERO = Decimal("0")


@dataclass(frozen=True)
class HsnSummaryRow:
    """Tax totals for all lines sharing one HSN/SAC code.

    Attributes:
        code: HSN/SAC code ("-" when lines carry none)
        taxable_value: Sum of taxable amounts
        gst_rate: GST percent of the first line in the group
        cgst: Sum of CGST
        sgst: Sum of SGST
        igst: Sum of IGST
        total: Sum of line totals
    """

    code: str
    taxable_value: Decimal = _ZERO
    gst_rate: Decimal = _ZERO
    cgst: Decimal = _ZERO
    sgst: Decimal = _ZERO
    igst: Decimal = _ZERO
    total: Decimal = _ZERO

    @property
    def tax_amount(self) -> Decimal:
        return self.cgst + self.sgst + self.igst

    def to_dict(self) -> Dict[str, Any]:
        data = {
            k: float(v) if isinstance(v, Decimal) else v
            for k, v in asdict(self).items()
        }
        data["tax_amount"] = float(self.tax_amount)
        return data
