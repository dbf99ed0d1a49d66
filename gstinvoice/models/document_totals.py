"""DocumentTotals data model with aggregate values for the totals block."""

from __future__ import annotations

from dataclasses import asdict, dataclass
from decimal import Decimal
from typing import Any, Dict

_ZERO = Decimal("0")


@dataclass(frozen=True)
class DocumentTotals:
    """Aggregate values of an invoice.

    Values are exact sums of the already-rounded per-line values, so
    grand_total == total_taxable + total_cgst + total_sgst + total_igst
    == sum of line totals.

    Attributes:
        total_taxable: Sum of taxable amounts
        total_cgst: Sum of CGST
        total_sgst: Sum of SGST
        total_igst: Sum of IGST
        grand_total: Sum of line totals
        total_quantity: Sum of quantities
        total_line_count: Number of lines
    """

    total_taxable: Decimal = _ZERO
    total_cgst: Decimal = _ZERO
    total_sgst: Decimal = _ZERO
    total_igst: Decimal = _ZERO
    grand_total: Decimal = _ZERO
    total_quantity: Decimal = _ZERO
    total_line_count: int = 0

    def __post_init__(self):
        if self.total_line_count < 0:
            raise ValueError(f"total_line_count must be >= 0, got {self.total_line_count}")

    @property
    def total_tax(self) -> Decimal:
        return self.total_cgst + self.total_sgst + self.total_igst

    def to_dict(self) -> Dict[str, Any]:
        data = {
            k: float(v) if isinstance(v, Decimal) else v
            for k, v in asdict(self).items()
        }
        data["total_tax"] = float(self.total_tax)
        return data
