"""Canonical line models: NormalizedLine and its taxed extension."""

from __future__ import annotations

from dataclasses import dataclass, fields
from decimal import Decimal
from typing import Any, Dict, Optional

PRODUCT = "product"
SERVICE = "service"
LINE_KINDS = (PRODUCT, SERVICE)

_ZERO = Decimal("0")


@dataclass(frozen=True)
class NormalizedLine:
    """One item row reconciled from any of the raw transaction shapes.

    Attributes:
        kind: "product" or "service"
        name: Resolved display name (never empty, "Item" as last resort)
        quantity: Quantity (services are always 1)
        unit_price: Price per unit, derived as amount / quantity when absent
        taxable_amount: Pre-tax value of the line
        description: Optional free text
        gst_rate: GST percent carried on the raw line, None when absent
        code: HSN/SAC code, empty when unknown
        unit: Unit label ("Kg", "Piece", ...), empty when unknown
    """

    kind: str
    name: str
    quantity: Decimal
    unit_price: Decimal
    taxable_amount: Decimal
    description: str = ""
    gst_rate: Optional[Decimal] = None
    code: str = ""
    unit: str = ""

    def __post_init__(self):
        """Validate kind and name."""
        if self.kind not in LINE_KINDS:
            raise ValueError(f"kind must be 'product' or 'service', got '{self.kind}'")
        if not self.name:
            raise ValueError("NormalizedLine name must not be empty")

    @property
    def is_service(self) -> bool:
        return self.kind == SERVICE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-friendly dict (Decimals as floats)."""
        data = {}
        for f in fields(self):
            value = getattr(self, f.name)
            data[f.name] = float(value) if isinstance(value, Decimal) else value
        return data


@dataclass(frozen=True)
class TaxedLine(NormalizedLine):
    """NormalizedLine with the document regime applied.

    Only one tax family is ever non-zero: cgst + sgst (intrastate) or igst
    (interstate). line_total is always derived from the components, never
    stored.

    Attributes:
        gst_rate: Resolved GST percent (0 when the line had none)
        cgst: Central GST amount
        sgst: State GST amount
        igst: Integrated GST amount
    """

    gst_rate: Decimal = _ZERO
    cgst: Decimal = _ZERO
    sgst: Decimal = _ZERO
    igst: Decimal = _ZERO

    def __post_init__(self):
        """Validate that CGST/SGST and IGST are never combined."""
        super().__post_init__()
        if (self.cgst or self.sgst) and self.igst:
            raise ValueError(
                f"TaxedLine cannot carry both CGST/SGST and IGST "
                f"(cgst={self.cgst}, sgst={self.sgst}, igst={self.igst})"
            )

    @property
    def tax_amount(self) -> Decimal:
        return self.cgst + self.sgst + self.igst

    @property
    def line_total(self) -> Decimal:
        return self.taxable_amount + self.cgst + self.sgst + self.igst

    def to_dict(self) -> Dict[str, Any]:
        data = super().to_dict()
        data["tax_amount"] = float(self.tax_amount)
        data["line_total"] = float(self.line_total)
        return data
