"""Per-line GST calculation for a resolved tax regime."""

from dataclasses import fields
from decimal import Decimal
from typing import Iterable, List, Optional, Tuple

from ..models.invoice_line import NormalizedLine, TaxedLine
from ..models.tax_regime import TaxRegime
from .number_normalizer import round_money
from .tax_jurisdiction import GstRateResolver, safe_gst_rate

_ZERO = Decimal("0")
_HUNDRED = Decimal("100")
_TWO_HUNDRED = Decimal("200")


def calculate_line_tax(
    taxable_amount: Decimal,
    gst_rate: Decimal,
    regime: TaxRegime,
) -> Tuple[Decimal, Decimal, Decimal]:
    """Compute (cgst, sgst, igst) for one taxable amount.

    - NO_TAX: all zero
    - INTERSTATE: igst = round(taxable * rate / 100)
    - INTRASTATE: cgst = sgst = round(taxable * rate / 200), each half rounded
      on its own rather than halving a rounded total
    """
    if regime is TaxRegime.INTERSTATE:
        return _ZERO, _ZERO, round_money(taxable_amount * gst_rate / _HUNDRED)
    if regime is TaxRegime.INTRASTATE:
        half = round_money(taxable_amount * gst_rate / _TWO_HUNDRED)
        return half, half, _ZERO
    return _ZERO, _ZERO, _ZERO


def tax_line(
    line: NormalizedLine,
    regime: TaxRegime,
    gst_rate_resolver: Optional[GstRateResolver] = None,
) -> TaxedLine:
    """Apply the regime to a single NormalizedLine."""
    gst_rate = safe_gst_rate(line, gst_rate_resolver)
    cgst, sgst, igst = calculate_line_tax(line.taxable_amount, gst_rate, regime)

    base = {f.name: getattr(line, f.name) for f in fields(NormalizedLine)}
    base["gst_rate"] = gst_rate if regime.is_taxed else _ZERO
    return TaxedLine(**base, cgst=cgst, sgst=sgst, igst=igst)


def apply_tax(
    lines: Iterable[NormalizedLine],
    regime: TaxRegime,
    gst_rate_resolver: Optional[GstRateResolver] = None,
) -> List[TaxedLine]:
    """Apply one document-wide regime to every line.

    Args:
        lines: Normalized lines in document order
        regime: Regime resolved once for the document
        gst_rate_resolver: Optional callable returning the GST percent for a
            line (defaults to the rate carried on the line; missing -> 0)

    Returns:
        List of TaxedLine, same order and length as input
    """
    return [tax_line(line, regime, gst_rate_resolver) for line in lines]
