"""Line normalization: reconcile raw transaction shapes into NormalizedLine objects."""

import logging
from decimal import Decimal
from typing import Any, List, Mapping, Optional, Union

from ..models.invoice_line import PRODUCT, SERVICE, NormalizedLine
from ..models.raw_transaction import (
    LegacyShape,
    RawTransaction,
    SingleAmountShape,
    UnifiedShape,
    parse_raw_transaction,
)
from .field_probe import key, nested, probe, probe_str
from .number_normalizer import coerce_decimal, round_money

logger = logging.getLogger(__name__)

PLACEHOLDER_NAME = "Item"

_ONE = Decimal("1")
_ZERO = Decimal("0")

# Name fallbacks, in priority order. Products and services share the first
# three; services additionally try their own fields and the id lookup.
_PRODUCT_NAME_ACCESSORS = [
    key("name"),
    key("productName"),
    nested("product", "name"),
]
_SERVICE_NAME_ACCESSORS = [
    key("serviceName"),
    nested("service", "serviceName"),
    nested("service", "name"),
]

_GST_RATE_ACCESSORS = [
    key("gstPercentage"),
    key("gstRate"),
    key("gst_rate"),
    key("gst"),
]
_CODE_ACCESSORS = [
    key("code"),
    key("hsn"),
    key("sac"),
    nested("product", "hsn"),
    nested("service", "sac"),
]
_UNIT_ACCESSORS = [
    key("unit"),
    key("unitType"),
]


def _is_service_row(row: Mapping[str, Any]) -> bool:
    """A unified row is a service when tagged so or when it references one."""
    return (
        row.get("itemType") == SERVICE
        or bool(row.get("service"))
        or bool(row.get("serviceName"))
    )


def _service_id(row: Mapping[str, Any]) -> Optional[str]:
    ref = row.get("service")
    if isinstance(ref, Mapping):
        ref = ref.get("_id")
    if ref is None or ref == "":
        return None
    return str(ref)


def resolve_line_name(
    row: Mapping[str, Any],
    is_service: bool,
    service_name_by_id: Optional[Mapping[str, str]] = None,
) -> str:
    """Resolve a display name: explicit -> populated sub-document -> id lookup -> "Item"."""
    name = probe_str(row, _PRODUCT_NAME_ACCESSORS)
    if name is None and is_service:
        name = probe_str(row, _SERVICE_NAME_ACCESSORS)
        if name is None and service_name_by_id:
            service_id = _service_id(row)
            if service_id is not None:
                looked_up = service_name_by_id.get(service_id)
                if looked_up and str(looked_up).strip():
                    name = str(looked_up).strip()
    if name is None:
        logger.debug("No name found for line, using placeholder '%s'", PLACEHOLDER_NAME)
        return PLACEHOLDER_NAME
    return name


def normalize_row(
    row: Mapping[str, Any],
    kind: Optional[str] = None,
    service_name_by_id: Optional[Mapping[str, str]] = None,
) -> NormalizedLine:
    """Normalize one raw item record.

    Args:
        row: Raw item record (any field may be missing)
        kind: Forced kind from the legacy array it came from, or None to detect
        service_name_by_id: Optional id -> service name lookup

    Returns:
        NormalizedLine (never raises on malformed data)
    """
    if not isinstance(row, Mapping):
        row = {}

    is_service = kind == SERVICE if kind else _is_service_row(row)
    name = resolve_line_name(row, is_service, service_name_by_id)

    # Services are not unit-counted
    quantity = _ONE if is_service else coerce_decimal(row.get("quantity"), _ONE)

    raw_price = coerce_decimal(row.get("pricePerUnit"), None)
    raw_amount = coerce_decimal(row.get("amount"), None)

    if raw_amount is not None:
        amount = raw_amount
    else:
        amount = (raw_price or _ZERO) * quantity

    if raw_price is not None:
        unit_price = raw_price
    elif quantity > 0:
        unit_price = amount / quantity
    else:
        unit_price = _ZERO

    gst_rate = coerce_decimal(probe(row, _GST_RATE_ACCESSORS), None)
    code = probe_str(row, _CODE_ACCESSORS) or ""
    unit = probe_str(row, _UNIT_ACCESSORS) or ""
    description = row.get("description")

    return NormalizedLine(
        kind=SERVICE if is_service else PRODUCT,
        name=name,
        quantity=quantity,
        unit_price=unit_price,
        taxable_amount=round_money(amount),
        description=str(description) if description else "",
        gst_rate=gst_rate,
        code=code,
        unit=unit,
    )


def _normalize_single_amount(shape: SingleAmountShape) -> NormalizedLine:
    """Synthesize one line for transactions that only carry a top-level amount."""
    row = {
        "name": shape.description or PLACEHOLDER_NAME,
        "amount": shape.amount,
        "quantity": shape.quantity,
        "pricePerUnit": shape.price_per_unit,
    }
    return normalize_row(row, kind=PRODUCT)


def normalize_lines(
    raw: Union[RawTransaction, Mapping[str, Any], None],
    service_name_by_id: Optional[Mapping[str, str]] = None,
) -> List[NormalizedLine]:
    """Reconcile a raw transaction into an ordered list of NormalizedLine.

    Unified ``items`` win over legacy arrays (never merged). Legacy records
    yield products first, then services, each in input order.

    Args:
        raw: Raw transaction mapping or an already-parsed RawTransaction
        service_name_by_id: Optional id -> service name lookup (read only)

    Returns:
        List of NormalizedLine
    """
    shape = parse_raw_transaction(raw)

    if isinstance(shape, UnifiedShape):
        return [normalize_row(row, None, service_name_by_id) for row in shape.items]

    if isinstance(shape, SingleAmountShape):
        logger.debug("Transaction has no line arrays, using top-level amount")
        return [_normalize_single_amount(shape)]

    if isinstance(shape, LegacyShape):
        lines = [normalize_row(row, PRODUCT, service_name_by_id) for row in shape.products]
        lines.extend(normalize_row(row, SERVICE, service_name_by_id) for row in shape.services)
        return lines

    return []
