"""Boundary types for the heterogeneous transaction shapes stored over the years."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional, Tuple, Union


@dataclass(frozen=True)
class UnifiedShape:
    """Transaction with a unified ``items`` array (products and services mixed).

    Attributes:
        items: Raw item records, in document order
    """

    items: Tuple[Mapping[str, Any], ...]


@dataclass(frozen=True)
class LegacyShape:
    """Transaction with split ``products`` / ``services`` arrays.

    The singular ``service`` array written by the oldest schema is appended
    to ``services`` when the shape is parsed.

    Attributes:
        products: Raw product records, in input order
        services: Raw service records (``services`` then ``service``)
    """

    products: Tuple[Mapping[str, Any], ...] = ()
    services: Tuple[Mapping[str, Any], ...] = ()

    @property
    def is_empty(self) -> bool:
        return not self.products and not self.services


@dataclass(frozen=True)
class SingleAmountShape:
    """Transaction without any line arrays, only a top-level amount.

    Attributes:
        description: Free-text description used as the line name
        amount: Raw top-level amount
        quantity: Raw top-level quantity, if any
        price_per_unit: Raw top-level unit price, if any
    """

    description: str = ""
    amount: Any = None
    quantity: Any = None
    price_per_unit: Any = None


RawTransaction = Union[UnifiedShape, LegacyShape, SingleAmountShape]


def _records(value: Any) -> Tuple[Mapping[str, Any], ...]:
    """Return list entries as mappings; anything else reads as an empty record."""
    if not isinstance(value, (list, tuple)):
        return ()
    return tuple(v if isinstance(v, Mapping) else {} for v in value)


def parse_raw_transaction(tx: Optional[Mapping[str, Any]]) -> RawTransaction:
    """Resolve a raw transaction record into one of the boundary shapes.

    Precedence:
    1. Non-empty ``items`` -> UnifiedShape (legacy arrays ignored)
    2. Any non-empty ``products`` / ``services`` / ``service`` -> LegacyShape
    3. Top-level ``amount`` present -> SingleAmountShape
    4. Otherwise an empty LegacyShape (zero lines)
    """
    if isinstance(tx, (UnifiedShape, LegacyShape, SingleAmountShape)):
        return tx
    if not isinstance(tx, Mapping):
        return LegacyShape()

    items = _records(tx.get("items"))
    if items:
        return UnifiedShape(items=items)

    legacy = LegacyShape(
        products=_records(tx.get("products")),
        services=_records(tx.get("services")) + _records(tx.get("service")),
    )
    if not legacy.is_empty:
        return legacy

    if tx.get("amount") is not None:
        return SingleAmountShape(
            description=str(tx.get("description") or ""),
            amount=tx.get("amount"),
            quantity=tx.get("quantity"),
            price_per_unit=tx.get("pricePerUnit"),
        )

    return legacy
