"""Utilities for normalizing and formatting Indian rupee amounts."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation, localcontext
import re
from typing import Any, Optional


PAISE = Decimal("0.01")

_CURRENCY_PATTERN = re.compile(r"(?i)\binr\b|\brs\.?|₹|/-")


def parse_amount(text: str) -> Decimal:
    """Normalize Indian numeric strings to Decimal.

    Rules:
    - Trim whitespace
    - Strip currency markers (Rs., INR, ₹, trailing /-)
    - Remove commas as thousand separators (both 1,234,567 and 12,34,567)
    - Support a leading '-' for negative amounts
    - Raise ValueError for invalid formats
    """
    if text is None:
        raise ValueError("Input text is None")

    raw = text.strip()
    if not raw:
        raise ValueError("Input text is empty")

    negative = False
    if raw.startswith("-"):
        negative = True
        raw = raw[1:].strip()

    cleaned = _CURRENCY_PATTERN.sub("", raw)
    cleaned = re.sub(r"\s+", "", cleaned).strip()
    if cleaned.startswith("-") and not negative:
        negative = True
        cleaned = cleaned[1:]
    if not cleaned:
        raise ValueError("Input text has no numeric content")

    # Commas are only valid between digit groups
    if re.search(r",(?!\d)|(?<!\d),", cleaned):
        raise ValueError(f"Invalid numeric format: {text!r}")
    cleaned = cleaned.replace(",", "")

    if not re.fullmatch(r"\d+(\.\d+)?|\.\d+", cleaned):
        raise ValueError(f"Invalid numeric format: {text!r}")

    try:
        value = Decimal(cleaned)
    except InvalidOperation as exc:
        raise ValueError(f"Invalid numeric format: {text!r}") from exc

    return -value if negative else value


def coerce_decimal(value: Any, default: Optional[Decimal] = Decimal("0")) -> Optional[Decimal]:
    """Best-effort conversion of a stored field to Decimal.

    None, empty strings, booleans, NaN/Infinity and unparseable text all
    return ``default``. Never raises.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, Decimal):
        return value if value.is_finite() else default
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        result = Decimal(str(value))
        return result if result.is_finite() else default
    if isinstance(value, str):
        if not value.strip():
            return default
        try:
            return parse_amount(value)
        except ValueError:
            return default
    return default


def round_money(value: Decimal) -> Decimal:
    """Round to paise, half away from zero (the usual invoice convention)."""
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus two paise digits
        ctx.prec = max(ctx.prec, value.adjusted() + 3)
        return value.quantize(PAISE, rounding=ROUND_HALF_UP)


def format_plain(amount: Decimal) -> str:
    """Plain two-decimal format without grouping, e.g. "1234.50"."""
    return f"{round_money(Decimal(amount)):.2f}"


def _group_indian(digits: str) -> str:
    """Group an integer digit string the Indian way: 12,34,567."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ",".join(groups + [tail])


def format_inr(amount: Decimal, prefix: str = "Rs. ") -> str:
    """Display format used on printed invoices, e.g. "Rs. 1,23,456.00"."""
    value = round_money(Decimal(amount))
    sign = "-" if value < 0 else ""
    integer_part, fraction = f"{abs(value):.2f}".split(".")
    return f"{prefix}{sign}{_group_indian(integer_part)}.{fraction}"
