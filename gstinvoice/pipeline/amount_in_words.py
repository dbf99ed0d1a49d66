"""Convert rupee amounts to words using the Indian numbering system."""

from decimal import ROUND_DOWN, Decimal
from typing import Union

from num2words import num2words

CRORE = 10_000_000

# num2words' en_IN cards stop at crore; larger crore counts are composed here
_MAX_CRORES = 1000


def _cardinal(n: int) -> str:
    crores, rest = divmod(n, CRORE)
    if crores >= _MAX_CRORES:
        words = f"{_cardinal(crores)} CRORE"
        return f"{words} {_cardinal(rest)}" if rest else words
    return num2words(n, lang="en_IN").replace(",", "").replace("-", " ").upper()


def amount_to_words(amount: int) -> str:
    """Convert a non-negative integer rupee amount to upper-case Indian words.

    Examples:
        0 -> "ZERO"
        100 -> "ONE HUNDRED"
        100000 -> "ONE LAKH"
        123456 -> "ONE LAKH TWENTY THREE THOUSAND FOUR HUNDRED AND FIFTY SIX"

    Raises:
        ValueError: If amount is negative or not an integer
    """
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise ValueError(f"amount must be an integer number of rupees, got {amount!r}")
    if amount < 0:
        raise ValueError(f"amount must be >= 0, got {amount}")
    if amount == 0:
        return "ZERO"
    return _cardinal(amount)


def whole_rupees(amount: Union[Decimal, int, float]) -> int:
    """Drop paise: invoices state the total as "... RUPEES ONLY"."""
    value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    return int(value.to_integral_value(rounding=ROUND_DOWN))


def rupees_in_words(amount: Union[Decimal, int, float], include_paise: bool = False) -> str:
    """Footer text for the "total in words" line.

    Args:
        amount: Non-negative rupee amount
        include_paise: Spell out paise ("<RUPEES> AND FIFTY PAISE ONLY") instead of
            dropping them

    Returns:
        e.g. "ONE THOUSAND ONE HUNDRED AND EIGHTY RUPEES ONLY"
    """
    value = Decimal(str(amount)) if not isinstance(amount, Decimal) else amount
    rupees = whole_rupees(value)
    words = amount_to_words(rupees)
    if include_paise:
        paise = int(((value - rupees) * 100).to_integral_value(rounding=ROUND_DOWN))
        if paise > 0:
            return f"{words} AND {amount_to_words(paise)} PAISE ONLY"
    return f"{words} RUPEES ONLY"
