"""Header details for the invoice: number, addresses and bank details."""

from typing import Any, Mapping, Optional, Union

from .field_probe import key, probe_str

ADDRESS_NOT_AVAILABLE = "Address not available"
BANK_NOT_AVAILABLE = "Bank details not available"

_INVOICE_NUMBER_ACCESSORS = [
    key("invoiceNumber"),
    key("referenceNumber"),
]


def resolve_invoice_number(tx: Optional[Mapping[str, Any]]) -> str:
    """Issued invoice number, falling back to the reference number, then to the id.

    Records without either get "INV-" plus the last six characters of the
    record id, upper-cased ("INV-000000" when there is no id either).
    """
    number = probe_str(tx, _INVOICE_NUMBER_ACCESSORS)
    if number:
        return number
    record_id = str(tx.get("_id") or "") if isinstance(tx, Mapping) else ""
    return f"INV-{record_id[-6:].upper() or '000000'}"


def _join_parts(record: Mapping[str, Any], names) -> str:
    parts = [str(record.get(name)).strip() for name in names if record.get(name)]
    return ", ".join(p for p in parts if p)


def format_billing_address(party: Optional[Mapping[str, Any]]) -> str:
    """Buyer billing address: address, city, state, pincode."""
    if not isinstance(party, Mapping):
        return ADDRESS_NOT_AVAILABLE
    return _join_parts(party, ("address", "city", "state", "pincode"))


def format_shipping_address(
    shipping_address: Optional[Mapping[str, Any]],
    billing_address: Optional[str] = None,
) -> str:
    """Consignee address, falling back to the billing address."""
    if not isinstance(shipping_address, Mapping):
        return billing_address or ADDRESS_NOT_AVAILABLE
    return _join_parts(shipping_address, ("address", "city", "state", "pincode"))


def format_bank_details(bank: Union[Mapping[str, Any], str, None]) -> str:
    """Bank block text; plain strings are passed through."""
    if not bank:
        return BANK_NOT_AVAILABLE
    if isinstance(bank, str):
        return bank
    if not isinstance(bank, Mapping):
        return BANK_NOT_AVAILABLE
    parts = [_join_parts(bank, ("bankName", "branchAddress", "city"))]
    if bank.get("ifscCode"):
        parts.append(f"IFSC: {bank['ifscCode']}")
    return ", ".join(p for p in parts if p) or BANK_NOT_AVAILABLE
