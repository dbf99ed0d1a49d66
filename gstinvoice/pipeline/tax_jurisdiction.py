"""Tax jurisdiction: GSTIN extraction, state codes and the document tax regime."""

import logging
import re
from decimal import Decimal
from typing import Any, Callable, Iterable, Mapping, Optional, Tuple

from ..models.invoice_line import NormalizedLine
from ..models.tax_regime import TaxRegime
from .field_probe import key, nested, probe_str
from .number_normalizer import coerce_decimal

logger = logging.getLogger(__name__)

# GST state codes (first two digits of a GSTIN)
GST_STATE_CODES = {
    "01": "Jammu & Kashmir", "02": "Himachal Pradesh", "03": "Punjab",
    "04": "Chandigarh", "05": "Uttarakhand", "06": "Haryana",
    "07": "Delhi", "08": "Rajasthan", "09": "Uttar Pradesh",
    "10": "Bihar", "11": "Sikkim", "12": "Arunachal Pradesh",
    "13": "Nagaland", "14": "Manipur", "15": "Mizoram",
    "16": "Tripura", "17": "Meghalaya", "18": "Assam",
    "19": "West Bengal", "20": "Jharkhand", "21": "Odisha",
    "22": "Chhattisgarh", "23": "Madhya Pradesh", "24": "Gujarat",
    "26": "Dadra & Nagar Haveli and Daman & Diu", "27": "Maharashtra",
    "28": "Andhra Pradesh (Old)", "29": "Karnataka", "30": "Goa",
    "31": "Lakshadweep", "32": "Kerala", "33": "Tamil Nadu",
    "34": "Puducherry", "35": "Andaman & Nicobar Islands",
    "36": "Telangana", "37": "Andhra Pradesh",
    "38": "Ladakh", "97": "Other Territory",
}

# Names found in older records that are not in the official list above
_STATE_NAME_ALIASES = {
    "DAMAN & DIU": "25",
    "DADRA & NAGAR HAVELI": "26",
    "NCT OF DELHI": "07",
    "NEW DELHI": "07",
    "ORISSA": "21",
    "PONDICHERRY": "34",
    "UTTARANCHAL": "05",
}

GSTIN_ACCESSORS = [
    key("gstin"),
    key("gstIn"),
    key("gstNumber"),
    key("gst_no"),
    key("gst"),
    key("gstinNumber"),
    nested("tax", "gstin"),
]

SELLER_STATE_ACCESSORS = [
    key("addressState"),
    key("state"),
]

RECIPIENT_STATE_ACCESSORS = [
    key("state"),
    key("addressState"),
]

GstRateResolver = Callable[[NormalizedLine], Any]


def _normalize_state_name(name: str) -> str:
    text = name.upper().strip()
    text = re.sub(r"\bAND\b", "&", text)
    text = re.sub(r"\s+", " ", text)
    return text


_STATE_TO_CODE = {_normalize_state_name(v): k for k, v in GST_STATE_CODES.items()}
_STATE_TO_CODE.update({_normalize_state_name(k): v for k, v in _STATE_NAME_ALIASES.items()})


def get_gstin(record: Optional[Mapping[str, Any]]) -> Optional[str]:
    """Read a GSTIN off a company/party record, whatever key it was stored under."""
    gstin = probe_str(record, GSTIN_ACCESSORS)
    if not gstin:
        return None
    return gstin.upper()


def state_code_from_gstin(gstin: Optional[str]) -> Optional[str]:
    """Return the two-digit state prefix of a GSTIN, or None if it is not numeric."""
    if not gstin or not isinstance(gstin, str):
        return None
    code = gstin.strip()[:2]
    if len(code) == 2 and code.isdigit():
        return code
    return None


def state_code_from_name(state_name: Optional[str]) -> Optional[str]:
    """Look up the GST state code for a free-text state name.

    Also accepts a bare two-digit code. Returns None when unknown.
    """
    if not state_name or not isinstance(state_name, str):
        return None
    text = state_name.strip()
    if len(text) == 2 and text.isdigit():
        return text
    normalized = _normalize_state_name(text)
    code = _STATE_TO_CODE.get(normalized)
    if code is None:
        code = _state_code_within(normalized)
    if code is None:
        logger.debug(f"Could not find state code for '{state_name}'")
    return code


def _state_code_within(text: str) -> Optional[str]:
    """Match a known state name embedded in text, e.g. "Maharashtra State".

    Names must sit on word boundaries; the longest match wins so that
    "Andhra Pradesh (Old)" is not read as "Andhra Pradesh".
    """
    matches = [
        name for name in _STATE_TO_CODE
        if re.search(rf"(?<![A-Z0-9]){re.escape(name)}(?![A-Z0-9])", text)
    ]
    if not matches:
        return None
    name = max(matches, key=len)
    logger.debug(f"Matched state '{name}' inside '{text}'")
    return _STATE_TO_CODE[name]


def _state_code(gstin: Optional[str], state_name: Optional[str]) -> Optional[str]:
    return state_code_from_gstin(gstin) or state_code_from_name(state_name)


def resolve_regime(
    seller_gstin: Optional[str],
    buyer_gstin: Optional[str],
    seller_state: Optional[str] = None,
    buyer_state: Optional[str] = None,
) -> TaxRegime:
    """Decide the tax regime for a document.

    Rules:
    - Seller without GSTIN -> NO_TAX (unregistered / retail)
    - Seller and buyer state codes both known and different -> INTERSTATE
    - Otherwise -> INTRASTATE

    State codes come from the GSTIN prefix, falling back to the state name.
    """
    if not seller_gstin or not str(seller_gstin).strip():
        return TaxRegime.NO_TAX

    seller_code = _state_code(seller_gstin, seller_state)
    buyer_code = _state_code(buyer_gstin, buyer_state)

    if seller_code and buyer_code and seller_code != buyer_code:
        return TaxRegime.INTERSTATE
    return TaxRegime.INTRASTATE


def default_gst_rate(line: NormalizedLine) -> Optional[Decimal]:
    """Default resolver: the rate carried on the raw line."""
    return line.gst_rate


def safe_gst_rate(line: NormalizedLine, gst_rate_resolver: Optional[GstRateResolver] = None) -> Decimal:
    """Resolve a line's GST percent; missing, invalid or negative rates read as 0.

    One malformed line must not block the document, so resolver errors are
    logged and the line is treated as untaxed.
    """
    resolver = gst_rate_resolver or default_gst_rate
    try:
        raw_rate = resolver(line)
    except Exception as e:
        logger.warning(f"GST rate resolver failed for line '{line.name}': {e}")
        return Decimal("0")
    rate = coerce_decimal(raw_rate, Decimal("0"))
    if rate < 0:
        logger.debug(f"Negative GST rate {rate} on line '{line.name}', using 0")
        return Decimal("0")
    return rate


def _has_positive_rate(lines: Iterable[NormalizedLine], gst_rate_resolver: GstRateResolver) -> bool:
    return any(safe_gst_rate(line, gst_rate_resolver) > 0 for line in lines)


def _recipient_state_code(
    party: Optional[Mapping[str, Any]],
    shipping_address: Optional[Mapping[str, Any]],
) -> Optional[str]:
    shipping_code = state_code_from_name(probe_str(shipping_address, RECIPIENT_STATE_ACCESSORS))
    if shipping_code:
        return shipping_code
    return _state_code(get_gstin(party), probe_str(party, RECIPIENT_STATE_ACCESSORS))


def resolve_document_regime(
    company: Optional[Mapping[str, Any]],
    party: Optional[Mapping[str, Any]],
    lines: Iterable[NormalizedLine],
    shipping_address: Optional[Mapping[str, Any]] = None,
    gst_rate_resolver: Optional[GstRateResolver] = None,
) -> TaxRegime:
    """Resolve the regime from seller/buyer records and the document lines.

    The recipient state is the place of supply: the shipping address state
    when it resolves, else the buyer GSTIN prefix, else the party state.
    A document where no line carries a positive rate is NO_TAX even for a
    registered seller.
    """
    resolver = gst_rate_resolver or default_gst_rate
    seller_gstin = get_gstin(company)
    seller_state = probe_str(company, SELLER_STATE_ACCESSORS)
    buyer_code = _recipient_state_code(party, shipping_address)

    regime = resolve_regime(seller_gstin, None, seller_state, buyer_code)
    if regime.is_taxed and not _has_positive_rate(lines, resolver):
        logger.debug("No line carries a positive GST rate, treating document as NoTax")
        return TaxRegime.NO_TAX
    return regime


def resolve_party_state_codes(
    company: Optional[Mapping[str, Any]],
    party: Optional[Mapping[str, Any]],
    shipping_address: Optional[Mapping[str, Any]] = None,
) -> Tuple[Optional[str], Optional[str]]:
    """Return (seller_state_code, recipient_state_code) used for the regime decision."""
    seller_code = _state_code(get_gstin(company), probe_str(company, SELLER_STATE_ACCESSORS))
    return seller_code, _recipient_state_code(party, shipping_address)
