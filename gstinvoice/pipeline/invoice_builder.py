"""Invoice builder: run the computation stages and assemble an InvoiceDocument."""

import logging
from decimal import Decimal
from typing import Any, Mapping, Optional, Tuple, Union

from ..config import get_include_paise_in_words, get_page_size
from ..models.invoice_document import InvoiceDocument
from .amount_in_words import amount_to_words, rupees_in_words, whole_rupees
from .hsn_summary import summarize_by_hsn
from .line_normalizer import normalize_lines
from .line_tax_calculator import apply_tax
from .paginator import paginate
from .party_details import (
    format_bank_details,
    format_billing_address,
    format_shipping_address,
    resolve_invoice_number,
)
from .tax_jurisdiction import (
    GstRateResolver,
    get_gstin,
    resolve_document_regime,
    resolve_party_state_codes,
)
from .totals_aggregator import aggregate_totals

logger = logging.getLogger(__name__)


def _words_for_total(grand_total: Decimal, include_paise: bool) -> Tuple[str, str]:
    """(words, footer) for the grand total; credit notes read as "MINUS ..."."""
    rupees = whole_rupees(abs(grand_total))
    prefix = "MINUS " if grand_total < 0 and rupees > 0 else ""
    words = prefix + amount_to_words(rupees)
    footer = prefix + rupees_in_words(abs(grand_total), include_paise=include_paise)
    return words, footer


def build_invoice(
    transaction: Optional[Mapping[str, Any]],
    company: Optional[Mapping[str, Any]] = None,
    party: Optional[Mapping[str, Any]] = None,
    service_name_by_id: Optional[Mapping[str, str]] = None,
    shipping_address: Optional[Mapping[str, Any]] = None,
    page_size: Optional[int] = None,
    gst_rate_resolver: Optional[GstRateResolver] = None,
    include_paise: Optional[bool] = None,
    bank: Union[Mapping[str, Any], str, None] = None,
) -> InvoiceDocument:
    """Compute the renderer-ready model for one invoice.

    Stages:
    1. Normalize raw lines (items / products + services / top-level amount)
    2. Resolve the tax regime once for the document
    3. Apply tax per line
    4. Aggregate totals, HSN summary and amount in words
    5. Paginate

    Args:
        transaction: Raw transaction record
        company: Seller record (GSTIN under any known alias, addressState)
        party: Buyer record (GSTIN, state, address)
        service_name_by_id: Optional id -> service name lookup (read only)
        shipping_address: Optional consignee address (its state is the place
            of supply and wins over the buyer GSTIN and party state)
        page_size: Item rows per page (default from configuration)
        gst_rate_resolver: Optional callable returning a line's GST percent
        include_paise: Spell out paise in the footer (default from configuration)
        bank: Seller bank record or preformatted text

    Returns:
        InvoiceDocument

    Raises:
        ValueError: If page_size < 1 (configuration error; data problems never raise)
    """
    size = get_page_size(page_size)
    if include_paise is None:
        include_paise = get_include_paise_in_words()

    normalized = normalize_lines(transaction, service_name_by_id)
    regime = resolve_document_regime(
        company, party, normalized,
        shipping_address=shipping_address,
        gst_rate_resolver=gst_rate_resolver,
    )
    lines = apply_tax(normalized, regime, gst_rate_resolver)
    totals = aggregate_totals(lines)
    pages = paginate(lines, size)
    words, footer = _words_for_total(totals.grand_total, include_paise)

    seller_code, buyer_code = resolve_party_state_codes(company, party, shipping_address)
    billing = format_billing_address(party)

    logger.debug(
        f"Built invoice: {len(lines)} lines, regime={regime.value}, "
        f"grand_total={totals.grand_total}, pages={len(pages)}"
    )

    return InvoiceDocument(
        lines=tuple(lines),
        totals=totals,
        pages=tuple(pages),
        amount_in_words=words,
        regime=regime,
        amount_in_words_footer=footer,
        hsn_summary=tuple(summarize_by_hsn(lines)),
        invoice_number=resolve_invoice_number(transaction),
        seller_gstin=get_gstin(company),
        buyer_gstin=get_gstin(party),
        seller_state_code=seller_code,
        buyer_state_code=buyer_code,
        billing_address=billing,
        shipping_address=format_shipping_address(shipping_address, billing),
        bank_details=format_bank_details(bank),
    )
