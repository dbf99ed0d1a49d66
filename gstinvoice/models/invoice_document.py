"""InvoiceDocument: the computed model handed to document renderers."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

from .document_totals import DocumentTotals
from .hsn_summary import HsnSummaryRow
from .invoice_line import TaxedLine
from .page import Page
from .tax_regime import TaxRegime


@dataclass(frozen=True)
class InvoiceDocument:
    """Everything a renderer (PDF, HTML, Excel, print) needs for one invoice.

    Renderers must not re-derive tax math; every amount is already computed
    here.

    Attributes:
        lines: Taxed lines in document order
        totals: Aggregate totals
        pages: Lines chunked for paged rendering
        amount_in_words: Grand total (integer rupees) in Indian words
        regime: Tax regime applied to every line
        amount_in_words_footer: "<WORDS> RUPEES ONLY" footer text
        hsn_summary: Tax summary grouped by HSN/SAC code
        invoice_number: Resolved invoice number
        seller_gstin: Seller GSTIN, None for unregistered sellers
        buyer_gstin: Buyer GSTIN, None when absent
        seller_state_code: Seller state code used for the regime decision
        buyer_state_code: Recipient state code used for the regime decision
        billing_address: Buyer billing address line
        shipping_address: Consignee address line
        bank_details: Seller bank block text
    """

    lines: Tuple[TaxedLine, ...]
    totals: DocumentTotals
    pages: Tuple[Page, ...]
    amount_in_words: str
    regime: TaxRegime
    amount_in_words_footer: str = ""
    hsn_summary: Tuple[HsnSummaryRow, ...] = field(default_factory=tuple)
    invoice_number: str = ""
    seller_gstin: Optional[str] = None
    buyer_gstin: Optional[str] = None
    seller_state_code: Optional[str] = None
    buyer_state_code: Optional[str] = None
    billing_address: str = ""
    shipping_address: str = ""
    bank_details: str = ""

    @property
    def show_igst(self) -> bool:
        return self.regime is TaxRegime.INTERSTATE

    @property
    def show_cgst_sgst(self) -> bool:
        return self.regime is TaxRegime.INTRASTATE

    def to_dict(self) -> Dict[str, Any]:
        """Convert to a JSON-serializable dict."""
        return {
            "invoice_number": self.invoice_number,
            "regime": self.regime.value,
            "seller_gstin": self.seller_gstin,
            "buyer_gstin": self.buyer_gstin,
            "seller_state_code": self.seller_state_code,
            "buyer_state_code": self.buyer_state_code,
            "billing_address": self.billing_address,
            "shipping_address": self.shipping_address,
            "bank_details": self.bank_details,
            "lines": [line.to_dict() for line in self.lines],
            "totals": self.totals.to_dict(),
            "pages": [
                {
                    "page_number": page.page_number,
                    "is_last_page": page.is_last_page,
                    "start_index": page.start_index,
                    "line_count": len(page.lines),
                }
                for page in self.pages
            ],
            "hsn_summary": [row.to_dict() for row in self.hsn_summary],
            "amount_in_words": self.amount_in_words,
            "amount_in_words_footer": self.amount_in_words_footer,
        }
