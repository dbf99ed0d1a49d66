"""FastAPI application exposing the invoice computation core."""

import logging
from decimal import Decimal

from fastapi import FastAPI, HTTPException

from ..config import get_app_name, get_app_version, get_validation_tolerance
from ..pipeline.amount_in_words import amount_to_words, rupees_in_words, whole_rupees
from ..pipeline.invoice_builder import build_invoice
from ..pipeline.validation import validate_document
from .models import (
    AmountInWordsRequest,
    AmountInWordsResponse,
    InvoiceComputeRequest,
    InvoiceComputeResponse,
)

logger = logging.getLogger(__name__)

app = FastAPI(
    title=f"{get_app_name()} API",
    description="Computes normalized, tax-correct, paginated invoice models for document renderers",
    version=get_app_version(),
)


@app.get("/")
async def root():
    """Root endpoint."""
    return {
        "message": f"{get_app_name()} API",
        "version": get_app_version(),
        "docs": "/docs",
    }


@app.post("/api/invoices/compute", response_model=InvoiceComputeResponse)
async def compute_invoice_endpoint(request: InvoiceComputeRequest):
    """Compute the renderer-ready invoice model for one transaction.

    Args:
        request: Transaction, seller, buyer and optional shipping/lookup data

    Returns:
        InvoiceComputeResponse with lines, totals, pages, words and validation
    """
    try:
        document = build_invoice(
            request.transaction,
            company=request.company,
            party=request.party,
            service_name_by_id=request.service_name_by_id,
            shipping_address=request.shipping_address,
            page_size=request.page_size,
            include_paise=request.include_paise,
            bank=request.bank,
        )
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))

    validation = validate_document(document, tolerance=get_validation_tolerance())
    if validation.errors:
        logger.warning(
            "Invoice %s failed validation: %s", document.invoice_number, "; ".join(validation.errors)
        )

    payload = document.to_dict()
    payload["validation"] = validation.to_dict()
    return payload


@app.post("/api/invoices/words", response_model=AmountInWordsResponse)
async def amount_in_words_endpoint(request: AmountInWordsRequest):
    """Convert a rupee amount to Indian-numbering words."""
    amount = Decimal(str(request.amount))
    return AmountInWordsResponse(
        amount=request.amount,
        words=amount_to_words(whole_rupees(amount)),
        footer=rupees_in_words(amount, include_paise=request.include_paise),
    )
