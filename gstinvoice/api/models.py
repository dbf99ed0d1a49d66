"""API request and response models."""

from typing import Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class InvoiceComputeRequest(BaseModel):
    """Request model for the invoice computation endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    transaction: Dict[str, Any] = Field(..., description="Raw transaction record")
    company: Optional[Dict[str, Any]] = Field(None, description="Seller record")
    party: Optional[Dict[str, Any]] = Field(None, description="Buyer record")
    shipping_address: Optional[Dict[str, Any]] = Field(None, alias="shippingAddress")
    service_name_by_id: Optional[Dict[str, str]] = Field(None, alias="serviceNameById")
    page_size: Optional[int] = Field(None, alias="pageSize", ge=1, description="Item rows per page")
    include_paise: Optional[bool] = Field(None, alias="includePaise")
    bank: Optional[Union[Dict[str, Any], str]] = Field(None, description="Seller bank details")


class TaxedLineResponse(BaseModel):
    """Response model for a single taxed line."""

    kind: str
    name: str
    quantity: float
    unit_price: float
    taxable_amount: float
    description: str = ""
    gst_rate: float = 0.0
    code: str = ""
    unit: str = ""
    cgst: float = 0.0
    sgst: float = 0.0
    igst: float = 0.0
    tax_amount: float = 0.0
    line_total: float = 0.0


class TotalsResponse(BaseModel):
    """Response model for document totals."""

    total_taxable: float
    total_cgst: float
    total_sgst: float
    total_igst: float
    total_tax: float
    grand_total: float
    total_quantity: float
    total_line_count: int


class PageResponse(BaseModel):
    """Response model for one page of the items table."""

    page_number: int
    is_last_page: bool
    start_index: int
    line_count: int


class HsnSummaryResponse(BaseModel):
    """Response model for one HSN/SAC summary row."""

    code: str
    taxable_value: float
    gst_rate: float
    cgst: float
    sgst: float
    igst: float
    tax_amount: float
    total: float


class ValidationResponse(BaseModel):
    """Response model for invariant validation."""

    status: str
    lines_sum: float
    diff: float
    tolerance: float
    errors: List[str] = Field(default_factory=list)
    warnings: List[str] = Field(default_factory=list)


class InvoiceComputeResponse(BaseModel):
    """Response model for the invoice computation endpoint."""

    invoice_number: str
    regime: str = Field(..., description="NoTax, Intrastate or Interstate")
    seller_gstin: Optional[str] = None
    buyer_gstin: Optional[str] = None
    seller_state_code: Optional[str] = None
    buyer_state_code: Optional[str] = None
    billing_address: str = ""
    shipping_address: str = ""
    bank_details: str = ""
    lines: List[TaxedLineResponse] = Field(default_factory=list)
    totals: TotalsResponse
    pages: List[PageResponse] = Field(default_factory=list)
    hsn_summary: List[HsnSummaryResponse] = Field(default_factory=list)
    amount_in_words: str
    amount_in_words_footer: str = ""
    validation: ValidationResponse


class AmountInWordsRequest(BaseModel):
    """Request model for the amount-in-words endpoint."""

    model_config = ConfigDict(populate_by_name=True)

    amount: float = Field(..., ge=0, description="Rupee amount")
    include_paise: bool = Field(False, alias="includePaise")


class AmountInWordsResponse(BaseModel):
    """Response model for the amount-in-words endpoint."""

    amount: float
    words: str
    footer: str
