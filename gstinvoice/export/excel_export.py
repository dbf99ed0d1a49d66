"""Excel export of computed invoices: line items, HSN summary and totals."""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

import pandas as pd

from ..models.invoice_document import InvoiceDocument
from ..models.validation_result import ValidationResult

logger = logging.getLogger(__name__)

LINES_SHEET = "Lines"
HSN_SHEET = "HSN Summary"
TOTALS_SHEET = "Totals"

_MONEY_COLUMNS = {
    "Rate", "Taxable Value", "CGST", "SGST", "IGST", "Tax", "Line Total",
    "Grand Total", "Total Taxable", "Total CGST", "Total SGST", "Total IGST",
    "Total Tax", "Total",
}


def _line_rows(document: InvoiceDocument, source: str = "") -> List[Dict[str, Any]]:
    rows = []
    for page in document.pages:
        for position, line in enumerate(page.lines):
            rows.append({
                "Source": source,
                "Invoice No": document.invoice_number,
                "Page": page.page_number,
                "S.No.": page.serial_number(position),
                "Type": line.kind,
                "Name": line.name,
                "Description": line.description,
                "HSN/SAC": line.code,
                "Qty": float(line.quantity),
                "Unit": line.unit,
                "Rate": float(line.unit_price),
                "Taxable Value": float(line.taxable_amount),
                "GST %": float(line.gst_rate),
                "CGST": float(line.cgst),
                "SGST": float(line.sgst),
                "IGST": float(line.igst),
                "Line Total": float(line.line_total),
            })
    return rows


def _hsn_rows(document: InvoiceDocument, source: str = "") -> List[Dict[str, Any]]:
    return [
        {
            "Source": source,
            "Invoice No": document.invoice_number,
            "HSN/SAC": row.code,
            "Taxable Value": float(row.taxable_value),
            "GST %": float(row.gst_rate),
            "CGST": float(row.cgst),
            "SGST": float(row.sgst),
            "IGST": float(row.igst),
            "Tax": float(row.tax_amount),
            "Total": float(row.total),
        }
        for row in document.hsn_summary
    ]


def _totals_row(
    document: InvoiceDocument,
    validation: Optional[ValidationResult] = None,
    source: str = "",
) -> Dict[str, Any]:
    totals = document.totals
    return {
        "Source": source,
        "Invoice No": document.invoice_number,
        "Regime": document.regime.value,
        "Seller GSTIN": document.seller_gstin or "",
        "Buyer GSTIN": document.buyer_gstin or "",
        "Lines": totals.total_line_count,
        "Total Qty": float(totals.total_quantity),
        "Total Taxable": float(totals.total_taxable),
        "Total CGST": float(totals.total_cgst),
        "Total SGST": float(totals.total_sgst),
        "Total IGST": float(totals.total_igst),
        "Total Tax": float(totals.total_tax),
        "Grand Total": float(totals.grand_total),
        "Amount in Words": document.amount_in_words_footer or document.amount_in_words,
        "Status": validation.status if validation else "",
        "Warnings": len(validation.warnings) if validation else 0,
    }


def _format_money(worksheet, df: pd.DataFrame) -> None:
    from openpyxl.styles.numbers import FORMAT_NUMBER_00

    indices = [df.columns.get_loc(name) for name in df.columns if name in _MONEY_COLUMNS]
    for row in worksheet.iter_rows(min_row=2, max_row=worksheet.max_row):
        for idx in indices:
            row[idx].number_format = FORMAT_NUMBER_00


def export_to_excel(
    invoice_data: Union[InvoiceDocument, List[Dict[str, Any]]],
    output_path: str,
    validation: Optional[ValidationResult] = None,
) -> str:
    """Export computed invoices to an Excel workbook.

    Args:
        invoice_data: Either:
            - A single InvoiceDocument (validation taken from the argument)
            - List of dicts with "document", optional "validation" and
              optional "source" (batch mode, one entry per invoice)
        output_path: Path to output .xlsx file
        validation: Optional ValidationResult for single-document mode

    Returns:
        Path to created Excel file

    Workbook structure:
    - "Lines": one row per taxed line, with page and serial number
    - "HSN Summary": one row per HSN/SAC group per invoice
    - "Totals": one row per invoice with aggregate values and status
    """
    if isinstance(invoice_data, InvoiceDocument):
        entries = [{"document": invoice_data, "validation": validation, "source": ""}]
    else:
        entries = list(invoice_data)
    if not entries:
        raise ValueError("Cannot export an empty invoice list")

    line_rows: List[Dict[str, Any]] = []
    hsn_rows: List[Dict[str, Any]] = []
    totals_rows: List[Dict[str, Any]] = []
    for entry in entries:
        document = entry["document"]
        source = entry.get("source") or ""
        line_rows.extend(_line_rows(document, source))
        hsn_rows.extend(_hsn_rows(document, source))
        totals_rows.append(_totals_row(document, entry.get("validation"), source))

    sheets = {
        LINES_SHEET: pd.DataFrame(line_rows),
        HSN_SHEET: pd.DataFrame(hsn_rows),
        TOTALS_SHEET: pd.DataFrame(totals_rows),
    }

    output_path_obj = Path(output_path)
    output_path_obj.parent.mkdir(parents=True, exist_ok=True)

    with pd.ExcelWriter(output_path, engine='openpyxl') as writer:
        for sheet_name, df in sheets.items():
            df.to_excel(writer, index=False, sheet_name=sheet_name)
            _format_money(writer.sheets[sheet_name], df)

    logger.info("Exported %d invoice(s) to %s", len(entries), output_path)
    return str(output_path)
