"""Validation of computed invoices against the tax and totals invariants."""

from decimal import Decimal
from typing import List, Sequence, Tuple

from ..models.invoice_document import InvoiceDocument
from ..models.invoice_line import TaxedLine
from ..models.tax_regime import TaxRegime
from ..models.validation_result import ValidationResult
from .line_normalizer import PLACEHOLDER_NAME
from .number_normalizer import format_plain, round_money


def validate_lines(
    lines: Sequence[TaxedLine],
    regime: TaxRegime,
    tolerance: float = 0.01,
) -> Tuple[List[str], List[str]]:
    """Check each line for tax-family exclusivity, regime consistency and arithmetic.

    Args:
        lines: Taxed lines to check
        regime: Regime the document was computed with
        tolerance: Allowed deviation in rupees for quantity x unit price

    Returns:
        Tuple of (errors, warnings)
    """
    errors = []
    warnings = []
    tol = Decimal(str(tolerance))

    for index, line in enumerate(lines, start=1):
        has_split = bool(line.cgst or line.sgst)
        if has_split and line.igst:
            errors.append(f"Line {index}: both CGST/SGST and IGST are set")
        if line.cgst != line.sgst:
            errors.append(f"Line {index}: CGST {line.cgst} differs from SGST {line.sgst}")
        if regime is TaxRegime.NO_TAX and line.tax_amount:
            errors.append(f"Line {index}: tax {line.tax_amount} on a NoTax document")
        if regime is TaxRegime.INTERSTATE and has_split:
            errors.append(f"Line {index}: CGST/SGST on an interstate document")
        if regime is TaxRegime.INTRASTATE and line.igst:
            errors.append(f"Line {index}: IGST on an intrastate document")

        expected = round_money(line.quantity * line.unit_price)
        if abs(expected - line.taxable_amount) > tol:
            warnings.append(
                f"Line {index}: quantity x unit price = {format_plain(expected)} "
                f"but taxable amount is {format_plain(line.taxable_amount)}"
            )
        if line.name == PLACEHOLDER_NAME:
            warnings.append(f"Line {index}: no name found, shown as '{PLACEHOLDER_NAME}'")

    return errors, warnings


def validate_document(document: InvoiceDocument, tolerance: float = 0.01) -> ValidationResult:
    """Validate a computed invoice and assign status (OK/REVIEW).

    Status assignment logic:
    - Any invariant error (sum mismatch, mixed tax families, regime
      mismatch, page coverage) -> REVIEW
    - Otherwise -> OK (warnings do not change status)

    Never raises for data problems.
    """
    errors, warnings = validate_lines(document.lines, document.regime, tolerance)
    totals = document.totals
    tol = Decimal(str(tolerance))

    lines_sum = sum((line.line_total for line in document.lines), Decimal("0"))
    diff = totals.grand_total - lines_sum
    if abs(diff) > tol:
        errors.append(
            f"Sum mismatch: grand total {format_plain(totals.grand_total)} "
            f"vs lines {format_plain(lines_sum)}"
        )

    composed = totals.total_taxable + totals.total_cgst + totals.total_sgst + totals.total_igst
    if abs(composed - totals.grand_total) > tol:
        errors.append(
            f"Grand total {totals.grand_total} does not equal taxable + taxes ({composed})"
        )

    if totals.total_line_count != len(document.lines):
        errors.append(
            f"Line count {totals.total_line_count} does not match {len(document.lines)} lines"
        )

    paged = [line for page in document.pages for line in page.lines]
    if paged != list(document.lines):
        errors.append("Pages do not cover the line sequence exactly once, in order")
    last_flags = [page.is_last_page for page in document.pages]
    if not last_flags or last_flags.count(True) != 1 or not last_flags[-1]:
        errors.append("Exactly the final page must be flagged as last page")

    if not document.lines:
        warnings.append("Invoice has no lines")

    return ValidationResult(
        status="REVIEW" if errors else "OK",
        lines_sum=float(lines_sum),
        diff=float(diff),
        tolerance=tolerance,
        errors=errors,
        warnings=warnings,
    )
