"""Unit tests for document totals aggregation."""

from decimal import Decimal

from gstinvoice.models.document_totals import DocumentTotals
from gstinvoice.models.invoice_line import TaxedLine
from gstinvoice.pipeline.totals_aggregator import aggregate_totals


def _taxed(taxable, cgst="0", sgst="0", igst="0", quantity="1"):
    return TaxedLine(
        kind="product",
        name="Line",
        quantity=Decimal(quantity),
        unit_price=Decimal(taxable),
        taxable_amount=Decimal(taxable),
        cgst=Decimal(cgst),
        sgst=Decimal(sgst),
        igst=Decimal(igst),
    )


def test_empty_lines():
    totals = aggregate_totals([])
    assert totals == DocumentTotals()
    assert totals.grand_total == Decimal("0")
    assert totals.total_line_count == 0


def test_sums_components():
    lines = [
        _taxed("1000.00", cgst="90.00", sgst="90.00", quantity="2"),
        _taxed("333.33", cgst="8.33", sgst="8.33", quantity="1.5"),
    ]
    totals = aggregate_totals(lines)

    assert totals.total_taxable == Decimal("1333.33")
    assert totals.total_cgst == Decimal("98.33")
    assert totals.total_sgst == Decimal("98.33")
    assert totals.total_igst == Decimal("0")
    assert totals.total_tax == Decimal("196.66")
    assert totals.total_quantity == Decimal("3.5")
    assert totals.total_line_count == 2


def test_grand_total_equals_sum_of_line_totals():
    lines = [_taxed("0.01", igst="0.01"), _taxed("999.99", igst="180.00"), _taxed("10.10")]
    totals = aggregate_totals(lines)

    assert totals.grand_total == sum(line.line_total for line in lines)
    assert totals.grand_total == (
        totals.total_taxable + totals.total_cgst + totals.total_sgst + totals.total_igst
    )


def test_to_dict():
    data = aggregate_totals([_taxed("100.00", igst="18.00")]).to_dict()
    assert data["grand_total"] == 118.0
    assert data["total_tax"] == 18.0
    assert data["total_line_count"] == 1
