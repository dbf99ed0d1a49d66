"""Unit tests for per-line GST calculation."""

from decimal import Decimal

import pytest

from gstinvoice.models.invoice_line import NormalizedLine, TaxedLine
from gstinvoice.models.tax_regime import TaxRegime
from gstinvoice.pipeline.line_tax_calculator import apply_tax, calculate_line_tax, tax_line


def _line(taxable="1000.00", rate="18", name="Widget", code="8471"):
    return NormalizedLine(
        kind="product",
        name=name,
        quantity=Decimal("1"),
        unit_price=Decimal(taxable),
        taxable_amount=Decimal(taxable),
        gst_rate=Decimal(rate) if rate is not None else None,
        code=code,
    )


class TestCalculateLineTax:
    def test_intrastate_split(self):
        assert calculate_line_tax(Decimal("1000.00"), Decimal("18"), TaxRegime.INTRASTATE) == (
            Decimal("90.00"), Decimal("90.00"), Decimal("0"),
        )

    def test_interstate(self):
        assert calculate_line_tax(Decimal("1000.00"), Decimal("18"), TaxRegime.INTERSTATE) == (
            Decimal("0"), Decimal("0"), Decimal("180.00"),
        )

    def test_no_tax(self):
        assert calculate_line_tax(Decimal("1000.00"), Decimal("18"), TaxRegime.NO_TAX) == (
            Decimal("0"), Decimal("0"), Decimal("0"),
        )

    def test_halves_rounded_independently(self):
        # 333.33 @ 5%: each half is 8.33325 -> 8.33; the full IGST would be 16.67
        cgst, sgst, igst = calculate_line_tax(Decimal("333.33"), Decimal("5"), TaxRegime.INTRASTATE)
        assert cgst == sgst == Decimal("8.33")
        assert igst == Decimal("0")
        _, _, full = calculate_line_tax(Decimal("333.33"), Decimal("5"), TaxRegime.INTERSTATE)
        assert full == Decimal("16.67")

    def test_half_up_rounding(self):
        # 12.50 @ 18% / 200 = 1.125 -> 1.13
        cgst, sgst, _ = calculate_line_tax(Decimal("12.50"), Decimal("18"), TaxRegime.INTRASTATE)
        assert cgst == sgst == Decimal("1.13")


class TestTaxLine:
    def test_keeps_normalized_fields(self):
        taxed = tax_line(_line(), TaxRegime.INTERSTATE)
        assert isinstance(taxed, TaxedLine)
        assert taxed.name == "Widget"
        assert taxed.code == "8471"
        assert taxed.gst_rate == Decimal("18")
        assert taxed.igst == Decimal("180.00")
        assert taxed.line_total == Decimal("1180.00")

    def test_no_tax_clears_rate(self):
        taxed = tax_line(_line(), TaxRegime.NO_TAX)
        assert taxed.gst_rate == Decimal("0")
        assert taxed.tax_amount == Decimal("0")
        assert taxed.line_total == Decimal("1000.00")

    def test_missing_rate_is_untaxed(self):
        taxed = tax_line(_line(rate=None), TaxRegime.INTRASTATE)
        assert taxed.gst_rate == Decimal("0")
        assert taxed.cgst == taxed.sgst == Decimal("0.00")


class TestApplyTax:
    def test_order_and_length_preserved(self):
        lines = [_line(name=f"Item {i}", taxable=f"{100 * i}.00") for i in range(1, 6)]
        taxed = apply_tax(lines, TaxRegime.INTRASTATE)
        assert [line.name for line in taxed] == [line.name for line in lines]

    @pytest.mark.parametrize("regime", list(TaxRegime))
    def test_tax_families_mutually_exclusive(self, regime):
        lines = [_line(taxable="999.99", rate="28"), _line(taxable="0.01", rate="5"), _line(rate=None)]
        for taxed in apply_tax(lines, regime):
            assert not ((taxed.cgst or taxed.sgst) and taxed.igst)
            assert taxed.cgst == taxed.sgst
            if regime is TaxRegime.NO_TAX:
                assert taxed.tax_amount == 0

    def test_custom_resolver(self):
        rates = {"Widget": "12"}
        taxed = apply_tax([_line(rate=None)], TaxRegime.INTERSTATE, lambda line: rates.get(line.name))
        assert taxed[0].igst == Decimal("120.00")

    def test_failing_resolver_only_affects_its_line(self):
        def resolver(line):
            if line.name == "Bad":
                raise RuntimeError("boom")
            return line.gst_rate

        taxed = apply_tax([_line(name="Good"), _line(name="Bad")], TaxRegime.INTERSTATE, resolver)
        assert taxed[0].igst == Decimal("180.00")
        assert taxed[1].igst == Decimal("0")


def test_taxed_line_rejects_both_families():
    with pytest.raises(ValueError, match="both CGST/SGST and IGST"):
        TaxedLine(
            kind="product",
            name="Widget",
            quantity=Decimal("1"),
            unit_price=Decimal("100"),
            taxable_amount=Decimal("100"),
            cgst=Decimal("9"),
            sgst=Decimal("9"),
            igst=Decimal("18"),
        )
