"""Unit tests for GSTIN extraction, state codes and regime resolution."""

from decimal import Decimal

import pytest

from gstinvoice.models.invoice_line import NormalizedLine
from gstinvoice.models.tax_regime import TaxRegime
from gstinvoice.pipeline.tax_jurisdiction import (
    get_gstin,
    resolve_document_regime,
    resolve_party_state_codes,
    resolve_regime,
    safe_gst_rate,
    state_code_from_gstin,
    state_code_from_name,
)

MH_GSTIN = "27AAPFU0939F1ZV"
DL_GSTIN = "07AAACB2230M1ZT"
KA_GSTIN = "29AABCT1332L1ZZ"


def _line(rate=None, name="Widget"):
    return NormalizedLine(
        kind="product",
        name=name,
        quantity=Decimal("1"),
        unit_price=Decimal("1000"),
        taxable_amount=Decimal("1000.00"),
        gst_rate=rate,
    )


class TestGetGstin:
    @pytest.mark.parametrize(
        "record",
        [
            {"gstin": MH_GSTIN},
            {"gstIn": MH_GSTIN},
            {"gstNumber": MH_GSTIN},
            {"gst_no": MH_GSTIN},
            {"gst": MH_GSTIN},
            {"gstinNumber": MH_GSTIN},
            {"tax": {"gstin": MH_GSTIN}},
        ],
    )
    def test_aliases(self, record):
        assert get_gstin(record) == MH_GSTIN

    def test_blank_alias_skipped(self):
        assert get_gstin({"gstin": "", "gstIn": "  ", "gstNumber": DL_GSTIN}) == DL_GSTIN

    def test_alias_priority(self):
        assert get_gstin({"gstNumber": DL_GSTIN, "gstin": MH_GSTIN}) == MH_GSTIN

    def test_normalized_to_upper_case(self):
        assert get_gstin({"gstin": " 27aapfu0939f1zv "}) == MH_GSTIN

    @pytest.mark.parametrize("record", [None, {}, {"gstin": None}, "27AAPFU0939F1ZV"])
    def test_missing(self, record):
        assert get_gstin(record) is None


class TestStateCodes:
    @pytest.mark.parametrize(
        "gstin,expected",
        [
            (MH_GSTIN, "27"),
            (DL_GSTIN, "07"),
            ("URP", None),
            ("2", None),
            ("", None),
            (None, None),
        ],
    )
    def test_state_code_from_gstin(self, gstin, expected):
        assert state_code_from_gstin(gstin) == expected

    @pytest.mark.parametrize(
        "name,expected",
        [
            ("Maharashtra", "27"),
            ("tamil nadu", "33"),
            ("  Karnataka ", "29"),
            ("Jammu and Kashmir", "01"),
            ("Andaman and Nicobar Islands", "35"),
            ("Ladakh", "38"),
            ("Andhra Pradesh", "37"),
            ("Orissa", "21"),
            ("New Delhi", "07"),
            ("Pondicherry", "34"),
            ("24", "24"),
            ("Maharashtra State", "27"),
            ("State of Tamil Nadu", "33"),
            ("Andhra Pradesh State", "37"),
            ("Andhra Pradesh (Old) region", "28"),
            ("Pune, Maharashtra, India", "27"),
            ("Goalpara", None),
            ("Atlantis", None),
            ("", None),
            (None, None),
        ],
    )
    def test_state_code_from_name(self, name, expected):
        assert state_code_from_name(name) == expected


class TestResolveRegime:
    def test_no_seller_gstin_is_no_tax(self):
        assert resolve_regime(None, DL_GSTIN) is TaxRegime.NO_TAX
        assert resolve_regime("  ", DL_GSTIN) is TaxRegime.NO_TAX

    def test_different_states_is_interstate(self):
        assert resolve_regime(MH_GSTIN, DL_GSTIN) is TaxRegime.INTERSTATE

    def test_same_state_is_intrastate(self):
        assert resolve_regime(MH_GSTIN, "27AAACR5055K1Z5") is TaxRegime.INTRASTATE

    def test_unknown_buyer_state_is_intrastate(self):
        assert resolve_regime(MH_GSTIN, None) is TaxRegime.INTRASTATE
        assert resolve_regime(MH_GSTIN, "URP", buyer_state="Atlantis") is TaxRegime.INTRASTATE

    def test_buyer_state_name_used_without_gstin(self):
        assert resolve_regime(MH_GSTIN, None, buyer_state="Karnataka") is TaxRegime.INTERSTATE

    def test_gstin_prefix_wins_over_state_name(self):
        regime = resolve_regime(MH_GSTIN, KA_GSTIN, buyer_state="Maharashtra")
        assert regime is TaxRegime.INTERSTATE


class TestSafeGstRate:
    def test_default_reads_line_rate(self):
        assert safe_gst_rate(_line(Decimal("18"))) == Decimal("18")

    def test_missing_rate_is_zero(self):
        assert safe_gst_rate(_line(None)) == Decimal("0")

    def test_negative_rate_is_zero(self):
        assert safe_gst_rate(_line(Decimal("-5"))) == Decimal("0")

    def test_custom_resolver(self):
        assert safe_gst_rate(_line(None), lambda line: "12") == Decimal("12")

    def test_failing_resolver_is_zero(self, caplog):
        def broken(line):
            raise KeyError("catalogue lookup failed")

        assert safe_gst_rate(_line(Decimal("18")), broken) == Decimal("0")
        assert "GST rate resolver failed" in caplog.text


class TestResolveDocumentRegime:
    def test_interstate(self):
        regime = resolve_document_regime({"gstin": MH_GSTIN}, {"gstin": DL_GSTIN}, [_line(Decimal("18"))])
        assert regime is TaxRegime.INTERSTATE

    def test_shipping_state_wins_over_party_state(self):
        regime = resolve_document_regime(
            {"gstin": MH_GSTIN},
            {"state": "Maharashtra"},
            [_line(Decimal("18"))],
            shipping_address={"state": "Delhi"},
        )
        assert regime is TaxRegime.INTERSTATE

    def test_shipping_state_wins_over_buyer_gstin(self):
        # Goods shipped out of state to a same-state buyer
        regime = resolve_document_regime(
            {"gstin": MH_GSTIN},
            {"gstin": MH_GSTIN},
            [_line(Decimal("18"))],
            shipping_address={"state": "Delhi"},
        )
        assert regime is TaxRegime.INTERSTATE

    def test_unknown_shipping_state_falls_back_to_buyer_gstin(self):
        regime = resolve_document_regime(
            {"gstin": MH_GSTIN},
            {"gstin": DL_GSTIN, "state": "Maharashtra"},
            [_line(Decimal("18"))],
            shipping_address={"state": "Atlantis"},
        )
        assert regime is TaxRegime.INTERSTATE

    def test_seller_state_from_address_state(self):
        # Seller GSTIN without a numeric prefix falls back to addressState
        regime = resolve_document_regime(
            {"gstin": "URPSELLER", "addressState": "Karnataka"},
            {"gstin": KA_GSTIN},
            [_line(Decimal("5"))],
        )
        assert regime is TaxRegime.INTRASTATE

    def test_zero_rate_document_is_no_tax(self):
        regime = resolve_document_regime(
            {"gstin": MH_GSTIN}, {"gstin": DL_GSTIN}, [_line(None), _line(Decimal("0"))]
        )
        assert regime is TaxRegime.NO_TAX

    def test_unregistered_seller(self):
        regime = resolve_document_regime({"name": "Corner Shop"}, {"gstin": DL_GSTIN}, [_line(Decimal("18"))])
        assert regime is TaxRegime.NO_TAX


def test_resolve_party_state_codes():
    seller, buyer = resolve_party_state_codes(
        {"gstin": MH_GSTIN},
        {"state": "Maharashtra"},
        shipping_address={"state": "Karnataka"},
    )
    assert (seller, buyer) == ("27", "29")
    assert resolve_party_state_codes(None, None) == (None, None)


def test_resolve_party_state_codes_shipping_over_gstin():
    seller, buyer = resolve_party_state_codes(
        {"gstin": MH_GSTIN},
        {"gstin": MH_GSTIN, "state": "Maharashtra"},
        shipping_address={"state": "Delhi"},
    )
    assert (seller, buyer) == ("27", "07")
    assert resolve_party_state_codes({"gstin": MH_GSTIN}, {"gstin": DL_GSTIN})[1] == "07"
