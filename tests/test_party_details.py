"""Unit tests for invoice number, address and bank formatting."""

import pytest

from gstinvoice.pipeline.party_details import (
    ADDRESS_NOT_AVAILABLE,
    BANK_NOT_AVAILABLE,
    format_bank_details,
    format_billing_address,
    format_shipping_address,
    resolve_invoice_number,
)


class TestInvoiceNumber:
    def test_invoice_number(self):
        assert resolve_invoice_number({"invoiceNumber": "INV/24-25/0042", "referenceNumber": "R1"}) == (
            "INV/24-25/0042"
        )

    def test_reference_number_fallback(self):
        assert resolve_invoice_number({"invoiceNumber": " ", "referenceNumber": "REF-9"}) == "REF-9"

    def test_id_fallback(self):
        assert resolve_invoice_number({"_id": "65f1a2b3c4d5e6f7a8b9c0d1"}) == "INV-B9C0D1"

    @pytest.mark.parametrize("tx", [{}, None])
    def test_nothing_available(self, tx):
        assert resolve_invoice_number(tx) == "INV-000000"


class TestAddresses:
    def test_billing_address(self):
        party = {"address": "12 MG Road", "city": "Pune", "state": "Maharashtra", "pincode": "411001"}
        assert format_billing_address(party) == "12 MG Road, Pune, Maharashtra, 411001"

    def test_billing_address_skips_missing_parts(self):
        assert format_billing_address({"city": "Pune", "pincode": 411001}) == "Pune, 411001"

    def test_missing_party(self):
        assert format_billing_address(None) == ADDRESS_NOT_AVAILABLE

    def test_shipping_address(self):
        shipping = {"address": "Plot 7, MIDC", "city": "Nagpur"}
        assert format_shipping_address(shipping, "billing") == "Plot 7, MIDC, Nagpur"

    def test_shipping_falls_back_to_billing(self):
        assert format_shipping_address(None, "12 MG Road, Pune") == "12 MG Road, Pune"
        assert format_shipping_address(None) == ADDRESS_NOT_AVAILABLE


class TestBankDetails:
    def test_record(self):
        bank = {"bankName": "State Bank of India", "city": "Mumbai", "ifscCode": "SBIN0000300"}
        assert format_bank_details(bank) == "State Bank of India, Mumbai, IFSC: SBIN0000300"

    def test_string_passthrough(self):
        assert format_bank_details("HDFC Bank, Andheri") == "HDFC Bank, Andheri"

    @pytest.mark.parametrize("bank", [None, "", {}, {"accountHolder": "X"}])
    def test_not_available(self, bank):
        assert format_bank_details(bank) == BANK_NOT_AVAILABLE
