"""TaxRegime enum describing how GST is split on a document."""

from enum import Enum


class TaxRegime(str, Enum):
    """GST treatment for a whole document.

    Computed once per invoice and applied to every line:
    - NO_TAX: seller is unregistered (no GSTIN) or no line carries a rate
    - INTRASTATE: seller and buyer share a state code (CGST + SGST)
    - INTERSTATE: state codes differ (IGST)
    """

    NO_TAX = "NoTax"
    INTRASTATE = "Intrastate"
    INTERSTATE = "Interstate"

    @property
    def is_taxed(self) -> bool:
        return self is not TaxRegime.NO_TAX
