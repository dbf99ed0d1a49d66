"""Page data model representing one printed page of the items table."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple

if TYPE_CHECKING:
    from .invoice_line import TaxedLine


@dataclass(frozen=True)
class Page:
    """A slice of the taxed line sequence for paged rendering.

    Renderers draw the totals/footer block only when is_last_page is set.

    Attributes:
        page_number: Page number (starts at 1)
        lines: Lines on this page, in document order
        is_last_page: True only for the final page
        start_index: Index of the first line in the full sequence
    """

    page_number: int
    lines: Tuple[TaxedLine, ...]
    is_last_page: bool = False
    start_index: int = 0

    def __post_init__(self):
        """Validate page number and start index."""
        if self.page_number < 1:
            raise ValueError(f"Page number must be >= 1, got {self.page_number}")
        if self.start_index < 0:
            raise ValueError(f"start_index must be >= 0, got {self.start_index}")

    def serial_number(self, position: int) -> int:
        """Serial number (S.No.) printed for the line at position on this page."""
        return self.start_index + position + 1
