"""Split taxed lines into fixed-size pages for multi-page rendering."""

from typing import List, Sequence

from ..models.invoice_line import TaxedLine
from ..models.page import Page


def paginate(lines: Sequence[TaxedLine], page_size: int) -> List[Page]:
    """Chunk lines into consecutive pages of page_size (last may be shorter).

    Empty input still yields one empty page so the renderer can draw an
    empty-state table. Only the final page has is_last_page set.

    Raises:
        ValueError: If page_size < 1
    """
    if isinstance(page_size, bool) or not isinstance(page_size, int) or page_size < 1:
        raise ValueError(f"page_size must be a positive integer, got {page_size!r}")

    if not lines:
        return [Page(page_number=1, lines=(), is_last_page=True, start_index=0)]

    chunks = [tuple(lines[i:i + page_size]) for i in range(0, len(lines), page_size)]
    last = len(chunks) - 1
    return [
        Page(
            page_number=index + 1,
            lines=chunk,
            is_last_page=index == last,
            start_index=index * page_size,
        )
        for index, chunk in enumerate(chunks)
    ]
