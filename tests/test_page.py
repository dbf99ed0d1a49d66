"""Unit tests for Page model."""

import pytest

from gstinvoice.models.page import Page


def test_page_creation():
    """Test creating a valid Page."""
    page = Page(page_number=2, lines=(), is_last_page=True, start_index=18)
    assert page.page_number == 2
    assert page.lines == ()
    assert page.is_last_page
    assert page.start_index == 18


def test_page_defaults():
    page = Page(page_number=1, lines=())
    assert not page.is_last_page
    assert page.start_index == 0


def test_page_invalid_page_number():
    """Test that page_number must be >= 1."""
    with pytest.raises(ValueError, match="Page number must be >= 1"):
        Page(page_number=0, lines=())


def test_page_invalid_start_index():
    with pytest.raises(ValueError, match="start_index"):
        Page(page_number=1, lines=(), start_index=-1)


def test_serial_number():
    page = Page(page_number=2, lines=(), start_index=10)
    assert page.serial_number(0) == 11
    assert page.serial_number(4) == 15


def test_page_is_frozen():
    page = Page(page_number=1, lines=())
    with pytest.raises(AttributeError):
        page.page_number = 3
