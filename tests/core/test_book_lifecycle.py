"""Book Lifecycle: tests for the pure sufficiency and availability rules.

Tests cover:
    - ensure_sufficient_copies rejects quantity > copies
    - enforce_availability forces available off at 0 copies only
"""

from dataclasses import dataclass

import pytest

from library_api.core.book_lifecycle import (
    enforce_availability, ensure_sufficient_copies,
)
from library_api.core.errors import InsufficientCopiesError


@dataclass
class _Stock:
    copies: int
    available: bool


# ─── ensure_sufficient_copies ────────────────────────────────────

@pytest.mark.parametrize("copies,quantity", [(1, 1), (3, 1), (10, 7), (6, 6)])
def test_sufficient_copies_passes(copies, quantity):
    ensure_sufficient_copies(copies, quantity)


def test_insufficient_copies_raises_with_counts():
    with pytest.raises(InsufficientCopiesError) as exc_info:
        ensure_sufficient_copies(0, 1)
    assert exc_info.value.available == 0
    assert exc_info.value.requested == 1
    assert exc_info.value.message == "Only 0 copies available"
    assert exc_info.value.http_status == 400


def test_insufficient_copies_reports_min_one_on_copies():
    with pytest.raises(InsufficientCopiesError) as exc_info:
        ensure_sufficient_copies(2, 5)
    violation = exc_info.value.violations["copies"]
    assert violation.kind == "min"
    assert violation.min == 1
    assert violation.value == 5


# ─── enforce_availability ────────────────────────────────────────

def test_enforce_availability_zero_copies_unsets_available():
    stock = enforce_availability(_Stock(copies=0, available=True))
    assert stock.available is False


def test_enforce_availability_keeps_available_with_stock():
    stock = enforce_availability(_Stock(copies=3, available=True))
    assert stock.available is True


def test_enforce_availability_does_not_force_available_on():
    stock = enforce_availability(_Stock(copies=3, available=False))
    assert stock.available is False
