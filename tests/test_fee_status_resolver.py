"""Unit tests for fee status derivation."""

from decimal import Decimal

import pytest

from app.core.enums import FeeStatus
from app.api.v1.fees.resolver import resolve_fee_status


@pytest.mark.parametrize(
    "fee_amount, paid, expected",
    [
        ("5000", "0", FeeStatus.pending),
        ("5000", "0.01", FeeStatus.partial),
        ("5000", "2000", FeeStatus.partial),
        ("5000", "4999.99", FeeStatus.partial),
        ("5000", "5000", FeeStatus.paid),
        ("5000", "7500", FeeStatus.paid),
    ],
)
def test_resolve_fee_status(fee_amount, paid, expected) -> None:
    assert resolve_fee_status(Decimal(fee_amount), Decimal(paid)) == expected


def test_resolve_accepts_mixed_numeric_types() -> None:
    assert resolve_fee_status(5000, 5000.0) == FeeStatus.paid
    assert resolve_fee_status(Decimal("5000.00"), None) == FeeStatus.pending
