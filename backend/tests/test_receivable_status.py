# backend/tests/test_receivable_status.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Optional

from app.domain.receivables import (
    aging_buckets,
    format_display_date,
    is_overdue,
    payment_reference,
    resolve_status,
)


@dataclass
class P:
    id: int
    status: str
    amount: float = 100.0
    payment_type: Optional[str] = "rent"
    receipt_number: Optional[str] = None
    payment_date: Optional[datetime] = None
    created_at: Optional[datetime] = None


NOW = datetime(2026, 3, 15, 12, 0, 0)
YESTERDAY = NOW - timedelta(days=1)
TOMORROW = NOW + timedelta(days=1)


def test_pending_with_past_due_date_is_overdue():
    assert resolve_status(P(id=1, status="pending", payment_date=YESTERDAY), NOW) == "Overdue"
    assert resolve_status(P(id=1, status="pending", payment_date=TOMORROW), NOW) == "Pending"


def test_stored_overdue_wins_regardless_of_dates():
    assert resolve_status(P(id=1, status="overdue", payment_date=TOMORROW), NOW) == "Overdue"
    assert resolve_status(P(id=1, status="overdue"), NOW) == "Overdue"


def test_partial_is_never_promoted_by_date():
    p = P(id=1, status="partial", payment_date=YESTERDAY)
    assert is_overdue(p, NOW) is False
    assert resolve_status(p, NOW) == "Partial"


def test_paid_is_not_overdue():
    assert is_overdue(P(id=1, status="paid", payment_date=YESTERDAY), NOW) is False


def test_due_date_falls_back_to_created_at():
    p = P(id=1, status="pending", payment_date=None, created_at=YESTERDAY)
    assert resolve_status(p, NOW) == "Overdue"
    assert resolve_status(P(id=1, status="pending"), NOW) == "Pending"


def test_reference_synthesis():
    assert payment_reference(P(id=7, status="pending", payment_type="rent")) == "RENT-0007"
    assert payment_reference(P(id=7, status="pending", payment_type=None)) == "RENT-0007"
    assert payment_reference(P(id=12345, status="pending", payment_type="deposit")) == "DEPOSIT-12345"
    assert payment_reference(P(id=7, status="pending", receipt_number="RCPT-88")) == "RCPT-88"


def test_display_date():
    assert format_display_date(datetime(2025, 11, 5, 23, 59)) == "Nov 5, 2025"
    assert format_display_date(date(2026, 1, 31)) == "Jan 31, 2026"
    assert format_display_date(None) is None


def test_aging_buckets():
    payments = [
        P(id=1, status="pending", amount=100.0, payment_date=NOW - timedelta(days=3)),
        P(id=2, status="pending", amount=50.5, payment_date=NOW - timedelta(days=30)),
        P(id=3, status="pending", amount=20.0, payment_date=NOW - timedelta(days=45)),
        P(id=4, status="pending", amount=10.0, created_at=NOW - timedelta(days=75)),
        P(id=5, status="pending", amount=5.25, payment_date=NOW - timedelta(days=400)),
    ]
    out = aging_buckets(payments, NOW)
    assert out["breakdown"] == {"0-30": 150.5, "31-60": 20.0, "61-90": 10.0, "91+": 5.25}
    assert out["total"] == 185.75
