# backend/app/domain/receivables.py
from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable, Optional

from .money import round_money, sum_money

MONTH_ABBREV = ("Jan", "Feb", "Mar", "Apr", "May", "Jun", "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")

RECEIVABLE_STATUSES = ("pending", "overdue", "partial")

STATUS_OVERDUE = "Overdue"
STATUS_PARTIAL = "Partial"
STATUS_PENDING = "Pending"

AGING_BUCKETS = ("0-30", "31-60", "61-90", "91+")


def due_date(payment: Any) -> Optional[datetime]:
    return getattr(payment, "payment_date", None) or getattr(payment, "created_at", None)


def is_overdue(payment: Any, now: datetime) -> bool:
    """
    1. stored overdue -> overdue
    2. paid -> never overdue
    3. pending whose due date has passed -> overdue
    Partial payments are never promoted by date.
    """
    status = (getattr(payment, "status", None) or "").lower()
    if status == "overdue":
        return True
    if status == "paid":
        return False

    due = due_date(payment)
    if due is None:
        return False
    return due < now and status == "pending"


def resolve_status(payment: Any, now: datetime) -> str:
    if is_overdue(payment, now):
        return STATUS_OVERDUE
    if (getattr(payment, "status", None) or "").lower() == "partial":
        return STATUS_PARTIAL
    return STATUS_PENDING


def payment_reference(payment: Any) -> str:
    receipt = getattr(payment, "receipt_number", None)
    if receipt:
        return str(receipt)
    kind = (getattr(payment, "payment_type", None) or "RENT").upper()
    return f"{kind}-{int(payment.id):04d}"


def format_display_date(d: Optional[date]) -> Optional[str]:
    """'Nov 5, 2025'; fixed English names, no locale."""
    if d is None:
        return None
    return f"{MONTH_ABBREV[d.month - 1]} {d.day}, {d.year}"


def receivable_item(payment: Any, now: datetime) -> dict[str, Any]:
    overdue = is_overdue(payment, now)
    tenant = getattr(payment, "tenant", None)
    hostel = getattr(payment, "hostel", None)
    raw = due_date(payment)

    return {
        "id": payment.id,
        "reference": payment_reference(payment),
        "type": payment.payment_type or "Rent",
        "amount": round_money(payment.amount),
        "date": format_display_date(raw),
        "raw_date": raw,
        "tenant": (
            {"id": tenant.id, "name": tenant.name, "email": tenant.email, "phone": tenant.phone}
            if tenant is not None
            else None
        ),
        "tenant_name": tenant.name if tenant is not None else None,
        "hostel": hostel.name if hostel is not None else None,
        "status": resolve_status(payment, now),
        "is_overdue": overdue,
    }


def _bucket_for_age(days: int) -> str:
    if days <= 30:
        return "0-30"
    if days <= 60:
        return "31-60"
    if days <= 90:
        return "61-90"
    return "91+"


def aging_buckets(payments: Iterable[Any], now: datetime) -> dict[str, Any]:
    """
    Unpaid amounts bucketed by whole days since payment_date (or created_at).
    Payments without any date land in the youngest bucket.
    """
    grouped: dict[str, list[Any]] = {k: [] for k in AGING_BUCKETS}
    for p in payments:
        base = due_date(p)
        days = (now - base).days if base is not None else 0
        grouped[_bucket_for_age(days)].append(getattr(p, "amount", 0.0))

    breakdown = {k: sum_money(v) for k, v in grouped.items()}
    return {
        "total": round_money(sum(breakdown.values())),
        "breakdown": {k: round_money(v) for k, v in breakdown.items()},
    }
