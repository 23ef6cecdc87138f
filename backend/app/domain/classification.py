# backend/app/domain/classification.py
from __future__ import annotations

from typing import Any, Optional

RECEIVABLE = "receivable"
PAYABLE = "payable"
OTHER = "other"

RECEIVABLE_KEYWORDS: tuple[str, ...] = (
    "rent_received",
    "rent",
    "deposit_received",
    "deposit",
    "advance_received",
    "advance",
    "dues_received",
    "other_received",
)

PAYABLE_KEYWORDS: tuple[str, ...] = (
    "salary_paid",
    "vendor_paid",
    "maintenance_paid",
    "utility_paid",
    "refund_paid",
    "other_paid",
    "refund",
)

# Evaluated top to bottom, first hit wins. Receivable goes first, so a type
# matching both lists (e.g. "refund_received") is a receivable.
CATEGORY_RULES: tuple[tuple[tuple[str, ...], str], ...] = (
    (RECEIVABLE_KEYWORDS, RECEIVABLE),
    (PAYABLE_KEYWORDS, PAYABLE),
)

PAYABLE_TYPES = ("bills", "vendor", "laundry")
LAUNDRY = "laundry"


def classify_transaction_type(value: Optional[str]) -> str:
    t = (value or "").lower()
    if not t:
        return OTHER
    for keywords, label in CATEGORY_RULES:
        if any(k in t for k in keywords):
            return label
    return OTHER


def normalize_payable_type(value: Optional[str]) -> Optional[str]:
    """None means the default merged bills view."""
    t = (value or "").strip().lower()
    return t if t in PAYABLE_TYPES else None


def is_laundry_category(category: Optional[str]) -> bool:
    return LAUNDRY in (category or "").lower()


# -----------------------------
# Payable row shapes
# -----------------------------
def _hostel_name(row: Any) -> Optional[str]:
    h = getattr(row, "hostel", None)
    return getattr(h, "name", None) if h is not None else None


def expense_bill_item(e: Any) -> dict[str, Any]:
    return {
        "id": e.id,
        "reference": f"EXP-{e.id}",
        "type": "expense",
        "title": e.title,
        "category": e.category,
        "amount": float(e.amount or 0.0),
        "date": e.date,
        "hostel": _hostel_name(e),
        "description": e.title,
    }


def alert_bill_item(a: Any) -> dict[str, Any]:
    tenant = getattr(a, "tenant", None)
    return {
        "id": a.id,
        "reference": f"ALERT-{a.id}",
        "type": "alert",
        "title": a.title,
        "category": "bill",
        "amount": float(a.amount or 0.0),
        "date": a.created_at,
        "hostel": _hostel_name(a),
        "tenant": getattr(tenant, "name", None) if tenant is not None else None,
        "description": a.description,
    }


def vendor_item(v: Any) -> dict[str, Any]:
    return {
        "id": v.id,
        "reference": f"VENDOR-{v.id}",
        "type": "vendor",
        "title": v.name,
        "company_name": v.company_name,
        "category": v.category or "vendor",
        "amount": float(v.total_payable or 0.0),
        "balance": float(v.balance or 0.0),
        "total_paid": float(v.total_paid or 0.0),
        "date": v.created_at,
        "hostel": _hostel_name(v),
        "description": f"Payable to {v.name}",
        "payment_terms": v.payment_terms,
    }


def laundry_item(e: Any) -> dict[str, Any]:
    return {
        "id": e.id,
        "reference": f"LAUNDRY-{e.id}",
        "type": "laundry",
        "title": e.title,
        "category": e.category,
        "amount": float(e.amount or 0.0),
        "date": e.date,
        "hostel": _hostel_name(e),
        "description": e.title,
    }
