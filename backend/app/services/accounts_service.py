# backend/app/services/accounts_service.py
from __future__ import annotations

import math
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Optional

from sqlalchemy import and_, desc, func, select
from sqlalchemy.orm import Session, selectinload

from ..config import settings
from ..domain.classification import (
    OTHER,
    PAYABLE,
    RECEIVABLE,
    alert_bill_item,
    classify_transaction_type,
    expense_bill_item,
    laundry_item,
    normalize_payable_type,
    vendor_item,
)
from ..domain.filters import (
    ReportFilter,
    date_range_clauses,
    hostel_clauses,
    search_clauses,
)
from ..domain.money import growth_pct, round_money, sum_money, to_decimal
from ..domain.receivables import RECEIVABLE_STATUSES, aging_buckets, receivable_item
from ..models import Alert, Allocation, Expense, Payment, Tenant, Transaction, Vendor
from .report_cache import report_cache, report_key


def _sum(db: Session, stmt) -> Decimal:
    return to_decimal(db.scalar(stmt))


def _count(db: Session, stmt) -> int:
    return int(db.scalar(stmt) or 0)


def pagination_meta(total: int, page: int, limit: int) -> dict[str, int]:
    return {"page": page, "limit": limit, "pages": math.ceil(total / limit) if limit else 0}


def _offset(page: int, limit: int) -> int:
    return (page - 1) * limit


# -----------------------------
# Aggregation engine
# -----------------------------
def _payment_scope(f: ReportFilter) -> list:
    return [*hostel_clauses(Payment.hostel_id, f), *date_range_clauses(Payment.created_at, f)]


def total_income(db: Session, f: ReportFilter) -> Decimal:
    return _sum(
        db,
        select(func.coalesce(func.sum(Payment.amount), 0.0))
        .where(Payment.status == "paid")
        .where(*_payment_scope(f)),
    )


def total_expenses(db: Session, f: ReportFilter) -> Decimal:
    return _sum(
        db,
        select(func.coalesce(func.sum(Expense.amount), 0.0))
        .where(*hostel_clauses(Expense.hostel_id, f))
        .where(*date_range_clauses(Expense.date, f)),
    )


def pending_payments_total(db: Session, f: ReportFilter) -> Decimal:
    return _sum(
        db,
        select(func.coalesce(func.sum(Payment.amount), 0.0))
        .where(Payment.status == "pending")
        .where(*_payment_scope(f)),
    )


def outstanding_tenant_dues(db: Session, hostel_id: Optional[int]) -> Decimal:
    """
    Tenant.total_due is not dated, so only the hostel scope applies: tenants
    holding an active allocation in that hostel, or everyone.
    """
    q = select(func.coalesce(func.sum(Tenant.total_due), 0.0))
    if hostel_id is not None:
        q = q.where(
            Tenant.allocations.any(and_(Allocation.hostel_id == hostel_id, Allocation.status == "active"))
        )
    return _sum(db, q)


def bad_debt(db: Session, f: ReportFilter) -> Decimal:
    # two independently scoped aggregates; never fold them into one predicate
    return pending_payments_total(db, f) + outstanding_tenant_dues(db, f.hostel_id)


@dataclass(frozen=True)
class FinancialSummary:
    total_income: Decimal
    total_expenses: Decimal
    bad_debt: Decimal

    @property
    def profit_loss(self) -> Decimal:
        return self.total_income - self.total_expenses

    @property
    def is_profit(self) -> bool:
        # break-even counts as profit
        return self.profit_loss >= 0

    def as_dict(self) -> dict[str, Any]:
        return {
            "total_income": round_money(self.total_income),
            "total_expenses": round_money(self.total_expenses),
            "profit_loss": round_money(self.profit_loss),
            "bad_debt": round_money(self.bad_debt),
            "is_profit": self.is_profit,
        }


def compute_financial_summary(db: Session, f: ReportFilter) -> FinancialSummary:
    return FinancialSummary(
        total_income=total_income(db, f),
        total_expenses=total_expenses(db, f),
        bad_debt=bad_debt(db, f),
    )


def financial_summary(db: Session, f: ReportFilter) -> dict[str, Any]:
    return report_cache.cached(
        report_key("summary", ReportFilter(f.hostel_id, f.start_date, f.end_date)),
        lambda: compute_financial_summary(db, f).as_dict(),
    )


# -----------------------------
# Payables
# -----------------------------
def _listing(items: list[dict[str, Any]], total: int, page: int, limit: int) -> dict[str, Any]:
    # totals cover exactly the rows handed back
    return {
        "items": items,
        "total": total,
        "total_amount": round_money(sum_money(i["amount"] for i in items)),
        "pagination": pagination_meta(total, page, limit),
    }


def _bills(db: Session, f: ReportFilter, *, explicit: bool, page: int, limit: int) -> dict[str, Any]:
    where = [
        *hostel_clauses(Expense.hostel_id, f),
        *search_clauses([Expense.title, Expense.category], f.search),
    ]
    expense_count = _count(db, select(func.count()).select_from(Expense).where(*where))

    q = (
        select(Expense)
        .options(selectinload(Expense.hostel))
        .where(*where)
        .order_by(desc(Expense.date), desc(Expense.id))
    )
    if explicit:
        q = q.offset(_offset(page, limit)).limit(limit)
    else:
        q = q.limit(settings.bills_merge_cap)
    expenses = db.scalars(q).all()

    alerts = db.scalars(
        select(Alert)
        .options(selectinload(Alert.hostel), selectinload(Alert.tenant))
        .where(Alert.type == "bill")
        .where(*hostel_clauses(Alert.hostel_id, f))
        .where(*search_clauses([Alert.title, Alert.description], f.search))
        .order_by(desc(Alert.created_at), desc(Alert.id))
    ).all()

    items = [expense_bill_item(e) for e in expenses] + [alert_bill_item(a) for a in alerts]
    total = expense_count if explicit else len(items)
    return _listing(items, total, page, limit)


def _vendors(db: Session, f: ReportFilter, *, page: int, limit: int) -> dict[str, Any]:
    where = [
        Vendor.status == "active",
        *hostel_clauses(Vendor.hostel_id, f),
        *search_clauses([Vendor.name, Vendor.company_name, Vendor.email], f.search),
    ]
    total = _count(db, select(func.count()).select_from(Vendor).where(*where))
    vendors = db.scalars(
        select(Vendor)
        .options(selectinload(Vendor.hostel))
        .where(*where)
        .order_by(desc(Vendor.created_at), desc(Vendor.id))
        .offset(_offset(page, limit))
        .limit(limit)
    ).all()
    return _listing([vendor_item(v) for v in vendors], total, page, limit)


def _laundry(db: Session, f: ReportFilter, *, page: int, limit: int) -> dict[str, Any]:
    where = [
        Expense.category.icontains("laundry"),
        *hostel_clauses(Expense.hostel_id, f),
        *search_clauses([Expense.title, Expense.category], f.search),
    ]
    total = _count(db, select(func.count()).select_from(Expense).where(*where))
    rows = db.scalars(
        select(Expense)
        .options(selectinload(Expense.hostel))
        .where(*where)
        .order_by(desc(Expense.date), desc(Expense.id))
        .offset(_offset(page, limit))
        .limit(limit)
    ).all()
    return _listing([laundry_item(e) for e in rows], total, page, limit)


def list_payables(
    db: Session,
    f: ReportFilter,
    *,
    payable_type: Optional[str],
    page: int,
    limit: int,
) -> dict[str, Any]:
    """
    bills   -> expenses (paginated) + every bill alert
    vendor  -> active vendors
    laundry -> expenses with a laundry category
    None    -> bills merged for completeness: expenses capped, not paginated
    """
    kind = normalize_payable_type(payable_type)
    if kind == "vendor":
        return _vendors(db, f, page=page, limit=limit)
    if kind == "laundry":
        return _laundry(db, f, page=page, limit=limit)
    return _bills(db, f, explicit=(kind == "bills"), page=page, limit=limit)


def _bucket(db: Session, model, amount_col, *where) -> tuple[Decimal, int]:
    total, count = db.execute(
        select(func.coalesce(func.sum(amount_col), 0.0), func.count(model.id)).where(*where)
    ).one()
    return to_decimal(total), int(count or 0)


def compute_payables_summary(db: Session, hostel_id: Optional[int]) -> dict[str, Any]:
    f = ReportFilter(hostel_id=hostel_id)
    is_laundry = Expense.category.icontains("laundry")

    # laundry expenses live in their own bucket, never inside bills
    exp_total, exp_count = _bucket(db, Expense, Expense.amount, ~is_laundry, *hostel_clauses(Expense.hostel_id, f))
    alert_total, alert_count = _bucket(
        db, Alert, Alert.amount, Alert.type == "bill", *hostel_clauses(Alert.hostel_id, f)
    )
    vendor_total, vendor_count = _bucket(
        db, Vendor, Vendor.total_payable, Vendor.status == "active", *hostel_clauses(Vendor.hostel_id, f)
    )
    laundry_total, laundry_count = _bucket(db, Expense, Expense.amount, is_laundry, *hostel_clauses(Expense.hostel_id, f))

    bills_total = exp_total + alert_total
    return {
        "bills": {"total": round_money(bills_total), "count": exp_count + alert_count},
        "vendor": {"total": round_money(vendor_total), "count": vendor_count},
        "laundry": {"total": round_money(laundry_total), "count": laundry_count},
        "total": round_money(bills_total + vendor_total + laundry_total),
    }


def payables_summary(db: Session, hostel_id: Optional[int]) -> dict[str, Any]:
    return report_cache.cached(
        report_key("payables_summary", ReportFilter(hostel_id=hostel_id)),
        lambda: compute_payables_summary(db, hostel_id),
    )


# -----------------------------
# Receivables
# -----------------------------
def list_receivables(
    db: Session,
    f: ReportFilter,
    *,
    page: int,
    limit: int,
    now: Optional[datetime] = None,
) -> dict[str, Any]:
    now = now or datetime.utcnow()
    where = [
        Payment.status.in_(RECEIVABLE_STATUSES),
        *_payment_scope(f),
        *search_clauses(
            [Payment.receipt_number, Payment.payment_type, Tenant.name, Tenant.email],
            f.search,
        ),
    ]

    total = _count(
        db,
        select(func.count(Payment.id))
        .select_from(Payment)
        .outerjoin(Tenant, Payment.tenant_id == Tenant.id)
        .where(*where),
    )
    rows = db.scalars(
        select(Payment)
        .outerjoin(Tenant, Payment.tenant_id == Tenant.id)
        .options(selectinload(Payment.tenant), selectinload(Payment.hostel))
        .where(*where)
        .order_by(desc(Payment.created_at), desc(Payment.id))
        .offset(_offset(page, limit))
        .limit(limit)
    ).all()

    return {
        "items": [receivable_item(p, now) for p in rows],
        "total": total,
        "total_amount": round_money(sum_money(p.amount for p in rows)),
        "pagination": pagination_meta(total, page, limit),
    }


# -----------------------------
# Transaction ledger
# -----------------------------
def _ledger_item(t: Transaction) -> dict[str, Any]:
    return {
        "id": t.id,
        "transaction_type": t.transaction_type,
        "category": classify_transaction_type(t.transaction_type),
        "amount": round_money(t.amount),
        "status": t.status,
        "gateway": t.gateway,
        "gateway_ref": t.gateway_ref,
        "date": t.created_at,
        "hostel": t.hostel.name if t.hostel is not None else None,
    }


def transaction_ledger(db: Session, f: ReportFilter, *, page: int, limit: int) -> dict[str, Any]:
    where = [
        *hostel_clauses(Transaction.hostel_id, f),
        *date_range_clauses(Transaction.created_at, f),
        *search_clauses([Transaction.transaction_type, Transaction.gateway_ref], f.search),
    ]
    total = _count(db, select(func.count()).select_from(Transaction).where(*where))
    rows = db.scalars(
        select(Transaction)
        .options(selectinload(Transaction.hostel))
        .where(*where)
        .order_by(desc(Transaction.created_at), desc(Transaction.id))
        .offset(_offset(page, limit))
        .limit(limit)
    ).all()

    # each distinct type is classified once, so buckets cannot overlap
    by_category = {RECEIVABLE: Decimal("0"), PAYABLE: Decimal("0"), OTHER: Decimal("0")}
    grouped = db.execute(
        select(Transaction.transaction_type, func.coalesce(func.sum(Transaction.amount), 0.0))
        .where(*where)
        .group_by(Transaction.transaction_type)
    ).all()
    for txn_type, amount in grouped:
        by_category[classify_transaction_type(txn_type)] += to_decimal(amount)

    return {
        "items": [_ledger_item(t) for t in rows],
        "total": total,
        "totals": {k: round_money(v) for k, v in by_category.items()},
        "pagination": pagination_meta(total, page, limit),
    }


# -----------------------------
# Finance overview
# -----------------------------
def _month_start(d: date) -> datetime:
    return datetime(d.year, d.month, 1)


def _next_month_start(d: date) -> datetime:
    if d.month == 12:
        return datetime(d.year + 1, 1, 1)
    return datetime(d.year, d.month + 1, 1)


def _prev_month_start(d: date) -> datetime:
    if d.month == 1:
        return datetime(d.year - 1, 12, 1)
    return datetime(d.year, d.month - 1, 1)


def _revenue_between(db: Session, f: ReportFilter, start: datetime, end: datetime) -> Decimal:
    return _sum(
        db,
        select(func.coalesce(func.sum(Payment.amount), 0.0))
        .where(Payment.status == "paid")
        .where(Payment.payment_date >= start, Payment.payment_date < end)
        .where(*hostel_clauses(Payment.hostel_id, f)),
    )


def compute_finance_overview(db: Session, hostel_id: Optional[int], now: datetime) -> dict[str, Any]:
    f = ReportFilter(hostel_id=hostel_id)
    curr_from, curr_to = _month_start(now), _next_month_start(now)
    prev_from = _prev_month_start(now)

    current = _revenue_between(db, f, curr_from, curr_to)
    previous = _revenue_between(db, f, prev_from, curr_from)

    pending_where = [Payment.status == "pending", *hostel_clauses(Payment.hostel_id, f)]
    pending_count = _count(db, select(func.count()).select_from(Payment).where(*pending_where))
    unpaid = db.scalars(select(Payment).where(*pending_where)).all()

    return {
        "month": curr_from.strftime("%Y-%m"),
        "monthly_revenue": {
            "current": round_money(current),
            "previous": round_money(previous),
            "growth_pct": growth_pct(current, previous),
        },
        "pending_payments": pending_count,
        "unpaid_rent": aging_buckets(unpaid, now),
        "summary": compute_financial_summary(db, f).as_dict(),
    }


def finance_overview(db: Session, hostel_id: Optional[int], now: Optional[datetime] = None) -> dict[str, Any]:
    now = now or datetime.utcnow()
    return report_cache.cached(
        report_key("overview", ReportFilter(hostel_id=hostel_id), period=_month_start(now).date()),
        lambda: compute_finance_overview(db, hostel_id, now),
    )
