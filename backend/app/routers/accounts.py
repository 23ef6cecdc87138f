# backend/app/routers/accounts.py
from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from fastapi import APIRouter, Depends, HTTPException, Query
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..db import get_db
from ..domain.filters import build_filter, parse_hostel_id, parse_limit, parse_page
from ..schemas import (
    FinanceOverviewOut,
    FinancialSummaryOut,
    LedgerPageOut,
    PayablesPageOut,
    PayablesSummaryOut,
    ReceivablesPageOut,
)
from ..services import accounts_service

log = logging.getLogger(__name__)

router = APIRouter(prefix="/accounts", tags=["accounts"])

# Every parameter is taken as a raw string: a malformed value means
# "no filter" (or the default page/limit), never a 422.


def _run_report(report: str, fn: Callable[[], Any], **ctx: Any) -> Any:
    """
    All-or-nothing: a datastore failure is logged with its context and
    surfaced as a 500 carrying the underlying message. Anything else is
    logged with the same context and re-raised.
    """
    try:
        return fn()
    except SQLAlchemyError as e:
        log.exception("%s failed", report, extra={"report": report, **ctx})
        raise HTTPException(status_code=500, detail=f"{report} failed: {e}")
    except Exception:
        log.exception("%s failed unexpectedly", report, extra={"report": report, **ctx})
        raise


@router.get("/summary", response_model=FinancialSummaryOut)
def get_financial_summary(
    hostel_id: Optional[str] = Query(default=None, alias="hostelId"),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """Total income, expenses, profit/loss and bad debt for the filter scope."""
    f = build_filter(hostel_id=hostel_id, start_date=start_date, end_date=end_date)
    return _run_report(
        "financial summary",
        lambda: accounts_service.financial_summary(db, f),
        hostel_id=f.hostel_id,
    )


@router.get("/payables", response_model=PayablesPageOut)
def get_payables(
    type: Optional[str] = Query(default=None, description="bills|vendor|laundry"),
    hostel_id: Optional[str] = Query(default=None, alias="hostelId"),
    search: Optional[str] = Query(default=None),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    f = build_filter(hostel_id=hostel_id, search=search)
    return _run_report(
        "payables",
        lambda: accounts_service.list_payables(
            db, f, payable_type=type, page=parse_page(page), limit=parse_limit(limit)
        ),
        hostel_id=f.hostel_id,
        payable_type=type,
    )


@router.get("/payables/summary", response_model=PayablesSummaryOut)
def get_payables_summary(
    hostel_id: Optional[str] = Query(default=None, alias="hostelId"),
    db: Session = Depends(get_db),
):
    hid = parse_hostel_id(hostel_id)
    return _run_report(
        "payables summary",
        lambda: accounts_service.payables_summary(db, hid),
        hostel_id=hid,
    )


@router.get("/receivables", response_model=ReceivablesPageOut)
def get_receivables(
    hostel_id: Optional[str] = Query(default=None, alias="hostelId"),
    search: Optional[str] = Query(default=None),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    db: Session = Depends(get_db),
):
    """Pending, partial and overdue payments with their presentation status."""
    f = build_filter(hostel_id=hostel_id, start_date=start_date, end_date=end_date, search=search)
    return _run_report(
        "receivables",
        lambda: accounts_service.list_receivables(db, f, page=parse_page(page), limit=parse_limit(limit)),
        hostel_id=f.hostel_id,
    )


@router.get("/transactions", response_model=LedgerPageOut)
def get_transactions(
    hostel_id: Optional[str] = Query(default=None, alias="hostelId"),
    search: Optional[str] = Query(default=None),
    start_date: Optional[str] = Query(default=None, alias="startDate"),
    end_date: Optional[str] = Query(default=None, alias="endDate"),
    page: Optional[str] = Query(default=None),
    limit: Optional[str] = Query(default=None),
    db: Session = Depends(get_db),
):
    f = build_filter(hostel_id=hostel_id, start_date=start_date, end_date=end_date, search=search)
    return _run_report(
        "transaction ledger",
        lambda: accounts_service.transaction_ledger(db, f, page=parse_page(page), limit=parse_limit(limit)),
        hostel_id=f.hostel_id,
    )


@router.get("/overview", response_model=FinanceOverviewOut)
def get_finance_overview(
    hostel_id: Optional[str] = Query(default=None, alias="hostelId"),
    db: Session = Depends(get_db),
):
    hid = parse_hostel_id(hostel_id)
    return _run_report(
        "finance overview",
        lambda: accounts_service.finance_overview(db, hid),
        hostel_id=hid,
    )
