# backend/app/schemas.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


# -------------------- Shared --------------------

class PaginationOut(BaseModel):
    page: int
    limit: int
    pages: int


# -------------------- Summary --------------------

class FinancialSummaryOut(BaseModel):
    total_income: float
    total_expenses: float
    profit_loss: float
    bad_debt: float
    is_profit: bool


# -------------------- Payables --------------------

class PayableItemOut(BaseModel):
    id: int
    reference: str
    type: str  # expense|alert|vendor|laundry
    title: str
    category: Optional[str] = None
    amount: float
    date: Optional[datetime] = None
    hostel: Optional[str] = None
    description: Optional[str] = None

    # alert rows
    tenant: Optional[str] = None

    # vendor rows
    company_name: Optional[str] = None
    balance: Optional[float] = None
    total_paid: Optional[float] = None
    payment_terms: Optional[str] = None


class PayablesPageOut(BaseModel):
    items: list[PayableItemOut]
    total: int
    total_amount: float
    pagination: PaginationOut


class PayableBucketOut(BaseModel):
    total: float
    count: int


class PayablesSummaryOut(BaseModel):
    bills: PayableBucketOut
    vendor: PayableBucketOut
    laundry: PayableBucketOut
    total: float


# -------------------- Receivables --------------------

class ReceivableTenantOut(BaseModel):
    id: int
    name: str
    email: Optional[str] = None
    phone: Optional[str] = None


class ReceivableItemOut(BaseModel):
    id: int
    reference: str
    type: str
    amount: float
    date: Optional[str] = None  # "Nov 5, 2025"
    raw_date: Optional[datetime] = None
    tenant: Optional[ReceivableTenantOut] = None
    tenant_name: Optional[str] = None
    hostel: Optional[str] = None
    status: str  # Pending|Partial|Overdue
    is_overdue: bool


class ReceivablesPageOut(BaseModel):
    items: list[ReceivableItemOut]
    total: int
    total_amount: float
    pagination: PaginationOut


# -------------------- Ledger --------------------

class LedgerEntryOut(BaseModel):
    id: int
    transaction_type: str
    category: str  # receivable|payable|other
    amount: float
    status: str
    gateway: Optional[str] = None
    gateway_ref: Optional[str] = None
    date: Optional[datetime] = None
    hostel: Optional[str] = None


class LedgerTotalsOut(BaseModel):
    receivable: float
    payable: float
    other: float


class LedgerPageOut(BaseModel):
    items: list[LedgerEntryOut]
    total: int
    totals: LedgerTotalsOut
    pagination: PaginationOut


# -------------------- Overview --------------------

class MonthlyRevenueOut(BaseModel):
    current: float
    previous: float
    growth_pct: float


class UnpaidRentOut(BaseModel):
    total: float
    breakdown: dict[str, float] = Field(default_factory=dict)  # 0-30|31-60|61-90|91+


class FinanceOverviewOut(BaseModel):
    month: str
    monthly_revenue: MonthlyRevenueOut
    pending_payments: int
    unpaid_rent: UnpaidRentOut
    summary: FinancialSummaryOut
