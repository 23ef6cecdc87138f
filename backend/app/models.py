# backend/app/models.py
from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import (
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .db import Base


# -----------------------------
# Properties / occupants
# -----------------------------
class Hostel(Base):
    __tablename__ = "hostels"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)


class Tenant(Base):
    __tablename__ = "tenants"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    phone: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)  # active|inactive|blacklisted

    # maintained by the payment-recording flow, read-only here
    total_paid: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)
    total_due: Mapped[float] = mapped_column(Float, nullable=False, default=0.0)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    allocations: Mapped[List["Allocation"]] = relationship(back_populates="tenant", cascade="all, delete-orphan")


class Allocation(Base):
    __tablename__ = "allocations"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[int] = mapped_column(Integer, ForeignKey("tenants.id", ondelete="CASCADE"), nullable=False, index=True)
    hostel_id: Mapped[int] = mapped_column(Integer, ForeignKey("hostels.id", ondelete="CASCADE"), nullable=False, index=True)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)  # active|inactive
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    tenant: Mapped["Tenant"] = relationship(back_populates="allocations")
    hostel: Mapped["Hostel"] = relationship()


# -----------------------------
# Money in / money out
# -----------------------------
class Payment(Base):
    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    tenant_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
    hostel_id: Mapped[int] = mapped_column(Integer, ForeignKey("hostels.id", ondelete="CASCADE"), nullable=False, index=True)

    amount: Mapped[float] = mapped_column(Float, nullable=False)
    payment_type: Mapped[Optional[str]] = mapped_column(String(30), nullable=True, index=True)  # rent|deposit|maintenance|...
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="paid", index=True)  # pending|paid|partial|overdue

    payment_date: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True, index=True)
    receipt_number: Mapped[Optional[str]] = mapped_column(String(100), nullable=True, unique=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    tenant: Mapped[Optional["Tenant"]] = relationship()
    hostel: Mapped["Hostel"] = relationship()


class Expense(Base):
    __tablename__ = "expenses"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    hostel_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("hostels.id", ondelete="SET NULL"), nullable=True, index=True)

    title: Mapped[str] = mapped_column(String(191), nullable=False)
    category: Mapped[str] = mapped_column(String(191), nullable=False, index=True)
    type: Mapped[Optional[str]] = mapped_column(String(191), nullable=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    date: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    hostel: Mapped[Optional["Hostel"]] = relationship()


class Vendor(Base):
    __tablename__ = "vendors"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    hostel_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("hostels.id", ondelete="SET NULL"), nullable=True, index=True)

    name: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    company_name: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, unique=True)
    category: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)
    payment_terms: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, default="net30")

    total_payable: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=0.0)
    total_paid: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=0.0)
    balance: Mapped[Optional[float]] = mapped_column(Float, nullable=True, default=0.0)

    status: Mapped[str] = mapped_column(String(20), nullable=False, default="active", index=True)  # active|inactive|blacklisted
    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow)

    hostel: Mapped[Optional["Hostel"]] = relationship()


class Alert(Base):
    __tablename__ = "alerts"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    type: Mapped[str] = mapped_column(String(20), nullable=False, index=True)  # bill|rent|payable|receivable|maintenance
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)

    title: Mapped[str] = mapped_column(String(500), nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    hostel_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("hostels.id", ondelete="SET NULL"), nullable=True, index=True)
    tenant_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
    amount: Mapped[Optional[float]] = mapped_column(Float, nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    hostel: Mapped[Optional["Hostel"]] = relationship()
    tenant: Mapped[Optional["Tenant"]] = relationship()


class Transaction(Base):
    __tablename__ = "transactions"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)
    payment_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("payments.id", ondelete="CASCADE"), nullable=True, index=True)
    tenant_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("tenants.id", ondelete="SET NULL"), nullable=True, index=True)
    hostel_id: Mapped[Optional[int]] = mapped_column(Integer, ForeignKey("hostels.id", ondelete="SET NULL"), nullable=True, index=True)

    transaction_type: Mapped[str] = mapped_column(String(30), nullable=False, index=True)
    amount: Mapped[float] = mapped_column(Float, nullable=False)
    status: Mapped[str] = mapped_column(String(20), nullable=False, default="pending", index=True)
    gateway: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    gateway_ref: Mapped[Optional[str]] = mapped_column(String(255), nullable=True)

    created_at: Mapped[datetime] = mapped_column(DateTime, nullable=False, default=datetime.utcnow, index=True)

    hostel: Mapped[Optional["Hostel"]] = relationship()
