# backend/tests/test_ledger_and_overview.py
from __future__ import annotations

from datetime import datetime, timedelta

from app.domain.filters import ReportFilter
from app.services.accounts_service import compute_finance_overview, transaction_ledger
from factories import mk_hostel, mk_payment, mk_txn


def test_ledger_tags_rows_and_totals_each_category_once(db):
    h = mk_hostel(db)
    mk_txn(db, h, "rent_received", 1000.0)
    mk_txn(db, h, "deposit", 250.0)
    mk_txn(db, h, "salary_paid", 400.0)
    mk_txn(db, h, "refund", 50.0)
    mk_txn(db, h, "gateway_fee", 3.5)

    out = transaction_ledger(db, ReportFilter(hostel_id=h.id), page=1, limit=2)
    assert len(out["items"]) == 2
    assert out["total"] == 5
    assert out["totals"] == {"receivable": 1250.0, "payable": 450.0, "other": 3.5}

    cats = {i["transaction_type"]: i["category"] for i in transaction_ledger(db, ReportFilter(), page=1, limit=20)["items"]}
    assert cats == {
        "rent_received": "receivable",
        "deposit": "receivable",
        "salary_paid": "payable",
        "refund": "payable",
        "gateway_fee": "other",
    }


def test_ledger_search(db):
    h = mk_hostel(db)
    mk_txn(db, h, "vendor_paid", 80.0, gateway_ref="STRIPE-abc")
    mk_txn(db, h, "rent", 500.0, gateway_ref="CASH-1")

    out = transaction_ledger(db, ReportFilter(search="stripe"), page=1, limit=20)
    assert out["total"] == 1
    assert out["totals"] == {"receivable": 0.0, "payable": 80.0, "other": 0.0}


def test_finance_overview(db):
    now = datetime(2026, 3, 20, 12, 0)
    h = mk_hostel(db)
    mk_payment(db, h, 300.0, status="paid", payment_date=datetime(2026, 3, 2))
    mk_payment(db, h, 200.0, status="paid", payment_date=datetime(2026, 2, 14))
    mk_payment(db, h, 100.0, status="pending", payment_date=now - timedelta(days=10))
    mk_payment(db, h, 40.0, status="pending", payment_date=now - timedelta(days=100))

    out = compute_finance_overview(db, h.id, now)
    assert out["month"] == "2026-03"
    assert out["monthly_revenue"] == {"current": 300.0, "previous": 200.0, "growth_pct": 50.0}
    assert out["pending_payments"] == 2
    assert out["unpaid_rent"]["breakdown"] == {"0-30": 100.0, "31-60": 0.0, "61-90": 0.0, "91+": 40.0}
    assert out["unpaid_rent"]["total"] == 140.0
    assert out["summary"]["total_income"] == 500.0
    assert out["summary"]["bad_debt"] == 140.0


def test_overview_and_ledger_endpoints(db, client):
    h = mk_hostel(db)
    mk_txn(db, h, "rent", 10.0)

    r = client.get("/api/accounts/overview", params={"hostelId": str(h.id)})
    assert r.status_code == 200
    assert set(r.json()) == {"month", "monthly_revenue", "pending_payments", "unpaid_rent", "summary"}

    t = client.get("/api/accounts/transactions", params={"hostelId": "-4"})
    assert t.status_code == 200
    assert t.json()["totals"]["receivable"] == 10.0
