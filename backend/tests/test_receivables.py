# backend/tests/test_receivables.py
from __future__ import annotations

from datetime import datetime, timedelta

from app.domain.filters import ReportFilter
from app.services.accounts_service import list_receivables
from factories import mk_hostel, mk_payment, mk_tenant


NOW = datetime(2026, 6, 10, 9, 0)


def test_receivables_status_and_shape(db):
    h = mk_hostel(db)
    t = mk_tenant(db, "Asha Rao", email="asha@example.com")

    late = mk_payment(db, h, 500.0, status="pending", tenant_id=t.id, payment_type="rent",
                      payment_date=NOW - timedelta(days=2), created_at=NOW - timedelta(days=5))
    soon = mk_payment(db, h, 120.555, status="pending", payment_type="deposit",
                      payment_date=NOW + timedelta(days=3), created_at=NOW - timedelta(days=4))
    part = mk_payment(db, h, 80.0, status="partial", receipt_number="RC-2026-01",
                      payment_date=NOW - timedelta(days=9), created_at=NOW - timedelta(days=3))
    mk_payment(db, h, 999.0, status="paid", created_at=NOW - timedelta(days=1))

    out = list_receivables(db, ReportFilter(hostel_id=h.id), page=1, limit=20, now=NOW)
    assert out["total"] == 3
    rows = {r["id"]: r for r in out["items"]}

    assert rows[late.id]["status"] == "Overdue"
    assert rows[late.id]["is_overdue"] is True
    assert rows[late.id]["reference"] == f"RENT-{late.id:04d}"
    assert rows[late.id]["tenant"] == {"id": t.id, "name": "Asha Rao", "email": "asha@example.com", "phone": None}
    assert rows[late.id]["tenant_name"] == "Asha Rao"
    assert rows[late.id]["date"] == "Jun 8, 2026"

    assert rows[soon.id]["status"] == "Pending"
    assert rows[soon.id]["amount"] == 120.56
    assert rows[soon.id]["tenant"] is None

    assert rows[part.id]["status"] == "Partial"
    assert rows[part.id]["reference"] == "RC-2026-01"

    assert out["total_amount"] == 700.56


def test_receivables_newest_first_and_paginated(db):
    h = mk_hostel(db)
    ids = [
        mk_payment(db, h, 10.0, status="pending", created_at=NOW - timedelta(days=n)).id
        for n in range(5)
    ]

    out = list_receivables(db, ReportFilter(hostel_id=h.id), page=2, limit=2, now=NOW)
    assert [r["id"] for r in out["items"]] == ids[2:4]
    assert out["total"] == 5
    assert out["total_amount"] == 20.0
    assert out["pagination"] == {"page": 2, "limit": 2, "pages": 3}


def test_receivables_search_hits_tenant_and_receipt(db):
    h = mk_hostel(db)
    asha = mk_tenant(db, "Asha Rao", email="asha@example.com")
    bilal = mk_tenant(db, "Bilal Khan", email="bk@example.com")
    p1 = mk_payment(db, h, 10.0, status="pending", tenant_id=asha.id)
    p2 = mk_payment(db, h, 20.0, status="overdue", tenant_id=bilal.id, receipt_number="INV-777")
    mk_payment(db, h, 30.0, status="pending")

    by_name = list_receivables(db, ReportFilter(search="asha"), page=1, limit=20, now=NOW)
    assert [r["id"] for r in by_name["items"]] == [p1.id]

    by_receipt = list_receivables(db, ReportFilter(search="inv-7"), page=1, limit=20, now=NOW)
    assert [r["id"] for r in by_receipt["items"]] == [p2.id]
    assert by_receipt["total"] == 1


def test_receivables_endpoint(db, client):
    h = mk_hostel(db)
    other = mk_hostel(db, "Elsewhere")
    mk_payment(db, h, 40.0, status="pending", payment_date=datetime.utcnow() - timedelta(days=1))
    mk_payment(db, other, 60.0, status="pending")

    r = client.get("/api/accounts/receivables", params={"hostelId": str(h.id), "limit": "abc"})
    assert r.status_code == 200
    body = r.json()
    assert body["total"] == 1
    assert body["items"][0]["status"] == "Overdue"
    assert body["items"][0]["hostel"] == "Maple House"
    assert body["pagination"] == {"page": 1, "limit": 20, "pages": 1}
