# backend/tests/test_cli.py
from __future__ import annotations

import json
import sys

from app.cli.__main__ import main
from factories import mk_alert, mk_expense, mk_hostel, mk_payment


def _run(monkeypatch, capsys, *argv):
    monkeypatch.setattr(sys, "argv", ["app.cli", *argv])
    main()
    return json.loads(capsys.readouterr().out)


def test_summary_report(db, monkeypatch, capsys):
    h = mk_hostel(db)
    mk_payment(db, h, 120.0)
    mk_expense(db, h, 20.0)
    other = mk_hostel(db, "Cedar Court")
    mk_payment(db, other, 999.0)

    out = _run(monkeypatch, capsys, "summary", "--hostel-id", str(h.id))
    assert out["total_income"] == 120.0
    assert out["total_expenses"] == 20.0
    assert out["profit_loss"] == 100.0
    assert out["is_profit"] is True


def test_payables_summary_report(db, monkeypatch, capsys):
    h = mk_hostel(db)
    mk_expense(db, h, 40.0)
    mk_alert(db, h, amount=10.0)

    out = _run(monkeypatch, capsys, "payables-summary")
    assert out["bills"] == {"total": 50.0, "count": 2}
    assert out["total"] == 50.0


def test_overview_report(db, monkeypatch, capsys):
    mk_hostel(db)
    out = _run(monkeypatch, capsys, "overview")
    assert set(out) >= {"month", "monthly_revenue", "pending_payments", "unpaid_rent", "summary"}
