# backend/app/cli/__main__.py
from __future__ import annotations

import argparse
import json
from datetime import datetime

from app.db import SessionLocal
from app.domain.filters import build_filter
from app.services import accounts_service


def main() -> None:
    p = argparse.ArgumentParser(prog="python -m app.cli", description="Print an accounts report as JSON.")
    p.add_argument("report", choices=["summary", "payables-summary", "overview"])
    p.add_argument("--hostel-id", default=None)
    p.add_argument("--start-date", default=None, help="YYYY-MM-DD, inclusive")
    p.add_argument("--end-date", default=None, help="YYYY-MM-DD, inclusive")
    args = p.parse_args()

    f = build_filter(hostel_id=args.hostel_id, start_date=args.start_date, end_date=args.end_date)

    db = SessionLocal()
    try:
        if args.report == "summary":
            out = accounts_service.compute_financial_summary(db, f).as_dict()
        elif args.report == "payables-summary":
            out = accounts_service.compute_payables_summary(db, f.hostel_id)
        else:
            out = accounts_service.compute_finance_overview(db, f.hostel_id, now=datetime.utcnow())
    finally:
        db.close()

    print(json.dumps(out, indent=2, default=str))


if __name__ == "__main__":
    main()
