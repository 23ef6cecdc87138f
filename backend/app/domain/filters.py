# backend/app/domain/filters.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timedelta
from typing import Any, Optional, Sequence

from sqlalchemy import or_
from sqlalchemy.sql.elements import ColumnElement

from ..config import settings

DEFAULT_PAGE = 1


# -----------------------------
# Permissive parsers
# -----------------------------
# Every parser returns None (or the default) on bad input instead of raising:
# a malformed query param means "no filter on that dimension".


def parse_hostel_id(raw: Any) -> Optional[int]:
    if raw is None or isinstance(raw, bool):
        return None
    try:
        v = int(str(raw).strip())
    except (TypeError, ValueError):
        return None
    return v if v > 0 else None


def parse_date(raw: Any) -> Optional[date]:
    if raw is None:
        return None
    if isinstance(raw, datetime):
        return raw.date()
    if isinstance(raw, date):
        return raw
    s = str(raw).strip()
    if not s:
        return None
    try:
        return date.fromisoformat(s[:10])
    except ValueError:
        return None


def _parse_pos_int(raw: Any, default: int) -> int:
    if raw is None:
        return default
    try:
        v = int(str(raw).strip())
    except (TypeError, ValueError):
        return default
    return v if v > 0 else default


def parse_page(raw: Any) -> int:
    return _parse_pos_int(raw, DEFAULT_PAGE)


def parse_limit(raw: Any) -> int:
    return min(_parse_pos_int(raw, settings.default_page_limit), settings.max_page_limit)


def parse_search(raw: Any) -> Optional[str]:
    if raw is None:
        return None
    s = str(raw).strip()
    return s or None


# -----------------------------
# Filter object
# -----------------------------
@dataclass(frozen=True)
class ReportFilter:
    hostel_id: Optional[int] = None
    start_date: Optional[date] = None
    end_date: Optional[date] = None
    search: Optional[str] = None

    @property
    def has_range(self) -> bool:
        return self.start_date is not None or self.end_date is not None


def build_filter(
    *,
    hostel_id: Any = None,
    start_date: Any = None,
    end_date: Any = None,
    search: Any = None,
) -> ReportFilter:
    return ReportFilter(
        hostel_id=parse_hostel_id(hostel_id),
        start_date=parse_date(start_date),
        end_date=parse_date(end_date),
        search=parse_search(search),
    )


# -----------------------------
# Predicates
# -----------------------------
def hostel_clauses(column, f: ReportFilter) -> list[ColumnElement]:
    if f.hostel_id is None:
        return []
    return [column == f.hostel_id]


def date_range_clauses(column, f: ReportFilter) -> list[ColumnElement]:
    """
    Both bounds are calendar days and inclusive: anything stamped on end_date
    (at any time of day) is inside the range.
    """
    out: list[ColumnElement] = []
    if f.start_date is not None:
        out.append(column >= datetime.combine(f.start_date, datetime.min.time()))
    if f.end_date is not None:
        out.append(column < datetime.combine(f.end_date + timedelta(days=1), datetime.min.time()))
    return out


def search_clause(columns: Sequence[Any], term: Optional[str]) -> Optional[ColumnElement]:
    """Case-insensitive substring match on any of the columns."""
    if not term:
        return None
    return or_(*[c.icontains(term, autoescape=True) for c in columns])


def search_clauses(columns: Sequence[Any], term: Optional[str]) -> list[ColumnElement]:
    c = search_clause(columns, term)
    return [c] if c is not None else []
