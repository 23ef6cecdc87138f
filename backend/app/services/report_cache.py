# backend/app/services/report_cache.py
from __future__ import annotations

import fnmatch
import itertools
import json
import logging
import threading
import time
from datetime import date
from typing import Any, Callable, Optional

import redis
from sqlalchemy import event, inspect
from sqlalchemy.orm import Session

from ..config import settings
from ..domain.filters import ReportFilter
from ..models import Alert, Allocation, Expense, Payment, Tenant, Transaction, Vendor

log = logging.getLogger(__name__)

NAMESPACE = "accounts"
ALL = "all"
# outside the namespace so wiping accounts:* never resets it
GENERATION_KEY = "accounts_generation"

# rows whose writes move a report figure; Tenant has no hostel column
_HOSTEL_SCOPED = (Payment, Expense, Vendor, Alert, Allocation, Transaction)
_SESSION_KEY = "report_cache_hostels"


def _part(v: Any) -> str:
    if v is None or v == "":
        return "-"
    if isinstance(v, date):
        return v.isoformat()
    return str(v)


def report_key(
    report: str,
    f: Optional[ReportFilter] = None,
    *,
    payable_type: Optional[str] = None,
    period: Optional[date] = None,
) -> str:
    """
    accounts:{report}:{hostel|all}:{start}:{end}:{type}

    `period` stands in for the start slot on reports that are bound to a
    calendar month rather than an explicit range.
    """
    f = f or ReportFilter()
    hostel = str(f.hostel_id) if f.hostel_id is not None else ALL
    start = period if period is not None else f.start_date
    return ":".join([NAMESPACE, report, hostel, _part(start), _part(f.end_date), _part(payable_type)])


class _MemoryBackend:
    # sync endpoints share this from the threadpool
    def __init__(self) -> None:
        self._data: dict[str, tuple[float, str]] = {}
        self._generation = 0
        self._lock = threading.Lock()

    def get(self, key: str) -> Optional[str]:
        with self._lock:
            hit = self._data.get(key)
            if hit is None:
                return None
            expires, value = hit
            if expires < time.monotonic():
                self._data.pop(key, None)
                return None
            return value

    def setex(self, key: str, ttl: int, value: str) -> None:
        with self._lock:
            self._data[key] = (time.monotonic() + ttl, value)

    def generation(self) -> int:
        with self._lock:
            return self._generation

    def bump_generation(self) -> None:
        with self._lock:
            self._generation += 1

    def setex_if_generation(self, key: str, ttl: int, value: str, generation: int) -> bool:
        with self._lock:
            if self._generation != generation:
                return False
            self._data[key] = (time.monotonic() + ttl, value)
            return True

    def delete_matching(self, pattern: str) -> int:
        with self._lock:
            doomed = [k for k in list(self._data) if fnmatch.fnmatchcase(k, pattern)]
            for k in doomed:
                self._data.pop(k, None)
            return len(doomed)

    def clear(self) -> None:
        with self._lock:
            self._data.clear()


class _RedisBackend:
    def __init__(self, client: redis.Redis) -> None:
        self.client = client

    def get(self, key: str) -> Optional[str]:
        return self.client.get(key)

    def setex(self, key: str, ttl: int, value: str) -> None:
        self.client.setex(key, ttl, value)

    def generation(self) -> int:
        return int(self.client.get(GENERATION_KEY) or 0)

    def bump_generation(self) -> None:
        self.client.incr(GENERATION_KEY)

    def setex_if_generation(self, key: str, ttl: int, value: str, generation: int) -> bool:
        with self.client.pipeline() as pipe:
            try:
                pipe.watch(GENERATION_KEY)
                if int(pipe.get(GENERATION_KEY) or 0) != generation:
                    return False
                pipe.multi()
                pipe.setex(key, ttl, value)
                pipe.execute()
            except redis.WatchError:
                return False
        return True

    def delete_matching(self, pattern: str) -> int:
        keys = list(self.client.scan_iter(match=pattern, count=500))
        if not keys:
            return 0
        return int(self.client.delete(*keys))

    def clear(self) -> None:
        self.delete_matching(f"{NAMESPACE}:*")



class ReportCache:
    """
    Read-through cache for aggregate reports.

    Backend failures never fail a report: they are logged and treated as a miss.
    """

    def __init__(self, backend: Any, *, ttl_seconds: int = 600, enabled: bool = True) -> None:
        self.backend = backend
        self.ttl_seconds = int(ttl_seconds)
        self.enabled = bool(enabled)

    @classmethod
    def from_settings(cls) -> "ReportCache":
        if settings.redis_url:
            backend: Any = _RedisBackend(redis.Redis.from_url(settings.redis_url, decode_responses=True))
        else:
            backend = _MemoryBackend()
        return cls(backend, ttl_seconds=settings.report_cache_ttl_seconds, enabled=settings.report_cache_enabled)

    def get(self, key: str) -> Any:
        if not self.enabled:
            return None
        try:
            raw = self.backend.get(key)
            return json.loads(raw) if raw is not None else None
        except Exception as e:
            log.warning("report cache get failed: %s", e, extra={"cache_key": key})
            return None

    def set(self, key: str, value: Any, *, generation: Optional[int] = None) -> bool:
        """
        Stores `value` under `key`. With a `generation`, the write is dropped
        when an invalidation has happened since that generation was read.
        """
        if not self.enabled:
            return False
        try:
            raw = json.dumps(value, default=str)
            if generation is None:
                self.backend.setex(key, self.ttl_seconds, raw)
                return True
            stored = self.backend.setex_if_generation(key, self.ttl_seconds, raw, generation)
            if not stored:
                log.info("report cache set skipped: invalidated while building", extra={"cache_key": key})
            return stored
        except Exception as e:
            log.warning("report cache set failed: %s", e, extra={"cache_key": key})
            return False

    def generation(self) -> Optional[int]:
        try:
            return self.backend.generation()
        except Exception as e:
            log.warning("report cache generation read failed: %s", e)
            return None

    def cached(self, key: str, builder: Callable[[], Any]) -> Any:
        hit = self.get(key)
        if hit is not None:
            return hit
        if not self.enabled:
            return builder()
        # read before building so a write committed mid-build is detected
        generation = self.generation()
        value = builder()
        if generation is not None:
            self.set(key, value, generation=generation)
        return value

    def invalidate(self, hostel_ids: set[Any]) -> None:
        """
        Drops every key of the given hostels plus every unscoped ("all") key.
        The ALL marker wipes the whole namespace.

        The generation is bumped before any key is deleted, so a report that
        started building earlier can no longer store its result.
        """
        if ALL in hostel_ids:
            patterns = [f"{NAMESPACE}:*"]
        else:
            patterns = [f"{NAMESPACE}:*:{ALL}:*"]
            patterns += [f"{NAMESPACE}:*:{int(h)}:*" for h in sorted(h for h in hostel_ids if h is not None)]
        try:
            self.backend.bump_generation()
            for pattern in patterns:
                self.backend.delete_matching(pattern)
        except Exception as e:
            log.warning("report cache invalidation failed: %s", e)

    def clear(self) -> None:
        try:
            self.backend.clear()
        except Exception as e:
            log.warning("report cache clear failed: %s", e)


report_cache = ReportCache.from_settings()


# -----------------------------
# Write hooks
# -----------------------------
def _touched_hostels(obj: Any) -> set[Any]:
    if isinstance(obj, Tenant):
        return {ALL}
    out: set[Any] = {getattr(obj, "hostel_id", None)}
    # a row moved between hostels invalidates both
    hist = inspect(obj).attrs.hostel_id.history
    out.update(hist.deleted or ())
    return out


@event.listens_for(Session, "after_flush")
def _collect_touched_hostels(session: Session, flush_context: Any) -> None:
    touched: set[Any] = session.info.setdefault(_SESSION_KEY, set())
    for obj in itertools.chain(session.new, session.dirty, session.deleted):
        if isinstance(obj, (Tenant,) + _HOSTEL_SCOPED):
            touched.update(_touched_hostels(obj))


@event.listens_for(Session, "after_commit")
def _invalidate_after_commit(session: Session) -> None:
    touched = session.info.pop(_SESSION_KEY, None)
    if touched:
        report_cache.invalidate(touched)


@event.listens_for(Session, "after_rollback")
def _discard_after_rollback(session: Session) -> None:
    session.info.pop(_SESSION_KEY, None)
