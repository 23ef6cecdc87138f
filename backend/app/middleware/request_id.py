# backend/app/middleware/request_id.py
from __future__ import annotations

import uuid
from contextvars import ContextVar
from typing import Callable, Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from ..domain.filters import parse_hostel_id

request_id_ctx: ContextVar[Optional[str]] = ContextVar("request_id", default=None)
hostel_id_ctx: ContextVar[Optional[int]] = ContextVar("hostel_id", default=None)

HEADER = "X-Request-ID"


def get_request_id() -> Optional[str]:
    return request_id_ctx.get()


def get_hostel_id() -> Optional[int]:
    """Hostel scope of the current request, already parsed; None when unscoped."""
    return hostel_id_ctx.get()


class RequestIDMiddleware(BaseHTTPMiddleware):
    """
    Binds the request context every report log line carries: a request id
    (reused from X-Request-ID or freshly generated, echoed back in the
    response) and the parsed `hostelId` query scope.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        rid = request.headers.get(HEADER) or request.headers.get("X-Request-Id") or str(uuid.uuid4())
        hid = parse_hostel_id(request.query_params.get("hostelId"))

        request.state.request_id = rid
        request.state.hostel_id = hid
        rid_token = request_id_ctx.set(rid)
        hid_token = hostel_id_ctx.set(hid)
        try:
            resp = await call_next(request)
            resp.headers[HEADER] = rid
            return resp
        finally:
            hostel_id_ctx.reset(hid_token)
            request_id_ctx.reset(rid_token)
