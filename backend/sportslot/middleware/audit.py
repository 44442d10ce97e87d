# backend/sportslot/middleware/audit.py
# One JSON line per request on the "sportslot.audit" logger.
# Rejected requests carry the errorCode the error handlers stored on request.state.

import json
import logging
import time

from fastapi import Request

logger = logging.getLogger("sportslot.audit")

# Read-only customer endpoints; everything else is operator or booking traffic
CUSTOMER_PREFIXES = ("/catalog", "/sync")


def remember_error(request: Request, code: str) -> None:
    request.state.error_code = code


def _audience(request: Request) -> str:
    path = request.url.path
    if path.startswith(CUSTOMER_PREFIXES):
        return "customer"
    if path.startswith("/bookings") and request.method == "POST":
        return "customer"
    return "operator"


async def audit_middleware(request: Request, call_next):
    started = time.monotonic()

    response = await call_next(request)

    record = {
        "ts": int(time.time()),
        "method": request.method,
        "path": request.url.path,
        "status": response.status_code,
        "audience": _audience(request),
        "duration_ms": int((time.monotonic() - started) * 1000),
    }
    error_code = getattr(request.state, "error_code", None)
    if error_code:
        record["error_code"] = error_code
        record["retryable"] = response.status_code == 503
    if request.client:
        record["ip"] = request.client.host

    if response.status_code >= 500:
        logger.warning(json.dumps(record, ensure_ascii=False))
    else:
        logger.info(json.dumps(record, ensure_ascii=False))

    return response
