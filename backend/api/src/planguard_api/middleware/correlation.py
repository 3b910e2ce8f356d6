"""Per-request correlation IDs and access logging.

A caller-supplied ``X-Correlation-ID`` is reused only when it is a short
token; anything else (empty, too long, or carrying characters that would
break a log line) is replaced with a fresh ID. The ID is echoed on the
response and is in scope for every log record written while handling the
request.
"""

import re
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from planguard.utils.logging import clear_correlation_id, get_logger, set_correlation_id

logger = get_logger(__name__)

CORRELATION_ID_HEADER = "X-Correlation-ID"

_ACCEPTED_ID = re.compile(r"^[A-Za-z0-9._:-]{1,128}$")

# Load balancer probes; logged at DEBUG
QUIET_PATHS = frozenset({"/api/health"})


def accepted_correlation_id(value: str | None) -> str | None:
    """Return ``value`` if it can be reused as a correlation ID, else None."""
    if value and _ACCEPTED_ID.match(value):
        return value
    return None


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    """Scopes a correlation ID to each request and logs its outcome."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = set_correlation_id(
            accepted_correlation_id(request.headers.get(CORRELATION_ID_HEADER))
        )
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            logger.exception("%s %s failed", request.method, request.url.path)
            clear_correlation_id()
            raise

        elapsed_ms = (time.perf_counter() - started) * 1000
        level = "debug" if request.url.path in QUIET_PATHS else "info"
        getattr(logger, level)(
            "%s %s -> %d (%.1f ms)",
            request.method,
            request.url.path,
            response.status_code,
            elapsed_ms,
        )

        response.headers[CORRELATION_ID_HEADER] = correlation_id
        clear_correlation_id()
        return response
