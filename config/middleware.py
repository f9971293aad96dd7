from __future__ import annotations

import logging
import threading
import time
import uuid

from django.utils.deprecation import MiddlewareMixin

logger = logging.getLogger(__name__)

_thread_locals = threading.local()


def get_request_id() -> str:
    """Return the id of the request handled on this thread, or "-"."""
    return getattr(_thread_locals, "request_id", "-")


class RequestIdLogFilter(logging.Filter):
    """Expose the current request id to log formatters as `request_id`."""

    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = get_request_id()
        return True


class RequestLogMiddleware(MiddlewareMixin):
    """Attach a request id and log one line per request.

    The id comes from the `X-Request-ID` header when the client (or a
    proxy) supplies one; otherwise a fresh uuid4 hex is used. It is echoed
    back in the response so client logs can be correlated.
    """

    header = "HTTP_X_REQUEST_ID"

    def process_request(self, request):
        rid = request.META.get(self.header) or uuid.uuid4().hex
        request.request_id = rid
        request._log_started = time.monotonic()
        _thread_locals.request_id = rid

    def process_response(self, request, response):  # noqa: D401
        rid = getattr(request, "request_id", None)
        if rid:
            response["X-Request-ID"] = rid
        started = getattr(request, "_log_started", None)
        if started is not None:
            elapsed_ms = (time.monotonic() - started) * 1000.0
            logger.info("%s %s -> %s (%.1f ms)", request.method, request.path, response.status_code, elapsed_ms)
        _thread_locals.request_id = "-"
        return response
