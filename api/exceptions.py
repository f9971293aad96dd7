"""Error envelope for the REST API.

Every failure leaves the API as `{"message": ...}`. Field validation
errors carry the per-field detail under `errors`; storage failures carry
the driver message under `error` unless `API_REDACT_ERRORS` is set.
"""
from __future__ import annotations

import logging

from django.conf import settings
from django.db import DatabaseError
from rest_framework import status
from rest_framework.exceptions import APIException
from rest_framework.settings import api_settings
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger(__name__)


class StorageError(APIException):
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_detail = "Storage operation failed."
    default_code = "storage_error"

    def __init__(self, detail=None, code=None, *, cause: Exception | None = None):
        super().__init__(detail, code)
        self.cause = cause


def _first_message(value) -> str:
    if isinstance(value, (list, tuple)):
        return _first_message(value[0]) if value else ""
    if isinstance(value, dict):
        return _first_message(next(iter(value.values()), ""))
    return str(value)


def _envelope(data) -> dict:
    if isinstance(data, (list, tuple)):
        return {"message": " ".join(str(item) for item in data)}
    if not isinstance(data, dict):
        return {"message": str(data)}
    if set(data) == {"detail"}:
        return {"message": str(data["detail"])}
    if set(data) == {api_settings.NON_FIELD_ERRORS_KEY}:
        return {"message": _first_message(data[api_settings.NON_FIELD_ERRORS_KEY])}
    if "message" in data:
        body = {key: value for key, value in data.items() if key != "message"}
        body["message"] = _first_message(data["message"])
        return body
    return {"message": "Invalid request data.", "errors": data}


def exception_handler(exc, context):
    """DRF exception handler producing the `message` envelope."""
    if isinstance(exc, DatabaseError):
        request = context.get("request")
        logger.error("Storage failure on %s", getattr(request, "path", "?"), exc_info=exc)
        exc = StorageError(cause=exc)

    response = drf_exception_handler(exc, context)
    if response is None:
        return None

    response.data = _envelope(response.data)
    if isinstance(exc, StorageError) and exc.cause is not None:
        if not getattr(settings, "API_REDACT_ERRORS", False):
            response.data["error"] = str(exc.cause)
    return response
