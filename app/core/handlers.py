"""
DRF exception handler.

Maps the core.exceptions hierarchy to HTTP responses and turns anything DRF
does not already understand into a generic 500. Wired in through
REST_FRAMEWORK["EXCEPTION_HANDLER"].

Response body shape matches the service-layer failures:
    {"error": "<message>", "error_code": "<CODE>"}
"""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.exceptions import BaseApplicationError, NotFoundError, PermissionDeniedError

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = {
    NotFoundError: status.HTTP_404_NOT_FOUND,
    PermissionDeniedError: status.HTTP_403_FORBIDDEN,
}


def api_exception_handler(exc, context):
    """
    Convert exceptions raised from API views into responses.

    Order:
        1. Application errors -> mapped status with exc.to_dict()
        2. DRF/Django HTTP exceptions -> DRF's default handling
        3. Everything else -> logged, 500 with a generic message
    """
    if isinstance(exc, BaseApplicationError):
        code = STATUS_BY_ERROR.get(type(exc), status.HTTP_400_BAD_REQUEST)
        return Response(exc.to_dict(), status=code)

    response = exception_handler(exc, context)
    if response is not None:
        return response

    view = context.get("view")
    logger.exception(
        f"Unhandled error in {view.__class__.__name__ if view else 'unknown view'}: {exc}"
    )
    return Response(
        {"error": "Internal server error", "error_code": "INTERNAL_ERROR"},
        status=status.HTTP_500_INTERNAL_SERVER_ERROR,
    )
