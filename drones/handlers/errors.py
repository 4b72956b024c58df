"""Map domain errors to HTTP responses.

Only the error code and user-safe message leave the service; store failures
are logged with their traceback and reported as 503.
"""

import structlog
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from drones.domain.errors import DomainError, ErrorCode, StoreFailureError

logger = structlog.get_logger(__name__)

STATUS_BY_CODE = {
    ErrorCode.DRONE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.USER_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorCode.INVALID_DRONE_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_USER_ID: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_RATING: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_PRICE_RANGE: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_CATEGORY: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_DRONE_DATA: status.HTTP_400_BAD_REQUEST,
    ErrorCode.INVALID_TRANSITION: status.HTTP_409_CONFLICT,
    ErrorCode.STORE_FAILURE: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def domain_exception_handler(exc, context):
    if isinstance(exc, DomainError):
        if isinstance(exc, StoreFailureError):
            view = context.get("view")
            logger.error(
                "store_failure",
                operation=exc.operation,
                view=type(view).__name__ if view is not None else None,
                exc_info=exc,
            )
        return Response(
            {"code": exc.code.value, "message": exc.message},
            status=STATUS_BY_CODE.get(exc.code, status.HTTP_400_BAD_REQUEST),
        )
    return exception_handler(exc, context)
