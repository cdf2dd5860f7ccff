"""Map forum error kinds onto HTTP responses."""
from __future__ import annotations

import logging

from django.db import InterfaceError, OperationalError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler

from core.errors import Conflict, CoursehubError, Forbidden, InvalidInput, NotFound, Unavailable

logger = logging.getLogger(__name__)

STATUS_BY_ERROR = (
    (InvalidInput, status.HTTP_400_BAD_REQUEST),
    (NotFound, status.HTTP_404_NOT_FOUND),
    (Forbidden, status.HTTP_403_FORBIDDEN),
    (Conflict, status.HTTP_409_CONFLICT),
    (Unavailable, status.HTTP_503_SERVICE_UNAVAILABLE),
)


def coursehub_exception_handler(exc, context):
    if isinstance(exc, (OperationalError, InterfaceError)):
        logger.error("Storage unavailable during %s: %s", context.get("view").__class__.__name__, exc)
        exc = Unavailable("Storage is temporarily unavailable")
    if isinstance(exc, CoursehubError):
        code = next((c for kind, c in STATUS_BY_ERROR if isinstance(exc, kind)), status.HTTP_500_INTERNAL_SERVER_ERROR)
        return Response({"detail": exc.message, "code": exc.code}, status=code)
    return exception_handler(exc, context)
