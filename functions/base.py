"""Base view for the ``/functions/v1/`` endpoints.

These endpoints answer with ``{"error": message}`` instead of the REST API's
``{"detail", "code"}`` shape: 401 for authentication failures, 403 when a
staff-only function is called by a customer, 429 when throttled, and 400
for every other failure.
"""

import logging

from common.exceptions import StorefrontError, UnauthorizedError, UpstreamError
from django.db import DatabaseError
from rest_framework import exceptions, status
from rest_framework.response import Response
from rest_framework.views import APIView
from rest_framework_simplejwt.authentication import JWTAuthentication

logger = logging.getLogger("freshcart.functions")


def error_message(detail) -> str:
    """Flatten a DRF error detail into one human readable line."""

    if isinstance(detail, dict):
        if "detail" in detail:
            return error_message(detail["detail"])
        if not detail:
            return "Invalid input."
        field, value = next(iter(detail.items()))
        message = error_message(value)
        return message if field == "non_field_errors" else f"{field}: {message}"
    if isinstance(detail, (list, tuple)):
        return error_message(detail[0]) if detail else "Invalid input."
    return str(detail)


class FunctionView(APIView):
    authentication_classes = [JWTAuthentication]
    throttle_scope = "functions"

    def handle_exception(self, exc):
        if isinstance(exc, (exceptions.NotAuthenticated, exceptions.AuthenticationFailed, UnauthorizedError)):
            code = status.HTTP_401_UNAUTHORIZED
        elif isinstance(exc, exceptions.PermissionDenied):
            code = status.HTTP_403_FORBIDDEN
        elif isinstance(exc, exceptions.Throttled):
            code = status.HTTP_429_TOO_MANY_REQUESTS
        elif isinstance(exc, (StorefrontError, exceptions.APIException)):
            code = status.HTTP_400_BAD_REQUEST
        elif isinstance(exc, DatabaseError):
            logger.exception("functions.database_error", extra={"event": "functions.database_error"})
            exc, code = UpstreamError(), status.HTTP_400_BAD_REQUEST
        else:
            return super().handle_exception(exc)

        message = exc.detail if isinstance(exc, StorefrontError) else error_message(exc.detail)
        logger.info(
            "functions.failed",
            extra={"event": "functions.failed", "function": self.function_name, "status": code, "error": message},
        )
        return Response({"error": message}, status=code)

    @property
    def function_name(self) -> str:
        return getattr(self, "name", None) or self.__class__.__name__
