"""Storefront error taxonomy and the DRF exception handler that renders it.

Services raise these; views never build error responses by hand for them.
Every error carries an HTTP status and a human readable message.
"""

import logging

from django.db import DatabaseError
from rest_framework import status
from rest_framework.response import Response
from rest_framework.views import exception_handler as drf_exception_handler

logger = logging.getLogger("freshcart.errors")


class StorefrontError(Exception):
    """Base class for domain failures surfaced to API callers."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    code = "error"

    def __init__(self, detail: str | None = None):
        self.detail = detail or self.default_detail
        super().__init__(self.detail)


class ValidationError(StorefrontError):
    default_detail = "Invalid input."
    code = "invalid"


class NotFoundError(StorefrontError):
    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    code = "not_found"


class EmptyCartError(ValidationError):
    default_detail = "Cart is empty or not found"
    code = "empty_cart"


class AddressMismatchError(NotFoundError):
    """The address does not exist or belongs to another user."""

    default_detail = "Address not found"
    code = "address_not_found"


AddressNotFoundError = AddressMismatchError


class InsufficientInventoryError(ValidationError):
    code = "insufficient_inventory"

    def __init__(self, product=None, detail: str | None = None):
        self.product = product
        if detail is None and product is not None:
            detail = f"Insufficient inventory for {product.name}"
        super().__init__(detail)


class OrderStateError(ValidationError):
    default_detail = "Order cannot be changed in its current state."
    code = "invalid_state"


class UnauthorizedError(StorefrontError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_detail = "Unauthorized"
    code = "unauthorized"


class UpstreamError(StorefrontError):
    """The data store rejected or failed an operation."""

    status_code = status.HTTP_502_BAD_GATEWAY
    default_detail = "Upstream data store failure."
    code = "upstream"


def api_exception_handler(exc, context):
    """Render storefront errors as ``{"detail", "code"}`` and defer the rest to DRF."""

    if isinstance(exc, DatabaseError):
        logger.exception("api.database_error", extra={"event": "api.database_error"})
        exc = UpstreamError()
    if isinstance(exc, StorefrontError):
        return Response({"detail": exc.detail, "code": exc.code}, status=exc.status_code)
    return drf_exception_handler(exc, context)
