"""Inventory services: availability checks and atomic stock changes.

Decrements are conditional updates (``inventory >= quantity``) checked by
affected-row count, so two concurrent orders can never drive a product
below zero even without row locks.
"""

import logging

from catalog.models import Product
from common.choices import MovementReason
from common.exceptions import InsufficientInventoryError, NotFoundError, ValidationError
from django.db import transaction
from django.db.models import F

from .models import StockMovement

logger = logging.getLogger("freshcart.inventory")


def ensure_available(*, product: Product, quantity: int) -> None:
    """Raise when ``product`` cannot cover ``quantity`` units right now."""

    if product.inventory < quantity:
        raise InsufficientInventoryError(product)


@transaction.atomic
def decrement_stock(*, product: Product, quantity: int, reference: str = "") -> StockMovement:
    """Remove ``quantity`` units from on-hand inventory for an order."""

    if quantity <= 0:
        raise ValidationError("Quantity must be positive")
    updated = Product.objects.filter(id=product.id, inventory__gte=quantity).update(
        inventory=F("inventory") - quantity
    )
    if updated != 1:
        raise InsufficientInventoryError(product)
    movement = StockMovement.objects.create(
        product=product,
        quantity=-quantity,
        reason=MovementReason.ORDER,
        reference=reference,
    )
    logger.info(
        "inventory.decremented",
        extra={
            "event": "inventory.decremented",
            "product_id": product.id,
            "quantity": quantity,
            "reference": reference,
        },
    )
    return movement


@transaction.atomic
def apply_movement(*, product_id, quantity: int, reason: str, reference: str = "", note: str = "") -> StockMovement:
    """Apply a signed change to a product's inventory and record it.

    Positive quantities add stock; negative ones remove it and fail rather
    than go below zero.
    """

    if quantity == 0:
        raise ValidationError("Quantity must be non-zero")
    if reason not in MovementReason.values:
        raise ValidationError(f"Unknown movement reason: {reason}")
    try:
        product = Product.objects.get(id=product_id)
    except (Product.DoesNotExist, ValueError):
        raise NotFoundError("Product not found") from None

    qs = Product.objects.filter(id=product.id)
    if quantity < 0:
        qs = qs.filter(inventory__gte=-quantity)
    if qs.update(inventory=F("inventory") + quantity) != 1:
        raise InsufficientInventoryError(product)

    movement = StockMovement.objects.create(
        product=product,
        quantity=quantity,
        reason=reason,
        reference=reference,
        note=note,
    )
    logger.info(
        "inventory.movement_applied",
        extra={
            "event": "inventory.movement_applied",
            "product_id": product.id,
            "quantity": quantity,
            "reason": reason,
            "reference": reference,
        },
    )
    return movement


def restock(*, product_id, quantity: int, reference: str = "", note: str = "") -> StockMovement:
    if quantity <= 0:
        raise ValidationError("Restock quantity must be positive")
    return apply_movement(
        product_id=product_id, quantity=quantity, reason=MovementReason.RESTOCK, reference=reference, note=note
    )
