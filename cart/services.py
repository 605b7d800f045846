"""Cart services: the live cart and its line mutations."""

import logging
from datetime import timedelta

from catalog.models import Product
from common.exceptions import NotFoundError, ValidationError
from django.conf import settings
from django.contrib.auth import get_user_model
from django.db import IntegrityError, transaction
from django.db.models import F
from django.utils import timezone

from .models import Cart, CartItem, variant_digest
from .selectors import get_live_cart

logger = logging.getLogger("freshcart.cart")


def _validate_quantity(quantity) -> int:
    if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
        raise ValidationError("Quantity must be a positive integer")
    return quantity


@transaction.atomic
def get_or_create_cart(*, user) -> Cart:
    """Return the user's live cart, creating one if none is live.

    The user row is locked first so two concurrent calls cannot both create
    a cart.
    """

    get_user_model().objects.select_for_update().filter(pk=user.pk).first()
    cart = get_live_cart(user=user)
    if cart is not None:
        return cart
    cart = Cart.objects.create(user=user, expires_at=timezone.now() + timedelta(days=settings.CART_TTL_DAYS))
    logger.info("cart.created", extra={"event": "cart.created", "cart_id": cart.id, "user_id": user.id})
    return cart


def _get_line(*, user, item_id) -> CartItem:
    cart = get_live_cart(user=user)
    try:
        return CartItem.objects.select_for_update().select_related("product").get(id=item_id, cart=cart)
    except (CartItem.DoesNotExist, ValueError):
        raise NotFoundError("Cart item not found") from None


@transaction.atomic
def add_item(*, user, product_id, quantity: int, variant: dict | None = None) -> CartItem:
    """Add a product to the live cart.

    An existing line for the same product and variant is incremented in
    place; otherwise a new line is created with the current price frozen.
    """

    _validate_quantity(quantity)
    if variant is not None and not isinstance(variant, dict):
        raise ValidationError("Variant must be an object")
    try:
        product = Product.objects.get(id=product_id, is_active=True)
    except (Product.DoesNotExist, ValueError):
        raise NotFoundError("Product not found") from None

    cart = get_or_create_cart(user=user)
    variant = variant or {}
    key = variant_digest(variant)
    lines = CartItem.objects.filter(cart=cart, product=product, variant_key=key)

    if lines.update(quantity=F("quantity") + quantity, updated_at=timezone.now()):
        event = "cart.item_updated"
    else:
        try:
            with transaction.atomic():
                CartItem.objects.create(
                    cart=cart, product=product, variant=variant, quantity=quantity, price_snapshot=product.price
                )
            event = "cart.item_added"
        except IntegrityError:
            # lost the insert race to a concurrent add of the same line
            lines.update(quantity=F("quantity") + quantity, updated_at=timezone.now())
            event = "cart.item_updated"

    item = lines.select_related("product").get()
    logger.info(
        event,
        extra={
            "event": event,
            "cart_id": cart.id,
            "user_id": user.id,
            "product_id": product.id,
            "quantity": item.quantity,
        },
    )
    return item


@transaction.atomic
def update_item(*, user, item_id, quantity: int) -> CartItem | None:
    """Set a line's quantity; zero or less removes the line and returns None."""

    if isinstance(quantity, bool) or not isinstance(quantity, int):
        raise ValidationError("Quantity must be an integer")
    if quantity <= 0:
        remove_item(user=user, item_id=item_id)
        return None
    item = _get_line(user=user, item_id=item_id)
    item.quantity = quantity
    item.save(update_fields=["quantity", "updated_at"])
    logger.info(
        "cart.item_updated",
        extra={"event": "cart.item_updated", "cart_id": item.cart_id, "user_id": user.id, "item_id": item.id},
    )
    return item


@transaction.atomic
def remove_item(*, user, item_id) -> None:
    item = _get_line(user=user, item_id=item_id)
    cart_id = item.cart_id
    item.delete()
    logger.info(
        "cart.item_removed",
        extra={"event": "cart.item_removed", "cart_id": cart_id, "user_id": user.id, "item_id": item_id},
    )


@transaction.atomic
def clear_cart(*, user) -> int:
    """Delete every line in the live cart; the cart itself is kept."""

    cart = get_live_cart(user=user)
    if cart is None:
        return 0
    deleted, _ = CartItem.objects.filter(cart=cart).delete()
    logger.info(
        "cart.cleared",
        extra={"event": "cart.cleared", "cart_id": cart.id, "user_id": user.id, "deleted": deleted},
    )
    return deleted


def purge_expired_carts() -> int:
    """Delete expired carts and their lines. Returns the number of carts removed."""

    expired = Cart.objects.expired()
    count = expired.count()
    expired.delete()
    if count:
        logger.info("cart.purged", extra={"event": "cart.purged", "count": count})
    return count
