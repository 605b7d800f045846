"""Wishlist services. Membership is a set of products per user."""

import logging

from catalog.models import Product
from common.exceptions import NotFoundError
from django.db import transaction

from .models import WishlistItem

logger = logging.getLogger("freshcart.wishlist")


def _get_product(product_id) -> Product:
    try:
        return Product.objects.get(id=product_id, is_active=True)
    except (Product.DoesNotExist, ValueError, TypeError):
        raise NotFoundError("Product not found") from None


def add_to_wishlist(*, user, product_id) -> WishlistItem:
    """Add a product; adding one already present returns the existing entry."""

    product = _get_product(product_id)
    item, created = WishlistItem.objects.get_or_create(user=user, product=product)
    if created:
        logger.info(
            "wishlist.added", extra={"event": "wishlist.added", "user_id": user.id, "product_id": product.id}
        )
    return item


def remove_from_wishlist(*, user, product_id) -> bool:
    deleted, _ = WishlistItem.objects.filter(user=user, product_id=product_id).delete()
    return bool(deleted)


@transaction.atomic
def toggle_wishlist(*, user, product_id) -> bool:
    """Flip membership and return whether the product is now wishlisted."""

    if remove_from_wishlist(user=user, product_id=product_id):
        return False
    add_to_wishlist(user=user, product_id=product_id)
    return True


def clear_wishlist(*, user) -> int:
    deleted, _ = WishlistItem.objects.filter(user=user).delete()
    return deleted
