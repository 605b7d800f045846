"""Cart app models.

A user owns at most one live cart (``expires_at`` in the future). Lines
freeze the product price when they are first added.
"""

import hashlib
import json
from decimal import Decimal

from common.models import TimeStampedModel
from django.conf import settings
from django.db import models
from django.utils import timezone


def canonical_variant(variant) -> str:
    """Stable text form of a variant dict, used for line uniqueness."""

    return json.dumps(variant or {}, sort_keys=True, separators=(",", ":"))


def variant_digest(variant) -> str:
    """Fixed-length key for a variant, whatever its size."""

    return hashlib.sha256(canonical_variant(variant).encode("utf-8")).hexdigest()


class CartQuerySet(models.QuerySet):
    def live(self):
        return self.filter(expires_at__gt=timezone.now())

    def expired(self):
        return self.filter(expires_at__lte=timezone.now())


class Cart(TimeStampedModel):
    user = models.ForeignKey(settings.AUTH_USER_MODEL, related_name="carts", on_delete=models.CASCADE)
    expires_at = models.DateTimeField(db_index=True)

    objects = CartQuerySet.as_manager()

    class Meta:
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["user", "expires_at"], name="cart_user_expires_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"Cart#{self.id} ({self.user_id})"

    @property
    def is_live(self) -> bool:
        return self.expires_at > timezone.now()


class CartItem(TimeStampedModel):
    """One product and variant in a cart, with its own quantity and frozen price."""

    cart = models.ForeignKey(Cart, related_name="items", on_delete=models.CASCADE)
    product = models.ForeignKey("catalog.Product", related_name="cart_items", on_delete=models.CASCADE)
    variant = models.JSONField(default=dict, blank=True)
    variant_key = models.CharField(max_length=64, editable=False)
    quantity = models.PositiveIntegerField(default=1)
    price_snapshot = models.DecimalField(max_digits=10, decimal_places=2)

    class Meta:
        ordering = ["id"]
        constraints = [
            models.UniqueConstraint(fields=["cart", "product", "variant_key"], name="unique_product_variant_per_cart"),
            models.CheckConstraint(
                name="cart_item_quantity_positive",
                check=models.Q(quantity__gte=1),
            ),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"CartItem#{self.id} cart={self.cart_id} product={self.product_id} qty={self.quantity}"

    def save(self, *args, **kwargs):
        self.variant_key = variant_digest(self.variant)
        super().save(*args, **kwargs)

    @property
    def line_total(self) -> Decimal:
        return (self.price_snapshot or Decimal("0.00")) * int(self.quantity)
