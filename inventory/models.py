"""Inventory audit log.

On-hand counts live on ``catalog.Product.inventory``; every change this
backend makes to them is recorded here as a signed movement.
"""

from common.choices import MovementReason
from common.models import TimeStampedModel
from django.db import models


class StockMovement(TimeStampedModel):
    REASON_CHOICES = MovementReason.choices

    product = models.ForeignKey("catalog.Product", on_delete=models.CASCADE, related_name="movements")
    quantity = models.IntegerField()  # signed: +inbound, -outbound
    reason = models.CharField(max_length=16, choices=REASON_CHOICES)
    reference = models.CharField(max_length=120, blank=True)
    note = models.CharField(max_length=200, blank=True)

    class Meta:
        ordering = ["-created_at", "-id"]
        constraints = [
            models.CheckConstraint(name="movement_non_zero", check=~models.Q(quantity=0)),
        ]
        indexes = [
            models.Index(fields=["product", "-created_at"], name="movement_product_created_idx"),
            models.Index(fields=["reference"], name="movement_reference_idx"),
        ]

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.reason} {self.quantity:+d} for product {self.product_id}"
