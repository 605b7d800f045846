"""Shared enumerations and choices used across apps."""

from django.db import models


class OrderStatus(models.TextChoices):
    """Lifecycle statuses for orders."""

    PENDING = "pending", "Pending"
    PROCESSING = "processing", "Processing"
    SHIPPED = "shipped", "Shipped"
    DELIVERED = "delivered", "Delivered"
    CANCELLED = "cancelled", "Cancelled"


class PaymentStatus(models.TextChoices):
    """Payment states recorded on orders. Never driven by this backend."""

    PENDING = "pending", "Pending"
    PAID = "paid", "Paid"
    FAILED = "failed", "Failed"
    REFUNDED = "refunded", "Refunded"


class NotificationType(models.TextChoices):
    ORDER_UPDATE = "order_update", "Order update"
    PROMOTION = "promotion", "Promotion"
    SYSTEM = "system", "System"
    DELIVERY = "delivery", "Delivery"


class MovementReason(models.TextChoices):
    """Why an inventory level changed."""

    ORDER = "order", "Order placed"
    CANCELLATION = "cancellation", "Order cancelled"
    RESTOCK = "restock", "Restock"
    ADJUST = "adjust", "Manual adjustment"
