"""Order services: the cart-to-order transition and the order lifecycle.

Every mutation here runs in one transaction. Notifications rows are part of
that transaction; email and SMS go out only after it commits.
"""

import hashlib
import json
import logging
from collections import defaultdict
from datetime import timedelta
from decimal import Decimal
from typing import Callable, Optional, Tuple

from cart.models import CartItem
from cart.selectors import get_live_cart
from cart.services import add_item
from catalog.models import Product
from common.choices import MovementReason, NotificationType, OrderStatus
from common.exceptions import (
    EmptyCartError,
    InsufficientInventoryError,
    NotFoundError,
    OrderStateError,
    ValidationError,
)
from customer.selectors import get_address_for_user
from customer.services import snapshot_address
from django.conf import settings
from django.db import IntegrityError, transaction
from django.db.models import Count, Q, Sum
from django.utils import timezone
from inventory.services import apply_movement, decrement_stock
from notifications.services import notify

from .emails import send_order_update
from .models import IdempotencyKey, Order, OrderItem
from .pricing import price_order

logger = logging.getLogger("freshcart.orders")

ALLOWED_TRANSITIONS = {
    OrderStatus.PENDING: {OrderStatus.PROCESSING, OrderStatus.CANCELLED},
    OrderStatus.PROCESSING: {OrderStatus.SHIPPED},
    OrderStatus.SHIPPED: {OrderStatus.DELIVERED},
    OrderStatus.DELIVERED: set(),
    OrderStatus.CANCELLED: set(),
}

STATUS_MESSAGES = {
    OrderStatus.PENDING: "Your order is being processed",
    OrderStatus.PROCESSING: "Your order is being prepared",
    OrderStatus.SHIPPED: "Your order is on the way",
    OrderStatus.DELIVERED: "Your order has been delivered",
    OrderStatus.CANCELLED: "Your order has been cancelled",
}


def format_order_number(order_id: int) -> str:
    return f"ORD-{int(order_id):06d}"


def _notify_order(order: Order, *, title: str, message: str, **metadata) -> None:
    notify(
        user=order.user,
        type=NotificationType.ORDER_UPDATE,
        title=title,
        message=message,
        metadata={"order_id": order.id, "order_number": order.number, **metadata},
    )
    transaction.on_commit(lambda: send_order_update(order, title=title, message=message))


@transaction.atomic
def create_order(
    *,
    user,
    address_id,
    delivery_instructions: str = "",
    promo_code: Optional[str] = None,
) -> Order:
    """Turn the user's live cart into a pending order.

    Checks run before any write, in this order: empty cart, address
    ownership, inventory. Product rows are locked in id order so concurrent
    checkouts for overlapping products cannot deadlock or oversell.
    """

    cart = get_live_cart(user=user)
    lines = list(CartItem.objects.filter(cart=cart).order_by("id")) if cart else []
    if not lines:
        raise EmptyCartError()

    product_ids = sorted({line.product_id for line in lines})
    products = {p.id: p for p in Product.objects.select_for_update().filter(id__in=product_ids).order_by("id")}

    address = get_address_for_user(user=user, address_id=address_id)

    needed: dict[int, int] = defaultdict(int)
    for line in lines:
        needed[line.product_id] += line.quantity
    for product_id in product_ids:
        product = products[product_id]
        if not product.is_active:
            raise ValidationError(f"{product.name} is no longer available")
        if product.inventory < needed[product_id]:
            raise InsufficientInventoryError(product)

    subtotal = sum((line.price_snapshot * line.quantity for line in lines), Decimal("0.00"))
    pricing = price_order(subtotal, promo_code)

    order = Order.objects.create(
        user=user,
        address_snapshot=snapshot_address(address),
        delivery_instructions=delivery_instructions or "",
        estimated_delivery=timezone.now() + timedelta(minutes=settings.DELIVERY_SLA_MINUTES),
        **pricing,
    )
    order.number = format_order_number(order.id)
    order.save(update_fields=["number"])

    OrderItem.objects.bulk_create(
        [
            OrderItem(
                order=order,
                product=products[line.product_id],
                product_name=products[line.product_id].name,
                quantity=line.quantity,
                price_snapshot=line.price_snapshot,
                variant=line.variant,
            )
            for line in lines
        ]
    )
    for product_id in product_ids:
        decrement_stock(product=products[product_id], quantity=needed[product_id], reference=f"order:{order.number}")

    CartItem.objects.filter(cart=cart).delete()

    _notify_order(
        order,
        title="Order Placed Successfully",
        message=(
            f"Your order #{order.number} has been placed and will be delivered in "
            f"{settings.DELIVERY_SLA_MINUTES} minutes."
        ),
    )
    logger.info(
        "order.created",
        extra={
            "event": "order.created",
            "order_id": order.id,
            "order_number": order.number,
            "user_id": user.id,
            "cart_id": cart.id,
            "total_amount": str(order.total_amount),
            "promo_code": order.promo_code,
        },
    )
    return order


def _restock(order: Order) -> None:
    for item in order.items.all():
        apply_movement(
            product_id=item.product_id,
            quantity=item.quantity,
            reason=MovementReason.CANCELLATION,
            reference=f"order:{order.number}",
        )


def _lock(order: Order) -> Order:
    return Order.objects.select_for_update().select_related("user").get(id=order.id)


@transaction.atomic
def cancel_order(*, user, order: Order) -> Order:
    """Cancel the user's own order while it is still pending, returning its stock."""

    if order.user_id != user.id:
        raise NotFoundError("Order not found")
    order = _lock(order)
    if order.status != OrderStatus.PENDING:
        raise OrderStateError("Only pending orders can be cancelled")

    _restock(order)
    order.status = OrderStatus.CANCELLED
    order.save(update_fields=["status", "updated_at"])
    _notify_order(
        order,
        title="Order Cancelled",
        message=f"Your order #{order.number} has been cancelled successfully.",
    )
    logger.info(
        "order.cancelled",
        extra={"event": "order.cancelled", "order_id": order.id, "user_id": user.id},
    )
    return order


@transaction.atomic
def update_order_status(*, order: Order, status: str, actor=None) -> Order:
    """Move an order along its lifecycle (staff only).

    pending -> processing -> shipped -> delivered, and pending -> cancelled.
    Cancelling here also returns stock.
    """

    if status not in OrderStatus.values:
        raise ValidationError(f"Unknown order status: {status}")
    order = _lock(order)
    previous = order.status
    if status not in ALLOWED_TRANSITIONS[previous]:
        raise OrderStateError(f"Cannot change order status from {previous} to {status}")

    if status == OrderStatus.CANCELLED:
        _restock(order)
    order.status = status
    fields = ["status", "updated_at"]
    if status == OrderStatus.DELIVERED:
        order.delivered_at = timezone.now()
        fields.append("delivered_at")
    order.save(update_fields=fields)

    _notify_order(order, title="Order Status Updated", message=STATUS_MESSAGES[status], status=status)
    logger.info(
        "order_status_changed",
        extra={
            "event": "order_status_changed",
            "order_id": order.id,
            "user_id": order.user_id,
            "actor_id": getattr(actor, "id", None),
            "status_from": previous,
            "status_to": status,
        },
    )
    return order


def get_order_stats(*, user) -> dict:
    """Order counts and spend for ``user``; cancelled orders do not count as spent."""

    agg = Order.objects.filter(user=user).aggregate(
        total_orders=Count("id"),
        total_spent=Sum("total_amount", filter=~Q(status=OrderStatus.CANCELLED)),
        pending_orders=Count("id", filter=Q(status=OrderStatus.PENDING)),
        completed_orders=Count("id", filter=Q(status=OrderStatus.DELIVERED)),
    )
    agg["total_spent"] = agg["total_spent"] or Decimal("0.00")
    return agg


@transaction.atomic
def reorder(*, user, order: Order) -> dict:
    """Put every line of a past order back in the live cart at today's prices.

    Products that are no longer active are skipped and reported.
    """

    if order.user_id != user.id:
        raise NotFoundError("Order not found")
    added, skipped = 0, []
    for item in order.items.select_related("product"):
        if not item.product.is_active:
            skipped.append(item.product_name or item.product.name)
            continue
        add_item(user=user, product_id=item.product_id, quantity=item.quantity, variant=item.variant or None)
        added += 1
    logger.info(
        "order.reordered",
        extra={"event": "order.reordered", "order_id": order.id, "user_id": user.id, "added": added},
    )
    return {"added": added, "skipped": skipped}


def with_idempotency(
    *,
    key: str,
    user,
    path: str,
    method: str,
    handler: Callable[[], Tuple[dict, int]],
    request_hash: Optional[str] = None,
) -> Tuple[dict, int]:
    """Run handler idempotently and persist its response for the given key and scope.

    - Scope is derived from the caller: for authenticated users, "user:<id>"; otherwise "anon".
    - If a record exists and the stored `request_hash` differs from the provided one, returns 409.
    - If a record exists but response is not yet stored, returns 409 to indicate in-progress.
    - If the handler raises, the key is released so the client may retry.
    """

    scope = f"user:{getattr(user, 'id', None)}" if getattr(user, "id", None) else "anon"
    method = str(method).upper()
    path = str(path)

    try:
        with transaction.atomic():
            idem = IdempotencyKey.objects.create(
                key=key,
                user=user if getattr(user, "id", None) else None,
                scope=scope,
                path=path,
                method=method,
                request_hash=request_hash,
                expires_at=timezone.now() + timedelta(hours=settings.IDEMPOTENCY_TTL_HOURS),
            )
    except IntegrityError:
        idem = IdempotencyKey.objects.get(key=key, scope=scope, path=path, method=method)
        if idem.request_hash and request_hash and idem.request_hash != request_hash:
            return {"detail": "Idempotency key reused with different request payload", "code": "conflict"}, 409
        if idem.response_json is not None and idem.response_code is not None:
            logger.info("order.idempotent_replay", extra={"event": "order.idempotent_replay", "key": key})
            return idem.response_json, int(idem.response_code)
        return {"detail": "Request in progress", "code": "conflict"}, 409

    try:
        body, code = handler()
    except Exception:
        IdempotencyKey.objects.filter(id=idem.id).delete()
        raise

    IdempotencyKey.objects.filter(id=idem.id).update(response_json=_json_safe(body), response_code=code)
    return body, code


def _json_safe(value):
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, dict):
        return {k: _json_safe(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_json_safe(v) for v in value]
    return value


def compute_request_hash(data: Optional[dict]) -> Optional[str]:
    """Compute a canonical SHA256 hash of the request body.

    Uses sorted keys JSON representation to stabilize the hash across equivalent payloads.
    Returns None when data is falsy.
    """
    if not data:
        return None
    try:
        payload = json.dumps(data, sort_keys=True, separators=(",", ":"), default=str)
    except (TypeError, ValueError):
        return None
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def purge_expired_idempotency_keys() -> int:
    deleted, _ = IdempotencyKey.objects.filter(expires_at__lt=timezone.now()).delete()
    return deleted
