"""Order pricing: promo codes, delivery fee and totals.

Promo rules come from ``settings.PROMO_CODES``, a mapping of code to
``{"percent": ..., "cap": ...}``; ``cap`` is optional. Codes match exactly.
An unrecognised code earns no discount and is not stored on the order.
"""

import logging
from decimal import Decimal

from common.money import ZERO, to_money
from django.conf import settings

logger = logging.getLogger("freshcart.orders")


def promo_rule(code: str | None) -> dict | None:
    if not code:
        return None
    rule = settings.PROMO_CODES.get(code)
    if rule is None:
        logger.info("order.promo_ignored", extra={"event": "order.promo_ignored", "promo_code": code[:64]})
    return rule


def compute_discount(subtotal: Decimal, promo_code: str | None) -> Decimal:
    """Discount for ``promo_code`` on ``subtotal``; never more than the subtotal."""

    rule = promo_rule(promo_code)
    if rule is None:
        return ZERO
    discount = subtotal * Decimal(str(rule["percent"])) / Decimal("100")
    if rule.get("cap") is not None:
        discount = min(discount, Decimal(str(rule["cap"])))
    return to_money(min(discount, subtotal))


def compute_delivery_fee(subtotal: Decimal) -> Decimal:
    if subtotal >= Decimal(str(settings.FREE_DELIVERY_THRESHOLD)):
        return ZERO
    return to_money(settings.DELIVERY_FEE)


def price_order(subtotal: Decimal, promo_code: str | None = None) -> dict:
    subtotal = to_money(subtotal)
    discount = compute_discount(subtotal, promo_code)
    applied = promo_code if promo_code and promo_code in settings.PROMO_CODES else ""
    delivery_fee = compute_delivery_fee(subtotal)
    return {
        "subtotal": subtotal,
        "discount": discount,
        "promo_code": applied,
        "delivery_fee": delivery_fee,
        "total_amount": to_money(subtotal - discount + delivery_fee),
    }
