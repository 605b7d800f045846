"""Selectors for read-only cart queries."""

from common.money import ZERO, to_money
from django.db.models import F, Sum

from .models import Cart, CartItem


def get_live_cart(*, user) -> Cart | None:
    return Cart.objects.live().filter(user=user).order_by("-created_at").first()


def cart_lines(*, cart: Cart):
    return CartItem.objects.filter(cart=cart).select_related("product").order_by("id")


def cart_totals(*, cart: Cart | None) -> dict:
    """Aggregate ``total_amount`` and ``total_items`` for a cart.

    Totals are derived on every read and never stored.
    """

    if cart is None:
        return {"total_amount": to_money(ZERO), "total_items": 0}
    agg = CartItem.objects.filter(cart=cart).aggregate(
        total_amount=Sum(F("price_snapshot") * F("quantity")),
        total_items=Sum("quantity"),
    )
    return {
        "total_amount": to_money(agg["total_amount"] or ZERO),
        "total_items": int(agg["total_items"] or 0),
    }


def get_cart_with_totals(*, user) -> dict:
    """The user's live cart with its lines and totals.

    A user without a live cart gets an empty summary; reading never creates
    a cart.
    """

    cart = get_live_cart(user=user)
    return {
        "id": cart.id if cart else None,
        "expires_at": cart.expires_at if cart else None,
        "items": list(cart_lines(cart=cart)) if cart else [],
        **cart_totals(cart=cart),
    }


def cart_item_count(*, user) -> int:
    """Total units across the live cart's lines."""

    return cart_totals(cart=get_live_cart(user=user))["total_items"]
