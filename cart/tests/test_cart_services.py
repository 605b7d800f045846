from datetime import timedelta
from decimal import Decimal

import pytest
from cart.models import Cart, CartItem
from cart.selectors import cart_item_count, get_cart_with_totals
from cart.services import (
    add_item,
    clear_cart,
    get_or_create_cart,
    purge_expired_carts,
    remove_item,
    update_item,
)
from cart.tests.factories import CartFactory, CartItemFactory
from catalog.tests.factories import ProductFactory
from common.exceptions import NotFoundError, ValidationError
from django.core.management import call_command
from django.utils import timezone
from users.tests.factories import UserFactory

pytestmark = pytest.mark.django_db


def test_get_or_create_cart_is_idempotent_and_expires_in_a_week():
    user = UserFactory()

    first = get_or_create_cart(user=user)
    second = get_or_create_cart(user=user)

    assert first.id == second.id
    assert Cart.objects.filter(user=user).count() == 1
    remaining = first.expires_at - timezone.now()
    assert timedelta(days=6, hours=23) < remaining <= timedelta(days=7)


def test_expired_cart_is_replaced_by_a_new_live_one():
    user = UserFactory()
    stale = CartFactory(user=user, expires_at=timezone.now() - timedelta(minutes=1))

    cart = get_or_create_cart(user=user)

    assert cart.id != stale.id
    assert cart.is_live


def test_add_item_freezes_price_and_sums_repeated_adds():
    user = UserFactory()
    product = ProductFactory(price=Decimal("40.00"))

    add_item(user=user, product_id=product.id, quantity=2)
    product.price = Decimal("55.00")
    product.save(update_fields=["price"])
    item = add_item(user=user, product_id=product.id, quantity=3)

    assert CartItem.objects.count() == 1
    assert item.quantity == 5
    assert item.price_snapshot == Decimal("40.00")


def test_variants_are_separate_lines_regardless_of_key_order():
    user = UserFactory()
    product = ProductFactory()

    a = add_item(user=user, product_id=product.id, quantity=1, variant={"size": "1kg", "ripe": True})
    b = add_item(user=user, product_id=product.id, quantity=1, variant={"ripe": True, "size": "1kg"})
    c = add_item(user=user, product_id=product.id, quantity=1, variant={"size": "500g"})
    d = add_item(user=user, product_id=product.id, quantity=1)

    assert a.id == b.id
    assert b.quantity == 2
    assert len({a.id, c.id, d.id}) == 3


@pytest.mark.parametrize("quantity", [0, -1, 1.5, "2", True])
def test_add_item_rejects_non_positive_integer_quantity(quantity):
    product = ProductFactory()
    with pytest.raises(ValidationError):
        add_item(user=UserFactory(), product_id=product.id, quantity=quantity)


def test_add_item_unknown_or_inactive_product():
    user = UserFactory()
    with pytest.raises(NotFoundError):
        add_item(user=user, product_id=999999, quantity=1)
    with pytest.raises(NotFoundError):
        add_item(user=user, product_id=ProductFactory(is_active=False).id, quantity=1)


def test_update_item_sets_quantity_and_zero_removes():
    user = UserFactory()
    item = add_item(user=user, product_id=ProductFactory().id, quantity=1)

    updated = update_item(user=user, item_id=item.id, quantity=4)
    assert updated.quantity == 4

    assert update_item(user=user, item_id=item.id, quantity=0) is None
    assert not CartItem.objects.filter(id=item.id).exists()


def test_update_and_remove_only_touch_own_live_cart():
    owner = UserFactory()
    other = UserFactory()
    item = add_item(user=owner, product_id=ProductFactory().id, quantity=1)

    with pytest.raises(NotFoundError):
        update_item(user=other, item_id=item.id, quantity=3)
    with pytest.raises(NotFoundError):
        remove_item(user=other, item_id=item.id)
    assert CartItem.objects.get(id=item.id).quantity == 1


def test_totals_are_derived_from_snapshots():
    user = UserFactory()
    cart = CartFactory(user=user)
    CartItemFactory(cart=cart, product=ProductFactory(price=Decimal("12.50")), quantity=2)
    CartItemFactory(cart=cart, product=ProductFactory(price=Decimal("100.00")), quantity=1)

    summary = get_cart_with_totals(user=user)

    assert summary["id"] == cart.id
    assert summary["total_amount"] == Decimal("125.00")
    assert summary["total_items"] == 3
    assert len(summary["items"]) == 2
    assert cart_item_count(user=user) == 3


def test_summary_without_cart_does_not_create_one():
    user = UserFactory()

    summary = get_cart_with_totals(user=user)

    assert summary["id"] is None
    assert summary["items"] == []
    assert summary["total_amount"] == Decimal("0.00")
    assert not Cart.objects.filter(user=user).exists()


def test_clear_cart_keeps_cart_row():
    user = UserFactory()
    cart = CartFactory(user=user)
    CartItemFactory.create_batch(3, cart=cart)

    assert clear_cart(user=user) == 3
    assert Cart.objects.filter(id=cart.id).exists()
    assert cart_item_count(user=user) == 0


def test_purge_expired_carts_command():
    live = CartFactory()
    expired = CartFactory(expires_at=timezone.now() - timedelta(days=1))
    CartItemFactory(cart=expired)

    call_command("purge_expired_carts")

    assert Cart.objects.filter(id=live.id).exists()
    assert not Cart.objects.filter(id=expired.id).exists()
    assert not CartItem.objects.filter(cart_id=expired.id).exists()
    assert purge_expired_carts() == 0


def test_long_variant_gets_a_fixed_length_key():
    user = UserFactory()
    product = ProductFactory()
    variant = {"note": "x" * 300}

    first = add_item(user=user, product_id=product.id, quantity=1, variant=variant)
    again = add_item(user=user, product_id=product.id, quantity=2, variant={"note": "x" * 300})

    assert again.id == first.id
    assert again.quantity == 3
    assert again.variant == variant
    assert len(again.variant_key) == CartItem._meta.get_field("variant_key").max_length == 64
