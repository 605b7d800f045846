import pytest
from cart.models import CartItem
from cart.tests.factories import CartFactory
from catalog.tests.factories import ProductFactory
from django.db import IntegrityError


@pytest.mark.django_db
def test_unique_product_variant_per_cart_constraint():
    cart = CartFactory()
    product = ProductFactory()
    CartItem.objects.create(cart=cart, product=product, variant={"a": 1, "b": 2}, price_snapshot=product.price)

    with pytest.raises(IntegrityError):
        CartItem.objects.create(cart=cart, product=product, variant={"b": 2, "a": 1}, price_snapshot=product.price)


@pytest.mark.django_db
def test_quantity_positive_constraint():
    cart = CartFactory()
    product = ProductFactory()

    with pytest.raises(IntegrityError):
        CartItem.objects.create(cart=cart, product=product, quantity=0, price_snapshot=product.price)
