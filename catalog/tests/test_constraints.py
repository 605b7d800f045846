from decimal import Decimal

import pytest
from catalog.models import Product
from catalog.tests.factories import CategoryFactory, ProductFactory
from django.db import IntegrityError, transaction


@pytest.mark.django_db
def test_inventory_cannot_go_negative():
    product = ProductFactory(inventory=1)
    with pytest.raises(IntegrityError), transaction.atomic():
        Product.objects.filter(id=product.id).update(inventory=-1)


@pytest.mark.django_db
def test_price_cannot_be_negative():
    with pytest.raises(IntegrityError), transaction.atomic():
        ProductFactory(price=Decimal("-1.00"))


@pytest.mark.django_db
def test_slug_generated_and_deduplicated():
    category = CategoryFactory()
    first = Product.objects.create(name="Baby Spinach", price=Decimal("40.00"), category=category)
    second = Product.objects.create(name="Baby Spinach", price=Decimal("45.00"), category=category)
    assert first.slug == "baby-spinach"
    assert second.slug == "baby-spinach-2"
