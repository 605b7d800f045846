from decimal import Decimal

import factory
from factory.django import DjangoModelFactory
from orders.models import Order, OrderItem


class OrderFactory(DjangoModelFactory):
    class Meta:
        model = Order

    user = factory.SubFactory("users.tests.factories.UserFactory")
    number = factory.Sequence(lambda n: f"ORD-T{n:05d}")
    status = "pending"
    subtotal = Decimal("200.00")
    delivery_fee = Decimal("50.00")
    total_amount = Decimal("250.00")
    address_snapshot = factory.LazyFunction(lambda: {"city": "Bengaluru"})


class OrderItemFactory(DjangoModelFactory):
    class Meta:
        model = OrderItem

    order = factory.SubFactory(OrderFactory)
    product = factory.SubFactory("catalog.tests.factories.ProductFactory")
    product_name = factory.LazyAttribute(lambda o: o.product.name)
    quantity = 1
    price_snapshot = factory.LazyAttribute(lambda o: o.product.price)
