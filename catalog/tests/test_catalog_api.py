from decimal import Decimal

import pytest
from catalog.tests.factories import BannerFactory, CategoryFactory, ProductFactory
from orders.tests.factories import OrderItemFactory
from rest_framework.test import APIClient
from reviews.models import Review
from users.tests.factories import UserFactory


@pytest.fixture
def client():
    return APIClient()


@pytest.mark.django_db
def test_products_list_paginates_and_hides_inactive(client, django_assert_max_num_queries):
    ProductFactory.create_batch(3)
    hidden = ProductFactory(is_active=False)

    with django_assert_max_num_queries(4):
        resp = client.get("/api/v1/catalog/products/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["count"] == 3
    assert hidden.id not in {p["id"] for p in body["results"]}
    first = body["results"][0]
    assert {"id", "name", "slug", "price", "in_stock", "category", "average_rating", "review_count"} <= set(first)
    assert first["average_rating"] == 0
    assert first["review_count"] == 0


@pytest.mark.django_db
def test_products_filter_by_category_and_price(client):
    fruits = CategoryFactory(name="Fruits", slug="fruits")
    dairy = CategoryFactory(name="Dairy", slug="dairy")
    mango = ProductFactory(name="Mango", category=fruits, price=Decimal("120.00"))
    ProductFactory(name="Banana", category=fruits, price=Decimal("40.00"))
    ProductFactory(name="Paneer", category=dairy, price=Decimal("90.00"))

    resp = client.get("/api/v1/catalog/products/?category=fruits")
    assert {p["name"] for p in resp.json()["results"]} == {"Mango", "Banana"}

    resp = client.get(f"/api/v1/catalog/products/?category_id={dairy.id}")
    assert [p["name"] for p in resp.json()["results"]] == ["Paneer"]

    resp = client.get("/api/v1/catalog/products/?min_price=50&max_price=150&category=fruits")
    assert [p["id"] for p in resp.json()["results"]] == [mango.id]


@pytest.mark.django_db
def test_products_search_and_sort(client):
    ProductFactory(name="Green Apple", price=Decimal("80.00"), description="Crisp")
    ProductFactory(name="Apple Juice", price=Decimal("150.00"), description="Cold pressed")
    ProductFactory(name="Carrot", price=Decimal("30.00"), description="Good with apple")

    resp = client.get("/api/v1/catalog/products/?search=apple&sort_by=price&sort_order=asc")
    assert [p["name"] for p in resp.json()["results"]] == ["Carrot", "Green Apple", "Apple Juice"]

    resp = client.get("/api/v1/catalog/products/?q=juice")
    assert [p["name"] for p in resp.json()["results"]] == ["Apple Juice"]

    resp = client.get("/api/v1/catalog/products/?sort_by=name")
    assert [p["name"] for p in resp.json()["results"]] == ["Green Apple", "Carrot", "Apple Juice"]


@pytest.mark.django_db
def test_sort_by_rating_puts_unrated_last(client):
    low = ProductFactory(name="Low")
    high = ProductFactory(name="High")
    unrated = ProductFactory(name="Unrated")
    Review.objects.create(user=UserFactory(), product=low, rating=2)
    Review.objects.create(user=UserFactory(), product=high, rating=5)
    Review.objects.create(user=UserFactory(), product=high, rating=4)

    body = client.get("/api/v1/catalog/products/?sort_by=rating&sort_order=desc").json()
    assert [p["id"] for p in body["results"]] == [high.id, low.id, unrated.id]
    assert body["results"][0]["average_rating"] == 4.5
    assert body["results"][0]["review_count"] == 2

    body = client.get("/api/v1/catalog/products/?sort_by=rating&sort_order=asc").json()
    assert [p["id"] for p in body["results"]] == [low.id, high.id, unrated.id]


@pytest.mark.django_db
@pytest.mark.parametrize("query", ["sort_by=popularity", "sort_order=sideways"])
def test_invalid_sort_is_rejected(client, query):
    resp = client.get(f"/api/v1/catalog/products/?{query}")
    assert resp.status_code == 400
    assert resp.json()["code"] == "invalid"


@pytest.mark.django_db
def test_product_detail_and_missing(client):
    product = ProductFactory(name="Basmati Rice", metadata={"unit": "1kg"})
    resp = client.get(f"/api/v1/catalog/products/{product.id}/")
    assert resp.status_code == 200
    body = resp.json()
    assert body["metadata"] == {"unit": "1kg"}
    assert body["category"]["slug"] == product.category.slug
    assert "description" in body

    inactive = ProductFactory(is_active=False)
    assert client.get(f"/api/v1/catalog/products/{inactive.id}/").status_code == 404
    assert client.get("/api/v1/catalog/products/999999/").status_code == 404


@pytest.mark.django_db
def test_similar_products_share_category(client):
    fruits = CategoryFactory()
    product = ProductFactory(category=fruits)
    siblings = ProductFactory.create_batch(5, category=fruits)
    ProductFactory(category=fruits, is_active=False)
    ProductFactory()

    resp = client.get(f"/api/v1/catalog/products/{product.id}/similar/")
    assert resp.status_code == 200
    ids = [p["id"] for p in resp.json()]
    assert len(ids) == 4
    assert product.id not in ids
    assert set(ids) <= {p.id for p in siblings}

    resp = client.get(f"/api/v1/catalog/products/{product.id}/similar/?limit=2")
    assert len(resp.json()) == 2


@pytest.mark.django_db
def test_search_suggestions(client):
    ProductFactory(name="Alphonso Mango")
    ProductFactory(name="Mango Pickle")
    ProductFactory(name="Raw Mango", is_active=False)
    ProductFactory(name="Tomato")

    resp = client.get("/api/v1/catalog/products/suggestions/?q=mango")
    assert resp.status_code == 200
    assert resp.json() == {"suggestions": ["Alphonso Mango", "Mango Pickle"]}
    assert client.get("/api/v1/catalog/products/suggestions/?q=").json() == {"suggestions": []}


@pytest.mark.django_db
def test_featured_is_newest_first(client):
    older = ProductFactory()
    newer = ProductFactory()
    resp = client.get("/api/v1/catalog/products/featured/?limit=2")
    assert [p["id"] for p in resp.json()] == [newer.id, older.id]


@pytest.mark.django_db
def test_trending_ranks_by_units_ordered(client):
    steady = ProductFactory()
    hot = ProductFactory()
    ProductFactory()
    OrderItemFactory(product=steady, quantity=2)
    OrderItemFactory(product=hot, quantity=3)
    OrderItemFactory(product=hot, quantity=4)
    OrderItemFactory(product=steady, quantity=50, order__status="cancelled")

    resp = client.get("/api/v1/catalog/products/trending/")
    assert resp.status_code == 200
    assert [p["id"] for p in resp.json()] == [hot.id, steady.id]


@pytest.mark.django_db
def test_categories_and_category_products(client):
    fruits = CategoryFactory(name="Fruits", slug="fruits")
    CategoryFactory(name="Hidden", slug="hidden", is_active=False)
    ProductFactory.create_batch(2, category=fruits)
    ProductFactory()

    resp = client.get("/api/v1/catalog/categories/")
    slugs = [c["slug"] for c in resp.json()["results"]]
    assert "fruits" in slugs
    assert "hidden" not in slugs

    resp = client.get("/api/v1/catalog/categories/fruits/")
    assert resp.status_code == 200
    assert resp.json()["name"] == "Fruits"

    resp = client.get("/api/v1/catalog/categories/fruits/products/")
    assert resp.status_code == 200
    assert resp.json()["count"] == 2

    assert client.get("/api/v1/catalog/categories/hidden/products/").status_code == 404


@pytest.mark.django_db
def test_banners_listed_in_display_order(client):
    second = BannerFactory(sort_order=2)
    first = BannerFactory(sort_order=1)
    BannerFactory(is_active=False)

    resp = client.get("/api/v1/catalog/banners/")
    assert resp.status_code == 200
    assert [b["id"] for b in resp.json()] == [first.id, second.id]
