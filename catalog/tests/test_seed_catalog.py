from io import StringIO

import pytest
from catalog.models import Banner, Category, Product
from django.core.management import call_command


@pytest.mark.django_db
def test_seed_catalog_is_idempotent():
    out = StringIO()
    call_command("seed_catalog", stdout=out)
    counts = (Category.objects.count(), Product.objects.count(), Banner.objects.count())
    assert counts[1] > 0
    assert "new products" in out.getvalue()

    call_command("seed_catalog", stdout=StringIO())
    assert (Category.objects.count(), Product.objects.count(), Banner.objects.count()) == counts
    assert Product.objects.get(slug="toned-milk").metadata == {"unit": "500ml"}
