from catalog.selectors import MAX_SEARCH_LIMIT
from orders.serializers import OrderCreateSerializer
from rest_framework import serializers


class CreateOrderRequestSerializer(OrderCreateSerializer):
    pass


class SearchProductsRequestSerializer(serializers.Serializer):
    query = serializers.CharField(required=False, allow_blank=True, default="")
    limit = serializers.IntegerField(required=False, min_value=1, max_value=MAX_SEARCH_LIMIT, default=10)
    offset = serializers.IntegerField(required=False, min_value=0, default=0)
    category_id = serializers.IntegerField(required=False, allow_null=True, default=None)
    min_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, default=None
    )
    max_price = serializers.DecimalField(
        max_digits=10, decimal_places=2, required=False, allow_null=True, default=None
    )
