"""Cart serializers for read and write operations."""

from rest_framework import serializers

from .models import CartItem


class CartProductSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    price = serializers.DecimalField(max_digits=10, decimal_places=2)
    image_url = serializers.CharField()
    inventory = serializers.IntegerField()


class CartItemReadSerializer(serializers.ModelSerializer):
    """Read serializer for a cart line."""

    product = CartProductSerializer(read_only=True)
    line_total = serializers.DecimalField(max_digits=12, decimal_places=2, read_only=True)

    class Meta:
        model = CartItem
        fields = [
            "id",
            "product",
            "variant",
            "quantity",
            "price_snapshot",
            "line_total",
        ]


class CartReadSerializer(serializers.Serializer):
    """Read serializer for the cart summary and lines."""

    id = serializers.IntegerField(allow_null=True)
    expires_at = serializers.DateTimeField(allow_null=True)
    items = CartItemReadSerializer(many=True)
    total_amount = serializers.DecimalField(max_digits=12, decimal_places=2)
    total_items = serializers.IntegerField()


class AddItemSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField(min_value=1, default=1)
    variant = serializers.DictField(required=False, default=dict)


class UpdateItemQuantitySerializer(serializers.Serializer):
    """Quantity of zero or less removes the line."""

    quantity = serializers.IntegerField()
