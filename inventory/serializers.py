from common.choices import MovementReason
from rest_framework import serializers

from .models import StockMovement


class StockMovementSerializer(serializers.ModelSerializer):
    product_name = serializers.CharField(source="product.name", read_only=True)

    class Meta:
        model = StockMovement
        fields = ["id", "product", "product_name", "quantity", "reason", "reference", "note", "created_at"]
        read_only_fields = fields


class StockLevelSerializer(serializers.Serializer):
    id = serializers.IntegerField()
    name = serializers.CharField()
    inventory = serializers.IntegerField()


class MovementCreateSerializer(serializers.Serializer):
    product_id = serializers.IntegerField()
    quantity = serializers.IntegerField()
    reason = serializers.ChoiceField(
        choices=[(MovementReason.RESTOCK, "Restock"), (MovementReason.ADJUST, "Manual adjustment")],
        default=MovementReason.RESTOCK,
    )
    reference = serializers.CharField(max_length=120, required=False, allow_blank=True, default="")
    note = serializers.CharField(max_length=200, required=False, allow_blank=True, default="")

    def validate(self, attrs):
        if attrs["quantity"] == 0:
            raise serializers.ValidationError({"quantity": "Must be non-zero."})
        if attrs["reason"] == MovementReason.RESTOCK and attrs["quantity"] < 0:
            raise serializers.ValidationError({"quantity": "Restock quantity must be positive."})
        return attrs
