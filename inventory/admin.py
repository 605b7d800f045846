from django.contrib import admin

from .models import StockMovement


@admin.register(StockMovement)
class StockMovementAdmin(admin.ModelAdmin):
    list_display = ("id", "product", "quantity", "reason", "reference", "created_at")
    list_filter = ("reason",)
    search_fields = ("product__name", "reference")
    raw_id_fields = ("product",)

    def has_change_permission(self, request, obj=None):
        return False
