from common.choices import OrderStatus
from common.exceptions import StorefrontError
from django.contrib import admin, messages

from .models import IdempotencyKey, Order, OrderItem
from .services import update_order_status


class OrderItemInline(admin.TabularInline):
    model = OrderItem
    extra = 0
    fields = ("product", "product_name", "quantity", "price_snapshot", "variant")
    readonly_fields = fields
    can_delete = False


@admin.register(Order)
class OrderAdmin(admin.ModelAdmin):
    list_display = ("id", "number", "status", "payment_status", "user", "total_amount", "created_at")
    list_filter = ("status", "payment_status", "created_at")
    search_fields = ("number", "user__email")
    date_hierarchy = "created_at"
    readonly_fields = (
        "number",
        "subtotal",
        "discount",
        "promo_code",
        "delivery_fee",
        "total_amount",
        "address_snapshot",
        "estimated_delivery",
        "delivered_at",
        "created_at",
    )
    inlines = [OrderItemInline]
    actions = ["mark_processing", "mark_shipped", "mark_delivered"]

    def _transition(self, request, queryset, status):
        moved = 0
        for order in queryset:
            try:
                update_order_status(order=order, status=status, actor=request.user)
                moved += 1
            except StorefrontError as exc:
                messages.warning(request, f"{order.number}: {exc.detail}")
        if moved:
            messages.success(request, f"Moved {moved} order(s) to {status}.")

    @admin.action(description="Mark as processing")
    def mark_processing(self, request, queryset):
        self._transition(request, queryset, OrderStatus.PROCESSING)

    @admin.action(description="Mark as shipped")
    def mark_shipped(self, request, queryset):
        self._transition(request, queryset, OrderStatus.SHIPPED)

    @admin.action(description="Mark as delivered")
    def mark_delivered(self, request, queryset):
        self._transition(request, queryset, OrderStatus.DELIVERED)


@admin.register(IdempotencyKey)
class IdempotencyKeyAdmin(admin.ModelAdmin):
    list_display = ("id", "key", "scope", "path", "method", "response_code", "created_at")
    list_filter = ("method", "response_code", "created_at")
    search_fields = ("key", "scope", "path")
    date_hierarchy = "created_at"
