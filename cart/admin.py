"""Admin registration for cart models.

Carts are shown with their lines inline so support can see what a shopper
has staged.
"""

from django.contrib import admin, messages
from django.utils import timezone

from .models import Cart, CartItem


class CartItemInline(admin.TabularInline):
    model = CartItem
    extra = 0
    fields = ("product", "variant", "quantity", "price_snapshot", "created_at")
    readonly_fields = ("created_at",)
    raw_id_fields = ("product",)


class LiveFilter(admin.SimpleListFilter):
    title = "liveness"
    parameter_name = "live"

    def lookups(self, request, model_admin):
        return (
            ("yes", "Live"),
            ("no", "Expired"),
        )

    def queryset(self, request, queryset):
        if self.value() == "yes":
            return queryset.filter(expires_at__gt=timezone.now())
        if self.value() == "no":
            return queryset.filter(expires_at__lte=timezone.now())
        return queryset


@admin.register(Cart)
class CartAdmin(admin.ModelAdmin):
    list_display = ("id", "user", "expires_at", "updated_at", "created_at")
    list_filter = (LiveFilter,)
    search_fields = ("user__username", "user__email")
    ordering = ("-updated_at",)
    readonly_fields = ("created_at", "updated_at")
    inlines = [CartItemInline]
    list_select_related = ("user",)
    actions = ["action_clear_lines"]

    @admin.action(description="Remove all lines from selected carts")
    def action_clear_lines(self, request, queryset):
        deleted, _ = CartItem.objects.filter(cart__in=queryset).delete()
        messages.success(request, f"Removed {deleted} line(s).")


@admin.register(CartItem)
class CartItemAdmin(admin.ModelAdmin):
    list_display = ("id", "cart", "product", "quantity", "price_snapshot", "updated_at")
    search_fields = ("product__name", "cart__user__email")
    ordering = ("id",)
    readonly_fields = ("variant_key", "created_at", "updated_at")
    raw_id_fields = ("cart", "product")
