from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import InventoryItem, MaterialUsage


@admin.register(InventoryItem)
class InventoryItemAdmin(ModelAdmin):
    list_display = ("name", "category", "quantity", "unit", "price", "min_stock", "is_low_stock")
    list_filter = ("category",)
    search_fields = ("name",)

    @admin.display(boolean=True, description="Low stock")
    def is_low_stock(self, obj):
        return obj.is_low_stock


@admin.register(MaterialUsage)
class MaterialUsageAdmin(ModelAdmin):
    list_display = ("job", "name", "quantity", "cost", "recorded_at")
    list_filter = ("item",)
    readonly_fields = ("recorded_at",)
