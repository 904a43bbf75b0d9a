from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import Invoice, InvoiceItem, Setting


class InvoiceItemInline(TabularInline):
    model = InvoiceItem
    extra = 0
    readonly_fields = ["description", "quantity", "unit_price", "total", "item_type"]
    can_delete = False


@admin.register(Invoice)
class InvoiceAdmin(ModelAdmin):
    list_display = ["invoice_number", "customer_name", "plate_number", "total_amount", "paid_amount", "payment_status", "created_at"]
    list_filter = ["payment_status", "year"]
    search_fields = ["invoice_number", "customer_name", "customer_phone", "plate_number"]
    readonly_fields = [
        "job", "customer", "invoice_number", "sequence", "year",
        "subtotal", "tax_rate", "tax", "discount", "total_amount",
        "paid_amount", "payment_status", "created_at",
    ]
    inlines = [InvoiceItemInline]

    def has_add_permission(self, request):
        return False


@admin.register(Setting)
class SettingAdmin(ModelAdmin):
    list_display = ["key", "value", "description"]
    search_fields = ["key"]
