from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Payment


@admin.register(Payment)
class PaymentAdmin(ModelAdmin):
    list_display = ("job", "amount", "mode", "notes", "received_at")
    list_filter = ("mode",)
    search_fields = ("job__customer_name", "job__plate_number", "notes")
    readonly_fields = ("received_at",)
    date_hierarchy = "received_at"

    def has_change_permission(self, request, obj=None):
        # Ledger rows are append-only
        return False

    def has_delete_permission(self, request, obj=None):
        return False
