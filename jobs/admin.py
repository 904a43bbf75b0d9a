from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from inventory.models import MaterialUsage
from payments.models import Payment

from .models import Job, JobStageHistory, ServiceItem


class ServiceItemInline(TabularInline):
    model = ServiceItem
    extra = 0


class MaterialUsageInline(TabularInline):
    model = MaterialUsage
    extra = 0
    readonly_fields = ("item", "name", "quantity", "cost", "recorded_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class PaymentInline(TabularInline):
    model = Payment
    extra = 0
    readonly_fields = ("amount", "mode", "notes", "received_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


class JobStageHistoryInline(TabularInline):
    model = JobStageHistory
    extra = 0
    readonly_fields = ("from_stage", "to_stage", "note", "changed_at")
    can_delete = False

    def has_add_permission(self, request, obj=None):
        return False


@admin.register(Job)
class JobAdmin(ModelAdmin):
    list_display = (
        "id", "customer_name", "vehicle_name", "plate_number", "technician_name",
        "stage", "payment_status", "total_amount", "balance", "created_at",
    )
    list_filter = ("stage", "payment_status", "technician")
    search_fields = ("customer_name", "plate_number", "vehicle_name", "customer__phone")
    readonly_fields = ("stage", "total_amount", "paid_amount", "payment_status", "created_at", "updated_at")
    date_hierarchy = "created_at"
    inlines = [ServiceItemInline, MaterialUsageInline, PaymentInline, JobStageHistoryInline]

    @admin.display(description="Balance")
    def balance(self, obj):
        return f"₹{obj.remaining_balance:,.2f}"


@admin.register(JobStageHistory)
class JobStageHistoryAdmin(ModelAdmin):
    list_display = ("job", "from_stage", "to_stage", "changed_at")
    readonly_fields = ("job", "from_stage", "to_stage", "note", "changed_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
