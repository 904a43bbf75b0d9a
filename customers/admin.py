from django.contrib import admin
from unfold.admin import ModelAdmin, TabularInline

from .models import Customer, Vehicle


class VehicleInline(TabularInline):
    model = Vehicle
    extra = 0
    readonly_fields = ("position", "uid")
    can_delete = False


@admin.register(Customer)
class CustomerAdmin(ModelAdmin):
    list_display = ("name", "phone", "status", "service", "service_cost", "created_at")
    list_filter = ("status",)
    search_fields = ("name", "phone", "email", "vehicles__plate_number")
    readonly_fields = ("created_at", "updated_at")
    inlines = [VehicleInline]

    fieldsets = (
        ("Contact", {"fields": ("name", "phone", "email", "address")}),
        ("Service", {"fields": ("status", "service", "service_cost")}),
        ("Timestamps", {"fields": ("created_at", "updated_at"), "classes": ["collapse"]}),
    )
