from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Appointment


@admin.register(Appointment)
class AppointmentAdmin(ModelAdmin):
    list_display = ("date", "time_slot", "customer_name", "phone", "vehicle_info", "service_type", "status")
    list_filter = ("status", "date")
    search_fields = ("customer_name", "phone", "plate_number")
    readonly_fields = ("customer", "job", "created_at")
    date_hierarchy = "date"
