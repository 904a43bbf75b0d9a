from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import Technician


@admin.register(Technician)
class TechnicianAdmin(ModelAdmin):
    list_display = ("name", "specialty", "phone", "status", "open_job_count")
    list_filter = ("status",)
    search_fields = ("name", "specialty", "phone")

    @admin.display(description="Open jobs")
    def open_job_count(self, obj):
        return obj.open_job_count
