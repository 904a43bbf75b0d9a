from django.contrib import admin
from unfold.admin import ModelAdmin

from .models import NotificationLog, WhatsAppTemplate


@admin.register(WhatsAppTemplate)
class WhatsAppTemplateAdmin(ModelAdmin):
    list_display = ("stage", "is_active", "updated_at")
    list_filter = ("is_active",)


@admin.register(NotificationLog)
class NotificationLogAdmin(ModelAdmin):
    list_display = ("sent_at", "message_type", "phone", "job", "success")
    list_filter = ("message_type", "success")
    search_fields = ("phone", "message")
    readonly_fields = ("job", "phone", "message_type", "message", "success", "error_message", "sent_at")

    def has_add_permission(self, request):
        return False

    def has_change_permission(self, request, obj=None):
        return False
