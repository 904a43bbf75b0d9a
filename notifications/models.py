"""
Notifications — WhatsApp stage templates and the outbound message log.

WhatsAppTemplate holds one message per job stage with {{vehicle}} and
{{plate}} placeholders. NotificationLog records every outgoing attempt.
"""

from django.db import models

from jobs.models import JobStage


class WhatsAppTemplate(models.Model):
    stage = models.CharField(max_length=20, choices=JobStage.choices, unique=True, verbose_name="Stage")
    message = models.TextField(verbose_name="Message", help_text="Placeholders: {{vehicle}}, {{plate}}")
    is_active = models.BooleanField(default=True, verbose_name="Active")
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "WhatsApp template"
        verbose_name_plural = "WhatsApp templates"
        ordering = ["stage"]

    def __str__(self):
        return f"{self.stage}{'' if self.is_active else ' (inactive)'}"


class NotificationLog(models.Model):
    """Records every outgoing WhatsApp message attempt."""

    class MessageType(models.TextChoices):
        STAGE_UPDATE = "stage_update", "Stage update"
        STATUS_UPDATE = "status_update", "Customer status update"
        INVOICE = "invoice", "Invoice"
        LOW_STOCK = "low_stock", "Low stock alert"

    job = models.ForeignKey(
        "jobs.Job",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="notification_logs",
        verbose_name="Job",
    )
    phone = models.CharField(max_length=30, verbose_name="Phone")
    message_type = models.CharField(max_length=20, choices=MessageType.choices, verbose_name="Type")
    message = models.TextField(blank=True)
    sent_at = models.DateTimeField(auto_now_add=True)
    success = models.BooleanField(default=True)
    error_message = models.TextField(blank=True)

    class Meta:
        verbose_name = "Notification log"
        verbose_name_plural = "Notification logs"
        ordering = ["-sent_at"]

    def __str__(self):
        status = "✓" if self.success else "✗"
        return f"{status} {self.get_message_type_display()} → {self.phone}"
