"""Initial notifications models: WhatsAppTemplate and NotificationLog."""

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("jobs", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="WhatsAppTemplate",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "stage",
                    models.CharField(
                        choices=[
                            ("New Lead", "New Lead"),
                            ("Inspection Done", "Inspection Done"),
                            ("Work In Progress", "Work In Progress"),
                            ("Ready for Delivery", "Ready for Delivery"),
                            ("Completed", "Completed"),
                            ("Cancelled", "Cancelled"),
                        ],
                        max_length=20,
                        unique=True,
                        verbose_name="Stage",
                    ),
                ),
                ("message", models.TextField(help_text="Placeholders: {{vehicle}}, {{plate}}", verbose_name="Message")),
                ("is_active", models.BooleanField(default=True, verbose_name="Active")),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "WhatsApp template",
                "verbose_name_plural": "WhatsApp templates",
                "ordering": ["stage"],
            },
        ),
        migrations.CreateModel(
            name="NotificationLog",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("phone", models.CharField(max_length=30, verbose_name="Phone")),
                (
                    "message_type",
                    models.CharField(
                        choices=[
                            ("stage_update", "Stage update"),
                            ("status_update", "Customer status update"),
                            ("invoice", "Invoice"),
                            ("low_stock", "Low stock alert"),
                        ],
                        max_length=20,
                        verbose_name="Type",
                    ),
                ),
                ("message", models.TextField(blank=True)),
                ("sent_at", models.DateTimeField(auto_now_add=True)),
                ("success", models.BooleanField(default=True)),
                ("error_message", models.TextField(blank=True)),
                (
                    "job",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="notification_logs",
                        to="jobs.job",
                        verbose_name="Job",
                    ),
                ),
            ],
            options={
                "verbose_name": "Notification log",
                "verbose_name_plural": "Notification logs",
                "ordering": ["-sent_at"],
            },
        ),
    ]
