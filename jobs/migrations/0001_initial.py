"""Initial job models: Job, ServiceItem and JobStageHistory."""

import django.db.models.deletion
from django.db import migrations, models

STAGE_CHOICES = [
    ("New Lead", "New Lead"),
    ("Inspection Done", "Inspection Done"),
    ("Work In Progress", "Work In Progress"),
    ("Ready for Delivery", "Ready for Delivery"),
    ("Completed", "Completed"),
    ("Cancelled", "Cancelled"),
]

PAYMENT_STATUS_CHOICES = [
    ("Pending", "Pending"),
    ("Partially Paid", "Partially Paid"),
    ("Paid", "Paid"),
]


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("customers", "0001_initial"),
        ("technicians", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Job",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("vehicle_index", models.PositiveIntegerField(verbose_name="Vehicle index")),
                ("customer_name", models.CharField(max_length=200)),
                ("vehicle_name", models.CharField(max_length=200)),
                ("plate_number", models.CharField(blank=True, max_length=20)),
                ("technician_name", models.CharField(blank=True, max_length=150)),
                (
                    "stage",
                    models.CharField(
                        choices=STAGE_CHOICES, db_index=True, default="New Lead", max_length=20, verbose_name="Stage"
                    ),
                ),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                ("checklist", models.JSONField(blank=True, default=list, help_text='[{"item": "...", "done": false}]')),
                ("service_cost", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("labor_cost", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("total_amount", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("paid_amount", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                (
                    "payment_status",
                    models.CharField(
                        choices=PAYMENT_STATUS_CHOICES, default="Pending", max_length=20, verbose_name="Payment status"
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="jobs",
                        to="customers.customer",
                        verbose_name="Customer",
                    ),
                ),
                (
                    "vehicle",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="jobs",
                        to="customers.vehicle",
                        verbose_name="Vehicle",
                    ),
                ),
                (
                    "technician",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="jobs",
                        to="technicians.technician",
                        verbose_name="Technician",
                    ),
                ),
            ],
            options={
                "verbose_name": "Job",
                "verbose_name_plural": "Jobs",
                "ordering": ["-updated_at"],
                "indexes": [
                    models.Index(fields=["customer", "stage"], name="jobs_job_custome_4e2b1c_idx"),
                    models.Index(fields=["technician", "stage"], name="jobs_job_technic_9a7f3d_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="ServiceItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(max_length=255)),
                ("cost", models.DecimalField(decimal_places=4, max_digits=14)),
                ("item_type", models.CharField(choices=[("part", "Part"), ("labor", "Labor")], max_length=10)),
                (
                    "job",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="service_items", to="jobs.job"
                    ),
                ),
            ],
            options={
                "verbose_name": "Service item",
                "verbose_name_plural": "Service items",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="JobStageHistory",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("from_stage", models.CharField(choices=STAGE_CHOICES, max_length=20)),
                ("to_stage", models.CharField(choices=STAGE_CHOICES, max_length=20)),
                ("note", models.TextField(blank=True)),
                ("changed_at", models.DateTimeField(auto_now_add=True)),
                (
                    "job",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="stage_history", to="jobs.job"
                    ),
                ),
            ],
            options={
                "verbose_name": "Stage history",
                "verbose_name_plural": "Stage history",
                "ordering": ["-changed_at", "-id"],
            },
        ),
    ]
