"""Initial customer models: Customer and Vehicle."""

import uuid

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Customer",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=200, verbose_name="Name")),
                ("phone", models.CharField(max_length=20, verbose_name="Phone")),
                ("email", models.EmailField(blank=True, max_length=254, verbose_name="Email")),
                ("address", models.TextField(blank=True, verbose_name="Address")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Inquired", "Inquired"),
                            ("Working", "Working"),
                            ("Waiting", "Waiting"),
                            ("Completed", "Completed"),
                        ],
                        default="Inquired",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("service", models.CharField(blank=True, max_length=255, verbose_name="Service")),
                ("service_cost", models.DecimalField(decimal_places=4, default=0, max_digits=14, verbose_name="Service cost")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                ("updated_at", models.DateTimeField(auto_now=True)),
            ],
            options={
                "verbose_name": "Customer",
                "verbose_name_plural": "Customers",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(fields=["name"], name="customers_c_name_5a1f2e_idx"),
                    models.Index(fields=["phone"], name="customers_c_phone_8b3c4d_idx"),
                ],
            },
        ),
        migrations.CreateModel(
            name="Vehicle",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("uid", models.UUIDField(default=uuid.uuid4, editable=False, unique=True)),
                ("position", models.PositiveIntegerField(editable=False, verbose_name="Index")),
                ("make", models.CharField(blank=True, max_length=100)),
                ("model", models.CharField(blank=True, max_length=100)),
                ("year", models.CharField(blank=True, max_length=4)),
                ("plate_number", models.CharField(blank=True, max_length=20, verbose_name="Plate number")),
                ("color", models.CharField(blank=True, max_length=50)),
                ("vin", models.CharField(blank=True, max_length=50, verbose_name="VIN / chassis")),
                ("ppf_category", models.CharField(blank=True, max_length=50)),
                ("ppf_vehicle_type", models.CharField(blank=True, max_length=100)),
                ("ppf_warranty", models.CharField(blank=True, max_length=50)),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="vehicles",
                        to="customers.customer",
                    ),
                ),
            ],
            options={
                "verbose_name": "Vehicle",
                "verbose_name_plural": "Vehicles",
                "ordering": ["customer", "position"],
                "indexes": [models.Index(fields=["plate_number"], name="customers_v_plate_n_1d9e7a_idx")],
                "constraints": [
                    models.UniqueConstraint(fields=("customer", "position"), name="unique_vehicle_position"),
                ],
            },
        ),
    ]
