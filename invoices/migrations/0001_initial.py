"""Initial invoice models: Invoice, InvoiceItem and the shop Setting store."""

import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("customers", "0001_initial"),
        ("jobs", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Invoice",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                (
                    "invoice_number",
                    models.CharField(
                        help_text="Assigned automatically, e.g. INV-2026-00001",
                        max_length=20,
                        unique=True,
                        verbose_name="Invoice number",
                    ),
                ),
                ("sequence", models.PositiveIntegerField(verbose_name="Sequence")),
                ("year", models.PositiveSmallIntegerField(verbose_name="Year")),
                ("customer_name", models.CharField(max_length=200)),
                ("customer_phone", models.CharField(max_length=20)),
                ("customer_email", models.EmailField(blank=True, max_length=254)),
                ("customer_address", models.TextField(blank=True)),
                ("vehicle_name", models.CharField(max_length=200)),
                ("plate_number", models.CharField(blank=True, max_length=20)),
                ("subtotal", models.DecimalField(decimal_places=4, max_digits=14)),
                ("tax_rate", models.DecimalField(decimal_places=2, default=18, max_digits=5, verbose_name="GST rate (%)")),
                ("tax", models.DecimalField(decimal_places=4, default=0, max_digits=14, verbose_name="GST")),
                ("discount", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                ("total_amount", models.DecimalField(decimal_places=4, max_digits=14)),
                ("paid_amount", models.DecimalField(decimal_places=4, default=0, max_digits=14)),
                (
                    "payment_status",
                    models.CharField(
                        choices=[("Pending", "Pending"), ("Partially Paid", "Partially Paid"), ("Paid", "Paid")],
                        default="Pending",
                        max_length=20,
                    ),
                ),
                ("notes", models.TextField(blank=True)),
                ("created_at", models.DateTimeField(auto_now_add=True, verbose_name="Issued at")),
                (
                    "customer",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoices",
                        to="customers.customer",
                        verbose_name="Customer",
                    ),
                ),
                (
                    "job",
                    models.OneToOneField(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="invoice",
                        to="jobs.job",
                        verbose_name="Job",
                    ),
                ),
            ],
            options={
                "verbose_name": "Invoice",
                "verbose_name_plural": "Invoices",
                "ordering": ["-created_at"],
                "indexes": [models.Index(fields=["year", "sequence"], name="invoices_in_year_6c2d8e_idx")],
            },
        ),
        migrations.CreateModel(
            name="InvoiceItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("description", models.CharField(max_length=255)),
                ("quantity", models.DecimalField(decimal_places=3, default=1, max_digits=10)),
                ("unit_price", models.DecimalField(decimal_places=4, max_digits=14)),
                ("total", models.DecimalField(decimal_places=4, max_digits=14)),
                (
                    "item_type",
                    models.CharField(
                        choices=[("service", "Service"), ("material", "Material")], default="service", max_length=10
                    ),
                ),
                (
                    "invoice",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE, related_name="items", to="invoices.invoice"
                    ),
                ),
            ],
            options={
                "verbose_name": "Invoice item",
                "verbose_name_plural": "Invoice items",
                "ordering": ["id"],
            },
        ),
        migrations.CreateModel(
            name="Setting",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("key", models.CharField(max_length=100, unique=True)),
                ("value", models.TextField()),
                ("description", models.CharField(blank=True, max_length=255)),
            ],
            options={
                "verbose_name": "Setting",
                "verbose_name_plural": "Settings",
            },
        ),
    ]
