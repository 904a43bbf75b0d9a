import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("jobs", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="InventoryItem",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, verbose_name="Name")),
                (
                    "category",
                    models.CharField(
                        choices=[
                            ("PPF", "PPF"),
                            ("Ceramic", "Ceramic"),
                            ("Tools", "Tools"),
                            ("Parts", "Parts"),
                            ("Chemicals", "Chemicals"),
                        ],
                        max_length=20,
                        verbose_name="Category",
                    ),
                ),
                ("quantity", models.DecimalField(decimal_places=3, default=0, max_digits=12, verbose_name="In stock")),
                ("unit", models.CharField(help_text="e.g. roll, bottle, piece", max_length=20, verbose_name="Unit")),
                ("min_stock", models.DecimalField(decimal_places=3, default=0, max_digits=12, verbose_name="Minimum stock")),
                ("price", models.DecimalField(decimal_places=4, default=0, max_digits=14, verbose_name="Price / unit (₹)")),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Inventory item",
                "verbose_name_plural": "Inventory",
                "ordering": ["category", "name"],
            },
        ),
        migrations.CreateModel(
            name="MaterialUsage",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, verbose_name="Name")),
                ("quantity", models.DecimalField(decimal_places=3, max_digits=12, verbose_name="Quantity")),
                ("cost", models.DecimalField(decimal_places=4, max_digits=14, verbose_name="Cost")),
                ("recorded_at", models.DateTimeField(auto_now_add=True)),
                (
                    "item",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="usages",
                        to="inventory.inventoryitem",
                        verbose_name="Item",
                    ),
                ),
                (
                    "job",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="materials",
                        to="jobs.job",
                        verbose_name="Job",
                    ),
                ),
            ],
            options={
                "verbose_name": "Material usage",
                "verbose_name_plural": "Material usage",
                "ordering": ["id"],
            },
        ),
    ]
