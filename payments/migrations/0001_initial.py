import django.db.models.deletion
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ("jobs", "0001_initial"),
    ]

    operations = [
        migrations.CreateModel(
            name="Payment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("amount", models.DecimalField(decimal_places=4, max_digits=14, verbose_name="Amount")),
                (
                    "mode",
                    models.CharField(
                        choices=[
                            ("Cash", "Cash"),
                            ("UPI", "UPI"),
                            ("Card", "Card"),
                            ("Bank Transfer", "Bank Transfer"),
                        ],
                        max_length=15,
                        verbose_name="Mode",
                    ),
                ),
                ("notes", models.CharField(blank=True, max_length=255, verbose_name="Notes")),
                ("received_at", models.DateTimeField(auto_now_add=True, verbose_name="Date")),
                (
                    "job",
                    models.ForeignKey(
                        on_delete=django.db.models.deletion.PROTECT,
                        related_name="payments",
                        to="jobs.job",
                        verbose_name="Job",
                    ),
                ),
            ],
            options={
                "verbose_name": "Payment",
                "verbose_name_plural": "Payments",
                "ordering": ["received_at", "id"],
            },
        ),
    ]
