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
            name="Appointment",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("customer_name", models.CharField(max_length=200, verbose_name="Customer name")),
                ("phone", models.CharField(max_length=20, verbose_name="Phone")),
                ("vehicle_info", models.CharField(max_length=200, verbose_name="Vehicle")),
                ("plate_number", models.CharField(blank=True, max_length=20, verbose_name="Plate number")),
                ("service_type", models.CharField(max_length=200, verbose_name="Service type")),
                ("date", models.DateField(db_index=True, verbose_name="Date")),
                ("time_slot", models.CharField(max_length=50, verbose_name="Time slot")),
                ("notes", models.TextField(blank=True, verbose_name="Notes")),
                (
                    "status",
                    models.CharField(
                        choices=[
                            ("Scheduled", "Scheduled"),
                            ("Confirmed", "Confirmed"),
                            ("Cancelled", "Cancelled"),
                            ("Converted", "Converted"),
                        ],
                        default="Scheduled",
                        max_length=20,
                        verbose_name="Status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
                (
                    "customer",
                    models.ForeignKey(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="appointments",
                        to="customers.customer",
                    ),
                ),
                (
                    "job",
                    models.OneToOneField(
                        blank=True,
                        null=True,
                        on_delete=django.db.models.deletion.SET_NULL,
                        related_name="appointment",
                        to="jobs.job",
                    ),
                ),
            ],
            options={
                "verbose_name": "Appointment",
                "verbose_name_plural": "Appointments",
                "ordering": ["date", "time_slot"],
            },
        ),
    ]
