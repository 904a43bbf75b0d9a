from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = []

    operations = [
        migrations.CreateModel(
            name="Technician",
            fields=[
                ("id", models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name="ID")),
                ("name", models.CharField(max_length=150, verbose_name="Name")),
                ("specialty", models.CharField(max_length=150, verbose_name="Specialty")),
                ("phone", models.CharField(blank=True, max_length=20, verbose_name="Phone")),
                (
                    "status",
                    models.CharField(
                        choices=[("Available", "Available"), ("Busy", "Busy"), ("Off", "Off")],
                        default="Available",
                        max_length=10,
                        verbose_name="Status",
                    ),
                ),
                ("created_at", models.DateTimeField(auto_now_add=True)),
            ],
            options={
                "verbose_name": "Technician",
                "verbose_name_plural": "Technicians",
                "ordering": ["name"],
            },
        ),
    ]
