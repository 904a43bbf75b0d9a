"""
Customer models.

A customer owns an ordered list of vehicles. Jobs point at a vehicle both by
its stable id and by its position in that list, so positions are assigned once
and never reused or shifted.
"""

import uuid

from django.db import models


class CustomerStatus(models.TextChoices):
    INQUIRED = "Inquired", "Inquired"
    WORKING = "Working", "Working"
    WAITING = "Waiting", "Waiting"
    COMPLETED = "Completed", "Completed"


class Customer(models.Model):
    """A garage customer — one phone number, one or more vehicles."""

    name = models.CharField(max_length=200, verbose_name="Name")
    phone = models.CharField(max_length=20, verbose_name="Phone")
    email = models.EmailField(blank=True, verbose_name="Email")
    address = models.TextField(blank=True, verbose_name="Address")
    status = models.CharField(
        max_length=20,
        choices=CustomerStatus.choices,
        default=CustomerStatus.INQUIRED,
        verbose_name="Status",
    )
    # Label of the services picked at intake, e.g. "Elite - TPU 5 Years Gloss + Detailing"
    service = models.CharField(max_length=255, blank=True, verbose_name="Service")
    service_cost = models.DecimalField(
        max_digits=14, decimal_places=4, default=0, verbose_name="Service cost"
    )
    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Customer"
        verbose_name_plural = "Customers"
        ordering = ["-created_at"]
        indexes = [
            models.Index(fields=["name"], name="customers_c_name_5a1f2e_idx"),
            models.Index(fields=["phone"], name="customers_c_phone_8b3c4d_idx"),
        ]

    def __str__(self):
        return f"{self.name} ({self.phone})"

    def vehicle_at(self, index):
        """Return the vehicle at list position ``index`` or None."""
        return self.vehicles.filter(position=index).first()

    def add_vehicle(self, **fields):
        """Append a vehicle at the next free position."""
        last = self.vehicles.order_by("-position").first()
        position = last.position + 1 if last else 0
        return Vehicle.objects.create(customer=self, position=position, **fields)


class Vehicle(models.Model):
    """A customer's vehicle, addressed by (customer, position) or by uid."""

    customer = models.ForeignKey(Customer, on_delete=models.CASCADE, related_name="vehicles")
    uid = models.UUIDField(default=uuid.uuid4, unique=True, editable=False)
    position = models.PositiveIntegerField(editable=False, verbose_name="Index")
    make = models.CharField(max_length=100, blank=True)
    model = models.CharField(max_length=100, blank=True)
    year = models.CharField(max_length=4, blank=True)
    plate_number = models.CharField(max_length=20, blank=True, verbose_name="Plate number")
    color = models.CharField(max_length=50, blank=True)
    vin = models.CharField(max_length=50, blank=True, verbose_name="VIN / chassis")
    # Cached intake preference
    ppf_category = models.CharField(max_length=50, blank=True)
    ppf_vehicle_type = models.CharField(max_length=100, blank=True)
    ppf_warranty = models.CharField(max_length=50, blank=True)

    class Meta:
        verbose_name = "Vehicle"
        verbose_name_plural = "Vehicles"
        ordering = ["customer", "position"]
        constraints = [
            models.UniqueConstraint(fields=["customer", "position"], name="unique_vehicle_position"),
        ]
        indexes = [models.Index(fields=["plate_number"], name="customers_v_plate_n_1d9e7a_idx")]

    def __str__(self):
        return f"{self.display_name} [{self.plate_number}]"

    @property
    def display_name(self):
        return f"{self.make} {self.model}".strip() or self.model
