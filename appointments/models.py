"""
Appointments — bookings made before a job exists.

Converting an appointment creates exactly one job and is irreversible.
"""

from django.db import models


class AppointmentStatus(models.TextChoices):
    SCHEDULED = "Scheduled", "Scheduled"
    CONFIRMED = "Confirmed", "Confirmed"
    CANCELLED = "Cancelled", "Cancelled"
    CONVERTED = "Converted", "Converted"


CLOSED_STATUSES = [AppointmentStatus.CANCELLED, AppointmentStatus.CONVERTED]


class Appointment(models.Model):
    customer_name = models.CharField(max_length=200, verbose_name="Customer name")
    phone = models.CharField(max_length=20, verbose_name="Phone")
    vehicle_info = models.CharField(max_length=200, verbose_name="Vehicle")
    plate_number = models.CharField(max_length=20, blank=True, verbose_name="Plate number")
    service_type = models.CharField(max_length=200, verbose_name="Service type")
    date = models.DateField(verbose_name="Date", db_index=True)
    time_slot = models.CharField(max_length=50, verbose_name="Time slot")
    notes = models.TextField(blank=True, verbose_name="Notes")
    status = models.CharField(
        max_length=20,
        choices=AppointmentStatus.choices,
        default=AppointmentStatus.SCHEDULED,
        verbose_name="Status",
    )
    # Set on conversion
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointments",
    )
    job = models.OneToOneField(
        "jobs.Job",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="appointment",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Appointment"
        verbose_name_plural = "Appointments"
        ordering = ["date", "time_slot"]

    def __str__(self):
        return f"{self.date} {self.time_slot} — {self.customer_name} ({self.vehicle_info})"

    @property
    def job_notes(self):
        if self.notes:
            return f"{self.service_type} - {self.notes}"
        return self.service_type
