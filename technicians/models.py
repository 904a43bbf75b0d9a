"""
Technician roster.

Workload is never stored: it is the number of open jobs assigned to the
technician and is recomputed on every request.
"""

from django.db import models
from django.db.models import Count, Q


class TechnicianStatus(models.TextChoices):
    AVAILABLE = "Available", "Available"
    BUSY = "Busy", "Busy"
    OFF = "Off", "Off"


class TechnicianQuerySet(models.QuerySet):
    def with_workload(self):
        from jobs.models import TERMINAL_STAGES

        return self.annotate(
            job_count=Count("jobs", filter=~Q(jobs__stage__in=TERMINAL_STAGES))
        )


class Technician(models.Model):
    name = models.CharField(max_length=150, verbose_name="Name")
    specialty = models.CharField(max_length=150, verbose_name="Specialty")
    phone = models.CharField(max_length=20, blank=True, verbose_name="Phone")
    status = models.CharField(
        max_length=10,
        choices=TechnicianStatus.choices,
        default=TechnicianStatus.AVAILABLE,
        verbose_name="Status",
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = TechnicianQuerySet.as_manager()

    class Meta:
        verbose_name = "Technician"
        verbose_name_plural = "Technicians"
        ordering = ["name"]

    def __str__(self):
        return f"{self.name} — {self.specialty}"

    @property
    def open_job_count(self):
        from jobs.models import TERMINAL_STAGES

        return self.jobs.exclude(stage__in=TERMINAL_STAGES).count()


def technician_workload():
    """Every technician paired with the count of their non-terminal jobs."""
    return [
        {"technician": tech, "job_count": tech.job_count}
        for tech in Technician.objects.with_workload().order_by("name")
    ]
