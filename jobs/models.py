"""
Job models — the core of the garage workflow.

A Job moves through the service pipeline with every stage change recorded in
JobStageHistory. Once an invoice exists for a job its stage is frozen; only
payments may still move.
"""

from decimal import Decimal

from django.db import models

from core.exceptions import Conflict, ValidationFailed


class JobStage(models.TextChoices):
    NEW_LEAD = "New Lead", "New Lead"
    INSPECTION_DONE = "Inspection Done", "Inspection Done"
    WORK_IN_PROGRESS = "Work In Progress", "Work In Progress"
    READY_FOR_DELIVERY = "Ready for Delivery", "Ready for Delivery"
    COMPLETED = "Completed", "Completed"
    CANCELLED = "Cancelled", "Cancelled"


TERMINAL_STAGES = [JobStage.COMPLETED, JobStage.CANCELLED]

# Valid stage transitions, enforced in transition_to().
# Any open stage may move to any other stage; terminal stages are absorbing.
ALLOWED_TRANSITIONS = {
    stage: (set(JobStage) - {stage} if stage not in TERMINAL_STAGES else set())
    for stage in JobStage
}


class PaymentStatus(models.TextChoices):
    PENDING = "Pending", "Pending"
    PARTIALLY_PAID = "Partially Paid", "Partially Paid"
    PAID = "Paid", "Paid"


def payment_status_for(paid_amount, total_amount):
    """Payment status as a pure function of paid vs total."""
    if paid_amount >= total_amount:
        return PaymentStatus.PAID
    if paid_amount > 0:
        return PaymentStatus.PARTIALLY_PAID
    return PaymentStatus.PENDING


class Job(models.Model):
    """One service order on one customer vehicle."""

    # Relationships
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="jobs",
        verbose_name="Customer",
    )
    vehicle = models.ForeignKey(
        "customers.Vehicle",
        on_delete=models.PROTECT,
        related_name="jobs",
        verbose_name="Vehicle",
    )
    vehicle_index = models.PositiveIntegerField(verbose_name="Vehicle index")
    technician = models.ForeignKey(
        "technicians.Technician",
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="jobs",
        verbose_name="Technician",
    )

    # Snapshot for display; stays stable if the customer record changes
    customer_name = models.CharField(max_length=200)
    vehicle_name = models.CharField(max_length=200)
    plate_number = models.CharField(max_length=20, blank=True)
    technician_name = models.CharField(max_length=150, blank=True)

    stage = models.CharField(
        max_length=20,
        choices=JobStage.choices,
        default=JobStage.NEW_LEAD,
        verbose_name="Stage",
        db_index=True,
    )
    notes = models.TextField(blank=True, verbose_name="Notes")
    checklist = models.JSONField(default=list, blank=True, help_text='[{"item": "...", "done": false}]')

    # Money
    service_cost = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    labor_cost = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    total_amount = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    paid_amount = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
        verbose_name="Payment status",
    )

    created_at = models.DateTimeField(auto_now_add=True)
    updated_at = models.DateTimeField(auto_now=True)

    class Meta:
        verbose_name = "Job"
        verbose_name_plural = "Jobs"
        ordering = ["-updated_at"]
        indexes = [
            models.Index(fields=["customer", "stage"], name="jobs_job_custome_4e2b1c_idx"),
            models.Index(fields=["technician", "stage"], name="jobs_job_technic_9a7f3d_idx"),
        ]

    def __str__(self):
        return f"#{self.pk} {self.vehicle_name} [{self.plate_number}] — {self.customer_name}"

    @property
    def remaining_balance(self):
        return max(Decimal("0"), self.total_amount - self.paid_amount)

    @property
    def is_open(self):
        return self.stage not in TERMINAL_STAGES

    @property
    def has_invoice(self):
        from invoices.models import Invoice

        return Invoice.objects.filter(job_id=self.pk).exists()

    def refresh_payment_status(self):
        self.payment_status = payment_status_for(self.paid_amount, self.total_amount)

    def recalculate_total(self):
        """Total after material consumption: materials + service items + service cost."""
        materials = self.materials.aggregate(total=models.Sum("cost"))["total"] or Decimal("0")
        items = self.service_items.aggregate(total=models.Sum("cost"))["total"] or Decimal("0")
        return materials + items + self.service_cost

    def transition_to(self, new_stage, note=""):
        """
        Move job to new_stage, enforcing the pipeline rules.
        Records history entry for every change.
        """
        if new_stage not in JobStage.values:
            raise ValidationFailed(f"Unknown stage '{new_stage}'")
        if self.has_invoice:
            raise Conflict("Cannot change stage after invoice has been created")
        allowed = ALLOWED_TRANSITIONS.get(self.stage, set())
        if new_stage not in allowed:
            raise Conflict(f"Cannot transition from '{self.stage}' to '{new_stage}'")

        old_stage = self.stage
        self.stage = new_stage
        self.save(update_fields=["stage", "updated_at"])

        JobStageHistory.objects.create(
            job=self,
            from_stage=old_stage,
            to_stage=new_stage,
            note=note,
        )


class ServiceItem(models.Model):
    """A priced line of work or part on a job."""

    class ItemType(models.TextChoices):
        PART = "part", "Part"
        LABOR = "labor", "Labor"

    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name="service_items")
    description = models.CharField(max_length=255)
    cost = models.DecimalField(max_digits=14, decimal_places=4)
    item_type = models.CharField(max_length=10, choices=ItemType.choices)

    class Meta:
        verbose_name = "Service item"
        verbose_name_plural = "Service items"
        ordering = ["id"]

    def __str__(self):
        return f"{self.description} ({self.get_item_type_display()})"


class JobStageHistory(models.Model):
    """Immutable audit log of every stage change on a job."""

    job = models.ForeignKey(Job, on_delete=models.CASCADE, related_name="stage_history")
    from_stage = models.CharField(max_length=20, choices=JobStage.choices)
    to_stage = models.CharField(max_length=20, choices=JobStage.choices)
    note = models.TextField(blank=True)
    changed_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Stage history"
        verbose_name_plural = "Stage history"
        ordering = ["-changed_at", "-id"]

    def __str__(self):
        return f"Job #{self.job_id}: {self.from_stage} → {self.to_stage}"
