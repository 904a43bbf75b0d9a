"""
Payment models.

A job can have multiple payments (e.g., advance + balance). Rows are
append-only: the job's paid_amount is the running total of what was applied.
"""

from django.db import models


class PaymentMode(models.TextChoices):
    CASH = "Cash", "Cash"
    UPI = "UPI", "UPI"
    CARD = "Card", "Card"
    BANK_TRANSFER = "Bank Transfer", "Bank Transfer"


class Payment(models.Model):
    """
    A payment applied to a job.

    ``amount`` is what was actually applied, which can be less than what the
    caller offered when the job's remaining balance was smaller.
    """

    job = models.ForeignKey(
        "jobs.Job",
        on_delete=models.PROTECT,
        related_name="payments",
        verbose_name="Job",
    )
    amount = models.DecimalField(max_digits=14, decimal_places=4, verbose_name="Amount")
    mode = models.CharField(max_length=15, choices=PaymentMode.choices, verbose_name="Mode")
    notes = models.CharField(max_length=255, blank=True, verbose_name="Notes")
    received_at = models.DateTimeField(auto_now_add=True, verbose_name="Date")

    class Meta:
        verbose_name = "Payment"
        verbose_name_plural = "Payments"
        ordering = ["received_at", "id"]

    def __str__(self):
        return f"₹{self.amount:,.2f} ({self.get_mode_display()}) — Job #{self.job_id}"
