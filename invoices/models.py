"""
Invoice models — GST invoices generated once per job.

Invoice numbers are assigned under SELECT FOR UPDATE so concurrent requests
never hand out the same sequence.
Invoice numbers format: INV-YYYY-NNNNN (e.g., INV-2026-00001)
"""

from decimal import Decimal

from django.db import models, transaction
from django.utils import timezone

from jobs.models import PaymentStatus, payment_status_for


class Invoice(models.Model):
    """
    The billing document derived from a job.

    Only payment fields change after creation; the job it belongs to can no
    longer change stage.
    """

    job = models.OneToOneField(
        "jobs.Job",
        on_delete=models.PROTECT,
        related_name="invoice",
        verbose_name="Job",
    )
    customer = models.ForeignKey(
        "customers.Customer",
        on_delete=models.PROTECT,
        related_name="invoices",
        verbose_name="Customer",
    )
    invoice_number = models.CharField(
        max_length=20,
        unique=True,
        verbose_name="Invoice number",
        help_text="Assigned automatically, e.g. INV-2026-00001",
    )
    sequence = models.PositiveIntegerField(verbose_name="Sequence")
    year = models.PositiveSmallIntegerField(verbose_name="Year")

    # Snapshot of customer and vehicle at time of issue (immutable after creation)
    customer_name = models.CharField(max_length=200)
    customer_phone = models.CharField(max_length=20)
    customer_email = models.EmailField(blank=True)
    customer_address = models.TextField(blank=True)
    vehicle_name = models.CharField(max_length=200)
    plate_number = models.CharField(max_length=20, blank=True)

    # Amounts
    subtotal = models.DecimalField(max_digits=14, decimal_places=4)
    tax_rate = models.DecimalField(max_digits=5, decimal_places=2, default=18, verbose_name="GST rate (%)")
    tax = models.DecimalField(max_digits=14, decimal_places=4, default=0, verbose_name="GST")
    discount = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    total_amount = models.DecimalField(max_digits=14, decimal_places=4)
    paid_amount = models.DecimalField(max_digits=14, decimal_places=4, default=0)
    payment_status = models.CharField(
        max_length=20,
        choices=PaymentStatus.choices,
        default=PaymentStatus.PENDING,
    )

    notes = models.TextField(blank=True)
    created_at = models.DateTimeField(auto_now_add=True, verbose_name="Issued at")

    class Meta:
        verbose_name = "Invoice"
        verbose_name_plural = "Invoices"
        ordering = ["-created_at"]
        indexes = [models.Index(fields=["year", "sequence"], name="invoices_in_year_6c2d8e_idx")]

    def __str__(self):
        return f"{self.invoice_number} — {self.customer_name}"

    def save(self, *args, **kwargs):
        if not self.pk:
            # New invoice: assign sequential number inside a transaction
            self._assign_invoice_number()
        super().save(*args, **kwargs)

    def _assign_invoice_number(self):
        """
        Assign the next sequential invoice number atomically.

        The sequence runs across years; the year in the number is the year of
        issue.
        """
        current_year = timezone.now().year

        with transaction.atomic():
            last = Invoice.objects.select_for_update().order_by("-sequence").first()
            self.sequence = (last.sequence + 1) if last else 1
            self.year = current_year
            self.invoice_number = f"INV-{current_year}-{self.sequence:05d}"

    @property
    def remaining_balance(self):
        return max(Decimal("0"), self.total_amount - self.paid_amount)

    def refresh_payment_status(self):
        self.payment_status = payment_status_for(self.paid_amount, self.total_amount)


class InvoiceItem(models.Model):
    """Line items on an invoice."""

    class ItemType(models.TextChoices):
        SERVICE = "service", "Service"
        MATERIAL = "material", "Material"

    invoice = models.ForeignKey(Invoice, on_delete=models.CASCADE, related_name="items")
    description = models.CharField(max_length=255)
    quantity = models.DecimalField(max_digits=10, decimal_places=3, default=1)
    unit_price = models.DecimalField(max_digits=14, decimal_places=4)
    total = models.DecimalField(max_digits=14, decimal_places=4)
    item_type = models.CharField(max_length=10, choices=ItemType.choices, default=ItemType.SERVICE)

    class Meta:
        verbose_name = "Invoice item"
        verbose_name_plural = "Invoice items"
        ordering = ["id"]

    def save(self, *args, **kwargs):
        self.total = self.quantity * self.unit_price
        super().save(*args, **kwargs)

    def __str__(self):
        return f"{self.description} × {self.quantity}"


class Setting(models.Model):
    """
    Key-value store for shop configuration.

    Examples: shop_name, shop_address, shop_phone, shop_gstin, upi_id,
    low_stock_alert_email
    """

    key = models.CharField(max_length=100, unique=True)
    value = models.TextField()
    description = models.CharField(max_length=255, blank=True)

    class Meta:
        verbose_name = "Setting"
        verbose_name_plural = "Settings"

    def __str__(self):
        return f"{self.key} = {self.value[:50]}"

    @classmethod
    def get(cls, key, default=""):
        try:
            return cls.objects.get(key=key).value
        except cls.DoesNotExist:
            return default
