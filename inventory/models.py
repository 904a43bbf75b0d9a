"""
Inventory models.

InventoryItem is the stock ledger: quantities move through adjust() or
material consumption on a job. MaterialUsage records what a job consumed.
Low-stock alerts use the min_stock threshold.
"""

from django.db import models
from django.db.models import F


class InventoryCategory(models.TextChoices):
    PPF = "PPF", "PPF"
    CERAMIC = "Ceramic", "Ceramic"
    TOOLS = "Tools", "Tools"
    PARTS = "Parts", "Parts"
    CHEMICALS = "Chemicals", "Chemicals"


class InventoryQuerySet(models.QuerySet):
    def low_stock(self):
        return self.filter(quantity__lte=F("min_stock"))


class InventoryItem(models.Model):
    """A stock item: film rolls, coating bottles, parts, tools."""

    name = models.CharField(max_length=150, verbose_name="Name")
    category = models.CharField(
        max_length=20, choices=InventoryCategory.choices, verbose_name="Category"
    )
    quantity = models.DecimalField(
        max_digits=12, decimal_places=3, default=0, verbose_name="In stock"
    )
    unit = models.CharField(max_length=20, verbose_name="Unit", help_text="e.g. roll, bottle, piece")
    min_stock = models.DecimalField(
        max_digits=12, decimal_places=3, default=0, verbose_name="Minimum stock"
    )
    price = models.DecimalField(
        max_digits=14, decimal_places=4, default=0, verbose_name="Price / unit (₹)"
    )
    created_at = models.DateTimeField(auto_now_add=True)

    objects = InventoryQuerySet.as_manager()

    class Meta:
        verbose_name = "Inventory item"
        verbose_name_plural = "Inventory"
        ordering = ["category", "name"]

    def __str__(self):
        return f"{self.name} ({self.quantity} {self.unit})"

    @property
    def is_low_stock(self):
        return self.quantity <= self.min_stock


class MaterialUsage(models.Model):
    """Material consumed by a job. Cost is informational and never invoiced."""

    job = models.ForeignKey(
        "jobs.Job",
        on_delete=models.CASCADE,
        related_name="materials",
        verbose_name="Job",
    )
    item = models.ForeignKey(
        InventoryItem,
        on_delete=models.PROTECT,
        related_name="usages",
        verbose_name="Item",
    )
    name = models.CharField(max_length=150, verbose_name="Name")
    quantity = models.DecimalField(max_digits=12, decimal_places=3, verbose_name="Quantity")
    cost = models.DecimalField(max_digits=14, decimal_places=4, verbose_name="Cost")
    recorded_at = models.DateTimeField(auto_now_add=True)

    class Meta:
        verbose_name = "Material usage"
        verbose_name_plural = "Material usage"
        ordering = ["id"]

    def __str__(self):
        return f"{self.name} × {self.quantity}"
