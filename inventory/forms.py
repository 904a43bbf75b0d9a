from decimal import Decimal

from django import forms

from core.forms import DefaultsFormMixin

from .models import InventoryItem


class InventoryItemForm(DefaultsFormMixin, forms.ModelForm):
    field_defaults = {"quantity": Decimal("0"), "min_stock": Decimal("0"), "price": Decimal("0")}

    class Meta:
        model = InventoryItem
        fields = ["name", "category", "quantity", "unit", "min_stock", "price"]


class AdjustForm(forms.Form):
    quantity = forms.DecimalField(max_digits=12, decimal_places=3)
