from decimal import Decimal

from django import forms

from core.forms import DefaultsFormMixin

from .models import Customer, CustomerStatus, Vehicle

CUSTOMER_FIELDS = ["name", "phone", "email", "address", "status", "service", "service_cost"]


class CustomerForm(DefaultsFormMixin, forms.ModelForm):
    field_defaults = {"status": CustomerStatus.INQUIRED, "service_cost": Decimal("0")}

    class Meta:
        model = Customer
        fields = CUSTOMER_FIELDS


class CustomerUpdateForm(forms.ModelForm):
    """Partial update: only the submitted keys are validated and applied."""

    class Meta:
        model = Customer
        fields = CUSTOMER_FIELDS

    def __init__(self, data, *args, **kwargs):
        super().__init__(data, *args, **kwargs)
        for name in list(self.fields):
            if name not in data:
                del self.fields[name]


class VehicleForm(forms.ModelForm):
    class Meta:
        model = Vehicle
        fields = [
            "make", "model", "year", "plate_number", "color", "vin",
            "ppf_category", "ppf_vehicle_type", "ppf_warranty",
        ]
