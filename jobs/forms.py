from decimal import Decimal

from django import forms

from core.forms import DefaultsFormMixin
from payments.models import PaymentMode

from .models import JobStage, ServiceItem


class JobCreateForm(DefaultsFormMixin, forms.Form):
    customer = forms.IntegerField()
    vehicle_index = forms.IntegerField(min_value=0)
    service_cost = forms.DecimalField(min_value=0)
    labor_cost = forms.DecimalField(min_value=0)
    total_amount = forms.DecimalField(required=False, min_value=0)
    technician = forms.IntegerField(required=False)
    notes = forms.CharField(required=False)

    field_defaults = {"service_cost": Decimal("0"), "labor_cost": Decimal("0")}


class ServiceItemForm(forms.Form):
    description = forms.CharField(max_length=255)
    cost = forms.DecimalField(min_value=0)
    type = forms.ChoiceField(choices=ServiceItem.ItemType.choices, required=False)


class JobUpdateForm(forms.Form):
    """Editable job details; stage, money and payments have their own endpoints."""

    notes = forms.CharField(required=False)
    technician = forms.IntegerField(required=False)
    checklist = forms.JSONField(required=False)

    def __init__(self, data, *args, **kwargs):
        super().__init__(data, *args, **kwargs)
        for name in list(self.fields):
            if name not in data:
                del self.fields[name]


class ServiceIntakeForm(DefaultsFormMixin, forms.Form):
    """PPF selection plus the shared pricing knobs; other services come as a list."""

    customer = forms.IntegerField(required=False)
    vehicle_index = forms.IntegerField(min_value=0)
    ppf_category = forms.CharField(required=False)
    ppf_vehicle_type = forms.CharField(required=False)
    ppf_warranty = forms.CharField(required=False)
    discount_pct = forms.DecimalField(min_value=0, max_value=100)
    labor_cost = forms.DecimalField(min_value=0)
    technician = forms.IntegerField(required=False)
    notes = forms.CharField(required=False)

    field_defaults = {"vehicle_index": 0, "discount_pct": Decimal("0"), "labor_cost": Decimal("0")}

    def clean(self):
        cleaned_data = super().clean()
        ppf_keys = ("ppf_category", "ppf_vehicle_type", "ppf_warranty")
        given = [key for key in ppf_keys if cleaned_data.get(key)]
        if given and len(given) != len(ppf_keys):
            raise forms.ValidationError("PPF needs category, vehicle type and warranty")
        cleaned_data["ppf"] = (
            {
                "category": cleaned_data["ppf_category"],
                "vehicle_type": cleaned_data["ppf_vehicle_type"],
                "warranty": cleaned_data["ppf_warranty"],
            }
            if given
            else None
        )
        return cleaned_data


class OtherServiceForm(forms.Form):
    name = forms.CharField()
    vehicle_type = forms.CharField()


class StageForm(forms.Form):
    stage = forms.ChoiceField(choices=JobStage.choices)
    note = forms.CharField(required=False)


class MaterialLineForm(forms.Form):
    inventory_id = forms.IntegerField()
    quantity = forms.DecimalField(min_value=Decimal("0.001"))


class PaymentForm(forms.Form):
    amount = forms.DecimalField(min_value=Decimal("0.0001"))
    mode = forms.ChoiceField(choices=PaymentMode.choices)
    notes = forms.CharField(required=False, max_length=255)
