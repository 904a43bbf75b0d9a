from django import forms

from core.forms import DefaultsFormMixin

from .models import Technician, TechnicianStatus


class TechnicianForm(DefaultsFormMixin, forms.ModelForm):
    field_defaults = {"status": TechnicianStatus.AVAILABLE}

    class Meta:
        model = Technician
        fields = ["name", "specialty", "phone", "status"]
