from django import forms

from core.forms import DefaultsFormMixin

from .models import Appointment, AppointmentStatus

APPOINTMENT_FIELDS = [
    "customer_name", "phone", "vehicle_info", "plate_number",
    "service_type", "date", "time_slot", "notes", "status",
]


class AppointmentForm(DefaultsFormMixin, forms.ModelForm):
    field_defaults = {"status": AppointmentStatus.SCHEDULED}

    class Meta:
        model = Appointment
        fields = APPOINTMENT_FIELDS

    def clean_status(self):
        status = self.cleaned_data.get("status")
        if status == AppointmentStatus.CONVERTED:
            raise forms.ValidationError("Use the convert endpoint to convert an appointment")
        return status
