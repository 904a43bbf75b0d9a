"""Appointment endpoints — list by date, book, update, convert to a job."""

from django.http import JsonResponse
from django.utils.dateparse import parse_date

from core.api import api_view, error_response, form_error_response
from core.exceptions import Conflict, get_or_not_found

from .forms import AppointmentForm
from .models import CLOSED_STATUSES, Appointment
from .services import convert_appointment_to_job


def appointment_to_dict(appointment):
    return {
        "id": appointment.pk,
        "customer_name": appointment.customer_name,
        "phone": appointment.phone,
        "vehicle_info": appointment.vehicle_info,
        "plate_number": appointment.plate_number,
        "service_type": appointment.service_type,
        "date": appointment.date,
        "time_slot": appointment.time_slot,
        "notes": appointment.notes,
        "status": appointment.status,
        "customer_id": appointment.customer_id,
        "job_id": appointment.job_id,
    }


@api_view("GET", "POST")
def appointment_list(request):
    if request.method == "GET":
        appointments = Appointment.objects.all()
        if request.GET.get("date"):
            day = parse_date(request.GET["date"])
            if day is None:
                return error_response("date must be YYYY-MM-DD", 400)
            appointments = appointments.filter(date=day)
        if request.GET.get("status"):
            appointments = appointments.filter(status=request.GET["status"])
        return JsonResponse([appointment_to_dict(a) for a in appointments], safe=False)

    form = AppointmentForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    return JsonResponse(appointment_to_dict(form.save()), status=201)


@api_view("GET", "PATCH")
def appointment_detail(request, pk):
    appointment = get_or_not_found(Appointment.objects, "Appointment", pk)
    if request.method == "GET":
        return JsonResponse(appointment_to_dict(appointment))

    if appointment.status in CLOSED_STATUSES:
        raise Conflict(f"Appointment {appointment.pk} is {appointment.status.lower()}")
    data = {**appointment_to_dict(appointment), **request.json}
    form = AppointmentForm(data, instance=appointment)
    if not form.is_valid():
        return form_error_response(form)
    return JsonResponse(appointment_to_dict(form.save()))


@api_view("POST")
def appointment_convert(request, pk):
    from jobs.views import job_to_dict

    job = convert_appointment_to_job(pk)
    return JsonResponse(job_to_dict(job, detail=True), status=201)
