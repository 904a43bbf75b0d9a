"""Technician roster endpoints."""

from django.http import JsonResponse

from core.api import api_view, form_error_response
from core.exceptions import get_or_not_found

from .forms import TechnicianForm
from .models import Technician, technician_workload


def technician_to_dict(technician):
    return {
        "id": technician.pk,
        "name": technician.name,
        "specialty": technician.specialty,
        "phone": technician.phone,
        "status": technician.status,
    }


@api_view("GET", "POST")
def technician_list(request):
    if request.method == "GET":
        return JsonResponse([technician_to_dict(t) for t in Technician.objects.all()], safe=False)

    form = TechnicianForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    technician = form.save()
    return JsonResponse(technician_to_dict(technician), status=201)


@api_view("PATCH")
def technician_update(request, pk):
    technician = get_or_not_found(Technician.objects, "Technician", pk)
    data = {**technician_to_dict(technician), **request.json}
    form = TechnicianForm(data, instance=technician)
    if not form.is_valid():
        return form_error_response(form)
    return JsonResponse(technician_to_dict(form.save()))


@api_view("GET")
def workload(request):
    rows = [
        {"technician": technician_to_dict(row["technician"]), "job_count": row["job_count"]}
        for row in technician_workload()
    ]
    return JsonResponse(rows, safe=False)
