"""Customer directory JSON endpoints — list/search, create, update, vehicles."""

from django.http import JsonResponse

from core.api import api_view, error_response, form_error_response

from . import services
from .forms import CustomerForm, CustomerUpdateForm, VehicleForm


def vehicle_to_dict(vehicle):
    return {
        "id": str(vehicle.uid),
        "index": vehicle.position,
        "make": vehicle.make,
        "model": vehicle.model,
        "year": vehicle.year,
        "plate_number": vehicle.plate_number,
        "color": vehicle.color,
        "vin": vehicle.vin,
        "ppf_category": vehicle.ppf_category,
        "ppf_vehicle_type": vehicle.ppf_vehicle_type,
        "ppf_warranty": vehicle.ppf_warranty,
    }


def customer_to_dict(customer):
    return {
        "id": customer.pk,
        "name": customer.name,
        "phone": customer.phone,
        "email": customer.email,
        "address": customer.address,
        "status": customer.status,
        "service": customer.service,
        "service_cost": customer.service_cost,
        "vehicles": [vehicle_to_dict(v) for v in customer.vehicles.all()],
        "created_at": customer.created_at,
    }


@api_view("GET", "POST")
def customer_list(request):
    if request.method == "GET":
        customers = services.search_customers(request.GET.get("search", ""))
        return JsonResponse([customer_to_dict(c) for c in customers], safe=False)

    form = CustomerForm(request.json)
    if not form.is_valid():
        return form_error_response(form)

    vehicles = []
    for vehicle in request.json.get("vehicles", []):
        vehicle_form = VehicleForm(vehicle)
        if not vehicle_form.is_valid():
            return form_error_response(vehicle_form)
        vehicles.append(vehicle_form.cleaned_data)

    customer = services.create_customer(vehicles=vehicles, **form.cleaned_data)
    return JsonResponse(customer_to_dict(customer), status=201)


@api_view("GET", "PATCH")
def customer_detail(request, pk):
    if request.method == "GET":
        return JsonResponse(customer_to_dict(services.get_customer(pk)))

    form = CustomerUpdateForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    if not form.cleaned_data:
        return error_response("Nothing to update", 400)
    customer = services.update_customer(pk, **form.cleaned_data)
    return JsonResponse(customer_to_dict(customer))


@api_view("POST")
def customer_add_vehicle(request, pk):
    form = VehicleForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    customer = services.add_vehicle(pk, form.cleaned_data)
    return JsonResponse(customer_to_dict(customer))


@api_view("GET")
def customer_jobs(request, pk):
    from jobs.views import job_to_dict

    customer = services.get_customer(pk)
    jobs = customer.jobs.order_by("-created_at")
    return JsonResponse([job_to_dict(job) for job in jobs], safe=False)
