"""Job endpoints — list/create, intake, detail, stage moves, materials, payments."""

from django.db.models import Q
from django.http import JsonResponse

from core.api import api_view, error_response, form_error_response
from core.exceptions import get_or_not_found
from customers.models import Customer

from . import services
from .forms import (
    JobCreateForm,
    JobUpdateForm,
    MaterialLineForm,
    OtherServiceForm,
    PaymentForm,
    ServiceIntakeForm,
    ServiceItemForm,
    StageForm,
)
from .models import Job
from .pricing import get_price_book, quote_service


def job_to_dict(job, detail=False):
    data = {
        "id": job.pk,
        "customer_id": job.customer_id,
        "customer_name": job.customer_name,
        "vehicle_id": str(job.vehicle.uid),
        "vehicle_index": job.vehicle_index,
        "vehicle_name": job.vehicle_name,
        "plate_number": job.plate_number,
        "technician_id": job.technician_id,
        "technician_name": job.technician_name,
        "stage": job.stage,
        "notes": job.notes,
        "service_cost": job.service_cost,
        "labor_cost": job.labor_cost,
        "total_amount": job.total_amount,
        "paid_amount": job.paid_amount,
        "payment_status": job.payment_status,
        "created_at": job.created_at,
        "updated_at": job.updated_at,
    }
    if detail:
        data["checklist"] = job.checklist
        data["service_items"] = [
            {"description": item.description, "cost": item.cost, "type": item.item_type}
            for item in job.service_items.all()
        ]
        data["materials"] = [
            {
                "inventory_id": usage.item_id,
                "name": usage.name,
                "quantity": usage.quantity,
                "cost": usage.cost,
            }
            for usage in job.materials.all()
        ]
        data["payments"] = [payment_to_dict(p) for p in job.payments.all()]
        data["stage_history"] = [
            {"from": h.from_stage, "to": h.to_stage, "note": h.note, "changed_at": h.changed_at}
            for h in job.stage_history.all()
        ]
        data["invoice_id"] = getattr(getattr(job, "invoice", None), "pk", None)
    return data


def payment_to_dict(payment):
    return {
        "id": payment.pk,
        "amount": payment.amount,
        "mode": payment.mode,
        "notes": payment.notes,
        "received_at": payment.received_at,
    }


def _clean_list(form_class, rows):
    """Validate each row with ``form_class``; returns (cleaned rows, failing form)."""
    cleaned = []
    for row in rows or []:
        form = form_class(row if isinstance(row, dict) else {})
        if not form.is_valid():
            return None, form
        cleaned.append(form.cleaned_data)
    return cleaned, None


@api_view("GET", "POST")
def job_list(request):
    if request.method == "GET":
        jobs = Job.objects.select_related("vehicle")
        if request.GET.get("stage"):
            jobs = jobs.filter(stage=request.GET["stage"])
        if request.GET.get("customer"):
            jobs = jobs.filter(customer_id=request.GET["customer"])
        if request.GET.get("technician"):
            jobs = jobs.filter(technician_id=request.GET["technician"])
        q = request.GET.get("search", "").strip()
        if q:
            jobs = jobs.filter(
                Q(customer_name__icontains=q) | Q(plate_number__icontains=q) | Q(vehicle_name__icontains=q)
            )
        return JsonResponse([job_to_dict(job) for job in jobs], safe=False)

    form = JobCreateForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    items, bad_form = _clean_list(ServiceItemForm, request.json.get("service_items"))
    if bad_form:
        return form_error_response(bad_form)

    data = form.cleaned_data
    customer = get_or_not_found(Customer.objects, "Customer", data["customer"])
    technician = None
    if data["technician"]:
        from technicians.models import Technician

        technician = get_or_not_found(Technician.objects, "Technician", data["technician"])
    job = services.create_job(
        customer,
        data["vehicle_index"],
        service_cost=data["service_cost"],
        labor_cost=data["labor_cost"],
        service_items=items,
        total_amount=data["total_amount"],
        technician=technician,
        notes=data["notes"],
        checklist=request.json.get("checklist"),
    )
    return JsonResponse(job_to_dict(job, detail=True), status=201)


def _intake_args(request):
    """Validated intake fields plus the pricing kwargs for quote_service."""
    form = ServiceIntakeForm(request.json)
    if not form.is_valid():
        return None, None, form
    other_services, bad_form = _clean_list(OtherServiceForm, request.json.get("other_services"))
    if bad_form:
        return None, None, bad_form
    data = form.cleaned_data
    return data, {
        "ppf": data["ppf"],
        "other_services": other_services,
        "discount_pct": data["discount_pct"],
        "labor_cost": data["labor_cost"],
    }, None


@api_view("POST")
def price_quote(request):
    """Preview an intake price without creating anything."""
    _, args, bad_form = _intake_args(request)
    if bad_form:
        return form_error_response(bad_form)
    quote = quote_service(get_price_book(), **args)
    return JsonResponse(
        {
            "service_label": quote.service_label,
            "lines": [{"description": label, "price": price} for label, price in quote.lines],
            "total_service_cost": quote.total_service_cost,
            "discounted_service_cost": quote.discounted_service_cost,
            "labor_cost": quote.labor_cost,
            "subtotal": quote.subtotal,
            "tax": quote.tax,
            "total_amount": quote.total_amount,
            "is_billable": quote.is_billable,
        }
    )


@api_view("GET")
def price_book(request):
    book = get_price_book()
    return JsonResponse(
        {
            "ppf": {c: {t: dict(w) for t, w in types.items()} for c, types in book.ppf.items()},
            "other_services": {name: dict(prices) for name, prices in book.other_services.items()},
        }
    )


@api_view("POST")
def service_intake(request):
    """
    Register a service request: an existing ``customer`` id, or ``name`` /
    ``phone`` / ``vehicle`` for a new customer.
    """
    from customers.forms import CustomerForm, VehicleForm

    data, args, bad_form = _intake_args(request)
    if bad_form:
        return form_error_response(bad_form)

    new_customer = None
    if data["customer"] is None:
        customer_form = CustomerForm(request.json)
        if not customer_form.is_valid():
            return form_error_response(customer_form)
        vehicle_form = VehicleForm(request.json.get("vehicle") or {})
        if not request.json.get("vehicle") or not vehicle_form.is_valid():
            return error_response("A new customer needs a vehicle", 400)
        new_customer = {**customer_form.cleaned_data, "vehicle": vehicle_form.cleaned_data}

    job, _ = services.create_service_job(
        data["customer"],
        data["vehicle_index"],
        new_customer=new_customer,
        technician_id=data["technician"],
        notes=data["notes"],
        **args,
    )
    return JsonResponse(job_to_dict(job, detail=True), status=201)


@api_view("GET", "PATCH")
def job_detail(request, pk):
    if request.method == "PATCH":
        form = JobUpdateForm(request.json)
        if not form.is_valid():
            return form_error_response(form)
        data = form.cleaned_data
        if "technician" in data:
            services.assign_technician(pk, data.pop("technician"))
        if data:
            job = services.get_job(pk)
            for name, value in data.items():
                setattr(job, name, value if value is not None else ([] if name == "checklist" else ""))
            job.save(update_fields=[*data, "updated_at"])

    job = get_or_not_found(
        Job.objects.select_related("vehicle").prefetch_related(
            "service_items", "materials", "payments", "stage_history"
        ),
        "Job",
        pk,
    )
    return JsonResponse(job_to_dict(job, detail=True))


@api_view("POST", "PATCH")
def job_stage(request, pk):
    form = StageForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    job = services.update_job_stage(pk, form.cleaned_data["stage"], form.cleaned_data["note"])
    return JsonResponse(job_to_dict(job))


@api_view("POST")
def job_materials(request, pk):
    lines, bad_form = _clean_list(MaterialLineForm, request.json.get("materials"))
    if bad_form:
        return form_error_response(bad_form)
    job = services.add_materials_to_job(pk, lines)
    return JsonResponse(job_to_dict(job))


@api_view("GET", "POST")
def job_payments(request, pk):
    if request.method == "GET":
        job = services.get_job(pk)
        return JsonResponse([payment_to_dict(p) for p in job.payments.all()], safe=False)

    form = PaymentForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    job = services.add_payment_to_job(pk, **form.cleaned_data)
    return JsonResponse(job_to_dict(job))
