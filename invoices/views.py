"""Invoice endpoints — list, detail, issue for a job, record payment, PDF, send."""

from django.http import HttpResponse, JsonResponse
from django.template.loader import render_to_string

from core.api import api_view, form_error_response
from core.exceptions import ExternalDispatchFailure, get_or_not_found

from . import services
from .forms import GenerateInvoiceForm, InvoicePaymentForm
from .models import Invoice


def invoice_to_dict(invoice):
    return {
        "id": invoice.pk,
        "invoice_number": invoice.invoice_number,
        "job_id": invoice.job_id,
        "customer_id": invoice.customer_id,
        "customer_name": invoice.customer_name,
        "customer_phone": invoice.customer_phone,
        "customer_email": invoice.customer_email,
        "customer_address": invoice.customer_address,
        "vehicle_name": invoice.vehicle_name,
        "plate_number": invoice.plate_number,
        "items": [
            {
                "description": item.description,
                "quantity": item.quantity,
                "unit_price": item.unit_price,
                "total": item.total,
                "type": item.item_type,
            }
            for item in invoice.items.all()
        ],
        "subtotal": invoice.subtotal,
        "tax_rate": invoice.tax_rate,
        "tax": invoice.tax,
        "discount": invoice.discount,
        "total_amount": invoice.total_amount,
        "paid_amount": invoice.paid_amount,
        "payment_status": invoice.payment_status,
        "notes": invoice.notes,
        "created_at": invoice.created_at,
    }


@api_view("GET")
def invoice_list(request):
    invoices = Invoice.objects.prefetch_related("items")
    if request.GET.get("customer"):
        invoices = invoices.filter(customer_id=request.GET["customer"])
    if request.GET.get("payment_status"):
        invoices = invoices.filter(payment_status=request.GET["payment_status"])
    return JsonResponse([invoice_to_dict(i) for i in invoices], safe=False)


@api_view("GET")
def invoice_detail(request, pk):
    invoice = get_or_not_found(Invoice.objects.prefetch_related("items"), "Invoice", pk)
    return JsonResponse(invoice_to_dict(invoice))


@api_view("POST")
def invoice_for_job(request, job_id):
    """Issue (or fetch) the invoice of a job."""
    form = GenerateInvoiceForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    invoice = services.generate_invoice_for_job(
        job_id,
        tax_rate=form.cleaned_data["tax_rate"],
        discount=form.cleaned_data["discount"] or 0,
    )
    return JsonResponse(invoice_to_dict(invoice), status=201)


@api_view("POST")
def invoice_pay(request, pk):
    form = InvoicePaymentForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    invoice = services.mark_invoice_paid(pk, form.cleaned_data["amount"])
    return JsonResponse(invoice_to_dict(invoice))


@api_view("POST")
def invoice_send(request, pk):
    if not services.send_invoice(pk):
        raise ExternalDispatchFailure(f"Invoice {pk} could not be sent over WhatsApp")
    return JsonResponse({"sent": True})


@api_view("GET")
def invoice_pdf(request, pk):
    """Render the invoice as PDF via WeasyPrint, with a UPI QR for the balance."""
    from weasyprint import HTML

    invoice = get_or_not_found(Invoice.objects.prefetch_related("items"), "Invoice", pk)
    html_string = render_to_string(
        "invoices/pdf/invoice.html",
        {
            "invoice": invoice,
            "shop": services.shop_info(),
            "qr_b64": services.upi_qr_b64(invoice),
        },
        request=request,
    )
    pdf = HTML(string=html_string, base_url=request.build_absolute_uri("/")).write_pdf()
    response = HttpResponse(pdf, content_type="application/pdf")
    response["Content-Disposition"] = f'inline; filename="{invoice.invoice_number}.pdf"'
    return response
