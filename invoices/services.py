"""
Invoice ledger operations.

A job gets at most one invoice. Payments recorded on either side are mirrored
onto the other, each side capped at its own remaining balance. Locks are
always taken job first, then invoice.
"""

import base64
import io
import logging
from decimal import Decimal
from urllib.parse import quote

from django.conf import settings
from django.db import transaction

from core.exceptions import NotFound, ValidationFailed, get_or_not_found
from jobs.models import Job
from jobs.services import apply_job_payment, to_decimal
from payments.models import PaymentMode

from .models import Invoice, InvoiceItem, Setting

logger = logging.getLogger(__name__)


def generate_invoice_for_job(job_id, tax_rate=None, discount=0):
    """
    Issue the invoice for a job, or return the one it already has.

    Lines are the service charge and the labor charge (zero lines skipped).
    Materials and service items stay on the job and are not invoiced.
    """
    tax_rate = to_decimal(settings.GARAGE_DEFAULT_TAX_RATE if tax_rate is None else tax_rate, "tax rate")
    discount = to_decimal(discount, "discount")
    if tax_rate < 0:
        raise ValidationFailed("Tax rate cannot be negative")
    if discount < 0:
        raise ValidationFailed("Discount cannot be negative")

    with transaction.atomic():
        job = get_or_not_found(Job.objects.select_for_update().select_related("customer"), "Job", job_id)
        existing = Invoice.objects.filter(job=job).first()
        if existing:
            return existing

        lines = [
            (description, amount)
            for description, amount in (("Service Charge", job.service_cost), ("Labor Charge", job.labor_cost))
            if amount > 0
        ]
        subtotal = sum((amount for _, amount in lines), Decimal("0"))
        tax = subtotal * tax_rate / 100
        total = subtotal + tax - discount
        if total < 0:
            raise ValidationFailed("Discount is larger than the invoice amount")

        customer = job.customer
        invoice = Invoice(
            job=job,
            customer=customer,
            customer_name=customer.name,
            customer_phone=customer.phone,
            customer_email=customer.email,
            customer_address=customer.address,
            vehicle_name=job.vehicle_name,
            plate_number=job.plate_number,
            subtotal=subtotal,
            tax_rate=tax_rate,
            tax=tax,
            discount=discount,
            total_amount=total,
            paid_amount=min(job.paid_amount, total),
        )
        invoice.refresh_payment_status()
        invoice.save()
        for description, amount in lines:
            InvoiceItem.objects.create(
                invoice=invoice,
                description=description,
                quantity=1,
                unit_price=amount,
                item_type=InvoiceItem.ItemType.SERVICE,
            )

    invoice.refresh_from_db()
    logger.info("Issued invoice %s for job %s", invoice.invoice_number, job.pk)
    return invoice


def apply_invoice_payment(invoice, amount):
    """Apply up to ``amount`` to a locked invoice; returns what was applied."""
    applied = min(amount, invoice.remaining_balance)
    if applied <= 0:
        return Decimal("0")
    invoice.paid_amount += applied
    invoice.refresh_payment_status()
    invoice.save(update_fields=["paid_amount", "payment_status"])
    return applied


def mark_invoice_paid(invoice_id, amount=None):
    """
    Record a payment against an invoice; ``None`` settles the remaining balance.

    The same amount is recorded on the job as a Cash payment. Nothing happens
    when the invoice is already fully paid.
    """
    if amount is not None:
        amount = to_decimal(amount)
        if amount <= 0:
            raise ValidationFailed("Payment amount must be greater than zero")

    with transaction.atomic():
        job_id = Invoice.objects.filter(pk=invoice_id).values_list("job_id", flat=True).first()
        if job_id is None:
            raise NotFound(f"Invoice {invoice_id} not found")
        job = Job.objects.select_for_update().get(pk=job_id)
        invoice = Invoice.objects.select_for_update().get(pk=invoice_id)

        remaining = invoice.remaining_balance
        if remaining <= 0:
            return invoice
        applied = apply_invoice_payment(invoice, remaining if amount is None else amount)
        apply_job_payment(job, applied, PaymentMode.CASH, f"Invoice {invoice.invoice_number} payment")

    logger.info("Invoice %s received %s", invoice.invoice_number, applied)
    return invoice


def shop_info():
    return {
        key: Setting.get(f"shop_{key}", default)
        for key, default in (("name", "Garage"), ("address", ""), ("phone", ""), ("gstin", ""))
    }


def upi_payment_uri(invoice):
    """UPI deep link for the invoice's remaining balance, or "" without a UPI id."""
    upi_id = Setting.get("upi_id", "")
    if not upi_id:
        return ""
    return (
        f"upi://pay?pa={quote(upi_id)}&pn={quote(shop_info()['name'])}"
        f"&am={invoice.remaining_balance:.2f}&cu=INR&tn={quote(invoice.invoice_number)}"
    )


def upi_qr_b64(invoice):
    """Base64 PNG of the UPI QR code, for embedding in the PDF."""
    import qrcode

    uri = upi_payment_uri(invoice)
    if not uri:
        return ""
    buf = io.BytesIO()
    qrcode.make(uri).save(buf, format="PNG")
    return base64.b64encode(buf.getvalue()).decode()


def render_invoice_text(invoice):
    """Plain-text invoice summary sent to the customer over WhatsApp."""
    from dashboard.templatetags.inr_filters import inr

    shop = shop_info()
    lines = [
        f"*{shop['name']}*",
        f"Invoice {invoice.invoice_number}",
        f"{invoice.vehicle_name} ({invoice.plate_number})",
        "",
    ]
    lines += [f"{item.description}: {inr(item.total)}" for item in invoice.items.all()]
    lines += [
        "",
        f"Subtotal: {inr(invoice.subtotal)}",
        f"GST ({invoice.tax_rate.normalize():f}%): {inr(invoice.tax)}",
    ]
    if invoice.discount:
        lines.append(f"Discount: -{inr(invoice.discount)}")
    lines += [
        f"Total: {inr(invoice.total_amount)}",
        f"Paid: {inr(invoice.paid_amount)}",
        f"Balance: {inr(invoice.remaining_balance)}",
    ]
    upi_id = Setting.get("upi_id", "")
    if upi_id and invoice.remaining_balance > 0:
        lines.append(f"Pay by UPI: {upi_id}")
    return "\n".join(lines)


def send_invoice(invoice_id):
    """Send the invoice summary to the customer's phone; returns success."""
    from notifications.models import NotificationLog
    from notifications.service import dispatch

    invoice = get_or_not_found(Invoice.objects.select_related("job"), "Invoice", invoice_id)
    return dispatch(
        invoice.customer_phone,
        render_invoice_text(invoice),
        job=invoice.job,
        message_type=NotificationLog.MessageType.INVOICE,
    )
