"""
Job pipeline operations: creation, intake pricing, stage changes, material
consumption and payments.

Every multi-record flow runs inside one transaction with the job row locked
(SELECT FOR UPDATE), so concurrent payments on the same job are serialized.
Notifications are sent after the transaction and never fail the operation.
"""

import logging
from decimal import Decimal, InvalidOperation

from django.db import transaction

from core.exceptions import GarageError, NotFound, ValidationFailed, get_or_not_found
from inventory.models import InventoryItem, MaterialUsage
from payments.models import Payment, PaymentMode

from .models import TERMINAL_STAGES, Job, JobStage, ServiceItem
from .pricing import get_price_book, quote_service

logger = logging.getLogger(__name__)


def to_decimal(value, label="amount"):
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError, TypeError):
        raise ValidationFailed(f"Invalid {label}: {value!r}")


def get_job(job_id, for_update=False):
    jobs = Job.objects.select_for_update() if for_update else Job.objects.all()
    return get_or_not_found(jobs, "Job", job_id)


def create_job(
    customer,
    vehicle_index,
    *,
    service_cost=0,
    labor_cost=0,
    service_items=(),
    total_amount=None,
    technician=None,
    notes="",
    checklist=None,
    vehicle_name=None,
    notify=True,
):
    """
    Open a job in New Lead on one of the customer's vehicles.

    ``total_amount`` defaults to service cost + labor cost + service items.
    The New Lead notification is sent once the job is saved; callers that
    open their own transaction pass ``notify=False`` and call
    ``notify_stage`` after it commits.
    """
    vehicle = customer.vehicle_at(vehicle_index)
    if vehicle is None:
        raise ValidationFailed(f"Customer {customer.pk} has no vehicle at index {vehicle_index}")

    service_cost = to_decimal(service_cost, "service cost")
    labor_cost = to_decimal(labor_cost, "labor cost")
    items = [
        ServiceItem(
            description=item["description"],
            cost=to_decimal(item["cost"], "item cost"),
            item_type=item.get("item_type") or item.get("type") or ServiceItem.ItemType.PART,
        )
        for item in service_items
    ]
    if service_cost < 0 or labor_cost < 0 or any(item.cost < 0 for item in items):
        raise ValidationFailed("Costs cannot be negative")
    if total_amount is None:
        total_amount = service_cost + labor_cost + sum((item.cost for item in items), Decimal("0"))

    with transaction.atomic():
        job = Job(
            customer=customer,
            vehicle=vehicle,
            vehicle_index=vehicle_index,
            customer_name=customer.name,
            vehicle_name=vehicle_name or vehicle.display_name,
            plate_number=vehicle.plate_number,
            technician=technician,
            technician_name=technician.name if technician else "",
            notes=notes,
            checklist=checklist or [],
            stage=JobStage.NEW_LEAD,
            service_cost=service_cost,
            labor_cost=labor_cost,
            total_amount=to_decimal(total_amount, "total amount"),
        )
        job.refresh_payment_status()
        job.save()
        for item in items:
            item.job = job
        ServiceItem.objects.bulk_create(items)

    job.refresh_from_db()
    logger.info("Created job %s for customer %s (%s)", job.pk, customer.pk, job.plate_number)
    if notify:
        notify_stage(job)
    return job


def create_service_job(
    customer_id=None,
    vehicle_index=0,
    *,
    new_customer=None,
    ppf=None,
    other_services=(),
    discount_pct=0,
    labor_cost=0,
    technician_id=None,
    notes="",
    price_book=None,
):
    """
    Customer-service intake: price the selection and open a job for it.

    Either ``customer_id`` names an existing customer or ``new_customer``
    (name, phone, optional email/address and a ``vehicle`` dict) registers
    one, whose vehicle becomes index 0. The selection is priced before
    anything is written; it is refused when neither the discounted service
    cost nor the labor cost is positive. Returns ``(job, quote)``.
    """
    from customers.models import Customer
    from customers.services import create_customer
    from technicians.models import Technician

    quote = quote_service(
        price_book or get_price_book(),
        ppf=ppf,
        other_services=other_services,
        discount_pct=discount_pct,
        labor_cost=labor_cost,
    )
    if not quote.is_billable:
        raise ValidationFailed("Nothing billable: service cost and labor cost are both zero")

    technician = None
    if technician_id:
        technician = get_or_not_found(Technician.objects, "Technician", technician_id)

    with transaction.atomic():
        if customer_id is not None:
            customer = get_or_not_found(Customer.objects, "Customer", customer_id)
        elif new_customer:
            fields = dict(new_customer)
            vehicle = fields.pop("vehicle", None)
            if not vehicle:
                raise ValidationFailed("A new customer needs a vehicle")
            customer = create_customer(vehicles=[vehicle], **fields)
            vehicle_index = 0
        else:
            raise ValidationFailed("Give an existing customer or the details of a new one")

        job = create_job(
            customer,
            vehicle_index,
            service_cost=quote.discounted_service_cost,
            labor_cost=quote.labor_cost,
            total_amount=quote.total_amount,
            technician=technician,
            notes=notes,
            notify=False,
        )

        customer.service = quote.service_label
        customer.service_cost = quote.total_service_cost
        customer.save(update_fields=["service", "service_cost", "updated_at"])
        if ppf:
            vehicle = job.vehicle
            vehicle.ppf_category = ppf["category"]
            vehicle.ppf_vehicle_type = ppf["vehicle_type"]
            vehicle.ppf_warranty = ppf["warranty"]
            vehicle.save(update_fields=["ppf_category", "ppf_vehicle_type", "ppf_warranty"])

    notify_stage(job)
    return job, quote


def update_job_stage(job_id, stage, note=""):
    """
    Move a job to ``stage``.

    Raises Conflict once the job has an invoice. Reaching Completed issues the
    invoice (18% GST, no discount) in the same transaction.
    """
    with transaction.atomic():
        job = get_job(job_id, for_update=True)
        job.transition_to(stage, note=note)
        if stage == JobStage.COMPLETED:
            from invoices.services import generate_invoice_for_job

            generate_invoice_for_job(job.pk)

    logger.info("Job %s moved to %s", job.pk, stage)
    notify_stage(job)
    return job


def assign_technician(job_id, technician_id):
    from technicians.models import Technician

    with transaction.atomic():
        job = get_job(job_id, for_update=True)
        technician = None
        if technician_id:
            technician = get_or_not_found(Technician.objects, "Technician", technician_id)
        job.technician = technician
        job.technician_name = technician.name if technician else ""
        job.save(update_fields=["technician", "technician_name", "updated_at"])
    return job


def add_materials_to_job(job_id, lines):
    """
    Consume inventory on a job, all-or-nothing.

    ``lines`` is a list of ``{"inventory_id": ..., "quantity": ...}``. Every
    line is checked before anything is written; one missing item or short
    line rejects the whole batch. The job total becomes
    materials + service items + service cost. Stock is decremented in the
    same transaction, so a failed decrement leaves nothing recorded.
    """
    if not lines:
        raise ValidationFailed("No materials given")
    consumed = []
    requested = {}
    for line in lines:
        item_id = line.get("inventory_id")
        quantity = to_decimal(line.get("quantity"), "quantity")
        if quantity <= 0:
            raise ValidationFailed("Material quantity must be greater than zero")
        consumed.append((item_id, quantity))
        requested[item_id] = requested.get(item_id, Decimal("0")) + quantity

    from inventory.services import adjust_inventory

    with transaction.atomic():
        job = get_job(job_id, for_update=True)
        if job.stage in TERMINAL_STAGES:
            raise ValidationFailed(f"Cannot add materials to a {job.stage.lower()} job")

        items = InventoryItem.objects.select_for_update().in_bulk(list(requested))
        for item_id, quantity in requested.items():
            item = items.get(item_id)
            if item is None:
                raise NotFound(f"Inventory item {item_id} not found")
            if item.quantity < quantity:
                raise ValidationFailed(
                    f"Insufficient stock for {item.name}: {quantity} requested, {item.quantity} {item.unit} available"
                )

        # One usage row per requested line, repeats included
        MaterialUsage.objects.bulk_create(
            [
                MaterialUsage(
                    job=job,
                    item=items[item_id],
                    name=items[item_id].name,
                    quantity=quantity,
                    cost=items[item_id].price * quantity,
                )
                for item_id, quantity in consumed
            ]
        )

        new_total = job.recalculate_total()
        if new_total < job.paid_amount:
            raise ValidationFailed(
                f"Materials would bring the total ({new_total}) below the amount already paid ({job.paid_amount})"
            )
        job.total_amount = new_total
        job.refresh_payment_status()
        job.save(update_fields=["total_amount", "payment_status", "updated_at"])

        try:
            for item_id, quantity in requested.items():
                adjust_inventory(item_id, -quantity)
        except Exception as exc:
            logger.error("Stock decrement for job %s failed; materials rolled back: %s", job.pk, exc)
            raise GarageError(
                f"Inventory could not be decremented; no materials were recorded on job {job.pk}"
            ) from exc

    job.refresh_from_db()
    logger.info("Job %s consumed %d material line(s)", job.pk, len(consumed))
    return job


def apply_job_payment(job, amount, mode, notes=""):
    """
    Apply up to ``amount`` to a locked job; returns what was applied.

    Capped at the job's remaining balance; nothing is recorded when the job
    is already settled.
    """
    remaining = job.remaining_balance
    if remaining <= 0:
        return Decimal("0")
    applied = min(amount, remaining)
    if applied <= 0:
        return Decimal("0")

    Payment.objects.create(job=job, amount=applied, mode=mode, notes=notes)
    job.paid_amount += applied
    job.refresh_payment_status()
    job.save(update_fields=["paid_amount", "payment_status", "updated_at"])
    return applied


def add_payment_to_job(job_id, amount, mode, notes=""):
    """
    Record a payment on a job and mirror it onto the job's invoice.

    The invoice side is capped independently at its own remaining balance.
    """
    amount = to_decimal(amount)
    if amount <= 0:
        raise ValidationFailed("Payment amount must be greater than zero")
    if mode not in PaymentMode.values:
        raise ValidationFailed(f"Unknown payment mode '{mode}'")

    from invoices.models import Invoice
    from invoices.services import apply_invoice_payment

    with transaction.atomic():
        job = get_job(job_id, for_update=True)
        applied = apply_job_payment(job, amount, mode, notes)
        if applied > 0:
            invoice = Invoice.objects.select_for_update().filter(job=job).first()
            if invoice is not None:
                apply_invoice_payment(invoice, applied)

    if applied:
        logger.info("Job %s received %s (%s)", job.pk, applied, mode)
    else:
        logger.info("Job %s already settled; payment of %s ignored", job.pk, amount)
    return job


def notify_stage(job):
    from notifications.service import send_stage_update

    try:
        send_stage_update(job)
    except Exception:
        logger.exception("Stage notification for job %s failed", job.pk)
