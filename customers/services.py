"""Customer directory operations used by views and by appointment conversion."""

import logging

from django.db import transaction
from django.db.models import Q

from core.exceptions import NotFound, ValidationFailed

from .models import Customer, CustomerStatus

logger = logging.getLogger(__name__)

VEHICLE_FIELDS = (
    "make", "model", "year", "plate_number", "color", "vin",
    "ppf_category", "ppf_vehicle_type", "ppf_warranty",
)


def get_customer(customer_id):
    try:
        return Customer.objects.get(pk=customer_id)
    except Customer.DoesNotExist:
        raise NotFound(f"Customer {customer_id} not found")


def search_customers(query):
    """Case-insensitive match on name, phone or any vehicle plate."""
    query = (query or "").strip()
    customers = Customer.objects.prefetch_related("vehicles")
    if not query:
        return customers
    return customers.filter(
        Q(name__icontains=query)
        | Q(phone__icontains=query)
        | Q(vehicles__plate_number__icontains=query)
    ).distinct()


@transaction.atomic
def create_customer(vehicles=(), **fields):
    """Create a customer and append ``vehicles`` (dicts) in the given order."""
    customer = Customer.objects.create(**fields)
    for vehicle in vehicles:
        customer.add_vehicle(**_vehicle_fields(vehicle))
    return customer


def add_vehicle(customer_id, vehicle):
    customer = get_customer(customer_id)
    customer.add_vehicle(**_vehicle_fields(vehicle))
    return customer


def find_or_create_by_phone(phone, name, vehicle=None):
    """
    Return ``(customer, created)`` for an exact phone match.

    A new customer gets ``vehicle`` as its only vehicle. An existing customer
    without any vehicle gets it appended so position 0 always exists.
    """
    customer = Customer.objects.filter(phone=phone).order_by("created_at").first()
    if customer is None:
        customer = create_customer(name=name, phone=phone, vehicles=[vehicle] if vehicle else [])
        logger.info("Created customer %s for phone %s", customer.pk, phone)
        return customer, True
    if vehicle and not customer.vehicles.exists():
        customer.add_vehicle(**_vehicle_fields(vehicle))
    return customer, False


def update_customer(customer_id, **fields):
    """
    Update customer fields; a status change sends the status notification.

    The notification is best-effort and never fails the update.
    """
    customer = get_customer(customer_id)
    old_status = customer.status
    if "status" in fields and fields["status"] not in CustomerStatus.values:
        raise ValidationFailed(f"Unknown customer status '{fields['status']}'")

    for name, value in fields.items():
        setattr(customer, name, value)
    customer.save()

    if customer.status != old_status:
        from notifications.service import send_customer_status_update

        send_customer_status_update(customer)
    return customer


def _vehicle_fields(vehicle):
    return {key: vehicle[key] for key in VEHICLE_FIELDS if vehicle.get(key) is not None}
