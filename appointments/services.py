import logging

from django.db import transaction

from core.exceptions import Conflict, get_or_not_found
from customers.services import find_or_create_by_phone
from jobs.services import create_job, notify_stage

from .models import CLOSED_STATUSES, Appointment, AppointmentStatus

logger = logging.getLogger(__name__)


def convert_appointment_to_job(appointment_id):
    """
    Turn an appointment into a New Lead job on vehicle 0 of the customer
    matched by phone (created when missing). Returns the job.

    The New Lead message goes out only after the conversion commits.
    """
    with transaction.atomic():
        appointment = get_or_not_found(
            Appointment.objects.select_for_update(), "Appointment", appointment_id
        )
        if appointment.status in CLOSED_STATUSES:
            raise Conflict(f"Appointment {appointment.pk} is already {appointment.status.lower()}")

        customer, created = find_or_create_by_phone(
            appointment.phone,
            appointment.customer_name,
            vehicle={"model": appointment.vehicle_info, "plate_number": appointment.plate_number},
        )
        job = create_job(
            customer,
            0,
            notes=appointment.job_notes,
            vehicle_name=appointment.vehicle_info,
            notify=False,
        )

        appointment.status = AppointmentStatus.CONVERTED
        appointment.customer = customer
        appointment.job = job
        appointment.save(update_fields=["status", "customer", "job"])

    notify_stage(job)
    logger.info(
        "Appointment %s converted to job %s (%s customer %s)",
        appointment.pk, job.pk, "new" if created else "existing", customer.pk,
    )
    return job
