"""Tests for turning appointments into jobs."""

import datetime
from unittest.mock import patch

import pytest
from django.db import DatabaseError

from appointments.models import Appointment, AppointmentStatus
from appointments.services import convert_appointment_to_job
from core.exceptions import Conflict, NotFound
from customers.models import Customer
from jobs.models import Job, JobStage


def _book(**overrides):
    fields = {
        "customer_name": "Meera",
        "phone": "9123456780",
        "vehicle_info": "Hyundai Creta",
        "plate_number": "DL3CAB0001",
        "service_type": "Ceramic Coating",
        "date": datetime.date(2026, 3, 14),
        "time_slot": "10:00-11:00",
    }
    fields.update(overrides)
    return Appointment.objects.create(**fields)


@pytest.mark.django_db
class TestConvertAppointment:
    def test_new_phone_creates_customer_and_job(self):
        appointment = _book(notes="Customer wants 9H")
        job = convert_appointment_to_job(appointment.pk)

        customer = Customer.objects.get(phone="9123456780")
        vehicle = customer.vehicles.get()
        assert vehicle.model == "Hyundai Creta"
        assert vehicle.plate_number == "DL3CAB0001"
        assert vehicle.make == ""

        assert job.customer == customer
        assert job.vehicle_index == 0
        assert job.stage == JobStage.NEW_LEAD
        assert job.notes == "Ceramic Coating - Customer wants 9H"

        appointment.refresh_from_db()
        assert appointment.status == AppointmentStatus.CONVERTED
        assert appointment.job == job
        assert appointment.customer == customer

    def test_notes_without_appointment_notes(self):
        job = convert_appointment_to_job(_book().pk)
        assert job.notes == "Ceramic Coating"

    def test_existing_phone_reuses_customer(self, customer):
        appointment = _book(phone=customer.phone)
        job = convert_appointment_to_job(appointment.pk)
        assert job.customer == customer
        assert Customer.objects.count() == 1
        assert customer.vehicles.count() == 1

    def test_existing_customer_without_vehicle_gets_one(self):
        bare = Customer.objects.create(name="Meera", phone="9123456780")
        job = convert_appointment_to_job(_book().pk)
        assert job.customer == bare
        assert bare.vehicles.get().model == "Hyundai Creta"

    def test_converting_twice_is_refused(self):
        appointment = _book()
        convert_appointment_to_job(appointment.pk)
        with pytest.raises(Conflict):
            convert_appointment_to_job(appointment.pk)

    def test_cancelled_appointment_is_refused(self):
        appointment = _book(status=AppointmentStatus.CANCELLED)
        with pytest.raises(Conflict):
            convert_appointment_to_job(appointment.pk)

    def test_missing_appointment(self, db):
        with pytest.raises(NotFound):
            convert_appointment_to_job(321)


@pytest.mark.django_db
class TestConversionNotifications:
    @pytest.fixture
    def twilio(self, stage_templates):
        with patch("notifications.service._twilio_client") as factory:
            yield factory.return_value

    def test_new_lead_message_after_conversion(self, twilio):
        convert_appointment_to_job(_book().pk)
        twilio.messages.create.assert_called_once()
        assert "Hyundai Creta" in twilio.messages.create.call_args.kwargs["body"]

    def test_failed_conversion_sends_nothing(self, twilio):
        appointment = _book()
        with patch.object(Appointment, "save", side_effect=DatabaseError("locked")):
            with pytest.raises(DatabaseError):
                convert_appointment_to_job(appointment.pk)

        twilio.messages.create.assert_not_called()
        assert not Job.objects.exists()
        assert not Customer.objects.exists()
        appointment.refresh_from_db()
        assert appointment.status == AppointmentStatus.SCHEDULED
