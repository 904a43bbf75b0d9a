"""Tests for the job stage pipeline and invoice auto-generation."""

from decimal import Decimal

import pytest

from core.exceptions import Conflict, ValidationFailed
from invoices.models import Invoice
from invoices.services import generate_invoice_for_job
from jobs.models import JobStage, PaymentStatus, payment_status_for
from jobs.services import create_job, update_job_stage


class TestPaymentStatusFor:
    def test_nothing_paid_is_pending(self):
        assert payment_status_for(Decimal("0"), Decimal("100")) == PaymentStatus.PENDING

    def test_some_paid_is_partial(self):
        assert payment_status_for(Decimal("1"), Decimal("100")) == PaymentStatus.PARTIALLY_PAID

    def test_fully_paid(self):
        assert payment_status_for(Decimal("100"), Decimal("100")) == PaymentStatus.PAID

    def test_zero_total_counts_as_paid(self):
        assert payment_status_for(Decimal("0"), Decimal("0")) == PaymentStatus.PAID


@pytest.mark.django_db
class TestCreateJob:
    def test_defaults(self, job, customer):
        assert job.stage == JobStage.NEW_LEAD
        assert job.total_amount == Decimal("1500")
        assert job.payment_status == PaymentStatus.PENDING
        assert job.vehicle_name == "Honda City"
        assert job.plate_number == "MH12AB1234"
        assert job.customer_name == customer.name

    def test_total_includes_service_items(self, customer):
        job = create_job(
            customer,
            0,
            service_cost=1000,
            service_items=[{"description": "Wiper blades", "cost": "250", "type": "part"}],
        )
        assert job.total_amount == Decimal("1250")
        assert job.service_items.count() == 1

    def test_unknown_vehicle_index_is_rejected(self, customer):
        with pytest.raises(ValidationFailed, match="no vehicle at index 3"):
            create_job(customer, 3, service_cost=100)

    def test_technician_name_is_snapshotted(self, customer, technician):
        job = create_job(customer, 0, service_cost=100, technician=technician)
        assert job.technician_name == "Suresh"


@pytest.mark.django_db
class TestStageTransitions:
    def test_moves_forward_and_records_history(self, job):
        update_job_stage(job.pk, JobStage.INSPECTION_DONE, note="Checked paint")
        job.refresh_from_db()
        assert job.stage == JobStage.INSPECTION_DONE
        history = job.stage_history.first()
        assert history.from_stage == JobStage.NEW_LEAD
        assert history.to_stage == JobStage.INSPECTION_DONE
        assert history.note == "Checked paint"

    def test_open_stages_can_move_backwards(self, job):
        update_job_stage(job.pk, JobStage.WORK_IN_PROGRESS)
        update_job_stage(job.pk, JobStage.INSPECTION_DONE)
        job.refresh_from_db()
        assert job.stage == JobStage.INSPECTION_DONE

    def test_unknown_stage_is_rejected(self, job):
        with pytest.raises(ValidationFailed):
            update_job_stage(job.pk, "Teleported")

    def test_cancelled_is_terminal(self, job):
        update_job_stage(job.pk, JobStage.CANCELLED)
        with pytest.raises(Conflict):
            update_job_stage(job.pk, JobStage.NEW_LEAD)

    def test_completion_generates_invoice(self, job):
        update_job_stage(job.pk, JobStage.COMPLETED)
        invoice = Invoice.objects.get(job=job)
        items = [(item.description, item.total) for item in invoice.items.all()]
        assert items == [("Service Charge", Decimal("1000")), ("Labor Charge", Decimal("500"))]
        assert invoice.subtotal == Decimal("1500")
        assert invoice.tax == Decimal("270")
        assert invoice.total_amount == Decimal("1770")

    def test_stage_is_frozen_once_invoiced(self, job):
        generate_invoice_for_job(job.pk)
        with pytest.raises(Conflict, match="after invoice has been created"):
            update_job_stage(job.pk, JobStage.WORK_IN_PROGRESS)
        job.refresh_from_db()
        assert job.stage == JobStage.NEW_LEAD
        assert job.stage_history.count() == 0
