"""Tests for job payments and their mirroring onto the invoice."""

from decimal import Decimal

import pytest

from core.exceptions import NotFound, ValidationFailed
from invoices.services import generate_invoice_for_job, mark_invoice_paid
from jobs.models import JobStage, PaymentStatus
from jobs.services import add_materials_to_job, add_payment_to_job, create_job, update_job_stage
from payments.models import Payment, PaymentMode


@pytest.fixture
def billed_job(customer):
    """Job whose total is 1770, no invoice yet."""
    return create_job(customer, 0, service_cost=1500, total_amount=Decimal("1770"))


@pytest.mark.django_db
class TestAddPaymentToJob:
    def test_full_payment_marks_paid(self, billed_job):
        job = add_payment_to_job(billed_job.pk, Decimal("1770"), PaymentMode.CASH)
        assert job.paid_amount == Decimal("1770")
        assert job.payment_status == PaymentStatus.PAID

    def test_payment_after_settled_is_noop(self, billed_job):
        add_payment_to_job(billed_job.pk, Decimal("1770"), PaymentMode.CASH)
        job = add_payment_to_job(billed_job.pk, Decimal("50"), PaymentMode.UPI)
        assert job.paid_amount == Decimal("1770")
        assert Payment.objects.filter(job=billed_job).count() == 1

    def test_partial_payment(self, billed_job):
        job = add_payment_to_job(billed_job.pk, Decimal("1000"), PaymentMode.UPI, notes="Advance")
        assert job.paid_amount == Decimal("1000")
        assert job.payment_status == PaymentStatus.PARTIALLY_PAID
        payment = job.payments.get()
        assert payment.amount == Decimal("1000")
        assert payment.mode == PaymentMode.UPI
        assert payment.notes == "Advance"

    def test_overpayment_is_capped_at_remaining(self, billed_job):
        add_payment_to_job(billed_job.pk, Decimal("1000"), PaymentMode.CASH)
        job = add_payment_to_job(billed_job.pk, Decimal("5000"), PaymentMode.CARD)
        assert job.paid_amount == Decimal("1770")
        assert job.payments.last().amount == Decimal("770")

    @pytest.mark.parametrize("amount", [Decimal("0"), Decimal("-10")])
    def test_non_positive_amount_is_rejected(self, billed_job, amount):
        with pytest.raises(ValidationFailed):
            add_payment_to_job(billed_job.pk, amount, PaymentMode.CASH)

    def test_unknown_mode_is_rejected(self, billed_job):
        with pytest.raises(ValidationFailed):
            add_payment_to_job(billed_job.pk, Decimal("10"), "Cheque")

    def test_missing_job(self, db):
        with pytest.raises(NotFound):
            add_payment_to_job(999, Decimal("10"), PaymentMode.CASH)

    def test_invoice_copies_earlier_partial_payment(self, billed_job):
        add_payment_to_job(billed_job.pk, Decimal("1000"), PaymentMode.CASH)
        invoice = generate_invoice_for_job(billed_job.pk)
        assert invoice.paid_amount == Decimal("1000")
        assert invoice.payment_status == PaymentStatus.PARTIALLY_PAID


@pytest.mark.django_db
class TestPaymentMirroring:
    def test_job_payment_mirrors_onto_invoice(self, job):
        update_job_stage(job.pk, JobStage.COMPLETED)
        add_payment_to_job(job.pk, Decimal("600"), PaymentMode.UPI)
        invoice = job.invoice
        invoice.refresh_from_db()
        assert invoice.paid_amount == Decimal("600")
        assert invoice.payment_status == PaymentStatus.PARTIALLY_PAID

    def test_invoice_side_is_capped_independently(self, customer, ppf_roll):
        job = create_job(customer, 0, service_cost=1000)
        add_materials_to_job(job.pk, [{"inventory_id": ppf_roll.pk, "quantity": 1}])
        update_job_stage(job.pk, JobStage.COMPLETED)

        job = add_payment_to_job(job.pk, Decimal("1500"), PaymentMode.CASH)

        invoice = job.invoice
        invoice.refresh_from_db()
        assert job.total_amount == Decimal("1500")
        assert job.paid_amount == Decimal("1500")
        assert invoice.total_amount == Decimal("1180")
        assert invoice.paid_amount == Decimal("1180")
        assert invoice.payment_status == PaymentStatus.PAID

    def test_invoice_payment_mirrors_onto_job(self, billed_job):
        invoice = generate_invoice_for_job(billed_job.pk)
        mark_invoice_paid(invoice.pk, Decimal("500"))
        billed_job.refresh_from_db()
        assert billed_job.paid_amount == Decimal("500")
        payment = billed_job.payments.get()
        assert payment.mode == PaymentMode.CASH
        assert payment.notes == f"Invoice {invoice.invoice_number} payment"

    def test_invoice_payment_capped_by_job_remaining(self, job):
        update_job_stage(job.pk, JobStage.COMPLETED)
        add_payment_to_job(job.pk, Decimal("1500"), PaymentMode.CASH)

        invoice = mark_invoice_paid(job.invoice.pk)

        job.refresh_from_db()
        assert invoice.paid_amount == Decimal("1770")
        assert invoice.payment_status == PaymentStatus.PAID
        assert job.paid_amount == Decimal("1500")
        assert job.payments.count() == 1
