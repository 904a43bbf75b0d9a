"""Tests for WhatsApp dispatch, stage templates and status updates."""

from unittest.mock import MagicMock, patch

import pytest
from django.core.management import call_command

from customers.services import update_customer
from jobs.models import JobStage
from jobs.services import create_job, update_job_stage
from notifications.models import NotificationLog, WhatsAppTemplate
from notifications.service import (
    dispatch,
    find_active_template,
    render_stage_message,
    update_template,
    whatsapp_address,
)


@pytest.fixture
def twilio():
    client = MagicMock()
    with patch("notifications.service._twilio_client", return_value=client):
        yield client


class TestWhatsappAddress:
    def test_local_number_gets_country_code(self):
        assert whatsapp_address("98765 43210") == "whatsapp:+919876543210"

    def test_international_number_is_kept(self):
        assert whatsapp_address("+44 7700 900123") == "whatsapp:+447700900123"

    def test_empty(self):
        assert whatsapp_address("") == ""


class TestRenderStageMessage:
    def test_replaces_every_placeholder(self):
        text = render_stage_message("{{vehicle}} / {{plate}} / {{vehicle}}", "Honda City", "MH12AB1234")
        assert text == "Honda City / MH12AB1234 / Honda City"


@pytest.mark.django_db
class TestDispatch:
    def test_unconfigured_transport_returns_false_and_logs(self):
        assert dispatch("9876543210", "hello") is False
        log = NotificationLog.objects.get()
        assert not log.success
        assert log.error_message == "WhatsApp transport not configured"

    def test_sends_through_twilio(self, twilio, settings):
        settings.TWILIO_WHATSAPP_FROM = "+14155238886"
        assert dispatch("9876543210", "hello") is True
        twilio.messages.create.assert_called_once_with(
            body="hello", from_="whatsapp:+14155238886", to="whatsapp:+919876543210"
        )
        assert NotificationLog.objects.get().success

    def test_transport_error_never_raises(self, twilio):
        twilio.messages.create.side_effect = RuntimeError("rate limited")
        assert dispatch("9876543210", "hello") is False
        assert NotificationLog.objects.get().error_message == "rate limited"


@pytest.mark.django_db
class TestStageNotifications:
    def test_job_creation_sends_new_lead_message(self, customer, stage_templates, twilio):
        job = create_job(customer, 0, service_cost=100)
        body = twilio.messages.create.call_args.kwargs["body"]
        assert body == (
            "Welcome! Your Honda City (MH12AB1234) has been registered. We will contact you shortly."
        )
        assert NotificationLog.objects.get().job == job

    def test_stage_change_sends_stage_message(self, job, stage_templates, twilio):
        update_job_stage(job.pk, JobStage.READY_FOR_DELIVERY)
        body = twilio.messages.create.call_args.kwargs["body"]
        assert body.startswith("Great news! Your Honda City (MH12AB1234) is ready for pickup.")

    def test_inactive_template_sends_nothing(self, job, stage_templates, twilio):
        update_template(JobStage.INSPECTION_DONE, is_active=False)
        assert find_active_template(JobStage.INSPECTION_DONE) is None
        update_job_stage(job.pk, JobStage.INSPECTION_DONE)
        twilio.messages.create.assert_not_called()

    def test_transport_failure_does_not_fail_the_stage_change(self, job, stage_templates, twilio):
        twilio.messages.create.side_effect = RuntimeError("down")
        update_job_stage(job.pk, JobStage.WORK_IN_PROGRESS)
        job.refresh_from_db()
        assert job.stage == JobStage.WORK_IN_PROGRESS

    def test_customer_status_change_notifies(self, customer, twilio):
        update_customer(customer.pk, status="Working", service="Ceramic Coating")
        body = twilio.messages.create.call_args.kwargs["body"]
        assert body == "We have started working on your Ceramic Coating. We will keep you updated."
        assert NotificationLog.objects.get().message_type == NotificationLog.MessageType.STATUS_UPDATE

    def test_unchanged_status_does_not_notify(self, customer, twilio):
        update_customer(customer.pk, address="Pune")
        twilio.messages.create.assert_not_called()


@pytest.mark.django_db
class TestTemplates:
    def test_init_command_seeds_every_stage(self):
        call_command("init_whatsapp_templates")
        assert WhatsAppTemplate.objects.count() == len(JobStage)

    def test_init_keeps_edits_unless_overwriting(self):
        call_command("init_whatsapp_templates")
        update_template(JobStage.COMPLETED, message="Thanks, {{vehicle}}!")
        call_command("init_whatsapp_templates")
        assert WhatsAppTemplate.objects.get(stage=JobStage.COMPLETED).message == "Thanks, {{vehicle}}!"
        call_command("init_whatsapp_templates", "--overwrite")
        assert WhatsAppTemplate.objects.get(stage=JobStage.COMPLETED).message.startswith("Thank you for choosing us!")

    def test_update_template_upserts(self, db):
        template = update_template(JobStage.CANCELLED, message="Cancelled: {{plate}}")
        assert template.is_active
        assert WhatsAppTemplate.objects.get(stage=JobStage.CANCELLED).message == "Cancelled: {{plate}}"
