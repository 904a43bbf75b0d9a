"""
WhatsApp notification helpers (Twilio).

``dispatch`` is the only place that talks to the transport. It returns False
when Twilio is not configured or the send fails and never raises, so callers
can notify without guarding.
"""

import logging
import re

from django.conf import settings

from .models import NotificationLog, WhatsAppTemplate

logger = logging.getLogger(__name__)

DEFAULT_STAGE_TEMPLATES = {
    "New Lead": "Welcome! Your {{vehicle}} ({{plate}}) has been registered. We will contact you shortly.",
    "Inspection Done": "Inspection completed for your {{vehicle}} ({{plate}}). Our team will share the report soon.",
    "Work In Progress": "Work has started on your {{vehicle}} ({{plate}}). We will keep you updated.",
    "Ready for Delivery": "Great news! Your {{vehicle}} ({{plate}}) is ready for pickup. Please visit us at your convenience.",
    "Completed": "Thank you for choosing us! Service completed for your {{vehicle}} ({{plate}}). We hope to see you again!",
    "Cancelled": "Your service request for {{vehicle}} ({{plate}}) has been cancelled. Contact us for any queries.",
}

CUSTOMER_STATUS_TEMPLATES = {
    "Inquired": "Thank you for your enquiry about {{service}}. Our team will get back to you shortly.",
    "Working": "We have started working on your {{service}}. We will keep you updated.",
    "Waiting": "Your {{service}} is on hold while we wait on a few things. We will update you soon.",
    "Completed": "Your {{service}} is complete. Thank you for choosing us!",
}


def whatsapp_address(phone):
    """``whatsapp:+<digits>``; bare 10-digit numbers get the default country code."""
    digits = re.sub(r"\D", "", phone or "")
    if not digits:
        return ""
    if phone.strip().startswith("+"):
        return f"whatsapp:+{digits}"
    if len(digits) == 10:
        country = settings.WHATSAPP_DEFAULT_COUNTRY_CODE.lstrip("+")
        return f"whatsapp:+{country}{digits}"
    return f"whatsapp:+{digits}"


def _twilio_client():
    sid = getattr(settings, "TWILIO_ACCOUNT_SID", "")
    token = getattr(settings, "TWILIO_AUTH_TOKEN", "")
    if not (sid and token and getattr(settings, "TWILIO_WHATSAPP_FROM", "")):
        return None

    from twilio.rest import Client

    return Client(sid, token)


def dispatch(phone, text, job=None, message_type=NotificationLog.MessageType.STAGE_UPDATE):
    """Send ``text`` to ``phone`` over WhatsApp and record the attempt."""
    success = False
    error_message = ""
    to = whatsapp_address(phone)

    if not to:
        error_message = "No phone number"
    else:
        try:
            client = _twilio_client()
            if client is None:
                error_message = "WhatsApp transport not configured"
                logger.info("WhatsApp not configured; message to %s not sent", phone)
            else:
                client.messages.create(
                    body=text,
                    from_=whatsapp_address(settings.TWILIO_WHATSAPP_FROM),
                    to=to,
                )
                success = True
        except Exception as exc:
            error_message = str(exc)
            logger.warning("WhatsApp send to %s failed: %s", phone, exc)

    NotificationLog.objects.create(
        job=job,
        phone=phone or "",
        message_type=message_type,
        message=text,
        success=success,
        error_message=error_message,
    )
    return success


def find_active_template(stage):
    return WhatsAppTemplate.objects.filter(stage=stage, is_active=True).first()


def render_stage_message(template_message, vehicle, plate):
    return template_message.replace("{{vehicle}}", vehicle or "").replace("{{plate}}", plate or "")


def send_stage_update(job):
    """Send the active template for the job's current stage; False when there is none."""
    template = find_active_template(job.stage)
    if template is None:
        logger.info("No active WhatsApp template for stage %s", job.stage)
        return False

    phone = job.customer.phone
    text = render_stage_message(template.message, job.vehicle_name, job.plate_number)
    return dispatch(phone, text, job=job, message_type=NotificationLog.MessageType.STAGE_UPDATE)


def send_customer_status_update(customer):
    template = CUSTOMER_STATUS_TEMPLATES.get(customer.status)
    if template is None:
        return False
    text = template.replace("{{service}}", customer.service or "service")
    return dispatch(customer.phone, text, message_type=NotificationLog.MessageType.STATUS_UPDATE)


def update_template(stage, message=None, is_active=None):
    """Create or update the template for ``stage``."""
    template, created = WhatsAppTemplate.objects.get_or_create(
        stage=stage,
        defaults={
            "message": message or DEFAULT_STAGE_TEMPLATES.get(stage, ""),
            "is_active": True if is_active is None else is_active,
        },
    )
    if not created:
        if message is not None:
            template.message = message
        if is_active is not None:
            template.is_active = is_active
        template.save()
    return template


def init_templates(overwrite=False):
    """Seed the default stage templates; returns how many were written."""
    written = 0
    for stage, message in DEFAULT_STAGE_TEMPLATES.items():
        if overwrite:
            WhatsAppTemplate.objects.update_or_create(stage=stage, defaults={"message": message, "is_active": True})
            written += 1
        else:
            _, created = WhatsAppTemplate.objects.get_or_create(stage=stage, defaults={"message": message})
            written += int(created)
    return written
