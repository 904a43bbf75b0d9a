"""WhatsApp template endpoints and the outbound message log."""

from django import forms
from django.http import JsonResponse

from core.api import api_view, form_error_response
from core.exceptions import ValidationFailed
from jobs.models import JobStage

from . import service
from .models import NotificationLog, WhatsAppTemplate


class TemplateForm(forms.Form):
    message = forms.CharField(required=False)
    is_active = forms.BooleanField(required=False)


def template_to_dict(template):
    return {
        "stage": template.stage,
        "message": template.message,
        "is_active": template.is_active,
        "updated_at": template.updated_at,
    }


@api_view("GET")
def template_list(request):
    return JsonResponse([template_to_dict(t) for t in WhatsAppTemplate.objects.all()], safe=False)


@api_view("PATCH", "PUT")
def template_update(request, stage):
    if stage not in JobStage.values:
        raise ValidationFailed(f"Unknown stage '{stage}'")
    form = TemplateForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    template = service.update_template(
        stage,
        message=form.cleaned_data["message"] if "message" in request.json else None,
        is_active=form.cleaned_data["is_active"] if "is_active" in request.json else None,
    )
    return JsonResponse(template_to_dict(template))


@api_view("GET")
def log_list(request):
    logs = NotificationLog.objects.all()
    if request.GET.get("job"):
        logs = logs.filter(job_id=request.GET["job"])
    rows = [
        {
            "id": log.pk,
            "job_id": log.job_id,
            "phone": log.phone,
            "message_type": log.message_type,
            "message": log.message,
            "success": log.success,
            "error_message": log.error_message,
            "sent_at": log.sent_at,
        }
        for log in logs[:200]
    ]
    return JsonResponse(rows, safe=False)
