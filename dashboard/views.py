"""Owner dashboard — pipeline counts, revenue and outstanding balances."""

from decimal import Decimal

from django.db.models import Count, F, Sum
from django.http import JsonResponse

from core.api import api_view
from jobs.models import TERMINAL_STAGES, Job, JobStage


def dashboard_stats():
    """
    Headline numbers for the dashboard.

    Revenue and pending payments only count Completed jobs; open jobs are
    still being priced.
    """
    completed = Job.objects.filter(stage=JobStage.COMPLETED)
    money = completed.aggregate(
        revenue=Sum("total_amount"),
        pending=Sum(F("total_amount") - F("paid_amount")),
    )
    stage_counts = {
        row["stage"]: row["count"]
        for row in Job.objects.values("stage").annotate(count=Count("id"))
    }
    return {
        "total_jobs": sum(stage_counts.values()),
        "active_jobs": Job.objects.exclude(stage__in=TERMINAL_STAGES).count(),
        "completed_jobs": stage_counts.get(JobStage.COMPLETED, 0),
        "total_revenue": money["revenue"] or Decimal("0"),
        "pending_payments": money["pending"] or Decimal("0"),
        "jobs_by_stage": {stage.value: stage_counts.get(stage, 0) for stage in JobStage},
    }


@api_view("GET")
def stats(request):
    return JsonResponse(dashboard_stats())
