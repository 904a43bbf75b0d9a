"""URL configuration for garagecrm."""

from django.conf import settings
from django.contrib import admin
from django.shortcuts import redirect
from django.urls import include, path

urlpatterns = [
    path("admin/", admin.site.urls),
    path("api/customers/", include("customers.urls")),
    path("api/technicians/", include("technicians.urls")),
    path("api/inventory/", include("inventory.urls")),
    path("api/jobs/", include("jobs.urls")),
    path("api/invoices/", include("invoices.urls")),
    path("api/appointments/", include("appointments.urls")),
    path("api/whatsapp/", include("notifications.urls")),
    path("api/dashboard/", include("dashboard.urls")),
    path("", lambda request: redirect("dashboard:stats")),  # root → dashboard
]

if settings.DEBUG:
    urlpatterns += [path("__debug__/", include("debug_toolbar.urls"))]
