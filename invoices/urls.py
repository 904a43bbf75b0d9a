from django.urls import path

from . import views

app_name = "invoices"

urlpatterns = [
    path("", views.invoice_list, name="list"),
    path("<int:pk>/", views.invoice_detail, name="detail"),
    path("<int:pk>/pay/", views.invoice_pay, name="pay"),
    path("<int:pk>/pdf/", views.invoice_pdf, name="pdf"),
    path("<int:pk>/send/", views.invoice_send, name="send"),
    path("job/<int:job_id>/", views.invoice_for_job, name="for_job"),
]
