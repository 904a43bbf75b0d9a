from django.urls import path

from . import views

app_name = "jobs"

urlpatterns = [
    path("", views.job_list, name="list"),
    path("intake/", views.service_intake, name="intake"),
    path("quote/", views.price_quote, name="quote"),
    path("price-book/", views.price_book, name="price_book"),
    path("<int:pk>/", views.job_detail, name="detail"),
    path("<int:pk>/stage/", views.job_stage, name="stage"),
    path("<int:pk>/materials/", views.job_materials, name="materials"),
    path("<int:pk>/payments/", views.job_payments, name="payments"),
]
