from django.urls import path

from . import views

app_name = "customers"

urlpatterns = [
    path("", views.customer_list, name="list"),
    path("<int:pk>/", views.customer_detail, name="detail"),
    path("<int:pk>/vehicles/", views.customer_add_vehicle, name="add_vehicle"),
    path("<int:pk>/jobs/", views.customer_jobs, name="jobs"),
]
