from django.urls import path

from . import views

app_name = "technicians"

urlpatterns = [
    path("", views.technician_list, name="list"),
    path("workload/", views.workload, name="workload"),
    path("<int:pk>/", views.technician_update, name="update"),
]
