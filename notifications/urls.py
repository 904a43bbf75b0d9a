from django.urls import path

from . import views

app_name = "notifications"

urlpatterns = [
    path("templates/", views.template_list, name="templates"),
    path("templates/<str:stage>/", views.template_update, name="template_update"),
    path("logs/", views.log_list, name="logs"),
]
