from django.urls import path

from . import views

app_name = "inventory"

urlpatterns = [
    path("", views.inventory_list, name="list"),
    path("low-stock/", views.low_stock, name="low_stock"),
    path("<int:pk>/", views.inventory_update, name="update"),
    path("<int:pk>/adjust/", views.inventory_adjust, name="adjust"),
]
