"""Inventory endpoints — stock list, low-stock list, create/update, adjust."""

from django.http import JsonResponse

from core.api import api_view, form_error_response
from core.exceptions import get_or_not_found

from . import services
from .forms import AdjustForm, InventoryItemForm
from .models import InventoryItem


def item_to_dict(item):
    return {
        "id": item.pk,
        "name": item.name,
        "category": item.category,
        "quantity": item.quantity,
        "unit": item.unit,
        "min_stock": item.min_stock,
        "price": item.price,
        "is_low_stock": item.is_low_stock,
    }


@api_view("GET", "POST")
def inventory_list(request):
    if request.method == "GET":
        return JsonResponse([item_to_dict(i) for i in InventoryItem.objects.all()], safe=False)

    form = InventoryItemForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    return JsonResponse(item_to_dict(form.save()), status=201)


@api_view("GET")
def low_stock(request):
    return JsonResponse([item_to_dict(i) for i in services.low_stock_items()], safe=False)


@api_view("PATCH")
def inventory_update(request, pk):
    item = get_or_not_found(InventoryItem.objects, "Inventory item", pk)
    data = {**item_to_dict(item), **request.json}
    form = InventoryItemForm(data, instance=item)
    if not form.is_valid():
        return form_error_response(form)
    return JsonResponse(item_to_dict(form.save()))


@api_view("PATCH", "POST")
def inventory_adjust(request, pk):
    form = AdjustForm(request.json)
    if not form.is_valid():
        return form_error_response(form)
    item = services.adjust_inventory(pk, form.cleaned_data["quantity"])
    return JsonResponse(item_to_dict(item))
