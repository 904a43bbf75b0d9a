"""Stock ledger operations."""

import logging

from django.db.models import F

from core.exceptions import NotFound

from .models import InventoryItem

logger = logging.getLogger(__name__)


def adjust_inventory(item_id, delta):
    """
    Atomically add ``delta`` to an item's quantity (negative = stock out).

    No floor is enforced here; callers that must not go negative validate
    first (material consumption does).
    """
    updated = InventoryItem.objects.filter(pk=item_id).update(quantity=F("quantity") + delta)
    if not updated:
        raise NotFound(f"Inventory item {item_id} not found")
    item = InventoryItem.objects.get(pk=item_id)
    if item.is_low_stock:
        logger.info("Inventory item %s (%s) is low: %s %s", item.pk, item.name, item.quantity, item.unit)
    return item


def low_stock_items():
    return InventoryItem.objects.low_stock().order_by("category", "name")


def low_stock_summary(items):
    lines = [
        f"- {item.name} ({item.get_category_display()}): {item.quantity.normalize():f} {item.unit}"
        f" left, minimum {item.min_stock.normalize():f}"
        for item in items
    ]
    return "Low stock items:\n" + "\n".join(lines)


def send_low_stock_alert(whatsapp=False):
    """
    Email (and optionally WhatsApp) the shop owner the low-stock list.

    Recipients come from the ``low_stock_alert_email`` and ``shop_phone``
    settings. Returns the number of low items reported.
    """
    from django.conf import settings
    from django.core.mail import send_mail

    from invoices.models import Setting

    items = list(low_stock_items())
    if not items:
        return 0

    text = low_stock_summary(items)
    recipient = Setting.get("low_stock_alert_email", "").strip()
    if recipient:
        send_mail(
            f"[{Setting.get('shop_name', 'Garage')}] {len(items)} item(s) low on stock",
            text,
            settings.DEFAULT_FROM_EMAIL,
            [recipient],
        )
        logger.info("Low-stock alert for %d item(s) emailed to %s", len(items), recipient)
    else:
        logger.warning("low_stock_alert_email is not set; low-stock email skipped")

    owner_phone = Setting.get("shop_phone", "").strip()
    if whatsapp and owner_phone:
        from notifications.models import NotificationLog
        from notifications.service import dispatch

        dispatch(owner_phone, text, message_type=NotificationLog.MessageType.LOW_STOCK)
    return len(items)
