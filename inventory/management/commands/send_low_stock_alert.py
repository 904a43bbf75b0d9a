from django.core.management.base import BaseCommand

from inventory.services import send_low_stock_alert


class Command(BaseCommand):
    help = "Email the shop owner a summary of inventory items at or below minimum stock"

    def add_arguments(self, parser):
        parser.add_argument("--whatsapp", action="store_true", help="Also send the summary to shop_phone")

    def handle(self, *args, **options):
        count = send_low_stock_alert(whatsapp=options["whatsapp"])
        if count:
            self.stdout.write(self.style.WARNING(f"{count} item(s) low on stock"))
        else:
            self.stdout.write(self.style.SUCCESS("All stock levels OK"))
