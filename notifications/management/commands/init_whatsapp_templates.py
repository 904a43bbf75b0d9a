from django.core.management.base import BaseCommand

from notifications.service import init_templates


class Command(BaseCommand):
    help = "Seed the default WhatsApp message for every job stage"

    def add_arguments(self, parser):
        parser.add_argument(
            "--overwrite",
            action="store_true",
            help="Reset existing templates to the default text",
        )

    def handle(self, *args, **options):
        written = init_templates(overwrite=options["overwrite"])
        self.stdout.write(self.style.SUCCESS(f"WhatsApp templates written: {written}"))
