from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from dealer_core.services.closing import close_month, preview_close


class Command(BaseCommand):
    help = "Close one accounting month: move its finished records into the history tables."

    # Define command-line arguments
    def add_arguments(self, parser):
        parser.add_argument("month", type=int, help="Month to close (1-12)")
        parser.add_argument("year", type=int, help="Year of the month to close")
        parser.add_argument("--notes", default="", help="Free text stored on the closure")
        parser.add_argument(
            "--dry-run",
            action="store_true",
            help="Only print how many rows would move",
        )

    def handle(self, *args, **options):
        month, year = options["month"], options["year"]

        try:
            if options["dry_run"]:
                counts = preview_close(month, year)
                for key, count in counts.items():
                    self.stdout.write(f"{key}: {count}")
                return
            result = close_month(month, year, notes=options["notes"] or None)
        except ValidationError as e:
            raise CommandError("; ".join(e.messages))

        for key, count in result["records_moved"].items():
            self.stdout.write(f"{key}: {count}")
        self.stdout.write(self.style.SUCCESS(f"Closed {year}-{month:02d}"))
