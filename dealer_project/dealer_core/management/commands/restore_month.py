from django.core.exceptions import ValidationError
from django.core.management.base import BaseCommand, CommandError

from dealer_core.services.closing import restore_month


class Command(BaseCommand):
    help = "Move one division's records of a closed month back into the active tables."

    def add_arguments(self, parser):
        parser.add_argument("month", type=int)
        parser.add_argument("year", type=int)
        parser.add_argument("--division", required=True, help="Division to restore (e.g. sport)")

    def handle(self, *args, **options):
        month, year = options["month"], options["year"]
        try:
            result = restore_month(month, year, options["division"])
        except ValidationError as e:
            raise CommandError("; ".join(e.messages))

        for key, count in result["records_restored"].items():
            self.stdout.write(f"{key}: {count}")
        self.stdout.write(self.style.SUCCESS(
            f"Restored {year}-{month:02d} for {result['division']}"))
