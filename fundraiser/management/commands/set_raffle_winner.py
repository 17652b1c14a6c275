from django.core.management.base import BaseCommand, CommandError

from fundraiser.errors import FundraiserError
from fundraiser.store import EntryStore


class Command(BaseCommand):
    help = "Records (or clears) the raffle winning day for a month"

    def add_arguments(self, parser):
        parser.add_argument("year", type=int)
        parser.add_argument("month", type=int)
        parser.add_argument("day", type=int, nargs="?")
        parser.add_argument("--clear", action="store_true", help="Remove the winner for the month")

    def handle(self, *args, **options):
        year, month, day = options["year"], options["month"], options["day"]
        if day is None and not options["clear"]:
            raise CommandError("Give a winning day, or --clear to remove the winner")
        if options["clear"]:
            day = None

        try:
            EntryStore().set_raffle_winner(year, month, day)
        except FundraiserError as e:
            raise CommandError(e.message)

        if day is None:
            self.stdout.write(self.style.WARNING(f"Raffle winner cleared for {year}-{month:02d}"))
        else:
            self.stdout.write(self.style.SUCCESS(f"Raffle winner for {year}-{month:02d}: day {day}"))
