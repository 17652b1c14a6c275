import json

from django.core.management.base import BaseCommand, CommandError

from fundraiser.models import Player

DEMO_ROSTER = [
    {"first_name": "Avery", "last_name": "Brooks", "number": 3, "pin": "1234"},
    {"first_name": "Maya", "last_name": "Cole", "number": 7, "pin": ""},
    {"first_name": "Harper", "last_name": "Diaz", "number": 12, "pin": "4821"},
]


class Command(BaseCommand):
    help = "Loads the player roster (a JSON list of players, or a demo roster)"

    def add_arguments(self, parser):
        parser.add_argument("--file", help="JSON file with first_name, last_name, number and optional pin")

    def handle(self, *args, **options):
        roster = DEMO_ROSTER
        if options["file"]:
            try:
                with open(options["file"], encoding="utf-8") as fh:
                    roster = json.load(fh)
            except (OSError, json.JSONDecodeError) as e:
                raise CommandError(f"Could not read roster: {e}")

        created = 0
        for row in roster:
            try:
                lookup = {
                    "first_name": row["first_name"].strip(),
                    "last_name": row["last_name"].strip(),
                    "number": int(row["number"]),
                }
            except (KeyError, TypeError, ValueError, AttributeError):
                raise CommandError(f"Invalid roster row: {row!r}")

            _, was_created = Player.objects.get_or_create(
                **lookup, defaults={"pin": str(row.get("pin") or "")}
            )
            created += was_created

        if created:
            self.stdout.write(self.style.SUCCESS(f"Created {created} player(s)"))
        else:
            self.stdout.write("Roster already loaded")
