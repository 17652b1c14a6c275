import csv
import io

from .calendar_grid import date_label
from .payments import format_money, resolve_payment

CSV_HEADER = [
    "Date", "Supporter", "Player", "Note", "Phone",
    "Owed", "PaymentAmount", "PaymentMethod", "PaymentStatus",
]


def _player_name(entry) -> str:
    player = getattr(entry, "player", None)
    return player.full_name if player else "Unknown"


def write_entries_csv(entries, out) -> None:
    """Write entries to any file-like object, header first."""
    # QUOTE_MINIMAL quotes fields with commas, quotes or newlines and doubles inner quotes
    writer = csv.writer(out, quoting=csv.QUOTE_MINIMAL, lineterminator="\n")
    writer.writerow(CSV_HEADER)
    for e in entries:
        state = resolve_payment(e)
        writer.writerow([
            date_label(e.year, e.month, e.day),
            e.supporter_name,
            _player_name(e),
            e.note,
            e.phone,
            state.owed,
            format_money(state.amount),
            state.method.value,
            state.label,
        ])


def export_csv(entries) -> str:
    buf = io.StringIO()
    write_entries_csv(entries, buf)
    return buf.getvalue()
