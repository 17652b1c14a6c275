"""
Summaries over a snapshot of calendar entries.

Nothing here touches the database; callers pass the list returned by
EntryStore.read().
"""

from dataclasses import dataclass, field
from decimal import Decimal

from .calendar_grid import month_label
from .payments import resolve_payment


@dataclass
class PlayerSummary:
    player_id: int
    days: int = 0
    day_number_sum: int = 0


@dataclass
class SupporterSummary:
    name: str
    dates: list[str] = field(default_factory=list)
    total_owed: int = 0
    total_paid: Decimal = Decimal(0)

    @property
    def remaining(self) -> Decimal:
        return max(Decimal(self.total_owed) - self.total_paid, Decimal(0))


def summarize_by_player(entries) -> list[PlayerSummary]:
    """Days claimed and sum of day numbers per player. Players with no claims are left out."""
    summaries: dict[int, PlayerSummary] = {}
    for e in entries:
        if not e.player_id:
            continue
        rec = summaries.setdefault(e.player_id, PlayerSummary(player_id=e.player_id))
        rec.days += 1
        rec.day_number_sum += e.day
    return list(summaries.values())


def _paid_amount(entry) -> Decimal:
    # money recorded without a channel does not count as paid
    state = resolve_payment(entry)
    return state.amount if state.is_paid else Decimal(0)


def summarize_by_supporter(entries) -> list[SupporterSummary]:
    # exact match on the trimmed name: "Smith" and "smith" stay separate
    grouped: dict[str, list] = {}
    for e in entries:
        name = (e.supporter_name or "").strip()
        if not name:
            continue
        grouped.setdefault(name, []).append(e)

    rows = []
    for name, group in grouped.items():
        group = sorted(group, key=lambda e: (e.year, e.month, e.day))
        rows.append(SupporterSummary(
            name=name,
            dates=[month_label(e.month, e.day) for e in group],
            total_owed=sum(e.day for e in group),
            total_paid=sum((_paid_amount(e) for e in group), Decimal(0)),
        ))
    return rows


def supporters_by_player(entries) -> dict[int, list[str]]:
    names: dict[int, set[str]] = {}
    for e in entries:
        name = (e.supporter_name or "").strip()
        if not e.player_id or not name:
            continue
        names.setdefault(e.player_id, set()).add(name)
    return {player_id: sorted(s) for player_id, s in names.items()}


def player_totals(entries, player_id) -> tuple[int, int]:
    days = [e.day for e in entries if e.player_id == player_id]
    return len(days), sum(days)
