"""
Tests for the summary reductions (pure, unsaved entries).
"""

from decimal import Decimal

from fundraiser.aggregation import (
    player_totals,
    summarize_by_player,
    summarize_by_supporter,
    supporters_by_player,
)
from fundraiser.models import CalendarEntry


def _e(month, day, player_id, name, method="unpaid", amount=0):
    return CalendarEntry(
        year=2025, month=month, day=day, player_id=player_id,
        supporter_name=name, payment_method=method, payment_amount=amount,
    )


ENTRIES = [
    _e(6, 12, 1, "Grandma Jo", "zelle", 12),
    _e(1, 27, 1, "Grandma Jo", "venmo", 5),
    _e(3, 4, 2, "The Smiths"),
    _e(3, 9, 2, "Grandma Jo  "),
    _e(4, 1, 1, "the smiths"),
]


def test_summarize_by_player():
    rows = {s.player_id: s for s in summarize_by_player(ENTRIES)}
    assert rows[1].days == 3
    assert rows[1].day_number_sum == 12 + 27 + 1
    assert rows[2].days == 2
    assert rows[2].day_number_sum == 13


def test_player_sums_match_total_days():
    rows = summarize_by_player(ENTRIES)
    assert sum(r.day_number_sum for r in rows) == sum(e.day for e in ENTRIES)


def test_players_without_entries_are_omitted():
    assert [s.player_id for s in summarize_by_player(ENTRIES)] == [1, 2]
    assert summarize_by_player([]) == []


def test_summarize_by_supporter_groups_trimmed_names():
    rows = {s.name: s for s in summarize_by_supporter(ENTRIES)}
    jo = rows["Grandma Jo"]
    assert jo.dates == ["January 27", "March 9", "June 12"]
    assert jo.total_owed == 27 + 9 + 12
    assert jo.total_paid == Decimal(17)
    assert jo.remaining == Decimal(31)


def test_supporter_names_are_case_sensitive():
    rows = {s.name: s for s in summarize_by_supporter(ENTRIES)}
    assert "The Smiths" in rows
    assert "the smiths" in rows
    assert rows["The Smiths"].total_owed == 4


def test_remaining_never_negative():
    rows = summarize_by_supporter([_e(2, 3, 1, "Over", "zelle", 10)])
    assert rows[0].remaining == 0


def test_paid_amount_needs_a_channel():
    rows = summarize_by_supporter([_e(2, 3, 1, "Cash", "unpaid", 3)])
    assert rows[0].total_paid == 0


def test_blank_supporter_names_are_skipped():
    rows = summarize_by_supporter([_e(2, 3, 1, "   ")])
    assert rows == []


def test_supporters_by_player():
    result = supporters_by_player(ENTRIES)
    assert result[1] == ["Grandma Jo", "the smiths"]
    assert result[2] == ["Grandma Jo", "The Smiths"]


def test_player_totals():
    assert player_totals(ENTRIES, 2) == (2, 13)
    assert player_totals(ENTRIES, 99) == (0, 0)
