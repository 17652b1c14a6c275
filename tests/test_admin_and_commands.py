"""
Tests for the Django admin actions and the management commands.
"""

import json
from io import StringIO

import pytest
from django.contrib.messages.storage.cookie import CookieStorage
from django.core.management import CommandError, call_command

from fundraiser.admin import CalendarEntryAdmin, PlayerAdmin, toggle_paid_venmo, toggle_paid_zelle
from fundraiser.models import CalendarEntry, PaymentMethod, Player, RaffleWinner

pytestmark = pytest.mark.django_db


@pytest.fixture
def admin_request(rf):
    request = rf.post("/admin/fundraiser/calendarentry/")
    request._messages = CookieStorage(request)
    return request


def _messages(request):
    return [str(m) for m in request._messages]


def test_toggle_paid_action(admin_request, store, player_with_pin):
    entry = store.create(year=2025, month=6, day=12, player_id=player_with_pin.id, supporter_name="Jo")

    toggle_paid_zelle(None, admin_request, CalendarEntry.objects.all())
    entry.refresh_from_db()
    assert entry.payment_method == PaymentMethod.ZELLE
    assert entry.payment_amount == 12
    assert "Paid via Zelle (full $12)" in _messages(admin_request)[0]

    toggle_paid_zelle(None, admin_request, CalendarEntry.objects.all())
    entry.refresh_from_db()
    assert entry.payment_method == PaymentMethod.UNPAID
    assert entry.payment_amount == 0


def test_toggle_paid_action_switches_channel(admin_request, store, player_with_pin):
    for day in (3, 4):
        store.create(year=2025, month=6, day=day, player_id=player_with_pin.id, supporter_name="Jo")
    toggle_paid_zelle(None, admin_request, CalendarEntry.objects.all())
    toggle_paid_venmo(None, admin_request, CalendarEntry.objects.all())

    assert set(CalendarEntry.objects.values_list("payment_method", flat=True)) == {"venmo"}
    assert any("Updated 2 entries." in m for m in _messages(admin_request))


def test_admin_display_helpers(store, player_with_pin):
    from django.contrib import admin

    entry = store.create(year=2025, month=6, day=12, player_id=player_with_pin.id, supporter_name="Jo")
    entry_admin = CalendarEntryAdmin(CalendarEntry, admin.site)
    assert entry_admin.payment_status(entry) == "Unpaid"
    assert "day" in entry_admin.get_readonly_fields(None, entry)
    assert "day" not in entry_admin.get_readonly_fields(None, None)

    player_admin = PlayerAdmin(Player, admin.site)
    assert player_admin.has_pin(player_with_pin) is True


def test_seed_roster_demo_is_idempotent():
    out = StringIO()
    call_command("seed_roster", stdout=out)
    assert "Created 3 player(s)" in out.getvalue()
    assert Player.objects.filter(pin="4821").exists()

    out = StringIO()
    call_command("seed_roster", stdout=out)
    assert "already loaded" in out.getvalue()
    assert Player.objects.count() == 3


def test_seed_roster_from_file(tmp_path):
    roster = tmp_path / "roster.json"
    roster.write_text(json.dumps([
        {"first_name": "Quinn", "last_name": "Park", "number": 21, "pin": "0042"},
        {"first_name": "Rae", "last_name": "Stone", "number": "9"},
    ]))
    call_command("seed_roster", file=str(roster), stdout=StringIO())

    assert Player.objects.get(last_name="Park").pin == "0042"
    assert Player.objects.get(last_name="Stone").number == 9


def test_seed_roster_bad_file(tmp_path):
    with pytest.raises(CommandError):
        call_command("seed_roster", file=str(tmp_path / "missing.json"), stdout=StringIO())

    roster = tmp_path / "bad.json"
    roster.write_text(json.dumps([{"first_name": "No Number"}]))
    with pytest.raises(CommandError, match="Invalid roster row"):
        call_command("seed_roster", file=str(roster), stdout=StringIO())


def test_set_raffle_winner_command():
    out = StringIO()
    call_command("set_raffle_winner", "2025", "2", "14", stdout=out)
    assert RaffleWinner.objects.get(year=2025, month=2).winning_day == 14
    assert "day 14" in out.getvalue()

    call_command("set_raffle_winner", "2025", "2", "--clear", stdout=StringIO())
    assert not RaffleWinner.objects.exists()


def test_set_raffle_winner_command_errors():
    with pytest.raises(CommandError, match="Not a calendar date"):
        call_command("set_raffle_winner", "2025", "2", "30", stdout=StringIO())
    with pytest.raises(CommandError, match="--clear"):
        call_command("set_raffle_winner", "2025", "2", stdout=StringIO())
