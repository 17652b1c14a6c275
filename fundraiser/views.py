import json
from functools import wraps

from django.conf import settings
from django.http import HttpResponse, JsonResponse
from django.views.decorators.csrf import csrf_exempt
from django.views.decorators.http import require_GET, require_POST
from django_ratelimit.decorators import ratelimit

from . import access
from .aggregation import (
    player_totals,
    summarize_by_player,
    summarize_by_supporter,
    supporters_by_player,
)
from .calendar_grid import build_calendar_cells, date_label, month_overview
from .errors import AuthError, FundraiserError, ValidationError
from .exports import write_entries_csv
from .models import Player
from .payments import format_money, resolve_payment
from .store import EntryStore

store = EntryStore()


# ========= Common helpers =========

def _error_response(exc: FundraiserError) -> JsonResponse:
    body = {"error": exc.message or exc.__class__.__name__}
    if isinstance(exc, AuthError):
        body["reason"] = exc.reason
    return JsonResponse(body, status=exc.status)


def _json_body(request) -> dict:
    try:
        data = json.loads(request.body.decode() or "{}")
    except (UnicodeDecodeError, json.JSONDecodeError):
        raise ValidationError("Invalid JSON")
    if not isinstance(data, dict):
        raise ValidationError("Invalid JSON")
    return data


def _int_param(value, name):
    if value in (None, ""):
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{name} must be a number")


def handles_errors(view):
    """Turn core errors into JSON error responses at the view boundary."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        try:
            return view(request, *args, **kwargs)
        except FundraiserError as e:
            return _error_response(e)
    return wrapper


def admin_required(view):
    """Every admin request carries the coach passphrase; nothing is remembered."""
    @wraps(view)
    def wrapper(request, *args, **kwargs):
        access.authorize(access.AccessKind.ADMIN, request.headers.get("X-Admin-Passphrase", ""))
        return view(request, *args, **kwargs)
    return wrapper


def _player_name(player) -> str:
    return player.full_name if player else "Unknown"


def _entry_admin_json(e) -> dict:
    state = resolve_payment(e)
    return {
        "id": e.id,
        "year": e.year,
        "month": e.month,
        "day": e.day,
        "date": date_label(e.year, e.month, e.day),
        "player_id": e.player_id,
        "player": _player_name(e.player),
        "supporter_name": e.supporter_name,
        "note": e.note,
        "phone": e.phone,
        "owed": state.owed,
        "payment_method": state.method.value,
        "payment_amount": format_money(state.amount),
        "is_paid": state.is_paid,
        "is_fully_paid": state.is_fully_paid,
        "payment_status": state.label,
        "created_at": e.created_at.isoformat(),
    }


def _entry_public_json(e) -> dict:
    # no phone, no amounts
    return {
        "id": e.id,
        "date": date_label(e.year, e.month, e.day),
        "supporter_name": e.supporter_name,
        "player": _player_name(e.player),
        "note": e.note,
        "payment_status": resolve_payment(e).label,
    }


# ========= Public calendar =========

@require_GET
@handles_errors
def season_overview(request, year: int):
    entries = store.read(year=year)
    winners = store.raffle_winners(year=year)
    return JsonResponse({
        "year": year,
        "months": month_overview(year, entries, winners),
    })


@require_GET
@handles_errors
def month_calendar(request, year: int, month: int):
    if not 1 <= month <= 12:
        raise ValidationError(f"Month out of range: {month}")

    by_day = {e.day: e for e in store.read(year=year) if e.month == month}
    raffle_day = store.raffle_winners(year=year).get((year, month))

    cells = []
    for day in build_calendar_cells(year, month):
        if day is None:
            cells.append(None)
            continue
        e = by_day.get(day)
        cells.append({
            "day": day,
            "taken": e is not None,
            "supporter_name": e.supporter_name if e else "",
            "player_first_name": e.player.first_name if e else "",
            "raffle": raffle_day == day,
        })
    return JsonResponse({"year": year, "month": month, "cells": cells, "raffle_day": raffle_day})


@require_GET
@handles_errors
def entry_detail(request, entry_id: int):
    e = store.get(entry_id)
    return JsonResponse({
        "date": date_label(e.year, e.month, e.day),
        "supporter_name": e.supporter_name,
        "player": _player_name(e.player),
        "note": e.note,
    })


@csrf_exempt
@require_POST
@ratelimit(key="ip", rate="10/m", block=True)
@handles_errors
def claim_day(request):
    data = _json_body(request)
    entry = store.create(
        year=data.get("year", settings.FUNDRAISER_SEASON_YEAR),
        month=data.get("month"),
        day=data.get("day"),
        player_id=data.get("player_id"),
        supporter_name=data.get("supporter_name"),
        note=data.get("note") or "",
        phone=data.get("phone"),
    )
    return JsonResponse({"ok": True, "entry": _entry_public_json(entry)}, status=201)


@require_GET
@handles_errors
def supporters_list(request):
    year = _int_param(request.GET.get("year"), "year")
    rows = [_entry_public_json(e) for e in store.read(year=year)]
    return JsonResponse({"entries": rows})


# ========= Family summaries (PIN gated) =========

@csrf_exempt
@require_POST
@ratelimit(key="ip", rate="10/m", block=True)
@handles_errors
def player_summary(request, player_id: int):
    data = _json_body(request)
    access.authorize(access.AccessKind.PLAYER_SUMMARY, data.get("pin"), resource=player_id)

    player = Player.objects.get(pk=player_id)
    entries = store.read(
        player_id=player_id,
        sort=data.get("sort", "date"),
        direction=data.get("direction", "asc"),
    )
    days, total = player_totals(entries, player.pk)
    return JsonResponse({
        "player": player.full_name,
        "days": days,
        "day_number_sum": total,
        "entries": [_entry_public_json(e) for e in entries],
    })


@csrf_exempt
@require_POST
@ratelimit(key="ip", rate="10/m", block=True)
@handles_errors
def supporter_detail(request):
    data = _json_body(request)
    name = data.get("supporter_name")
    name = name.strip() if isinstance(name, str) else ""
    player_id = _int_param(data.get("player_id"), "player_id")
    if not name or player_id is None:
        raise ValidationError("Supporter name and player are required")

    entries = [
        e for e in store.read(player_id=player_id)
        if (e.supporter_name or "").strip() == name
    ]
    if not entries:
        # same answer as a wrong code, so the lookup does not reveal who supported whom
        raise AuthError("Incorrect PIN. Please try again.", reason=access.MISMATCH)

    access.authorize(access.AccessKind.SUPPORTER_DETAIL, data.get("code"), resource=entries)

    summary = summarize_by_supporter(entries)[0]
    return JsonResponse({
        "supporter_name": summary.name,
        "dates": summary.dates,
        "total_owed": summary.total_owed,
        "total_paid": format_money(summary.total_paid),
        "remaining": format_money(summary.remaining),
        "entries": [_entry_public_json(e) for e in entries],
    })


# ========= Admin =========

@require_GET
@handles_errors
@admin_required
def entries_list(request):
    paid = request.GET.get("paid")
    if paid not in (None, "", "paid", "unpaid"):
        raise ValidationError(f"Unknown paid filter: {paid}")

    entries = store.read(
        year=_int_param(request.GET.get("year"), "year"),
        sort=request.GET.get("sort", "date"),
        direction=request.GET.get("direction", "asc"),
        paid={"paid": True, "unpaid": False}.get(paid),
    )
    return JsonResponse({"entries": [_entry_admin_json(e) for e in entries]})


@csrf_exempt
@require_POST
@handles_errors
@admin_required
def edit_entry(request, entry_id: int):
    entry = store.update(entry_id, _json_body(request))
    return JsonResponse({"ok": True, "entry": _entry_admin_json(entry)})


@csrf_exempt
@require_POST
@handles_errors
@admin_required
def clear_day(request, entry_id: int):
    store.delete(entry_id)
    return JsonResponse({"ok": True})


@csrf_exempt
@require_POST
@handles_errors
@admin_required
def quick_paid(request, entry_id: int):
    data = _json_body(request)
    entry = store.quick_mark_paid(entry_id, data.get("channel"))
    return JsonResponse({"ok": True, "entry": _entry_admin_json(entry)})


@require_GET
@handles_errors
@admin_required
def player_summaries(request):
    entries = store.read(year=_int_param(request.GET.get("year"), "year"))
    summaries = summarize_by_player(entries)
    players = Player.objects.in_bulk([s.player_id for s in summaries])
    supporters = supporters_by_player(entries)
    rows = [
        {
            "player_id": s.player_id,
            "player": _player_name(players.get(s.player_id)),
            "days": s.days,
            "day_number_sum": s.day_number_sum,
            "supporters": supporters.get(s.player_id, []),
        }
        for s in summaries
    ]
    return JsonResponse({"players": rows})


@require_GET
@handles_errors
@admin_required
def supporter_summaries(request):
    entries = store.read(year=_int_param(request.GET.get("year"), "year"))
    rows = [
        {
            "supporter_name": s.name,
            "dates": ", ".join(s.dates),
            "total_owed": s.total_owed,
            "total_paid": format_money(s.total_paid),
            "remaining": format_money(s.remaining),
        }
        for s in summarize_by_supporter(entries)
    ]
    return JsonResponse({"supporters": rows})


@csrf_exempt
@require_POST
@handles_errors
@admin_required
def set_raffle_winner(request):
    data = _json_body(request)
    winners = store.set_raffle_winner(
        data.get("year", settings.FUNDRAISER_SEASON_YEAR),
        data.get("month"),
        data.get("day"),
    )
    return JsonResponse({
        "ok": True,
        "winners": {f"{y}-{m}": d for (y, m), d in sorted(winners.items())},
    })


@csrf_exempt
@require_POST
@handles_errors
@admin_required
def set_player_pin(request):
    data = _json_body(request)
    overrides = store.set_pin_override(data.get("player_id"), data.get("pin"))
    return JsonResponse({"ok": True, "players_with_override": sorted(overrides)})


# ============== CSV export ======================== #

@require_GET
@handles_errors
@admin_required
def export_entries_csv(request):
    year = _int_param(request.GET.get("year"), "year")
    entries = store.read(year=year)

    filename = f"calendar_entries_{year}.csv" if year else "calendar_entries.csv"
    resp = HttpResponse(content_type="text/csv; charset=utf-8")
    resp["Content-Disposition"] = f'attachment; filename="{filename}"'
    write_entries_csv(entries, resp)
    return resp
