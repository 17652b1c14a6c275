"""
Calendar grid helpers.

Weeks start on Sunday, matching the printed fundraiser calendar. A grid is a
flat list of cells, seven per week: ``None`` for a blank cell, otherwise the
day number.
"""

import calendar

MONTH_NAMES = list(calendar.month_name)[1:]
WEEKDAY_SHORT = ["Sun", "Mon", "Tue", "Wed", "Thu", "Fri", "Sat"]

_CALENDAR = calendar.Calendar(firstweekday=calendar.SUNDAY)


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def is_valid_day(year: int, month: int, day: int) -> bool:
    if not 1 <= month <= 12:
        return False
    return 1 <= day <= days_in_month(year, month)


def build_calendar_cells(year: int, month: int) -> list[int | None]:
    # itermonthdays pads with 0 to whole weeks on both sides
    return [d or None for d in _CALENDAR.itermonthdays(year, month)]


def month_label(month: int, day: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {day}"


def date_label(year: int, month: int, day: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {day}, {year}"


def month_overview(year: int, entries, winners: dict) -> list[dict]:
    """
    Twelve month tiles for the season overview:
    - 'cells': the grid for the month
    - 'taken': sorted day numbers with a claim
    - 'raffle_day': the drawn winning day, or None
    """
    taken: dict[int, set[int]] = {m: set() for m in range(1, 13)}
    for e in entries:
        if e.year == year and e.player_id:
            taken[e.month].add(e.day)

    return [
        {
            "month": m,
            "name": MONTH_NAMES[m - 1],
            "cells": build_calendar_cells(year, m),
            "taken": sorted(taken[m]),
            "raffle_day": winners.get((year, m)),
        }
        for m in range(1, 13)
    ]
