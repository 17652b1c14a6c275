import logging
import re
from decimal import Decimal, InvalidOperation

from django.db import DatabaseError, IntegrityError, transaction

from .calendar_grid import days_in_month, is_valid_day
from .errors import ConflictError, NotFoundError, StoreIOError, ValidationError
from .models import CalendarEntry, PaymentMethod, PinOverride, Player, RaffleWinner
from .payments import quick_mark_paid, resolve_payment

logger = logging.getLogger(__name__)

PIN_RE = re.compile(r"^\d{4}$")

EDITABLE_FIELDS = {"supporter_name", "player_id", "note", "phone", "payment_method", "payment_amount"}
CLAIM_KEY_FIELDS = {"year", "month", "day"}

SORT_KEYS = ("date", "supporter", "status")

MIN_YEAR, MAX_YEAR = 1, 9999
# payment_amount is DecimalField(max_digits=8, decimal_places=2)
MAX_AMOUNT = Decimal("1000000")


def _date_key(e):
    return (e.year, e.month, e.day)


_SORTERS = {
    "date": _date_key,
    "supporter": lambda e: (e.supporter_name or "").lower(),
    "status": lambda e: resolve_payment(e).label.lower(),
}


def _text(value, label) -> str:
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{label} must be text")
    return value


def _clean_text(value, label) -> str:
    return _text(value, label).strip()


def _as_int(value, label) -> int:
    # JSON numbers may arrive as floats; 12.0 is fine, 12.7 is not
    if isinstance(value, bool):
        raise ValidationError(f"{label} must be a whole number")
    if isinstance(value, float):
        if not value.is_integer():
            raise ValidationError(f"{label} must be a whole number")
        return int(value)
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{label} must be a whole number")


def _check_year(year) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Year out of range: {year}")


def _clean_amount(value) -> Decimal:
    if isinstance(value, bool):
        raise ValidationError("Payment amount must be a number")
    try:
        amount = Decimal(str(value if value not in (None, "") else 0))
        if not amount.is_finite() or amount < 0:
            raise ValidationError("Payment amount must be zero or more")
        if amount >= MAX_AMOUNT:
            raise ValidationError(f"Payment amount must be less than {MAX_AMOUNT}")
        return amount.quantize(Decimal("0.01"))
    except InvalidOperation:
        raise ValidationError("Payment amount must be a number")


def _get_player(player_id) -> Player:
    if player_id in (None, ""):
        raise ValidationError("Please choose a player")
    try:
        return Player.objects.get(pk=player_id)
    except (Player.DoesNotExist, ValueError, TypeError):
        raise ValidationError(f"Unknown player: {player_id}")


class EntryStore:
    """
    Claimed calendar days plus the raffle winners and PIN overrides.

    Mutations run inside a transaction and are committed before returning.
    The (year, month, day) unique constraint is the real guard against two
    claims on one date; the existence check before insert only gives a
    clean ConflictError in the common case.
    """

    # ========= Calendar entries =========

    def create(self, *, year, month, day, player_id, supporter_name, note="", phone="") -> CalendarEntry:
        year, month, day = _as_int(year, "Year"), _as_int(month, "Month"), _as_int(day, "Day")
        _check_year(year)
        if not is_valid_day(year, month, day):
            raise ValidationError(f"Not a calendar date: {year}-{month}-{day}")

        name = _clean_text(supporter_name, "Supporter name")
        if not name:
            raise ValidationError("Supporter name is required")

        player = _get_player(player_id)
        note_text = _text(note, "Note")
        phone_text = _clean_text(phone, "Phone")

        try:
            with transaction.atomic():
                if CalendarEntry.objects.filter(year=year, month=month, day=day).exists():
                    raise ConflictError("That date is already claimed")
                entry = CalendarEntry.objects.create(
                    year=year,
                    month=month,
                    day=day,
                    player=player,
                    supporter_name=name,
                    note=note_text,
                    phone=phone_text,
                )
        except ConflictError:
            logger.warning("Claim rejected, %s-%s-%s already taken", year, month, day)
            raise
        except IntegrityError:
            # lost the race to another writer between check and insert
            logger.warning("Claim rejected by unique constraint for %s-%s-%s", year, month, day)
            raise ConflictError("That date is already claimed")
        except DatabaseError as e:
            logger.error("Failed to create entry for %s-%s-%s", year, month, day, exc_info=True)
            raise StoreIOError(f"Could not save the claim: {e}") from e

        logger.info("Entry %s created: %s-%s-%s for player %s", entry.id, year, month, day, player.id)
        return entry

    def get(self, entry_id) -> CalendarEntry:
        try:
            return CalendarEntry.objects.select_related("player").get(pk=entry_id)
        except (CalendarEntry.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"Entry {entry_id} not found")
        except DatabaseError as e:
            logger.error("Failed to load entry %s", entry_id, exc_info=True)
            raise StoreIOError(str(e)) from e

    def read(self, year=None, sort="date", direction="asc", player_id=None, paid=None) -> list[CalendarEntry]:
        if sort not in _SORTERS:
            raise ValidationError(f"Unknown sort key: {sort}")
        if direction not in ("asc", "desc"):
            raise ValidationError(f"Unknown sort direction: {direction}")

        qs = CalendarEntry.objects.select_related("player").order_by("year", "month", "day")
        if year is not None:
            qs = qs.filter(year=year)
        if player_id is not None:
            qs = qs.filter(player_id=player_id)

        try:
            entries = list(qs)
        except DatabaseError as e:
            logger.error("Failed to read entries", exc_info=True)
            raise StoreIOError(str(e)) from e

        if paid is not None:
            entries = [e for e in entries if resolve_payment(e).is_paid == paid]

        # sorted() is stable, so ties keep calendar order
        return sorted(entries, key=_SORTERS[sort], reverse=(direction == "desc"))

    def update(self, entry_id, patch: dict) -> CalendarEntry:
        if CLAIM_KEY_FIELDS & patch.keys():
            raise ValidationError("A claimed date cannot be moved; clear it and claim the new date")
        unknown = patch.keys() - EDITABLE_FIELDS
        if unknown:
            raise ValidationError(f"Fields cannot be edited: {', '.join(sorted(unknown))}")

        changes = {}
        if "supporter_name" in patch:
            name = _clean_text(patch["supporter_name"], "Supporter name")
            if not name:
                raise ValidationError("Supporter name is required")
            changes["supporter_name"] = name
        if "player_id" in patch:
            changes["player"] = _get_player(patch["player_id"])
        if "note" in patch:
            changes["note"] = _text(patch["note"], "Note")
        if "phone" in patch:
            changes["phone"] = _clean_text(patch["phone"], "Phone")
        if "payment_method" in patch:
            if patch["payment_method"] not in PaymentMethod.values:
                raise ValidationError(f"Unknown payment method: {patch['payment_method']}")
            changes["payment_method"] = patch["payment_method"]
        if "payment_amount" in patch:
            changes["payment_amount"] = _clean_amount(patch["payment_amount"])

        try:
            with transaction.atomic():
                entry = self.get(entry_id)
                for field, value in changes.items():
                    setattr(entry, field, value)
                entry.save()
        except DatabaseError as e:
            logger.error("Failed to update entry %s", entry_id, exc_info=True)
            raise StoreIOError(f"Could not save the changes: {e}") from e

        logger.info("Entry %s updated: %s", entry_id, ", ".join(sorted(changes)) or "no changes")
        return entry

    def delete(self, entry_id) -> None:
        try:
            with transaction.atomic():
                deleted, _ = CalendarEntry.objects.filter(pk=entry_id).delete()
        except (ValueError, TypeError):
            raise NotFoundError(f"Entry {entry_id} not found")
        except DatabaseError as e:
            logger.error("Failed to delete entry %s", entry_id, exc_info=True)
            raise StoreIOError(f"Could not clear the date: {e}") from e

        if not deleted:
            raise NotFoundError(f"Entry {entry_id} not found")
        logger.info("Entry %s cleared", entry_id)

    def quick_mark_paid(self, entry_id, channel) -> CalendarEntry:
        entry = self.get(entry_id)
        try:
            patch = quick_mark_paid(entry, channel)
        except ValueError as e:
            raise ValidationError(str(e))
        return self.update(entry_id, patch)

    # ========= Raffle winners =========

    def raffle_winners(self, year=None) -> dict[tuple[int, int], int]:
        qs = RaffleWinner.objects.all()
        if year is not None:
            qs = qs.filter(year=year)
        try:
            return {(w.year, w.month): w.winning_day for w in qs}
        except DatabaseError as e:
            logger.error("Failed to read raffle winners", exc_info=True)
            raise StoreIOError(str(e)) from e

    def set_raffle_winner(self, year, month, day=None) -> dict[tuple[int, int], int]:
        """
        Record (or with day=None, clear) the winning day for a month.

        Any real day of the month can win; every day number is a ticket
        count whether or not that date was claimed.
        """
        year, month = _as_int(year, "Year"), _as_int(month, "Month")
        _check_year(year)
        if not 1 <= month <= 12:
            raise ValidationError(f"Month out of range: {month}")
        if day in (None, ""):
            day = None
        else:
            day = _as_int(day, "Winning day")
            if not 1 <= day <= days_in_month(year, month):
                raise ValidationError(f"Not a calendar date: {year}-{month}-{day}")

        try:
            with transaction.atomic():
                if day is None:
                    RaffleWinner.objects.filter(year=year, month=month).delete()
                    logger.info("Raffle winner cleared for %s-%s", year, month)
                else:
                    RaffleWinner.objects.update_or_create(
                        year=year, month=month, defaults={"winning_day": day}
                    )
                    logger.info("Raffle winner for %s-%s set to day %s", year, month, day)
        except DatabaseError as e:
            logger.error("Failed to save raffle winner for %s-%s", year, month, exc_info=True)
            raise StoreIOError(str(e)) from e

        return self.raffle_winners()

    # ========= PIN overrides =========

    def pin_overrides(self) -> dict[int, str]:
        try:
            return dict(PinOverride.objects.values_list("player_id", "pin"))
        except DatabaseError as e:
            logger.error("Failed to read PIN overrides", exc_info=True)
            raise StoreIOError(str(e)) from e

    def set_pin_override(self, player_id, pin=None) -> dict[int, str]:
        try:
            player = Player.objects.get(pk=player_id)
        except (Player.DoesNotExist, ValueError, TypeError):
            raise NotFoundError(f"Player {player_id} not found")

        try:
            with transaction.atomic():
                if pin in (None, ""):
                    PinOverride.objects.filter(player=player).delete()
                    logger.info("PIN override removed for player %s", player.id)
                else:
                    pin = str(pin).strip()
                    if not PIN_RE.match(pin):
                        raise ValidationError("PIN must be exactly 4 digits")
                    PinOverride.objects.update_or_create(player=player, defaults={"pin": pin})
                    logger.info("PIN override set for player %s", player.id)
        except DatabaseError as e:
            logger.error("Failed to save PIN override for player %s", player.id, exc_info=True)
            raise StoreIOError(str(e)) from e

        return self.pin_overrides()
