from django.contrib import admin, messages

from .errors import FundraiserError
from .models import CalendarEntry, PaymentMethod, PinOverride, Player, RaffleWinner
from .payments import resolve_payment
from .store import EntryStore

store = EntryStore()


def _quick_mark(modeladmin, request, queryset, channel):
    """
    Apply the one-click paid toggle for `channel` to each selected entry.
    Entries already fully paid through that channel go back to unpaid.
    """
    count_ok = 0

    for entry in queryset:
        try:
            updated = store.quick_mark_paid(entry.pk, channel)
        except FundraiserError as e:
            messages.error(request, f"Could not update entry {entry.pk} ({entry}): {e.message}")
            continue

        count_ok += 1
        messages.success(
            request,
            f"{entry.year}-{entry.month:02d}-{entry.day:02d} {updated.supporter_name}: "
            f"{resolve_payment(updated).label}",
        )

    if count_ok > 1:
        messages.info(request, f"Updated {count_ok} entries.")


@admin.action(description="Toggle paid in full via Zelle")
def toggle_paid_zelle(modeladmin, request, queryset):
    _quick_mark(modeladmin, request, queryset, PaymentMethod.ZELLE)


@admin.action(description="Toggle paid in full via Venmo")
def toggle_paid_venmo(modeladmin, request, queryset):
    _quick_mark(modeladmin, request, queryset, PaymentMethod.VENMO)


@admin.register(CalendarEntry)
class CalendarEntryAdmin(admin.ModelAdmin):
    list_display = (
        "id",
        "year",
        "month",
        "day",
        "supporter_name",
        "player",
        "phone",
        "payment_status",
        "created_at",
    )
    list_filter = ("year", "month", "payment_method", "player")
    search_fields = ("supporter_name", "phone", "note")
    actions = [toggle_paid_zelle, toggle_paid_venmo]

    def get_readonly_fields(self, request, obj=None):
        # claimed dates move only by clearing and re-claiming
        if obj is not None:
            return ("year", "month", "day", "created_at")
        return ("created_at",)

    def payment_status(self, obj):
        return resolve_payment(obj).label
    payment_status.short_description = "Payment status"


@admin.register(Player)
class PlayerAdmin(admin.ModelAdmin):
    list_display = ("id", "first_name", "last_name", "number", "has_pin")
    search_fields = ("first_name", "last_name")

    def has_pin(self, obj):
        return bool(obj.pin) or hasattr(obj, "pin_override")
    has_pin.boolean = True
    has_pin.short_description = "PIN set"


@admin.register(RaffleWinner)
class RaffleWinnerAdmin(admin.ModelAdmin):
    list_display = ("id", "year", "month", "winning_day")
    list_filter = ("year",)


@admin.register(PinOverride)
class PinOverrideAdmin(admin.ModelAdmin):
    list_display = ("id", "player", "updated_at")
