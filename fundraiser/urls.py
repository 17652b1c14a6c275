from django.urls import path
from . import views

urlpatterns = [
    # Public calendar
    path("api/calendar/<int:year>/", views.season_overview, name="season_overview"),
    path("api/calendar/<int:year>/<int:month>/", views.month_calendar, name="month_calendar"),
    path("api/entries/claim/", views.claim_day, name="claim_day"),
    path("api/entries/<int:entry_id>/", views.entry_detail, name="entry_detail"),
    path("api/supporters/", views.supporters_list, name="supporters_list"),

    # Family summaries (PIN)
    path("api/summary/player/<int:player_id>/", views.player_summary, name="player_summary"),
    path("api/summary/supporter/", views.supporter_detail, name="supporter_detail"),

    # Admin (coach passphrase)
    path("api/entries/", views.entries_list, name="entries_list"),
    path("api/entries/<int:entry_id>/edit/", views.edit_entry, name="edit_entry"),
    path("api/entries/<int:entry_id>/clear/", views.clear_day, name="clear_day"),
    path("api/entries/<int:entry_id>/quick-paid/", views.quick_paid, name="quick_paid"),
    path("api/summary/players/", views.player_summaries, name="player_summaries"),
    path("api/summary/supporters/", views.supporter_summaries, name="supporter_summaries"),
    path("api/raffle/", views.set_raffle_winner, name="set_raffle_winner"),
    path("api/pins/", views.set_player_pin, name="set_player_pin"),

    # Export CSV (admin only)
    path("export/entries.csv", views.export_entries_csv, name="export_entries_csv"),
]
