"""
Shared pytest configuration.

Tests run against pytest-django's throwaway database. Rate limiting is
switched off and a known coach passphrase is installed for every test.
"""

import pytest

from fundraiser.models import Player
from fundraiser.store import EntryStore

ADMIN_PASSPHRASE = "thunderboom"


@pytest.fixture(autouse=True)
def fundraiser_settings(settings):
    settings.FUNDRAISER_ADMIN_PASSPHRASE = ADMIN_PASSPHRASE
    settings.FUNDRAISER_SEASON_YEAR = 2025
    settings.RATELIMIT_ENABLE = False
    return settings


@pytest.fixture
def store():
    return EntryStore()


@pytest.fixture
def player_with_pin(db):
    return Player.objects.create(first_name="Harper", last_name="Diaz", number=12, pin="4821")


@pytest.fixture
def player_without_pin(db):
    return Player.objects.create(first_name="Maya", last_name="Cole", number=7, pin="")


@pytest.fixture
def admin_headers():
    return {"HTTP_X_ADMIN_PASSPHRASE": ADMIN_PASSPHRASE}
