"""
Shared-secret gates for the admin tools and the family summary pages.

This is authorization by shared secret, not authentication: no identity is
established and nothing is stored in the session. Each protected request
presents its passphrase or PIN again.
"""

import enum
import hmac
import logging
import re
from dataclasses import dataclass

from django.conf import settings

from .errors import AuthError, NotFoundError, ValidationError
from .models import PinOverride, Player

logger = logging.getLogger(__name__)

GRANTED = "granted"
MISMATCH = "mismatch"
NO_PIN = "no_pin"


class AccessKind(enum.Enum):
    ADMIN = "admin"
    PLAYER_SUMMARY = "player_summary"
    SUPPORTER_DETAIL = "supporter_detail"


@dataclass(frozen=True)
class AccessDecision:
    granted: bool
    reason: str

    def __bool__(self):
        return self.granted


@dataclass(frozen=True)
class AccessToken:
    kind: AccessKind
    resource: object = None


def _secret_equals(given: str, expected: str) -> bool:
    return hmac.compare_digest(given.encode(), expected.encode())


def _clean_code(code) -> str:
    code = str(code or "").strip()
    if not re.fullmatch(r"\d{4}", code):
        raise ValidationError("Please enter a 4-digit code")
    return code


def _phone_suffix(phone) -> str:
    digits = re.sub(r"\D", "", phone or "")
    return digits[-4:] if len(digits) >= 4 else ""


def effective_pin(player, overrides=None) -> str:
    """Override PIN if one is set, else the player's own PIN ('' = none)."""
    if overrides is None:
        override = PinOverride.objects.filter(player_id=player.pk).values_list("pin", flat=True).first()
    else:
        override = overrides.get(player.pk)
    return override or player.pin or ""


def authorize_admin(passphrase) -> bool:
    expected = settings.FUNDRAISER_ADMIN_PASSPHRASE
    if not expected:
        logger.warning("Admin access refused: FUNDRAISER_ADMIN_PASSPHRASE is not configured")
        return False
    ok = _secret_equals(str(passphrase or ""), expected)
    if not ok:
        logger.warning("Admin passphrase mismatch")
    return ok


def authorize_player_summary(player_id, pin, overrides=None) -> AccessDecision:
    try:
        player = Player.objects.get(pk=player_id)
    except (Player.DoesNotExist, ValueError, TypeError):
        raise NotFoundError(f"Player {player_id} not found")

    code = _clean_code(pin)
    expected = effective_pin(player, overrides)
    if not expected:
        return AccessDecision(False, NO_PIN)
    if not _secret_equals(code, expected):
        logger.warning("PIN mismatch for player %s summary", player.pk)
        return AccessDecision(False, MISMATCH)
    return AccessDecision(True, GRANTED)


def authorize_supporter_detail(entries, code, overrides=None) -> AccessDecision:
    """
    `entries` are one supporter's claims for one player. Either that
    player's PIN or the last four digits of a phone number on any of those
    claims unlocks the detail.
    """
    code = _clean_code(code)
    secrets = set()
    players = {}
    for e in entries:
        players.setdefault(e.player_id, e.player)
        suffix = _phone_suffix(e.phone)
        if suffix:
            secrets.add(suffix)
    for player in players.values():
        pin = effective_pin(player, overrides)
        if pin:
            secrets.add(pin)

    if not secrets:
        return AccessDecision(False, NO_PIN)
    # compare against every secret so timing does not reveal which matched
    matched = [_secret_equals(code, s) for s in secrets]
    if any(matched):
        return AccessDecision(True, GRANTED)
    logger.warning("Supporter detail code mismatch")
    return AccessDecision(False, MISMATCH)


def authorize(kind: AccessKind, credential, resource=None, overrides=None) -> AccessToken:
    """
    Single entry point over the three gates. `resource` is the player id
    for PLAYER_SUMMARY and the entry list for SUPPORTER_DETAIL.
    Raises AuthError with reason 'mismatch' or 'no_pin'.
    """
    if kind is AccessKind.ADMIN:
        if not authorize_admin(credential):
            raise AuthError("Incorrect password", reason=MISMATCH)
        return AccessToken(kind)

    if kind is AccessKind.PLAYER_SUMMARY:
        decision = authorize_player_summary(resource, credential, overrides)
    elif kind is AccessKind.SUPPORTER_DETAIL:
        decision = authorize_supporter_detail(resource, credential, overrides)
    else:
        raise ValueError(f"Unknown access kind: {kind!r}")

    if decision.reason == NO_PIN:
        raise AuthError("No PIN has been set for this player yet. Please contact the coaches.", reason=NO_PIN)
    if not decision.granted:
        raise AuthError("Incorrect PIN. Please try again.", reason=MISMATCH)
    return AccessToken(kind, resource)
