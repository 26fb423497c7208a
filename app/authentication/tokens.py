"""
Signed token helpers (the Identity Provider seam).

Wraps djangorestframework-simplejwt so callers outside the REST auth stack,
the websocket middleware and the message ingest path, verify tokens the same
way JWTAuthentication does.

Usage:
    from authentication.tokens import issue_tokens, verify_access_token

    tokens = issue_tokens(user)          # {"token": ..., "refresh": ...}
    user_id = verify_access_token(raw)   # int or None
"""

from __future__ import annotations

import logging

from rest_framework_simplejwt.exceptions import TokenError
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import AccessToken, RefreshToken

logger = logging.getLogger(__name__)


def issue_tokens(user) -> dict[str, str]:
    """
    Mint an access/refresh pair for a user.

    Returns:
        {"token": <access>, "refresh": <refresh>}
    """
    refresh = RefreshToken.for_user(user)
    return {"token": str(refresh.access_token), "refresh": str(refresh)}


def verify_access_token(raw_token: str | None) -> int | None:
    """
    Validate a signed access token and return the user id it was issued for.

    Signature, expiry and token type are all checked. Any failure yields
    None; callers decide whether that is a 401 or a silent drop.
    """
    if not raw_token or not isinstance(raw_token, str):
        return None

    try:
        token = AccessToken(raw_token)
    except TokenError as e:
        logger.debug(f"Rejected access token: {e}")
        return None

    user_id = token.get(api_settings.USER_ID_CLAIM)
    try:
        return int(user_id)
    except (TypeError, ValueError):
        logger.warning(f"Access token carries a non-integer subject: {user_id!r}")
        return None
