"""
Tests for the signed-token helpers in authentication.tokens.
"""

from freezegun import freeze_time
from rest_framework_simplejwt.tokens import RefreshToken

from authentication.tokens import issue_tokens, verify_access_token


class TestVerifyAccessToken:
    def test_roundtrip(self, user):
        tokens = issue_tokens(user)

        assert verify_access_token(tokens["token"]) == user.id

    def test_refresh_token_is_not_an_access_token(self, user):
        """
        Only access tokens bind identity.

        Why it matters: Refresh tokens live for days; accepting them on the
        live connection would stretch every session.
        """
        assert verify_access_token(str(RefreshToken.for_user(user))) is None

    def test_garbage_and_empty(self):
        assert verify_access_token("not-a-jwt") is None
        assert verify_access_token("") is None
        assert verify_access_token(None) is None

    def test_signature_from_another_token_is_rejected(self, user, other_user):
        header, payload, _ = issue_tokens(user)["token"].split(".")
        foreign_signature = issue_tokens(other_user)["token"].split(".")[2]

        assert verify_access_token(f"{header}.{payload}.{foreign_signature}") is None

    def test_expired_token(self, user):
        with freeze_time("2026-01-01 00:00:00"):
            token = issue_tokens(user)["token"]

        with freeze_time("2026-01-01 02:00:00"):
            assert verify_access_token(token) is None
