"""
DRF authentication class for the REST surface.

Extends simplejwt's JWTAuthentication so a valid token belonging to a banned
account is refused with 401, the same way an invalid token is.
"""

from django.utils.translation import gettext_lazy as _
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import AuthenticationFailed


class ActiveUserJWTAuthentication(JWTAuthentication):
    """JWT authentication that also rejects banned users."""

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if user.is_banned:
            raise AuthenticationFailed(_("User is banned"), code="user_banned")
        return user
