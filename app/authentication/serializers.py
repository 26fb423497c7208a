"""
Serializers for authentication models.

This module provides DRF serializers for:
- User model (read operations, public summary and admin view)
- Registration and login payloads
- Password change payloads

Related files:
    - models.py: User
    - views.py: Views that use these serializers
    - services.py: AuthService that consumes validated data

Security:
    - Password fields are write-only
    - All User serializers are read-only
"""

from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from rest_framework import serializers

from authentication.models import User, validate_username_format


class UserSerializer(serializers.ModelSerializer):
    """
    Serializer for the authenticated user's own account.

    Used by register/login/me responses and the moderation endpoints.
    """

    isBanned = serializers.BooleanField(source="is_banned", read_only=True)
    createdAt = serializers.DateTimeField(source="date_joined", read_only=True)

    class Meta:
        model = User
        fields = ["id", "username", "email", "role", "isBanned", "createdAt"]
        read_only_fields = fields


class UserSummarySerializer(serializers.ModelSerializer):
    """Public view of a user: what other chat members see."""

    class Meta:
        model = User
        fields = ["id", "username"]
        read_only_fields = fields


class RegisterSerializer(serializers.Serializer):
    """
    Serializer for user registration.

    Uniqueness of email/username is decided by AuthService so the error
    messages stay stable; this only checks shape and password strength.
    """

    username = serializers.CharField(
        max_length=30, validators=[validate_username_format]
    )
    email = serializers.EmailField()
    password = serializers.CharField(
        write_only=True,
        style={"input_type": "password"},
    )

    def validate_email(self, value):
        return value.strip()

    def validate(self, attrs):
        """Run Django's password validators against the candidate account."""
        candidate = User(username=attrs["username"], email=attrs["email"])
        try:
            validate_password(attrs["password"], candidate)
        except DjangoValidationError as e:
            raise serializers.ValidationError({"password": list(e.messages)})
        return attrs


class LoginSerializer(serializers.Serializer):
    """Email/password credentials."""

    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, style={"input_type": "password"})


class ChangePasswordSerializer(serializers.Serializer):
    currentPassword = serializers.CharField(write_only=True)
    newPassword = serializers.CharField(write_only=True)


class AuthResponseSerializer(serializers.Serializer):
    """Shape of register/login responses (schema only)."""

    user = UserSerializer()
    token = serializers.CharField()
    refresh = serializers.CharField()
