"""
Authentication services.

This module provides the AuthService class for registration, credential
login, password changes and account removal.

Related files:
    - models.py: User
    - tokens.py: Access/refresh token minting
    - signals.py: user_registered / user_logged_in (global chat bootstrap
      subscribes to these)

Security:
    - Passwords hashed with Django's PBKDF2
    - Banned and inactive accounts fail login with the same message as a
      wrong password
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import authenticate
from django.contrib.auth.password_validation import validate_password
from django.core.exceptions import ValidationError as DjangoValidationError
from django.db import IntegrityError

from authentication.models import User
from authentication.signals import send_best_effort, user_logged_in, user_registered
from authentication.tokens import issue_tokens
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from typing import Any


class AuthService(BaseService):
    """
    Account lifecycle business logic.

    Usage:
        from authentication.services import AuthService

        result = AuthService.register("alice", "alice@example.com", "S3cure!pass")
        if result:
            user, token = result.data["user"], result.data["token"]
    """

    @classmethod
    def register(
        cls, username: str, email: str, password: str
    ) -> ServiceResult[dict[str, Any]]:
        """
        Create an account and issue its first token pair.

        The global chat bootstrap runs afterwards via user_registered; its
        failure is logged and does not affect the result.

        Returns:
            ServiceResult with {"user", "token", "refresh"}
        """
        logger = cls.get_logger()
        email = User.objects.normalize_email(email)

        if User.objects.filter(email__iexact=email).exists():
            return ServiceResult.failure("Email already registered", "EMAIL_EXISTS")
        if User.objects.filter(username__iexact=username).exists():
            return ServiceResult.failure("Username already taken", "USERNAME_EXISTS")

        try:
            with cls.atomic():
                user = User.objects.create_user(
                    email=email, username=username, password=password
                )
        except IntegrityError:
            logger.warning(f"Concurrent registration collided for {email}")
            return ServiceResult.failure("Account already exists", "ACCOUNT_EXISTS")

        logger.info(f"User registered: {user.id} ({user.username})")
        send_best_effort(user_registered, sender=User, user=user)

        return ServiceResult.success({"user": user, **issue_tokens(user)})

    @classmethod
    def login(cls, email: str, password: str) -> ServiceResult[dict[str, Any]]:
        """
        Verify credentials and issue a token pair.

        Returns:
            ServiceResult with {"user", "token", "refresh"}, or
            INVALID_CREDENTIALS
        """
        user = authenticate(
            email=User.objects.normalize_email(email), password=password
        )
        if user is None or user.is_banned:
            cls.get_logger().info(f"Failed login for {email}")
            return ServiceResult.failure("Invalid credentials", "INVALID_CREDENTIALS")

        send_best_effort(user_logged_in, sender=User, user=user)

        return ServiceResult.success({"user": user, **issue_tokens(user)})

    @classmethod
    def change_password(
        cls, user: User, current_password: str, new_password: str
    ) -> ServiceResult[User]:
        """Replace the password after re-checking the current one."""
        if not user.check_password(current_password):
            return ServiceResult.failure(
                "Current password is incorrect", "INVALID_PASSWORD"
            )

        try:
            validate_password(new_password, user)
        except DjangoValidationError as e:
            return ServiceResult.failure(
                "Password does not meet requirements",
                "VALIDATION_ERROR",
                errors={"newPassword": list(e.messages)},
            )

        user.set_password(new_password)
        user.save(update_fields=["password", "updated_at"])
        cls.get_logger().info(f"Password changed for user {user.id}")
        return ServiceResult.success(user)

    @classmethod
    def delete_account(cls, user: User) -> ServiceResult[None]:
        """
        Remove an account.

        The user's messages and chat memberships go with it. Chats the user
        created survive with their creator cleared.
        """
        user_id = user.id
        with cls.atomic():
            user.delete()
        cls.get_logger().info(f"Account deleted: {user_id}")
        return ServiceResult.success(None)
