"""
Authentication models.

This module defines the account model used across the chat service:
- User: Custom user model with email-based authentication, a unique
  display username, a platform role and a ban flag

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AuthService business logic
    - tokens.py: Signed-token issue/verification (Identity Provider)

Security:
    - User passwords hashed with Django's PBKDF2
    - Banned users keep their row; authentication layers refuse them
"""

import re

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.core.exceptions import ValidationError
from django.db import models

from authentication.managers import UserManager


def validate_username_format(value):
    """Validate username format: 3-30 chars, alphanumeric + _ + -."""
    if not re.match(r"^[a-zA-Z0-9_-]{3,30}$", value):
        raise ValidationError(
            "Username must be 3-30 characters and contain only "
            "letters, numbers, underscores, and hyphens."
        )


class UserRole(models.TextChoices):
    """Platform-wide role. Admins may moderate messages and ban accounts."""

    MEMBER = "member", "Member"
    ADMIN = "admin", "Admin"


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the login identifier.

    Fields:
        email: Login identifier, unique
        username: Display name shown next to messages, unique
        role: member or admin
        is_banned: Set by moderators; banned users cannot authenticate
        is_active: Whether the user account is active
        is_staff: Whether the user is operations staff
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Only role, is_banned and the password change after creation.

    Usage:
        user = User.objects.create_user(
            email="user@example.com",
            username="user",
            password="securepassword",
        )
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (login identifier)",
    )
    username = models.CharField(
        unique=True,
        max_length=30,
        validators=[validate_username_format],
        help_text="Unique display name (3-30 chars, alphanumeric + _ + -)",
    )

    role = models.CharField(
        max_length=10,
        choices=UserRole.choices,
        default=UserRole.MEMBER,
        help_text="Platform role",
    )
    is_banned = models.BooleanField(
        default=False,
        db_index=True,
        help_text="Banned users cannot log in, connect, or send messages",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user is operations staff.",
    )

    # Timestamps
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    REQUIRED_FIELDS = ["username"]

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.username

    @property
    def is_platform_admin(self) -> bool:
        return self.role == UserRole.ADMIN
