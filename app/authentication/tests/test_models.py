"""
Tests for the User model and UserManager.

This module tests:
- create_user / create_superuser behavior
- Username format validation
- Uniqueness constraints
- Role helpers
"""

import pytest
from django.core.exceptions import ValidationError
from django.db import IntegrityError

from authentication.models import User, UserRole, validate_username_format
from authentication.tests.factories import UserFactory


class TestUserManager:
    """
    Tests for UserManager.create_user and create_superuser.
    """

    def test_create_user_normalizes_email_and_hashes_password(self, db):
        """
        Email domain is lowercased and the password is stored hashed.

        Why it matters: Login looks users up by normalized email; storing a
        raw password would be a security defect.
        """
        user = User.objects.create_user(
            email="Carol@EXAMPLE.com", username="carol", password="S3cure!pass"
        )

        assert user.email == "Carol@example.com"
        assert user.password != "S3cure!pass"
        assert user.check_password("S3cure!pass")
        assert user.role == UserRole.MEMBER
        assert user.is_banned is False

    def test_create_user_requires_email(self, db):
        with pytest.raises(ValueError):
            User.objects.create_user(email="", username="nobody", password="x")

    def test_create_user_requires_username(self, db):
        with pytest.raises(ValueError):
            User.objects.create_user(email="nobody@example.com", password="x")

    def test_create_user_without_password_is_unusable(self, db):
        user = User.objects.create_user(email="nopass@example.com", username="nopass")

        assert user.has_usable_password() is False

    def test_create_superuser_gets_admin_role(self, db):
        """
        Superusers are platform admins.

        Why it matters: The moderation API checks the role, not is_superuser.
        """
        admin = User.objects.create_superuser(
            email="root@example.com", username="root", password="S3cure!pass"
        )

        assert admin.is_staff is True
        assert admin.is_superuser is True
        assert admin.role == UserRole.ADMIN
        assert admin.is_platform_admin is True


class TestUserConstraints:
    """Database-level uniqueness on email and username."""

    def test_duplicate_email_rejected(self, db):
        UserFactory(email="dup@example.com")

        with pytest.raises(IntegrityError):
            UserFactory(email="dup@example.com")

    def test_duplicate_username_rejected(self, db):
        UserFactory(username="taken")

        with pytest.raises(IntegrityError):
            UserFactory(username="taken")


class TestUsernameFormat:
    """Tests for validate_username_format."""

    @pytest.mark.parametrize("value", ["abc", "user_1", "a-b-c", "X" * 30])
    def test_accepts_valid_usernames(self, value):
        validate_username_format(value)

    @pytest.mark.parametrize("value", ["ab", "X" * 31, "has space", "emoji😀", "dot.name"])
    def test_rejects_invalid_usernames(self, value):
        with pytest.raises(ValidationError):
            validate_username_format(value)


class TestUserHelpers:
    def test_str_is_username(self, db):
        assert str(UserFactory(username="dave")) == "dave"

    def test_member_is_not_platform_admin(self, db):
        assert UserFactory().is_platform_admin is False
