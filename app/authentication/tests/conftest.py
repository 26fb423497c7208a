"""
Test configuration and fixtures for authentication tests.

This module provides:
- Reusable user fixtures
- API client helpers for authenticated requests

Usage:
    def test_example(user, authenticated_client):
        response = authenticated_client.get("/api/v1/auth/me/")
        assert response.status_code == 200
"""

import pytest

from authentication.tests.factories import DEFAULT_PASSWORD, AdminUserFactory, UserFactory


# =============================================================================
# User Fixtures
# =============================================================================


@pytest.fixture
def password():
    """Password every factory-built user is created with."""
    return DEFAULT_PASSWORD


@pytest.fixture
def user(db):
    """Create a regular member."""
    return UserFactory(username="alice", email="alice@example.com")


@pytest.fixture
def other_user(db):
    """Create a second member."""
    return UserFactory(username="bob", email="bob@example.com")


@pytest.fixture
def banned_user(db):
    """Create a banned member."""
    return UserFactory(username="mallory", email="mallory@example.com", is_banned=True)


@pytest.fixture
def admin_user(db):
    """Create a platform admin."""
    return AdminUserFactory(username="admin", email="admin@example.com")


# =============================================================================
# API Client Fixtures
# =============================================================================


@pytest.fixture
def authenticated_client(authenticated_client_factory, user):
    """APIClient authenticated as ``user``."""
    return authenticated_client_factory(user)
