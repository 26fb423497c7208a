"""
Test configuration and fixtures for moderation tests.

Usage:
    def test_example(admin_client, member):
        response = admin_client.get("/api/v1/admin/users/")
"""

import pytest

from authentication.tests.factories import AdminUserFactory, UserFactory
from chat.tests.conftest import RecordingBroadcaster
from chat.tests.factories import ChatFactory, MessageFactory


@pytest.fixture
def broadcaster():
    return RecordingBroadcaster()


@pytest.fixture
def admin_user(db):
    return AdminUserFactory(username="admin", email="admin@example.com")


@pytest.fixture
def member(db):
    return UserFactory(username="alice", email="alice@example.com")


@pytest.fixture
def chat(member):
    return ChatFactory(name="Team", created_by=member, members=[member])


@pytest.fixture
def message(chat, member):
    return MessageFactory(chat=chat, author=member, content="something rude")


@pytest.fixture
def admin_client(authenticated_client_factory, admin_user):
    return authenticated_client_factory(admin_user)


@pytest.fixture
def member_client(authenticated_client_factory, member):
    return authenticated_client_factory(member)
