"""
Tests for the moderation API.

Every endpoint requires the admin role; members get 403 and anonymous
callers 401.
"""

import pytest
from rest_framework import status

from chat.models import Message

USERS_URL = "/api/v1/admin/users/"
MESSAGES_URL = "/api/v1/admin/messages/"


def ban_url(user_id):
    return f"{USERS_URL}{user_id}/ban/"


def message_url(message_id):
    return f"{MESSAGES_URL}{message_id}/"


class TestAdminAccess:
    @pytest.mark.parametrize(
        "method, url",
        [
            ("get", USERS_URL),
            ("get", MESSAGES_URL),
            ("put", ban_url(1)),
            ("delete", message_url(1)),
        ],
    )
    def test_members_forbidden(self, member_client, method, url):
        response = getattr(member_client, method)(url, {"banned": True}, format="json")

        assert response.status_code == status.HTTP_403_FORBIDDEN
        assert response.data["detail"] == "Admin access required"

    def test_anonymous_unauthorized(self, api_client, db):
        response = api_client.get(USERS_URL)

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestAdminUsers:
    def test_lists_users_with_flags(self, admin_client, admin_user, member):
        response = admin_client.get(USERS_URL)

        assert response.status_code == status.HTTP_200_OK
        assert [u["username"] for u in response.data] == ["admin", "alice"]
        assert response.data[1]["isBanned"] is False

    def test_ban(self, admin_client, member):
        response = admin_client.put(ban_url(member.id), {"banned": True}, format="json")

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "User banned successfully"
        assert response.data["user"]["isBanned"] is True

    def test_unban(self, admin_client, member):
        member.is_banned = True
        member.save()

        response = admin_client.put(ban_url(member.id), {"banned": False}, format="json")

        assert response.data["message"] == "User unbanned successfully"
        assert response.data["user"]["isBanned"] is False

    def test_banned_user_locked_out_of_rest(self, admin_client, member_client, member):
        admin_client.put(ban_url(member.id), {"banned": True}, format="json")

        response = member_client.get("/api/v1/chats/")

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    @pytest.mark.parametrize("value", ["true", 1, None])
    def test_non_boolean_rejected(self, admin_client, member, value):
        response = admin_client.put(ban_url(member.id), {"banned": value}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "Banned status must be boolean"

    def test_self_ban_rejected(self, admin_client, admin_user):
        response = admin_client.put(ban_url(admin_user.id), {"banned": True}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error"] == "Cannot ban yourself"

    def test_unknown_user(self, admin_client):
        response = admin_client.put(ban_url(999999), {"banned": True}, format="json")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"


class TestAdminMessages:
    def test_lists_messages_including_tombstones(self, admin_client, message):
        message.soft_delete()

        response = admin_client.get(MESSAGES_URL)

        assert response.status_code == status.HTTP_200_OK
        assert len(response.data) == 1
        assert response.data[0]["deleted"] is True
        assert response.data[0]["content"] is None

    def test_delete(self, admin_client, message):
        response = admin_client.delete(message_url(message.id))

        assert response.status_code == status.HTTP_200_OK
        assert response.data["message"] == "Message deleted successfully"
        assert response.data["deletedMessage"]["id"] == message.id
        assert response.data["deletedMessage"]["deleted"] is True
        assert Message.all_objects.get(pk=message.pk).is_deleted

    def test_delete_unknown(self, admin_client):
        response = admin_client.delete(message_url(999999))

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "MESSAGE_NOT_FOUND"
