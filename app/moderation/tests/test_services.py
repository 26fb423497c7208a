"""
Tests for ModerationService.

This module tests:
- ban_user: flag changes, self-ban and unknown user
- soft_delete_message: tombstone, broadcast to everyone, repeat deletes
- recent_messages: window size and order
"""

import pytest

from authentication.models import User
from chat.models import Message
from chat.tests.factories import MessageFactory
from moderation.services import ModerationService


class TestBanUser:
    def test_ban_and_unban(self, admin_user, member, broadcaster):
        service = ModerationService(broadcaster)

        assert service.ban_user(admin_user, member.id, True).data.is_banned is True
        assert User.objects.get(pk=member.pk).is_banned is True

        assert service.ban_user(admin_user, member.id, False).data.is_banned is False
        assert User.objects.get(pk=member.pk).is_banned is False

    def test_ban_does_not_broadcast(self, admin_user, member, broadcaster):
        ModerationService(broadcaster).ban_user(admin_user, member.id, True)

        assert broadcaster.events == []

    def test_cannot_ban_self(self, admin_user, broadcaster):
        """
        Why it matters: An admin locking themselves out could leave the
        platform without a moderator.
        """
        result = ModerationService(broadcaster).ban_user(admin_user, admin_user.id, True)

        assert result.error_code == "SELF_BAN"
        assert result.error == "Cannot ban yourself"
        assert User.objects.get(pk=admin_user.pk).is_banned is False

    def test_unknown_user(self, admin_user, broadcaster):
        result = ModerationService(broadcaster).ban_user(admin_user, 999999, True)

        assert result.error_code == "USER_NOT_FOUND"


class TestSoftDeleteMessage:
    def test_tombstones_and_broadcasts_to_everyone(self, message, broadcaster):
        """
        Deletion keeps the row and tells every connection.

        Why it matters: Clients outside the chat room may still be showing
        the message (admin views, recent lists), so the update is not
        limited to the chat's group.
        """
        result = ModerationService(broadcaster).soft_delete_message(message.id)

        assert result.success
        stored = Message.all_objects.get(pk=message.pk)
        assert stored.is_deleted is True
        assert stored.deleted_at is not None
        assert stored.content == "something rude"

        assert len(broadcaster.events) == 1
        scope, target, event, payload = broadcaster.events[0]
        assert (scope, target, event) == ("everyone", None, "messageUpdated")
        assert payload["id"] == message.id
        assert payload["deleted"] is True
        assert payload["content"] is None
        assert payload["mediaUrl"] is None

    def test_repeat_delete_keeps_deleted_at_and_rebroadcasts(self, message, broadcaster):
        service = ModerationService(broadcaster)
        service.soft_delete_message(message.id)
        first_deleted_at = Message.all_objects.get(pk=message.pk).deleted_at

        result = service.soft_delete_message(message.id)

        assert result.success
        assert Message.all_objects.get(pk=message.pk).deleted_at == first_deleted_at
        assert len(broadcaster.of("messageUpdated")) == 2

    def test_unknown_message(self, db, broadcaster):
        result = ModerationService(broadcaster).soft_delete_message(999999)

        assert result.error_code == "MESSAGE_NOT_FOUND"
        assert broadcaster.events == []


class TestRecentMessages:
    def test_includes_tombstones_oldest_first(self, chat, member, broadcaster):
        first = MessageFactory(chat=chat, author=member)
        second = MessageFactory(chat=chat, author=member)
        second.soft_delete()

        messages = ModerationService(broadcaster).recent_messages()

        assert messages == [first, second]

    @pytest.mark.parametrize("limit", [1, 3])
    def test_keeps_newest(self, chat, member, broadcaster, limit):
        created = [MessageFactory(chat=chat, author=member) for _ in range(4)]

        messages = ModerationService(broadcaster).recent_messages(limit=limit)

        assert messages == created[-limit:]


class TestListUsers:
    def test_oldest_first(self, admin_user, member, broadcaster):
        assert list(ModerationService(broadcaster).list_users()) == [admin_user, member]
