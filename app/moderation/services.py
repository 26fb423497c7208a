"""
Moderation service layer (the Moderation Broadcast Relay).

Services:
    ModerationService: Ban/unban users, soft-delete messages

Design Principles:
    - Only reachable from the admin REST surface; callers check the role
    - Soft delete keeps the row and rebroadcasts it to every connection
      (the ``everyone`` group), not just the message's chat room
    - Tombstones are serialized with content and media nulled

Usage:
    from chat.broadcast import ChannelLayerBroadcaster
    from moderation.services import ModerationService

    service = ModerationService(ChannelLayerBroadcaster.default())
    result = service.soft_delete_message(message_id)
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from authentication.models import User
from chat.constants import EVENTS
from chat.encryption import MessageCipher
from chat.models import Message
from chat.serializers import MessageSerializer
from chat.services import enriched_messages
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from django.db.models import QuerySet

    from chat.broadcast import Broadcaster

RECENT_MESSAGES_LIMIT = 100


class ModerationService(BaseService):
    """
    Administrative actions on users and messages.

    Methods:
        list_users: Every user, oldest first
        recent_messages: Latest messages across all chats, tombstones included
        ban_user: Set or clear a user's banned flag
        soft_delete_message: Tombstone a message and broadcast messageUpdated
    """

    def __init__(self, broadcaster: Broadcaster, cipher: MessageCipher | None = None):
        self.broadcaster = broadcaster
        self.cipher = cipher or MessageCipher.from_settings()

    def list_users(self) -> QuerySet[User]:
        return User.objects.order_by("date_joined", "id")

    def recent_messages(self, limit: int = RECENT_MESSAGES_LIMIT) -> list[Message]:
        """The ``limit`` newest messages, returned oldest first."""
        newest = enriched_messages().order_by("-created_at", "-id")[:limit]
        return list(reversed(newest))

    def ban_user(self, actor: User, target_id: int, banned: bool) -> ServiceResult[User]:
        """
        Set the banned flag on a user.

        Live connections of a banned user stay open; the ban is enforced on
        their next REST request, socket bind or message send.

        Error codes:
            SELF_BAN: actor tried to ban themselves
            USER_NOT_FOUND: no user with target_id
        """
        if target_id == actor.id:
            return ServiceResult.failure("Cannot ban yourself", error_code="SELF_BAN")

        user = User.objects.filter(pk=target_id).first()
        if user is None:
            return ServiceResult.failure("User not found", error_code="USER_NOT_FOUND")

        user.is_banned = banned
        user.save(update_fields=["is_banned", "updated_at"])

        self.get_logger().info(
            f"Admin {actor.id} {'banned' if banned else 'unbanned'} user {user.id}"
        )
        return ServiceResult.success(user)

    def soft_delete_message(self, message_id: int) -> ServiceResult[Message]:
        """
        Tombstone a message and broadcast it as ``messageUpdated`` to everyone.

        Deleting an already deleted message keeps the original deleted_at and
        broadcasts again.

        Error codes:
            MESSAGE_NOT_FOUND: no message with message_id
        """
        message = Message.all_objects.filter(pk=message_id).first()
        if message is None:
            return ServiceResult.failure(
                "Message not found", error_code="MESSAGE_NOT_FOUND"
            )

        if message.soft_delete():
            self.get_logger().info(f"Soft-deleted message {message.id} in chat {message.chat_id}")

        message = enriched_messages().get(pk=message.pk)
        payload = MessageSerializer(message, context={"cipher": self.cipher}).data
        self.broadcaster.to_everyone(EVENTS.MESSAGE_UPDATED, payload)

        return ServiceResult.success(message)
