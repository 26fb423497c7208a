"""
Serializers for chat API.

This module provides serializers for the chat system:
- Message serializers (enriched read shape, media upload)
- Chat serializers (with participants, create)

Serializer Hierarchy:
    MessageSerializer: Enriched message (author username, tombstone handling)
    MediaUploadSerializer: Multipart upload payload

    ChatSerializer: Chat with its participant list
    ChatCreateSerializer: Create payload (shape only; rules live in
        ChatDirectoryService)

Design Decisions:
    - Field names are camelCase to match the live-connection payloads, so a
      message looks the same over REST and over the socket
    - Tombstoned messages keep their row but never ship content or media
"""

from __future__ import annotations

from rest_framework import serializers

from authentication.serializers import UserSummarySerializer
from chat.encryption import MessageCipher
from chat.models import Chat, ChatKind, Message


# =============================================================================
# Message Serializers
# =============================================================================


class MessageSerializer(serializers.ModelSerializer):
    """
    Enriched message: the stored row joined with its author's username.

    Content is decrypted when at-rest encryption is on. For tombstones
    ``content`` and ``mediaUrl`` are null and ``deleted`` is true.

    Pass ``context={"cipher": ...}`` to reuse a cipher across many rows.
    """

    content = serializers.SerializerMethodField()
    userId = serializers.IntegerField(source="author_id", read_only=True)
    chatId = serializers.IntegerField(source="chat_id", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    username = serializers.CharField(source="author.username", read_only=True)
    mediaUrl = serializers.SerializerMethodField()
    mediaType = serializers.CharField(source="media_type", read_only=True, allow_null=True)
    deleted = serializers.BooleanField(source="is_deleted", read_only=True)
    deletedAt = serializers.DateTimeField(source="deleted_at", read_only=True, allow_null=True)

    class Meta:
        model = Message
        fields = [
            "id",
            "content",
            "userId",
            "chatId",
            "createdAt",
            "username",
            "mediaUrl",
            "mediaType",
            "deleted",
            "deletedAt",
        ]
        read_only_fields = fields

    def _cipher(self) -> MessageCipher:
        cipher = self.context.get("cipher")
        if cipher is None:
            cipher = self.context["cipher"] = MessageCipher.from_settings()
        return cipher

    def get_content(self, obj: Message) -> str | None:
        if obj.is_deleted:
            return None
        return self._cipher().decrypt(obj.content)

    def get_mediaUrl(self, obj: Message) -> str | None:
        if obj.is_deleted:
            return None
        return obj.media_url


class MediaUploadSerializer(serializers.Serializer):
    """
    Multipart payload for POST /chats/{id}/upload/.

    File type and size are checked by chat.validators.ChatMediaValidator.
    """

    media = serializers.FileField(help_text="Image file (GIF or other image type)")
    content = serializers.CharField(
        required=False,
        allow_blank=True,
        default="",
        help_text="Optional caption",
    )


# =============================================================================
# Chat Serializers
# =============================================================================


class ChatSerializer(serializers.ModelSerializer):
    """
    Chat with its full participant list (id + username).

    Expects memberships (and their users) to be prefetched when serializing
    many chats.
    """

    type = serializers.CharField(source="kind", read_only=True)
    createdAt = serializers.DateTimeField(source="created_at", read_only=True)
    createdBy = serializers.IntegerField(source="created_by_id", read_only=True, allow_null=True)
    participants = serializers.SerializerMethodField()

    class Meta:
        model = Chat
        fields = ["id", "name", "type", "createdAt", "createdBy", "participants"]
        read_only_fields = fields

    def get_participants(self, obj: Chat) -> list[dict]:
        users = [membership.user for membership in obj.memberships.all()]
        return UserSummarySerializer(users, many=True).data


class ChatCreateSerializer(serializers.Serializer):
    """
    Payload for POST /chats/.

    Only shape is checked here. Participant rules (non-empty, exactly two
    for direct, existing users, no duplicate direct chat) are enforced by
    ChatDirectoryService so the live and REST paths agree.
    """

    name = serializers.CharField(
        max_length=100,
        required=False,
        allow_blank=True,
        allow_null=True,
        default=None,
    )
    participantIds = serializers.ListField(
        child=serializers.IntegerField(min_value=1),
        allow_empty=True,
        required=False,
        default=list,
    )
    type = serializers.ChoiceField(
        choices=[ChatKind.DIRECT, ChatKind.GROUP],
        default=ChatKind.GROUP,
    )
