"""
Chat system service layer.

This module provides the business logic for the chat system, encapsulating
all operations on chats, memberships and messages.

Services:
    ChatDirectoryService: Chat creation/listing, direct-chat dedup, global
        chat bootstrap
    MessageIngestService: Text and media message ingest with live fan-out

Design Principles:
    - Services that publish live events take a Broadcaster at construction
    - Expected failures return ServiceResult.failure()
    - Unexpected failures raise exceptions
    - Rows are written before anything is broadcast, so a room sees
      messages in insert order
    - Uniqueness races are settled by database constraints; the losing
      writer gets an IntegrityError which is mapped to a normal failure

Usage:
    from chat.broadcast import ChannelLayerBroadcaster
    from chat.services import ChatDirectoryService, MessageIngestService

    broadcaster = ChannelLayerBroadcaster.default()

    result = ChatDirectoryService(broadcaster).create_chat(
        creator=user, participant_ids=[other.id], kind=ChatKind.DIRECT
    )

    result = MessageIngestService(broadcaster).send_text(
        chat_id=chat.id, user_id=user.id, content="Hello!", token=raw_token
    )
"""

from __future__ import annotations

import uuid
from typing import TYPE_CHECKING

from django.core.files.storage import default_storage
from django.db import IntegrityError
from django.db.models import Prefetch

from authentication.models import User
from authentication.tokens import verify_access_token
from chat.constants import DIRECTORY_CONFIG, EVENTS, MEDIA_CONFIG
from chat.encryption import MessageCipher
from chat.models import Chat, ChatKind, ChatMembership, DirectChatPair, Message
from chat.serializers import ChatSerializer, MessageSerializer
from chat.validators import ChatMediaValidator
from core.services import BaseService, ServiceResult

if TYPE_CHECKING:
    from collections.abc import Iterable

    from django.core.files.uploadedfile import UploadedFile
    from django.db.models import QuerySet

    from chat.broadcast import Broadcaster


# =============================================================================
# Queries
# =============================================================================


def is_member(chat_id: int, user_id: int) -> bool:
    """Whether a Membership row exists for (chat, user)."""
    return ChatMembership.objects.filter(chat_id=chat_id, user_id=user_id).exists()


def chats_with_participants() -> QuerySet[Chat]:
    """Chat queryset with memberships and their users prefetched."""
    return Chat.objects.prefetch_related(
        Prefetch(
            "memberships",
            queryset=ChatMembership.objects.select_related("user").order_by(
                "joined_at", "id"
            ),
        )
    )


def enriched_messages() -> QuerySet[Message]:
    """All messages (tombstones included) joined with their author."""
    return Message.all_objects.select_related("author").order_by("created_at", "id")


# =============================================================================
# Chat Directory
# =============================================================================


class ChatDirectoryService(BaseService):
    """
    Creates and lists chats and keeps the global chat membership complete.

    Methods:
        create_chat: Create a direct or group chat and notify its members
        list_chats: Chats a user belongs to, with participants
        ensure_global_chat: Idempotently add a user to the global chat
    """

    def __init__(self, broadcaster: Broadcaster):
        self.broadcaster = broadcaster

    def create_chat(
        self,
        creator: User,
        participant_ids: Iterable[int],
        kind: str = ChatKind.GROUP,
        name: str | None = None,
    ) -> ServiceResult[Chat]:
        """
        Create a chat and broadcast ``newChat`` to every member's user group.

        The member set is ``participant_ids`` plus the creator, deduplicated.
        Direct chats need exactly two members and at most one may exist per
        unordered pair; the DirectChatPair unique constraint backs the
        pre-check when two requests race.

        Returns:
            ServiceResult with the Chat (participants prefetched)

        Error codes:
            PARTICIPANTS_REQUIRED: participant_ids was empty
            INVALID_CHAT_TYPE: kind is not direct or group
            INVALID_DIRECT_PARTICIPANTS: direct chat without exactly 2 members
            UNKNOWN_PARTICIPANT: an id does not match a user
            DIRECT_CHAT_EXISTS: the pair already has a direct chat
        """
        logger = self.get_logger()
        participant_ids = list(participant_ids or [])

        if not participant_ids:
            return ServiceResult.failure(
                "At least one participant is required",
                error_code="PARTICIPANTS_REQUIRED",
            )
        if kind not in (ChatKind.DIRECT, ChatKind.GROUP):
            return ServiceResult.failure(
                f"Invalid chat type: {kind}", error_code="INVALID_CHAT_TYPE"
            )

        member_ids = list(dict.fromkeys([*participant_ids, creator.id]))
        is_direct = kind == ChatKind.DIRECT

        if is_direct and len(member_ids) != 2:
            return ServiceResult.failure(
                "Direct chats must have exactly 2 participants",
                error_code="INVALID_DIRECT_PARTICIPANTS",
            )

        known = set(User.objects.filter(id__in=member_ids).values_list("id", flat=True))
        unknown = [uid for uid in member_ids if uid not in known]
        if unknown:
            return ServiceResult.failure(
                f"Unknown participants: {unknown}",
                error_code="UNKNOWN_PARTICIPANT",
            )

        pair = DirectChatPair.canonical(*member_ids) if is_direct else None
        if pair and DirectChatPair.objects.filter(
            user_lower_id=pair[0], user_higher_id=pair[1]
        ).exists():
            logger.info(f"Rejected duplicate direct chat for users {pair}")
            return self._duplicate_direct()

        try:
            with self.atomic():
                chat = Chat.objects.create(
                    kind=kind,
                    name=None if is_direct else (name or None),
                    created_by=creator,
                )
                if pair:
                    DirectChatPair.objects.create(
                        chat=chat, user_lower_id=pair[0], user_higher_id=pair[1]
                    )
                ChatMembership.objects.bulk_create(
                    [ChatMembership(chat=chat, user_id=uid) for uid in member_ids]
                )
        except IntegrityError:
            if not pair:
                raise
            logger.info(f"Lost direct chat creation race for users {pair}")
            return self._duplicate_direct()

        chat = chats_with_participants().get(pk=chat.pk)
        logger.info(
            f"User {creator.id} created {kind} chat {chat.id} with members {member_ids}"
        )

        payload = ChatSerializer(chat).data
        for uid in member_ids:
            self.broadcaster.to_user(uid, EVENTS.NEW_CHAT, payload)

        return ServiceResult.success(chat)

    def list_chats(self, user: User) -> QuerySet[Chat]:
        """Every chat the user belongs to, ordered by creation time."""
        return (
            chats_with_participants()
            .filter(memberships__user=user)
            .order_by("created_at", "id")
        )

    def ensure_global_chat(self, user: User) -> ServiceResult[Chat]:
        """
        Make sure the global chat exists and the user is a member of it.

        Safe to call any number of times, including concurrently: the global
        chat and each membership are protected by unique constraints and
        get_or_create re-reads after losing a race.
        """
        logger = self.get_logger()

        chat, chat_created = Chat.objects.get_or_create(
            kind=ChatKind.GLOBAL,
            defaults={"name": DIRECTORY_CONFIG.GLOBAL_CHAT_NAME, "created_by": None},
        )
        if chat_created:
            logger.info(f"Bootstrapped global chat {chat.id}")

        _, joined = ChatMembership.objects.get_or_create(chat=chat, user=user)
        if joined:
            logger.info(f"User {user.id} joined global chat {chat.id}")

        return ServiceResult.success(chat)

    @staticmethod
    def _duplicate_direct() -> ServiceResult[Chat]:
        return ServiceResult.failure(
            "Direct chat already exists between these users",
            error_code="DIRECT_CHAT_EXISTS",
        )


# =============================================================================
# Message Ingest
# =============================================================================


class MessageIngestService(BaseService):
    """
    Validates, persists, enriches and broadcasts new messages.

    The enriched message goes to the chat's room group only.

    Methods:
        send_text: Live-connection path (token re-validated per send)
        send_media: HTTP upload path (caller already authenticated)
    """

    def __init__(
        self,
        broadcaster: Broadcaster,
        cipher: MessageCipher | None = None,
        validator: ChatMediaValidator | None = None,
    ):
        self.broadcaster = broadcaster
        self.cipher = cipher or MessageCipher.from_settings()
        self.validator = validator or ChatMediaValidator()

    def send_text(
        self, chat_id: int, user_id: int, content: str, token: str
    ) -> ServiceResult[Message]:
        """
        Ingest a text message sent over the live connection.

        Error codes:
            INVALID_TOKEN: token invalid or issued for another user
            USER_BANNED: author is banned
            NOT_A_MEMBER: author has no membership in the chat
        """
        token_user_id = verify_access_token(token)
        if token_user_id is None or token_user_id != user_id:
            return ServiceResult.failure(
                "Token does not match user", error_code="INVALID_TOKEN"
            )

        denied = self._check_author(chat_id, user_id)
        if denied:
            return denied

        return ServiceResult.success(self._persist_and_broadcast(chat_id, user_id, content))

    def send_media(
        self, chat_id: int, user: User, upload: UploadedFile, content: str = ""
    ) -> ServiceResult[Message]:
        """
        Ingest an uploaded image.

        Nothing is written to the Blob Store or the database unless the
        author is a member and the file passes validation.

        Error codes:
            USER_BANNED / NOT_A_MEMBER: as for send_text
            INVALID_MEDIA: not an image, empty, or over the size cap
        """
        denied = self._check_author(chat_id, user.id)
        if denied:
            return denied

        result = self.validator.validate(upload)
        if not result.is_valid:
            self.get_logger().info(
                f"Rejected upload from user {user.id} to chat {chat_id}: {result.error_code}"
            )
            return ServiceResult.failure(result.error, error_code="INVALID_MEDIA")

        name = default_storage.save(
            f"{MEDIA_CONFIG.UPLOAD_DIR}/{uuid.uuid4().hex}{result.extension}", upload
        )
        media_url = default_storage.url(name)

        message = self._persist_and_broadcast(
            chat_id,
            user.id,
            content or "",
            media_url=media_url,
            media_type=result.media_type,
        )
        return ServiceResult.success(message)

    def _check_author(self, chat_id: int, user_id: int) -> ServiceResult[Message] | None:
        if User.objects.filter(pk=user_id, is_banned=True).exists():
            return ServiceResult.failure("User is banned", error_code="USER_BANNED")
        if not is_member(chat_id, user_id):
            return ServiceResult.failure(
                "Not a member of this chat", error_code="NOT_A_MEMBER"
            )
        return None

    def _persist_and_broadcast(
        self,
        chat_id: int,
        user_id: int,
        content: str,
        media_url: str | None = None,
        media_type: str | None = None,
    ) -> Message:
        created = Message.objects.create(
            chat_id=chat_id,
            author_id=user_id,
            content=self.cipher.encrypt(content),
            media_url=media_url,
            media_type=media_type,
        )
        message = enriched_messages().get(pk=created.pk)

        payload = MessageSerializer(message, context={"cipher": self.cipher}).data
        self.broadcaster.to_chat(chat_id, EVENTS.NEW_MESSAGE, payload)

        self.get_logger().debug(
            f"User {user_id} sent message {message.id} to chat {chat_id}"
        )
        return message
