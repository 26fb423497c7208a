"""
Chat system models.

This module defines the Conversation Store for the chat system:
- Direct chats between exactly two users (one per unordered pair)
- Group chats with any number of members
- A single global chat every account belongs to

Models:
    Chat: Container for messages between members
    DirectChatPair: Helper enforcing uniqueness of direct chats
    ChatMembership: (chat, user) join record granting read/send rights
    Message: Individual text or media message within a chat

Design Decisions:
    - Memberships are append-only; nothing in the service removes them
    - Uniqueness invariants (one membership per pair, one direct chat per
      user pair, one global chat) are database constraints, so concurrent
      creators lose with an IntegrityError instead of racing past a check
    - Messages are never purged by the application; moderation tombstones
      them via SoftDeleteMixin and serializers null the content
"""

from __future__ import annotations

from django.conf import settings
from django.db import models
from django.db.models import F, Q
from django.utils import timezone

from core.managers import SoftDeleteManager
from core.model_mixins import SoftDeleteMixin
from core.models import BaseModel


class ChatKind(models.TextChoices):
    """
    Kind of chat.

    DIRECT: Exactly two members, no display name
    GROUP: Any number of members, optional display name
    GLOBAL: System-created singleton holding every account
    """

    DIRECT = "direct", "Direct"
    GROUP = "group", "Group"
    GLOBAL = "global", "Global"


class MediaKind(models.TextChoices):
    IMAGE = "image", "Image"
    GIF = "gif", "GIF"


class Chat(BaseModel):
    """
    A chat between members.

    Fields:
        name: Display name (always null for direct chats)
        kind: direct, group or global
        created_by: Creating user; null for the system-created global chat and
            after the creator's account is removed

    Constraints:
        - UniqueConstraint(kind) WHERE kind = 'global': singleton global chat
    """

    name = models.CharField(
        max_length=100,
        null=True,
        blank=True,
        help_text="Display name (null for direct chats)",
    )

    kind = models.CharField(
        max_length=10,
        choices=ChatKind.choices,
        default=ChatKind.GROUP,
        db_index=True,
        help_text="Type of chat (direct, group or global)",
    )

    created_by = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.SET_NULL,
        null=True,
        blank=True,
        related_name="created_chats",
        help_text="User who created this chat (null for system-created)",
    )

    class Meta:
        db_table = "chat_chat"
        ordering = ["created_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["kind"],
                condition=Q(kind=ChatKind.GLOBAL),
                name="unique_global_chat",
            ),
        ]

    def __str__(self) -> str:
        return f"Chat({self.id}, {self.kind}, {self.name or '-'})"


class DirectChatPair(models.Model):
    """
    Enforces uniqueness of direct chats between two users.

    Stores the pair in canonical order (lower user id first) so that
    regardless of who starts the chat there is only one row per pair.

    Constraints:
        - UniqueConstraint(user_lower, user_higher): One chat per pair
        - CheckConstraint(user_lower_id < user_higher_id): Canonical order
    """

    chat = models.OneToOneField(
        Chat,
        on_delete=models.CASCADE,
        primary_key=True,
        related_name="direct_pair",
        help_text="The direct chat this pair represents",
    )

    user_lower = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with lower ID in this pair",
    )

    user_higher = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="+",
        help_text="User with higher ID in this pair",
    )

    class Meta:
        db_table = "chat_direct_chat_pair"
        constraints = [
            models.UniqueConstraint(
                fields=["user_lower", "user_higher"],
                name="unique_direct_chat_pair",
            ),
            models.CheckConstraint(
                condition=Q(user_lower_id__lt=F("user_higher_id")),
                name="direct_pair_lower_less_than_higher",
            ),
        ]

    def __str__(self) -> str:
        return f"DirectPair({self.user_lower_id}, {self.user_higher_id})"

    @staticmethod
    def canonical(user_a_id: int, user_b_id: int) -> tuple[int, int]:
        """Return the pair sorted as (lower, higher)."""
        return (user_a_id, user_b_id) if user_a_id < user_b_id else (user_b_id, user_a_id)


class ChatMembership(models.Model):
    """
    A user's membership in a chat.

    Constraints:
        - UniqueConstraint(chat, user): at most one row per pair
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="memberships",
    )
    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_memberships",
    )
    joined_at = models.DateTimeField(default=timezone.now)

    class Meta:
        db_table = "chat_membership"
        ordering = ["joined_at", "id"]
        constraints = [
            models.UniqueConstraint(
                fields=["chat", "user"],
                name="unique_chat_membership",
            ),
        ]
        indexes = [
            models.Index(fields=["user", "chat"], name="chat_membership_user_idx"),
        ]

    def __str__(self) -> str:
        return f"Membership(chat={self.chat_id}, user={self.user_id})"


class Message(SoftDeleteMixin, BaseModel):
    """
    A message within a chat.

    Content, author and chat never change after creation. Moderation may set
    the tombstone (is_deleted/deleted_at); rows are never purged.

    Managers:
        objects: Live messages only (what a member's history shows)
        all_objects: Including tombstones (fetch by id, moderation)

    Fields:
        chat: Chat this message belongs to
        author: User who sent the message
        content: Message text as stored (ciphertext when at-rest encryption
            is configured; see chat.encryption)
        media_url: Blob Store URL for media messages
        media_type: image or gif
    """

    chat = models.ForeignKey(
        Chat,
        on_delete=models.CASCADE,
        related_name="messages",
        help_text="Chat this message belongs to",
    )

    author = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="chat_messages",
        help_text="User who sent this message",
    )

    content = models.TextField(
        blank=True,
        default="",
        help_text="Message text (may be empty for media messages)",
    )

    media_url = models.CharField(
        max_length=500,
        null=True,
        blank=True,
        help_text="URL of attached media",
    )

    media_type = models.CharField(
        max_length=10,
        choices=MediaKind.choices,
        null=True,
        blank=True,
        help_text="Kind of attached media",
    )

    objects = SoftDeleteManager()
    all_objects = models.Manager()

    class Meta:
        db_table = "chat_message"
        ordering = ["created_at", "id"]
        indexes = [
            models.Index(
                fields=["chat", "created_at", "id"],
                name="chat_msg_chat_order_idx",
            ),
            models.Index(
                fields=["author", "-created_at"],
                name="chat_msg_author_idx",
            ),
        ]

    def __str__(self) -> str:
        deleted_str = " [deleted]" if self.is_deleted else ""
        return f"Message({self.id}) in chat {self.chat_id} by {self.author_id}{deleted_str}"
