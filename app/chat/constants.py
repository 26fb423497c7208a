"""
Constants and configuration for chat module features.

This module centralizes configuration values for:
- Broadcast group naming on the channel layer
- Live-connection event names
- Media upload limits

Import example:
    from chat.constants import GROUPS, EVENTS, MEDIA_CONFIG
"""

from typing import Final

from django.conf import settings


# =============================================================================
# Broadcast Groups
# =============================================================================


class GROUPS:
    """Channel-layer group names."""

    # Every live connection joins this group; moderation updates go here.
    EVERYONE: Final[str] = "everyone"

    @staticmethod
    def chat(chat_id: int) -> str:
        return f"chat_{chat_id}"

    @staticmethod
    def user(user_id: int) -> str:
        return f"user_{user_id}"


# =============================================================================
# Live-connection Events
# =============================================================================


class EVENTS:
    """Event names exchanged over the live connection."""

    # client -> server
    AUTHENTICATE: Final[str] = "authenticate"
    JOIN_CHAT: Final[str] = "joinChat"
    LEAVE_CHAT: Final[str] = "leaveChat"
    SEND_MESSAGE: Final[str] = "sendMessage"

    # server -> client
    AUTHENTICATED: Final[str] = "authenticated"
    NEW_MESSAGE: Final[str] = "newMessage"
    NEW_CHAT: Final[str] = "newChat"
    MESSAGE_UPDATED: Final[str] = "messageUpdated"
    ERROR: Final[str] = "error"


# =============================================================================
# Media Configuration
# =============================================================================


class MEDIA_CONFIG:
    """Configuration for media messages."""

    MAX_UPLOAD_BYTES: Final[int] = getattr(
        settings, "CHAT_MAX_UPLOAD_BYTES", 10 * 1024 * 1024
    )
    UPLOAD_DIR: Final[str] = "chat"
    FORM_FIELD: Final[str] = "media"


# =============================================================================
# Directory Configuration
# =============================================================================


class DIRECTORY_CONFIG:
    GLOBAL_CHAT_NAME: Final[str] = getattr(settings, "GLOBAL_CHAT_NAME", "Global Chat")
