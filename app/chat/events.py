"""
Client event schemas for the live connection.

Every frame a client sends is ``{"type": <event>, ...fields}``. The set of
event types is closed; each one has a serializer, and a frame is only handed
to the consumer's handler after its serializer validates it.

Events:
    authenticate  {token, userId?}
    joinChat      {chatId}
    leaveChat     {chatId}
    sendMessage   {content, chatId, userId, token}

Usage:
    from chat.events import EventError, parse_client_event

    try:
        event_type, data = parse_client_event(frame)
    except EventError as e:
        ...  # e.message, e.errors
"""

from __future__ import annotations

from typing import Any

from rest_framework import serializers

from chat.constants import EVENTS
from core.exceptions import BaseApplicationError


class EventError(BaseApplicationError):
    """A client frame that is not one of the known events or fails its schema."""

    def __init__(self, message: str, errors: dict[str, Any] | None = None):
        super().__init__(message, error_code="INVALID_EVENT", details=errors or {})

    @property
    def errors(self) -> dict[str, Any]:
        return self.details


class AuthenticateEvent(serializers.Serializer):
    token = serializers.CharField()
    userId = serializers.IntegerField(required=False, min_value=1)


class ChatRoomEvent(serializers.Serializer):
    """Shared shape of joinChat and leaveChat."""

    chatId = serializers.IntegerField(min_value=1)


class SendMessageEvent(serializers.Serializer):
    # Text content is not length-checked
    content = serializers.CharField(allow_blank=True, trim_whitespace=False)
    chatId = serializers.IntegerField(min_value=1)
    userId = serializers.IntegerField(min_value=1)
    token = serializers.CharField()


CLIENT_EVENTS: dict[str, type[serializers.Serializer]] = {
    EVENTS.AUTHENTICATE: AuthenticateEvent,
    EVENTS.JOIN_CHAT: ChatRoomEvent,
    EVENTS.LEAVE_CHAT: ChatRoomEvent,
    EVENTS.SEND_MESSAGE: SendMessageEvent,
}


def parse_client_event(frame: Any) -> tuple[str, dict[str, Any]]:
    """
    Validate a decoded client frame.

    Returns:
        (event_type, validated_data)

    Raises:
        EventError: unknown type or invalid fields
    """
    if not isinstance(frame, dict):
        raise EventError("Event must be a JSON object")

    event_type = frame.get("type")
    serializer_class = CLIENT_EVENTS.get(event_type) if isinstance(event_type, str) else None
    if serializer_class is None:
        raise EventError(f"Unknown event type: {event_type}")

    serializer = serializer_class(data=frame)
    if not serializer.is_valid():
        raise EventError(f"Invalid {event_type} event", errors=serializer.errors)

    return event_type, dict(serializer.validated_data)
