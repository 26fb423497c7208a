"""
Broadcast capability for live fan-out.

Services that publish live events receive a Broadcaster at construction
instead of reaching for a process-wide handle. The production implementation
pushes onto Django Channels groups; tests hand in a recording fake.

Groups (see chat.constants.GROUPS):
    chat_<id>   connections that joined the chat room
    user_<id>   every connection bound to that user
    everyone    every open connection

Usage:
    from chat.broadcast import ChannelLayerBroadcaster

    broadcaster = ChannelLayerBroadcaster.default()
    broadcaster.to_chat(chat.id, EVENTS.NEW_MESSAGE, payload)

Consumers receive group messages as {"type": "broadcast.event", ...} and
forward them to the socket as {"type": <event>, "payload": {...}}.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Protocol, runtime_checkable

from asgiref.sync import async_to_sync
from channels.layers import get_channel_layer

from chat.constants import GROUPS

if TYPE_CHECKING:
    from typing import Any

logger = logging.getLogger(__name__)

# Channel layer message type; dispatched to ChatConsumer.broadcast_event
BROADCAST_MESSAGE_TYPE = "broadcast.event"


@runtime_checkable
class Broadcaster(Protocol):
    """
    Protocol for publishing server events to live connections.

    All methods are synchronous; they are called from service code running
    in a sync context (views, or consumer handlers via database_sync_to_async).
    """

    def to_chat(self, chat_id: int, event: str, payload: dict[str, Any]) -> None:
        """Publish to connections that joined the chat's room."""
        ...

    def to_user(self, user_id: int, event: str, payload: dict[str, Any]) -> None:
        """Publish to every connection bound to the user."""
        ...

    def to_everyone(self, event: str, payload: dict[str, Any]) -> None:
        """Publish to every open connection."""
        ...


class ChannelLayerBroadcaster:
    """Broadcaster backed by a Channels channel layer."""

    def __init__(self, channel_layer):
        self.channel_layer = channel_layer

    @classmethod
    def default(cls) -> ChannelLayerBroadcaster:
        """Build a broadcaster on the configured default channel layer."""
        return cls(get_channel_layer())

    def to_chat(self, chat_id: int, event: str, payload: dict[str, Any]) -> None:
        self._send(GROUPS.chat(chat_id), event, payload)

    def to_user(self, user_id: int, event: str, payload: dict[str, Any]) -> None:
        self._send(GROUPS.user(user_id), event, payload)

    def to_everyone(self, event: str, payload: dict[str, Any]) -> None:
        self._send(GROUPS.EVERYONE, event, payload)

    def _send(self, group: str, event: str, payload: dict[str, Any]) -> None:
        if self.channel_layer is None:
            logger.warning(f"No channel layer configured; dropped {event} for {group}")
            return

        async_to_sync(self.channel_layer.group_send)(
            group,
            {
                "type": BROADCAST_MESSAGE_TYPE,
                "event": event,
                "payload": payload,
            },
        )
        logger.debug(f"Broadcast {event} to {group}")
