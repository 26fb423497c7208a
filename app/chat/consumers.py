"""
WebSocket consumers for the chat application.

This module implements the WebSocket consumer for real-time chat: binding a
connection to a user (Connection Registry), joining and leaving chat rooms
(Room Membership Manager) and handing sends to the ingest service.

Consumers:
    ChatConsumer: One live connection at ws/chat/

Authentication:
    A connection opens anonymous unless JWTAuthMiddleware found a valid
    ``?token=`` and put a user in scope. Otherwise the client sends an
    ``authenticate`` event with a signed access token. Either way the
    identity is bound once and never changes for the connection.

Channel Groups:
    everyone      every connection, joined on connect
    user_<id>     every connection bound to the user
    chat_<id>     connections that joined the chat

Message Types (from client): see chat.events
    - authenticate, joinChat, leaveChat, sendMessage

Message Types (to client):
    - authenticated: identity bound
    - newMessage / newChat / messageUpdated: broadcasts
    - error: frame that is not JSON or is rejected by its schema
"""

from __future__ import annotations

import logging

from channels.db import database_sync_to_async
from channels.generic.websocket import AsyncJsonWebsocketConsumer

from authentication.tokens import verify_access_token
from chat.broadcast import ChannelLayerBroadcaster
from chat.constants import EVENTS, GROUPS
from chat.events import EventError, parse_client_event
from chat.middleware import get_active_user
from chat.services import MessageIngestService, is_member

logger = logging.getLogger(__name__)


class ChatConsumer(AsyncJsonWebsocketConsumer):
    """
    WebSocket consumer for real-time chat functionality.

    Handles:
        - Identity binding (once per connection)
        - Joining/leaving chat room groups
        - Sending messages through MessageIngestService
        - Relaying broadcast events to the socket

    Attributes:
        user_id: Bound user id, or None while anonymous
        joined_groups: Every channel-layer group this connection was added to
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.user_id: int | None = None
        self.joined_groups: set[str] = set()

    async def connect(self):
        await self.accept()
        await self._add_to_group(GROUPS.EVERYONE)

        user = self.scope.get("user")
        if user is not None and user.is_authenticated:
            await self._bind(user.id)

    async def disconnect(self, close_code):
        for group in list(self.joined_groups):
            await self.channel_layer.group_discard(group, self.channel_name)
        self.joined_groups.clear()

        logger.info(
            f"Connection {self.channel_name} closed (user {self.user_id or 'anonymous'}, "
            f"code {close_code})"
        )

    async def receive(self, text_data=None, bytes_data=None, **kwargs):
        if text_data is None:
            await self._send_error("Event must be a JSON text frame")
            return

        try:
            content = await self.decode_json(text_data)
        except ValueError:
            await self._send_error("Event must be valid JSON")
            return

        await self.receive_json(content, **kwargs)

    async def receive_json(self, content, **kwargs):
        try:
            event_type, data = parse_client_event(content)
        except EventError as e:
            await self._send_error(e.message, e.errors)
            return

        handler = {
            EVENTS.AUTHENTICATE: self._handle_authenticate,
            EVENTS.JOIN_CHAT: self._handle_join_chat,
            EVENTS.LEAVE_CHAT: self._handle_leave_chat,
            EVENTS.SEND_MESSAGE: self._handle_send_message,
        }[event_type]
        await handler(data)

    # =========================================================================
    # Client events
    # =========================================================================

    async def _handle_authenticate(self, data):
        if self.user_id is not None:
            logger.debug(f"Ignored rebind attempt on connection bound to user {self.user_id}")
            return

        user_id = verify_access_token(data["token"])
        if user_id is None:
            logger.info("Rejected authenticate event with invalid token")
            return
        if data.get("userId") is not None and data["userId"] != user_id:
            logger.warning(
                f"Rejected authenticate event claiming user {data['userId']} "
                f"with token for user {user_id}"
            )
            return

        user = await get_active_user(user_id)
        if user is None:
            return

        await self._bind(user.id)

    async def _handle_join_chat(self, data):
        chat_id = data["chatId"]
        if self.user_id is None:
            logger.debug(f"Dropped joinChat {chat_id} from anonymous connection")
            return

        if not await database_sync_to_async(is_member)(chat_id, self.user_id):
            logger.info(f"Dropped joinChat {chat_id} from non-member user {self.user_id}")
            return

        await self._add_to_group(GROUPS.chat(chat_id))

    async def _handle_leave_chat(self, data):
        group = GROUPS.chat(data["chatId"])
        if group in self.joined_groups:
            await self.channel_layer.group_discard(group, self.channel_name)
            self.joined_groups.discard(group)

    async def _handle_send_message(self, data):
        if self.user_id is None or data["userId"] != self.user_id:
            logger.info(
                f"Dropped sendMessage for user {data['userId']} on connection bound to "
                f"{self.user_id or 'nobody'}"
            )
            return

        result = await self._send_text(data)
        if not result.success:
            logger.info(
                f"Dropped sendMessage from user {self.user_id} to chat {data['chatId']}: "
                f"{result.error_code}"
            )

    # =========================================================================
    # Channel layer handlers
    # =========================================================================

    async def broadcast_event(self, event):
        """Relay a broadcast.event group message to the socket."""
        await self.send_json({"type": event["event"], "payload": event["payload"]})

    # =========================================================================
    # Helpers
    # =========================================================================

    async def _bind(self, user_id: int):
        self.user_id = user_id
        await self._add_to_group(GROUPS.user(user_id))
        await self.send_json(
            {"type": EVENTS.AUTHENTICATED, "payload": {"userId": user_id}}
        )
        logger.info(f"Connection {self.channel_name} bound to user {user_id}")

    async def _send_error(self, message: str, errors=None):
        await self.send_json(
            {"type": EVENTS.ERROR, "payload": {"message": message, "errors": errors or {}}}
        )

    async def _add_to_group(self, group: str):
        if group in self.joined_groups:
            return
        await self.channel_layer.group_add(group, self.channel_name)
        self.joined_groups.add(group)

    @database_sync_to_async
    def _send_text(self, data):
        service = MessageIngestService(ChannelLayerBroadcaster(self.channel_layer))
        return service.send_text(
            chat_id=data["chatId"],
            user_id=data["userId"],
            content=data["content"],
            token=data["token"],
        )
