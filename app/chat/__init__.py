"""
Chat app for real-time messaging.

This app handles:
- Chats (direct, group, and the singleton global chat) and memberships
- Message ingest over the live connection and media upload over HTTP
- Live fan-out through channel-layer broadcast groups

Related apps:
    - authentication: User model and token verification
    - moderation: Ban/unban and message tombstones

WebSocket Support:
    Uses Django Channels for real-time communication.
    See consumers.py for the connection handler.
    See routing.py for WebSocket URL patterns.

Usage:
    from chat.broadcast import ChannelLayerBroadcaster
    from chat.services import ChatDirectoryService

    directory = ChatDirectoryService(ChannelLayerBroadcaster.default())
    result = directory.create_chat(user, [other.id], ChatKind.DIRECT)
"""
