"""
WebSocket URL routing for the chat application.

This module defines the URL patterns for WebSocket connections,
mapping paths to their corresponding consumers.

URL Patterns:
    ws/chat/ - The single live connection; rooms are joined with events

Authentication:
    JWT token may be passed as query parameter: ?token=<jwt_access_token>
    or sent later in an ``authenticate`` event.
"""

from django.urls import path

from chat import consumers

websocket_urlpatterns = [
    path("ws/chat/", consumers.ChatConsumer.as_asgi()),
]
