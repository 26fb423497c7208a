"""
Chat application configuration.

This app provides the chat system with:
- Direct, group and the singleton global chat
- Live connection (Django Channels) with per-chat and per-user groups
- Text and image messages with soft deletion
"""

from django.apps import AppConfig


class ChatConfig(AppConfig):
    """Configuration for the chat application."""

    default_auto_field = "django.db.models.BigAutoField"
    name = "chat"
    verbose_name = "Chat"

    def ready(self):
        import chat.receivers  # noqa: F401
