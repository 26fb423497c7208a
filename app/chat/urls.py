"""
URL configuration for chat API.

URL Structure:
    /                                  GET, POST
    /{chat_id}/messages/               GET
    /{chat_id}/messages/{pk}/          GET
    /{chat_id}/upload/                 POST

All URLs are prefixed with /api/v1/chats/ in the main URL configuration.
"""

from django.urls import path

from chat.views import (
    ChatListCreateView,
    ChatMediaUploadView,
    ChatMessageDetailView,
    ChatMessageListView,
)

app_name = "chat"

urlpatterns = [
    path("", ChatListCreateView.as_view(), name="chat-list"),
    path("<int:chat_id>/messages/", ChatMessageListView.as_view(), name="chat-messages"),
    path(
        "<int:chat_id>/messages/<int:pk>/",
        ChatMessageDetailView.as_view(),
        name="chat-message-detail",
    ),
    path("<int:chat_id>/upload/", ChatMediaUploadView.as_view(), name="chat-upload"),
]
