"""
URL configuration for moderation API.

All URLs are prefixed with /api/v1/admin/ in the main URL configuration.
"""

from django.urls import path

from moderation.views import (
    AdminBanUserView,
    AdminMessageDeleteView,
    AdminMessageListView,
    AdminUserListView,
)

app_name = "moderation"

urlpatterns = [
    path("users/", AdminUserListView.as_view(), name="user-list"),
    path("users/<int:user_id>/ban/", AdminBanUserView.as_view(), name="user-ban"),
    path("messages/", AdminMessageListView.as_view(), name="message-list"),
    path(
        "messages/<int:message_id>/",
        AdminMessageDeleteView.as_view(),
        name="message-delete",
    ),
]
