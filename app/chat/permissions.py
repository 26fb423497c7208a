"""
Permission classes for chat API.

This module provides DRF permission classes for the chat system:
- IsChatMember: User holds a Membership in the chat named by the URL

Design Decisions:
    - Permissions check against the ChatMembership table, not the chat row
    - Unknown chats are 404 before membership is considered
    - Failures raise core.exceptions errors so the body matches the rest of
      the API ({"error", "error_code"})
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from rest_framework import permissions

from chat.models import Chat
from chat.services import is_member
from core.exceptions import NotFoundError, PermissionDeniedError

if TYPE_CHECKING:
    from rest_framework.request import Request
    from rest_framework.views import APIView


class IsChatMember(permissions.BasePermission):
    """
    Allows access only to members of the chat in ``view.kwargs["chat_id"]``.

    Used for message history, message detail and media upload.
    """

    message = "Access denied"

    def has_permission(self, request: Request, view: APIView) -> bool:
        if not request.user.is_authenticated:
            return False

        chat_id = view.kwargs.get("chat_id")
        if not Chat.objects.filter(pk=chat_id).exists():
            raise NotFoundError(
                "Chat not found",
                error_code="CHAT_NOT_FOUND",
                details={"chat_id": chat_id},
            )

        if not is_member(chat_id, request.user.id):
            raise PermissionDeniedError(self.message, error_code="NOT_A_MEMBER")

        return True
