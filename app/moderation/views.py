"""
Moderation views.

Endpoints (admin role required, 403 "Admin access required" otherwise):
    GET    /api/v1/admin/users/              - All users
    PUT    /api/v1/admin/users/{id}/ban/     - Ban or unban a user
    GET    /api/v1/admin/messages/           - Latest messages, tombstones included
    DELETE /api/v1/admin/messages/{id}/      - Soft-delete a message

Related files:
    - services.py: ModerationService
    - permissions.py: IsPlatformAdmin
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import UserSerializer
from chat.broadcast import ChannelLayerBroadcaster
from chat.serializers import MessageSerializer
from core.exceptions import NotFoundError
from moderation.permissions import IsPlatformAdmin
from moderation.serializers import (
    BanResponseSerializer,
    BanSerializer,
    MessageDeleteResponseSerializer,
)
from moderation.services import ModerationService


class ModerationView(APIView):
    permission_classes = [IsAuthenticated, IsPlatformAdmin]

    def get_service(self) -> ModerationService:
        return ModerationService(ChannelLayerBroadcaster.default())


class AdminUserListView(ModerationView):
    """
    GET: Every user with role and banned flag.

    URL: /api/v1/admin/users/
    """

    @extend_schema(
        summary="List users",
        tags=["Admin"],
        responses={200: UserSerializer(many=True)},
    )
    def get(self, request):
        return Response(UserSerializer(self.get_service().list_users(), many=True).data)


class AdminBanUserView(ModerationView):
    """
    PUT: Set a user's banned flag.

    URL: /api/v1/admin/users/{user_id}/ban/
    """

    @extend_schema(
        summary="Ban or unban user",
        tags=["Admin"],
        request=BanSerializer,
        responses={
            200: BanResponseSerializer,
            400: OpenApiResponse(description="Non-boolean flag or self-ban"),
            404: OpenApiResponse(description="User not found"),
        },
    )
    def put(self, request, user_id):
        serializer = BanSerializer(data=request.data)
        if not serializer.is_valid():
            return Response(
                {
                    "error": "Banned status must be boolean",
                    "error_code": "VALIDATION_ERROR",
                    "errors": serializer.errors,
                },
                status=status.HTTP_400_BAD_REQUEST,
            )

        banned = serializer.validated_data["banned"]
        result = self.get_service().ban_user(request.user, user_id, banned)
        if not result:
            if result.error_code == "USER_NOT_FOUND":
                raise NotFoundError(result.error, error_code=result.error_code)
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        return Response(
            {
                "user": UserSerializer(result.data).data,
                "message": f"User {'banned' if banned else 'unbanned'} successfully",
            }
        )


class AdminMessageListView(ModerationView):
    """
    GET: Latest messages across all chats.

    URL: /api/v1/admin/messages/
    """

    @extend_schema(
        summary="List recent messages",
        tags=["Admin"],
        responses={200: MessageSerializer(many=True)},
    )
    def get(self, request):
        service = self.get_service()
        serializer = MessageSerializer(
            service.recent_messages(), many=True, context={"cipher": service.cipher}
        )
        return Response(serializer.data)


class AdminMessageDeleteView(ModerationView):
    """
    DELETE: Soft-delete a message and broadcast messageUpdated to everyone.

    URL: /api/v1/admin/messages/{message_id}/
    """

    @extend_schema(
        summary="Delete message",
        tags=["Admin"],
        responses={
            200: MessageDeleteResponseSerializer,
            404: OpenApiResponse(description="Message not found"),
        },
    )
    def delete(self, request, message_id):
        result = self.get_service().soft_delete_message(message_id)
        if not result:
            raise NotFoundError(result.error, error_code=result.error_code)

        return Response(
            {
                "message": "Message deleted successfully",
                "deletedMessage": MessageSerializer(result.data).data,
            }
        )
