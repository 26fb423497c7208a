"""
Views for chat API.

This module provides REST API endpoints for the chat system:
- ChatListCreateView: List the user's chats, create direct/group chats
- ChatMessageListView: Message history of a chat
- ChatMessageDetailView: One message by id (tombstones included)
- ChatMediaUploadView: Image message upload
- chat_media_file: Serves stored chat media at the message's mediaUrl

URL Structure:
    /api/v1/chats/                                GET, POST
    /api/v1/chats/{chat_id}/messages/             GET
    /api/v1/chats/{chat_id}/messages/{pk}/        GET
    /api/v1/chats/{chat_id}/upload/               POST (multipart)
    {MEDIA_URL}chat/{name}                        GET (stored media)

Design Decisions:
    - All operations use the service layer for business logic
    - Services get a ChannelLayerBroadcaster built per request
    - Chat-scoped endpoints are guarded by IsChatMember (404 unknown chat,
      403 non-member)
    - Responses are plain arrays; there is no pagination
"""

from __future__ import annotations

import re

from django.core.files.storage import default_storage
from django.http import FileResponse, Http404
from drf_spectacular.utils import OpenApiResponse, extend_schema
from rest_framework import status
from rest_framework.parsers import FormParser, MultiPartParser
from rest_framework.permissions import IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from chat.broadcast import ChannelLayerBroadcaster
from chat.constants import MEDIA_CONFIG
from chat.encryption import MessageCipher
from chat.permissions import IsChatMember
from chat.serializers import (
    ChatCreateSerializer,
    ChatSerializer,
    MediaUploadSerializer,
    MessageSerializer,
)
from chat.services import ChatDirectoryService, MessageIngestService, enriched_messages
from core.exceptions import NotFoundError

# Names written by MessageIngestService.send_media: uuid4 hex + image extension
MEDIA_NAME_RE = re.compile(r"^[0-9a-f]{32}\.[a-z0-9]+$")

FAILURE_STATUS = {
    "NOT_A_MEMBER": status.HTTP_403_FORBIDDEN,
    "USER_BANNED": status.HTTP_403_FORBIDDEN,
}


def failure_response(result):
    return Response(
        result.to_response(),
        status=FAILURE_STATUS.get(result.error_code, status.HTTP_400_BAD_REQUEST),
    )


class ChatListCreateView(APIView):
    """
    GET: Every chat the current user belongs to, with participants.
    POST: Create a direct or group chat.

    URL: /api/v1/chats/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="list_chats",
        summary="List chats",
        tags=["Chat"],
        responses={200: ChatSerializer(many=True)},
    )
    def get(self, request):
        service = ChatDirectoryService(ChannelLayerBroadcaster.default())
        chats = service.list_chats(request.user)
        return Response(ChatSerializer(chats, many=True).data)

    @extend_schema(
        operation_id="create_chat",
        summary="Create chat",
        description=(
            "Creates a chat with the given participants plus the caller. "
            "Direct chats need exactly one other participant and at most one "
            "direct chat may exist per pair."
        ),
        tags=["Chat"],
        request=ChatCreateSerializer,
        responses={
            201: OpenApiResponse(description="{chat, participants}"),
            400: OpenApiResponse(description="Validation error or duplicate direct chat"),
        },
    )
    def post(self, request):
        serializer = ChatCreateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data

        service = ChatDirectoryService(ChannelLayerBroadcaster.default())
        result = service.create_chat(
            creator=request.user,
            participant_ids=data["participantIds"],
            kind=data["type"],
            name=data.get("name"),
        )
        if not result:
            return failure_response(result)

        chat_data = ChatSerializer(result.data).data
        return Response(
            {
                "chat": chat_data,
                "participants": [p["id"] for p in chat_data["participants"]],
            },
            status=status.HTTP_201_CREATED,
        )


class ChatMessageListView(APIView):
    """
    GET: Live (not deleted) messages of a chat, oldest first.

    URL: /api/v1/chats/{chat_id}/messages/
    """

    permission_classes = [IsAuthenticated, IsChatMember]

    @extend_schema(
        operation_id="list_chat_messages",
        summary="List messages",
        tags=["Chat"],
        responses={200: MessageSerializer(many=True)},
    )
    def get(self, request, chat_id):
        messages = enriched_messages().filter(chat_id=chat_id, is_deleted=False)
        serializer = MessageSerializer(
            messages, many=True, context={"cipher": MessageCipher.from_settings()}
        )
        return Response(serializer.data)


class ChatMessageDetailView(APIView):
    """
    GET: One message by id. Tombstones are returned with content nulled.

    URL: /api/v1/chats/{chat_id}/messages/{pk}/
    """

    permission_classes = [IsAuthenticated, IsChatMember]

    @extend_schema(
        operation_id="get_chat_message",
        summary="Get message",
        tags=["Chat"],
        responses={200: MessageSerializer, 404: OpenApiResponse(description="Not found")},
    )
    def get(self, request, chat_id, pk):
        message = enriched_messages().filter(chat_id=chat_id, pk=pk).first()
        if message is None:
            raise NotFoundError("Message not found", error_code="MESSAGE_NOT_FOUND")
        return Response(MessageSerializer(message).data)


class ChatMediaUploadView(APIView):
    """
    POST: Send an image (or GIF) message.

    URL: /api/v1/chats/{chat_id}/upload/
    """

    permission_classes = [IsAuthenticated, IsChatMember]
    parser_classes = [MultiPartParser, FormParser]

    @extend_schema(
        operation_id="upload_chat_media",
        summary="Upload media message",
        tags=["Chat"],
        request={"multipart/form-data": MediaUploadSerializer},
        responses={
            201: MessageSerializer,
            400: OpenApiResponse(description="Missing, oversize or non-image file"),
            403: OpenApiResponse(description="Not a member"),
        },
    )
    def post(self, request, chat_id):
        if MEDIA_CONFIG.FORM_FIELD not in request.FILES:
            return Response(
                {"error": "No file uploaded", "error_code": "VALIDATION_ERROR"},
                status=status.HTTP_400_BAD_REQUEST,
            )

        serializer = MediaUploadSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        service = MessageIngestService(ChannelLayerBroadcaster.default())
        result = service.send_media(
            chat_id=chat_id,
            user=request.user,
            upload=serializer.validated_data["media"],
            content=serializer.validated_data.get("content", ""),
        )
        if not result:
            return failure_response(result)

        return Response(
            MessageSerializer(result.data, context={"cipher": service.cipher}).data,
            status=status.HTTP_201_CREATED,
        )


def chat_media_file(request, name):
    """
    Serve an uploaded chat image from the Blob Store.

    URL: {MEDIA_URL}chat/{name}, the mediaUrl carried by media messages.

    Names are random uuid4 hex, so the URL itself is the capability; no
    session or token is required, which lets clients use it directly as an
    image source. Names that MessageIngestService could not have written
    are 404 without touching storage.
    """
    if not MEDIA_NAME_RE.match(name):
        raise Http404("Media not found")

    path = f"{MEDIA_CONFIG.UPLOAD_DIR}/{name}"
    if not default_storage.exists(path):
        raise Http404("Media not found")

    response = FileResponse(default_storage.open(path, "rb"))
    response["Content-Disposition"] = f'inline; filename="{name}"'
    response["Cache-Control"] = "public, max-age=31536000, immutable"
    return response
