"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        register/                  - Create account
        login/                     - Email/password login
        token/refresh/             - Refresh access token
        me/                        - Current user
        change-password/           - Change password
        account/                   - Delete account
    /api/v1/users/                 - Other users (for starting chats)
    /api/v1/chats/                 - Chat endpoints
        {id}/messages/             - Message history
        {id}/messages/{pk}/        - One message (tombstones included)
        {id}/upload/               - Image message upload
    /api/v1/admin/                 - Moderation endpoints (admin role)
        users/                     - All users
        users/{id}/ban/            - Ban/unban
        messages/                  - Recent messages
        messages/{id}/             - Soft delete
    /media/chat/{name}             - Uploaded chat images (MEDIA_URL)

WebSocket routes live in chat/routing.py and are served by config/asgi.py.

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.conf import settings
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from authentication.views import UserListView
from chat.constants import MEDIA_CONFIG
from chat.views import chat_media_file
from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Authentication
    path("auth/", include("authentication.urls")),
    # User directory
    path("users/", UserListView.as_view(), name="user-list"),
    # Chat
    path("chats/", include("chat.urls")),
    # Moderation
    path("admin/", include("moderation.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# Chat media is served by the app when MEDIA_URL is a local path; an absolute
# MEDIA_URL means a CDN or object store serves it instead.
if settings.MEDIA_URL.startswith("/"):
    urlpatterns += [
        path(
            f"{settings.MEDIA_URL.strip('/')}/{MEDIA_CONFIG.UPLOAD_DIR}/<str:name>",
            chat_media_file,
            name="chat-media",
        ),
    ]
