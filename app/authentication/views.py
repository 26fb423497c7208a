"""
Authentication views.

Endpoints:
    POST   /api/v1/auth/register/         - Create account, returns tokens
    POST   /api/v1/auth/login/            - Email/password login, returns tokens
    POST   /api/v1/auth/token/refresh/    - Exchange refresh token (simplejwt)
    GET    /api/v1/auth/me/               - Current user
    PUT    /api/v1/auth/change-password/  - Change password
    DELETE /api/v1/auth/account/          - Delete account
    GET    /api/v1/users/                 - Other users, for starting chats

Related files:
    - services.py: AuthService
    - serializers.py: Request/response serializers
"""

from drf_spectacular.utils import extend_schema
from rest_framework import status
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.models import User
from authentication.serializers import (
    AuthResponseSerializer,
    ChangePasswordSerializer,
    LoginSerializer,
    RegisterSerializer,
    UserSerializer,
    UserSummarySerializer,
)
from authentication.services import AuthService

USER_DIRECTORY_LIMIT = 20


def _auth_payload(data):
    return {
        "user": UserSerializer(data["user"]).data,
        "token": data["token"],
        "refresh": data["refresh"],
    }


class RegisterView(APIView):
    """
    POST: Create an account.

    URL: /api/v1/auth/register/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Register",
        description="Create an account and join the global chat.",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={201: AuthResponseSerializer},
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.register(**serializer.validated_data)
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        return Response(_auth_payload(result.data), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST: Exchange email/password for tokens.

    URL: /api/v1/auth/login/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        summary="Log in",
        tags=["Auth"],
        request=LoginSerializer,
        responses={200: AuthResponseSerializer},
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.login(**serializer.validated_data)
        if not result:
            return Response(result.to_response(), status=status.HTTP_401_UNAUTHORIZED)

        return Response(_auth_payload(result.data))


class MeView(APIView):
    """
    GET: Current user.

    URL: /api/v1/auth/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Current user", tags=["Auth"], responses={200: UserSerializer})
    def get(self, request):
        return Response(UserSerializer(request.user).data)


class ChangePasswordView(APIView):
    """
    PUT: Change the current user's password.

    URL: /api/v1/auth/change-password/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="Change password",
        tags=["Auth"],
        request=ChangePasswordSerializer,
    )
    def put(self, request):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AuthService.change_password(
            request.user,
            serializer.validated_data["currentPassword"],
            serializer.validated_data["newPassword"],
        )
        if not result:
            return Response(result.to_response(), status=status.HTTP_400_BAD_REQUEST)

        return Response({"message": "Password updated successfully"})


class AccountView(APIView):
    """
    DELETE: Delete the current user's account.

    URL: /api/v1/auth/account/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(summary="Delete account", tags=["Auth"])
    def delete(self, request):
        AuthService.delete_account(request.user)
        return Response({"message": "Account deleted successfully"})


class UserListView(APIView):
    """
    GET: Other users (id, username), for building new chats.

    URL: /api/v1/users/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        summary="List users",
        tags=["Users"],
        responses={200: UserSummarySerializer(many=True)},
    )
    def get(self, request):
        users = User.objects.exclude(pk=request.user.pk).order_by("username")[
            :USER_DIRECTORY_LIMIT
        ]
        return Response(UserSummarySerializer(users, many=True).data)
