"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/         - Registration
    /api/v1/auth/login/            - Email/password login
    /api/v1/auth/token/refresh/    - Refresh an access token
    /api/v1/auth/me/               - Current user
    /api/v1/auth/change-password/  - Change password
    /api/v1/auth/account/          - Delete account

The user directory (/api/v1/users/) is mounted from config/urls.py.
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.views import (
    AccountView,
    ChangePasswordView,
    LoginView,
    MeView,
    RegisterView,
)

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
    path("me/", MeView.as_view(), name="me"),
    path("change-password/", ChangePasswordView.as_view(), name="change-password"),
    path("account/", AccountView.as_view(), name="account"),
]
