"""
Authentication application.

This app owns accounts and the signed-token Identity Provider used by the
REST surface and the live connection.

Key components:
    - User model: Email login, unique username, role, ban flag
    - AuthService: Registration, login, password change, account removal
    - tokens: Access token issue/verification (simplejwt)
    - ActiveUserJWTAuthentication: DRF auth class refusing banned users
    - signals: user_registered / user_logged_in

Usage:
    from authentication.models import User
    from authentication.services import AuthService
    from authentication.tokens import verify_access_token
"""
