"""Supabase Auth adapter."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import AuthError, Client

from nutrilog.domain.errors import AuthenticationError, ConflictError
from nutrilog.domain.users import AuthSession
from nutrilog.services.users import AuthClient

logger = logging.getLogger(__name__)

DUPLICATE_USER_CODES = {"user_already_exists", "email_exists"}


@dataclass
class SupabaseAuthClient(AuthClient):
    """Identity provider backed by Supabase Auth.

    Signing in stores a session on the client it is given, so this adapter must
    not share a client with the repositories.
    """

    client: Client

    def sign_up(self, email: str, password: str) -> AuthSession:
        try:
            response = self.client.auth.sign_up({"email": email, "password": password})
        except AuthError as exc:
            if getattr(exc, "code", None) in DUPLICATE_USER_CODES:
                raise ConflictError("User with this email already exists") from exc
            raise AuthenticationError(exc.message) from exc
        if response.user is None:
            raise AuthenticationError("Registration failed")
        return AuthSession(
            user_id=UUID(str(response.user.id)),
            email=response.user.email or email,
            access_token=response.session.access_token if response.session else None,
        )

    def sign_in(self, email: str, password: str) -> AuthSession:
        try:
            response = self.client.auth.sign_in_with_password(
                {"email": email, "password": password}
            )
        except AuthError as exc:
            logger.info("Sign-in rejected", extra={"reason": exc.message})
            raise AuthenticationError("Invalid email or password") from exc
        if response.user is None or response.session is None:
            raise AuthenticationError("Invalid email or password")
        return AuthSession(
            user_id=UUID(str(response.user.id)),
            email=response.user.email or email,
            access_token=response.session.access_token,
        )

    def verify_token(self, access_token: str) -> UUID:
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            raise AuthenticationError("Invalid or expired token") from exc
        if response is None or response.user is None:
            raise AuthenticationError("Invalid or expired token")
        return UUID(str(response.user.id))
