"""Adapters around the hosted auth provider (Firebase Authentication)."""

from __future__ import annotations

import logging
from typing import Any

import requests
from firebase_admin import auth, exceptions

from .types import Identity

logger = logging.getLogger(__name__)

SIGN_IN_URL = (
    "https://identitytoolkit.googleapis.com/v1/accounts:signInWithPassword"
)


class AuthProviderError(Exception):
    """Raised when the auth provider rejects a call; carries its message."""

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class AuthProvider:
    """Thin wrapper over ``firebase_admin.auth`` and the Identity Toolkit API.

    Every provider failure is re-raised as ``AuthProviderError`` so callers
    handle a single exception type and can surface the provider's message.
    """

    def __init__(
        self,
        api_key: str | None = None,
        timeout: float = 10,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.timeout = timeout
        self.http = session or requests.Session()

    def verify_id_token(self, token: str) -> dict[str, Any]:
        """Verify an ID token, rejecting tokens issued before a revocation."""
        try:
            return auth.verify_id_token(token, check_revoked=True)
        except (ValueError, exceptions.FirebaseError) as e:
            raise AuthProviderError(str(e), getattr(e, "code", None)) from e

    def create_user(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
        claims: dict[str, Any] | None = None,
    ) -> str:
        """Create an account, set its custom claims and return its uid.

        If the claims cannot be set the new account is deleted again, so a
        failed call leaves no account behind.
        """
        try:
            record = auth.create_user(
                email=email,
                password=password,
                display_name=display_name or None,
                email_verified=True,
            )
        except (ValueError, exceptions.FirebaseError) as e:
            raise AuthProviderError(str(e), getattr(e, "code", None)) from e
        if claims:
            try:
                auth.set_custom_user_claims(record.uid, claims)
            except (ValueError, exceptions.FirebaseError) as e:
                self._delete_account(record.uid)
                raise AuthProviderError(str(e), getattr(e, "code", None)) from e
        return record.uid

    def _delete_account(self, uid: str) -> None:
        try:
            auth.delete_user(uid)
        except (ValueError, exceptions.FirebaseError):
            logger.exception("Could not delete account %s after a failed signup", uid)

    def update_password(self, uid: str, password: str) -> None:
        try:
            auth.update_user(uid, password=password)
        except (ValueError, exceptions.FirebaseError) as e:
            raise AuthProviderError(str(e), getattr(e, "code", None)) from e

    def get_user(self, uid: str) -> dict[str, Any] | None:
        """Return a plain dict describing the account, or None if unknown."""
        try:
            record = auth.get_user(uid)
        except auth.UserNotFoundError:
            return None
        except (ValueError, exceptions.FirebaseError) as e:
            raise AuthProviderError(str(e), getattr(e, "code", None)) from e
        return {
            "id": record.uid,
            "email": record.email,
            "name": record.display_name,
            "claims": dict(record.custom_claims or {}),
            "created_at": record.user_metadata.creation_timestamp,
        }

    def update_claims(self, uid: str, updates: dict[str, Any]) -> dict[str, Any]:
        """Merge ``updates`` into the account's custom claims."""
        try:
            record = auth.get_user(uid)
            claims = {**(record.custom_claims or {}), **updates}
            auth.set_custom_user_claims(uid, claims)
        except (ValueError, exceptions.FirebaseError) as e:
            raise AuthProviderError(str(e), getattr(e, "code", None)) from e
        return claims

    def revoke_sessions(self, uid: str) -> None:
        """Invalidate every refresh token (and, on verify, ID token) of ``uid``."""
        try:
            auth.revoke_refresh_tokens(uid)
        except (ValueError, exceptions.FirebaseError) as e:
            raise AuthProviderError(str(e), getattr(e, "code", None)) from e

    def sign_in_with_password(self, email: str, password: str) -> dict[str, Any]:
        """Exchange email and password for ID and refresh tokens."""
        if not self.api_key:
            raise AuthProviderError("FIREBASE_API_KEY is not configured.")
        response = self.http.post(
            SIGN_IN_URL,
            params={"key": self.api_key},
            json={"email": email, "password": password, "returnSecureToken": True},
            timeout=self.timeout,
        )
        if response.status_code != requests.codes.ok:
            try:
                message = response.json()["error"]["message"]
            except (ValueError, KeyError, TypeError):
                message = f"Sign-in failed with HTTP {response.status_code}"
            raise AuthProviderError(message, message)
        return response.json()


def identity_from_claims(claims: dict[str, Any]) -> Identity:
    """Build the caller identity from verified token claims."""
    return {
        "id": claims["uid"],
        "email": claims.get("email"),
        "name": claims.get("name"),
        "role": claims.get("role", "Member"),
        "status": claims.get("status"),
        "member_id": claims.get("memberId"),
    }


class IdentityVerifier:
    """Resolves an ``Authorization: Bearer <token>`` header to an Identity."""

    def __init__(self, provider: AuthProvider) -> None:
        self.provider = provider

    def verify(self, authorization_header: str | None) -> Identity | None:
        """Return the caller identity, or None. Never raises."""
        if not authorization_header:
            return None
        scheme, _, token = authorization_header.partition(" ")
        token = token.strip()
        if scheme.lower() != "bearer" or not token:
            return None
        try:
            claims = self.provider.verify_id_token(token)
        except AuthProviderError as e:
            logger.info("Authorization error while verifying user: %s", e)
            return None
        except Exception:
            logger.exception("Unexpected error while verifying user")
            return None
        return identity_from_claims(claims)
