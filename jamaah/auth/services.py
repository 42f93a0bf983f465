"""Signup and the two-phase sign-in gate."""

from __future__ import annotations

import secrets
from typing import TYPE_CHECKING, Any, TypedDict

from flask import current_app

from jamaah.core.identity import AuthProviderError, identity_from_claims
from jamaah.errors import ForbiddenError, UnauthorizedError, ValidationError
from jamaah.membership import (
    InvitationService,
    issue_member_id,
    member_ids,
    pending_users,
)
from jamaah.membership.models import MEMBER_STATUS_PENDING
from jamaah.user.models import PROFILE_STATUS_PENDING, ROLE_MEMBER
from jamaah.user.services import ProfileService
from jamaah.utils import mask_email, now_iso

if TYPE_CHECKING:
    from jamaah.core.identity import AuthProvider
    from jamaah.core.store import KVStore
    from jamaah.core.types import Identity
    from jamaah.membership.models import MemberIdRecord, PendingUser

PENDING_APPROVAL_MESSAGE = "Akun Anda masih menunggu persetujuan Admin."


class Session(TypedDict):
    """Tokens issued by the auth provider plus the verified identity."""

    access_token: str
    refresh_token: str
    expires_in: str
    user: Identity


class SignupService:
    """Creates accounts that wait for admin approval."""

    @staticmethod
    def submit(
        store: KVStore,
        auth: AuthProvider,
        data: dict[str, Any],
        single_use: bool = False,
    ) -> str:
        """Register a new member and return the issued member ID.

        The provider account gets a random throwaway password nobody knows;
        the real one is issued on approval.

        Raises:
            ValidationError: If the invitation code is invalid or the
                provider rejects the account.
        """
        code = data["invitationCode"]
        if not InvitationService.validate(store, code, single_use=single_use):
            raise ValidationError("Kode undangan tidak valid")

        member_id = issue_member_id(store)
        throwaway_password = secrets.token_urlsafe(24)
        try:
            user_id = auth.create_user(
                data["email"],
                throwaway_password,
                display_name=data["name"],
                claims={
                    "role": ROLE_MEMBER,
                    "memberId": member_id,
                    "status": MEMBER_STATUS_PENDING,
                },
            )
        except AuthProviderError as e:
            current_app.logger.warning(f"Error creating user during signup: {e}")
            raise ValidationError(e.message) from e

        created_at = now_iso()
        record: MemberIdRecord = {
            "memberId": member_id,
            "userId": user_id,
            "email": data["email"],
            "name": data["name"],
            "phone": data["phone"],
            "status": MEMBER_STATUS_PENDING,
            "createdAt": created_at,
        }
        member_ids(store).put(member_id, record)

        pending: PendingUser = {
            "userId": user_id,
            "email": data["email"],
            "name": data["name"],
            "phone": data["phone"],
            "memberId": member_id,
            "invitationCode": code,
            "createdAt": created_at,
        }
        pending_users(store).put(user_id, pending)
        InvitationService.mark_used(store, code, data["email"])

        current_app.logger.info(
            f"Signup submitted for {mask_email(data['email'])} as {member_id}"
        )
        return member_id


class SignInService:
    """Authentication and authorization-to-use-the-app, kept as two steps."""

    @staticmethod
    def authenticate(auth: AuthProvider, email: str, password: str) -> Session:
        """Exchange credentials for a provider session and verify its token.

        Raises:
            UnauthorizedError: With the provider's message on failure.
        """
        try:
            tokens = auth.sign_in_with_password(email, password)
            claims = auth.verify_id_token(tokens["idToken"])
        except AuthProviderError as e:
            raise UnauthorizedError(e.message) from e
        return {
            "access_token": tokens["idToken"],
            "refresh_token": tokens.get("refreshToken", ""),
            "expires_in": tokens.get("expiresIn", ""),
            "user": identity_from_claims(claims),
        }

    @staticmethod
    def is_pending(store: KVStore, identity: Identity) -> bool:
        if identity.get("status") == MEMBER_STATUS_PENDING:
            return True
        if pending_users(store).exists(identity["id"]):
            return True
        profile = ProfileService.get(store, identity["id"])
        return bool(profile and profile.get("status") == PROFILE_STATUS_PENDING)

    @staticmethod
    def authorize_app_access(
        store: KVStore, auth: AuthProvider, session: Session
    ) -> Session:
        """Reject sessions of accounts still awaiting approval.

        A rejected session is revoked at the provider before the error is
        raised, so the issued tokens stop verifying.

        Raises:
            ForbiddenError: If the account is not approved yet.
        """
        identity = session["user"]
        if not SignInService.is_pending(store, identity):
            return session

        try:
            auth.revoke_sessions(identity["id"])
        except AuthProviderError as e:
            current_app.logger.error(
                f"Failed to revoke session of pending user {identity['id']}: {e}"
            )
        current_app.logger.info(f"Blocked sign-in of pending user {identity['id']}")
        raise ForbiddenError(PENDING_APPROVAL_MESSAGE)

    @staticmethod
    def sign_in(
        store: KVStore, auth: AuthProvider, email: str, password: str
    ) -> Session:
        session = SignInService.authenticate(auth, email, password)
        return SignInService.authorize_app_access(store, auth, session)

    @staticmethod
    def sign_out(auth: AuthProvider, user_id: str) -> None:
        """Revoke every refresh token of ``user_id``."""
        auth.revoke_sessions(user_id)
