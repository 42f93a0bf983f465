"""Service layer for profiles, connections and the wallet."""

from __future__ import annotations

import base64
import binascii
from typing import TYPE_CHECKING, Any

from flask import current_app

from jamaah.core.media import (
    ALLOWED_IMAGE_TYPES,
    AVATAR_SIZE,
    MAX_IMAGE_BYTES,
    InvalidImageError,
    normalize_image,
)
from jamaah.core.store import Repository
from jamaah.errors import NotFoundError, ValidationError
from jamaah.utils import display_name, new_id, now_iso, now_ms

from .models import ROLE_MEMBER

if TYPE_CHECKING:
    from jamaah.core.identity import AuthProvider
    from jamaah.core.media import MediaStorage
    from jamaah.core.store import KVStore
    from jamaah.core.types import Identity

    from .models import Connections, PublicProfile, UserProfile, Withdrawal

PUBLIC_FIELDS = ("id", "name", "username", "mosque", "avatar_url")


class ProfileService:
    """Handles business logic and data access for member profiles."""

    @staticmethod
    def repo(store: KVStore) -> Repository[UserProfile]:
        return Repository(store, "profile:")

    @staticmethod
    def _username_key(username: str) -> str:
        return f"username:{username.lower()}"

    @staticmethod
    def get(store: KVStore, user_id: str) -> UserProfile | None:
        return ProfileService.repo(store).get(user_id)

    @staticmethod
    def default_profile(identity: Identity) -> UserProfile:
        """Build the profile of a member who has none stored yet."""
        profile: UserProfile = {
            "id": identity["id"],
            "email": identity.get("email"),
            "name": display_name(identity),
            "role": identity.get("role") or ROLE_MEMBER,
            "member_since": identity.get("created_at") or now_iso(),
            "wallet_balance": 0,
        }
        if identity.get("member_id"):
            profile["member_id"] = identity["member_id"]
        return profile

    @staticmethod
    def get_or_create(store: KVStore, identity: Identity) -> UserProfile:
        """Return the caller's profile, creating it on first read."""
        repo = ProfileService.repo(store)
        profile = repo.get(identity["id"])
        if profile is None:
            profile = repo.put(identity["id"], ProfileService.default_profile(identity))
            current_app.logger.info(f"Created profile for user {identity['id']}")
        return profile

    @staticmethod
    def get_or_create_from_provider(
        store: KVStore, auth: AuthProvider, user_id: str
    ) -> UserProfile | None:
        """Return a stored profile or build one from the auth provider record."""
        profile = ProfileService.get(store, user_id)
        if profile is not None:
            return profile
        record = auth.get_user(user_id)
        if record is None:
            return None
        claims = record.get("claims") or {}
        identity: Identity = {
            "id": record["id"],
            "email": record.get("email"),
            "name": record.get("name"),
            "role": claims.get("role", ROLE_MEMBER),
            "member_id": claims.get("memberId"),
            "created_at": record.get("created_at"),
        }
        return ProfileService.repo(store).put(
            user_id, ProfileService.default_profile(identity)
        )

    @staticmethod
    def public(profile: UserProfile) -> PublicProfile:
        return {k: profile.get(k) for k in PUBLIC_FIELDS}  # type: ignore[return-value]

    @staticmethod
    def update(
        store: KVStore, identity: Identity, data: dict[str, Any]
    ) -> UserProfile:
        """Apply a partial update; empty values keep the stored ones.

        A new username must be free; its ``username:<name>`` key is moved
        along with it.
        """
        user_id = identity["id"]
        username = data.get("username")
        if username:
            owner = store.get(ProfileService._username_key(username))
            if owner and owner != user_id:
                raise ValidationError("Username sudah digunakan")

        current = ProfileService.get(store, user_id) or ProfileService.default_profile(
            identity
        )

        if username and username != current.get("username"):
            if current.get("username"):
                store.delete(ProfileService._username_key(current["username"]))
            store.set(ProfileService._username_key(username), user_id)

        updated = dict(current)
        for field in ("name", "username", "phone", "address", "mosque"):
            if data.get(field):
                updated[field] = data[field]
        return ProfileService.repo(store).put(user_id, updated)  # type: ignore[arg-type]

    @staticmethod
    def search_by_username(
        store: KVStore, caller_id: str, username: str
    ) -> PublicProfile:
        if not username:
            raise ValidationError("Username required")
        user_id = store.get(ProfileService._username_key(username))
        if not user_id:
            raise NotFoundError("User tidak ditemukan")
        if user_id == caller_id:
            raise ValidationError("Tidak bisa menambahkan diri sendiri")
        profile = ProfileService.get(store, user_id)
        if not profile:
            raise NotFoundError("User tidak ditemukan")
        public = ProfileService.public(profile)
        public.pop("avatar_url", None)
        return public

    @staticmethod
    def set_avatar(
        store: KVStore,
        media: MediaStorage,
        identity: Identity,
        encoded: str,
        file_type: str | None = None,
    ) -> str:
        """Decode, normalise and upload a base64 avatar; returns its URL."""
        if file_type and file_type.lower() not in ALLOWED_IMAGE_TYPES:
            raise ValidationError("Format file harus JPG, PNG, atau WebP")
        payload = encoded.split(",", 1)[1] if "," in encoded else encoded
        try:
            raw = base64.b64decode(payload, validate=True)
        except (binascii.Error, ValueError) as e:
            raise ValidationError("File tidak valid") from e
        if len(raw) > MAX_IMAGE_BYTES:
            raise ValidationError("Ukuran file maksimal 5MB")
        try:
            data, content_type = normalize_image(raw, max_size=AVATAR_SIZE)
        except InvalidImageError as e:
            raise ValidationError(str(e)) from e

        user_id = identity["id"]
        extension = content_type.split("/")[1].replace("jpeg", "jpg")
        path = f"avatars/{user_id}/{now_ms()}.{extension}"

        current = ProfileService.get_or_create(store, identity)
        if current.get("avatar_path"):
            try:
                media.delete(current["avatar_path"])
            except Exception as e:
                current_app.logger.warning(f"Error deleting old avatar: {e}")

        url = media.upload(path, data, content_type)
        ProfileService.repo(store).put(
            user_id, {**current, "avatar_url": url, "avatar_path": path}
        )
        return url


class ConnectionService:
    """Mutual member connections stored at ``connections:<userId>``."""

    @staticmethod
    def _get(store: KVStore, user_id: str) -> Connections:
        return store.get(f"connections:{user_id}") or {"user_id": user_id, "list": []}

    @staticmethod
    def list(store: KVStore, user_id: str) -> list[PublicProfile]:
        """Public profiles of the user's connections; unknown ids are skipped."""
        results = []
        for other_id in ConnectionService._get(store, user_id)["list"]:
            profile = ProfileService.get(store, other_id)
            if profile:
                public = ProfileService.public(profile)
                public.pop("avatar_url", None)
                results.append(public)
        return results

    @staticmethod
    def add(store: KVStore, user_id: str, target_id: str) -> None:
        if target_id == user_id:
            raise ValidationError("Tidak bisa menambahkan diri sendiri")
        if not ProfileService.get(store, target_id):
            raise NotFoundError("User tidak ditemukan")

        mine = ConnectionService._get(store, user_id)
        theirs = ConnectionService._get(store, target_id)
        if target_id in mine["list"]:
            raise ValidationError("Sudah terhubung dengan user ini")

        mine["list"].append(target_id)
        if user_id not in theirs["list"]:
            theirs["list"].append(user_id)
        store.set(f"connections:{user_id}", mine)
        store.set(f"connections:{target_id}", theirs)


class WalletService:
    """Demo wallet withdrawals. No money moves; requests stay ``pending``."""

    @staticmethod
    def withdraw(
        store: KVStore, user_id: str, amount: int, bank_account: str
    ) -> Withdrawal:
        repo = ProfileService.repo(store)
        profile = repo.get(user_id)
        if not profile or (profile.get("wallet_balance") or 0) < amount:
            raise ValidationError("Saldo tidak cukup")

        profile["wallet_balance"] = (profile.get("wallet_balance") or 0) - amount
        repo.put(user_id, profile)

        withdrawal: Withdrawal = {
            "id": new_id(),
            "user_id": user_id,
            "amount": amount,
            "bank_account": bank_account,
            "status": "pending",
            "created_at": now_ms(),
        }
        store.set(f"withdrawal:{withdrawal['id']}", withdrawal)
        return withdrawal
