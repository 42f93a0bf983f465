"""Flask extensions for the application."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from firebase_admin import firestore
from flask import current_app
from flask_mail import Mail

from .core.identity import AuthProvider, IdentityVerifier
from .core.media import MediaStorage
from .core.messaging import build_senders
from .core.store import KVStore

if TYPE_CHECKING:
    from flask import Flask

    from .core.messaging import NotificationSender

mail = Mail()


class Backend:
    """Binds the store, auth provider and delivery collaborators to an app.

    Everything is constructed once in ``init_app`` and kept in
    ``app.extensions`` so each app (and each test) owns its own instances.
    """

    def __init__(self, app: Flask | None = None, **kwargs: Any) -> None:
        if app is not None:
            self.init_app(app, **kwargs)

    def init_app(
        self,
        app: Flask,
        db: Any = None,
        auth_provider: AuthProvider | None = None,
        media: MediaStorage | None = None,
        senders: list[NotificationSender] | None = None,
    ) -> None:
        """Construct the collaborators for ``app``."""
        if db is None:
            db = firestore.client()
        if auth_provider is None:
            auth_provider = AuthProvider(
                api_key=app.config.get("FIREBASE_API_KEY"),
                timeout=app.config["HTTP_TIMEOUT"],
            )
        if media is None:
            media = MediaStorage(bucket_name=app.config.get("FIREBASE_STORAGE_BUCKET"))
        if senders is None:
            senders = build_senders(app.config, mail)

        app.extensions["jamaah"] = {
            "store": KVStore(db, collection=app.config["KV_COLLECTION"]),
            "auth": auth_provider,
            "identity": IdentityVerifier(auth_provider),
            "media": media,
            "senders": senders,
        }

    @staticmethod
    def _state() -> dict[str, Any]:
        return current_app.extensions["jamaah"]

    @property
    def store(self) -> KVStore:
        return self._state()["store"]

    @property
    def auth(self) -> AuthProvider:
        return self._state()["auth"]

    @property
    def identity(self) -> IdentityVerifier:
        return self._state()["identity"]

    @property
    def media(self) -> MediaStorage:
        return self._state()["media"]

    @property
    def senders(self) -> list[NotificationSender]:
        return self._state()["senders"]


backend = Backend()
