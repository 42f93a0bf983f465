"""Base test case wiring the app to in-memory collaborators."""

from __future__ import annotations

import unittest
from typing import Any

from mockfirestore import MockFirestore

from jamaah import create_app
from tests.mock_utils import FakeAuthProvider, mock_media, patch_mockfirestore

patch_mockfirestore()

PREFIX = "/jamaah"


class ApiTestCase(unittest.TestCase):
    """Flask test client over MockFirestore and a fake auth provider."""

    config: dict[str, Any] = {}

    def setUp(self) -> None:
        self.db = MockFirestore()
        self.fake_auth = FakeAuthProvider()
        self.auth = self.fake_auth.mock
        self.media = mock_media()
        self.senders: list[Any] = []
        self.app = create_app(
            {"TESTING": True, "API_PREFIX": PREFIX, **self.config},
            db=self.db,
            auth_provider=self.auth,
            media=self.media,
            senders=self.senders,
        )
        self.client = self.app.test_client()
        self.store = self.app.extensions["jamaah"]["store"]
        self.ctx = self.app.app_context()
        self.ctx.push()

    def tearDown(self) -> None:
        self.ctx.pop()
        self.db.reset()

    def url(self, path: str) -> str:
        return f"{PREFIX}{path}"

    def login_as(
        self,
        uid: str,
        role: str = "Member",
        email: str | None = None,
        name: str | None = None,
        **claims: Any,
    ) -> dict[str, str]:
        """Return Authorization headers for a caller with the given claims."""
        token = self.fake_auth.issue_token(
            uid,
            role=role,
            email=email or f"{uid}@jamaah.id",
            name=name or uid.title(),
            **claims,
        )
        return {"Authorization": f"Bearer {token}"}

    def login_admin(self, uid: str = "admin") -> dict[str, str]:
        return self.login_as(uid, role="Admin", status="approved")
