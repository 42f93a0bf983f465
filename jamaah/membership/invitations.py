"""Invitation code lookup and bookkeeping."""

from __future__ import annotations

from typing import TYPE_CHECKING

from jamaah.core.store import Repository
from jamaah.errors import DuplicateResourceError, ValidationError
from jamaah.utils import now_ms

if TYPE_CHECKING:
    from jamaah.core.store import KVStore

    from .models import InvitationCode

USED_SUFFIX = ":used"


class InvitationService:
    """Handles invitation codes stored under ``invitation:<code>``."""

    @staticmethod
    def _repo(store: KVStore) -> Repository[InvitationCode]:
        return Repository(store, "invitation:")

    @staticmethod
    def used_by(store: KVStore, code: str) -> str | None:
        """Return the email recorded by ``mark_used``, if any."""
        return store.get(f"invitation:{code}{USED_SUFFIX}")

    @staticmethod
    def validate(store: KVStore, code: str, single_use: bool = False) -> bool:
        """Return True when ``code`` may be used to sign up.

        Any truthy stored record is valid. The ``used`` marker only matters
        when ``single_use`` is on.
        """
        if not code or ":" in code or "/" in code:
            return False
        record = InvitationService._repo(store).get(code)
        if not record:
            return False
        if single_use and InvitationService.used_by(store, code):
            return False
        return True

    @staticmethod
    def mark_used(store: KVStore, code: str, email: str) -> None:
        store.set(f"invitation:{code}{USED_SUFFIX}", email)

    @staticmethod
    def create(store: KVStore, code: str) -> InvitationCode:
        """Create a new invitation code."""
        code = (code or "").strip()
        if not code or ":" in code or "/" in code:
            raise ValidationError("Kode undangan tidak valid")
        repo = InvitationService._repo(store)
        if repo.get(code):
            raise DuplicateResourceError("Kode undangan sudah ada")
        record: InvitationCode = {"code": code, "valid": True, "created_at": now_ms()}
        return repo.put(code, record)

    @staticmethod
    def list(store: KVStore) -> list[InvitationCode]:
        """List every code with the email that last used it."""
        codes = []
        for record in InvitationService._repo(store).list():
            if not isinstance(record, dict) or not record.get("code"):
                continue
            used_by = InvitationService.used_by(store, record["code"])
            codes.append({**record, "used_by": used_by} if used_by else record)
        return sorted(codes, key=lambda r: r.get("code", ""))
