"""Service layer for announcements, articles and article comments."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jamaah.core.store import Repository
from jamaah.errors import ForbiddenError, NotFoundError
from jamaah.utils import display_name, new_id, now_ms, sort_newest_first

if TYPE_CHECKING:
    from jamaah.core.store import KVStore
    from jamaah.core.types import Identity

    from .models import Announcement, Article, ArticleComment


class ContentService:
    """Handles business logic and data access for editorial content."""

    @staticmethod
    def announcements(store: KVStore) -> Repository[Announcement]:
        return Repository(store, "announcement:")

    @staticmethod
    def articles(store: KVStore) -> Repository[Article]:
        return Repository(store, "article:")

    @staticmethod
    def _comments(store: KVStore, article_id: str) -> Repository[ArticleComment]:
        return Repository(store, f"comment:article:{article_id}:")

    @staticmethod
    def list_announcements(store: KVStore) -> list[Announcement]:
        return sort_newest_first(ContentService.announcements(store).list(), "created_at")

    @staticmethod
    def create_announcement(
        store: KVStore, user_id: str, data: dict[str, Any]
    ) -> Announcement:
        announcement_id = new_id()
        announcement: Announcement = {
            "id": announcement_id,
            "title": data["title"],
            "content": data["content"],
            "created_at": now_ms(),
            "created_by": user_id,
        }
        if data.get("image"):
            announcement["image"] = data["image"]
        return ContentService.announcements(store).put(announcement_id, announcement)

    @staticmethod
    def list_articles(store: KVStore) -> list[Article]:
        return sort_newest_first(ContentService.articles(store).list(), "created_at")

    @staticmethod
    def list_comments(store: KVStore, article_id: str) -> list[ArticleComment]:
        return sort_newest_first(
            ContentService._comments(store, article_id).list(), "created_at"
        )

    @staticmethod
    def add_comment(
        store: KVStore, identity: Identity, article_id: str, text: str
    ) -> ArticleComment:
        comment_id = new_id()
        comment: ArticleComment = {
            "id": comment_id,
            "article_id": article_id,
            "user_id": identity["id"],
            "user_name": display_name(identity),
            "text": text.strip(),
            "created_at": now_ms(),
        }
        return ContentService._comments(store, article_id).put(comment_id, comment)

    @staticmethod
    def delete_comment(
        store: KVStore, article_id: str, comment_id: str, user_id: str
    ) -> None:
        """Delete an article comment; only its author may."""
        repo = ContentService._comments(store, article_id)
        comment = repo.get(comment_id)
        if not comment:
            raise NotFoundError("Komentar tidak ditemukan")
        if comment.get("user_id") != user_id:
            raise ForbiddenError("Tidak memiliki izin")
        repo.delete(comment_id)
