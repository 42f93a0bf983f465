"""Service layer for timeline posts and their interactions.

Likes, comments and bookmarks are read-modify-write over a single stored
value with no version check, so concurrent toggles on the same record can
lose an update.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any

from jamaah.core.store import Repository
from jamaah.errors import ForbiddenError, NotFoundError
from jamaah.user.services import ProfileService
from jamaah.utils import display_name, now_iso, now_ms, sort_newest_first

from .models import POST_STATUS_PUBLISHED

if TYPE_CHECKING:
    from jamaah.core.store import KVStore
    from jamaah.core.types import Identity

    from .models import Comment, TimelinePost

TIMELINE_PREFIX = "timeline:"


def normalize_post_id(post_id: str) -> str:
    """Accept ids with or without the ``timeline:`` prefix."""
    if post_id.startswith(TIMELINE_PREFIX):
        return post_id[len(TIMELINE_PREFIX):]
    return post_id


def author_name(store: KVStore, identity: Identity) -> str:
    """Snapshot of the author's display name at write time."""
    profile = ProfileService.get(store, identity["id"])
    return display_name(identity, profile, default="Anonymous")


class TimelineService:
    """Handles business logic and data access for timeline posts."""

    @staticmethod
    def _repo(store: KVStore) -> Repository[TimelinePost]:
        return Repository(store, TIMELINE_PREFIX)

    @staticmethod
    def list(store: KVStore) -> list[TimelinePost]:
        """Every post, newest first."""
        return sort_newest_first(TimelineService._repo(store).list(), "created_at")

    @staticmethod
    def list_by_user(store: KVStore, user_id: str) -> list[TimelinePost]:
        posts = [p for p in TimelineService._repo(store).list() if p.get("user_id") == user_id]
        return sort_newest_first(posts, "created_at")

    @staticmethod
    def get(store: KVStore, post_id: str) -> TimelinePost:
        post = TimelineService._repo(store).get(normalize_post_id(post_id))
        if not post:
            raise NotFoundError("Postingan tidak ditemukan")
        return post

    @staticmethod
    def get_owned(store: KVStore, post_id: str, user_id: str) -> TimelinePost:
        post = TimelineService.get(store, post_id)
        if post.get("user_id") != user_id:
            raise ForbiddenError("Anda hanya dapat mengubah postingan Anda sendiri")
        return post

    @staticmethod
    def create(store: KVStore, identity: Identity, data: dict[str, Any]) -> TimelinePost:
        """Create a post authored by ``identity``."""
        post_id = f"{now_ms()}_{identity['id']}"
        post: TimelinePost = {
            "id": post_id,
            "title": data["title"],
            "content": data["content"],
            "image": data.get("image") or None,
            "user_id": identity["id"],
            "user_name": author_name(store, identity),
            "created_at": now_iso(),
            "likes": [],
            "comments": [],
            "status": POST_STATUS_PUBLISHED,
        }
        return TimelineService._repo(store).put(post_id, post)

    @staticmethod
    def update(
        store: KVStore, post_id: str, user_id: str, data: dict[str, Any]
    ) -> TimelinePost:
        """Overwrite only the provided, non-empty fields of an owned post."""
        post = TimelineService.get_owned(store, post_id, user_id)
        updated: TimelinePost = {**post}
        for field in ("title", "content"):
            if data.get(field):
                updated[field] = data[field]  # type: ignore[literal-required]
        if "image" in data:
            updated["image"] = data["image"] or None
        updated["updated_at"] = now_iso()
        return TimelineService._repo(store).put(normalize_post_id(post_id), updated)

    @staticmethod
    def delete(store: KVStore, post_id: str, user_id: str) -> None:
        """Hard delete an owned post."""
        TimelineService.get_owned(store, post_id, user_id)
        TimelineService._repo(store).delete(normalize_post_id(post_id))

    @staticmethod
    def toggle_like(store: KVStore, post_id: str, user_id: str) -> dict[str, Any]:
        """Add or remove ``user_id`` from the post's likes.

        Toggling twice restores the original membership.
        """
        post = TimelineService.get(store, post_id)
        likes = list(post.get("likes") or [])
        if user_id in likes:
            likes = [uid for uid in likes if uid != user_id]
        else:
            likes.append(user_id)
        TimelineService._repo(store).put(normalize_post_id(post_id), {**post, "likes": likes})
        return {"likes": likes, "isLiked": user_id in likes}

    @staticmethod
    def add_comment(
        store: KVStore, post_id: str, identity: Identity, text: str
    ) -> Comment:
        post = TimelineService.get(store, post_id)
        comment: Comment = {
            "id": f"{now_ms()}_{identity['id']}",
            "user_id": identity["id"],
            "user_name": author_name(store, identity),
            "text": text,
            "created_at": now_iso(),
        }
        comments = [*(post.get("comments") or []), comment]
        TimelineService._repo(store).put(
            normalize_post_id(post_id), {**post, "comments": comments}
        )
        return comment

    @staticmethod
    def delete_comment(
        store: KVStore, post_id: str, comment_id: str, user_id: str
    ) -> None:
        """Remove a comment; allowed for its author and for the post owner."""
        post = TimelineService.get(store, post_id)
        comments = post.get("comments") or []
        comment = next((c for c in comments if c.get("id") == comment_id), None)
        if comment is None:
            raise NotFoundError("Komentar tidak ditemukan")
        if comment.get("user_id") != user_id and post.get("user_id") != user_id:
            raise ForbiddenError(
                "Anda hanya dapat menghapus komentar Anda sendiri atau komentar "
                "pada postingan Anda"
            )
        remaining = [c for c in comments if c.get("id") != comment_id]
        TimelineService._repo(store).put(
            normalize_post_id(post_id), {**post, "comments": remaining}
        )


class BookmarkService:
    """Per-user bookmark sets stored at ``bookmarks:<userId>``."""

    @staticmethod
    def _key(user_id: str) -> str:
        return f"bookmarks:{user_id}"

    @staticmethod
    def toggle(store: KVStore, post_id: str, user_id: str) -> dict[str, Any]:
        post_id = normalize_post_id(post_id)
        TimelineService.get(store, post_id)

        def flip(bookmarks: list[str]) -> list[str]:
            if post_id in bookmarks:
                return [b for b in bookmarks if b != post_id]
            return [*bookmarks, post_id]

        bookmarks = store.mutate(BookmarkService._key(user_id), flip, default=[])
        return {"bookmarks": bookmarks, "isBookmarked": post_id in bookmarks}

    @staticmethod
    def list_posts(store: KVStore, user_id: str) -> list[TimelinePost]:
        """Resolve bookmarked ids to posts; ids of deleted posts are skipped."""
        repo = TimelineService._repo(store)
        posts = []
        for post_id in store.get(BookmarkService._key(user_id)) or []:
            post = repo.get(post_id)
            if post:
                posts.append(post)
        return sort_newest_first(posts, "created_at")
