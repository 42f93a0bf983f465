"""Data models for announcements and articles."""

from __future__ import annotations

from typing import TypedDict


class _AnnouncementBase(TypedDict):
    id: str
    title: str
    content: str
    created_at: int
    created_by: str


class Announcement(_AnnouncementBase, total=False):
    image: str


class _ArticleBase(TypedDict):
    id: str
    title: str
    excerpt: str
    author: str
    content: str
    created_at: int


class Article(_ArticleBase, total=False):
    image: str


class ArticleComment(TypedDict):
    """A comment stored at ``comment:article:<articleId>:<id>``."""

    id: str
    article_id: str
    user_id: str
    user_name: str
    text: str
    created_at: int
