"""Tests for announcements, articles and article comments."""

import unittest

from tests.helpers import ApiTestCase


class AnnouncementTestCase(ApiTestCase):
    def test_members_cannot_post(self):
        response = self.client.post(
            self.url("/api/announcements"),
            json={"title": "Info", "content": "Isi"},
            headers=self.login_as("u1"),
        )
        self.assertEqual(response.status_code, 403)

    def test_admin_posts_and_everyone_reads(self):
        response = self.client.post(
            self.url("/api/announcements"),
            json={"title": "Jadwal Kajian", "content": "Ahad ba'da Subuh"},
            headers=self.login_admin(),
        )
        self.assertEqual(response.status_code, 201)

        listed = self.client.get(self.url("/api/announcements")).get_json()
        self.assertEqual([a["title"] for a in listed], ["Jadwal Kajian"])

    def test_requires_title_and_content(self):
        response = self.client.post(
            self.url("/api/announcements"),
            json={"title": "Hanya judul"},
            headers=self.login_admin(),
        )
        self.assertEqual(response.status_code, 400)


class ArticleCommentTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.store.set("article:1", {"id": "1", "title": "Adab Berjamaah", "created_at": 1000})
        self.comments_url = self.url("/api/articles/1/comments")

    def test_list_articles(self):
        articles = self.client.get(self.url("/api/articles")).get_json()
        self.assertEqual([a["id"] for a in articles], ["1"])

    def test_comment_flow(self):
        author = self.login_as("u1", name="Khadijah")
        comment = self.client.post(
            self.comments_url, json={"text": " Jazakallah "}, headers=author
        ).get_json()
        self.assertEqual(comment["text"], "Jazakallah")
        self.assertEqual(comment["user_name"], "Khadijah")

        listed = self.client.get(self.comments_url).get_json()
        self.assertEqual(len(listed), 1)

        delete_url = f"{self.comments_url}/{comment['id']}"
        self.assertEqual(
            self.client.delete(delete_url, headers=self.login_as("u2")).status_code, 403
        )
        self.assertEqual(self.client.delete(delete_url, headers=author).status_code, 200)
        self.assertEqual(self.client.get(self.comments_url).get_json(), [])


if __name__ == "__main__":
    unittest.main()
