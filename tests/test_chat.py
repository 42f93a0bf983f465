"""Tests for one-to-one chats."""

import unittest

from jamaah.chat.services import chat_id_for
from tests.helpers import ApiTestCase


class ChatIdTestCase(unittest.TestCase):
    def test_symmetric(self):
        self.assertEqual(chat_id_for("zaid", "amir"), chat_id_for("amir", "zaid"))
        self.assertEqual(chat_id_for("zaid", "amir"), "amir:zaid")


class ChatTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.amir = self.login_as("amir", name="Amir")
        self.zaid = self.login_as("zaid", name="Zaid")
        self.fake_auth.users["zaid"] = {
            "id": "zaid",
            "email": "zaid@jamaah.id",
            "name": "Zaid",
            "claims": {"role": "Member"},
            "created_at": 1_700_000_000_000,
        }

    def start(self, headers, recipient, **body):
        return self.client.post(
            self.url("/api/chats"), json={"recipient_id": recipient, **body}, headers=headers
        )

    def test_start_creates_profiles_and_chat(self):
        response = self.start(self.amir, "zaid", message="Assalamu'alaikum", product_id="p1")

        self.assertEqual(response.status_code, 200)
        chat = response.get_json()
        self.assertEqual(chat["id"], "amir:zaid")
        self.assertEqual(chat["participant_names"], {"amir": "Amir", "zaid": "Zaid"})
        self.assertEqual(chat["product_id"], "p1")
        self.assertEqual([m["text"] for m in chat["messages"]], ["Assalamu'alaikum"])
        self.assertIsNotNone(self.store.get("profile:amir"))
        self.assertIsNotNone(self.store.get("profile:zaid"))

    def test_start_from_either_side_reuses_chat(self):
        self.start(self.amir, "zaid", message="Halo")
        chat = self.start(self.zaid, "amir", message="Wa'alaikumsalam").get_json()
        self.assertEqual(chat["id"], "amir:zaid")
        self.assertEqual(len(chat["messages"]), 2)

    def test_cannot_chat_with_self(self):
        response = self.start(self.amir, "amir")
        self.assertEqual(response.status_code, 400)

    def test_send_and_list(self):
        self.start(self.amir, "zaid")
        sent = self.client.post(
            self.url("/api/chats/amir:zaid/messages"),
            json={"text": "Jadi ke kajian?"},
            headers=self.zaid,
        )
        self.assertEqual(sent.status_code, 201)
        self.assertEqual(sent.get_json()["sender_id"], "zaid")

        messages = self.client.get(
            self.url("/api/chats/amir:zaid/messages"), headers=self.amir
        ).get_json()
        self.assertEqual([m["text"] for m in messages], ["Jadi ke kajian?"])

        chats = self.client.get(self.url("/api/chats"), headers=self.zaid).get_json()
        self.assertEqual([c["id"] for c in chats], ["amir:zaid"])

    def test_non_participant_sees_not_found(self):
        self.start(self.amir, "zaid", message="Rahasia")
        outsider = self.login_as("umar")

        response = self.client.get(
            self.url("/api/chats/amir:zaid/messages"), headers=outsider
        )
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {"error": "Chat tidak ditemukan"})
        self.assertEqual(
            self.client.get(self.url("/api/chats"), headers=outsider).get_json(), []
        )

    def test_delete(self):
        self.start(self.amir, "zaid")
        response = self.client.delete(self.url("/api/chats/amir:zaid"), headers=self.zaid)
        self.assertEqual(response.status_code, 200)
        self.assertIsNone(self.store.get("chat:amir:zaid"))


if __name__ == "__main__":
    unittest.main()
