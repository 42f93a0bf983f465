"""Tests for the key-value store adapter."""

import unittest

from mockfirestore import MockFirestore

from jamaah.core.store import KVStore, Repository
from tests.mock_utils import patch_mockfirestore

patch_mockfirestore()


class KVStoreTestCase(unittest.TestCase):
    def setUp(self):
        self.db = MockFirestore()
        self.store = KVStore(self.db, collection="kv_test")

    def tearDown(self):
        self.db.reset()

    def test_get_missing_key_returns_none(self):
        self.assertIsNone(self.store.get("timeline:nothing"))

    def test_set_then_get(self):
        self.store.set("event:1", {"title": "Kajian"})
        self.assertEqual(self.store.get("event:1"), {"title": "Kajian"})

    def test_set_overwrites(self):
        self.store.set("event:1", {"title": "Lama"})
        self.store.set("event:1", {"title": "Baru"})
        self.assertEqual(self.store.get("event:1")["title"], "Baru")

    def test_stored_document_carries_key(self):
        self.store.set("event:1", {"title": "Kajian"})
        doc = self.db.collection("kv_test").document("event:1").get().to_dict()
        self.assertEqual(doc, {"key": "event:1", "value": {"title": "Kajian"}})

    def test_delete(self):
        self.store.set("event:1", {"title": "Kajian"})
        self.store.delete("event:1")
        self.assertIsNone(self.store.get("event:1"))

    def test_delete_missing_key_is_noop(self):
        self.store.delete("event:missing")
        self.assertIsNone(self.store.get("event:missing"))

    def test_get_by_prefix_only_matches_prefix(self):
        self.store.set("notification:u1:a", {"id": "a"})
        self.store.set("notification:u1:b", {"id": "b"})
        self.store.set("notification:u2:c", {"id": "c"})
        self.store.set("notification:u10:d", {"id": "d"})

        values = self.store.get_by_prefix("notification:u1:")

        self.assertEqual(sorted(v["id"] for v in values), ["a", "b"])

    def test_get_by_prefix_ignores_looked_up_missing_keys(self):
        self.store.get("event:ghost")
        self.store.set("event:1", {"id": "1"})
        self.assertEqual(self.store.get_by_prefix("event:"), [{"id": "1"}])

    def test_invalid_key_rejected(self):
        with self.assertRaises(ValueError):
            self.store.set("", 1)
        with self.assertRaises(ValueError):
            self.store.get("a/b")

    def test_mutate_uses_copy_of_default(self):
        default = []
        result = self.store.mutate("bookmarks:u1", lambda v: v + ["p1"], default=default)
        self.assertEqual(result, ["p1"])
        self.assertEqual(default, [])
        self.assertEqual(self.store.get("bookmarks:u1"), ["p1"])

    def test_mutate_last_write_wins(self):
        self.store.set("counter", 1)
        first = self.store.get("counter")
        second = self.store.get("counter")
        self.store.set("counter", first + 1)
        self.store.set("counter", second + 1)
        self.assertEqual(self.store.get("counter"), 2)


class RepositoryTestCase(unittest.TestCase):
    def setUp(self):
        self.db = MockFirestore()
        self.repo = Repository(KVStore(self.db), "campaign:")

    def tearDown(self):
        self.db.reset()

    def test_key_and_exists(self):
        self.assertEqual(self.repo.key("1"), "campaign:1")
        self.assertFalse(self.repo.exists("1"))
        self.repo.put("1", {"id": "1"})
        self.assertTrue(self.repo.exists("1"))

    def test_update_missing_returns_none(self):
        self.assertIsNone(self.repo.update("404", lambda c: c))

    def test_update_applies_mutator(self):
        self.repo.put("1", {"id": "1", "current_amount": 10})
        updated = self.repo.update(
            "1", lambda c: {**c, "current_amount": c["current_amount"] + 5}
        )
        self.assertEqual(updated["current_amount"], 15)
        self.assertEqual(self.repo.get("1")["current_amount"], 15)

    def test_list(self):
        self.repo.put("1", {"id": "1"})
        self.repo.put("2", {"id": "2"})
        self.assertEqual(len(self.repo.list()), 2)


if __name__ == "__main__":
    unittest.main()
