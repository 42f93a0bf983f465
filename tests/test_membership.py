"""Tests for invitation codes and member-ID issuance."""

import re
import unittest
from unittest.mock import patch

from mockfirestore import MockFirestore

from jamaah.core.store import KVStore
from jamaah.errors import DuplicateResourceError, ValidationError
from jamaah.membership import InvitationService, issue_member_id, list_pending, pending_users
from jamaah.membership.member_ids import format_member_id, member_ids
from tests.mock_utils import patch_mockfirestore

patch_mockfirestore()

MEMBER_ID_RE = re.compile(r"^JMH-\d{6}$")


class MemberIdTestCase(unittest.TestCase):
    def setUp(self):
        self.db = MockFirestore()
        self.store = KVStore(self.db)

    def tearDown(self):
        self.db.reset()

    def test_format_uses_last_six_digits(self):
        self.assertEqual(format_member_id(1_700_000_123_456), "JMH-123456")
        self.assertEqual(format_member_id(42), "JMH-000042")

    def test_issue_matches_pattern(self):
        self.assertRegex(issue_member_id(self.store), MEMBER_ID_RE)

    def test_issue_from_timestamp(self):
        self.assertEqual(issue_member_id(self.store, 1_700_000_654_321), "JMH-654321")

    @patch("jamaah.membership.member_ids.random.randint", return_value=7)
    def test_collision_shifts_by_random_offset(self, mock_randint):
        member_ids(self.store).put("JMH-000100", {"memberId": "JMH-000100"})
        self.assertEqual(issue_member_id(self.store, 100), "JMH-000107")
        mock_randint.assert_called_once_with(1, 999)


class InvitationServiceTestCase(unittest.TestCase):
    def setUp(self):
        self.db = MockFirestore()
        self.store = KVStore(self.db)
        self.store.set("invitation:MASJID2024", {"code": "MASJID2024", "valid": True})

    def tearDown(self):
        self.db.reset()

    def test_validate_known_code(self):
        self.assertTrue(InvitationService.validate(self.store, "MASJID2024"))

    def test_validate_unknown_code(self):
        self.assertFalse(InvitationService.validate(self.store, "NOPE"))
        self.assertFalse(InvitationService.validate(self.store, ""))
        self.assertFalse(InvitationService.validate(self.store, "a/b"))

    def test_codes_are_reusable_by_default(self):
        InvitationService.mark_used(self.store, "MASJID2024", "a@jamaah.id")
        self.assertTrue(InvitationService.validate(self.store, "MASJID2024"))
        self.assertEqual(
            InvitationService.used_by(self.store, "MASJID2024"), "a@jamaah.id"
        )

    def test_single_use_codes(self):
        InvitationService.mark_used(self.store, "MASJID2024", "a@jamaah.id")
        self.assertFalse(
            InvitationService.validate(self.store, "MASJID2024", single_use=True)
        )

    def test_create(self):
        record = InvitationService.create(self.store, " RAMADHAN ")
        self.assertEqual(record["code"], "RAMADHAN")
        self.assertTrue(InvitationService.validate(self.store, "RAMADHAN"))

    def test_create_duplicate(self):
        with self.assertRaises(DuplicateResourceError):
            InvitationService.create(self.store, "MASJID2024")

    def test_create_rejects_separator(self):
        with self.assertRaises(ValidationError):
            InvitationService.create(self.store, "A:B")

    def test_list_skips_used_markers(self):
        InvitationService.mark_used(self.store, "MASJID2024", "a@jamaah.id")
        codes = InvitationService.list(self.store)
        self.assertEqual(len(codes), 1)
        self.assertEqual(codes[0]["used_by"], "a@jamaah.id")


class PendingUsersTestCase(unittest.TestCase):
    def setUp(self):
        self.db = MockFirestore()
        self.store = KVStore(self.db)

    def tearDown(self):
        self.db.reset()

    def test_list_pending_newest_first(self):
        pending_users(self.store).put("u1", {"userId": "u1", "createdAt": "2024-01-01T00:00:00.000Z"})
        pending_users(self.store).put("u2", {"userId": "u2", "createdAt": "2024-02-01T00:00:00.000Z"})
        self.assertEqual([p["userId"] for p in list_pending(self.store)], ["u2", "u1"])


if __name__ == "__main__":
    unittest.main()
