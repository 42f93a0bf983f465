"""Tests for donation campaigns and pledges."""

import unittest

from jamaah.donations.models import ANONYMOUS_DONOR
from tests.helpers import ApiTestCase


class DonationsTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.store.set(
            "campaign:1",
            {"id": "1", "title": "Renovasi Masjid", "target_amount": 1000, "current_amount": 100},
        )

    def donate(self, headers=None, **body):
        return self.client.post(
            self.url("/api/donations"),
            json={"campaign_id": "1", "amount": 50, **body},
            headers=headers or {},
        )

    def test_anonymous_without_token(self):
        response = self.donate()
        self.assertEqual(response.status_code, 200)
        donation = response.get_json()
        self.assertEqual(donation["donor_name"], ANONYMOUS_DONOR)
        self.assertIsNone(donation["donor_id"])
        self.assertEqual(donation["status"], "pending")

    def test_anonymous_flag_hides_name(self):
        donation = self.donate(
            headers=self.login_as("u1", name="Budi"), donor_name="Budi", is_anonymous=True
        ).get_json()
        self.assertEqual(donation["donor_name"], "Hamba Allah")
        self.assertEqual(donation["donor_id"], "u1")

    def test_named_donor_from_token(self):
        donation = self.donate(headers=self.login_as("u1", name="Budi")).get_json()
        self.assertEqual(donation["donor_name"], "Budi")
        self.assertFalse(donation["is_anonymous"])

    def test_totals_add_up(self):
        self.donate(amount=50)
        self.donate(amount=25)
        self.assertEqual(self.store.get("campaign:1")["current_amount"], 175)

    def test_unknown_campaign(self):
        response = self.donate(campaign_id="ghost")
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json(), {"error": "Kampanye tidak ditemukan"})

    def test_invalid_amount(self):
        response = self.donate(amount=-5)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(self.store.get("campaign:1")["current_amount"], 100)

    def test_amount_must_be_a_whole_number(self):
        for amount in (1.5, {"value": 50}, [50], True):
            with self.subTest(amount=amount):
                response = self.donate(amount=amount)
                self.assertEqual(response.status_code, 400)
        self.assertEqual(self.store.get("campaign:1")["current_amount"], 100)
        self.assertEqual(self.store.get_by_prefix("donation:"), [])

    def test_whole_float_amount_is_accepted(self):
        response = self.donate(amount=50.0)
        self.assertEqual(response.status_code, 200)
        self.assertEqual(self.store.get("campaign:1")["current_amount"], 150)

    def test_create_campaign_admin_only(self):
        body = {"title": "Santunan Yatim", "target_amount": 20000}
        forbidden = self.client.post(
            self.url("/api/donations/campaigns"), json=body, headers=self.login_as("u1")
        )
        self.assertEqual(forbidden.status_code, 403)

        response = self.client.post(
            self.url("/api/donations/campaigns"), json=body, headers=self.login_admin()
        )
        self.assertEqual(response.status_code, 201)
        self.assertEqual(response.get_json()["current_amount"], 0)

        listed = self.client.get(self.url("/api/donations/campaigns")).get_json()
        self.assertEqual(len(listed), 2)


if __name__ == "__main__":
    unittest.main()
