"""Tests for signup, the sign-in gate and signout."""

import unittest

from jamaah.core.identity import AuthProviderError
from jamaah.membership import member_ids, pending_users
from tests.helpers import ApiTestCase

SIGNUP = {
    "email": "fatimah@jamaah.id",
    "name": "Fatimah",
    "phone": "081234567890",
    "invitationCode": "MASJID2024",
}


class SignupTestCase(ApiTestCase):
    def setUp(self):
        super().setUp()
        self.store.set("invitation:MASJID2024", {"code": "MASJID2024", "valid": True})

    def test_signup_creates_pending_account(self):
        response = self.client.post(self.url("/auth/signup"), json=SIGNUP)

        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertTrue(data["success"])
        self.assertRegex(data["memberId"], r"^JMH-\d{6}$")

        _, kwargs = self.auth.create_user.call_args
        self.assertEqual(kwargs["display_name"], "Fatimah")
        self.assertEqual(
            kwargs["claims"],
            {"role": "Member", "memberId": data["memberId"], "status": "pending_approval"},
        )

        uid = next(iter(self.fake_auth.users))
        pending = pending_users(self.store).get(uid)
        self.assertEqual(pending["memberId"], data["memberId"])
        self.assertEqual(pending["invitationCode"], "MASJID2024")
        record = member_ids(self.store).get(data["memberId"])
        self.assertEqual(record["userId"], uid)
        self.assertEqual(record["status"], "pending_approval")
        self.assertEqual(self.store.get("invitation:MASJID2024:used"), SIGNUP["email"])

    def test_invalid_code_creates_nothing(self):
        response = self.client.post(
            self.url("/auth/signup"), json={**SIGNUP, "invitationCode": "SALAH"}
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Kode undangan tidak valid"})
        self.auth.create_user.assert_not_called()
        self.assertEqual(pending_users(self.store).list(), [])
        self.assertEqual(member_ids(self.store).list(), [])

    def test_missing_code(self):
        body = {k: v for k, v in SIGNUP.items() if k != "invitationCode"}
        response = self.client.post(self.url("/auth/signup"), json=body)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["error"], "Kode undangan tidak valid")

    def test_invalid_email(self):
        response = self.client.post(
            self.url("/auth/signup"), json={**SIGNUP, "email": "bukan-email"}
        )
        self.assertEqual(response.status_code, 400)
        self.auth.create_user.assert_not_called()

    def test_non_string_values_create_nothing(self):
        for field, value in (("phone", 812345), ("name", ["Fatimah"]), ("email", True)):
            with self.subTest(field=field):
                response = self.client.post(
                    self.url("/auth/signup"), json={**SIGNUP, field: value}
                )
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.get_json(), {"error": "Format permintaan tidak valid"}
                )
        self.auth.create_user.assert_not_called()
        self.assertEqual(pending_users(self.store).list(), [])
        self.assertEqual(member_ids(self.store).list(), [])
        self.assertIsNone(self.store.get("invitation:MASJID2024:used"))

    def test_provider_rejection_is_reported(self):
        self.auth.create_user.side_effect = AuthProviderError(
            "The user with the provided email already exists (EMAIL_EXISTS)."
        )
        response = self.client.post(self.url("/auth/signup"), json=SIGNUP)

        self.assertEqual(response.status_code, 400)
        self.assertIn("EMAIL_EXISTS", response.get_json()["error"])
        self.assertEqual(pending_users(self.store).list(), [])

    def test_single_use_codes(self):
        self.app.config["INVITATION_SINGLE_USE"] = True
        first = self.client.post(self.url("/auth/signup"), json=SIGNUP)
        second = self.client.post(
            self.url("/auth/signup"), json={**SIGNUP, "email": "umar@jamaah.id"}
        )
        self.assertEqual(first.status_code, 200)
        self.assertEqual(second.status_code, 400)


class SignInTestCase(ApiTestCase):
    def sign_in_returns(self, uid, **claims):
        token = self.fake_auth.issue_token(uid, email=f"{uid}@jamaah.id", **claims)
        self.auth.sign_in_with_password.return_value = {
            "idToken": token,
            "refreshToken": "refresh-token",
            "expiresIn": "3600",
        }
        return token

    def post_signin(self):
        return self.client.post(
            self.url("/auth/signin"),
            json={"email": "ahmad@jamaah.id", "password": "Rahasia12"},
        )

    def test_pending_account_is_revoked_and_rejected(self):
        self.sign_in_returns("u1", role="Member", status="pending_approval")

        response = self.post_signin()

        self.assertEqual(response.status_code, 403)
        self.assertEqual(
            response.get_json(), {"error": "Akun Anda masih menunggu persetujuan Admin."}
        )
        self.auth.revoke_sessions.assert_called_once_with("u1")

    def test_pending_record_blocks_approved_claims(self):
        self.sign_in_returns("u1", role="Member", status="approved")
        pending_users(self.store).put("u1", {"userId": "u1"})

        response = self.post_signin()

        self.assertEqual(response.status_code, 403)
        self.auth.revoke_sessions.assert_called_once_with("u1")

    def test_revoke_failure_still_rejects(self):
        self.sign_in_returns("u1", status="pending_approval")
        self.auth.revoke_sessions.side_effect = AuthProviderError("unavailable")

        response = self.post_signin()

        self.assertEqual(response.status_code, 403)
        self.assertNotIn("access_token", response.get_json())

    def test_approved_account_gets_session(self):
        token = self.sign_in_returns("u1", role="Member", status="approved")

        response = self.post_signin()

        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data["access_token"], token)
        self.assertEqual(data["refresh_token"], "refresh-token")
        self.assertEqual(data["user"]["id"], "u1")
        self.auth.revoke_sessions.assert_not_called()

    def test_wrong_password(self):
        self.auth.sign_in_with_password.side_effect = AuthProviderError(
            "INVALID_LOGIN_CREDENTIALS"
        )
        response = self.post_signin()
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["error"], "INVALID_LOGIN_CREDENTIALS")

    def test_missing_password(self):
        response = self.client.post(
            self.url("/auth/signin"), json={"email": "ahmad@jamaah.id"}
        )
        self.assertEqual(response.status_code, 400)
        self.auth.sign_in_with_password.assert_not_called()

    def test_signout_revokes_sessions(self):
        headers = self.login_as("u1")
        response = self.client.post(self.url("/auth/signout"), headers=headers)
        self.assertEqual(response.status_code, 200)
        self.auth.revoke_sessions.assert_called_once_with("u1")

    def test_signout_requires_token(self):
        response = self.client.post(self.url("/auth/signout"))
        self.assertEqual(response.status_code, 401)


if __name__ == "__main__":
    unittest.main()
