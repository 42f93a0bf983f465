"""Tests for app wiring, error rendering and the request boundary."""

import json
import os
import unittest
from unittest.mock import patch

from flask import Flask

from jamaah import _init_firebase, _load_credentials
from tests.helpers import ApiTestCase


class AppTestCase(ApiTestCase):
    def test_health(self):
        response = self.client.get(self.url("/health"))
        self.assertEqual(response.status_code, 200)
        self.assertEqual(response.get_json(), {"status": "ok"})

    def test_unknown_route_is_json(self):
        response = self.client.get(self.url("/api/nothing-here/at/all"))
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.get_json())

    def test_routes_live_under_prefix(self):
        self.assertEqual(self.client.get("/api/timeline").status_code, 404)
        self.assertEqual(self.client.get(self.url("/api/timeline")).status_code, 200)

    def test_invalid_token_is_unauthorized(self):
        response = self.client.get(
            self.url("/api/profile"), headers={"Authorization": "Bearer forged"}
        )
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json(), {"error": "Unauthorized"})

    def test_non_object_body(self):
        response = self.client.post(
            self.url("/api/timeline"), json=["a", "b"], headers=self.login_as("u1")
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Format permintaan tidak valid"})

    def test_unknown_field(self):
        response = self.client.post(
            self.url("/api/timeline"),
            json={"title": "a", "content": "b", "likes": ["me"]},
            headers=self.login_as("u1"),
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json(), {"error": "Field tidak dikenal: likes"})

    @patch("jamaah.timeline.routes.TimelineService.list")
    def test_unexpected_errors_are_hidden(self, mock_list):
        mock_list.side_effect = RuntimeError("firestore exploded at 10.0.0.3")
        response = self.client.get(self.url("/api/timeline"))
        self.assertEqual(response.status_code, 500)
        self.assertEqual(response.get_json(), {"error": "Gagal memuat timeline"})

    def test_proxy_headers(self):
        @self.app.route("/test_scheme")
        def test_scheme():
            from flask import request

            return request.scheme

        response = self.client.get("/test_scheme", headers={"X-Forwarded-Proto": "https"})
        self.assertEqual(response.data.decode(), "https")


class PrefixConfigTestCase(ApiTestCase):
    config = {"API_PREFIX": "/v2/"}

    def test_custom_prefix(self):
        self.assertEqual(self.client.get("/v2/health").status_code, 200)


class FirebaseInitTestCase(unittest.TestCase):
    def setUp(self):
        self.app = Flask("firebase-init")
        self.app.config["FIREBASE_STORAGE_BUCKET"] = None

    @patch("jamaah.credentials.Certificate")
    def test_credentials_from_environment(self, mock_cert):
        info = {"type": "service_account", "project_id": "masjid-app"}
        with patch.dict(os.environ, {"FIREBASE_CREDENTIALS_JSON": json.dumps(info)}):
            cred, project_id = _load_credentials(self.app)

        mock_cert.assert_called_once_with(info)
        self.assertIs(cred, mock_cert.return_value)
        self.assertEqual(project_id, "masjid-app")

    @patch("jamaah.credentials.ApplicationDefault")
    @patch("jamaah.os.path.exists", return_value=False)
    def test_invalid_json_falls_back_to_default_credentials(self, mock_exists, mock_default):
        env = {"FIREBASE_CREDENTIALS_JSON": "{not json", "FIREBASE_PROJECT_ID": "masjid-app"}
        with patch.dict(os.environ, env):
            cred, project_id = _load_credentials(self.app)

        self.assertIs(cred, mock_default.return_value)
        self.assertEqual(project_id, "masjid-app")

    @patch("jamaah.firebase_admin")
    @patch("jamaah._load_credentials")
    def test_bucket_defaults_to_project(self, mock_load, mock_firebase):
        mock_firebase._apps = {}
        mock_load.return_value = ("cred", "masjid-app")

        _init_firebase(self.app)

        mock_firebase.initialize_app.assert_called_once_with(
            "cred",
            {"storageBucket": "masjid-app.firebasestorage.app", "projectId": "masjid-app"},
        )

    @patch("jamaah.firebase_admin")
    @patch("jamaah._load_credentials", return_value=(None, None))
    def test_no_credentials_skips_initialization(self, mock_load, mock_firebase):
        mock_firebase._apps = {}
        _init_firebase(self.app)
        mock_firebase.initialize_app.assert_not_called()


if __name__ == "__main__":
    unittest.main()
