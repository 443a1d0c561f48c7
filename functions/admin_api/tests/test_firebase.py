import json
import unittest
from unittest.mock import MagicMock, patch

from firebase_admin import auth

from admin_api.auth import AdminContext, Unconfigured
from admin_api.config import Settings
from admin_api.errors import AuthenticationError, UnavailableError
from admin_api.firebase import FirebaseIdentityVerifier, connect
from admin_api.store import FirestoreRecordStore


def _settings(**kwargs) -> Settings:
    values = {
        "firebase_service_account": None,
        "firebase_service_account_path": None,
        "firebase_project_id": None,
    }
    values.update(kwargs)
    return Settings(_env_file=None, **values)


class ConnectTests(unittest.TestCase):
    def test_missing_credentials_leave_service_unconfigured(self):
        state = connect(_settings())
        self.assertIsInstance(state, Unconfigured)
        self.assertIn("not configured", state.reason)

    def test_invalid_inline_json(self):
        state = connect(_settings(firebase_service_account="{not json"))
        self.assertIsInstance(state, Unconfigured)

    def test_missing_key_file(self):
        state = connect(
            _settings(firebase_service_account_path="/nonexistent/service-account.json")
        )
        self.assertIsInstance(state, Unconfigured)

    @patch("admin_api.firebase.firestore.client")
    @patch("admin_api.firebase.firebase_admin.initialize_app")
    @patch("admin_api.firebase.firebase_admin.get_app", side_effect=ValueError)
    @patch("admin_api.firebase.credentials.Certificate")
    def test_connects_with_inline_service_account(
        self, mock_certificate, mock_get_app, mock_initialize_app, mock_client
    ):
        service_account = {"type": "service_account", "project_id": "chat-app"}
        mock_certificate.return_value.project_id = "chat-app"

        state = connect(
            _settings(
                firebase_service_account=json.dumps(service_account),
                check_revoked_tokens=True,
                list_users_limit=500,
            )
        )

        mock_certificate.assert_called_once_with(service_account)
        mock_initialize_app.assert_called_once_with(
            mock_certificate.return_value, None, name="chat-admin"
        )
        mock_client.assert_called_once_with(mock_initialize_app.return_value)
        self.assertIsInstance(state, AdminContext)
        self.assertIsInstance(state.store, FirestoreRecordStore)
        self.assertTrue(state.identity.check_revoked)
        self.assertEqual(state.list_users_limit, 500)

    @patch("admin_api.firebase.firestore.client")
    @patch("admin_api.firebase.firebase_admin.initialize_app")
    @patch("admin_api.firebase.firebase_admin.get_app")
    @patch("admin_api.firebase.credentials.Certificate")
    def test_reuses_existing_app(
        self, mock_certificate, mock_get_app, mock_initialize_app, mock_client
    ):
        state = connect(_settings(firebase_service_account_path="key.json"))

        mock_certificate.assert_called_once_with("key.json")
        mock_initialize_app.assert_not_called()
        mock_client.assert_called_once_with(mock_get_app.return_value)
        self.assertIsInstance(state, AdminContext)


class FirebaseIdentityVerifierTests(unittest.TestCase):
    def setUp(self):
        self.app = MagicMock()
        self.verifier = FirebaseIdentityVerifier(self.app, check_revoked=True)

    @patch("admin_api.firebase.auth.verify_id_token")
    def test_returns_uid(self, mock_verify):
        mock_verify.return_value = {"uid": "uid123", "email": "a@example.com"}

        self.assertEqual(self.verifier.verify("token-value"), "uid123")
        mock_verify.assert_called_once_with(
            "token-value", app=self.app, check_revoked=True
        )

    @patch("admin_api.firebase.auth.verify_id_token")
    def test_invalid_tokens_fail_authentication(self, mock_verify):
        for error in [
            auth.InvalidIdTokenError("malformed"),
            auth.ExpiredIdTokenError("expired", cause=None),
            auth.RevokedIdTokenError("revoked"),
            ValueError("empty"),
        ]:
            with self.subTest(error=type(error).__name__):
                mock_verify.side_effect = error
                with self.assertRaises(AuthenticationError):
                    self.verifier.verify("token-value")

    @patch("admin_api.firebase.auth.verify_id_token")
    def test_certificate_fetch_failure_is_unavailable(self, mock_verify):
        mock_verify.side_effect = auth.CertificateFetchError("no network", cause=None)
        with self.assertRaises(UnavailableError):
            self.verifier.verify("token-value")

    @patch("admin_api.firebase.auth.verify_id_token")
    def test_token_without_uid(self, mock_verify):
        mock_verify.return_value = {}
        with self.assertRaises(AuthenticationError):
            self.verifier.verify("token-value")


if __name__ == "__main__":
    unittest.main()
