"""Sign in / sign up flows over the identity provider."""

from unittest import mock

from django.test import SimpleTestCase

from labora_core.core.application.services.auth_service import SIGN_IN_FAILED, SIGN_UP_FAILED, AuthService
from labora_core.core.domain.exceptions import AuthError

SESSION = {
    "access_token": "jwt-123",
    "refresh_token": "r-1",
    "expires_in": 1800,
    "user": {"id": "u1", "email": "ana@labora.com.br"},
}


class AuthServiceTests(SimpleTestCase):
    def setUp(self) -> None:
        self.gateway = mock.Mock()
        self.service = AuthService(self.gateway, redirect_url="http://localhost:5173")

    def test_sign_in_returns_session(self) -> None:
        self.gateway.sign_in_with_password.return_value = SESSION

        session = self.service.sign_in("ana@labora.com.br", "secret1")

        self.assertEqual(session.access_token, "jwt-123")
        self.assertEqual(session.expires_in, 1800)
        self.assertEqual(session.user.id, "u1")

    def test_wrong_password_gets_generic_message(self) -> None:
        self.gateway.sign_in_with_password.side_effect = AuthError("invalid_grant", "Invalid login credentials")

        with self.assertRaises(AuthError) as ctx:
            self.service.sign_in("ana@labora.com.br", "wrong1")

        self.assertEqual(ctx.exception.message, SIGN_IN_FAILED)
        self.gateway.sign_up.assert_not_called()

    def test_unconfirmed_email_is_registered_again_and_retried(self) -> None:
        self.gateway.sign_in_with_password.side_effect = [
            AuthError("email_not_confirmed", "Email not confirmed"),
            SESSION,
        ]

        session = self.service.sign_in("ana@labora.com.br", "secret1")

        self.assertEqual(session.access_token, "jwt-123")
        self.gateway.sign_up.assert_called_once_with(
            "ana@labora.com.br",
            "secret1",
            redirect_to="http://localhost:5173",
            data={"email_confirm": True},
        )
        self.assertEqual(self.gateway.sign_in_with_password.call_count, 2)

    def test_retry_failure_is_reported_as_sign_in_failure(self) -> None:
        self.gateway.sign_in_with_password.side_effect = AuthError("email_not_confirmed", "Email not confirmed")

        with self.assertRaises(AuthError) as ctx:
            self.service.sign_in("ana@labora.com.br", "secret1")
        self.assertEqual(ctx.exception.code, "invalid_credentials")
        self.assertEqual(self.gateway.sign_in_with_password.call_count, 2)

    def test_sign_up_then_sign_in(self) -> None:
        self.gateway.sign_in_with_password.return_value = SESSION
        self.assertEqual(self.service.sign_up("ana@labora.com.br", "secret1").user.email, "ana@labora.com.br")

    def test_sign_up_without_immediate_session(self) -> None:
        self.gateway.sign_in_with_password.side_effect = AuthError("email_not_confirmed", "Email not confirmed")
        self.assertIsNone(self.service.sign_up("ana@labora.com.br", "secret1"))

    def test_sign_up_failure(self) -> None:
        self.gateway.sign_up.side_effect = AuthError("user_already_exists", "User already registered")

        with self.assertRaises(AuthError) as ctx:
            self.service.sign_up("ana@labora.com.br", "secret1")
        self.assertEqual(ctx.exception.code, "sign_up_failed")
        self.assertEqual(ctx.exception.message, SIGN_UP_FAILED)
