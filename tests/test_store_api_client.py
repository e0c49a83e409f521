"""REST client for the data store and the auth endpoints."""

from unittest import mock

import requests
from django.test import SimpleTestCase

from labora_core.adapters.api_clients.auth_api_client import AuthAPIClient
from labora_core.adapters.api_clients.store_api_client import StoreAPIClient, ilike_any, parse_content_range
from labora_core.adapters.repositories.quote_repo_impl import QuoteRepoImpl
from labora_core.core.domain.entities.quote_entity import QuoteStatus
from labora_core.core.domain.exceptions import AuthError, PersistenceError


def _response(status=200, json_body=None, headers=None) -> mock.Mock:
    resp = mock.Mock(spec=requests.Response)
    resp.status_code = status
    resp.headers = headers or {}
    resp.content = b"" if json_body is None else b"x"
    resp.json.return_value = json_body
    resp.text = ""
    resp.reason = ""
    return resp


def _session(*responses) -> mock.MagicMock:
    session = mock.MagicMock(spec=requests.Session)
    session.headers = {}
    session.request.side_effect = list(responses)
    return session


QUOTE_ROW = {
    "id": "q1",
    "number": 5,
    "client_name": "Maria Souza",
    "client_document": "123.456.789-09",
    "service_description": "Site",
    "value": 1500.5,
    "payment_method": "PIX",
    "status": "approved",
    "created_at": "2026-10-05T14:30:00Z",
}


class StoreAPIClientTests(SimpleTestCase):
    def _client(self, session, token=None) -> StoreAPIClient:
        return StoreAPIClient(
            base_url="https://store.example.com",
            api_key="anon",
            session=session,
            token_provider=lambda: token,
        )

    def test_select_builds_postgrest_query(self) -> None:
        session = _session(_response(json_body=[{"id": 1}], headers={"Content-Range": "0-0/57"}))
        rows, total = self._client(session).select(
            "clients",
            filters={"status": "eq.pending"},
            or_=ilike_any(["full_name", "cpf"], "ana"),
            order="full_name.asc",
            limit=5,
            offset=10,
            count=True,
        )

        self.assertEqual(rows, [{"id": 1}])
        self.assertEqual(total, 57)
        method, url = session.request.call_args.args
        kwargs = session.request.call_args.kwargs
        self.assertEqual(method, "GET")
        self.assertEqual(url, "https://store.example.com/rest/v1/clients")
        self.assertIn(("or", "(full_name.ilike.*ana*,cpf.ilike.*ana*)"), kwargs["params"])
        self.assertIn(("offset", "10"), kwargs["params"])
        self.assertEqual(kwargs["headers"]["Prefer"], "count=exact")
        self.assertEqual(kwargs["headers"]["Authorization"], "Bearer anon")

    def test_session_token_is_forwarded(self) -> None:
        session = _session(_response(json_body=[]))
        self._client(session, token="user-jwt").select("quotes")
        self.assertEqual(session.request.call_args.kwargs["headers"]["Authorization"], "Bearer user-jwt")

    def test_error_status_raises_persistence_error(self) -> None:
        session = _session(_response(status=500, json_body={"message": "db down"}))
        with self.assertRaises(PersistenceError) as ctx:
            self._client(session).select("quotes")
        self.assertEqual(ctx.exception.status_code, 500)

    def test_network_failure_raises_persistence_error(self) -> None:
        session = _session(requests.ConnectionError("unreachable"))
        with self.assertRaises(PersistenceError):
            self._client(session).insert("quotes", {"value": "1"})

    def test_content_range_parsing(self) -> None:
        self.assertEqual(parse_content_range("0-9/57"), 57)
        self.assertEqual(parse_content_range("*/0"), 0)
        self.assertIsNone(parse_content_range("0-9/*"))
        self.assertIsNone(parse_content_range(None))


class QuoteRepoImplTests(SimpleTestCase):
    def test_conditional_status_update(self) -> None:
        session = _session(_response(json_body=[QUOTE_ROW]))
        repo = QuoteRepoImpl(StoreAPIClient(base_url="https://s", api_key="k", session=session, token_provider=None))

        quote = repo.update_status_if_pending("q1", QuoteStatus.REJECTED, "Sem verba")

        kwargs = session.request.call_args.kwargs
        self.assertEqual(session.request.call_args.args[0], "PATCH")
        self.assertEqual(kwargs["params"], [("id", "eq.q1"), ("status", "eq.pending")])
        self.assertEqual(kwargs["json"], {"status": "rejected", "rejection_justification": "Sem verba"})
        self.assertEqual(str(quote.value), "1500.50")

    def test_no_row_changed_returns_none(self) -> None:
        session = _session(_response(json_body=[]))
        repo = QuoteRepoImpl(StoreAPIClient(base_url="https://s", api_key="k", session=session, token_provider=None))
        self.assertIsNone(repo.update_status_if_pending("q1", QuoteStatus.APPROVED))


class AuthAPIClientTests(SimpleTestCase):
    def test_provider_error_becomes_auth_error(self) -> None:
        session = _session(_response(status=400, json_body={"error_code": "email_not_confirmed", "msg": "Email not confirmed"}))
        client = AuthAPIClient(base_url="https://s", api_key="k", session=session)

        with self.assertRaises(AuthError) as ctx:
            client.sign_in_with_password("ana@labora.com.br", "secret1")
        self.assertEqual(ctx.exception.code, "email_not_confirmed")
        self.assertEqual(ctx.exception.message, "Email not confirmed")
        self.assertEqual(session.request.call_args.args[1], "https://s/auth/v1/token")
        self.assertEqual(session.request.call_args.kwargs["params"], {"grant_type": "password"})
