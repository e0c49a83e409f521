"""HTTP layer: routing, session authentication, error mapping and PDF downloads."""

from unittest import mock

from django.test import SimpleTestCase
from rest_framework.test import APIClient

from labora_core.adapters.config import composition_root
from labora_core.core.application.dtos.auth_dto import AuthSessionDTO, AuthUserDTO
from labora_core.core.domain.entities.quote_entity import QuoteStatus
from labora_core.core.domain.exceptions import AuthError, PersistenceError
from tests.helpers.fakes import (
    InMemoryClientRepository,
    InMemoryQuoteRepository,
    build_buses,
    client_payload,
    make_client,
    make_quote,
    quote_payload,
)

USER = AuthUserDTO(id="u1", email="ana@labora.com.br")


class ApiTestCase(SimpleTestCase):
    def setUp(self) -> None:
        self.pending = make_quote(number=10, client_name="Carlos Pereira")
        self.approved = make_quote(number=11, status=QuoteStatus.APPROVED)
        self.quote_repo = InMemoryQuoteRepository([self.pending, self.approved])
        self.client_repo = InMemoryClientRepository([make_client(full_name="Ana Lima")])
        cmd_bus, qry_bus = build_buses(quote_repo=self.quote_repo, client_repo=self.client_repo)

        self.container = mock.MagicMock()
        self.container.command_bus.return_value = cmd_bus
        self.container.query_bus.return_value = qry_bus
        self.auth = self.container.auth_service.return_value
        self.auth.get_user.return_value = USER

        patcher = mock.patch.object(composition_root, "container", self.container)
        patcher.start()
        self.addCleanup(patcher.stop)

        self.client = APIClient()
        self.client.credentials(HTTP_AUTHORIZATION="Bearer tok")


class SessionAuthenticationTests(ApiTestCase):
    def test_missing_session_is_rejected(self) -> None:
        self.client.credentials()
        resp = self.client.get("/api/quotes")
        self.assertEqual(resp.status_code, 401)

    def test_expired_session_is_rejected(self) -> None:
        self.auth.get_user.side_effect = AuthError("bad_jwt", "invalid JWT")
        resp = self.client.get("/api/quotes")
        self.assertEqual(resp.status_code, 401)

    def test_cookie_session_is_accepted(self) -> None:
        self.client.credentials()
        self.client.cookies["authToken"] = "cookie-token"

        resp = self.client.get("/api/me/")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.json(), {"id": "u1", "email": "ana@labora.com.br"})
        self.auth.get_user.assert_called_with("cookie-token")

    def test_health_check_is_public(self) -> None:
        self.client.credentials()
        resp = self.client.get("/api/healthz/")
        self.assertEqual(resp.json(), {"status": "ok"})
        self.assertIn("X-Request-ID", resp)


class AuthViewTests(ApiTestCase):
    def test_login_sets_cookie(self) -> None:
        self.auth.sign_in.return_value = AuthSessionDTO("jwt-123", None, 1800, USER)

        resp = self.client.post("/api/login/", {"email": "ana@labora.com.br", "password": "secret1"}, format="json")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.cookies["authToken"].value, "jwt-123")
        self.assertEqual(resp.json()["user"]["id"], "u1")

    def test_login_validates_form_before_calling_provider(self) -> None:
        resp = self.client.post("/api/login/", {"email": "ana", "password": "1"}, format="json")

        self.assertEqual(resp.status_code, 400)
        self.assertEqual({e["path"] for e in resp.json()["errors"]}, {"email", "password"})
        self.auth.sign_in.assert_not_called()

    def test_wrong_credentials(self) -> None:
        self.auth.sign_in.side_effect = AuthError("invalid_credentials", "Email ou senha incorretos")
        resp = self.client.post("/api/login/", {"email": "ana@labora.com.br", "password": "secret1"}, format="json")
        self.assertEqual(resp.status_code, 401)
        self.assertEqual(resp.json()["detail"], "Email ou senha incorretos")

    def test_register_without_immediate_session(self) -> None:
        self.auth.sign_up.return_value = None
        resp = self.client.post(
            "/api/register/",
            {"email": "ana@labora.com.br", "password": "secret1", "confirm_password": "secret1"},
            format="json",
        )
        self.assertEqual(resp.status_code, 201)
        self.assertNotIn("authToken", resp.cookies)

    def test_register_failure(self) -> None:
        self.auth.sign_up.side_effect = AuthError("sign_up_failed", "Erro ao criar conta. Tente novamente.")
        resp = self.client.post(
            "/api/register/",
            {"email": "ana@labora.com.br", "password": "secret1", "confirm_password": "secret1"},
            format="json",
        )
        self.assertEqual(resp.status_code, 400)

    def test_logout_clears_cookie(self) -> None:
        resp = self.client.post("/api/logout/")
        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp.cookies["authToken"].value, "")
        self.auth.sign_out.assert_called_once_with("tok")


class QuoteViewTests(ApiTestCase):
    def test_create_quote(self) -> None:
        resp = self.client.post("/api/quotes", quote_payload(), format="json")

        self.assertEqual(resp.status_code, 201)
        body = resp.json()
        self.assertEqual(body["status"], "pending")
        self.assertEqual(body["status_label"], "Pendente")
        self.assertEqual(body["value"], "1500.00")
        self.assertEqual(body["user_id"], "u1")

    def test_invalid_quote_lists_field_errors(self) -> None:
        resp = self.client.post("/api/quotes", quote_payload(client_document="123"), format="json")

        self.assertEqual(resp.status_code, 400)
        self.assertEqual([e["path"] for e in resp.json()["errors"]], ["client_document"])

    def test_malformed_payload(self) -> None:
        resp = self.client.post("/api/quotes", quote_payload(client_name=["x"]), format="json")
        self.assertEqual(resp.status_code, 400)

    def test_list_envelope_and_status_filter(self) -> None:
        body = self.client.get("/api/quotes", {"status": "approved"}).json()

        self.assertEqual(body["total_items"], 1)
        self.assertEqual(body["items_on_page"], 1)
        self.assertEqual(body["results"][0]["number"], 11)

        self.assertEqual(self.client.get("/api/quotes", {"status": "archived"}).status_code, 400)

    def test_unsupported_or_repeated_filters_are_rejected(self) -> None:
        unknown = self.client.get("/api/quotes", {"foo": "1"})
        self.assertEqual(unknown.status_code, 400)
        self.assertEqual([e["path"] for e in unknown.json()["errors"]], ["foo"])

        repeated = self.client.get("/api/quotes?status=pending&status=approved")
        self.assertEqual(repeated.status_code, 400)

        self.assertEqual(self.client.get("/api/clients", {"full_name": "Ana"}).status_code, 400)
        self.assertEqual(self.client.get("/api/clients", {"page": "1", "page_size": "10"}).status_code, 200)

    def test_unknown_quote(self) -> None:
        self.assertEqual(self.client.get("/api/quotes/missing").status_code, 404)

    def test_store_failure(self) -> None:
        with mock.patch.object(self.quote_repo, "find_by_id", side_effect=PersistenceError()):
            resp = self.client.get(f"/api/quotes/{self.pending.id}")
        self.assertEqual(resp.status_code, 502)

    def test_approve_twice_then_reject(self) -> None:
        url = f"/api/quotes/{self.pending.id}"

        first = self.client.post(f"{url}/approve")
        second = self.client.post(f"{url}/approve")
        conflict = self.client.post(f"{url}/reject", {"justification": "Mudou de ideia"}, format="json")

        self.assertEqual(first.json()["changed"], True)
        self.assertEqual(first.json()["quote"]["status"], "approved")
        self.assertEqual(second.json()["changed"], False)
        self.assertEqual(conflict.status_code, 409)
        self.assertEqual(conflict.json()["current"], "approved")

    def test_reject_requires_justification(self) -> None:
        resp = self.client.post(f"/api/quotes/{self.pending.id}/reject", {"justification": "  "}, format="json")
        self.assertEqual(resp.status_code, 400)
        self.assertIs(self.quote_repo.find_by_id(self.pending.id).status, QuoteStatus.PENDING)

    def test_edit_approved_quote_conflicts(self) -> None:
        resp = self.client.put(f"/api/quotes/{self.approved.id}", quote_payload(), format="json")
        self.assertEqual(resp.status_code, 409)

    def test_quote_pdf_download(self) -> None:
        resp = self.client.get(f"/api/quotes/{self.pending.id}/pdf")

        self.assertEqual(resp.status_code, 200)
        self.assertEqual(resp["Content-Type"], "application/pdf")
        self.assertIn('filename="ORCAMENTO-LABORA-TECH-10.pdf"', resp["Content-Disposition"])
        self.assertTrue(b"".join(resp.streaming_content).startswith(b"%PDF"))

    def test_contract_only_for_approved_quotes(self) -> None:
        self.assertEqual(self.client.get(f"/api/quotes/{self.pending.id}/contract").status_code, 409)

        content = self.client.get(f"/api/quotes/{self.approved.id}/contract").json()["content"]
        self.assertIn("CONTRATANTE: Maria Souza", content)

    def test_contract_pdf_from_edited_text(self) -> None:
        resp = self.client.post(
            f"/api/quotes/{self.approved.id}/contract-pdf",
            {"content": "CONTRATO AJUSTADO ENTRE AS PARTES\nTexto editado."},
            format="json",
        )
        self.assertEqual(resp.status_code, 200)
        self.assertIn('filename="CONTRATO-11.pdf"', resp["Content-Disposition"])


class ClientAndDashboardViewTests(ApiTestCase):
    def test_create_and_fetch_client(self) -> None:
        created = self.client.post("/api/clients", client_payload(full_name="Bruno Alves"), format="json")
        self.assertEqual(created.status_code, 201)

        fetched = self.client.get(f"/api/clients/{created.json()['id']}").json()
        self.assertEqual(fetched["document"], "123.456.789-09")
        self.assertEqual(fetched["address"]["state"], "DF")

    def test_client_search(self) -> None:
        body = self.client.get("/api/clients/search", {"q": "ana"}).json()
        self.assertEqual([c["full_name"] for c in body["results"]], ["Ana Lima"])

    def test_dashboard_summary(self) -> None:
        body = self.client.get("/api/dashboard-summary/").json()
        self.assertEqual(body["stats"]["totalQuotes"], 2)
        self.assertEqual(len(body["monthlyRevenue"]), 6)
        self.assertEqual(len(body["recentQuotes"]), 2)

    def test_contract_search_with_preselected_quote(self) -> None:
        body = self.client.get("/api/contracts/search", {"q": "11", "quote_id": self.approved.id}).json()
        self.assertEqual([q["number"] for q in body["results"]], [11])
        self.assertEqual(body["selected"]["id"], self.approved.id)

    def test_contract_search_ignores_preselected_pending_quote(self) -> None:
        body = self.client.get("/api/contracts/search", {"q": "carlos", "quote_id": self.pending.id}).json()
        self.assertEqual(body["results"], [])
        self.assertIsNone(body["selected"])

    def test_contract_search_unique_match_is_selected(self) -> None:
        body = self.client.get("/api/contracts/search", {"q": "souza"}).json()
        self.assertEqual(body["selected"]["number"], 11)

        self.assertIsNone(self.client.get("/api/contracts/search", {"q": "ninguém"}).json()["selected"])

    def test_service_catalog(self) -> None:
        self.assertEqual(self.client.get("/api/service-categories").json(), [{"id": "cat-1", "name": "Sites"}])
        services = self.client.get("/api/services", {"category_id": "cat-1"}).json()
        self.assertEqual(services[0]["base_price"], "890.00")

    def test_metrics_endpoint(self) -> None:
        self.client.get("/api/healthz/")
        resp = self.client.get("/metrics/")
        self.assertEqual(resp.status_code, 200)
        self.assertIn(b"store_requests_total", resp.content)
