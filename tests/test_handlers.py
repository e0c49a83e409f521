"""Client and quote handlers: creation, quick search and approved-quote lookup."""

from decimal import Decimal

from django.test import SimpleTestCase

from labora_core.core.application.commands.client_commands import CreateClientCommand, UpdateClientCommand
from labora_core.core.application.commands.quote_commands import CreateQuoteCommand
from labora_core.core.application.dtos.client_dto import ClientInput
from labora_core.core.application.dtos.quote_dto import QuoteInput
from labora_core.core.application.handlers.client_handlers import sanitize_search_term
from labora_core.core.application.handlers.quote_handlers import matches_approved_search
from labora_core.core.application.queries.client_queries import GetClientQuery, SearchClientsQuery
from labora_core.core.application.queries.quote_queries import ListQuotesQuery, SearchApprovedQuotesQuery
from labora_core.core.domain.entities.quote_entity import QuoteStatus
from labora_core.core.domain.exceptions import NotFoundError, ValidationError
from tests.helpers.fakes import (
    InMemoryClientRepository,
    InMemoryQuoteRepository,
    build_buses,
    client_payload,
    make_client,
    make_quote,
    quote_payload,
)


class ClientHandlerTests(SimpleTestCase):
    def setUp(self) -> None:
        self.repo = InMemoryClientRepository([
            make_client(full_name="Ana Lima", cpf="123.456.789-09"),
            make_client(full_name="Bruno Alves", cpf=None, cnpj="11.222.333/0001-81"),
        ])
        self.cmd_bus, self.qry_bus = build_buses(client_repo=self.repo)

    def test_create_client_applies_masks(self) -> None:
        payload = ClientInput.model_validate(client_payload())
        client = self.cmd_bus.dispatch(CreateClientCommand(payload=payload))

        self.assertIsNotNone(client.id)
        self.assertEqual(client.cpf, "123.456.789-09")
        self.assertEqual(client.address.zip_code, "70000-000")

    def test_invalid_client_is_not_persisted(self) -> None:
        payload = ClientInput.model_validate(client_payload(cpf="111.111.111-11"))
        with self.assertRaises(ValidationError) as ctx:
            self.cmd_bus.dispatch(CreateClientCommand(payload=payload))
        self.assertIn("cpf", ctx.exception.as_dict())
        self.assertEqual(len(self.repo.clients), 2)

    def test_update_unknown_client(self) -> None:
        payload = ClientInput.model_validate(client_payload())
        with self.assertRaises(NotFoundError):
            self.cmd_bus.dispatch(UpdateClientCommand(id="missing", payload=payload))

    def test_get_unknown_client(self) -> None:
        with self.assertRaises(NotFoundError):
            self.qry_bus.dispatch(GetClientQuery(filtros={}, client_id="missing"))

    def test_search_term_is_sanitized(self) -> None:
        self.assertEqual(sanitize_search_term("  ANA*(),% "), "ana")
        self.assertEqual(sanitize_search_term("123.456"), "123456")
        self.assertEqual(sanitize_search_term(None), "")

    def test_search_returns_matches(self) -> None:
        results = self.qry_bus.dispatch(SearchClientsQuery(filtros={}, term="Ana"))
        self.assertEqual([c.full_name for c in results], ["Ana Lima"])
        self.assertEqual(self.repo.searches, [("ana", 5)])

    def test_blank_search_does_no_lookup(self) -> None:
        self.assertEqual(self.qry_bus.dispatch(SearchClientsQuery(filtros={}, term=" %% ")), [])
        self.assertEqual(self.repo.searches, [])


class CreateQuoteHandlerTests(SimpleTestCase):
    def setUp(self) -> None:
        self.repo = InMemoryQuoteRepository()
        self.cmd_bus, self.qry_bus = build_buses(quote_repo=self.repo)

    def test_new_quote_starts_pending_with_sequential_number(self) -> None:
        first = self.cmd_bus.dispatch(CreateQuoteCommand(payload=QuoteInput.model_validate(quote_payload()), user_id="u1"))
        second = self.cmd_bus.dispatch(CreateQuoteCommand(payload=QuoteInput.model_validate(quote_payload())))

        self.assertIs(first.status, QuoteStatus.PENDING)
        self.assertEqual(first.value, Decimal("1500.00"))
        self.assertEqual(first.client_document, "123.456.789-09")
        self.assertEqual(first.user_id, "u1")
        self.assertEqual(second.number, first.number + 1)

    def test_catalog_service_prefills_description_and_value(self) -> None:
        payload = QuoteInput.model_validate(quote_payload(service_description="", value=None, service_id="svc-1"))
        quote = self.cmd_bus.dispatch(CreateQuoteCommand(payload=payload))

        self.assertEqual(quote.service_description, "Landing page responsiva com formulário de contato")
        self.assertEqual(quote.value, Decimal("890.00"))
        self.assertEqual(quote.category_id, "cat-1")

    def test_invalid_status_filter(self) -> None:
        with self.assertRaises(ValidationError):
            self.qry_bus.dispatch(ListQuotesQuery(filtros={"status": "archived"}))


class ApprovedQuoteSearchTests(SimpleTestCase):
    def setUp(self) -> None:
        self.approved = make_quote(number=42, client_name="Carlos Pereira", status=QuoteStatus.APPROVED)
        self.pending = make_quote(number=43, client_name="Carlos Pereira")
        self.repo = InMemoryQuoteRepository([self.approved, self.pending])
        _, self.qry_bus = build_buses(quote_repo=self.repo)

    def _search(self, term: str):
        return self.qry_bus.dispatch(SearchApprovedQuotesQuery(filtros={}, term=term))

    def test_only_approved_quotes_are_returned(self) -> None:
        self.assertEqual([q.number for q in self._search("carlos")], [42])

    def test_match_by_number_and_document_digits(self) -> None:
        self.assertEqual([q.number for q in self._search("42")], [42])
        self.assertEqual([q.number for q in self._search("456.789")], [42])

    def test_blank_term_returns_nothing(self) -> None:
        self.assertEqual(self._search("   "), [])

    def test_term_without_digits_does_not_match_every_document(self) -> None:
        self.assertFalse(matches_approved_search(self.approved, "xyz"))
