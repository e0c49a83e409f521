import re

import structlog

from labora_core.core.application.commands.quote_commands import (
    ApproveQuoteCommand,
    CreateQuoteCommand,
    RejectQuoteCommand,
    UpdateQuoteCommand,
)
from labora_core.core.application.cqrs import CommandHandler, PagedResult, QueryHandler
from labora_core.core.application.dtos.quote_dto import QuoteInput
from labora_core.core.application.queries.quote_queries import (
    GetQuoteQuery,
    ListQuotesQuery,
    SearchApprovedQuotesQuery,
)
from labora_core.core.application.services.form_validation import normalize_quote, parse_amount, validate_quote
from labora_core.core.application.services.quote_lifecycle_service import QuoteLifecycleService, TransitionResult
from labora_core.core.domain.entities.quote_entity import QuoteEntity, QuoteStatus, to_decimal
from labora_core.core.domain.exceptions import FieldError, InvalidStateTransition, NotFoundError, ValidationError
from labora_core.core.domain.repositories.quote_repository import QuoteRepository
from labora_core.core.domain.repositories.service_catalog_repository import ServiceCatalogRepository

logger = structlog.get_logger(__name__)

EDIT_PENDING_ONLY = "Somente orçamentos pendentes podem ser editados."


def _validated(data: QuoteInput) -> QuoteInput:
    normalized = normalize_quote(data)
    errors = validate_quote(normalized)
    if errors:
        raise ValidationError(errors)
    return normalized


# ——— COMANDOS ————————————————————————————————————————————

class CreateQuoteHandler(CommandHandler[CreateQuoteCommand]):
    def __init__(self, repo: QuoteRepository, catalog_repo: ServiceCatalogRepository):
        self.repo = repo
        self.catalog_repo = catalog_repo

    def _prefill(self, data: QuoteInput) -> QuoteInput:
        """Descrição e valor vazios são preenchidos a partir do serviço do catálogo."""
        if not data.service_id:
            return data
        needs_description = not (data.service_description or "").strip()
        needs_value = data.value is None or str(data.value).strip() == ""
        if not (needs_description or needs_value):
            return data
        service = self.catalog_repo.find_service(data.service_id)
        if service is None:
            return data
        update = {}
        if needs_description and service.default_description:
            update["service_description"] = service.default_description
        if needs_value and service.base_price is not None:
            update["value"] = service.base_price
        if update and not data.category_id:
            update["category_id"] = service.category_id
        return data.model_copy(update=update)

    def handle(self, command: CreateQuoteCommand) -> QuoteEntity:
        data = _validated(self._prefill(command.payload))
        quote = QuoteEntity(
            id=None,
            number=None,
            client_name=data.client_name,
            client_document=data.client_document,
            service_description=data.service_description,
            value=to_decimal(parse_amount(data.value)),
            payment_method=data.payment_method,
            status=QuoteStatus.PENDING,
            observations=data.observations,
            client_id=data.client_id or None,
            service_id=data.service_id or None,
            category_id=data.category_id or None,
            user_id=command.user_id,
        )
        saved = self.repo.save(quote)
        logger.info("quote.created", quote_id=saved.id, number=saved.number)
        return saved


class UpdateQuoteHandler(CommandHandler[UpdateQuoteCommand]):
    def __init__(self, repo: QuoteRepository):
        self.repo = repo

    def handle(self, command: UpdateQuoteCommand) -> QuoteEntity:
        current = self.repo.find_by_id(command.id)
        if current is None:
            raise NotFoundError(f"Orçamento {command.id} não encontrado.")
        if current.status.is_terminal:
            raise InvalidStateTransition(current.status.value, QuoteStatus.PENDING.value, message=EDIT_PENDING_ONLY)

        data = _validated(command.payload)
        current.client_name = data.client_name
        current.client_document = data.client_document
        current.service_description = data.service_description
        current.value = to_decimal(parse_amount(data.value))
        current.payment_method = data.payment_method
        current.observations = data.observations
        current.client_id = data.client_id or current.client_id
        current.service_id = data.service_id or current.service_id
        current.category_id = data.category_id or current.category_id

        updated = self.repo.update_if_pending(current)
        if updated is None:
            latest = self.repo.find_by_id(command.id)
            status = latest.status.value if latest else "unknown"
            raise InvalidStateTransition(status, QuoteStatus.PENDING.value, message=EDIT_PENDING_ONLY)
        logger.info("quote.updated", quote_id=updated.id, number=updated.number)
        return updated


class ApproveQuoteHandler(CommandHandler[ApproveQuoteCommand]):
    def __init__(self, lifecycle: QuoteLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, command: ApproveQuoteCommand) -> TransitionResult:
        return self.lifecycle.approve(command.id)


class RejectQuoteHandler(CommandHandler[RejectQuoteCommand]):
    def __init__(self, lifecycle: QuoteLifecycleService):
        self.lifecycle = lifecycle

    def handle(self, command: RejectQuoteCommand) -> TransitionResult:
        return self.lifecycle.reject(command.id, command.justification)


# ——— QUERIES —————————————————————————————————————————————

class GetQuoteHandler(QueryHandler[GetQuoteQuery, QuoteEntity]):
    def __init__(self, repo: QuoteRepository):
        self.repo = repo

    def handle(self, query: GetQuoteQuery) -> QuoteEntity:
        quote = self.repo.find_by_id(query.quote_id)
        if quote is None:
            raise NotFoundError(f"Orçamento {query.quote_id} não encontrado.")
        return quote


class ListQuotesHandler(QueryHandler[ListQuotesQuery, PagedResult[QuoteEntity]]):
    def __init__(self, repo: QuoteRepository):
        self.repo = repo

    def handle(self, query: ListQuotesQuery) -> PagedResult[QuoteEntity]:
        filtros = dict(query.filtros or {})
        status = filtros.get("status")
        if status:
            try:
                filtros["status"] = QuoteStatus(status).value
            except ValueError as exc:
                raise ValidationError([FieldError("status", "Status inválido")]) from exc
        return self.repo.list(filtros, page=query.page, page_size=query.page_size)


def matches_approved_search(quote: QuoteEntity, term: str) -> bool:
    """
    Número contém o termo, nome do cliente contém o termo (sem caixa) ou
    os dígitos do documento contêm os dígitos do termo. A comparação por
    dígitos só vale quando o termo tem algum dígito.
    """
    term = term.strip()
    if quote.number is not None and term in str(quote.number):
        return True
    if term.casefold() in quote.client_name.casefold():
        return True
    term_digits = re.sub(r"\D", "", term)
    return bool(term_digits) and term_digits in re.sub(r"\D", "", quote.client_document)


class SearchApprovedQuotesHandler(QueryHandler[SearchApprovedQuotesQuery, list[QuoteEntity]]):
    def __init__(self, repo: QuoteRepository):
        self.repo = repo

    def handle(self, query: SearchApprovedQuotesQuery) -> list[QuoteEntity]:
        term = (query.term or "").strip()
        if not term:
            return []
        approved = self.repo.list_all(status=QuoteStatus.APPROVED)
        return [q for q in approved if matches_approved_search(q, term)]
