import structlog

from labora_core.core.application.cqrs import QueryHandler
from labora_core.core.application.dtos.document_dto import DocumentFileDTO
from labora_core.core.application.queries.document_queries import (
    RenderContractPdfQuery,
    RenderContractTextQuery,
    RenderQuotePdfQuery,
)
from labora_core.core.application.services.document_export_service import DocumentExportService, file_name
from labora_core.core.application.services.document_template_service import DocumentTemplateService
from labora_core.core.domain.entities.quote_entity import QuoteEntity, QuoteStatus
from labora_core.core.domain.exceptions import InvalidStateTransition, NotFoundError
from labora_core.core.domain.repositories.quote_repository import QuoteRepository

logger = structlog.get_logger(__name__)


class _DocumentHandler:
    def __init__(
        self,
        repo: QuoteRepository,
        templates: DocumentTemplateService,
        exporter: DocumentExportService,
    ):
        self.repo = repo
        self.templates = templates
        self.exporter = exporter

    def _quote(self, quote_id: str) -> QuoteEntity:
        quote = self.repo.find_by_id(quote_id)
        if quote is None:
            raise NotFoundError(f"Orçamento {quote_id} não encontrado.")
        return quote


class RenderQuotePdfHandler(_DocumentHandler, QueryHandler[RenderQuotePdfQuery, DocumentFileDTO]):
    def handle(self, query: RenderQuotePdfQuery) -> DocumentFileDTO:
        quote = self._quote(query.quote_id)
        document = self.templates.render_quote_document(quote)
        return DocumentFileDTO(file_name(document.kind, quote.number), self.exporter.export(document))


class RenderContractTextHandler(_DocumentHandler, QueryHandler[RenderContractTextQuery, str]):
    def handle(self, query: RenderContractTextQuery) -> str:
        return self.templates.render_contract_text(self._quote(query.quote_id))


class RenderContractPdfHandler(_DocumentHandler, QueryHandler[RenderContractPdfQuery, DocumentFileDTO]):
    def handle(self, query: RenderContractPdfQuery) -> DocumentFileDTO:
        quote = self._quote(query.quote_id)
        if query.content and query.content.strip():
            if quote.status is not QuoteStatus.APPROVED:
                raise InvalidStateTransition(
                    quote.status.value,
                    QuoteStatus.APPROVED.value,
                    message="O contrato só pode ser gerado a partir de um orçamento aprovado.",
                )
            logger.info("contract.from_edited_text", quote_id=quote.id, chars=len(query.content))
            document = self.templates.contract_from_text(quote, query.content)
        else:
            document = self.templates.render_contract_document(quote)
        return DocumentFileDTO(file_name(document.kind, quote.number), self.exporter.export(document))
