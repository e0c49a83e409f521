"""
Geração dos PDFs de orçamento e contrato a partir de um RenderedDocument.

Cada bloco estruturado vira um flowable do ReportLab; o bloco de identidade
não entra no corpo, alimenta o cabeçalho de todas as páginas.
"""

import io
import time
from pathlib import Path
from xml.sax.saxutils import escape as xml_escape

import structlog
from reportlab.lib.units import cm
from reportlab.platypus import Flowable, KeepTogether, Paragraph, Spacer, Table, TableStyle

from labora_core.adapters.observability.metrics import PDF_EXPORT_DURATION, PDF_EXPORTS
from labora_core.core.application.services.utils.design_system import COLORS, get_document_styles
from labora_core.core.application.services.utils.template import DocumentPDFTemplate
from labora_core.core.domain.company import LABORA_TECH, CompanyIdentity
from labora_core.core.domain.entities.document_entity import (
    SIGNATURE_RULE,
    Block,
    BlockKind,
    DocumentKind,
    RenderedDocument,
)
from labora_core.core.domain.entities.quote_entity import QuoteStatus
from labora_core.core.domain.exceptions import ExportError

logger = structlog.get_logger(__name__)


def file_name(kind: DocumentKind, number: int | None) -> str:
    if kind is DocumentKind.CONTRACT:
        return f"CONTRATO-{number}.pdf"
    return f"ORCAMENTO-LABORA-TECH-{number}.pdf"


class DocumentExportService:
    """Exporta documentos estruturados para PDF (A4, retrato)."""

    def __init__(self, logo_path: str | None = None, company: CompanyIdentity = LABORA_TECH):
        self.logo_path = logo_path if logo_path and Path(logo_path).is_file() else None
        self.company = company
        self.styles = get_document_styles()

    def export(self, document: RenderedDocument) -> bytes:
        """
        Gera o PDF completo em memória.

        Raises:
            ExportError: qualquer falha de montagem; nenhum byte parcial é devolvido.
        """
        log = logger.bind(kind=document.kind.value, number=document.number)
        start = time.perf_counter()
        try:
            buffer = io.BytesIO()
            identity = document.identity
            doc = DocumentPDFTemplate(
                buffer,
                logo_path=self.logo_path,
                company=self.company,
                contact_lines=identity.items if identity else self.company.contact_lines,
                doc_title=document.title,
                issued_on=document.issued_on,
                title=document.title,
                author=self.company.trade_name,
            )
            width = doc.get_available_width()
            story = self._story(document, width)
            doc.build(story)
            pdf = buffer.getvalue()
        except Exception as exc:
            PDF_EXPORTS.labels(document.kind.value, "error").inc()
            log.error("pdf.export_failed", error=str(exc))
            raise ExportError() from exc
        finally:
            PDF_EXPORT_DURATION.labels(document.kind.value).observe(time.perf_counter() - start)

        PDF_EXPORTS.labels(document.kind.value, "ok").inc()
        log.info("pdf.exported", size=len(pdf))
        return pdf

    # ───────────────────────── blocos → flowables ─────────────────────────
    def _story(self, document: RenderedDocument, width: float) -> list[Flowable]:
        story: list[Flowable] = []
        for block in document.blocks:
            story.extend(self._flowables(block, width))
        if not story:
            story.append(Spacer(1, 0.1 * cm))
        return story

    def _flowables(self, block: Block, width: float) -> list[Flowable]:  # noqa: PLR0911
        kind = block.kind
        if kind is BlockKind.IDENTITY:
            return []
        if kind is BlockKind.SPACER:
            return [Spacer(1, 0.3 * cm)]
        if kind is BlockKind.HEADING:
            return [Paragraph(_p(block.text), self.styles["Heading"])]
        if kind is BlockKind.BODY:
            return [Paragraph(_p(block.text), self.styles["Body"])]
        if kind is BlockKind.LIST_ITEM:
            return [Paragraph(_p(block.text), self.styles["ListItem"])]
        if kind is BlockKind.FIELD:
            return [Paragraph(f"<b>{_p(block.label or '')}:</b> {_p(block.text)}", self.styles["Field"])]
        if kind is BlockKind.HIGHLIGHT:
            return [Spacer(1, 0.3 * cm), self._highlight(block, width), Spacer(1, 0.3 * cm)]
        if kind is BlockKind.TERMS:
            return [Spacer(1, 0.2 * cm), self._terms(block, width)]
        if kind is BlockKind.STAMP:
            return [Spacer(1, 0.4 * cm), *self._stamp(block, width)]
        return [self._signature(block)]

    def _highlight(self, block: Block, width: float) -> Table:
        rows = [
            [Paragraph(_p(label), self.styles["HighlightLabel"]),
             Paragraph(_p(value), self.styles["HighlightValue" if i == 0 else "HighlightLabel"])]
            for i, (label, value) in enumerate(block.pairs)
        ]
        table = Table(rows, colWidths=[width * 0.45, width * 0.55])
        table.setStyle(TableStyle([
            ("BACKGROUND", (0, 0), (-1, -1), COLORS.PRIMARY),
            ("VALIGN", (0, 0), (-1, -1), "MIDDLE"),
            ("LEFTPADDING", (0, 0), (-1, -1), 12),
            ("RIGHTPADDING", (0, 0), (-1, -1), 12),
            ("TOPPADDING", (0, 0), (-1, -1), 8),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
        ]))
        return table

    def _terms(self, block: Block, width: float) -> Table:
        content: list[Flowable] = [Paragraph(_p(block.label or ""), self.styles["TermsTitle"])]
        content += [
            Paragraph(f"{i}. {_p(clause)}", self.styles["Terms"])
            for i, clause in enumerate(block.items, start=1)
        ]
        table = Table([[content]], colWidths=[width])
        table.setStyle(TableStyle([
            ("BOX", (0, 0), (-1, -1), 0.8, COLORS.DIVIDER),
            ("BACKGROUND", (0, 0), (-1, -1), COLORS.LIGHT_GRAY),
            ("LEFTPADDING", (0, 0), (-1, -1), 10),
            ("RIGHTPADDING", (0, 0), (-1, -1), 10),
            ("TOPPADDING", (0, 0), (-1, -1), 8),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
        ]))
        return table

    def _stamp(self, block: Block, width: float) -> list[Flowable]:
        """Selo curto em caixa; a justificativa segue em parágrafos livres, que quebram entre páginas."""
        approved = block.label == QuoteStatus.APPROVED.value
        fg = COLORS.SUCCESS if approved else COLORS.ERROR
        bg = COLORS.LIGHT_SUCCESS if approved else COLORS.LIGHT_ERROR

        stamp_style = self.styles["Stamp"].clone("StampColored", textColor=fg)
        note_style = self.styles["StampNote"].clone("StampNoteColored", textColor=fg, spaceBefore=4)

        table = Table([[Paragraph(_p(block.text), stamp_style)]], colWidths=[width * 0.7])
        table.setStyle(TableStyle([
            ("BOX", (0, 0), (-1, -1), 1.5, fg),
            ("BACKGROUND", (0, 0), (-1, -1), bg),
            ("TOPPADDING", (0, 0), (-1, -1), 8),
            ("BOTTOMPADDING", (0, 0), (-1, -1), 8),
        ]))
        table.hAlign = "CENTER"
        return [table, *[Paragraph(_p(line), note_style) for line in block.items]]

    def _signature(self, block: Block) -> KeepTogether:
        rule = f"{block.label} {SIGNATURE_RULE}" if block.label else SIGNATURE_RULE
        lines = [rule, *([block.text] if block.text else []), *block.items]
        return KeepTogether([
            Spacer(1, 0.8 * cm),
            *[Paragraph(_p(line), self.styles["Signature"]) for line in lines],
        ])


def _p(text: str) -> str:
    """Escapa texto livre para o mini-markup do Paragraph, preservando quebras de linha."""
    return xml_escape(text).replace("\n", "<br/>")
