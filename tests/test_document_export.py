"""PDF export of rendered quotes and contracts."""

import re
from datetime import date
from unittest import mock

from django.test import SimpleTestCase

from labora_core.core.application.services.document_export_service import DocumentExportService, file_name
from labora_core.core.application.services.document_template_service import DocumentTemplateService
from labora_core.core.application.services.utils.design_system import get_document_styles
from labora_core.core.application.services.utils.template import DocumentPDFTemplate
from labora_core.core.domain.entities.document_entity import DocumentKind
from labora_core.core.domain.entities.quote_entity import QuoteStatus
from labora_core.core.domain.exceptions import ExportError
from tests.helpers.fakes import make_quote


def page_count(pdf: bytes) -> int:
    return len(re.findall(rb"/Type\s*/Page\b", pdf))


class DocumentExportTests(SimpleTestCase):
    def setUp(self) -> None:
        self.templates = DocumentTemplateService()
        self.exporter = DocumentExportService(logo_path="/does/not/exist.png")

    def test_missing_logo_falls_back_to_text_brand(self) -> None:
        self.assertIsNone(self.exporter.logo_path)

    def test_quote_pdf(self) -> None:
        doc = self.templates.render_quote_document(make_quote(status=QuoteStatus.REJECTED, rejection_justification="Sem verba"))
        pdf = self.exporter.export(doc)
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_contract_pdf_from_edited_text(self) -> None:
        quote = make_quote(number=9, status=QuoteStatus.APPROVED)
        text = self.templates.render_contract_text(quote, today=date(2026, 10, 18))
        edited = text.replace("Brasília-DF", "Goiânia-GO") + "\n\nCLÁUSULA EXTRA ACORDADA ENTRE AS PARTES\nTexto <livre> & sem marcação."
        pdf = self.exporter.export(self.templates.contract_from_text(quote, edited))
        self.assertTrue(pdf.startswith(b"%PDF"))

    def test_build_failure_raises_export_error(self) -> None:
        doc = self.templates.render_quote_document(make_quote())
        with mock.patch(
            "labora_core.core.application.services.document_export_service.DocumentPDFTemplate.build",
            side_effect=RuntimeError("boom"),
        ), self.assertRaises(ExportError):
            self.exporter.export(doc)

    def test_file_names(self) -> None:
        self.assertEqual(file_name(DocumentKind.QUOTE, 15), "ORCAMENTO-LABORA-TECH-15.pdf")
        self.assertEqual(file_name(DocumentKind.CONTRACT, 15), "CONTRATO-15.pdf")

    def test_long_contract_repeats_header_and_footer_on_every_page(self) -> None:
        doc = self.templates.render_contract_document(make_quote(number=4, status=QuoteStatus.APPROVED))
        with mock.patch.object(
            DocumentPDFTemplate, "_draw_header", autospec=True, side_effect=DocumentPDFTemplate._draw_header
        ) as header, mock.patch.object(
            DocumentPDFTemplate, "_draw_footer", autospec=True, side_effect=DocumentPDFTemplate._draw_footer
        ) as footer:
            pdf = self.exporter.export(doc)

        pages = page_count(pdf)
        self.assertGreater(pages, 1)
        self.assertEqual(header.call_count, pages)
        self.assertEqual([c.args[3] for c in footer.call_args_list], list(range(1, pages + 1)))

    def test_long_rejection_justification_flows_over_pages(self) -> None:
        quote = make_quote(status=QuoteStatus.REJECTED, rejection_justification="Motivo detalhado. " * 400)
        pdf = self.exporter.export(self.templates.render_quote_document(quote))
        self.assertGreater(page_count(pdf), 1)

    def test_styles_use_base_fonts(self) -> None:
        styles = get_document_styles()
        self.assertEqual(styles["Body"].fontName, "Helvetica")
        self.assertEqual(styles["Stamp"].fontName, "Helvetica-Bold")
        self.assertEqual(styles["StampNote"].fontName, "Helvetica-Oblique")
