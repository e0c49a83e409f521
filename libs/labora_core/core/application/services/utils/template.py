"""
PDF page template for quotes and contracts.
Header with brand identity and title band, footer with company data and page number.
"""

import io
from datetime import date
from typing import Any
from xml.sax.saxutils import escape as xml_escape

import structlog
from reportlab.lib.pagesizes import A4
from reportlab.lib.units import cm
from reportlab.platypus import BaseDocTemplate, Frame, PageTemplate, Paragraph

from labora_core.core.application.services.utils.design_system import COLORS, get_document_styles
from labora_core.core.domain.company import LABORA_TECH, CompanyIdentity

logger = structlog.get_logger(__name__)


class DocumentPDFTemplate(BaseDocTemplate):
    """
    A4 portrait template shared by every exported document.

    Features:
    - Logo (or the trade name as text) at the top left
    - Company contact lines at the top right
    - Title band with the document number and issue date
    - Footer with company name, address, contacts and page number
    """

    def __init__(self, file_obj: str | io.BytesIO, **kwargs: Any):
        """
        Args:
            file_obj: File path or in-memory buffer.
            **kwargs: logo_path, company, contact_lines, doc_title, issued_on
                plus regular BaseDocTemplate parameters.
        """
        self.allowSplitting = 1

        self.logo_path = kwargs.pop("logo_path", None)
        self.company: CompanyIdentity = kwargs.pop("company", LABORA_TECH)
        self.contact_lines: list[str] = list(kwargs.pop("contact_lines", self.company.contact_lines))
        self.doc_title: str = kwargs.pop("doc_title", "")
        issued_on: date = kwargs.pop("issued_on", date.today())
        self.issued_on_label = issued_on.strftime("%d/%m/%Y")

        super().__init__(file_obj, pagesize=A4, **kwargs)

        self.left_margin = 2.0 * cm
        self.right_margin = 2.0 * cm
        self.top_margin = 5.0 * cm
        self.bottom_margin = 2.8 * cm

        self.styles = get_document_styles()
        self._setup_page_templates()

    def _setup_page_templates(self):
        page_width, page_height = A4
        frame = Frame(
            self.left_margin,
            self.bottom_margin,
            page_width - self.left_margin - self.right_margin,
            page_height - self.top_margin - self.bottom_margin,
            id="document_frame",
            leftPadding=0,
            rightPadding=0,
            topPadding=0,
            bottomPadding=0,
        )
        self.addPageTemplates([
            PageTemplate(id="DocumentPage", frames=[frame], onPage=self._draw_page_layout, pagesize=A4),
        ])

    def _draw_page_layout(self, canvas: Any, doc: Any) -> None:
        canvas.saveState()
        page_width, page_height = doc.pagesize
        self._draw_header(canvas, page_width, page_height)
        self._draw_footer(canvas, page_width, doc.page)
        canvas.restoreState()

    def _draw_header(self, canvas: Any, width: float, height: float):
        header_y = height - 2.2 * cm

        drawn = False
        if self.logo_path:
            try:
                canvas.drawImage(
                    self.logo_path,
                    self.left_margin,
                    header_y - 0.6 * cm,
                    width=4 * cm,
                    height=1.4 * cm,
                    preserveAspectRatio=True,
                    mask="auto",
                )
                drawn = True
            except OSError as e:
                logger.warning("pdf.logo_unavailable", logo_path=self.logo_path, error=str(e))
        if not drawn:
            brand = Paragraph(xml_escape(self.company.trade_name), self.styles["HeaderBrand"])
            brand.wrapOn(canvas, 8 * cm, 2 * cm)
            brand.drawOn(canvas, self.left_margin, header_y - 0.2 * cm)

        # contatos à direita
        info = "<br/>".join(xml_escape(line) for line in self.contact_lines)
        p_info = Paragraph(info, self.styles["PageHeader"])
        info_width, info_height = p_info.wrapOn(canvas, width / 2.2, 3 * cm)
        p_info.drawOn(canvas, width - self.right_margin - info_width, header_y - info_height / 2 + 0.3 * cm)

        line_y = height - 3.3 * cm
        self._draw_decorative_line(canvas, self.left_margin, width - self.right_margin, line_y, COLORS.PRIMARY, 2.0)

        # faixa de título
        band_height = 1.0 * cm
        band_y = line_y - 0.3 * cm - band_height
        canvas.setFillColor(COLORS.BACKGROUND)
        canvas.rect(
            self.left_margin,
            band_y,
            width - self.left_margin - self.right_margin,
            band_height,
            stroke=0,
            fill=1,
        )
        title = Paragraph(xml_escape(self.doc_title), self.styles["DocTitle"])
        title.wrapOn(canvas, width / 2, band_height)
        title.drawOn(canvas, self.left_margin + 0.3 * cm, band_y + 0.2 * cm)

        issued = Paragraph(f"Data: {self.issued_on_label}", self.styles["DocDate"])
        issued_width, _ = issued.wrapOn(canvas, width / 3, band_height)
        issued.drawOn(canvas, width - self.right_margin - issued_width - 0.3 * cm, band_y + 0.2 * cm)

    def _draw_footer(self, canvas: Any, width: float, page_number: int):
        footer_y = 1.4 * cm

        self._draw_decorative_line(
            canvas,
            self.left_margin,
            width - self.right_margin,
            footer_y + 1.0 * cm,
            COLORS.DIVIDER,
            0.8,
        )

        c = self.company
        footer_text = (
            f"<b>{xml_escape(c.trade_name)}</b> • {xml_escape(c.address_line)}<br/>"
            f"{xml_escape(c.phone)} • {xml_escape(c.email)} • Página {page_number}"
        )
        p_footer = Paragraph(footer_text, self.styles["PageFooter"])
        content_width = width - self.left_margin - self.right_margin
        footer_width, _ = p_footer.wrapOn(canvas, content_width, 1.5 * cm)
        p_footer.drawOn(canvas, self.left_margin + (content_width - footer_width) / 2, footer_y)

    def _draw_decorative_line(self, canvas: Any, x1: float, x2: float, y: float,  # noqa: PLR0913
                              color: Any, thickness: float):
        canvas.setStrokeColor(color)
        canvas.setLineWidth(thickness)
        canvas.line(x1, y, x2, y)

    def get_available_width(self) -> float:
        return A4[0] - self.left_margin - self.right_margin
