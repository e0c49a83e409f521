"""
Design System for PDF documents
Centralized settings for colors, fonts, and visual styles.
"""

from reportlab.lib import colors
from reportlab.lib.colors import HexColor
from reportlab.lib.enums import TA_CENTER, TA_JUSTIFY, TA_LEFT, TA_RIGHT
from reportlab.lib.styles import ParagraphStyle

# ==============================================================================
# BRAND COLOR PALETTE
# ==============================================================================

class BrandColors:
    """Labora Tech palette (purple brand over light gray backgrounds)."""

    # Primary Brand Colors
    PRIMARY = HexColor("#6A1B9A")           # Main brand purple

    # Text Colors
    PRIMARY_TEXT = HexColor("#263238")      # Main text
    SECONDARY_TEXT = HexColor("#455A64")    # Subtext
    TERTIARY_TEXT = HexColor("#808080")     # Footer and helper text

    # Status Colors
    SUCCESS = HexColor("#2E7D32")
    LIGHT_SUCCESS = HexColor("#E8F5E9")
    ERROR = HexColor("#C62828")
    LIGHT_ERROR = HexColor("#FFEBEE")

    # Neutral Colors
    WHITE = colors.white
    BACKGROUND = HexColor("#ECEFF1")
    LIGHT_GRAY = HexColor("#F5F5F5")
    DIVIDER = HexColor("#C8C8C8")


class DocumentFonts:
    """Base-14 fonts: no TTF files to embed and full Latin-1 coverage for Portuguese."""

    REGULAR = 'Helvetica'
    BOLD = 'Helvetica-Bold'
    ITALIC = 'Helvetica-Oblique'


# Global instances of the settings
COLORS = BrandColors()
FONTS = DocumentFonts()


def get_document_styles() -> dict[str, ParagraphStyle]:
    """
    Typographic styles for quote and contract documents.

    Body text is 10pt; headings are 11pt bold with extra space before,
    the same rhythm used by the printed contracts.
    """
    return {
        "DocTitle": ParagraphStyle(
            name="DocTitle",
            fontName=FONTS.BOLD,
            fontSize=14,
            textColor=COLORS.PRIMARY_TEXT,
            alignment=TA_LEFT,
            leading=18,
        ),
        "DocDate": ParagraphStyle(
            name="DocDate",
            fontName=FONTS.REGULAR,
            fontSize=10,
            textColor=COLORS.SECONDARY_TEXT,
            alignment=TA_RIGHT,
            leading=18,
        ),
        "PageHeader": ParagraphStyle(
            name="PageHeader",
            fontName=FONTS.REGULAR,
            fontSize=8,
            textColor=COLORS.SECONDARY_TEXT,
            alignment=TA_RIGHT,
            leading=10,
        ),
        "HeaderBrand": ParagraphStyle(
            name="HeaderBrand",
            fontName=FONTS.BOLD,
            fontSize=16,
            textColor=COLORS.PRIMARY,
            alignment=TA_LEFT,
            leading=20,
        ),
        "PageFooter": ParagraphStyle(
            name="PageFooter",
            fontName=FONTS.REGULAR,
            fontSize=8,
            textColor=COLORS.TERTIARY_TEXT,
            alignment=TA_CENTER,
            leading=10,
        ),
        "Heading": ParagraphStyle(
            name="Heading",
            fontName=FONTS.BOLD,
            fontSize=11,
            textColor=COLORS.PRIMARY_TEXT,
            spaceBefore=10,
            spaceAfter=4,
            keepWithNext=1,
            leading=14,
        ),
        "Body": ParagraphStyle(
            name="Body",
            fontName=FONTS.REGULAR,
            fontSize=10,
            textColor=COLORS.PRIMARY_TEXT,
            alignment=TA_JUSTIFY,
            leading=14,
            spaceAfter=5,
        ),
        "ListItem": ParagraphStyle(
            name="ListItem",
            fontName=FONTS.REGULAR,
            fontSize=10,
            textColor=COLORS.PRIMARY_TEXT,
            leading=14,
            leftIndent=12,
            spaceAfter=2,
        ),
        "Field": ParagraphStyle(
            name="Field",
            fontName=FONTS.REGULAR,
            fontSize=10,
            textColor=COLORS.PRIMARY_TEXT,
            leading=14,
            spaceAfter=2,
        ),
        "HighlightLabel": ParagraphStyle(
            name="HighlightLabel",
            fontName=FONTS.BOLD,
            fontSize=10,
            textColor=COLORS.WHITE,
            leading=13,
        ),
        "HighlightValue": ParagraphStyle(
            name="HighlightValue",
            fontName=FONTS.BOLD,
            fontSize=16,
            textColor=COLORS.WHITE,
            leading=20,
        ),
        "TermsTitle": ParagraphStyle(
            name="TermsTitle",
            fontName=FONTS.BOLD,
            fontSize=10,
            textColor=COLORS.PRIMARY,
            leading=13,
            spaceAfter=4,
        ),
        "Terms": ParagraphStyle(
            name="Terms",
            fontName=FONTS.REGULAR,
            fontSize=9,
            textColor=COLORS.SECONDARY_TEXT,
            leading=12,
            spaceAfter=2,
        ),
        "Stamp": ParagraphStyle(
            name="Stamp",
            fontName=FONTS.BOLD,
            fontSize=12,
            alignment=TA_CENTER,
            leading=16,
        ),
        "StampNote": ParagraphStyle(
            name="StampNote",
            fontName=FONTS.ITALIC,
            fontSize=9,
            alignment=TA_CENTER,
            leading=12,
        ),
        "Signature": ParagraphStyle(
            name="Signature",
            fontName=FONTS.REGULAR,
            fontSize=10,
            textColor=COLORS.PRIMARY_TEXT,
            leading=13,
        ),
    }
