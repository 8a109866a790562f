"""PDF export DTOs."""

from dataclasses import dataclass

PDF_CONTENT_TYPE = "application/pdf"


@dataclass(frozen=True)
class PrintableDocument:
    """Everything the renderer needs to print one instruks version."""

    title: str
    content_html: str
    category_name: str | None = None
    description: str | None = None


@dataclass(frozen=True)
class PdfExport:
    """Rendered PDF with its download name."""

    filename: str
    content: bytes
    content_type: str = PDF_CONTENT_TYPE
