"""PDF renderer port."""

from typing import Protocol

from instruks.application.dto.export_dto import PrintableDocument


class PdfRenderer(Protocol):
    """Port for rendering a document to PDF bytes."""

    def render(self, document: PrintableDocument) -> bytes: ...
