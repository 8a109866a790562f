"""Export instruks to PDF use case."""

import asyncio
from uuid import UUID

from instruks.application.dto.export_dto import PdfExport, PrintableDocument
from instruks.application.ports import HtmlSanitizer, PdfRenderer
from instruks.domain.exceptions import NotFound


def pdf_filename(instruks_id: UUID) -> str:
    """Download name for an exported version."""
    return f"instruks-{instruks_id.hex}.pdf"


class ExportInstruksPdfUseCase:
    """Render one version, with its category, to a PDF document."""

    def __init__(
        self,
        unit_of_work_factory: type,
        sanitizer: HtmlSanitizer,
        renderer: PdfRenderer,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._sanitizer = sanitizer
        self._renderer = renderer

    async def execute(self, instruks_id: UUID) -> PdfExport:
        """Load version and category, then render outside the transaction."""
        async with self._uow_factory() as uow:
            instruks = await uow.instruks.get_by_id(instruks_id)
            if instruks is None:
                raise NotFound("Instruks", str(instruks_id))
            category = await uow.categories.get_by_id(instruks.category_id)

        document = PrintableDocument(
            title=instruks.title,
            content_html=self._sanitizer.sanitize(instruks.content),
            category_name=category.name if category else None,
            description=instruks.description,
        )
        loop = asyncio.get_running_loop()
        content = await loop.run_in_executor(None, self._renderer.render, document)
        return PdfExport(filename=pdf_filename(instruks.id), content=content)
