"""Draw laid-out pages onto a reportlab canvas."""

import io
import logging
from pathlib import Path

from reportlab.lib import colors
from reportlab.lib.colors import Color, HexColor
from reportlab.lib.utils import ImageReader
from reportlab.pdfgen import canvas

from instruks.application.dto.export_dto import PrintableDocument
from instruks.infrastructure.rendering.html_blocks import parse_blocks
from instruks.infrastructure.rendering.layout import (
    LayoutEngine,
    Line,
    PageLayout,
    Rule,
)

logger = logging.getLogger(__name__)

_COLORS: dict[str, Color] = {
    "red": colors.red,
    "green": colors.green,
    "blue": colors.blue,
    "darkgrey": HexColor("#616161"),
    "lightgrey": HexColor("#E0E0E0"),
}


def _color(name: str | None) -> Color:
    return _COLORS.get(name or "", colors.black)


class ReportLabPdfRenderer:
    """Render a PrintableDocument to PDF bytes.

    The header (title, category, description and the optional logo) is repeated
    on every page, the footer carries ``Page X / Y``.
    """

    def __init__(
        self,
        logo_path: str | Path | None = None,
        page_layout: PageLayout | None = None,
    ) -> None:
        self._logo_path = Path(logo_path) if logo_path else None
        self._engine = LayoutEngine(page_layout)

    def render(self, document: PrintableDocument) -> bytes:
        """Render document and return the PDF file contents."""
        page_layout = self._engine.page_layout
        logo = self._load_logo()
        laid_out = self._engine.layout(
            document,
            parse_blocks(document.content_html),
            logo_size=logo.getSize() if logo else None,
        )

        buffer = io.BytesIO()
        c = canvas.Canvas(buffer, pagesize=(page_layout.width, page_layout.height))
        c.setTitle(document.title)
        for page in laid_out.pages:
            for line in laid_out.header:
                self._draw_line(c, line)
            if logo is not None and laid_out.logo is not None:
                placement = laid_out.logo
                c.drawImage(
                    logo,
                    placement.x,
                    placement.y,
                    width=placement.width,
                    height=placement.height,
                    mask="auto",
                )
            for rule in page.rules:
                self._draw_rule(c, rule)
            for line in page.lines:
                self._draw_line(c, line)
            if page.footer is not None:
                self._draw_line(c, page.footer)
            c.showPage()
        c.save()
        return buffer.getvalue()

    def _load_logo(self) -> ImageReader | None:
        if self._logo_path is None:
            return None
        if not self._logo_path.is_file():
            logger.debug("PDF logo %s not found, rendering header without it", self._logo_path)
            return None
        return ImageReader(str(self._logo_path))

    def _draw_line(self, c: canvas.Canvas, line: Line) -> None:
        for fragment in line.fragments:
            color = _color(fragment.color)
            c.setFillColor(color)
            c.setFont(fragment.font_name, fragment.font_size)
            c.drawString(fragment.x, line.y, fragment.text)
            if not (fragment.underline or fragment.strikethrough):
                continue
            c.setStrokeColor(color)
            c.setLineWidth(max(fragment.font_size / 18, 0.5))
            x_end = fragment.x + fragment.width
            if fragment.underline:
                y = line.y - fragment.font_size * 0.12
                c.line(fragment.x, y, x_end, y)
            if fragment.strikethrough:
                y = line.y + fragment.font_size * 0.28
                c.line(fragment.x, y, x_end, y)

    def _draw_rule(self, c: canvas.Canvas, rule: Rule) -> None:
        c.setStrokeColor(_color(rule.color))
        c.setLineWidth(rule.width)
        c.line(rule.x, rule.y_top, rule.x, rule.y_bottom)
