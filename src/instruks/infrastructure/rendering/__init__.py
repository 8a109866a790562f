"""Document renderer: sanitized HTML to paginated PDF."""

from instruks.infrastructure.rendering.html_blocks import parse_blocks
from instruks.infrastructure.rendering.layout import LayoutEngine, PageLayout
from instruks.infrastructure.rendering.pdf_writer import ReportLabPdfRenderer

__all__ = ["LayoutEngine", "PageLayout", "ReportLabPdfRenderer", "parse_blocks"]
