"""Application ports - interfaces for external adapters."""

from instruks.application.ports.html_sanitizer import HtmlSanitizer
from instruks.application.ports.pdf_renderer import PdfRenderer
from instruks.application.ports.permission_checker import PermissionChecker
from instruks.application.ports.unit_of_work import UnitOfWork, UnitOfWorkFactory

__all__ = [
    "HtmlSanitizer",
    "PdfRenderer",
    "PermissionChecker",
    "UnitOfWork",
    "UnitOfWorkFactory",
]
