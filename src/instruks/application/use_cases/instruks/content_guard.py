"""Sanitize payload content and reject bodies that sanitize to nothing."""

from instruks.application.ports import HtmlSanitizer
from instruks.domain.exceptions import ValidationError


def sanitize_content(sanitizer: HtmlSanitizer, raw_html: str) -> str:
    """Return sanitized HTML; raise ValidationError when nothing survives."""
    content = sanitizer.sanitize(raw_html)
    if not content.strip():
        raise ValidationError("Content is empty after removing disallowed markup")
    return content
