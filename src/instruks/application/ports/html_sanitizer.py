"""HTML sanitizer port."""

from typing import Protocol


class HtmlSanitizer(Protocol):
    """Port for reducing untrusted rich text to the allowed HTML subset."""

    def sanitize(self, html: str) -> str: ...
