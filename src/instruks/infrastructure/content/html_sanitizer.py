"""Whitelist HTML sanitizer backed by nh3 (ammonia)."""

import nh3

ALLOWED_TAGS = frozenset(
    {
        "p", "b", "i", "u", "strong", "em", "ul", "ol", "li", "br",
        "h1", "h2", "h3", "blockquote", "code", "pre", "a", "span",
    }
)
ALLOWED_ATTRIBUTES = {
    "*": frozenset(),
    "a": frozenset({"href"}),
    "span": frozenset({"style"}),
}
ALLOWED_STYLE_PROPERTIES = frozenset(
    {"text-decoration", "font-weight", "font-style", "color"}
)
ALLOWED_URL_SCHEMES = frozenset({"http", "https"})


class NH3HtmlSanitizer:
    """Reduce rich text to the tag, attribute and CSS subset the renderer understands.

    Disallowed tags are unwrapped (their text is kept); ``script`` and ``style``
    are dropped together with their contents.
    """

    def sanitize(self, html: str) -> str:
        if not html:
            return ""
        return nh3.clean(
            html,
            tags=set(ALLOWED_TAGS),
            attributes={tag: set(attrs) for tag, attrs in ALLOWED_ATTRIBUTES.items()},
            url_schemes=set(ALLOWED_URL_SCHEMES),
            filter_style_properties=set(ALLOWED_STYLE_PROPERTIES),
            link_rel=None,
        )
