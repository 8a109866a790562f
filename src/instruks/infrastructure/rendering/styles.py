"""Inline text style and the CSS subset understood by the renderer."""

from dataclasses import dataclass, replace

BOLD_WEIGHTS = frozenset({"bold", "600", "700", "800", "900"})
# Matched as substrings of the CSS color value, first hit wins.
NAMED_COLORS = ("red", "green", "blue")


@dataclass(frozen=True)
class TextStyle:
    """Inline formatting inherited down the HTML tree."""

    bold: bool = False
    italic: bool = False
    underline: bool = False
    strikethrough: bool = False
    color: str | None = None

    def merge(self, **changes: object) -> "TextStyle":
        """Return a copy with changes applied."""
        return replace(self, **changes)


def apply_css(style: TextStyle, css: str | None) -> TextStyle:
    """Compose declarations of a ``style`` attribute onto style.

    Only text-decoration, font-weight, font-style and color are honoured;
    anything else is ignored.
    """
    if not css:
        return style
    changes: dict[str, object] = {}
    for declaration in css.split(";"):
        name, sep, value = declaration.partition(":")
        if not sep:
            continue
        name = name.strip().lower()
        value = value.strip().lower()
        if name == "text-decoration":
            if "underline" in value:
                changes["underline"] = True
            if "line-through" in value:
                changes["strikethrough"] = True
        elif name == "font-weight":
            if value in BOLD_WEIGHTS:
                changes["bold"] = True
        elif name == "font-style":
            if "italic" in value:
                changes["italic"] = True
        elif name == "color":
            color = next((c for c in NAMED_COLORS if c in value), None)
            if color:
                changes["color"] = color
    return style.merge(**changes) if changes else style
