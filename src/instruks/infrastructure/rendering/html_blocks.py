"""Convert sanitized HTML into the renderer's block tree.

Two walks over the BeautifulSoup tree: the block walk maps top-level tags to
blocks, the inline walk collects styled spans inside a block. Both dispatch on
tag name through lookup tables; tags missing from a table are transparent.
"""

import re
from collections.abc import Callable

from bs4 import BeautifulSoup, NavigableString, Tag
from bs4.element import PreformattedString

from instruks.infrastructure.rendering.blocks import (
    Block,
    ListBlock,
    ListRow,
    QuoteBlock,
    Spacer,
    Span,
    TextBlock,
    TextLine,
)
from instruks.infrastructure.rendering.styles import TextStyle, apply_css

BR_SPACING = 6.0
BULLET_MARKER = "• "

_WHITESPACE = re.compile(r"\s+")


def parse_blocks(html: str) -> list[Block]:
    """Parse an HTML fragment into blocks, in document order."""
    soup = BeautifulSoup(html or "", "html.parser")
    root = soup.body or soup
    blocks: list[Block] = []
    _walk_blocks(root, blocks)
    return blocks


def inline_spans(node: Tag, style: TextStyle | None = None) -> tuple[Span, ...]:
    """Collect styled spans below node, whitespace collapsed and trimmed at the edges."""
    spans: list[Span] = []
    _walk_inline(node, style or TextStyle(), spans)
    return _normalize(spans)


def _collapse(text: str) -> str:
    return _WHITESPACE.sub(" ", text)


def _walk_blocks(parent: Tag, out: list[Block]) -> None:
    for node in parent.children:
        if isinstance(node, PreformattedString):
            continue
        if isinstance(node, NavigableString):
            text = _collapse(str(node)).strip()
            if text:
                out.append(TextLine(text))
            continue
        if not isinstance(node, Tag):
            continue
        handler = _BLOCK_HANDLERS.get(node.name.lower())
        if handler is None:
            _walk_blocks(node, out)
        else:
            handler(node, out)


def _line_break(node: Tag, out: list[Block]) -> None:
    out.append(Spacer(BR_SPACING))


def _text_block(node: Tag, out: list[Block]) -> None:
    out.append(TextBlock(kind=node.name.lower(), spans=inline_spans(node)))


def _blockquote(node: Tag, out: list[Block]) -> None:
    out.append(QuoteBlock(spans=inline_spans(node)))


def _list_items(node: Tag) -> list[Tag]:
    return [c for c in node.children if isinstance(c, Tag) and c.name.lower() == "li"]


def _unordered_list(node: Tag, out: list[Block]) -> None:
    rows = tuple(ListRow(BULLET_MARKER, inline_spans(li)) for li in _list_items(node))
    out.append(ListBlock(ordered=False, rows=rows))


def _ordered_list(node: Tag, out: list[Block]) -> None:
    rows = tuple(
        ListRow(f"{n}. ", inline_spans(li))
        for n, li in enumerate(_list_items(node), start=1)
    )
    out.append(ListBlock(ordered=True, rows=rows))


_BLOCK_HANDLERS: dict[str, Callable[[Tag, list[Block]], None]] = {
    "br": _line_break,
    "p": _text_block,
    "h1": _text_block,
    "h2": _text_block,
    "h3": _text_block,
    "blockquote": _blockquote,
    "ul": _unordered_list,
    "ol": _ordered_list,
}


def _bold(node: Tag, style: TextStyle) -> TextStyle:
    return style.merge(bold=True)


def _italic(node: Tag, style: TextStyle) -> TextStyle:
    return style.merge(italic=True)


def _underline(node: Tag, style: TextStyle) -> TextStyle:
    return style.merge(underline=True)


def _strikethrough(node: Tag, style: TextStyle) -> TextStyle:
    return style.merge(strikethrough=True)


def _span(node: Tag, style: TextStyle) -> TextStyle:
    return apply_css(style, node.get("style"))


def _link(node: Tag, style: TextStyle) -> TextStyle:
    # Printed as styled text only; the href is not kept.
    return style.merge(underline=True, color="blue")


_INLINE_STYLES: dict[str, Callable[[Tag, TextStyle], TextStyle]] = {
    "b": _bold,
    "strong": _bold,
    "i": _italic,
    "em": _italic,
    "u": _underline,
    "s": _strikethrough,
    "strike": _strikethrough,
    "del": _strikethrough,
    "span": _span,
    "a": _link,
}


def _walk_inline(node: Tag, style: TextStyle, out: list[Span]) -> None:
    for child in node.children:
        if isinstance(child, PreformattedString):
            continue
        if isinstance(child, NavigableString):
            text = _collapse(str(child))
            if text:
                out.append(Span(text, style))
            continue
        if not isinstance(child, Tag):
            continue
        compose = _INLINE_STYLES.get(child.name.lower())
        child_style = compose(child, style) if compose else style
        if child.contents:
            _walk_inline(child, child_style, out)
            continue
        text = _collapse(child.get_text())
        if text.strip():
            out.append(Span(text, child_style))


def _normalize(spans: list[Span]) -> tuple[Span, ...]:
    merged: list[Span] = []
    for span in spans:
        if merged and merged[-1].style == span.style:
            merged[-1] = Span(merged[-1].text + span.text, span.style)
        else:
            merged.append(span)
    if merged:
        merged[0] = Span(merged[0].text.lstrip(), merged[0].style)
        merged[-1] = Span(merged[-1].text.rstrip(), merged[-1].style)
    return tuple(s for s in merged if s.text)
