"""Block tree produced from HTML and consumed by the layout engine."""

from dataclasses import dataclass

from instruks.infrastructure.rendering.styles import TextStyle


@dataclass(frozen=True)
class Span:
    """Run of text with one inline style."""

    text: str
    style: TextStyle = TextStyle()


@dataclass(frozen=True)
class TextLine:
    """Loose text found directly at block level."""

    text: str


@dataclass(frozen=True)
class Spacer:
    """Fixed vertical gap (points)."""

    height: float


@dataclass(frozen=True)
class TextBlock:
    """Paragraph or heading. ``kind`` is the tag name: p, h1, h2 or h3."""

    kind: str
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class QuoteBlock:
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class ListRow:
    marker: str
    spans: tuple[Span, ...]


@dataclass(frozen=True)
class ListBlock:
    ordered: bool
    rows: tuple[ListRow, ...]


Block = TextLine | Spacer | TextBlock | QuoteBlock | ListBlock
