"""Line breaking and pagination of the block tree into positioned pages.

Coordinates are PDF points with the origin in the bottom-left corner, so the
cursor moves downwards by decreasing ``y``.
"""

import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field, replace

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase.pdfmetrics import stringWidth

from instruks.application.dto.export_dto import PrintableDocument
from instruks.infrastructure.rendering.blocks import (
    Block,
    ListBlock,
    QuoteBlock,
    Spacer,
    Span,
    TextBlock,
    TextLine,
)
from instruks.infrastructure.rendering.styles import TextStyle

QUOTE_BORDER_WIDTH = 2.0
QUOTE_BORDER_COLOR = "lightgrey"
QUOTE_TEXT_COLOR = "darkgrey"

_TOKENS = re.compile(r"\s+|\S+")


@dataclass(frozen=True)
class PageLayout:
    """Page geometry and base typography, in points."""

    width: float = A4[0]
    height: float = A4[1]
    margin: float = 40.0
    font_size: float = 11.0
    title_font_size: float = 18.0
    header_gap: float = 12.0
    footer_height: float = 24.0
    logo_max_width: float = 120.0
    logo_max_height: float = 40.0

    @property
    def content_width(self) -> float:
        return self.width - 2 * self.margin


@dataclass(frozen=True)
class BlockFormat:
    """Block-level typography applied on top of each span's inline style."""

    font_size: float = 11.0
    bold: bool = False
    italic: bool = False
    color: str | None = None
    line_height: float = 1.2
    padding_top: float = 0.0
    padding_bottom: float = 0.0
    indent: float = 0.0


BLOCK_FORMATS: dict[str, BlockFormat] = {
    "p": BlockFormat(line_height=1.3, padding_bottom=6),
    "h1": BlockFormat(font_size=18, bold=True, padding_bottom=6),
    "h2": BlockFormat(font_size=16, bold=True, padding_bottom=6),
    "h3": BlockFormat(font_size=14, bold=True, padding_bottom=6),
}
TEXT_FORMAT = BlockFormat()
QUOTE_FORMAT = BlockFormat(
    italic=True, color=QUOTE_TEXT_COLOR, padding_top=4, padding_bottom=4, indent=10
)
LIST_FORMAT = BlockFormat(padding_bottom=6)


@dataclass(frozen=True)
class Fragment:
    """Text drawn with a single font, starting at ``x``."""

    x: float
    text: str
    font_name: str
    font_size: float
    width: float
    color: str | None = None
    underline: bool = False
    strikethrough: bool = False


@dataclass
class Line:
    """Fragments sharing one baseline ``y``."""

    y: float
    fragments: list[Fragment]

    @property
    def text(self) -> str:
        return "".join(f.text for f in self.fragments)


@dataclass(frozen=True)
class Rule:
    """Vertical border drawn at ``x`` between two heights."""

    x: float
    y_top: float
    y_bottom: float
    width: float = QUOTE_BORDER_WIDTH
    color: str = QUOTE_BORDER_COLOR


@dataclass(frozen=True)
class ImagePlacement:
    x: float
    y: float
    width: float
    height: float


@dataclass
class Page:
    number: int
    lines: list[Line] = field(default_factory=list)
    rules: list[Rule] = field(default_factory=list)
    footer: Line | None = None


@dataclass
class LaidOutDocument:
    """Header shared by every page plus the paginated body."""

    header: list[Line]
    logo: ImagePlacement | None
    pages: list[Page]

    @property
    def page_count(self) -> int:
        return len(self.pages)


def font_name(bold: bool, italic: bool) -> str:
    """Standard Helvetica face for the given weight and slant."""
    if bold and italic:
        return "Helvetica-BoldOblique"
    if bold:
        return "Helvetica-Bold"
    if italic:
        return "Helvetica-Oblique"
    return "Helvetica"


@dataclass(frozen=True)
class _Run:
    font_name: str
    font_size: float
    color: str | None = None
    underline: bool = False
    strikethrough: bool = False

    def width(self, text: str) -> float:
        return stringWidth(text, self.font_name, self.font_size)


def _resolve(style: TextStyle, fmt: BlockFormat) -> _Run:
    return _Run(
        font_name=font_name(style.bold or fmt.bold, style.italic or fmt.italic),
        font_size=fmt.font_size,
        color=style.color or fmt.color,
        underline=style.underline,
        strikethrough=style.strikethrough,
    )


class _LineBuilder:
    """Greedy word wrapper. Produces lines of fragments positioned from x=0."""

    def __init__(self, max_width: float) -> None:
        self._max_width = max_width
        self._lines: list[list[Fragment]] = []
        self._current: list[Fragment] = []
        self._width = 0.0
        self._pending_space: _Run | None = None

    def add_space(self, run: _Run) -> None:
        if self._current and self._pending_space is None:
            self._pending_space = run

    def add_word(self, word: str, run: _Run) -> None:
        width = run.width(word)
        space = self._pending_space
        space_width = space.width(" ") if space is not None else 0.0
        if self._current and self._width + space_width + width > self._max_width:
            self.break_line()
        elif space is not None:
            self._append(" ", space, space_width)
        self._pending_space = None
        if self._width + width > self._max_width:
            self._add_long_word(word, run)
        else:
            self._append(word, run, width)

    def break_line(self) -> None:
        self._lines.append(self._current)
        self._current = []
        self._width = 0.0
        self._pending_space = None

    def finish(self) -> list[list[Fragment]]:
        if self._current:
            self.break_line()
        return self._lines

    def _add_long_word(self, word: str, run: _Run) -> None:
        chunk = ""
        for ch in word:
            candidate = chunk + ch
            if chunk and self._width + run.width(candidate) > self._max_width:
                self._append(chunk, run, run.width(chunk))
                self.break_line()
                chunk = ch
            else:
                chunk = candidate
        if chunk:
            self._append(chunk, run, run.width(chunk))

    def _append(self, text: str, run: _Run, width: float) -> None:
        last = self._current[-1] if self._current else None
        if last is not None and _run_of(last) == run:
            self._current[-1] = replace(last, text=last.text + text, width=last.width + width)
        else:
            self._current.append(
                Fragment(
                    x=self._width,
                    text=text,
                    font_name=run.font_name,
                    font_size=run.font_size,
                    width=width,
                    color=run.color,
                    underline=run.underline,
                    strikethrough=run.strikethrough,
                )
            )
        self._width += width


def _run_of(fragment: Fragment) -> _Run:
    return _Run(
        font_name=fragment.font_name,
        font_size=fragment.font_size,
        color=fragment.color,
        underline=fragment.underline,
        strikethrough=fragment.strikethrough,
    )


def wrap_runs(runs: Iterable[tuple[str, _Run]], max_width: float) -> list[list[Fragment]]:
    """Word-wrap styled text to max_width. Whitespace runs collapse to one space."""
    builder = _LineBuilder(max_width)
    for text, run in runs:
        for token in _TOKENS.findall(text):
            if token.isspace():
                builder.add_space(run)
            else:
                builder.add_word(token, run)
    return builder.finish()


def _wrap_spans(spans: Iterable[Span], fmt: BlockFormat, max_width: float) -> list[list[Fragment]]:
    lines = wrap_runs(((s.text, _resolve(s.style, fmt)) for s in spans), max_width)
    # An empty paragraph still takes up one line.
    return lines or [[]]


def _shift(fragments: list[Fragment], dx: float) -> list[Fragment]:
    return [replace(f, x=f.x + dx) for f in fragments]


def _baseline(top: float, line_height: float, font_size: float) -> float:
    return top - (line_height - font_size) / 2 - font_size * 0.8


class _Paginator:
    """Moves a cursor down the body area, opening pages as needed."""

    def __init__(self, top: float, bottom: float) -> None:
        self._top = top
        self._bottom = bottom
        self.pages = [Page(number=1)]
        self.y = top

    @property
    def page(self) -> Page:
        return self.pages[-1]

    def skip(self, height: float) -> None:
        self.y = max(self.y - height, self._bottom)

    def place(self, fragments: list[Fragment], fmt: BlockFormat) -> tuple[Page, float, float]:
        """Place one line; returns the page it landed on and its top and bottom."""
        height = fmt.font_size * fmt.line_height
        if self.y - height < self._bottom and self.y < self._top:
            self.pages.append(Page(number=len(self.pages) + 1))
            self.y = self._top
        top = self.y
        self.page.lines.append(
            Line(y=_baseline(top, height, fmt.font_size), fragments=fragments)
        )
        self.y -= height
        return self.page, top, self.y


class LayoutEngine:
    """Lay out a document header and block tree onto fixed-size pages."""

    def __init__(self, page_layout: PageLayout | None = None) -> None:
        self._page = page_layout or PageLayout()
        self._block_layouts: dict[type, Callable[[_Paginator, Block, float], None]] = {
            TextLine: self._layout_text_line,
            Spacer: self._layout_spacer,
            TextBlock: self._layout_text_block,
            QuoteBlock: self._layout_quote,
            ListBlock: self._layout_list,
        }

    @property
    def page_layout(self) -> PageLayout:
        return self._page

    def layout(
        self,
        document: PrintableDocument,
        blocks: Iterable[Block],
        logo_size: tuple[float, float] | None = None,
    ) -> LaidOutDocument:
        """Position header, body and footers. logo_size is the image's native size."""
        page = self._page
        logo = self._place_logo(logo_size)
        header, header_bottom = self._layout_header(document, logo)

        paginator = _Paginator(
            top=header_bottom - page.header_gap,
            bottom=page.margin + page.footer_height,
        )
        x0 = page.margin
        for block in blocks:
            self._block_layouts[type(block)](paginator, block, x0)

        pages = paginator.pages
        for p in pages:
            p.footer = self._footer(p.number, len(pages))
        return LaidOutDocument(header=header, logo=logo, pages=pages)

    def _place_logo(self, logo_size: tuple[float, float] | None) -> ImagePlacement | None:
        if not logo_size:
            return None
        native_width, native_height = logo_size
        if native_width <= 0 or native_height <= 0:
            return None
        page = self._page
        scale = min(page.logo_max_width / native_width, page.logo_max_height / native_height, 1.0)
        width, height = native_width * scale, native_height * scale
        return ImagePlacement(
            x=page.width - page.margin - width,
            y=page.height - page.margin - height,
            width=width,
            height=height,
        )

    def _layout_header(
        self, document: PrintableDocument, logo: ImagePlacement | None
    ) -> tuple[list[Line], float]:
        page = self._page
        max_width = page.content_width - (logo.width + 10 if logo else 0)
        title_format = BlockFormat(font_size=page.title_font_size, bold=True)
        meta_format = BlockFormat(font_size=page.font_size)
        description_format = BlockFormat(font_size=page.font_size, italic=True)

        sections: list[tuple[str, BlockFormat]] = [(document.title, title_format)]
        if document.category_name:
            sections.append((f"Category: {document.category_name}", meta_format))
        if document.description and document.description.strip():
            sections.append((document.description, description_format))

        lines: list[Line] = []
        y = page.height - page.margin
        for text, fmt in sections:
            height = fmt.font_size * fmt.line_height
            for fragments in _wrap_spans([Span(text)], fmt, max_width):
                baseline = _baseline(y, height, fmt.font_size)
                lines.append(Line(y=baseline, fragments=_shift(fragments, page.margin)))
                y -= height
        if logo is not None:
            y = min(y, logo.y)
        return lines, y

    def _footer(self, number: int, total: int) -> Line:
        page = self._page
        run = _Run(font_name=font_name(False, False), font_size=page.font_size)
        text = f"Page {number} / {total}"
        width = run.width(text)
        fragment = Fragment(
            x=page.width - page.margin - width,
            text=text,
            font_name=run.font_name,
            font_size=run.font_size,
            width=width,
        )
        return Line(y=page.margin, fragments=[fragment])

    def _layout_text_line(self, paginator: _Paginator, block: TextLine, x0: float) -> None:
        self._layout_spans(paginator, [Span(block.text)], TEXT_FORMAT, x0)

    def _layout_spacer(self, paginator: _Paginator, block: Spacer, x0: float) -> None:
        paginator.skip(block.height)

    def _layout_text_block(self, paginator: _Paginator, block: TextBlock, x0: float) -> None:
        fmt = BLOCK_FORMATS.get(block.kind, TEXT_FORMAT)
        self._layout_spans(paginator, block.spans, fmt, x0)

    def _layout_quote(self, paginator: _Paginator, block: QuoteBlock, x0: float) -> None:
        fmt = QUOTE_FORMAT
        paginator.skip(fmt.padding_top)
        extents: dict[int, tuple[Page, float, float]] = {}
        width = self._page.content_width - fmt.indent
        for fragments in _wrap_spans(block.spans, fmt, width):
            page, top, bottom = paginator.place(_shift(fragments, x0 + fmt.indent), fmt)
            first = extents.get(page.number)
            extents[page.number] = (page, first[1] if first else top, bottom)
        for page, top, bottom in extents.values():
            page.rules.append(Rule(x=x0 + QUOTE_BORDER_WIDTH / 2, y_top=top, y_bottom=bottom))
        paginator.skip(fmt.padding_bottom)

    def _layout_list(self, paginator: _Paginator, block: ListBlock, x0: float) -> None:
        fmt = LIST_FORMAT
        for row in block.rows:
            marker = _resolve(TextStyle(), fmt)
            marker_width = marker.width(row.marker)
            width = self._page.content_width - marker_width
            for i, fragments in enumerate(_wrap_spans(row.spans, fmt, width)):
                shifted = _shift(fragments, x0 + marker_width)
                if i == 0:
                    shifted.insert(
                        0,
                        Fragment(
                            x=x0,
                            text=row.marker,
                            font_name=marker.font_name,
                            font_size=marker.font_size,
                            width=marker_width,
                        ),
                    )
                paginator.place(shifted, fmt)
        paginator.skip(fmt.padding_bottom)

    def _layout_spans(
        self, paginator: _Paginator, spans: Iterable[Span], fmt: BlockFormat, x0: float
    ) -> None:
        paginator.skip(fmt.padding_top)
        width = self._page.content_width - fmt.indent
        for fragments in _wrap_spans(spans, fmt, width):
            paginator.place(_shift(fragments, x0 + fmt.indent), fmt)
        paginator.skip(fmt.padding_bottom)
