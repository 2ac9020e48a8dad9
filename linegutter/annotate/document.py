"""Apply line-number gutters to code samples in an HTML document.

The document is never rebuilt from a tree. A streaming `HTMLParser` pass
records where each code sample and its parent container sit in the source
markup, and the gutters are spliced in at those offsets. Everything outside
the edited spans stays byte-for-byte as it was, so a page without code
samples comes back unchanged.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from html.parser import HTMLParser

from pydantic import BaseModel, Field

from ..config import GUTTER_CLASS
from .lines import number_lines, render_gutter
from .select import ALL_CODE, CodeSampleSelector


# HTML void elements (never pushed on the open-element stack)
VOID_TAGS = {
    "area",
    "base",
    "br",
    "col",
    "embed",
    "hr",
    "img",
    "input",
    "link",
    "meta",
    "param",
    "source",
    "track",
    "wbr",
}


@dataclass(frozen=True)
class CodeBlock:
    """A code sample located in the source markup.

    Offsets index into the document string. `container_start` is the offset
    right after the parent element's start tag, or None when the sample sits
    at the top level of a fragment.
    """

    start: int
    inner_start: int
    inner_end: int
    container_start: int | None
    container_tag: str | None
    markup: str
    text: str
    annotated: bool


class AnnotateResult(BaseModel):
    """Result of annotating one document."""

    html: str
    blocks: int
    skipped: int = 0
    line_counts: list[int] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)

    @property
    def lines_total(self) -> int:
        return sum(self.line_counts)


def find_code_samples(
    html: str,
    selector: CodeSampleSelector = ALL_CODE,
    gutter_class: str = GUTTER_CLASS,
) -> list[CodeBlock]:
    """Snapshot every code sample in document order."""
    blocks, _ = _scan(html, selector, gutter_class)
    return blocks


def annotate_html(
    html: str,
    selector: CodeSampleSelector = ALL_CODE,
    skip_annotated: bool = False,
    gutter_class: str = GUTTER_CLASS,
) -> AnnotateResult:
    """Prepend a line-number gutter to the container of every code sample.

    Args:
        html: Document or fragment markup
        selector: Which elements are code samples
        skip_annotated: Leave containers that already start with a gutter alone.
            Off by default, so a second pass stacks a second gutter.
        gutter_class: Class attribute of the gutter container

    Returns:
        AnnotateResult with the new markup and per-sample line counts
    """
    blocks, warnings = _scan(html, selector, gutter_class)

    edits: list[_Edit] = []
    line_counts: list[int] = []
    skipped = 0

    for seq, block in enumerate(blocks):
        if skip_annotated and block.annotated:
            skipped += 1
            continue

        numbering = number_lines(block.text)
        line_counts.append(numbering.line_count)

        # Trim the sample's own markup.
        stripped = block.markup.strip()
        if not stripped:
            if block.markup:
                edits.append(_Edit(block.inner_start, block.inner_end, "", seq))
        else:
            lead = len(block.markup) - len(block.markup.lstrip())
            trail = len(block.markup) - len(block.markup.rstrip())
            if lead:
                edits.append(_Edit(block.inner_start, block.inner_start + lead, "", seq))
            if trail:
                edits.append(_Edit(block.inner_end - trail, block.inner_end, "", seq))

        at = block.container_start if block.container_start is not None else block.start
        edits.append(_Edit(at, at, render_gutter(numbering.labels, gutter_class), seq))

    return AnnotateResult(
        html=_apply_edits(html, edits),
        blocks=len(line_counts),
        skipped=skipped,
        line_counts=line_counts,
        warnings=warnings,
    )


@dataclass(frozen=True)
class _Edit:
    start: int
    end: int
    text: str
    seq: int


def _apply_edits(html: str, edits: list[_Edit]) -> str:
    if not edits:
        return html

    # Several samples can share one container. Each gutter is prepended in
    # turn, so the gutter of a later sample ends up in front.
    ordered = sorted(edits, key=lambda e: (e.start, -e.seq))

    out: list[str] = []
    pos = 0
    for edit in ordered:
        if edit.start > pos:
            out.append(html[pos : edit.start])
        out.append(edit.text)
        pos = max(pos, edit.end)
    out.append(html[pos:])
    return "".join(out)


_LABEL_SPAN = re.compile(r"<span>\d+</span>\s*")


def _gutter_patterns(gutter_class: str) -> tuple[re.Pattern[str], re.Pattern[str]]:
    cls = re.escape(gutter_class)
    opening = rf"<span\s+class\s*=\s*[\"']?{cls}[\"']?\s*>"
    leading = re.compile(rf"\s*{opening}", re.IGNORECASE)
    anchored = re.compile(opening, re.IGNORECASE)
    return leading, anchored


def _gutter_ends_at(html: str, end: int, opening: re.Pattern[str]) -> bool:
    """True when a complete gutter sits right before offset end.

    Steps back over the gutter's label spans only, so the cost is bounded by
    the gutter's own length.
    """
    j = end
    while j > 0 and html[j - 1].isspace():
        j -= 1
    if not html.endswith("</span>", 0, j):
        return False

    pos = j - len("</span>")
    while True:
        k = html.rfind("<span", 0, pos)
        if k == -1:
            return False
        if html.startswith("<span>", k):
            if _LABEL_SPAN.fullmatch(html, k, pos) is None:
                return False
            pos = k
            continue
        m = opening.match(html, k)
        return m is not None and not html[m.end() : pos].strip()


def _scan(
    html: str,
    selector: CodeSampleSelector,
    gutter_class: str,
) -> tuple[list[CodeBlock], list[str]]:
    parser = _CodeSampleParser(html, selector)
    try:
        parser.feed(html)
        parser.close()
    except Exception as e:
        # Best-effort: keep whatever samples were closed before the failure.
        parser.warnings.append(f"HTML parse error: {e}")

    if parser.open_sample is not None:
        parser.warnings.append(
            f"Unclosed <code> at offset {parser.open_sample.start}; left unannotated"
        )

    leading, opening = _gutter_patterns(gutter_class)
    blocks: list[CodeBlock] = []
    for s in parser.samples:
        if s.container_start is not None:
            annotated = leading.match(html, s.container_start) is not None
        else:
            annotated = _gutter_ends_at(html, s.start, opening)
        markup = html[s.inner_start : s.inner_end]
        blocks.append(
            CodeBlock(
                start=s.start,
                inner_start=s.inner_start,
                inner_end=s.inner_end,
                container_start=s.container_start,
                container_tag=s.container_tag,
                markup=markup,
                text=text_content(markup.strip()),
                annotated=annotated,
            )
        )

    return blocks, parser.warnings


def text_content(markup: str) -> str:
    """Concatenated text of a markup fragment, entities decoded, comments dropped."""
    parser = _TextContentParser()
    try:
        parser.feed(markup)
        parser.close()
    except Exception:
        # Best-effort: a fragment that breaks the parser still yields its text so far.
        pass
    return "".join(parser.out)


@dataclass
class _OpenSample:
    start: int
    inner_start: int
    depth: int
    container_start: int | None
    container_tag: str | None
    inner_end: int = -1


class _CodeSampleParser(HTMLParser):
    """Tracks open elements by offset and records matched code samples."""

    def __init__(self, html: str, selector: CodeSampleSelector) -> None:
        super().__init__(convert_charrefs=True)
        self.selector = selector
        self.samples: list[_OpenSample] = []
        self.warnings: list[str] = []
        self.open_sample: _OpenSample | None = None
        # (tag, offset right after its start tag)
        self._stack: list[tuple[str, int]] = []
        self._line_starts = [0]
        for i, ch in enumerate(html):
            if ch == "\n":
                self._line_starts.append(i + 1)

    def _offset(self) -> int:
        line, col = self.getpos()
        return self._line_starts[line - 1] + col

    def handle_starttag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        if tag in VOID_TAGS:
            return

        start = self._offset()
        inner_start = start + len(self.get_starttag_text() or "")

        if self.open_sample is None and self.selector.matches(tag, [t for t, _ in self._stack]):
            container_tag, container_start = self._stack[-1] if self._stack else (None, None)
            self.open_sample = _OpenSample(
                start=start,
                inner_start=inner_start,
                depth=len(self._stack),
                container_start=container_start,
                container_tag=container_tag,
            )

        self._stack.append((tag, inner_start))

    def handle_startendtag(self, tag: str, attrs: list[tuple[str, str | None]]) -> None:
        # `<code/>` has no content to number.
        return

    def handle_endtag(self, tag: str) -> None:
        if tag in VOID_TAGS:
            return

        idx = None
        for i in range(len(self._stack) - 1, -1, -1):
            if self._stack[i][0] == tag:
                idx = i
                break
        if idx is None:
            return

        sample = self.open_sample
        if sample is not None and idx <= sample.depth:
            if idx < sample.depth:
                self.warnings.append(
                    f"<code> at offset {sample.start} implicitly closed by </{tag}>"
                )
            sample.inner_end = self._offset()
            self.samples.append(sample)
            self.open_sample = None

        del self._stack[idx:]


class _TextContentParser(HTMLParser):
    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.out: list[str] = []

    def handle_data(self, data: str) -> None:
        if data:
            self.out.append(data)
