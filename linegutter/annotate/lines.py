"""Line counting and gutter markup for code samples.

Nothing here touches a document: `number_lines` maps raw sample text to the
label sequence, and `render_gutter` turns labels into markup. The HTML adapter
in `document.py` applies the result to real pages.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass
from html import escape

from ..config import GUTTER_CLASS


@dataclass(frozen=True)
class LineNumbering:
    """Trimmed sample text paired with its line labels."""

    text: str
    labels: tuple[int, ...]

    @property
    def line_count(self) -> int:
        return len(self.labels)


def count_lines(text: str) -> int:
    """Number of newline-separated segments in text (never less than 1)."""
    return len(text.split("\n"))


def number_lines(raw: str) -> LineNumbering:
    """Trim a code sample and number its lines.

    Args:
        raw: Text content of the sample, as found in the document

    Returns:
        LineNumbering whose labels run 1..N, where N is the number of
        segments left after splitting the trimmed text on newlines.
        Empty text yields a single label.
    """
    text = raw.strip()
    return LineNumbering(text=text, labels=tuple(range(1, count_lines(text) + 1)))


def render_gutter(labels: Iterable[int], gutter_class: str = GUTTER_CLASS) -> str:
    """Render labels as a gutter container with one span per line."""
    spans = "".join(f"<span>{n}</span>" for n in labels)
    return f'<span class="{escape(gutter_class, quote=True)}">{spans}</span>'
