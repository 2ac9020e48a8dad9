"""Line-number gutters for code samples."""

from .document import AnnotateResult, CodeBlock, annotate_html, find_code_samples
from .lines import LineNumbering, number_lines, render_gutter
from .select import ALL_CODE, PRE_CODE, CodeSampleSelector, selector_for

__all__ = [
    "AnnotateResult",
    "CodeBlock",
    "annotate_html",
    "find_code_samples",
    "LineNumbering",
    "number_lines",
    "render_gutter",
    "ALL_CODE",
    "PRE_CODE",
    "CodeSampleSelector",
    "selector_for",
]
