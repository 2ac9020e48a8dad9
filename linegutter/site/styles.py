"""Stylesheet for the line-number gutter and its injection into pages."""

from __future__ import annotations

import re

from ..config import GUTTER_CLASS

_CSS_TEMPLATE = r"""
pre { display: flex; align-items: flex-start; }
pre > code { flex: 1; overflow-x: auto; }

.{cls} {
  display: flex;
  flex-direction: column;
  flex: none;
  margin-right: 0.75rem;
  padding-right: 0.5rem;
  border-right: 1px solid #e3e3e3;
  color: #6a6a6a;
  text-align: right;
  user-select: none;
  -webkit-user-select: none;
}

.{cls} > span { display: block; }
"""

_STYLE_MARKER = "data-linegutter"


def gutter_css(gutter_class: str = GUTTER_CLASS) -> str:
    return _CSS_TEMPLATE.replace("{cls}", gutter_class)


GUTTER_CSS = gutter_css()


def inject_css(html: str, css: str = GUTTER_CSS) -> str:
    """Insert the gutter stylesheet into a page.

    The block goes right before `</head>`, or at the very start of the
    document when there is no head. Pages that already carry a gutter
    stylesheet are returned unchanged.
    """
    if re.search(rf"<style\b[^>]*\b{_STYLE_MARKER}\b", html, re.IGNORECASE):
        return html

    block = f"<style {_STYLE_MARKER}>{css}</style>\n"

    m = re.search(r"</head\s*>", html, re.IGNORECASE)
    if m:
        return html[: m.start()] + block + html[m.start() :]
    return block + html
