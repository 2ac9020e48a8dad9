"""Which elements count as code samples.

Selection is by tag, never by class name. A selector sees the tag being opened
and the tags of its open ancestors (outermost first).
"""

from __future__ import annotations

from collections.abc import Sequence
from typing import Protocol


class CodeSampleSelector(Protocol):
    name: str

    def matches(self, tag: str, ancestors: Sequence[str]) -> bool: ...


class _AllCode:
    """Every <code> element, however deeply nested."""

    name = "code"

    def matches(self, tag: str, ancestors: Sequence[str]) -> bool:
        return tag == "code"


class _PreCode:
    """<code> elements inside a <pre> block; inline code is left alone."""

    name = "pre"

    def matches(self, tag: str, ancestors: Sequence[str]) -> bool:
        return tag == "code" and "pre" in ancestors


ALL_CODE: CodeSampleSelector = _AllCode()
PRE_CODE: CodeSampleSelector = _PreCode()

SELECTORS: dict[str, CodeSampleSelector] = {s.name: s for s in (ALL_CODE, PRE_CODE)}


def selector_for(name: str) -> CodeSampleSelector:
    """Resolve a selector by name ("code" or "pre")."""
    try:
        return SELECTORS[name.strip().lower()]
    except KeyError:
        known = ", ".join(sorted(SELECTORS))
        raise ValueError(f"Unknown selector {name!r} (expected one of: {known})") from None
