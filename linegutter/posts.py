"""Scaffold a new dated Markdown post through the site generator.

The generator owns the front-matter (title, date, draft flag); this module
only picks the content path and runs `<generator> new <path>`.
"""

from __future__ import annotations

import re
import shutil
import subprocess
from dataclasses import dataclass
from datetime import date
from pathlib import Path

from .config import HUGO_BIN, POST_SECTION


class PostError(Exception):
    """Raised when the site generator cannot create the post."""


@dataclass(frozen=True)
class PostResult:
    path: str
    command: list[str]
    output: str


def slugify(text: str) -> str:
    """Lowercase text with every run of non-alphanumerics collapsed to '-'."""
    text = text.lower()
    text = re.sub(r"[^a-z0-9]+", "-", text)
    return text.strip("-")


def post_path(title: str, on: date | None = None, section: str = POST_SECTION) -> str:
    """Content path of a new post, e.g. `posts/2024-01-15-my-new-post.md`."""
    slug = slugify(title)
    if not slug:
        raise ValueError(f"Title {title!r} has no usable characters for a file name")
    day = (on or date.today()).isoformat()
    section = section.strip("/")
    return f"{section}/{day}-{slug}.md" if section else f"{day}-{slug}.md"


def new_post(
    title: str,
    on: date | None = None,
    section: str = POST_SECTION,
    site_dir: Path | None = None,
    generator: str = HUGO_BIN,
) -> PostResult:
    """Create a new post with the site generator.

    Args:
        title: Free-form title fragment, slugified into the file name
        on: Post date (defaults to today)
        section: Content section the post goes into
        site_dir: Site root the generator runs in (defaults to the cwd)
        generator: Generator executable

    Returns:
        PostResult with the content path and the generator's output

    Raises:
        ValueError: If the title slugifies to nothing
        PostError: If the generator is missing or exits non-zero
    """
    path = post_path(title, on=on, section=section)

    exe = shutil.which(generator)
    if exe is None:
        raise PostError(f"Site generator not found: {generator}")

    cmd = [exe, "new", path]
    try:
        proc = subprocess.run(
            cmd,
            cwd=str(site_dir) if site_dir else None,
            capture_output=True,
            text=True,
        )
    except OSError as e:
        raise PostError(f"Could not run {generator}: {e}") from e

    if proc.returncode != 0:
        detail = (proc.stderr or proc.stdout).strip()
        raise PostError(f"{generator} new {path} failed (exit {proc.returncode}): {detail}")

    return PostResult(path=path, command=cmd, output=proc.stdout.strip())
