"""Post-build pass: annotate every rendered page of a static site."""

from __future__ import annotations

import shutil
from pathlib import Path

from ..annotate.document import annotate_html
from ..annotate.select import selector_for
from ..config import GUTTER_CLASS, HTML_SUFFIXES, REPORT_NAME
from .report import PageInfo, SiteReport, compute_sha256, write_report
from .styles import gutter_css, inject_css


def annotate_file(
    src: Path,
    dst: Path | None = None,
    selector: str = "code",
    skip_annotated: bool = False,
    with_css: bool = False,
    gutter_class: str = GUTTER_CLASS,
    rel_path: str | None = None,
) -> PageInfo:
    """Annotate one HTML file.

    Args:
        src: Page to read
        dst: Where to write the result (defaults to overwriting src)
        selector: "code" for every <code> element, "pre" for <pre><code> only
        skip_annotated: Skip containers that already carry a gutter
        with_css: Inject the gutter stylesheet into annotated pages
        gutter_class: Class attribute of the gutter container
        rel_path: Path recorded in the returned PageInfo (defaults to src)

    Returns:
        PageInfo describing what was written
    """
    html = src.read_text(encoding="utf-8")
    result = annotate_html(
        html,
        selector=selector_for(selector),
        skip_annotated=skip_annotated,
        gutter_class=gutter_class,
    )

    out = result.html
    if with_css and result.blocks:
        out = inject_css(out, gutter_css(gutter_class))

    target = dst or src
    target.parent.mkdir(parents=True, exist_ok=True)
    # Untouched pages are not rewritten in place.
    if out != html or target != src:
        target.write_text(out, encoding="utf-8")

    return PageInfo(
        path=rel_path or str(src),
        blocks=result.blocks,
        lines_total=result.lines_total,
        skipped=result.skipped,
        sha256=compute_sha256(out),
        warnings=result.warnings,
    )


def annotate_site(
    site_dir: Path,
    out_dir: Path | None = None,
    selector: str = "code",
    skip_annotated: bool = False,
    with_css: bool = False,
    write_json: bool = False,
    gutter_class: str = GUTTER_CLASS,
) -> SiteReport:
    """Annotate every HTML page under site_dir.

    Pages are processed in sorted path order. With `out_dir` the whole site is
    mirrored there (non-HTML files copied as-is); otherwise pages are
    rewritten in place.
    """
    site_dir = site_dir.resolve()
    if not site_dir.is_dir():
        raise FileNotFoundError(f"Site directory not found: {site_dir}")

    # Validate before touching any file.
    selector_for(selector)

    target_root = out_dir.resolve() if out_dir is not None else site_dir
    if target_root != site_dir:
        if target_root.is_relative_to(site_dir):
            raise ValueError(f"Output directory must not be inside the site: {target_root}")
        _copy_site(site_dir, target_root)

    pages: list[PageInfo] = []
    warnings: list[str] = []
    for src in _iter_pages(site_dir):
        rel = src.relative_to(site_dir).as_posix()
        try:
            page = annotate_file(
                src,
                target_root / rel,
                selector=selector,
                skip_annotated=skip_annotated,
                with_css=with_css,
                gutter_class=gutter_class,
                rel_path=rel,
            )
        except UnicodeDecodeError as e:
            warnings.append(f"{rel}: not valid UTF-8 ({e.reason}); skipped")
            if target_root != site_dir:
                # Mirrors skip HTML in _copy_site; carry the page over unchanged.
                dst = target_root / rel
                dst.parent.mkdir(parents=True, exist_ok=True)
                shutil.copy2(src, dst)
            continue
        pages.append(page)
        warnings.extend(f"{rel}: {w}" for w in page.warnings)

    report = SiteReport(
        site_dir=str(site_dir),
        out_dir=str(target_root),
        selector=selector,
        pages=pages,
        warnings=warnings,
    )
    if write_json:
        write_report(report, target_root)
    return report


def _iter_pages(site_dir: Path) -> list[Path]:
    return sorted(
        p
        for p in site_dir.rglob("*")
        if p.is_file() and p.suffix.lower() in HTML_SUFFIXES
    )


def _copy_site(src: Path, dst: Path) -> None:
    def _ignore(path: str, names: list[str]) -> set[str]:
        # Pages are written by the annotation pass; a stale report is dropped.
        ignored = {n for n in names if Path(n).suffix.lower() in HTML_SUFFIXES}
        if Path(path) == src and REPORT_NAME in names:
            ignored.add(REPORT_NAME)
        return ignored

    shutil.copytree(src, dst, ignore=_ignore, dirs_exist_ok=True)
