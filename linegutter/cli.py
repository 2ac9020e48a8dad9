"""CLI entry point for LineGutter.

This CLI intentionally avoids third-party CLI frameworks so it can run as a
plain post-build step next to the site generator.
"""

from __future__ import annotations

import argparse
import sys
from pathlib import Path
from typing import Any

from . import __version__


def app(argv: list[str] | None = None) -> None:
    """Console script entrypoint."""
    raise SystemExit(main(argv))


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(
        prog="linegutter",
        description="Add line-number gutters to code samples in rendered HTML.",
    )
    parser.add_argument(
        "--version",
        "-v",
        action="version",
        version=f"LineGutter {__version__}",
    )

    sub = parser.add_subparsers(dest="cmd", required=True)

    p_annotate = sub.add_parser("annotate", help="Annotate HTML files (or stdin to stdout)")
    p_annotate.add_argument("files", nargs="*", type=Path, help="HTML files (default: read stdin)")
    p_annotate.add_argument("--out", "-o", type=Path, help="Write results into this directory")
    _add_annotate_options(p_annotate)

    p_site = sub.add_parser("site", help="Annotate every page of a built site")
    p_site.add_argument("site_dir", type=Path, help="Rendered site directory (e.g. ./public)")
    p_site.add_argument("--out", "-o", type=Path, help="Mirror the annotated site here instead of in place")
    p_site.add_argument("--report", action="store_true", help="Write linegutter.json into the output")
    _add_annotate_options(p_site)

    p_post = sub.add_parser("new-post", help="Scaffold a new dated post with the site generator")
    p_post.add_argument("title", nargs="+", help="Title fragment used for the file name")
    p_post.add_argument("--section", "-s", default=None, help="Content section (default: posts)")
    p_post.add_argument("--site-dir", type=Path, default=None, help="Site root to run the generator in")

    args = parser.parse_args(argv)

    if args.cmd == "annotate":
        return _cmd_annotate(args)
    if args.cmd == "site":
        return _cmd_site(args)
    if args.cmd == "new-post":
        return _cmd_new_post(args)

    parser.print_help()
    return 2


def _add_annotate_options(p: argparse.ArgumentParser) -> None:
    p.add_argument(
        "--all-code",
        action="store_true",
        help="Also number inline <code> (default: only <code> inside <pre>)",
    )
    p.add_argument(
        "--skip-annotated",
        action="store_true",
        help="Leave code samples that already have a gutter alone",
    )
    p.add_argument("--with-css", action="store_true", help="Inject the gutter stylesheet")


def _selector_name(args: Any) -> str:
    return "code" if args.all_code else "pre"


def _print_warnings(warnings: list[str]) -> None:
    if not warnings:
        return
    print(f"\nWarnings ({len(warnings)}):")
    for w in warnings[:10]:
        print(f"  - {w}")
    if len(warnings) > 10:
        print(f"  ... and {len(warnings) - 10} more")


def _cmd_annotate(args: Any) -> int:
    from .annotate.document import annotate_html
    from .annotate.select import selector_for
    from .site.build import annotate_file
    from .site.styles import inject_css

    if not args.files:
        if args.out:
            print("Error: --out needs at least one input file", file=sys.stderr)
            return 2
        html = sys.stdin.read()
        result = annotate_html(
            html,
            selector=selector_for(_selector_name(args)),
            skip_annotated=bool(args.skip_annotated),
        )
        out = result.html
        if args.with_css and result.blocks:
            out = inject_css(out)
        sys.stdout.write(out)
        for w in result.warnings:
            print(f"Warning: {w}", file=sys.stderr)
        return 0

    if args.out:
        seen: dict[str, Path] = {}
        for src in args.files:
            if src.name in seen:
                print(
                    f"Error: {seen[src.name]} and {src} would both be written to {args.out / src.name}",
                    file=sys.stderr,
                )
                return 2
            seen[src.name] = src

    warnings: list[str] = []
    blocks = 0
    for src in args.files:
        dst = args.out / src.name if args.out else None
        try:
            page = annotate_file(
                src,
                dst,
                selector=_selector_name(args),
                skip_annotated=bool(args.skip_annotated),
                with_css=bool(args.with_css),
            )
        except Exception as e:
            print(f"Error: {src}: {e}", file=sys.stderr)
            return 1
        blocks += page.blocks
        warnings.extend(f"{src}: {w}" for w in page.warnings)
        print(f"  {src}: {page.blocks} code samples, {page.lines_total:,} lines")

    print(f"✓ Annotated {len(args.files)} file(s), {blocks} code samples")
    _print_warnings(warnings)
    return 0


def _cmd_site(args: Any) -> int:
    from .site.build import annotate_site

    try:
        report = annotate_site(
            args.site_dir,
            args.out,
            selector=_selector_name(args),
            skip_annotated=bool(args.skip_annotated),
            with_css=bool(args.with_css),
            write_json=bool(args.report),
        )
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print("✓ Site annotated")
    print(f"  Output: {report.out_dir}")
    print(f"  Pages: {len(report.pages)}")
    print(f"  Code samples: {report.blocks_total}")
    print(f"  Lines: {report.lines_total:,}")
    skipped = sum(p.skipped for p in report.pages)
    if skipped:
        print(f"  Skipped (already annotated): {skipped}")
    _print_warnings(report.warnings)
    return 0


def _cmd_new_post(args: Any) -> int:
    from .config import POST_SECTION
    from .posts import PostError, new_post

    title = " ".join(args.title)
    try:
        result = new_post(
            title,
            section=args.section if args.section is not None else POST_SECTION,
            site_dir=args.site_dir,
        )
    except (ValueError, PostError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print(f"✓ Post created: {result.path}")
    if result.output:
        print(f"  {result.output}")
    return 0


if __name__ == "__main__":
    app()
