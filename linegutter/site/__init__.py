"""Site-wide annotation pass and report."""

from .build import annotate_file, annotate_site
from .report import PageInfo, SiteReport, write_report
from .styles import GUTTER_CSS, inject_css

__all__ = [
    "annotate_file",
    "annotate_site",
    "PageInfo",
    "SiteReport",
    "write_report",
    "GUTTER_CSS",
    "inject_css",
]
