"""Report model for a site annotation run."""

import hashlib
import json
from pathlib import Path

from pydantic import BaseModel, Field, computed_field

from .. import __version__
from ..config import REPORT_NAME, SCHEMA_VERSION


class PageInfo(BaseModel):
    """Per-page annotation summary."""

    path: str
    blocks: int
    lines_total: int
    skipped: int = 0
    sha256: str
    warnings: list[str] = Field(default_factory=list)


class SiteReport(BaseModel):
    """Summary of annotating every page under a site directory."""

    schema_version: int = SCHEMA_VERSION
    tool_version: str = __version__
    site_dir: str
    out_dir: str
    selector: str
    pages: list[PageInfo]
    warnings: list[str] = Field(default_factory=list)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def blocks_total(self) -> int:
        return sum(p.blocks for p in self.pages)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def lines_total(self) -> int:
        return sum(p.lines_total for p in self.pages)


def compute_sha256(content: bytes | str) -> str:
    """Compute SHA256 hash of content.

    Args:
        content: Bytes or string to hash

    Returns:
        Hex-encoded SHA256 hash
    """
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def write_report(report: SiteReport, output_dir: Path) -> Path:
    """Write the report as stable JSON into output_dir."""
    report_path = output_dir / REPORT_NAME
    payload = report.model_dump(mode="json")
    report_path.write_text(
        json.dumps(payload, indent=2, sort_keys=True, ensure_ascii=False) + "\n",
        encoding="utf-8",
    )
    return report_path
