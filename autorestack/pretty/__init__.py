"""Pretty formatting utilities for CLI output."""

import json
import shutil
import sys
from typing import IO, List, Optional

from ..restack.models import RunReport

def get_term_width() -> int:
    """Get terminal width, default to 80 if can't detect."""
    try:
        return shutil.get_terminal_size().columns
    except Exception:
        return 80


def header(text: str, width: Optional[int] = None) -> str:
    """Draw text in a box."""
    if width is None:
        width = min(get_term_width(), 80)
    width = max(width, len(text) + 4)
    h_line = "─" * (width - 2)
    return "\n".join([
        f"┌{h_line}┐",
        f"│ {text}{' ' * (width - len(text) - 3)}│",
        f"└{h_line}┘",
    ])


def pretty_json(data: object, prefix: str = "") -> str:
    """Format JSON data with optional prefix."""
    raw = json.dumps(data, indent=2)
    if prefix:
        lines = raw.split("\n")
        return "\n".join(f"{prefix}{line}" for line in lines)
    return raw


def format_report(report: RunReport) -> str:
    """Human-readable summary of a run."""
    lines: List[str] = []
    for branch in report.updated:
        lines.append(f"  ✅ {branch}: updated")
    for branch in report.skipped:
        lines.append(f"  ✓ {branch}: already up-to-date")
    for conflict in report.conflicted:
        lines.append(f"  ❌ {conflict.branch}: conflicts merging {', '.join(conflict.sources)}")
    if not lines:
        lines.append("  No pull requests were based on the merged branch")
    if report.retargeted:
        lines.append(f"  Retargeted: {', '.join(report.retargeted)}")
    if report.deleted:
        lines.append(f"  Deleted: {report.deleted}")
    return "\n".join(lines)


def print_json(data: object, prefix: str = "", file: Optional[IO[str]] = None) -> None:
    """Print JSON data to file (default stdout)."""
    if file is None:
        file = sys.stdout
    print(pretty_json(data, prefix), file=file)


def print_header(text: str, file: Optional[IO[str]] = None) -> None:
    """Print a header to file (default stdout)."""
    if file is None:
        file = sys.stdout
    print(header(text), file=file)
