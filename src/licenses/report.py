"""Text and JSON license reports."""

from __future__ import annotations

import json
import logging
import sys
from typing import Dict, List, Optional, Sequence, TextIO

from prettytable import HRuleStyle, PrettyTable, VRuleStyle

from constants import Constants, OutputFormats
from errors import UnsupportedFormatError
from package.models import Package
from package.version_formatter import format_version

from .closure import Bucket, sort_bucket

logger = logging.getLogger(__name__)

TABLE_HEADERS = ("Name", "Version", "License")


def format_licenses(licenses: Sequence[str]) -> str:
    """Join licenses for display, ``none`` when there are none."""
    return ", ".join(licenses) or Constants.NO_LICENSE


def render_table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> List[str]:
    """Lay out a borderless table with left-aligned, padded columns.

    The header line is kept even when there are no rows.
    """
    table = PrettyTable(
        list(headers),
        align="l",
        vrules=VRuleStyle.NONE,
        hrules=HRuleStyle.NONE,
        padding_width=0,
        right_padding_width=1,
    )
    for row in rows:
        table.add_row(list(row))
    # Each line opens with the blank left frame column
    return [line[1:].rstrip() for line in table.get_string().splitlines()]


def render_text(root: Package, packages: Sequence[Package]) -> str:
    lines = [
        f"Name: {root.pretty_name}",
        f"Version: {format_version(root)}",
        f"Licenses: {format_licenses(root.license)}",
        "Dependencies:",
        "",
    ]
    rows = [
        (pkg.pretty_name, format_version(pkg), format_licenses(pkg.license))
        for pkg in packages
    ]
    lines.extend(render_table(TABLE_HEADERS, rows))
    return "\n".join(lines) + "\n"


def build_json_report(root: Package, packages: Sequence[Package]) -> Dict:
    """Build the JSON report document; licenses stay raw lists."""
    dependencies = {}
    for pkg in packages:
        dependencies[pkg.pretty_name] = {
            "version": format_version(pkg),
            "license": list(pkg.license),
        }
    return {
        "name": root.pretty_name,
        "version": format_version(root),
        "license": list(root.license),
        "dependencies": dependencies,
    }


def render_json(root: Package, packages: Sequence[Package]) -> str:
    document = build_json_report(root, packages)
    return json.dumps(document, ensure_ascii=False, indent=4) + "\n"


def render(fmt: str, root: Package, bucket: Bucket, out: Optional[TextIO] = None) -> None:
    """Write the license report for ``root`` and ``bucket`` in format ``fmt``.

    The whole report is built before anything is written.

    Raises:
        UnsupportedFormatError: If ``fmt`` is neither ``text`` nor ``json``.
    """
    packages = sort_bucket(bucket)
    if fmt == OutputFormats.TEXT.value:
        output = render_text(root, packages)
    elif fmt == OutputFormats.JSON.value:
        output = render_json(root, packages)
    else:
        raise UnsupportedFormatError(fmt)

    logger.debug("Rendered %s report with %d dependencies", fmt, len(packages))
    (out or sys.stdout).write(output)
