"""
Format detection for control files.

Walks the layout table (layout_registry.FILE_LAYOUTS) in declaration
order and returns the first layout whose pattern matches the entire file
content. Partial matches never count: a file either is a layout or it
is not.

Design: Strategy Pattern
- detect_format() returns the matched Layout; the Layout carries its
  parser, so callers call ``layout.extract(data)``.
- parse_file() is the one-shot convenience used by the aggregator.
- New layouts are added to the table; no change is needed here.
"""

from __future__ import annotations

import logging
from typing import Sequence

from cgroup_metrics.exceptions import UnknownFormatError
from cgroup_metrics.layout_registry import FILE_LAYOUTS, Layout
from cgroup_metrics.parsers.base import ParseResult

logger = logging.getLogger(__name__)


def detect_format(
    data: bytes,
    path: str = "",
    layouts: Sequence[Layout] = FILE_LAYOUTS,
) -> Layout:
    """Detect the layout of a control file.

    Args:
        data: Whole file content.
        path: Path the content was read from (for error messages only).
        layouts: Layout table to try, in order. Defaults to the built-in
            table.

    Returns:
        The first layout whose pattern matches all of *data*.

    Raises:
        UnknownFormatError: If no layout matches.
    """
    for layout in layouts:
        if layout.matches(data):
            logger.debug("Detected layout '%s' for %s", layout.name, path)
            return layout

    raise UnknownFormatError(f"{path}: unknown file format")


def parse_file(data: bytes, path: str = "") -> ParseResult:
    """Detect the layout of *data* and extract its fields and tags."""
    layout = detect_format(data, path)
    return layout.extract(data)
