"""
Layout table for cgroup-metrics.

A layout is one of the textual encodings a control file may use. Each
layout pairs a whole-content pattern (does this file use me?) with the
parser that extracts its fields. The table below is built once at import
time and never modified; detection walks it in declaration order and
the first match wins.

Narrower layouts are declared before the general multi-line ones so a
file is never claimed by a broader form than the one it actually uses.

Layouts (in detection order):
- single_value:          ``VAL\\n``
- newline_values:        ``VAL\\n`` repeated two or more times
- space_values:          ``VAL `` repeated, then ``\\n``
- newline_key_values:    ``KEY VAL\\n`` repeated one or more times
"""

from __future__ import annotations

import re
from dataclasses import dataclass

from cgroup_metrics.parsers.base import KEY_PATTERN, VALUE_PATTERN, BaseParser, ParseResult
from cgroup_metrics.parsers.keyvalue import KeyValueParser
from cgroup_metrics.parsers.values import IndexedValuesParser, SingleValueParser


@dataclass(frozen=True)
class Layout:
    """A known control file layout.

    Attributes:
        name: Human readable layout name (used in log messages).
        pattern: Compiled pattern that must match the entire content.
        parser: Parser that extracts the fields once the layout matched.
    """
    name: str
    pattern: re.Pattern[bytes]
    parser: BaseParser

    def matches(self, data: bytes) -> bool:
        """Return True if *data* as a whole uses this layout."""
        return self.pattern.fullmatch(data) is not None

    def extract(self, data: bytes) -> ParseResult:
        """Extract fields and tags from content that matched this layout."""
        return self.parser.parse(data)


def _layout(name: str, pattern: bytes, parser: BaseParser) -> Layout:
    return Layout(name=name, pattern=re.compile(pattern), parser=parser)


FILE_LAYOUTS: tuple[Layout, ...] = (
    _layout(
        "single_value",
        VALUE_PATTERN + b"\n",
        SingleValueParser(),
    ),
    _layout(
        "newline_values",
        b"(?:" + VALUE_PATTERN + b"\n){2,}",
        IndexedValuesParser(b"\n"),
    ),
    _layout(
        "space_values",
        b"(?:" + VALUE_PATTERN + b" )+\n",
        IndexedValuesParser(b" "),
    ),
    _layout(
        "newline_key_values",
        b"(?:" + KEY_PATTERN + b" " + VALUE_PATTERN + b"\n)+",
        KeyValueParser(),
    ),
)
