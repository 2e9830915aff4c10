"""
Parser for the key/value layout (``memory.stat`` style):

    KEY0 VAL0\n
    KEY1 VAL1\n
    ...

Each line becomes one field named by its key. The value goes through the
same integer-or-text coercion as every other layout, so a value token
that is not an integer is kept as text.
"""

from __future__ import annotations

from cgroup_metrics.parsers.base import (
    KEY_PATTERN,
    VALUE_PATTERN,
    ParseResult,
    PatternParser,
    decode_value,
)


class KeyValueParser(PatternParser):
    """Parser for newline separated ``key value`` pairs."""

    item_pattern = b"(" + KEY_PATTERN + b") (" + VALUE_PATTERN + b")\n"

    def build(self, matches: list, result: ParseResult) -> None:
        for key, token in matches:
            result.fields[key.decode("ascii")] = decode_value(token)
