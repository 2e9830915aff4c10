"""
Parsers for the value-only layouts.

Three layouts carry bare values with no key:

    VAL\n                 single value     -> {"value": VAL}
    VAL0\nVAL1\n...       one per line     -> {"value_0": VAL0, ...}
    VAL0 VAL1 ... \n      space separated  -> {"value_0": VAL0, ...}

The space separated layout has a space after every token, including the
last one, as the kernel writes it (``cpuacct.usage_percpu``).
"""

from __future__ import annotations

from cgroup_metrics.parsers.base import (
    VALUE_PATTERN,
    ParseResult,
    PatternParser,
    decode_value,
)


class SingleValueParser(PatternParser):
    """Parser for a file holding exactly one value."""

    item_pattern = b"(" + VALUE_PATTERN + b")\n"

    def build(self, matches: list, result: ParseResult) -> None:
        result.fields["value"] = decode_value(matches[0])


class IndexedValuesParser(PatternParser):
    """Parser for several values, named ``value_<i>`` in file order.

    The separator is given per instance, so the same parser serves the
    newline separated and the space separated layouts.
    """

    def __init__(self, separator: bytes) -> None:
        self.item_pattern = b"(" + VALUE_PATTERN + b")" + separator
        super().__init__()

    def build(self, matches: list, result: ParseResult) -> None:
        for i, token in enumerate(matches):
            result.fields[f"value_{i}"] = decode_value(token)
