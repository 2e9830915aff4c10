"""
Base parser ABC for cgroup-metrics.

All layout-specific parsers implement this interface. The contract is:
1. parse() takes the raw bytes of a control file, already known to match
   the parser's layout, and returns a ParseResult.
2. ParseResult holds the extracted fields (insertion order follows the
   file) and a tag mapping.

No current layout emits tags; the tag mapping exists so that a layout
carrying labels in its content can attach them without changing the
aggregator. The ``path`` tag is added later by the aggregator.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from cgroup_metrics.numbers import Value, number_or_string

# Shared token patterns (bytes, ASCII only).
KEY_PATTERN = rb"[A-Za-z_]+"
VALUE_PATTERN = rb"[0-9-]+"


@dataclass
class ParseResult:
    """Standardized output from any parser.

    Attributes:
        fields: Field name -> coerced value, in file order.
        tags: Tag name -> value. Empty for every built-in layout.
    """
    fields: dict[str, Value] = field(default_factory=dict)
    tags: dict[str, str] = field(default_factory=dict)


class BaseParser(ABC):
    """Abstract base class for control file parsers."""

    @abstractmethod
    def parse(self, data: bytes) -> ParseResult:
        """Extract fields from the raw content of a control file.

        Args:
            data: Whole file content. Callers only pass content that
                matched the layout this parser belongs to.

        Returns:
            ParseResult with the extracted fields.
        """


class PatternParser(BaseParser):
    """Parser driven by a repeated item pattern.

    ``item_pattern`` is applied with ``findall`` over the whole content;
    subclasses turn the list of matches into fields via ``build``.
    """

    item_pattern: bytes = b""

    def __init__(self) -> None:
        self._item_re = re.compile(self.item_pattern)

    def parse(self, data: bytes) -> ParseResult:
        result = ParseResult()
        self.build(self._item_re.findall(data), result)
        return result

    @abstractmethod
    def build(self, matches: list, result: ParseResult) -> None:
        """Fill *result* from the ``findall`` matches."""


def decode_value(token: bytes) -> Value:
    """Decode an ASCII value token and coerce it."""
    return number_or_string(token.decode("ascii"))
