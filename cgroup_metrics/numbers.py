"""
Number coercion for control file values.

Control files hold integers, but the value token accepted by the layouts
is looser than an integer literal (``12-781`` passes detection). Values
are therefore coerced one at a time: an ``int`` when the text is a
base-10 integer that fits a signed 64-bit slot, otherwise the text
itself, untouched.
"""

from __future__ import annotations

import re

# Field value type: int when the token parses, else the original text.
Value = int | str

_INT64_MIN = -(2**63)
_INT64_MAX = 2**63 - 1

# Optional sign followed by ASCII digits only (int() alone would also
# accept "_" separators and surrounding whitespace).
_INTEGER = re.compile(r"[+-]?[0-9]+")


def number_or_string(text: str) -> Value:
    """Coerce a raw value token.

    Args:
        text: The token as it appears in the control file.

    Returns:
        The integer value, or *text* unchanged when it is not a base-10
        integer or does not fit in 64 bits.
    """
    if _INTEGER.fullmatch(text) is None:
        return text
    number = int(text)
    if number < _INT64_MIN or number > _INT64_MAX:
        return text
    return number
