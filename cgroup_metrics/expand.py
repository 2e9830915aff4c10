"""
Path expansion for cgroup-metrics rules.

Turns a rule prefix plus one declared path pattern into the concrete
cgroup directories it denotes. The pattern is glob syntax applied one
path segment at a time: ``*`` never crosses a ``/``, so ``*/*`` means
"grandchildren", never "everything below".

Expansion is lazy. ``expand_paths`` is a generator built on
``glob.iglob``; directories are yielded while the listing is still being
walked, and a consumer that stops early simply closes the generator.
Every error ends the generator immediately by raising, so a consumer
always sees either exhaustion or an exception.

Rules applied to every globbed entry:
- Kept only if ``os.stat`` says it is a directory (symlinks followed).
- A failing ``os.stat`` (e.g. a dangling symlink) aborts the expansion
  with CgroupIOError rather than being skipped.
"""

from __future__ import annotations

import glob
import logging
import os
import posixpath
import stat
from typing import Iterable, Iterator

from cgroup_metrics.exceptions import CgroupIOError

logger = logging.getLogger(__name__)


def join_path(*parts: str) -> str:
    """Join path segments and normalize the result.

    Unlike ``posixpath.join``, an absolute later segment does not discard
    the earlier ones: ``join_path("/cgroup", "/")`` is ``"/cgroup"``.
    Empty segments are ignored, ``.``/``..`` and repeated separators are
    collapsed. Returns ``""`` when every segment is empty.
    """
    joined = "/".join(p for p in parts if p)
    if not joined:
        return ""
    cleaned = posixpath.normpath(joined)
    # POSIX normpath keeps a leading "//"
    if cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def check_pattern(pattern: str) -> None:
    """Reject malformed glob syntax.

    ``glob`` silently treats a broken character class as literal text; a
    pattern with an unterminated or empty ``[`` class is reported instead.
    A backslash is an ordinary character, as it is for ``glob``: there is
    no escape syntax, a literal ``*`` is matched with ``[*]``.

    Raises:
        CgroupIOError: If the pattern is malformed.
    """
    i = 0
    n = len(pattern)
    while i < n:
        ch = pattern[i]
        if ch == "[":
            j = i + 1
            if j < n and pattern[j] in "!^":
                j += 1
            start = j
            while j < n and (pattern[j] != "]" or j == start):
                if pattern[j] == "/":
                    break
                j += 1
            if j >= n or pattern[j] != "]":
                raise CgroupIOError(f"{pattern}: syntax error in pattern")
            i = j + 1
            continue
        i += 1


def _is_dir(path: str) -> bool:
    try:
        st = os.stat(path)
    except OSError as exc:
        raise CgroupIOError(f"{path}: {exc.strerror or exc}") from exc
    return stat.S_ISDIR(st.st_mode)


def expand_paths(prefix: str, pattern: str) -> Iterator[str]:
    """Yield the existing directories matched by *prefix* + *pattern*.

    Args:
        prefix: Rule prefix (may be empty, then *pattern* must be absolute
            or relative to the working directory).
        pattern: Declared path pattern, e.g. ``"/"``, ``"child"``, ``"*/*"``.

    Yields:
        Directory paths in filesystem listing order.

    Raises:
        CgroupIOError: If the pattern is malformed or an entry cannot be
            stat'ed. Raised on the first problem; nothing further is
            yielded.
    """
    path = join_path(prefix, pattern)
    check_pattern(path)
    logger.debug("Expanding %s", path)

    for item in glob.iglob(path, include_hidden=True):
        if _is_dir(item):
            yield item


def expand_all(prefix: str, patterns: Iterable[str]) -> Iterator[str]:
    """Chain ``expand_paths`` over several patterns.

    Every directory of pattern k is yielded before any directory of
    pattern k+1. Duplicates across patterns are not removed.
    """
    for pattern in patterns:
        yield from expand_paths(prefix, pattern)
