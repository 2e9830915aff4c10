"""
Per-directory aggregation for cgroup-metrics.

For one concrete cgroup directory, reads each declared control file in
declaration order and routes its parsed fields:

- Empty file: skipped, contributes nothing.
- Exactly one field: stored in the directory record under the declared
  file name (``memory.limit_in_bytes``), not under the layout's own
  field name (``value``).
- More than one field: emitted straight away as its own record,
  ``cgroup:<file name>`` tagged ``path=<file path>``.

After the last file, the directory record is emitted as
``cgroup:<first field up to its first '.'>`` tagged ``path=<directory>``,
even when no single-valued file contributed to it.

Any read failure (CgroupIOError) or unknown layout (UnknownFormatError)
aborts the directory before its record is emitted.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Sequence

from cgroup_metrics.accumulator import MEASUREMENT_PREFIX, Accumulator
from cgroup_metrics.detect import parse_file
from cgroup_metrics.exceptions import CgroupIOError
from cgroup_metrics.expand import join_path
from cgroup_metrics.numbers import Value

logger = logging.getLogger(__name__)


def measurement_name(field_name: str) -> str:
    """Directory measurement name for a rule's first field.

    ``"memory.limit_in_bytes"`` -> ``"memory"``; a name without a dot is
    used whole.
    """
    return field_name.split(".", 1)[0]


def read_control_file(path: str) -> bytes:
    """Read the full content of a control file.

    Raises:
        CgroupIOError: If the file cannot be read.
    """
    try:
        return Path(path).read_bytes()
    except OSError as exc:
        raise CgroupIOError(f"{path}: {exc.strerror or exc}") from exc


def gather_directory(
    directory: str,
    fields: Sequence[str],
    accumulator: Accumulator,
) -> None:
    """Read *fields* from *directory* and push the resulting records.

    Args:
        directory: Concrete cgroup directory.
        fields: Declared control file names, non-empty, in rule order.
        accumulator: Record sink.

    Raises:
        CgroupIOError: If a control file cannot be read.
        UnknownFormatError: If a control file matches no known layout.
    """
    single_values: dict[str, Value] = {}

    for file_name in fields:
        file_path = join_path(directory, file_name)
        raw = read_control_file(file_path)
        if not raw:
            logger.debug("Skipping empty file %s", file_path)
            continue

        result = parse_file(raw, file_path)

        if len(result.fields) == 1:
            single_values[file_name] = next(iter(result.fields.values()))
        else:
            tags = dict(result.tags)
            tags["path"] = file_path
            accumulator.add_fields(MEASUREMENT_PREFIX + file_name, result.fields, tags)

    accumulator.add_fields(
        MEASUREMENT_PREFIX + measurement_name(fields[0]),
        single_values,
        {"path": directory},
    )
    logger.debug(
        "Gathered %s: %d single value(s)", directory, len(single_values)
    )
