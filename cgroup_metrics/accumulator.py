"""
Record sink for cgroup-metrics.

The gatherer only ever calls ``add_fields(measurement, fields, tags)``
on its sink, so anything with that method can receive records (a metrics
agent, a line-protocol writer, a queue). ``MemoryAccumulator`` is the
in-process implementation used by ``collect()`` and by the tests: it
keeps records in emission order and can hand them over as a pandas
DataFrame.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Mapping, Protocol

import pandas as pd

from cgroup_metrics.numbers import Value

logger = logging.getLogger(__name__)

# Namespace token prepended to every measurement name.
MEASUREMENT_PREFIX = "cgroup:"


class Accumulator(Protocol):
    """Anything that accepts named records."""

    def add_fields(
        self,
        measurement: str,
        fields: Mapping[str, Value],
        tags: Mapping[str, str],
    ) -> None: ...


@dataclass
class Record:
    """One emitted record."""
    measurement: str
    fields: dict[str, Value] = field(default_factory=dict)
    tags: dict[str, str] = field(default_factory=dict)


class MemoryAccumulator:
    """Accumulator that keeps every record in memory."""

    def __init__(self) -> None:
        self.records: list[Record] = []

    def add_fields(
        self,
        measurement: str,
        fields: Mapping[str, Value],
        tags: Mapping[str, str],
    ) -> None:
        self.records.append(Record(measurement, dict(fields), dict(tags)))
        logger.debug(
            "Record '%s' %s: %d field(s)", measurement, dict(tags), len(fields)
        )

    def __len__(self) -> int:
        return len(self.records)

    def find(
        self, measurement: str, tags: Mapping[str, str] | None = None
    ) -> list[Record]:
        """Return records with the given measurement whose tags include *tags*."""
        wanted = dict(tags or {})
        return [
            r for r in self.records
            if r.measurement == measurement
            and all(r.tags.get(k) == v for k, v in wanted.items())
        ]

    def measurements(self) -> list[str]:
        """Distinct measurement names, in first-seen order."""
        return list(dict.fromkeys(r.measurement for r in self.records))

    def to_frame(self, measurement: str | None = None) -> pd.DataFrame:
        """Flatten records into a DataFrame.

        One row per record. Columns are ``measurement``, then the tag
        columns, then the field columns, each in first-seen order.

        Tags and fields keep separate column names: a tag named
        ``measurement`` becomes ``tag_measurement``, and a field named like
        ``measurement``, a tag or a renamed column becomes
        ``field_<name>`` (repeated until the name is free).

        Integer-only field columns use the nullable ``Int64`` dtype, so a
        field missing from some records is ``<NA>`` and large values keep
        every digit. Other columns are ``object``.

        Args:
            measurement: Only include records with this measurement name.
        """
        records = [
            r for r in self.records
            if measurement is None or r.measurement == measurement
        ]
        tag_keys = list(dict.fromkeys(k for r in records for k in r.tags))
        field_keys = list(dict.fromkeys(k for r in records for k in r.fields))

        taken = {"measurement"}
        tag_cols = {k: _free_name(k, "tag_", taken) for k in tag_keys}
        clashing = taken.intersection(field_keys)
        taken.update(k for k in field_keys if k not in clashing)
        field_cols = {
            k: _free_name(k, "field_", taken) if k in clashing else k
            for k in field_keys
        }
        columns = ["measurement", *tag_cols.values(), *field_cols.values()]

        rows = [
            {
                "measurement": r.measurement,
                **{tag_cols[k]: v for k, v in r.tags.items()},
                **{field_cols[k]: v for k, v in r.fields.items()},
            }
            for r in records
        ]
        df = pd.DataFrame(rows, columns=columns, dtype=object)

        for col in field_cols.values():
            values = df[col].dropna()
            if len(values) and all(
                isinstance(v, int) and not isinstance(v, bool) for v in values
            ):
                df[col] = df[col].astype("Int64")
        return df


def _free_name(name: str, prefix: str, taken: set[str]) -> str:
    """Return *name*, prefixed until it is not in *taken*; reserve it."""
    while name in taken:
        name = prefix + name
    taken.add(name)
    return name
