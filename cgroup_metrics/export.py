"""
Exporter for cgroup-metrics.

Writes gathered records to the output directory in the configured
format (CSV or Parquet), one table per measurement.

Output file naming convention:
  measurement ``cgroup:memory``      -> ``memory.{format}``
  measurement ``cgroup:memory.stat`` -> ``memory.stat.{format}``

Each table has one row per record: the tag columns (``path``) first,
then the field columns. Field values of one column may mix integers
and text (``12-781``); such columns are written as text.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable, Literal

import pandas as pd

from cgroup_metrics.accumulator import MEASUREMENT_PREFIX, MemoryAccumulator, Record
from cgroup_metrics.exceptions import ExportError

logger = logging.getLogger(__name__)

_SUPPORTED_FORMATS = {"csv", "parquet"}


def table_name(measurement: str) -> str:
    """File-safe table name for a measurement (namespace token dropped)."""
    if measurement.startswith(MEASUREMENT_PREFIX):
        measurement = measurement[len(MEASUREMENT_PREFIX):]
    return measurement.replace("/", "_").replace(":", "_")


def _stringify_mixed(df: pd.DataFrame) -> pd.DataFrame:
    """Cast columns mixing numbers and text to text (Parquet needs one type)."""
    for col in df.columns:
        kinds = {type(v) for v in df[col].dropna()}
        if str in kinds and len(kinds) > 1:
            df[col] = df[col].map(lambda v: v if pd.isna(v) else str(v))
    return df


def _write_dataframe(
    df: pd.DataFrame,
    path: Path,
    output_format: str,
) -> None:
    """Write a single DataFrame to disk in the specified format.

    Raises:
        ExportError: If writing fails for any reason.
    """
    try:
        if output_format == "csv":
            df.to_csv(path, index=False)
        else:  # parquet
            df.to_parquet(path, index=False, engine="pyarrow")
    except Exception as exc:
        raise ExportError(
            f"Failed to write {path.name} as {output_format}: {exc}"
        ) from exc


def export_records(
    records: Iterable[Record],
    output_dir: str | Path,
    output_format: Literal["csv", "parquet"] = "parquet",
) -> list[str]:
    """Write records to disk, one file per measurement.

    The output directory is created recursively if it does not exist.

    Args:
        records: Records to write, e.g. ``MemoryAccumulator.records``.
        output_dir: Directory to write files into (created if needed).
        output_format: "csv" or "parquet".

    Returns:
        List of file paths (as strings) that were written, in the order
        measurements were first seen.

    Raises:
        ExportError: If *output_format* is unsupported, or if any write fails.
    """
    if output_format not in _SUPPORTED_FORMATS:
        raise ExportError(
            f"Unsupported output format: '{output_format}'. "
            f"Supported formats: {sorted(_SUPPORTED_FORMATS)}"
        )

    buffer = MemoryAccumulator()
    for record in records:
        buffer.add_fields(record.measurement, record.fields, record.tags)

    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    written: list[str] = []
    for measurement in buffer.measurements():
        df = buffer.to_frame(measurement).drop(columns=["measurement"])
        df = _stringify_mixed(df)
        file_path = out / f"{table_name(measurement)}.{output_format}"
        _write_dataframe(df, file_path, output_format)
        written.append(str(file_path))
        logger.info(
            "Exported '%s' -> %s (%d rows, %d cols)",
            measurement,
            file_path.name,
            len(df),
            len(df.columns),
        )

    return written
