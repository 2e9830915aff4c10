"""
cgroup-metrics: read per-cgroup statistics from control files.

Public API surface:

- ``gather(config, accumulator)`` -- one gather cycle. Expands every
  rule's path patterns, reads the declared control files from each
  matched directory, and pushes records into *accumulator*.

- ``collect(config_path)`` -- **recommended entry point**. Loads a YAML
  config, gathers into a ``MemoryAccumulator``, exports the records when
  the config names an output directory, and returns the accumulator.

- ``SAMPLE_CONFIG`` / ``description()`` -- annotated example config and
  a one-line description, for whatever registers this collector.
"""

from __future__ import annotations

import logging
from pathlib import Path

from cgroup_metrics._pipeline import run_gather
from cgroup_metrics.accumulator import Accumulator, MemoryAccumulator, Record
from cgroup_metrics.config import SAMPLE_CONFIG, CGroupConfig, description, load_config
from cgroup_metrics.export import export_records

__all__ = [
    "gather",
    "collect",
    "description",
    "SAMPLE_CONFIG",
    "CGroupConfig",
    "MemoryAccumulator",
    "Record",
]

logger = logging.getLogger(__name__)


def gather(config: CGroupConfig, accumulator: Accumulator) -> None:
    """Run one gather cycle.

    Records are pushed as soon as they are built: per-file records for
    multi-valued control files, then one record per directory. If the
    cycle fails, everything pushed before the failure stays pushed.

    Args:
        config: Declared rules (normalized internally, never modified).
        accumulator: Record sink with an ``add_fields`` method.

    Raises:
        ConfigValidationError: If a rule has no path or no field.
        CgroupIOError: On stat/read failures or malformed patterns.
        UnknownFormatError: If a control file matches no known layout.
    """
    run_gather(config, accumulator)


def collect(config_path: str | Path) -> MemoryAccumulator:
    """Load a config file, gather once, and export if configured.

    Orchestration:
      1. ``load_config()`` -> ``CGroupConfig``
      2. ``gather()`` into a fresh ``MemoryAccumulator``
      3. ``export_records()`` when ``output.output_dir`` is set

    Args:
        config_path: Path to the YAML config.

    Returns:
        The accumulator holding every record of the cycle.

    Raises:
        FileNotFoundError: If *config_path* does not exist.
        pydantic.ValidationError: If the config fails schema validation.
        ConfigValidationError, CgroupIOError, UnknownFormatError: As for
            ``gather()``.
        ExportError: If the export fails.
    """
    logger.info("collect() -- config_path=%s", config_path)
    config = load_config(config_path)

    accumulator = MemoryAccumulator()
    gather(config, accumulator)
    logger.info("Gathered %d record(s)", len(accumulator))

    if config.output.output_dir:
        export_records(
            accumulator.records,
            config.output.output_dir,
            config.output.output_format,
        )

    return accumulator
