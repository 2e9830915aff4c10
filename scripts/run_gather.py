"""
Demo script: run one gather cycle from a YAML config and print the records.

Usage:
    uv run python scripts/run_gather.py config.yaml
    uv run python scripts/run_gather.py --sample      # print an example config

When the config has an ``output.output_dir``, records are also exported
there (one CSV/Parquet file per measurement).
"""

from __future__ import annotations

import logging
import sys

# ---------------------------------------------------------------------------
# Logging setup
# ---------------------------------------------------------------------------

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s  %(levelname)-8s  %(name)s  %(message)s",
    datefmt="%H:%M:%S",
)
log = logging.getLogger("run_gather")


# ---------------------------------------------------------------------------
# Main
# ---------------------------------------------------------------------------

def main() -> int:
    import cgroup_metrics
    from cgroup_metrics.exceptions import CgroupMetricsError

    args = sys.argv[1:]
    if not args:
        print(__doc__)
        return 2

    if args[0] == "--sample":
        print(cgroup_metrics.SAMPLE_CONFIG)
        return 0

    try:
        acc = cgroup_metrics.collect(args[0])
    except CgroupMetricsError as exc:
        log.error("Gather failed: %s", exc)
        return 1

    for record in acc.records:
        log.info("%s %s %s", record.measurement, record.tags, record.fields)

    log.info("Done: %d record(s)", len(acc))
    return 0


if __name__ == "__main__":
    sys.exit(main())
