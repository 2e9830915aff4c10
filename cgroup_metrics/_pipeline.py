"""
Gather cycle orchestration for cgroup-metrics.

One cycle: normalize the config, then for every rule in order expand its
path patterns and aggregate each directory as it is discovered. The
first error of any kind ends the whole cycle; there is no per-rule
isolation, and records already pushed stay pushed.

This module is **not** part of the public API; use
``cgroup_metrics.gather``.
"""

from __future__ import annotations

import logging
from contextlib import closing

from cgroup_metrics.accumulator import Accumulator
from cgroup_metrics.aggregate import gather_directory
from cgroup_metrics.config import CGroupConfig, Rule, normalize
from cgroup_metrics.expand import expand_all

logger = logging.getLogger(__name__)


def gather_rule(rule: Rule, accumulator: Accumulator) -> int:
    """Aggregate every directory matched by *rule*.

    Directories are pulled one at a time from the expansion generator.
    The generator is closed on every exit path, including errors raised
    by the aggregator.

    Returns:
        Number of directories gathered.
    """
    count = 0
    with closing(expand_all(rule.prefix, rule.paths)) as directories:
        for directory in directories:
            gather_directory(directory, rule.fields, accumulator)
            count += 1
    return count


def run_gather(config: CGroupConfig, accumulator: Accumulator) -> None:
    """Run one gather cycle over all rules of *config*.

    Raises:
        ConfigValidationError: If a rule has no path or no field. Raised
            before any filesystem access.
        CgroupIOError: On stat/read failures or malformed patterns.
        UnknownFormatError: If a control file matches no known layout.
    """
    rules = normalize(config)

    total = 0
    for i, rule in enumerate(rules):
        n = gather_rule(rule, accumulator)
        logger.debug("Rule #%d (prefix=%r): %d director(ies)", i, rule.prefix, n)
        total += n

    logger.info("Gather complete: %d rule(s), %d director(ies)", len(rules), total)
