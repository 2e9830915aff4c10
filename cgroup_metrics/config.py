"""
Configuration models and YAML I/O for cgroup-metrics.

This module defines the Pydantic models that map 1:1 to the YAML config
file, plus helpers for loading, saving and normalizing it.

Key models:
- CGroupConfig: Top-level config (global prefix + rules + output).
- RuleConfig: One declared rule: optional prefix, path patterns, fields.
- OutputConfig: Where and how ``collect()`` exports gathered records.
- Rule: A normalized, read-only rule, as used by the gatherer.

Key functions:
- load_config(path) -> CGroupConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
- normalize(config) -> list[Rule]: Trim, default and check every rule.

Declared lists may be empty or hold blank entries on load; that is only
an error once the config is normalized for a gather cycle, so a config
can be loaded, edited and saved back while incomplete.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from cgroup_metrics.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

SAMPLE_CONFIG = """\
## To avoid repeating full paths, a prefix can be defined.
## This optional prefix is global for all rules.
# prefix: /cgroup/

## Without a global prefix, every path must be a full path to a cgroup:
# rules:
#   - paths:
#       - /cgroup/memory            # root cgroup
#       - /cgroup/memory/child1     # container cgroup
#       - /cgroup/memory/child2/*   # all children of child2, not child2 itself
#     fields: [memory.max_usage_in_bytes, memory.limit_in_bytes]

## With a prefix, paths are relative to it:
#   - prefix: /cgroup/cpu/          # optional, overrides the global prefix
#     paths:
#       - /                         # root cgroup
#       - child1                    # container cgroup
#       - "*"                       # all container cgroups
#       - child2/*                  # all children of child2, not child2 itself
#       - "*/*"                     # all children of each container cgroup
#     fields: [cpuacct.usage, cpu.cfs_period_us, cpu.cfs_quota_us]

## Optional export of gathered records (csv or parquet)
# output:
#   output_dir: outputs/
#   output_format: parquet
"""


def description() -> str:
    """One-line description of what this collector does."""
    return "Read specific statistics per cgroup"


class RuleConfig(BaseModel):
    """A declared rule, as written in the config file."""

    prefix: str = Field("", description="Rule prefix; overrides the global prefix")
    paths: list[str] = Field(
        default_factory=list,
        description="Directory patterns relative to the prefix ('*' = one segment)",
    )
    fields: list[str] = Field(
        default_factory=list,
        description="Control file names read from every matched directory",
    )


class OutputConfig(BaseModel):
    """Export settings used by ``collect()``."""

    output_dir: str | None = Field(
        None, description="Directory for exported tables; no export if unset"
    )
    output_format: Literal["csv", "parquet"] = Field(
        "parquet", description="Output format"
    )


class CGroupConfig(BaseModel):
    """Top-level configuration for cgroup-metrics."""

    prefix: str = Field("", description="Global prefix for every rule")
    rules: list[RuleConfig] = Field(default_factory=list)
    output: OutputConfig = Field(default_factory=OutputConfig)


@dataclass(frozen=True)
class Rule:
    """A normalized rule.

    Attributes:
        prefix: Effective prefix (rule prefix, else the global one).
        paths: Non-blank, trimmed path patterns (at least one).
        fields: Non-blank, trimmed control file names (at least one).
    """
    prefix: str
    paths: tuple[str, ...]
    fields: tuple[str, ...]


def _clean(items: list[str]) -> tuple[str, ...]:
    return tuple(s.strip() for s in items if s.strip())


def normalize(config: CGroupConfig) -> list[Rule]:
    """Build the normalized rule list for a gather cycle.

    Trims the global prefix, every rule prefix, path and field, drops
    blank paths and fields, and falls back to the global prefix where a
    rule has none. *config* itself is not modified.

    Raises:
        ConfigValidationError: If a rule is left without any path or
            without any field. Rules are numbered from 0.
    """
    global_prefix = config.prefix.strip()
    rules: list[Rule] = []

    for i, declared in enumerate(config.rules):
        paths = _clean(declared.paths)
        if not paths:
            raise ConfigValidationError(f"rule #{i} has not any path")

        fields = _clean(declared.fields)
        if not fields:
            raise ConfigValidationError(f"rule #{i} has not any field")

        prefix = declared.prefix.strip() or global_prefix
        rules.append(Rule(prefix=prefix, paths=paths, fields=fields))

    return rules


def load_config(path: str | Path) -> CGroupConfig:
    """Load and validate a YAML config file into a CGroupConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return CGroupConfig.model_validate(raw)


def save_config(config: CGroupConfig, path: str | Path) -> None:
    """Serialize a CGroupConfig to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# cgroup-metrics configuration\n\n")
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
