"""
Parsers sub-package for cgroup-metrics.

Contains layout-specific parsers that turn the raw bytes of a control
file into typed fields.

Design: Strategy Pattern
- base.py defines the BaseParser ABC and the shared token patterns.
- values.py implements the value-only layouts (single, newline and
  space separated).
- keyvalue.py implements the ``key value`` per line layout.

The layout registry (layout_registry.py) pairs each parser with the
whole-content pattern that selects it.
"""
