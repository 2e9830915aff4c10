"""
Shared test fixtures and path constants for cgroup-metrics tests.

The static cgroup tree under tests/testdata mirrors a memory and a cpu
controller:

    testdata/memory/                  root cgroup, every layout present
    testdata/memory/group_1/          child cgroup
    testdata/memory/group_1/group_1_1 grandchild
    testdata/memory/group_1/group_1_2 grandchild
    testdata/memory/group_2/          child cgroup (no children)
    testdata/cpu/                     space separated per-cpu usage

If files are added or moved, update this file.
"""

from pathlib import Path

import pytest

from cgroup_metrics.accumulator import MemoryAccumulator

TESTDATA_DIR = Path(__file__).resolve().parent / "testdata"
MEMORY_DIR = TESTDATA_DIR / "memory"
CPU_DIR = TESTDATA_DIR / "cpu"


@pytest.fixture
def memory_dir() -> Path:
    return MEMORY_DIR


@pytest.fixture
def cpu_dir() -> Path:
    return CPU_DIR


@pytest.fixture
def acc() -> MemoryAccumulator:
    return MemoryAccumulator()


# ---------------------------------------------------------------------------
# Pytest markers
# ---------------------------------------------------------------------------
def pytest_configure(config: pytest.Config) -> None:
    config.addinivalue_line(
        "markers",
        "integration: mark test as integration test (runs against tests/testdata)",
    )
