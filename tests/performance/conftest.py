# tests/performance/conftest.py
"""Shared timing helpers for performance tests.

Performance tests are marked with @pytest.mark.performance and can be
skipped with: pytest -m "not performance"
"""

import time
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass


@dataclass
class BenchmarkTiming:
    """Wall and CPU time measured by benchmark_timer()."""

    wall_seconds: float = 0.0
    cpu_seconds: float = 0.0


@contextmanager
def benchmark_timer() -> Iterator[BenchmarkTiming]:
    """Measure the wall and CPU time of the enclosed block."""
    timing = BenchmarkTiming()
    wall_start = time.perf_counter()
    cpu_start = time.process_time()
    try:
        yield timing
    finally:
        timing.wall_seconds = time.perf_counter() - wall_start
        timing.cpu_seconds = time.process_time() - cpu_start
