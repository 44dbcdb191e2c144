# src/stringsink/bench.py
"""Benchmark harness: StringSink vs ReferenceStream.

Each suite repeatedly invokes one kind of write operation against a fresh
stream and measures wall time. Every suite runs once per implementation
with the same seed, and the harness refuses to report timings for
implementations whose output differs from the baseline's.

Iteration counts are the full-size counts multiplied by scale, so tests and
quick local runs can use a small fraction of the work.
"""

from __future__ import annotations

import hashlib
import random
import time
from collections.abc import Callable, Iterable
from dataclasses import dataclass

from stringsink.contracts.errors import ConformanceError
from stringsink.contracts.stream import WritableStream
from stringsink.core.config import SinkSettings
from stringsink.core.logging import get_logger
from stringsink.reference import ReferenceStream
from stringsink.sink import StringSink

__all__ = [
    "IMPLEMENTATIONS",
    "SUITES",
    "BenchmarkResult",
    "run_benchmarks",
    "run_suite",
]

logger = get_logger(__name__)

SuiteBody = Callable[[WritableStream, float, random.Random], None]

SUITES: dict[str, SuiteBody] = {}

StreamFactory = Callable[[SinkSettings], WritableStream]

# Baseline first: every other implementation is checked against it
IMPLEMENTATIONS: dict[str, StreamFactory] = {
    "ReferenceStream": lambda settings: ReferenceStream(encoding=settings.encoding, errors=settings.errors),
    "StringSink": StringSink.from_settings,
}

_SMALL_LINE = "the quick brown fox jumps over the lazy dogs"


def _suite(name: str) -> Callable[[SuiteBody], SuiteBody]:
    def register(body: SuiteBody) -> SuiteBody:
        SUITES[name] = body
        return body

    return register


def _count(full: int, scale: float) -> int:
    return max(1, int(full * scale))


@_suite("putc")
def _putc(stream: WritableStream, scale: float, rng: random.Random) -> None:
    for _ in range(_count(1_000_000, scale)):
        stream.putc(65)


@_suite("puts_big")
def _puts_big(stream: WritableStream, scale: float, rng: random.Random) -> None:
    line = "a" * 50_000
    for _ in range(_count(10_000, scale)):
        stream.puts(line)


@_suite("puts_big_multi")
def _puts_big_multi(stream: WritableStream, scale: float, rng: random.Random) -> None:
    line = "a" * 50_000
    for _ in range(_count(1_000, scale)):
        stream.puts(line, line, line, line)


@_suite("write_big")
def _write_big(stream: WritableStream, scale: float, rng: random.Random) -> None:
    chunk = "a" * 50_000
    for _ in range(_count(10_000, scale)):
        stream.write(chunk)


@_suite("write_big_random_string")
def _write_big_random_string(stream: WritableStream, scale: float, rng: random.Random) -> None:
    chunks = [chr(c) * 10_000 for c in range(ord("a"), ord("z") + 1)]
    for _ in range(_count(10_000, scale)):
        stream.write(rng.choice(chunks))


@_suite("puts_small")
def _puts_small(stream: WritableStream, scale: float, rng: random.Random) -> None:
    for _ in range(_count(100_000, scale)):
        stream.puts(_SMALL_LINE)


@_suite("puts_huge")
def _puts_huge(stream: WritableStream, scale: float, rng: random.Random) -> None:
    stream.puts("a" * _count(100_000_000, scale))


@_suite("printf_num")
def _printf_num(stream: WritableStream, scale: float, rng: random.Random) -> None:
    for _ in range(_count(1_000_000, scale)):
        stream.printf("%d\n\n", rng.randrange(1_000_000_000_000))


@_suite("shift_small")
def _shift_small(stream: WritableStream, scale: float, rng: random.Random) -> None:
    for _ in range(_count(1_000_000, scale)):
        stream.append("aaa").append("bbb").append("ccc")


@dataclass(frozen=True)
class BenchmarkResult:
    """Timing of one suite against one implementation.

    Attributes:
        suite: Suite name
        implementation: Implementation name (key of IMPLEMENTATIONS)
        seconds: Wall time spent in the suite body
        bytes_written: size() of the stream after the suite
        sha256: Digest of the materialized content
    """

    suite: str
    implementation: str
    seconds: float
    bytes_written: int
    sha256: str

    @property
    def megabytes_per_second(self) -> float:
        if self.seconds <= 0:
            return float("inf")
        return self.bytes_written / self.seconds / 1_000_000


def run_suite(
    name: str,
    implementation: str,
    *,
    scale: float = 1.0,
    seed: int = 0,
    sink_settings: SinkSettings | None = None,
) -> BenchmarkResult:
    """Run one suite against one implementation.

    Raises:
        KeyError: If the suite or implementation is unknown
    """
    body = SUITES[name]
    settings = sink_settings or SinkSettings()
    stream = IMPLEMENTATIONS[implementation](settings)
    rng = random.Random(seed)

    start = time.perf_counter()
    body(stream, scale, rng)
    seconds = time.perf_counter() - start

    digest = hashlib.sha256(stream.string().encode(settings.encoding, settings.errors)).hexdigest()
    return BenchmarkResult(
        suite=name,
        implementation=implementation,
        seconds=seconds,
        bytes_written=stream.size(),
        sha256=digest,
    )


def run_benchmarks(
    names: Iterable[str] = (),
    *,
    scale: float = 1.0,
    seed: int = 0,
    sink_settings: SinkSettings | None = None,
) -> list[BenchmarkResult]:
    """Run suites against every implementation and check they agree.

    Args:
        names: Suites to run; empty runs all of them, in registration order
        scale: Fraction of the full iteration counts
        seed: Seed shared by every implementation within a suite
        sink_settings: Construction settings for every stream (defaults if None)

    Returns:
        One result per (suite, implementation), baseline first

    Raises:
        KeyError: If a suite name is unknown
        ConformanceError: If an implementation's content differs from the
            baseline's
    """
    selected = list(names) or list(SUITES)
    results: list[BenchmarkResult] = []

    for name in selected:
        baseline: BenchmarkResult | None = None
        for implementation in IMPLEMENTATIONS:
            result = run_suite(name, implementation, scale=scale, seed=seed, sink_settings=sink_settings)
            if baseline is None:
                baseline = result
            elif result.sha256 != baseline.sha256:
                logger.error(
                    "Benchmark output diverged",
                    suite=name,
                    implementation=implementation,
                    expected_sha256=baseline.sha256,
                    actual_sha256=result.sha256,
                )
                raise ConformanceError(name, baseline.sha256, result.sha256)

            logger.info(
                "Benchmark suite completed",
                suite=name,
                implementation=implementation,
                seconds=round(result.seconds, 6),
                bytes_written=result.bytes_written,
            )
            results.append(result)

    return results
