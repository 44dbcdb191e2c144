# tests/conftest.py
"""Shared fixtures and Hypothesis profiles.

Profiles (select with HYPOTHESIS_PROFILE, "ci" when unset):
- ci: 100 examples per property, no deadline
- nightly: 1000 examples, for scheduled runs of tests/property/
- debug: 10 examples, verbose, for reproducing a failure

    HYPOTHESIS_PROFILE=nightly pytest tests/property/
"""

import logging
import os
from collections.abc import Iterator

import pytest
import structlog
from hypothesis import HealthCheck, Verbosity, settings

from stringsink import ReferenceStream, StringSink

# Large generated strings and real reallocations make timings noisy
_COMMON = {"deadline": None, "suppress_health_check": [HealthCheck.too_slow]}

settings.register_profile("ci", max_examples=100, **_COMMON)
settings.register_profile("nightly", max_examples=1000, **_COMMON)
settings.register_profile("debug", max_examples=10, verbosity=Verbosity.verbose, **_COMMON)
settings.load_profile(os.getenv("HYPOTHESIS_PROFILE", "ci"))


@pytest.fixture
def sink() -> StringSink:
    """Fresh StringSink with default settings."""
    return StringSink()


@pytest.fixture
def reference() -> ReferenceStream:
    """Fresh ReferenceStream with default settings."""
    return ReferenceStream()


@pytest.fixture
def _reset_structlog() -> Iterator[None]:
    """Undo configure_logging(): structlog defaults, root handlers and level."""
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    structlog.reset_defaults()
    root.handlers = handlers
    root.setLevel(level)
