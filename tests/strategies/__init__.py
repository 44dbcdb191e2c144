"""Shared Hypothesis strategies for sink tests."""

from tests.strategies.settings import (
    DETERMINISM_SETTINGS,
    QUICK_SETTINGS,
    STANDARD_SETTINGS,
    STATE_MACHINE_SETTINGS,
)
from tests.strategies.text import (
    CHARS,
    WIDE_CHARS,
    char_or_ascii_code,
    printable_values,
    puts_arguments,
    sink_chars,
    sink_lines,
    sink_text,
    wide_codes,
)

__all__ = [
    "CHARS",
    "DETERMINISM_SETTINGS",
    "QUICK_SETTINGS",
    "STANDARD_SETTINGS",
    "STATE_MACHINE_SETTINGS",
    "WIDE_CHARS",
    "char_or_ascii_code",
    "printable_values",
    "puts_arguments",
    "sink_chars",
    "sink_lines",
    "sink_text",
    "wide_codes",
]
