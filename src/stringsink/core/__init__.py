# src/stringsink/core/__init__.py
"""Core infrastructure: byte buffer, value conversion, configuration, logging."""

from stringsink.core.buffer import DEFAULT_MAX_CAPACITY, ByteBuffer
from stringsink.core.config import (
    BenchSettings,
    SinkSettings,
    StringSinkSettings,
    load_settings,
)
from stringsink.core.conversion import ValueKind, classify
from stringsink.core.logging import configure_logging, get_logger

__all__ = [
    "DEFAULT_MAX_CAPACITY",
    "BenchSettings",
    "ByteBuffer",
    "SinkSettings",
    "StringSinkSettings",
    "ValueKind",
    "classify",
    "configure_logging",
    "get_logger",
    "load_settings",
]
