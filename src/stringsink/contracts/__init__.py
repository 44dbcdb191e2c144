# src/stringsink/contracts/__init__.py
"""Shared contracts: the error taxonomy and the WritableStream protocol.

Consolidated here so sink, reference, and bench modules can depend on the
contracts without importing each other.
"""

from stringsink.contracts.errors import (
    AllocationError,
    ArgumentError,
    ConformanceError,
    FormatError,
    StringSinkError,
)
from stringsink.contracts.stream import WritableStream

__all__ = [
    "AllocationError",
    "ArgumentError",
    "ConformanceError",
    "FormatError",
    "StringSinkError",
    "WritableStream",
]
