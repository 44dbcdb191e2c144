"""
stringsink: a fast, write-only in-memory byte sink.

Accumulates output built up incrementally (logs, templates, serializers)
in a single growable buffer and materializes it on demand, with the
write/print/puts/printf semantics of a classic writable stream.
"""

from stringsink.contracts import (
    AllocationError,
    ArgumentError,
    ConformanceError,
    FormatError,
    StringSinkError,
    WritableStream,
)
from stringsink.reference import ReferenceStream
from stringsink.sink import StringSink

__version__ = "0.1.0"

__all__ = [
    "AllocationError",
    "ArgumentError",
    "ConformanceError",
    "FormatError",
    "ReferenceStream",
    "StringSink",
    "StringSinkError",
    "WritableStream",
    "__version__",
]
