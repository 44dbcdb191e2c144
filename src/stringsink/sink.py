# src/stringsink/sink.py
"""StringSink: a write-only, growable in-memory byte accumulator.

StringSink satisfies the WritableStream protocol structurally. Its
content is defined byte-for-byte by the sequence of calls made on it, and
it is checked against ReferenceStream under randomized differential tests.

Materialization:
    string() and getvalue() return independent snapshots that are safe to
    keep indefinitely. view() yields a bounded read-only memoryview whose
    validity ends with its with block.
"""

from __future__ import annotations

import codecs
from collections.abc import Iterator
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Self

from stringsink.contracts.errors import ArgumentError
from stringsink.core.buffer import DEFAULT_MAX_CAPACITY, ByteBuffer
from stringsink.core.conversion import (
    first_character,
    format_printf,
    iter_lines,
    render,
)

if TYPE_CHECKING:
    from stringsink.core.config import SinkSettings

__all__ = ["DEFAULT_ENCODING", "DEFAULT_ERRORS", "StringSink"]

DEFAULT_ENCODING = "utf-8"

# Raw bytes written by putc(int) must survive string() and round-trip
DEFAULT_ERRORS = "surrogateescape"


class StringSink:
    """Write-only byte sink with amortized O(1) appends.

    Thread Safety:
        NOT thread-safe. External synchronization required if used from
        multiple threads.

    Example:
        sink = StringSink()
        sink << "hello" << ", "
        sink.printf("%s #%d", "world", 1)
        sink.puts(["", "done"])
        sink.string()  # "hello, world #1\\n\\ndone\\n"
    """

    __slots__ = ("_buffer", "_encoding", "_errors")

    def __init__(
        self,
        capacity: int = 0,
        *,
        max_capacity: int = DEFAULT_MAX_CAPACITY,
        encoding: str = DEFAULT_ENCODING,
        errors: str = DEFAULT_ERRORS,
    ) -> None:
        """Initialize an empty sink.

        Args:
            capacity: Initial capacity hint in bytes
            max_capacity: Size ceiling; growth beyond it raises AllocationError
            encoding: Codec for text arguments and string(). Must be ASCII
                compatible so that newlines are the single byte 0x0A.
            errors: Codec error handler used in both directions

        Raises:
            ValueError: For an invalid capacity, unknown codec, unknown error
                handler, or a codec that does not encode "\\n" as b"\\n"
        """
        encoding = codecs.lookup(encoding).name
        codecs.lookup_error(errors)
        if "\n".encode(encoding) != b"\n":
            raise ValueError(f"encoding {encoding!r} is not ASCII compatible")
        self._buffer = ByteBuffer(capacity, max_capacity=max_capacity)
        self._encoding = encoding
        self._errors = errors

    @classmethod
    def from_settings(cls, settings: SinkSettings) -> Self:
        """Create a sink configured from validated settings."""
        return cls(
            settings.initial_capacity,
            max_capacity=settings.max_capacity,
            encoding=settings.encoding,
            errors=settings.errors,
        )

    @property
    def encoding(self) -> str:
        return self._encoding

    @property
    def errors(self) -> str:
        return self._errors

    @property
    def capacity(self) -> int:
        """Bytes currently allocated (always >= size())."""
        return self._buffer.capacity

    # -------------------------------------------------------------------------
    # Write operations
    # -------------------------------------------------------------------------

    def write(self, data: Any) -> int:
        """Append data and return the number of bytes appended.

        Bytes-like data is appended verbatim, text is encoded, and any other
        object is appended as its string representation.

        Raises:
            ArgumentError: If data cannot be converted to bytes
            AllocationError: If the sink cannot grow to hold data
        """
        return self._buffer.append_bytes(render(data, self._encoding, self._errors))

    def append(self, data: Any) -> Self:
        """Append data like write(), returning the sink for chaining."""
        self._buffer.append_bytes(render(data, self._encoding, self._errors))
        return self

    def __lshift__(self, data: Any) -> Self:
        return self.append(data)

    def putc(self, value: Any) -> Any:
        """Append one byte or one character and return value unchanged.

        An int appends the single byte value % 256, so putc(321) appends
        b"A" and putc(-1) appends b"\\xff". A string appends the encoded
        bytes of its first character only; bytes append their first byte.

        Raises:
            ArgumentError: If value is empty, a bool, or not an int/str/bytes
        """
        if isinstance(value, bool):
            raise ArgumentError("putc() expects an int or a string, not bool")
        if isinstance(value, int):
            self._buffer.append_byte(value % 256)
        else:
            self._buffer.append_bytes(first_character(value, self._encoding, self._errors))
        return value

    def print(self, *args: Any) -> None:
        """Append each argument's string representation, with no separator.

        Every argument is rendered before any byte is appended, so a failure
        part-way through the list appends nothing.
        """
        if not args:
            return
        chunks = [render(arg, self._encoding, self._errors) for arg in args]
        self._buffer.append_chunks(chunks)

    def puts(self, *args: Any) -> None:
        """Append each argument on its own line.

        A line that already ends with a newline is not terminated again.
        Lists and tuples are flattened recursively, each element getting its
        own line. With no arguments a single newline is appended.
        """
        chunks = list(iter_lines(args, self._encoding, self._errors))
        self._buffer.append_chunks(chunks)

    def printf(self, fmt: Any, *args: Any) -> None:
        """Append fmt % args.

        Raises:
            FormatError: If the specifiers do not match the arguments
            ArgumentError: If fmt is not str/bytes or an argument fails
                to convert
        """
        self._buffer.append_bytes(format_printf(fmt, args, self._encoding, self._errors))

    # -------------------------------------------------------------------------
    # Materialization
    # -------------------------------------------------------------------------

    def string(self) -> str:
        """Return a snapshot of the content decoded with the sink's codec."""
        return self._buffer.decode(self._encoding, self._errors)

    def getvalue(self) -> bytes:
        """Return a snapshot of the raw content."""
        return self._buffer.snapshot()

    def size(self) -> int:
        """Return the number of bytes accumulated so far."""
        return self._buffer.length

    @contextmanager
    def view(self) -> Iterator[memoryview]:
        """Yield a read-only memoryview of the content, valid inside the block.

        Do not keep the view (or slices of it) past the with block. While it
        is open, writes that need the store to grow raise AllocationError.
        """
        with self._buffer.view() as window:
            yield window

    def shrink(self) -> Self:
        """Release spare capacity, returning the sink."""
        self._buffer.shrink()
        return self

    def __len__(self) -> int:
        return self._buffer.length

    def __bytes__(self) -> bytes:
        return self._buffer.snapshot()

    def __str__(self) -> str:
        return self.string()

    def __repr__(self) -> str:
        return f"<StringSink size={self._buffer.length} capacity={self._buffer.capacity} encoding={self._encoding!r}>"
