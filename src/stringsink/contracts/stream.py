# src/stringsink/contracts/stream.py
"""WritableStream protocol for write-only byte accumulators.

This protocol is the capability set shared by:
- sink.py (StringSink, the growable buffer implementation)
- reference.py (ReferenceStream, the io.BytesIO-backed oracle)

Conformance is structural: neither implementation inherits from the
other, and differential tests compare them through this surface only.
"""

from typing import Any, Protocol, Self, runtime_checkable


@runtime_checkable
class WritableStream(Protocol):
    """Protocol for write-only streams that materialize their content.

    Operations mirror the classic stream writer family: write, append,
    putc, print, puts and printf, plus string() and size() to read back
    what has been accumulated.
    """

    def write(self, data: Any) -> int:
        """Append the bytes of data.

        Returns:
            Number of bytes appended (never a character count)
        """
        ...

    def append(self, data: Any) -> Self:
        """Append the bytes of data and return the stream for chaining."""
        ...

    def putc(self, value: Any) -> Any:
        """Append a single byte (int) or a single character (str).

        Returns:
            value, unchanged
        """
        ...

    def print(self, *args: Any) -> None:
        """Append each argument's string representation with no separator."""
        ...

    def puts(self, *args: Any) -> None:
        """Append each argument as a newline-terminated line.

        Lists and tuples are flattened recursively. A line that already
        ends with a newline is not terminated twice.
        """
        ...

    def printf(self, fmt: Any, *args: Any) -> None:
        """Append fmt rendered against args with printf-style specifiers."""
        ...

    def string(self) -> str:
        """Return the accumulated content as text."""
        ...

    def size(self) -> int:
        """Return the number of bytes accumulated so far."""
        ...
