# src/stringsink/contracts/errors.py
"""Error taxonomy for sink operations.

Every error is raised synchronously by the call that triggers it, and the
call that raises leaves the sink exactly as it found it. The standard
library base classes are mixed in so callers that already handle
MemoryError/ValueError/TypeError keep working.
"""


class StringSinkError(Exception):
    """Base class for all errors raised by stringsink."""

    pass


class AllocationError(StringSinkError, MemoryError):
    """Raised when capacity growth cannot satisfy a request.

    Either the request would exceed the sink's max_capacity, the
    interpreter could not allocate the memory, or the store could not be
    resized because a view into it is still open. Prior content is
    unchanged.

    Attributes:
        requested: Number of additional bytes the call asked for
        length: Sink length at the time of the failure
        capacity: Sink capacity at the time of the failure
    """

    def __init__(self, message: str, *, requested: int, length: int, capacity: int) -> None:
        self.requested = requested
        self.length = length
        self.capacity = capacity
        super().__init__(message)


class FormatError(StringSinkError, ValueError):
    """Raised when a printf format string does not match its arguments.

    Covers malformed specifiers, too many or too few arguments, and
    arguments of the wrong type for their specifier. No bytes from the
    failing call are appended.
    """

    pass


class ArgumentError(StringSinkError, TypeError):
    """Raised for an invalid argument shape.

    Examples: an empty string passed to putc(), a float passed to putc(),
    or a value whose string representation raises.
    """

    pass


class ConformanceError(StringSinkError):
    """Raised when two stream implementations produce different content.

    Used by the benchmark harness, which checks that every implementation
    it times wrote byte-identical output.

    Attributes:
        suite: Benchmark suite that diverged
        expected_digest: SHA-256 of the baseline implementation's content
        actual_digest: SHA-256 of the diverging implementation's content
    """

    def __init__(self, suite: str, expected_digest: str, actual_digest: str) -> None:
        self.suite = suite
        self.expected_digest = expected_digest
        self.actual_digest = actual_digest
        super().__init__(f"Suite {suite!r} diverged: expected sha256 {expected_digest}, got {actual_digest}")
