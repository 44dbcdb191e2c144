# src/stringsink/core/buffer.py
"""Growable contiguous byte store backing StringSink.

Provides a bytearray pre-sized to its capacity with an explicit length
cursor, so appends that fit are a single slice copy and never resize.

Key design decisions:
- Geometric growth: capacity doubles (or jumps straight to the required
  size when doubling is not enough), giving amortized O(1) appends
- Hard ceiling: max_capacity bounds every growth step; the overflow check
  runs BEFORE any arithmetic that could exceed it
- All-or-nothing: capacity is secured before any byte is copied, and a
  failed resize leaves length, capacity and content untouched
"""

import sys
from collections.abc import Iterator, Sequence
from contextlib import contextmanager

from stringsink.contracts.errors import AllocationError

__all__ = ["DEFAULT_MAX_CAPACITY", "ByteBuffer"]

# Largest size a bytearray can address on this interpreter
DEFAULT_MAX_CAPACITY = sys.maxsize

BytesLike = bytes | bytearray | memoryview


def _nbytes(data: BytesLike) -> int:
    # len() of a memoryview counts items, not bytes
    if isinstance(data, memoryview):
        return data.nbytes
    return len(data)


class ByteBuffer:
    """Contiguous byte store with explicit length and capacity.

    Invariant: 0 <= length <= capacity <= max_capacity.

    Bytes in [length, capacity) are spare capacity and never observable
    through snapshot(), decode() or view().

    Thread Safety:
        NOT thread-safe. External synchronization required if used from
        multiple threads.

    Example:
        buffer = ByteBuffer(capacity=64)
        buffer.append_bytes(b"hello")
        buffer.append_chunks([b", ", b"world"])
        buffer.snapshot()  # b"hello, world"
    """

    __slots__ = ("_length", "_max_capacity", "_store")

    def __init__(self, capacity: int = 0, *, max_capacity: int = DEFAULT_MAX_CAPACITY) -> None:
        """Initialize an empty buffer.

        Args:
            capacity: Bytes to allocate up front. Defaults to 0, deferring
                allocation to the first append.
            max_capacity: Ceiling no growth may exceed.

        Raises:
            ValueError: If max_capacity < 1, capacity < 0, or
                capacity > max_capacity.
            AllocationError: If the initial capacity cannot be allocated.
        """
        if max_capacity < 1:
            raise ValueError(f"max_capacity must be >= 1, got {max_capacity}")
        if capacity < 0:
            raise ValueError(f"capacity must be >= 0, got {capacity}")
        if capacity > max_capacity:
            raise ValueError(f"capacity {capacity} exceeds max_capacity {max_capacity}")
        try:
            self._store = bytearray(capacity)
        except (MemoryError, OverflowError) as e:
            raise AllocationError(
                f"Could not allocate initial store of {capacity} bytes",
                requested=capacity,
                length=0,
                capacity=0,
            ) from e
        self._length = 0
        self._max_capacity = max_capacity

    @property
    def length(self) -> int:
        """Number of bytes holding meaningful data."""
        return self._length

    @property
    def capacity(self) -> int:
        """Number of bytes currently allocated."""
        return len(self._store)

    @property
    def max_capacity(self) -> int:
        """Ceiling that capacity growth may not exceed."""
        return self._max_capacity

    def __len__(self) -> int:
        return self._length

    # -------------------------------------------------------------------------
    # Growth
    # -------------------------------------------------------------------------

    def ensure_capacity(self, n: int) -> None:
        """Guarantee room for n more bytes without further reallocation.

        Growth policy: max(capacity * 2, length + n), or max_capacity once
        doubling would cross it.

        Raises:
            ValueError: If n is negative
            AllocationError: If length + n exceeds max_capacity, or the
                store could not be resized
        """
        if n < 0:
            raise ValueError(f"n must be >= 0, got {n}")

        length = self._length
        capacity = len(self._store)

        # Compare against the headroom instead of computing length + n first
        if n > self._max_capacity - length:
            raise AllocationError(
                "StringSink is too large",
                requested=n,
                length=length,
                capacity=capacity,
            )

        required = length + n
        if required <= capacity:
            return

        if capacity > self._max_capacity // 2:
            new_capacity = self._max_capacity
        else:
            new_capacity = max(capacity * 2, required)

        self._resize(new_capacity, requested=n)

    def _resize(self, new_capacity: int, *, requested: int) -> None:
        capacity = len(self._store)
        try:
            if new_capacity > capacity:
                self._store.extend(bytes(new_capacity - capacity))
            elif new_capacity < capacity:
                del self._store[new_capacity:]
        except (MemoryError, OverflowError) as e:
            raise AllocationError(
                f"Could not resize store from {capacity} to {new_capacity} bytes",
                requested=requested,
                length=self._length,
                capacity=capacity,
            ) from e
        except BufferError as e:
            # bytearray refuses to resize while a memoryview is exported
            raise AllocationError(
                "Could not resize store while a view is open",
                requested=requested,
                length=self._length,
                capacity=capacity,
            ) from e

    def shrink(self) -> None:
        """Release spare capacity so that capacity == length.

        Raises:
            AllocationError: If a view into the store is still open
        """
        self._resize(self._length, requested=0)

    # -------------------------------------------------------------------------
    # Appends
    # -------------------------------------------------------------------------

    def append_bytes(self, data: BytesLike) -> int:
        """Copy data onto the tail of the store.

        Returns:
            Number of bytes appended. Appending zero bytes is a no-op.
        """
        n = _nbytes(data)
        if n == 0:
            return 0
        self.ensure_capacity(n)
        start = self._length
        self._store[start : start + n] = data
        self._length = start + n
        return n

    def append_chunks(self, chunks: Sequence[BytesLike]) -> int:
        """Append several chunks after a single capacity reservation.

        Capacity for the total is secured before any chunk is copied, so a
        failure leaves the buffer unchanged.

        Returns:
            Total number of bytes appended.
        """
        total = sum(_nbytes(chunk) for chunk in chunks)
        if total == 0:
            return 0
        self.ensure_capacity(total)
        position = self._length
        store = self._store
        for chunk in chunks:
            n = _nbytes(chunk)
            store[position : position + n] = chunk
            position += n
        self._length = position
        return total

    def append_byte(self, value: int) -> None:
        """Append one raw byte.

        Raises:
            ValueError: If value is outside 0..255
        """
        if not 0 <= value <= 255:
            raise ValueError(f"byte must be in range(0, 256), got {value}")
        self.ensure_capacity(1)
        self._store[self._length] = value
        self._length += 1

    # -------------------------------------------------------------------------
    # Materialization
    # -------------------------------------------------------------------------

    def snapshot(self) -> bytes:
        """Return an independent copy of the meaningful bytes."""
        with memoryview(self._store) as whole, whole[: self._length] as window:
            return window.tobytes()

    def decode(self, encoding: str, errors: str) -> str:
        """Decode the meaningful bytes into an independent str."""
        with memoryview(self._store) as whole, whole[: self._length] as window:
            return str(window, encoding, errors)

    @contextmanager
    def view(self) -> Iterator[memoryview]:
        """Yield a read-only view of the meaningful bytes.

        The view is only valid inside the with block. While it is open the
        store cannot be resized: appends that fit in spare capacity still
        succeed, appends that need growth raise AllocationError.
        """
        whole = memoryview(self._store)
        window = whole[: self._length]
        readonly = window.toreadonly()
        try:
            yield readonly
        finally:
            readonly.release()
            window.release()
            whole.release()
