# src/stringsink/reference.py
"""ReferenceStream: the trusted oracle for StringSink.

A deliberately naive implementation of the WritableStream surface on top
of io.BytesIO. It shares no code with StringSink beyond the error types,
so differential tests comparing the two catch bugs in either. It is also
the baseline the benchmark harness times StringSink against.
"""

import io
from collections.abc import Mapping
from typing import Any, Self

from stringsink.contracts.errors import ArgumentError, FormatError

__all__ = ["ReferenceStream"]


class ReferenceStream:
    """io.BytesIO-backed stream with StringSink's write semantics."""

    def __init__(self, *, encoding: str = "utf-8", errors: str = "surrogateescape") -> None:
        self._io = io.BytesIO()
        self._encoding = encoding
        self._errors = errors

    def _to_bytes(self, value: Any) -> bytes:
        if isinstance(value, bytes | bytearray | memoryview):
            return bytes(value)
        text = value if isinstance(value, str) else str(value)
        return text.encode(self._encoding, self._errors)

    def write(self, data: Any) -> int:
        return self._io.write(self._to_bytes(data))

    def append(self, data: Any) -> Self:
        self.write(data)
        return self

    def __lshift__(self, data: Any) -> Self:
        return self.append(data)

    def putc(self, value: Any) -> Any:
        if isinstance(value, int) and not isinstance(value, bool):
            self._io.write(bytes([value & 0xFF]))
        elif isinstance(value, str) and value:
            self._io.write(value[0].encode(self._encoding, self._errors))
        elif isinstance(value, bytes | bytearray | memoryview) and len(bytes(value)) > 0:
            self._io.write(bytes(value)[:1])
        else:
            raise ArgumentError(f"putc() cannot write {value!r}")
        return value

    def print(self, *args: Any) -> None:
        self._io.write(b"".join(self._to_bytes(arg) for arg in args))

    def puts(self, *args: Any) -> None:
        if not args:
            self._io.write(b"\n")
            return
        out = bytearray()
        self._puts_into(out, args, [])
        self._io.write(out)

    def _puts_into(self, out: bytearray, args: Any, stack: list[Any]) -> None:
        for arg in args:
            if isinstance(arg, list | tuple):
                if any(arg is seen for seen in stack):
                    line = b"[...]"
                elif len(arg) == 0:
                    line = b""
                else:
                    stack.append(arg)
                    self._puts_into(out, arg, stack)
                    stack.pop()
                    continue
            else:
                line = self._to_bytes(arg)
            out += line
            if not line.endswith(b"\n"):
                out += b"\n"

    def printf(self, fmt: Any, *args: Any) -> None:
        if not isinstance(fmt, str | bytes | bytearray):
            raise ArgumentError(f"printf() format must be str or bytes, not {type(fmt).__name__}")
        values: Any = args[0] if len(args) == 1 and isinstance(args[0], Mapping) else args
        try:
            rendered = fmt % values
        except (TypeError, ValueError, KeyError, OverflowError) as e:
            raise FormatError(str(e)) from e
        self.write(rendered)

    def string(self) -> str:
        return self._io.getvalue().decode(self._encoding, self._errors)

    def getvalue(self) -> bytes:
        return self._io.getvalue()

    def size(self) -> int:
        # Write-only, so the position is always the end
        return self._io.tell()
