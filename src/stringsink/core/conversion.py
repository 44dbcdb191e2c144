# src/stringsink/core/conversion.py
"""Argument classification and stringification for sink operations.

Variadic arguments to print/puts/printf are heterogeneous. Rather than
relying on implicit dispatch at every call site, each value is classified
into an explicit ValueKind and rendered by the rule for that kind:

- BYTES: bytes, bytearray, memoryview - opaque, copied as-is
- TEXT: str - encoded with the sink's codec
- INTEGER / FLOAT / OBJECT: str(value), then encoded
- SEQUENCE: list or tuple - flattened by puts, str(value) everywhere else

Every failure to produce bytes surfaces as ArgumentError (or FormatError for
printf specifier mismatches) before anything reaches the buffer.
"""

from collections.abc import Iterator, Mapping, Sequence
from enum import StrEnum
from typing import Any

from stringsink.contracts.errors import ArgumentError, FormatError

__all__ = [
    "NEWLINE",
    "ValueKind",
    "classify",
    "first_character",
    "format_printf",
    "iter_lines",
    "render",
]

NEWLINE = b"\n"

# Rendered in place of a list that contains itself
_RECURSIVE_MARKER = b"[...]"


class ValueKind(StrEnum):
    """Tag assigned to every argument before it is rendered."""

    BYTES = "bytes"
    TEXT = "text"
    INTEGER = "integer"
    FLOAT = "float"
    SEQUENCE = "sequence"
    OBJECT = "object"


def classify(value: Any) -> ValueKind:
    """Return the ValueKind tag for value.

    bool is an int subclass and is tagged INTEGER; str(True) is "True".
    Only list and tuple count as ordered sequences - str, bytes and ranges
    are never flattened.
    """
    if isinstance(value, bytes | bytearray | memoryview):
        return ValueKind.BYTES
    if isinstance(value, str):
        return ValueKind.TEXT
    if isinstance(value, int):
        return ValueKind.INTEGER
    if isinstance(value, float):
        return ValueKind.FLOAT
    if isinstance(value, list | tuple):
        return ValueKind.SEQUENCE
    return ValueKind.OBJECT


def _encode(text: str, encoding: str, errors: str) -> bytes:
    try:
        return text.encode(encoding, errors)
    except UnicodeError as e:
        raise ArgumentError(f"Cannot encode text with {encoding!r}: {e}") from e


def _stringify(value: Any) -> str:
    try:
        return str(value)
    except Exception as e:
        raise ArgumentError(f"Cannot convert {type(value).__name__} to a string: {e}") from e


def render(value: Any, encoding: str, errors: str) -> bytes | bytearray:
    """Render value's default string representation as bytes."""
    kind = classify(value)
    if kind is ValueKind.BYTES:
        if isinstance(value, memoryview):
            return value.tobytes()
        return value
    if kind is ValueKind.TEXT:
        return _encode(value, encoding, errors)
    return _encode(_stringify(value), encoding, errors)


def first_character(value: str | bytes | bytearray | memoryview, encoding: str, errors: str) -> bytes:
    """Return the encoded bytes of the first character of value.

    For text this is one code point, which may encode to several bytes.
    For bytes-like values it is the first byte.

    Raises:
        ArgumentError: If value is empty or not text/bytes-like
    """
    kind = classify(value)
    if kind is ValueKind.TEXT:
        if not value:
            raise ArgumentError("putc() requires a non-empty string")
        return _encode(value[0], encoding, errors)
    if kind is ValueKind.BYTES:
        data = value.tobytes() if isinstance(value, memoryview) else value
        if not data:
            raise ArgumentError("putc() requires non-empty bytes")
        return bytes(data[:1])
    raise ArgumentError(f"putc() expects an int or a string, not {type(value).__name__}")


def iter_lines(values: Sequence[Any], encoding: str, errors: str) -> Iterator[bytes | bytearray]:
    """Yield the chunks puts() appends for values, newline terminators included.

    - No values: a single newline
    - Each leaf: its rendering, plus a newline unless it already ends with one
    - list/tuple: flattened recursively; an empty one yields a bare newline
    - A list nested inside itself renders as "[...]"
    """
    if not values:
        yield NEWLINE
        return
    yield from _lines(values, encoding, errors)


def _lines(values: Sequence[Any], encoding: str, errors: str) -> Iterator[bytes | bytearray]:
    # Explicit stack: nesting depth is bounded by memory, not the recursion limit
    stack: list[tuple[Iterator[Any], int | None]] = [(iter(values), None)]
    active: set[int] = set()
    while stack:
        items, marker = stack[-1]
        for value in items:
            if classify(value) is ValueKind.SEQUENCE:
                key = id(value)
                if key in active:
                    yield _RECURSIVE_MARKER
                    yield NEWLINE
                    continue
                if not value:
                    yield NEWLINE
                    continue
                active.add(key)
                stack.append((iter(value), key))
                break

            chunk = render(value, encoding, errors)
            if chunk:
                yield chunk
            if not chunk or chunk[-1] != NEWLINE[0]:
                yield NEWLINE
        else:
            stack.pop()
            if marker is not None:
                active.discard(marker)


def _unconvertible_argument(values: Any) -> ArgumentError | None:
    """Return the ArgumentError for the first argument whose str() fails."""
    candidates = values.values() if isinstance(values, Mapping) else values
    for value in candidates:
        if classify(value) in (ValueKind.OBJECT, ValueKind.SEQUENCE):
            try:
                _stringify(value)
            except ArgumentError as e:
                return e
    return None


def format_printf(fmt: Any, args: tuple[Any, ...], encoding: str, errors: str) -> bytes:
    """Render a printf-style format against args.

    A single Mapping argument enables named specifiers ("%(name)s").
    Bytes-like formats interpolate into bytes; text formats are encoded
    after interpolation.

    Raises:
        FormatError: On malformed specifiers or argument count/type mismatch
        ArgumentError: If fmt is not text/bytes-like, or an argument cannot
            be converted to a string (the same error print() raises for it)
    """
    kind = classify(fmt)
    if kind not in (ValueKind.TEXT, ValueKind.BYTES):
        raise ArgumentError(f"printf() format must be str or bytes, not {type(fmt).__name__}")

    values: Any = args[0] if len(args) == 1 and isinstance(args[0], Mapping) else args

    try:
        if kind is ValueKind.BYTES:
            return bytes(fmt) % values
        rendered = fmt % values
    except (TypeError, ValueError, KeyError, OverflowError) as e:
        # str() of an argument raises through % with its own exception type
        unconvertible = _unconvertible_argument(values) if kind is ValueKind.TEXT else None
        if unconvertible is not None:
            raise unconvertible from e
        raise FormatError(f"Invalid printf format {fmt!r} for {len(args)} argument(s): {e}") from e
    except Exception as e:
        raise ArgumentError(f"printf() argument could not be converted: {e}") from e

    return _encode(rendered, encoding, errors)
