# tests/unit/test_sink.py
"""Unit tests for StringSink write operations and materialization.

Tests cover:
- Return values of write/append/putc/print/puts/printf
- Newline rules of puts and low-byte truncation of putc
- Multi-byte characters counted in bytes
- Materialization: string(), getvalue(), view(), size()
- Construction from settings and structural protocol conformance
"""

import hashlib
from typing import Any

import pytest

from stringsink import ReferenceStream, StringSink, WritableStream
from stringsink.core.config import SinkSettings

ROBOT = "🤖"  # 4 bytes in UTF-8


# =============================================================================
# write / append
# =============================================================================


class TestWrite:
    """write() appends bytes and reports a byte count."""

    def test_returns_byte_count(self, sink: StringSink) -> None:
        assert sink.write("hello") == 5
        assert sink.size() == 5

    def test_multibyte_counted_in_bytes(self, sink: StringSink) -> None:
        assert sink.write(f"a{ROBOT}b") == 6
        assert sink.size() == 6

    def test_four_byte_character_kept_intact(self, sink: StringSink) -> None:
        sink.write("x")
        sink.write(ROBOT)
        assert sink.size() == 5
        assert sink.getvalue() == b"x\xf0\x9f\xa4\x96"
        assert sink.string() == f"x{ROBOT}"

    def test_bytes_written_verbatim(self, sink: StringSink) -> None:
        assert sink.write(b"\x00\xff") == 2
        assert sink.getvalue() == b"\x00\xff"

    def test_empty_write(self, sink: StringSink) -> None:
        assert sink.write("") == 0
        assert sink.size() == 0

    def test_non_string_uses_representation(self, sink: StringSink) -> None:
        assert sink.write(12.5) == 4
        assert sink.string() == "12.5"

    def test_size_grows_by_return_value(self, sink: StringSink) -> None:
        before = sink.size()
        written = sink.write("ה" * 10)
        assert sink.size() - before == written == 20


class TestAppend:
    """append() and << return the sink for chaining."""

    def test_returns_self(self, sink: StringSink) -> None:
        assert sink.append("a") is sink

    def test_chaining(self, sink: StringSink) -> None:
        sink.append("aaa").append("bbb").append("ccc")
        assert sink.string() == "aaabbbccc"

    def test_shift_operator(self, sink: StringSink) -> None:
        result = sink << "aaa" << "bbb" << "ccc"
        assert result is sink
        assert sink.string() == "aaabbbccc"

    def test_million_small_appends(self, sink: StringSink) -> None:
        for _ in range(1_000_000):
            sink.append("abc")
        assert sink.size() == 3_000_000
        assert hashlib.sha256(sink.getvalue()).digest() == hashlib.sha256(b"abc" * 1_000_000).digest()


# =============================================================================
# putc
# =============================================================================


class TestPutc:
    """putc() appends one byte or one character."""

    def test_integer_appends_one_byte(self, sink: StringSink) -> None:
        assert sink.putc(65) == 65
        assert sink.getvalue() == b"A"

    def test_integer_truncated_to_low_byte(self, sink: StringSink) -> None:
        assert sink.putc(321) == 321
        assert sink.getvalue() == b"A"
        assert sink.size() == 1

    def test_negative_integer_wraps(self, sink: StringSink) -> None:
        sink.putc(-1)
        assert sink.getvalue() == b"\xff"

    def test_high_byte_survives_string_round_trip(self, sink: StringSink) -> None:
        sink.putc(200)
        assert sink.string().encode("utf-8", "surrogateescape") == b"\xc8"

    def test_string_appends_first_character(self, sink: StringSink) -> None:
        assert sink.putc("xyz") == "xyz"
        assert sink.string() == "x"

    def test_multibyte_first_character(self, sink: StringSink) -> None:
        sink.putc(f"{ROBOT}!")
        assert sink.size() == 4
        assert sink.string() == ROBOT

    def test_bytes_first_byte(self, sink: StringSink) -> None:
        sink.putc(b"AB")
        assert sink.getvalue() == b"A"

    def test_returns_value_unchanged(self, sink: StringSink) -> None:
        value = "ה"
        assert sink.putc(value) is value


# =============================================================================
# print
# =============================================================================


class TestPrint:
    """print() concatenates representations without separators."""

    def test_returns_none(self, sink: StringSink) -> None:
        assert sink.print("a") is None

    def test_no_separator(self, sink: StringSink) -> None:
        sink.print("a", 1, 2.5, None, b"!")
        assert sink.string() == "a12.5None!"

    def test_no_arguments_appends_nothing(self, sink: StringSink) -> None:
        sink.print()
        assert sink.size() == 0

    def test_no_trailing_newline(self, sink: StringSink) -> None:
        sink.print("line")
        assert sink.string() == "line"

    def test_sequence_uses_representation(self, sink: StringSink) -> None:
        sink.print(["a", 1])
        assert sink.string() == "['a', 1]"


# =============================================================================
# puts
# =============================================================================


class TestPuts:
    """puts() newline-terminates each leaf exactly once."""

    def test_returns_none(self, sink: StringSink) -> None:
        assert sink.puts("a") is None

    def test_no_arguments_is_one_newline(self, sink: StringSink) -> None:
        sink.puts()
        assert sink.getvalue() == b"\n"

    def test_appends_newline(self, sink: StringSink) -> None:
        sink.puts("a")
        assert sink.string() == "a\n"

    def test_no_double_newline(self, sink: StringSink) -> None:
        sink.puts("a\n")
        assert sink.string() == "a\n"

    def test_multiple_arguments(self, sink: StringSink) -> None:
        sink.puts("a", "b\n", 3)
        assert sink.string() == "a\nb\n3\n"

    def test_list_equivalent_to_separate_calls(self) -> None:
        listed = StringSink()
        listed.puts(["a", "b"])
        separate = StringSink()
        separate.puts("a")
        separate.puts("b")
        assert listed.getvalue() == separate.getvalue() == b"a\nb\n"

    def test_recursive_flattening(self, sink: StringSink) -> None:
        sink.puts(["a", ["b", ("c", ["d\n"])]])
        assert sink.string() == "a\nb\nc\nd\n"

    def test_empty_list_is_blank_line(self, sink: StringSink) -> None:
        sink.puts([])
        assert sink.string() == "\n"

    def test_multibyte_line(self, sink: StringSink) -> None:
        sink.puts(ROBOT)
        assert sink.size() == 5


# =============================================================================
# printf
# =============================================================================


class TestPrintf:
    """printf() appends a rendered format string."""

    def test_integer(self, sink: StringSink) -> None:
        assert sink.printf("%d\n", 42) is None
        assert sink.string() == "42\n"

    def test_string_and_number(self, sink: StringSink) -> None:
        sink.printf("%s %d", f"n{ROBOT}", 123456789)
        assert sink.string() == f"n{ROBOT} 123456789"

    def test_hex_and_float(self, sink: StringSink) -> None:
        sink.printf("%04x|%.3f|%e", 255, 2.0 / 3.0, 12345.678)
        assert sink.string() == "00ff|0.667|1.234568e+04"

    def test_named(self, sink: StringSink) -> None:
        sink.printf("%(a)s-%(b)s", {"a": 1, "b": 2})
        assert sink.string() == "1-2"

    def test_plain_format(self, sink: StringSink) -> None:
        sink.printf("plain")
        assert sink.string() == "plain"


# =============================================================================
# Materialization
# =============================================================================


class TestMaterialization:
    """string(), getvalue(), view() and size()."""

    def test_new_sink_is_empty(self, sink: StringSink) -> None:
        assert sink.string() == ""
        assert sink.getvalue() == b""
        assert sink.size() == 0
        assert len(sink) == 0

    def test_string_is_idempotent(self, sink: StringSink) -> None:
        sink.puts("a", "b")
        assert sink.string() == sink.string()

    def test_string_is_snapshot(self, sink: StringSink) -> None:
        sink.write("before")
        snapshot = sink.string()
        sink.write(" after" * 100)
        assert snapshot == "before"

    def test_string_does_not_change_size_or_capacity(self, sink: StringSink) -> None:
        sink.write("abc")
        size, capacity = sink.size(), sink.capacity
        sink.string()
        assert (sink.size(), sink.capacity) == (size, capacity)

    def test_writes_continue_after_string(self, sink: StringSink) -> None:
        sink.write("a")
        sink.string()
        sink.write("b" * 1000)
        assert sink.size() == 1001

    def test_view(self, sink: StringSink) -> None:
        sink.write("viewed")
        with sink.view() as view:
            assert bytes(view) == b"viewed"

    def test_dunder_conversions(self, sink: StringSink) -> None:
        sink.write("ab")
        assert str(sink) == "ab"
        assert bytes(sink) == b"ab"
        assert "size=2" in repr(sink)

    def test_capacity_at_least_size(self, sink: StringSink) -> None:
        for n in range(1, 200):
            sink.write("x" * n)
            assert sink.capacity >= sink.size()

    def test_shrink(self) -> None:
        sink = StringSink(1024)
        sink.write("abc")
        assert sink.shrink() is sink
        assert sink.capacity == 3
        assert sink.string() == "abc"


# =============================================================================
# Construction
# =============================================================================


class TestConstruction:
    """Constructor parameters and settings."""

    def test_capacity_hint(self) -> None:
        assert StringSink(256).capacity == 256

    def test_encoding_is_explicit(self) -> None:
        sink = StringSink(encoding="latin-1", errors="strict")
        assert sink.write("é") == 1
        assert sink.getvalue() == b"\xe9"
        assert sink.string() == "é"

    def test_unknown_encoding(self) -> None:
        with pytest.raises(LookupError):
            StringSink(encoding="no-such-codec")

    def test_ascii_incompatible_encoding(self) -> None:
        with pytest.raises(ValueError, match="not ASCII compatible"):
            StringSink(encoding="utf-16")

    def test_unknown_error_handler(self) -> None:
        with pytest.raises(LookupError):
            StringSink(errors="shrug")

    def test_from_settings(self) -> None:
        settings = SinkSettings(initial_capacity=128, max_capacity=4096, encoding="ascii", errors="replace")
        sink = StringSink.from_settings(settings)
        assert sink.capacity == 128
        assert sink.encoding == "ascii"
        assert sink.errors == "replace"
        sink.write("é")
        assert sink.getvalue() == b"?"


class TestProtocolConformance:
    """Both streams satisfy WritableStream structurally."""

    @pytest.mark.parametrize("stream", [StringSink(), ReferenceStream()])
    def test_is_writable_stream(self, stream: Any) -> None:
        assert isinstance(stream, WritableStream)

    def test_no_inheritance_relationship(self) -> None:
        assert not issubclass(StringSink, ReferenceStream)
        assert not issubclass(ReferenceStream, StringSink)
