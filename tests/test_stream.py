#!/usr/bin/env python3
"""
Tests for the character stream and its skipping primitives.
"""

import io

import pytest

from symcollect.errors import PushbackError, UnbalancedBlockError, UnterminatedQuoteError
from symcollect.stream import EOF, CharStream


def stream_of(text: str, buffer_size: int = 8192) -> CharStream:
    return CharStream(io.BytesIO(text.encode()), buffer_size)


def rest(stream: CharStream) -> str:
    chars = []
    while (ch := stream.read()) != EOF:
        chars.append(ch)
    return "".join(chars)


def test_read_until_eof():
    stream = stream_of("ab")
    assert stream.read() == "a"
    assert stream.read() == "b"
    assert stream.read() == EOF
    assert stream.read() == EOF


def test_reads_across_buffer_refills():
    """Small buffers must not lose characters between chunks."""
    stream = stream_of("int foo;", buffer_size=3)
    assert rest(stream) == "int foo;"


def test_text_source():
    stream = CharStream(io.StringIO("xy"))
    assert rest(stream) == "xy"


def test_peek_does_not_consume():
    stream = stream_of("ab")
    assert stream.peek() == "a"
    assert stream.peek() == "a"
    assert stream.read() == "a"
    assert stream.read() == "b"


def test_pushback_single_character():
    stream = stream_of("bc")
    stream.pushback("a")
    assert rest(stream) == "abc"


def test_second_pushback_fails():
    stream = stream_of("c")
    stream.pushback("b")
    with pytest.raises(PushbackError):
        stream.pushback("a")
    # the first pushback is still intact
    assert rest(stream) == "bc"


def test_pushback_after_peek_fails():
    stream = stream_of("x")
    stream.peek()
    with pytest.raises(PushbackError):
        stream.pushback("y")


def test_discard_whitespace_stops_at_first_non_space():
    stream = stream_of(" \t\n \nint")
    stream.discard_whitespace()
    assert rest(stream) == "int"


def test_discard_whitespace_at_eof():
    stream = stream_of("   ")
    stream.discard_whitespace()
    assert stream.read() == EOF


def test_discard_line():
    stream = stream_of('# 1 "foo.c"\nint x;')
    stream.read()
    stream.discard_line()
    assert rest(stream) == "int x;"


def test_discard_line_without_newline():
    stream = stream_of("# pragma")
    stream.discard_line()
    assert stream.read() == EOF


def test_discard_quoted_with_escapes():
    stream = stream_of(r'a\"b\\"tail')
    stream.discard_quoted('"')
    assert rest(stream) == "tail"


def test_discard_quoted_single_quote():
    stream = stream_of(r"\''x")
    stream.discard_quoted("'")
    assert rest(stream) == "x"


def test_discard_quoted_unterminated():
    stream = stream_of('never closed')
    with pytest.raises(UnterminatedQuoteError):
        stream.discard_quoted('"')


def test_discard_block_nested():
    stream = stream_of("a { b { c } d } } tail")
    stream.discard_block("{")
    assert rest(stream) == " tail"


def test_discard_block_ignores_other_bracket_kinds():
    stream = stream_of("x[0] = (1); } after")
    stream.discard_block("{")
    assert rest(stream) == " after"


def test_discard_block_quotes_are_opaque():
    stream = stream_of("\")\", ')' ) after")
    stream.discard_block("(")
    assert rest(stream) == " after"


def test_discard_block_unbalanced():
    stream = stream_of("int a; { int b;")
    with pytest.raises(UnbalancedBlockError) as exc_info:
        stream.discard_block("{")
    assert exc_info.value.depth == 2


def test_discard_block_unterminated_quote_inside():
    stream = stream_of('"abc)')
    with pytest.raises(UnterminatedQuoteError):
        stream.discard_block("(")


def test_discard_block_non_opener_is_noop():
    stream = stream_of("abc")
    stream.discard_block("<")
    assert rest(stream) == "abc"
