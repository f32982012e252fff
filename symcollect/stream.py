"""Buffered character stream with single-character lookahead."""

from typing import IO

from symcollect.errors import PushbackError, UnbalancedBlockError, UnterminatedQuoteError

READBUF_SIZE = 8 * 1024

# End-of-stream sentinel. A NUL byte in the input reads the same way.
EOF = "\0"

WHITESPACE = " \t\n"
QUOTES = "\"'"
BLOCK_PAIRS = {"{": "}", "[": "]", "(": ")"}


class CharStream:
    """Reads characters from a binary (or text) file-like source.

    Bytes are decoded as latin-1 so every input byte is exactly one character.
    At most one character can be pending in front of the stream, either from
    ``peek()`` or from an explicit ``pushback()``.
    """

    def __init__(self, source: IO, buffer_size: int = READBUF_SIZE):
        self._source = source
        self._buffer_size = buffer_size
        self._buf = ""
        self._pos = 0
        self._pending: str | None = None

    def _next_char(self) -> str:
        if self._pos >= len(self._buf):
            chunk = self._source.read(self._buffer_size)
            if not chunk:
                return EOF
            if isinstance(chunk, bytes):
                chunk = chunk.decode("latin-1")
            self._buf = chunk
            self._pos = 0
        ch = self._buf[self._pos]
        self._pos += 1
        return ch

    def read(self) -> str:
        """Return the next character, or EOF at end of stream."""
        if self._pending is not None:
            ch, self._pending = self._pending, None
            return ch
        return self._next_char()

    def peek(self) -> str:
        """Return the next character without consuming it."""
        if self._pending is None:
            self._pending = self._next_char()
        return self._pending

    def pushback(self, ch: str) -> None:
        """Return a single character to the front of the stream."""
        if self._pending is not None:
            raise PushbackError(f"cannot push back {ch!r}: {self._pending!r} already pending")
        self._pending = ch

    def discard_whitespace(self) -> None:
        """Consume spaces, tabs and newlines."""
        while self.peek() in WHITESPACE:
            self.read()

    def discard_line(self) -> None:
        """Consume input through the next newline or end of stream."""
        while (ch := self.read()) != "\n" and ch != EOF:
            pass

    def discard_quoted(self, quote: str) -> None:
        """Consume input through the closing ``quote``.

        A backslash skips the following character verbatim.
        """
        while True:
            ch = self.read()
            if ch == quote:
                return
            if ch == EOF:
                raise UnterminatedQuoteError(quote)
            if ch == "\\":
                self.read()

    def discard_block(self, opener: str) -> None:
        """Consume a balanced block whose ``opener`` has already been read.

        Only brackets of the opener's own kind affect nesting. Quoted text
        inside the block is skipped as a unit.
        """
        closer = BLOCK_PAIRS.get(opener)
        if closer is None:
            return

        depth = 1
        while depth > 0:
            ch = self.read()
            if ch in QUOTES:
                self.discard_quoted(ch)
            elif ch == EOF:
                raise UnbalancedBlockError(opener, depth)
            elif ch == closer:
                depth -= 1
            elif ch == opener:
                depth += 1
