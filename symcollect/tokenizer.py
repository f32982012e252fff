"""Splits preprocessed C source into logical units of tokens."""

import logging
import string
from collections.abc import Iterator

from symcollect.arena import TokenArena
from symcollect.errors import IdentifierTooLongError, UnitOverflowError
from symcollect.stream import BLOCK_PAIRS, EOF, CharStream
from symcollect.tokens import (
    MAX_IDENTIFIER,
    MAX_TOKENS,
    LogicalUnit,
    Terminator,
    Token,
    TokenKind,
)

WORD_CHARS = frozenset(string.ascii_letters + string.digits + "_$")
ATTRIBUTE = "__attribute__"


class Tokenizer:
    """Produces one logical unit per call from a character stream.

    A unit ends at a semicolon (which is included), at end of input, or right
    after a ``{...}`` block when a ``(...)`` block has already been seen in the
    unit, which is how function definitions end without a semicolon. Block
    contents are never tokenized; a single BLOCK token stands in for them.
    """

    def __init__(
        self,
        stream: CharStream,
        arena: TokenArena | None = None,
        max_tokens: int = MAX_TOKENS,
        max_identifier: int = MAX_IDENTIFIER,
        logger: logging.Logger | None = None,
    ):
        self.stream = stream
        self.arena = arena or TokenArena()
        self.max_tokens = max_tokens
        self.max_identifier = max_identifier
        self.log = logger or logging.getLogger(__name__)

    def _token(self, kind: TokenKind, text: str) -> Token:
        return Token(kind, self.arena.save(text))

    def _collect_word(self) -> str:
        chars: list[str] = []
        while self.stream.peek() in WORD_CHARS:
            if len(chars) >= self.max_identifier:
                raise IdentifierTooLongError(self.max_identifier)
            chars.append(self.stream.read())
        return "".join(chars)

    def next_unit(self) -> LogicalUnit:
        """Collect the next logical unit.

        An empty unit terminated by END_OF_INPUT means the input is exhausted.
        Raises a TokenizerError subclass on malformed input.
        """
        self.arena.retire()
        unit = LogicalUnit()
        tokens = unit.tokens
        has_paren = False

        while len(tokens) < self.max_tokens:
            ch = self.stream.read()

            if ch == ";":
                tokens.append(self._token(TokenKind.SEMICOLON, ";"))
                unit.terminator = Terminator.SEMICOLON
                return unit

            elif ch == "#":
                self.stream.discard_line()

            elif ch in " \t":
                self.stream.discard_whitespace()

            elif ch == "\n":
                continue

            elif ch in BLOCK_PAIRS:
                self.stream.discard_block(ch)

                if ch == "(" and tokens and tokens[-1].is_(TokenKind.WORD, ATTRIBUTE):
                    tokens.pop()
                    self.log.debug("filtered __attribute__...")
                    continue

                tokens.append(self._token(TokenKind.BLOCK, ch))
                if ch == "(":
                    has_paren = True
                elif ch == "{" and has_paren:
                    unit.terminator = Terminator.FUNCTION_BODY
                    return unit

            elif ch == EOF:
                return unit

            elif ch in WORD_CHARS:
                self.stream.pushback(ch)
                tokens.append(self._token(TokenKind.WORD, self._collect_word()))

            elif ch == "=":
                tokens.append(self._token(TokenKind.ASSIGN, "="))

            elif ch == "*":
                continue

            else:
                self.log.debug(f"discarding {ch!r}")

        raise UnitOverflowError(self.max_tokens)

    def units(self) -> Iterator[LogicalUnit]:
        """Yield logical units until the input is exhausted."""
        while True:
            unit = self.next_unit()
            if not unit.tokens:
                return
            yield unit
