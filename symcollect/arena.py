"""Bounded storage for the lexemes of the logical unit being built."""

from symcollect.errors import ArenaOverflowError
from symcollect.tokens import MAX_IDENTIFIER, MAX_TOKENS


def capacity_for(max_tokens: int, max_identifier: int) -> int:
    """Smallest capacity that holds any unit the tokenizer limits allow."""
    return max_tokens * (max_identifier + 1) + 1


RINGBUF_SIZE = capacity_for(MAX_TOKENS, MAX_IDENTIFIER)


class TokenArena:
    """Accounts lexeme text against a fixed byte capacity.

    Each lexeme costs its length plus one terminator byte. The arena is retired
    at the start of every logical unit, so lexemes never outlive their unit here;
    callers always receive immutable ``str`` copies.
    """

    def __init__(self, capacity: int = RINGBUF_SIZE):
        self.capacity = capacity
        self._lexemes: list[str] = []
        self._used = 0

    @property
    def used(self) -> int:
        return self._used

    @property
    def lexemes(self) -> tuple[str, ...]:
        return tuple(self._lexemes)

    def save(self, text: str) -> str:
        """Store ``text`` for the current unit and return it."""
        needed = len(text) + 1
        # One byte of the capacity is never handed out.
        if self._used + needed > self.capacity - 1:
            raise ArenaOverflowError(self.capacity, needed)
        self._lexemes.append(text)
        self._used += needed
        return text

    def retire(self) -> int:
        """Drop every lexeme of the finished unit, returning how many there were."""
        count = len(self._lexemes)
        self._lexemes.clear()
        self._used = 0
        return count
