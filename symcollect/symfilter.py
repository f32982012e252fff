import re

from symcollect.errors import FilterError


class SymbolFilter:
    """Regular expression filter for candidate symbol names.

    Matching is a search, not a full match: ``^foo`` accepts ``foobar123``.
    """

    def __init__(self, pattern: str):
        self.pattern = pattern
        try:
            self._regex = re.compile(pattern)
        except re.error as e:
            raise FilterError(pattern, str(e)) from e

    @classmethod
    def from_pattern(cls, pattern: str | None) -> "SymbolFilter | None":
        if pattern is None:
            return None
        return cls(pattern)

    def matches(self, name: str) -> bool:
        return self._regex.search(name) is not None

    def __repr__(self) -> str:
        return f"SymbolFilter({self.pattern!r})"
