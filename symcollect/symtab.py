from collections.abc import Iterator


class SymbolTable:
    """Ordered, duplicate-free collection of symbol names."""

    def __init__(self, names: list[str] | None = None):
        # dict keys keep insertion order
        self._names: dict[str, None] = {}
        for name in names or []:
            self.add(name)

    def add(self, name: str) -> bool:
        """Add ``name`` unless already present. Returns True if it was added."""
        if name in self._names:
            return False
        self._names[str(name)] = None
        return True

    def reset(self) -> None:
        self._names.clear()

    @property
    def names(self) -> list[str]:
        return list(self._names)

    def __contains__(self, name: object) -> bool:
        return name in self._names

    def __iter__(self) -> Iterator[str]:
        return iter(self._names)

    def __len__(self) -> int:
        return len(self._names)

    def __repr__(self) -> str:
        return f"SymbolTable({self.names!r})"
