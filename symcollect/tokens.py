from dataclasses import dataclass, field
from enum import Enum

MAX_TOKENS = 64
# Longest accepted identifier, in characters.
MAX_IDENTIFIER = 510


class TokenKind(str, Enum):
    BLOCK = "block"  # a whole {...}, [...] or (...) group, text is the opener
    WORD = "word"
    DQUOTED = "dquoted"  # not produced by the tokenizer, top-level quotes are dropped
    SQUOTED = "squoted"
    ASSIGN = "assign"
    SEMICOLON = "semicolon"
    OTHER = "other"


class Terminator(str, Enum):
    """Why a logical unit ended."""

    SEMICOLON = "semicolon"
    FUNCTION_BODY = "function-body"
    END_OF_INPUT = "end-of-input"


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    text: str

    def is_(self, kind: TokenKind, text: str | None = None) -> bool:
        """Check the token kind, and the text when one is given."""
        return self.kind == kind and (text is None or self.text == text)

    def __str__(self) -> str:
        return f"{self.kind.value}: '{self.text}'"


@dataclass
class LogicalUnit:
    """Tokens of one candidate declaration or definition."""

    tokens: list[Token] = field(default_factory=list)
    terminator: Terminator = Terminator.END_OF_INPUT

    def __len__(self) -> int:
        return len(self.tokens)

    def __iter__(self):
        return iter(self.tokens)

    def __getitem__(self, index):
        return self.tokens[index]
