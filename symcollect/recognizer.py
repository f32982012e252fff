"""Decides whether a logical unit declares an externally linked symbol.

There is no grammar here. A short, ordered table of rules looks at a fixed
window of tokens at the end of the unit (or around its first ``=``), and the
first rule that fits names the symbol. Complex declarators and statements that
declare several names are missed on purpose.
"""

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass

from symcollect.console import TRACE
from symcollect.tokens import Token, TokenKind

logger = logging.getLogger(__name__)

# Leading words that rule a unit out: type aliases and internal linkage.
REJECTED_PREFIXES = frozenset({"typedef", "static"})


@dataclass(frozen=True)
class UnitShape:
    """Facts about a unit that the rules share."""

    tokens: Sequence[Token]
    has_paren: bool
    has_curly: bool
    has_bracket: bool
    assign_at: int | None

    @classmethod
    def of(cls, tokens: Sequence[Token]) -> "UnitShape":
        assign_at = next(
            (i for i, token in enumerate(tokens) if token.kind == TokenKind.ASSIGN), None
        )
        return cls(
            tokens=tokens,
            has_paren=any(t.is_(TokenKind.BLOCK, "(") for t in tokens),
            has_curly=any(t.is_(TokenKind.BLOCK, "{") for t in tokens),
            has_bracket=any(t.is_(TokenKind.BLOCK, "[") for t in tokens),
            assign_at=assign_at,
        )

    def tail_is(self, *pattern: tuple[TokenKind, str | None]) -> bool:
        """Check that the unit ends with tokens matching ``pattern``."""
        if len(self.tokens) < len(pattern):
            return False
        tail = self.tokens[len(self.tokens) - len(pattern) :]
        return all(token.is_(kind, text) for token, (kind, text) in zip(tail, pattern))


@dataclass(frozen=True)
class Rule:
    name: str
    match: Callable[[UnitShape], str | None]


@dataclass(frozen=True)
class SymbolMatch:
    name: str
    rule: str


WORD = (TokenKind.WORD, None)
PAREN = (TokenKind.BLOCK, "(")
SEMICOLON = (TokenKind.SEMICOLON, None)


def _function_prototype(shape: UnitShape) -> str | None:
    # name(...);
    if len(shape.tokens) >= 3 and shape.tail_is(WORD, PAREN, SEMICOLON):
        return shape.tokens[-3].text
    return None


def _initialized_variable(shape: UnitShape) -> str | None:
    # name = ...;  or  name[...] = ...;
    if len(shape.tokens) <= 1 or shape.assign_at is None:
        return None
    tokens, i = shape.tokens, shape.assign_at
    if i > 0 and tokens[i - 1].is_(TokenKind.WORD):
        return tokens[i - 1].text
    if i > 1 and tokens[i - 1].is_(TokenKind.BLOCK, "[") and tokens[i - 2].is_(TokenKind.WORD):
        return tokens[i - 2].text
    return None


def _plain_variable(shape: UnitShape) -> str | None:
    # ... name;
    if len(shape.tokens) <= 1 or shape.has_paren or shape.has_curly:
        return None
    if shape.tail_is(WORD, SEMICOLON):
        return shape.tokens[-2].text
    return None


RULES: tuple[Rule, ...] = (
    Rule("function-prototype", _function_prototype),
    Rule("initialized-variable", _initialized_variable),
    Rule("plain-variable", _plain_variable),
)


def match_unit(
    tokens: Sequence[Token], log: logging.Logger | None = None
) -> SymbolMatch | None:
    """Return the symbol declared by ``tokens`` and the rule that found it."""
    log = log or logger
    if log.isEnabledFor(TRACE):
        for token in tokens:
            log.log(TRACE, str(token))
        log.log(TRACE, "--")

    if not tokens or not tokens[0].is_(TokenKind.WORD):
        return None
    if tokens[0].text in REJECTED_PREFIXES:
        return None

    shape = UnitShape.of(tokens)
    for rule in RULES:
        name = rule.match(shape)
        if name is not None:
            return SymbolMatch(name=name, rule=rule.name)
    return None


def recognize(tokens: Sequence[Token], log: logging.Logger | None = None) -> str | None:
    """Return the name of the symbol declared by ``tokens``, if any."""
    found = match_unit(tokens, log)
    return found.name if found else None
