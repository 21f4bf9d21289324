"""Dot-bracket tokens and sequences of them."""

from __future__ import annotations

from enum import Enum
from typing import Iterable, Union

from fuzzyfold.errors import InvalidTokenError


class DotBracket(Enum):
    """One position of a dot-bracket string."""

    UNPAIRED = "."
    OPEN = "("
    CLOSE = ")"
    BREAK = "+"

    @classmethod
    def from_char(cls, c: str) -> DotBracket:
        """Parse a single character; '&' is accepted as a strand break."""
        if c == "&":
            return cls.BREAK
        try:
            return cls(c)
        except ValueError:
            raise InvalidTokenError(str(c), "dot-bracket", 0) from None

    def to_char(self) -> str:
        return self.value


class DotBracketVec(tuple):
    """An immutable, hashable sequence of dot-bracket tokens."""

    def __new__(cls, items: Iterable[Union[DotBracket, str]] = ()) -> DotBracketVec:
        return super().__new__(
            cls,
            (
                item if isinstance(item, DotBracket) else DotBracket.from_char(item)
                for item in items
            ),
        )

    @classmethod
    def from_string(cls, s: str) -> DotBracketVec:
        """Parse a dot-bracket string, reporting the position of a bad character."""
        tokens = []
        for i, c in enumerate(s):
            try:
                tokens.append(DotBracket.from_char(c))
            except InvalidTokenError as err:
                raise InvalidTokenError(err.token, err.source, i) from None
        return cls(tokens)

    def __str__(self) -> str:
        return "".join(db.to_char() for db in self)

    def __repr__(self) -> str:
        return f"DotBracketVec({str(self)!r})"