"""Single-stranded pair tables."""

from __future__ import annotations

from typing import Optional

from fuzzyfold.dotbracket import DotBracket, DotBracketVec
from fuzzyfold.errors import (
    InvalidPairTableError,
    InvalidTokenError,
    UnmatchedCloseError,
    UnmatchedOpenError,
)


class PairTable(list):
    """A list where entry ``i`` is the partner of position ``i``, or ``None``."""

    @classmethod
    def from_string(cls, s: str) -> PairTable:
        stack: list[int] = []
        table: list[Optional[int]] = [None] * len(s)
        for i, c in enumerate(s):
            if c == "(":
                stack.append(i)
            elif c == ")":
                if not stack:
                    raise UnmatchedCloseError(i)
                j = stack.pop()
                table[i] = j
                table[j] = i
            elif c != ".":
                raise InvalidTokenError(f"character '{c}'", "structure", i)
        if stack:
            raise UnmatchedOpenError(stack.pop())
        return cls(table)

    @classmethod
    def from_dotbracket(cls, db: DotBracketVec) -> PairTable:
        stack: list[int] = []
        table: list[Optional[int]] = [None] * len(db)
        for i, token in enumerate(db):
            if token is DotBracket.OPEN:
                stack.append(i)
            elif token is DotBracket.CLOSE:
                if not stack:
                    raise UnmatchedCloseError(i)
                j = stack.pop()
                table[i] = j
                table[j] = i
            elif token is DotBracket.BREAK:
                raise InvalidTokenError("strand break", "single-stranded structure", i)
        if stack:
            raise UnmatchedOpenError(stack.pop())
        return cls(table)

    def is_well_formed(self, i: int, j: int) -> bool:
        """True if every pair within ``i..j`` stays inside that interval."""
        if j > len(self):
            raise ValueError("Invalid interval: j must be <= length")
        return all(partner is None or i <= partner < j for partner in self[i:j])

    def to_dotbracket(self) -> DotBracketVec:
        tokens = []
        for i, partner in enumerate(self):
            if partner is None:
                tokens.append(DotBracket.UNPAIRED)
            elif partner > i:
                tokens.append(DotBracket.OPEN)
            elif partner < i:
                tokens.append(DotBracket.CLOSE)
            else:
                raise InvalidPairTableError(i)
        return DotBracketVec(tokens)