"""Pair tables for structures spanning several strands."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Iterator, Optional, Tuple

from fuzzyfold.dotbracket import DotBracket, DotBracketVec
from fuzzyfold.errors import (
    InvalidPairTableError,
    InvalidTokenError,
    StructureError,
    UnmatchedMultiCloseError,
    UnmatchedMultiOpenError,
)

Location = Tuple[int, int]


def _build(tokens: Iterable[Tuple[DotBracket, bool]]) -> list:
    """Build strands from (token, start_new_strand_on_break) pairs."""
    strands: list[list[Optional[Location]]] = [[]]
    stack: list[Location] = []
    strand = domain = 0
    for token, new_strand in tokens:
        if token is DotBracket.BREAK:
            if strand + domain == 0:
                raise StructureError("Strand break before any domain")
            if new_strand:
                strands.append([])
            strand += 1
            domain = 0
        elif token is DotBracket.OPEN:
            stack.append((strand, domain))
            strands[strand].append(None)
            domain += 1
        elif token is DotBracket.CLOSE:
            if not stack:
                raise UnmatchedMultiCloseError(strand, domain)
            si, di = stack.pop()
            strands[si][di] = (strand, domain)
            strands[strand].append((si, di))
            domain += 1
        else:
            strands[strand].append(None)
            domain += 1
    if stack:
        raise UnmatchedMultiOpenError(*stack.pop())
    return strands


@dataclass
class MultiPairTable:
    """Per strand, the (strand, domain) partner of every domain, or ``None``."""

    strands: list

    @classmethod
    def from_string(cls, s: str) -> MultiPairTable:
        """Parse a structure; a single trailing break adds no empty strand."""

        def tokens() -> Iterator[Tuple[DotBracket, bool]]:
            last = len(s) - 1
            for i, ch in enumerate(s):
                if ch in "+&":
                    yield DotBracket.BREAK, i < last
                elif ch in "().":
                    yield DotBracket(ch), True
                else:
                    raise InvalidTokenError(f"character '{ch}'", "complex", i)

        return cls(_build(tokens()))

    @classmethod
    def from_dotbracket(cls, db: DotBracketVec) -> MultiPairTable:
        return cls(_build((token, True) for token in db))

    def __len__(self) -> int:
        return sum(len(strand) for strand in self.strands)

    def get_pair(self, loc: Location) -> Optional[Location]:
        strand, domain = loc
        return self.strands[strand][domain]

    def to_dotbracket(self) -> DotBracketVec:
        """Convert to dot-bracket; every strand is followed by a break."""
        tokens = []
        for si, strand in enumerate(self.strands):
            for di, pair in enumerate(strand):
                if pair is None:
                    tokens.append(DotBracket.UNPAIRED)
                elif pair > (si, di):
                    tokens.append(DotBracket.OPEN)
                elif pair < (si, di):
                    tokens.append(DotBracket.CLOSE)
                else:
                    raise InvalidPairTableError(si)
            tokens.append(DotBracket.BREAK)
        return DotBracketVec(tokens)