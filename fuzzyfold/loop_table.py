"""Loop tables: for every position, the loop (or loops) it belongs to."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from fuzzyfold.errors import InvalidTokenError, UnmatchedCloseError, UnmatchedOpenError
from fuzzyfold.pair_table import PairTable


@dataclass(frozen=True)
class Unpaired:
    """An unpaired position inside loop ``l``."""

    l: int  # noqa: E741

    def __str__(self) -> str:
        return str(self.l)


@dataclass(frozen=True)
class Paired:
    """A paired position separating the outer loop ``o`` from the inner loop ``i``."""

    o: int
    i: int

    def __str__(self) -> str:
        return f"{self.o}/{self.i}"


LoopInfo = Union[Unpaired, Paired]


class LoopTable(list):
    """A list holding one :class:`Unpaired` or :class:`Paired` entry per position."""

    @classmethod
    def from_pair_table(cls, pt: PairTable) -> LoopTable:
        table: list[LoopInfo] = []
        loop_index = 0
        last_loop = 0
        stack: list[tuple[int, int]] = []  # (closing position, loop id)

        for i, partner in enumerate(pt):
            if partner is None:
                table.append(Unpaired(loop_index))
            elif partner > i:
                outer = loop_index
                last_loop += 1
                loop_index = last_loop
                table.append(Paired(outer, loop_index))
                stack.append((partner, loop_index))
            elif partner < i:
                if not stack:
                    raise UnmatchedCloseError(i)
                _, inner = stack.pop()
                loop_index = stack[-1][1] if stack else 0
                table.append(Paired(loop_index, inner))
            else:
                raise InvalidTokenError(f"self-pairing '{i}'", "pair table", i)

        if stack:
            raise UnmatchedOpenError(stack[-1][0])
        return cls(table)

    def __str__(self) -> str:
        return "[" + ", ".join(str(info) for info in self) + "]"