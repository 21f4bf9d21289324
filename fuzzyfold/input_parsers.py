"""Readers for FASTA-like sequence/structure input."""

from __future__ import annotations

import os
import sys
from io import StringIO
from typing import Iterable, Optional, Tuple, Union

from fuzzyfold.dotbracket import DotBracketVec

FastaRecord = Tuple[Optional[str], str, DotBracketVec]
PathLike = Union[str, "os.PathLike[str]"]


class InputError(ValueError):
    """The input does not hold a usable sequence/structure record."""


def _parse(lines: Iterable[str], strict: bool) -> FastaRecord:
    header: Optional[str] = None
    sequence: Optional[str] = None
    structure: Optional[DotBracketVec] = None

    for raw in lines:
        line = raw.strip()
        if not line:
            if sequence is not None and structure is not None:
                break
            continue
        if line.startswith(">"):
            header = line
        elif sequence is None:
            sequence = line.split()[0]
        elif structure is None:
            structure = DotBracketVec.from_string(line.split()[0])
            break

    if sequence is None:
        raise InputError("Missing sequence line")

    if structure is None:
        if strict:
            raise InputError("Missing structure line")
        structure = DotBracketVec.from_string("." * len(sequence))

    if len(sequence) != len(structure):
        raise InputError(
            f"Sequence length ({len(sequence)}) and structure length "
            f"({len(structure)}) do not match"
        )
    return header, sequence, structure


def read_fasta_like(lines: Iterable[str]) -> FastaRecord:
    """Read a record; a missing structure defaults to the open chain."""
    return _parse(lines, strict=False)


def read_eval(lines: Iterable[str]) -> FastaRecord:
    """Read a record that must contain a structure line."""
    return _parse(lines, strict=True)


def read_fasta_like_string(s: str) -> FastaRecord:
    return read_fasta_like(StringIO(s))


def read_fasta_like_file(path: PathLike) -> FastaRecord:
    with open(path, encoding="utf-8") as fh:
        return read_fasta_like(fh)


def read_fasta_like_input(s: str) -> FastaRecord:
    """Read from standard input if ``s`` is "-", otherwise from the file ``s``."""
    if s == "-":
        return read_fasta_like(sys.stdin)
    return read_fasta_like_file(s)


def read_eval_string(s: str) -> FastaRecord:
    return read_eval(StringIO(s))


def read_eval_file(path: PathLike) -> FastaRecord:
    with open(path, encoding="utf-8") as fh:
        return read_eval(fh)


def read_eval_input(s: str) -> FastaRecord:
    """Read from standard input if ``s`` is "-", otherwise from the file ``s``."""
    if s == "-":
        return read_eval(sys.stdin)
    return read_eval_file(s)


def ruler(length: int) -> str:
    """A position ruler for ``0..=length``: tens as digits, fives as commas."""
    out = []
    skip = 0
    for i in range(length + 1):
        if i % 10 == 0:
            label = str(i // 10)
            skip = len(label) - 1
            out.append(label)
        elif skip > 0:
            skip -= 1
        elif i % 10 == 5:
            out.append(",")
        else:
            out.append(".")
    return "".join(out)