"""Generate random sequences over a given alphabet."""

from __future__ import annotations

import argparse
import random
from typing import Iterator, Optional, Sequence


def _parse_alphabet(text: str) -> list[str]:
    symbols = []
    for part in text.split(","):
        if not part:
            raise ValueError(f"Empty symbol in alphabet {text!r}")
        symbols.append(part[0])
    return symbols


def random_sequences(
    alphabet: Sequence[str],
    length: int,
    num: int,
    rng: Optional[random.Random] = None,
) -> Iterator[str]:
    """Yield ``num`` sequences of ``length`` symbols drawn uniformly from ``alphabet``."""
    rng = rng if rng is not None else random.Random()
    symbols = list(alphabet)
    for _ in range(num):
        yield "".join(rng.choice(symbols) for _ in range(length))


def main(argv: Optional[Sequence[str]] = None) -> int:
    parser = argparse.ArgumentParser(description="Generate random sequences")
    parser.add_argument(
        "-a", "--alphabet", default="A,C,G,U",
        help="alphabet to choose from, comma-separated (e.g., A,C,G,U)",
    )
    parser.add_argument(
        "-l", "--length", type=int, default=50, help="length of each generated sequence"
    )
    parser.add_argument(
        "-n", "--num", type=int, default=1, help="number of sequences to generate"
    )
    args = parser.parse_args(argv)

    try:
        alphabet = _parse_alphabet(args.alphabet)
    except ValueError as err:
        parser.error(str(err))

    for seq in random_sequences(alphabet, args.length, args.num):
        print(seq)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())