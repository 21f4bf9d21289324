"""Errors raised while parsing or converting secondary structures."""


class StructureError(ValueError):
    """Base class for malformed secondary structure input."""


class UnmatchedOpenError(StructureError):
    """An opening bracket was never closed."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Unmatched '(' at position {position}")


class UnmatchedCloseError(StructureError):
    """A closing bracket has no matching opening bracket."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Unmatched ')' at position {position}")


class UnmatchedMultiOpenError(StructureError):
    """An opening bracket in a multi-stranded structure was never closed."""

    def __init__(self, strand: int, domain: int) -> None:
        self.strand = strand
        self.domain = domain
        super().__init__(f"Unmatched '(' at strand {strand}, domain {domain}")


class UnmatchedMultiCloseError(StructureError):
    """A closing bracket in a multi-stranded structure has no partner."""

    def __init__(self, strand: int, domain: int) -> None:
        self.strand = strand
        self.domain = domain
        super().__init__(f"Unmatched ')' at strand {strand}, domain {domain}")


class InvalidTokenError(StructureError):
    """A token that is not allowed in the given kind of input."""

    def __init__(self, token: str, source: str, position: int) -> None:
        self.token = token
        self.source = source
        self.position = position
        super().__init__(f"Invalid {token} in {source} at position {position}")


class InvalidPairTableError(StructureError):
    """A pair table entry that points to its own position."""

    def __init__(self, position: int) -> None:
        self.position = position
        super().__init__(f"Invalid entry at pair table position {position}")